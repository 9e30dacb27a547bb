"""
WiFiManager - radio link interface for the ConnectionManager.

Wraps the CircuitPython ``wifi`` module behind the small interface the
connection state machine polls: begin_association(), currently_linked(),
local_address(), abort() and scan().

The ``wifi`` module is imported lazily on first use so the rest of the
firmware still runs (and tests still import this file) on boards without a
radio.
"""

from adafruit_ticks import ticks_ms, ticks_diff
from utilities.logger import WXLogger

SCAN_LIMIT = 31

# Seconds one connect attempt may block the tick loop
STEP_TIMEOUT = 0.1


class WiFiManager:
    """
    Non-blocking wrapper around ``wifi.radio``.

    CircuitPython's ``radio.connect()`` blocks until it succeeds or its
    timeout expires, so association is stepped: each attempt uses a short
    timeout and further attempts are spaced out by ``retry_ms`` while the
    ConnectionManager keeps polling currently_linked().

    Buttons are not sampled while an attempt blocks, so a tap that starts
    and ends inside one attempt is missed. STEP_TIMEOUT is kept shorter than
    a deliberate tap; a longer ``wifi_step_timeout`` trades that away for
    fewer retries.
    """

    def __init__(self, config=None):
        """
        Args:
            config (dict): Optional keys:
                - wifi_step_timeout: seconds allowed per connect attempt
                - wifi_retry_ms: minimum gap between attempts
                - hostname: DHCP hostname to announce
        """
        config = config or {}
        self.step_timeout = config.get("wifi_step_timeout", STEP_TIMEOUT)
        self.retry_ms = config.get("wifi_retry_ms", 1500)
        self.hostname = config.get("hostname", "")

        WXLogger.info("WIFI", f"[INIT] WiFiManager - step_timeout: {self.step_timeout}s, retry: {self.retry_ms}ms")

        self.ssid = ""
        self.password = ""
        self._pending = False
        self._last_attempt = None

        # Lazily populated
        self._wifi = None

    def _load(self):
        """Import the wifi module on first use. Returns False if unavailable."""
        if self._wifi is None:
            try:
                import wifi as _wifi
                self._wifi = _wifi
            except ImportError:
                WXLogger.error("WIFI", "WiFi module not available")
                return False
        return True

    @property
    def is_connected(self):
        if self._wifi is not None:
            return bool(self._wifi.radio.connected)
        return False

    def begin_association(self, ssid, password):
        """Start associating. Returns immediately; progress is checked via currently_linked()."""
        self.ssid = ssid
        self.password = password
        self._pending = False
        self._last_attempt = None

        if not self._load():
            return

        try:
            self._wifi.radio.enabled = True
            if self.hostname:
                self._wifi.radio.hostname = self.hostname
        except (OSError, RuntimeError) as e:
            WXLogger.error("WIFI", f"Radio enable failed: {e}")
            return

        self._pending = True
        self._step()

    def _step(self, now=None):
        """One bounded connect attempt."""
        if now is None:
            now = ticks_ms()
        self._last_attempt = now
        try:
            WXLogger.debug("WIFI", f"Connect attempt: {self.ssid}")
            self._wifi.radio.connect(self.ssid, self.password, timeout=self.step_timeout)
        except ConnectionError as e:
            # Expected while the AP is still answering; retried on a later poll
            WXLogger.debug("WIFI", f"Not associated yet: {e}")
        except (OSError, RuntimeError, ValueError) as e:
            WXLogger.warning("WIFI", f"Connect attempt error: {e}")

    def currently_linked(self, now=None):
        """Poll the link. Runs another short attempt when one is due."""
        if self._wifi is None:
            return False

        if self._wifi.radio.connected:
            if self._pending:
                WXLogger.info("WIFI", f"Connected! IP: {self._wifi.radio.ipv4_address}")
            self._pending = False
            return True

        if self._pending:
            if now is None:
                now = ticks_ms()
            if self._last_attempt is None or ticks_diff(now, self._last_attempt) >= self.retry_ms:
                self._step(now)
            return bool(self._wifi.radio.connected)

        return False

    def local_address(self):
        """Current IPv4 address as a string, empty when not connected."""
        if self.is_connected:
            return str(self._wifi.radio.ipv4_address)
        return ""

    def abort(self):
        """Stop any attempt and drop the link."""
        self._pending = False
        if self._wifi is None:
            return
        try:
            self._wifi.radio.enabled = False
            WXLogger.info("WIFI", "Radio disabled")
        except (OSError, RuntimeError) as e:
            WXLogger.error("WIFI", f"Error disabling radio: {e}")

    def scan(self, limit=SCAN_LIMIT):
        """
        Return up to `limit` distinct network names, strongest first.

        Hidden networks (empty names) are skipped. Radio errors give an
        empty list.
        """
        if not self._load():
            return []

        found = {}
        radio = self._wifi.radio
        try:
            radio.enabled = True
            for network in radio.start_scanning_networks():
                name = network.ssid
                if not name:
                    continue
                if name not in found or network.rssi > found[name]:
                    found[name] = network.rssi
        except (OSError, RuntimeError) as e:
            WXLogger.error("WIFI", f"Scan failed: {e}")
        finally:
            try:
                radio.stop_scanning_networks()
            except (OSError, RuntimeError) as e:
                WXLogger.debug("WIFI", f"stop_scanning_networks: {e}")

        names = sorted(found, key=lambda n: found[n], reverse=True)
        WXLogger.info("WIFI", f"Scan found {len(names)} networks")
        return names[:limit]
