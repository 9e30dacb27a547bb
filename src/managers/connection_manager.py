# File: src/managers/connection_manager.py
"""Non-blocking WiFi association state machine."""

from adafruit_ticks import ticks_ms, ticks_diff
from utilities.logger import WXLogger

IDLE = "IDLE"
CONNECTING = "CONNECTING"
CONNECTED = "CONNECTED"
FAILED = "FAILED"

CONNECT_TIMEOUT_MS = 20000

REASON_TIMEOUT = "Timeout"
REASON_CANCELLED = "Cancelled by user"


class Credential:
    """Network name and secret pair. Either part may be empty."""
    def __init__(self, ssid="", password=""):
        self.ssid = ssid or ""
        self.password = password or ""

    @property
    def is_empty(self):
        return not self.ssid

    def __eq__(self, other):
        if not isinstance(other, Credential):
            return NotImplemented
        return self.ssid == other.ssid and self.password == other.password

    def __repr__(self):
        return f"Credential(ssid={self.ssid!r}, password={'***' if self.password else ''!r})"


class ConnectionManager:
    """
    Tracks one association attempt at a time.

    IDLE -> CONNECTING via start(); CONNECTING -> CONNECTED when the radio
    reports a link, -> FAILED on timeout or cancel(). CONNECTED and FAILED
    are held until reset() is called when the user leaves the result screen.

    Args:
        radio: Link interface with begin_association(ssid, password),
            currently_linked(), local_address() and abort().
        timeout_ms (int): Give up after this many milliseconds.
    """
    def __init__(self, radio, timeout_ms=CONNECT_TIMEOUT_MS):
        WXLogger.info("CONN", f"[INIT] ConnectionManager - timeout: {timeout_ms}ms")
        self.radio = radio
        self.timeout_ms = timeout_ms
        self.state = IDLE
        self.reason = ""
        self.address = ""
        self.credential = None
        self.start_time = 0

    @property
    def is_active(self):
        return self.state == CONNECTING

    @property
    def is_finished(self):
        return self.state in (CONNECTED, FAILED)

    @property
    def result(self):
        """(success, message) for the result screen, None while unfinished."""
        if self.state == CONNECTED:
            return True, f"Connected: {self.address}"
        if self.state == FAILED:
            return False, self.reason
        return None

    def _set_state(self, new_state):
        WXLogger.info("CONN", f"{self.state} -> {new_state}")
        self.state = new_state

    def start(self, credential, now=None):
        """Begin associating with `credential`. Ignored while an attempt is running."""
        if self.state == CONNECTING:
            WXLogger.warning("CONN", "start() ignored, attempt already in progress")
            return False

        if now is None:
            now = ticks_ms()

        self.credential = credential
        self.start_time = now
        self.reason = ""
        self.address = ""

        WXLogger.info("CONN", f"Associating with {credential.ssid!r}")
        self.radio.begin_association(credential.ssid, credential.password)
        self._set_state(CONNECTING)
        return True

    def poll(self, now=None):
        """
        Check the link once. Returns True if the state changed.

        Only acts while CONNECTING, so the timeout transition happens once.
        """
        if self.state != CONNECTING:
            return False

        if now is None:
            now = ticks_ms()

        if self.radio.currently_linked():
            self.address = self.radio.local_address() or ""
            self._set_state(CONNECTED)
            WXLogger.info("CONN", f"Link up, address {self.address}")
            return True

        if ticks_diff(now, self.start_time) > self.timeout_ms:
            self.radio.abort()
            self.reason = REASON_TIMEOUT
            self._set_state(FAILED)
            WXLogger.warning("CONN", f"No link after {self.timeout_ms}ms")
            return True

        return False

    def cancel(self):
        """Abort a running attempt. No-op in any other state."""
        if self.state != CONNECTING:
            WXLogger.debug("CONN", f"cancel() ignored in state {self.state}")
            return False

        self.radio.abort()
        self.reason = REASON_CANCELLED
        self._set_state(FAILED)
        return True

    def reset(self):
        """Acknowledge the result and return to IDLE."""
        if self.state == CONNECTING:
            self.radio.abort()
        self._set_state(IDLE)
        self.reason = ""
        self.address = ""
        self.credential = None
        self.start_time = 0
