# File: src/core/device_core.py
"""
Device Core for PocketWX.

Owns the DeviceContext and runs the cooperative tick loop:
advance inputs -> route edges -> poll a pending connection -> periodic refresh.
"""
import asyncio
from adafruit_ticks import ticks_ms, ticks_diff

from core.screen_renderer import ScreenRenderer
from managers.connection_manager import ConnectionManager, CONNECT_TIMEOUT_MS
from managers.data_manager import SSID_KEY
from managers.input_manager import DEBOUNCE_MS, LONG_PRESS_MS, REFRESH_MS
from managers.keyboard_editor import KeyboardEditor
from managers.navigation_manager import NavigationManager
from utilities.context import DeviceContext
from utilities.logger import WXLogger

TICK_MS = 5


class DeviceCore:
    """Class to hold all interaction state for the device.

    Args:
        context (DeviceContext): Collaborators already wired up; see
            build_context() for the hardware version.
        config (dict): Timing overrides (debounce_ms, long_press_ms,
            refresh_ms, connect_timeout_ms, tick_ms).
    """
    def __init__(self, context, config=None):
        config = config if config is not None else context.config
        WXLogger.info("CORE", "[INIT] DeviceCore")
        self.ctx = context
        self.refresh_ms = config.get("refresh_ms", REFRESH_MS)
        self.tick_ms = config.get("tick_ms", TICK_MS)

        if context.connection is None:
            context.connection = ConnectionManager(
                context.radio, timeout_ms=config.get("connect_timeout_ms", CONNECT_TIMEOUT_MS)
            )
        if context.editor is None:
            context.editor = KeyboardEditor(
                context.store, context.connection,
                long_press_ms=config.get("long_press_ms", LONG_PRESS_MS),
            )
        if context.display is not None and context.renderer is None:
            context.renderer = ScreenRenderer(context)

        self.navigation = NavigationManager(context)
        context.navigation = self.navigation
        self._last_refresh = None

    @property
    def screen(self):
        return self.navigation.screen

    def boot(self, now=None):
        """Draw the Loading screen, report stored credentials, go to the Menu."""
        if now is None:
            now = ticks_ms()
        self.navigation.render(now)
        stored = self.ctx.store.load(SSID_KEY)
        if stored:
            WXLogger.info("CORE", f"Stored network: {stored}")
        else:
            WXLogger.info("CORE", "No stored network credentials")
        # Presses made while booting are not carried onto the Menu
        self.ctx.inputs.flush()
        self.navigation.boot(now)
        self._last_refresh = now

    def tick(self, now=None):
        """One pass of the loop. Never blocks."""
        if now is None:
            now = ticks_ms()

        self.ctx.inputs.advance(now)
        self.navigation.handle_input(now)
        self.navigation.poll_connection(now)

        if self._last_refresh is None or ticks_diff(now, self._last_refresh) >= self.refresh_ms:
            self._last_refresh = now
            if self.ctx.renderer is not None:
                self.ctx.renderer.refresh(self.navigation.screen, now)

    async def start(self):
        """Run forever."""
        self.boot()
        WXLogger.info("CORE", "Entering main loop")
        while True:
            self.tick()
            await asyncio.sleep(self.tick_ms / 1000)


def build_context(config):
    """Construct the real hardware collaborators from the pin map."""
    import busio

    from managers.data_manager import DataManager
    from managers.display_manager import DisplayManager
    from managers.input_manager import DigitalInputSource, InputManager
    from managers.wifi_manager import WiFiManager
    from utilities.pins import Pins

    Pins.initialize(config.get("pin_profile", "PICO_W"))

    i2c = busio.I2C(Pins.I2C_SCL, Pins.I2C_SDA)
    display = DisplayManager(i2c, device_address=Pins.I2C_ADDRESSES["OLED"])
    inputs = InputManager(
        DigitalInputSource(Pins.BUTTONS),
        button_count=len(Pins.BUTTONS),
        debounce_ms=config.get("debounce_ms", DEBOUNCE_MS),
    )

    return DeviceContext(
        inputs=inputs,
        store=DataManager(root_dir=config.get("root_data_dir", "/")),
        radio=WiFiManager(config),
        display=display,
        providers=config.get("providers"),
        config=config,
    )
