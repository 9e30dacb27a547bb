# File: src/managers/navigation_manager.py
"""Screen state machine driven by the four front-panel buttons."""

from adafruit_ticks import ticks_ms

from core.screens import (
    MENU_ITEMS,
    ApiWeatherScreen,
    ConnectingScreen,
    ConnectionResultScreen,
    GeolocationScreen,
    InfoScreen,
    KeyboardEditorScreen,
    LoadingScreen,
    LocalWeatherScreen,
    ManualCredentialSetupScreen,
    MenuScreen,
    NetworkScanScreen,
    check_dispatch,
)
from managers.input_manager import UP, DOWN, SELECT, BACK, BUTTON_NAMES
from managers.keyboard_editor import (
    ACTION_CONFIRM,
    ACTION_EXIT,
    FIELD_NAME,
    FIELD_SECRET,
)
from managers.wifi_manager import SCAN_LIMIT
from managers.data_manager import SSID_KEY, PASSWORD_KEY
from utilities.logger import WXLogger


class NavigationManager:
    """
    Routes classified button events to the handler of the current screen.

    Per tick, for each button: a press edge opens a new press episode and a
    release edge closes it. The release counts as a *short* press only if no
    held gesture claimed the episode. Held gestures are only evaluated on the
    two text entry screens.

    The manager owns the ConnectionManager handle in the context and polls
    it only while the Connecting screen is showing.
    """

    def __init__(self, context):
        WXLogger.info("NAVM", "[INIT] NavigationManager")
        self.ctx = context
        self.screen = LoadingScreen()
        self.previous = None
        self._menu_index = 0
        # Time of the tick being handled; passed to the renderer
        self._now = None

        self._handlers = check_dispatch({
            LoadingScreen: self._on_loading,
            MenuScreen: self._on_menu,
            LocalWeatherScreen: self._on_leaf,
            ApiWeatherScreen: self._on_leaf,
            GeolocationScreen: self._on_leaf,
            InfoScreen: self._on_leaf,
            NetworkScanScreen: self._on_scan,
            ManualCredentialSetupScreen: self._on_editor,
            KeyboardEditorScreen: self._on_editor,
            ConnectingScreen: self._on_connecting,
            ConnectionResultScreen: self._on_result,
        }, "NavigationManager")

    #region --- Transitions ---
    def set_screen(self, screen):
        """Make `screen` current and draw it immediately."""
        if screen.LEAF:
            self.previous = self.screen
        WXLogger.info("NAVM", f"{self.screen.NAME} -> {screen.NAME}")
        self.screen = screen
        self.render()

    def render(self, now=None):
        if now is not None:
            self._now = now
        if self.ctx.renderer is not None:
            self.ctx.renderer.render(self.screen, self._now)

    def boot(self, now=None):
        """Leave the Loading screen once start-up has finished."""
        self._now = now
        if isinstance(self.screen, LoadingScreen):
            self.go_menu()

    def go_menu(self):
        self.previous = None
        self.set_screen(MenuScreen(self._menu_index))

    def back(self):
        """Single-level back from a leaf screen; always lands on the Menu."""
        if isinstance(self.previous, MenuScreen):
            self._menu_index = self.previous.selected
        self.go_menu()

    def open_menu_item(self, index, now=None):
        label, screen_cls = MENU_ITEMS[index]
        WXLogger.debug("NAVM", f"Menu select: {label}")
        if screen_cls is NetworkScanScreen:
            self.set_screen(self._scan())
        else:
            self.set_screen(screen_cls())

    def _scan(self):
        names = []
        if self.ctx.radio is not None:
            names = list(self.ctx.radio.scan(SCAN_LIMIT))[:SCAN_LIMIT]
        return NetworkScanScreen(names)

    def start_editor(self, name="", secret="", active=FIELD_SECRET, manual=False):
        self.ctx.editor.begin(name, secret, active)
        # A button still down from the previous screen cannot start a gesture here
        self.ctx.editor.claim_pressed(self.ctx.inputs)
        if manual:
            self.set_screen(ManualCredentialSetupScreen(active))
        else:
            self.set_screen(KeyboardEditorScreen())

    def show_connection_result(self):
        success, message = self.ctx.connection.result
        self.set_screen(ConnectionResultScreen(success, message))
    #endregion

    #region --- Tick entry points ---
    def handle_input(self, now=None):
        """Consume this tick's edges and held gestures."""
        if now is None:
            now = ticks_ms()
        self._now = now
        inputs = self.ctx.inputs
        editor = self.ctx.editor

        shorts = []
        for button in range(len(inputs.buttons)):
            if inputs.pressed_edge(button):
                WXLogger.debug("NAVM", f"{BUTTON_NAMES[button]} down")
            if inputs.released_edge(button) and editor.rearm(button):
                shorts.append(button)

        start = self.screen
        if isinstance(start, (KeyboardEditorScreen, ManualCredentialSetupScreen)):
            self._handle_held(now)

        for button in shorts:
            if self.screen is not start:
                break
            self._handlers[type(self.screen)](button, now)

    def poll_connection(self, now=None):
        """Advance a pending association. Only runs on the Connecting screen."""
        if not isinstance(self.screen, ConnectingScreen):
            return
        self._now = now
        if self.ctx.connection.poll(now):
            self.show_connection_result()

    def _handle_held(self, now):
        manual = isinstance(self.screen, ManualCredentialSetupScreen)
        action = self.ctx.editor.handle_held(self.ctx.inputs, now, allow_toggle=manual)
        if action is None:
            return
        if action == ACTION_CONFIRM:
            self.set_screen(ConnectingScreen(now))
        elif action == ACTION_EXIT:
            WXLogger.info("NAVM", "Edit abandoned")
            self.go_menu()
        else:
            if manual:
                self.screen.field = self.ctx.editor.buffer.active
            self.render()
    #endregion

    #region --- Per-screen short press handlers ---
    def _on_loading(self, button, now):
        pass

    def _on_menu(self, button, now):
        count = len(MENU_ITEMS)
        if button == UP:
            self.screen.selected = (self.screen.selected - 1) % count
        elif button == DOWN:
            self.screen.selected = (self.screen.selected + 1) % count
        elif button == SELECT:
            self._menu_index = self.screen.selected
            self.open_menu_item(self.screen.selected, now)
            return
        else:
            return
        self._menu_index = self.screen.selected
        self.render()

    def _on_leaf(self, button, now):
        if button in (SELECT, BACK):
            self.back()

    def _on_scan(self, button, now):
        screen = self.screen
        if button == UP:
            if screen.selected > 0:
                screen.selected -= 1
                self.render()
        elif button == DOWN:
            if screen.selected < len(screen.rows) - 1:
                screen.selected += 1
                self.render()
        elif button == SELECT:
            if screen.wants_manual_entry:
                store = self.ctx.store
                self.start_editor(store.load(SSID_KEY) or "", store.load(PASSWORD_KEY) or "",
                                  active=FIELD_NAME, manual=True)
            else:
                self.start_editor(name=screen.highlighted, active=FIELD_SECRET)
        elif button == BACK:
            self.back()

    def _on_editor(self, button, now):
        editor = self.ctx.editor
        if button == UP:
            editor.move_up()
        elif button == DOWN:
            editor.move_down()
        elif button == BACK:
            editor.move_left()
        elif button == SELECT:
            editor.move_right()
        self.render()

    def _on_connecting(self, button, now):
        if button == BACK and self.ctx.connection.cancel():
            self.show_connection_result()

    def _on_result(self, button, now):
        if button in (SELECT, BACK):
            self.ctx.connection.reset()
            self.back()
    #endregion
