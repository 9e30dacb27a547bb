# File: src/core/screen_renderer.py
"""Draws each screen onto the display surface."""

from adafruit_ticks import ticks_ms, ticks_diff

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
from managers.data_manager import SSID_KEY
from managers.keyboard_editor import FIELD_NAME
from utilities.logger import WXLogger

VERSION = "1.0.0"

# Layout for a 128x64 panel with the 6x12 terminalio font
HEADER_H = 11
LINE_H = 10
FIRST_LINE_Y = 17
LIST_ROWS = 5
CHAR_W = 6
COLS = 21
KEY_W = 12
KEY_ROWS_VISIBLE = 3

ERR = "ERR"

# Exceptions a provider may raise for a sensor or link that is not answering
PROVIDER_ERRORS = (OSError, RuntimeError, ValueError, KeyError)


def clip(text, width=COLS):
    """Trim to `width` characters, keeping the end (the part being typed)."""
    return text if len(text) <= width else text[-width:]


class ScreenRenderer:
    """
    Renders the current screen from the device context.

    Read-only data screens call their provider on every draw; a provider
    that raises is shown as "ERR" and simply tried again on the next
    periodic refresh.
    """
    def __init__(self, context):
        self.ctx = context
        self.display = context.display
        self._draw = check_dispatch({
            LoadingScreen: self._draw_loading,
            MenuScreen: self._draw_menu,
            LocalWeatherScreen: self._draw_local_weather,
            ApiWeatherScreen: self._draw_api_weather,
            GeolocationScreen: self._draw_geolocation,
            NetworkScanScreen: self._draw_scan,
            ManualCredentialSetupScreen: self._draw_editor,
            KeyboardEditorScreen: self._draw_editor,
            ConnectingScreen: self._draw_connecting,
            ConnectionResultScreen: self._draw_result,
            InfoScreen: self._draw_info,
        }, "ScreenRenderer")

    def render(self, screen, now=None):
        if now is None:
            now = ticks_ms()
        self.display.clear()
        self._draw[type(screen)](screen, now)
        self.display.show()

    def refresh(self, screen, now=None):
        """Redraw screens with live fields. Returns True if drawn."""
        if not screen.REFRESH:
            return False
        self.render(screen, now)
        return True

    #region --- Primitives ---
    def _header(self, title):
        self.display.fill_rect(0, 0, self.display.width, HEADER_H)
        self.display.draw_text(2, 5, clip(title), inverted=True)

    def _line(self, index, text, selected=False):
        y = FIRST_LINE_Y + index * LINE_H
        if selected:
            self.display.fill_rect(0, y - LINE_H // 2, self.display.width, LINE_H)
        self.display.draw_text(2, y, clip(text), inverted=selected)

    def _list(self, items, selected):
        # Scroll so the selection stays inside the visible window
        top = max(0, min(selected - LIST_ROWS // 2, len(items) - LIST_ROWS))
        for i, item in enumerate(items[top:top + LIST_ROWS]):
            self._line(i, item, selected=(top + i == selected))

    def _read(self, name):
        provider = self.ctx.providers.get(name)
        if provider is None:
            return None
        try:
            return provider.read()
        except PROVIDER_ERRORS as e:
            WXLogger.warning("REND", f"{name} read failed: {e}")
            return None

    def _data_screen(self, title, provider_name):
        self._header(title)
        data = self._read(provider_name)
        if data is None:
            self._line(0, ERR)
            return
        for i, (key, value) in enumerate(list(data.items())[:LIST_ROWS]):
            self._line(i, f"{key}: {value}")
    #endregion

    #region --- Screens ---
    def _draw_loading(self, screen, now):
        self._header("PocketWX")
        self._line(1, "Loading...")

    def _draw_menu(self, screen, now):
        self._header("MENU")
        self._list([item[0] for item in MENU_ITEMS], screen.selected)

    def _draw_local_weather(self, screen, now):
        self._data_screen("LOCAL WEATHER", "sensor")

    def _draw_api_weather(self, screen, now):
        self._data_screen("FORECAST", "weather")

    def _draw_geolocation(self, screen, now):
        self._data_screen("GEOLOCATION", "geolocation")

    def _draw_scan(self, screen, now):
        self._header(f"NETWORKS ({0 if screen.is_empty else len(screen.results)})")
        self._list(screen.rows, screen.selected)

    def _draw_editor(self, screen, now):
        editor = self.ctx.editor
        buf = editor.buffer
        tag = "SSID" if buf.active == FIELD_NAME else "PASS"
        self._header(clip(f"{tag}:{buf.text}"))

        layout = editor.layout
        top = max(0, min(editor.row - 1, layout.row_count - KEY_ROWS_VISIBLE))
        for i in range(KEY_ROWS_VISIBLE):
            row = top + i
            if row >= layout.row_count:
                break
            y = FIRST_LINE_Y + i * LINE_H
            for col in range(layout.col_count):
                x = 4 + col * KEY_W
                cursor = row == editor.row and col == editor.col
                if cursor:
                    self.display.fill_rect(x - 2, y - LINE_H // 2, KEY_W - 2, LINE_H)
                self.display.draw_text(x, y, layout.label_at(row, col), inverted=cursor)

        self.display.draw_text(2, FIRST_LINE_Y + KEY_ROWS_VISIBLE * LINE_H + 4,
                               f"{len(buf.text)}/{buf.limit}")

    def _draw_connecting(self, screen, now):
        conn = self.ctx.connection
        ssid = conn.credential.ssid if conn.credential else ""
        elapsed = max(0, ticks_diff(now, screen.start_time)) // 1000
        self._header("CONNECTING")
        self._line(0, ssid)
        self._line(1, f"{elapsed}s / {conn.timeout_ms // 1000}s")
        self._line(3, "BACK to cancel")

    def _draw_result(self, screen, now):
        self._header("CONNECTED" if screen.success else "FAILED")
        self._line(0, screen.message)
        self._line(3, "SELECT for menu")

    def _draw_info(self, screen, now):
        store = self.ctx.store
        radio = self.ctx.radio
        address = radio.local_address() if radio is not None else ""
        self._header("DEVICE INFO")
        self._line(0, f"PocketWX v{VERSION}")
        self._line(1, f"SSID: {store.load(SSID_KEY) or '-'}")
        self._line(2, f"IP: {address or 'offline'}")
        self._line(3, f"Up: {now // 1000}s")
    #endregion
