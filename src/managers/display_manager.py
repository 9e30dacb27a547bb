"""Manages displayio objects and hardware for the PocketWX OLED."""

import displayio
import terminalio
import adafruit_displayio_ssd1306
from adafruit_display_text import label

from utilities.logger import WXLogger

WIDTH = 128
HEIGHT = 64


class DisplayManager:
    """Immediate-mode drawing surface on top of displayio.

    Screens are drawn as a list of primitives between clear() and show():

        display.clear()
        display.fill_rect(0, 0, 128, 10)
        display.draw_text(2, 4, "MENU", inverted=True)
        display.draw_text(2, 16, "> Local weather")
        display.show()

    Primitives are collected into a fresh frame group and swapped onto the
    root group on show(), so a half drawn frame is never visible.
    """
    def __init__(self, i2c_bus, device_address=0x3C, width=WIDTH, height=HEIGHT):
        WXLogger.info("DISP", f"[INIT] DisplayManager - address: {hex(device_address)}")
        displayio.release_displays()
        self.display_bus = displayio.I2CDisplay(i2c_bus, device_address=device_address)
        self.hw = adafruit_displayio_ssd1306.SSD1306(
            self.display_bus, width=width, height=height, auto_refresh=False
        )
        self.width = width
        self.height = height

        self.root = displayio.Group()
        self.hw.root_group = self.root

        # Two-colour palette shared by every filled rectangle
        self._palette = displayio.Palette(2)
        self._palette[0] = 0x000000
        self._palette[1] = 0xFFFFFF

        self._frame = displayio.Group()

    def clear(self):
        """Start a new, empty frame."""
        self._frame = displayio.Group()

    def draw_text(self, x, y, text, inverted=False):
        """Place a line of text with its left edge at x and vertical centre at y."""
        lbl = label.Label(
            terminalio.FONT,
            text=text,
            x=x,
            y=y,
            color=0x000000 if inverted else 0xFFFFFF,
        )
        self._frame.append(lbl)
        return lbl

    def fill_rect(self, x, y, w, h, color=1):
        """Solid rectangle; color 1 is lit, 0 is dark."""
        if w <= 0 or h <= 0:
            return None
        bitmap = displayio.Bitmap(w, h, 2)
        bitmap.fill(1 if color else 0)
        grid = displayio.TileGrid(bitmap, pixel_shader=self._palette, x=x, y=y)
        self._frame.append(grid)
        return grid

    def show(self):
        """Swap the frame built since clear() onto the panel."""
        while len(self.root) > 0:
            self.root.pop()
        self.root.append(self._frame)
        self.hw.refresh()
