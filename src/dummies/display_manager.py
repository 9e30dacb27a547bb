# File: src/dummies/display_manager.py
"""Dummy DisplayManager - records drawing calls instead of driving a panel."""

class DisplayManager:
    """Drop-in dummy for DisplayManager."""

    def __init__(self, *args, width=128, height=64, **kwargs):
        self.width = width
        self.height = height
        self.texts = []
        self.rects = []
        self.frames = 0
        self.shown_texts = []

    def clear(self):
        self.texts = []
        self.rects = []

    def draw_text(self, x, y, text, inverted=False):
        self.texts.append((x, y, text, inverted))

    def fill_rect(self, x, y, w, h, color=1):
        self.rects.append((x, y, w, h, color))

    def show(self):
        self.frames += 1
        self.shown_texts = [t[2] for t in self.texts]

    def has_text(self, fragment):
        """True if any text of the last shown frame contains `fragment`."""
        return any(fragment in t for t in self.shown_texts)
