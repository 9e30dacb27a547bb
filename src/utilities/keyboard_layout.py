# File: src/utilities/keyboard_layout.py
"""Character grid for the on-screen keyboard."""

class KeyboardLayout:
    """
    Fixed grid of printable characters.

    The last row only has seven letters; its trailing cells, past
    OVERFLOW_COLUMN, map onto SYMBOLS instead of the literal placeholder
    characters stored in the row.
    """
    ROWS = (
        "1234567890",
        "qwertyuiop",
        "asdfghjkl@",
        "zxcvbnm.-_",
        "QWERTYUIOP",
        "ASDFGHJKL!",
        "ZXCVBNM***",
    )
    OVERFLOW_COLUMN = 6
    SYMBOLS = ("#", "?", " ")

    def __init__(self, rows=None, symbols=None, overflow_column=None):
        if rows is not None:
            self.ROWS = tuple(rows)
        if symbols is not None:
            self.SYMBOLS = tuple(symbols)
        if overflow_column is not None:
            self.OVERFLOW_COLUMN = overflow_column
        if not self.ROWS or any(len(r) != len(self.ROWS[0]) for r in self.ROWS):
            raise ValueError("Keyboard rows must be non-empty and of equal width")

    @property
    def row_count(self):
        return len(self.ROWS)

    @property
    def col_count(self):
        return len(self.ROWS[0])

    def is_overflow(self, row, col):
        return row == self.row_count - 1 and col > self.OVERFLOW_COLUMN

    def char_at(self, row, col):
        """Character inserted when the cursor is at (row, col)."""
        if self.is_overflow(row, col):
            idx = col - self.OVERFLOW_COLUMN - 1
            if idx < len(self.SYMBOLS):
                return self.SYMBOLS[idx]
            return self.SYMBOLS[-1]
        return self.ROWS[row][col]

    def label_at(self, row, col):
        """Printable label for a grid cell, spaces are shown as '^'."""
        ch = self.char_at(row, col)
        return "^" if ch == " " else ch

    def row_labels(self, row):
        return "".join(self.label_at(row, c) for c in range(self.col_count))
