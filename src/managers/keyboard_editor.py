# File: src/managers/keyboard_editor.py
"""On-screen grid keyboard used to enter WiFi credentials with four buttons."""

from managers.connection_manager import Credential
from managers.data_manager import SSID_KEY, PASSWORD_KEY
from managers.input_manager import UP, DOWN, SELECT, BACK, LONG_PRESS_MS
from utilities.keyboard_layout import KeyboardLayout
from utilities.logger import WXLogger

FIELD_NAME = "NAME"
FIELD_SECRET = "SECRET"

NAME_MAX = 32
SECRET_MAX = 64

# Results of handle_held()
ACTION_INSERT = "INSERT"
ACTION_DELETE = "DELETE"
ACTION_CONFIRM = "CONFIRM"
ACTION_TOGGLE = "TOGGLE"
ACTION_EXIT = "EXIT"


class TextBuffer:
    """Network name and secret being edited, plus which one is active."""
    def __init__(self, name_max=NAME_MAX, secret_max=SECRET_MAX):
        self.name_max = name_max
        self.secret_max = secret_max
        self.name = ""
        self.secret = ""
        self.active = FIELD_NAME

    @property
    def text(self):
        return self.name if self.active == FIELD_NAME else self.secret

    @property
    def limit(self):
        return self.name_max if self.active == FIELD_NAME else self.secret_max

    def set(self, name="", secret="", active=FIELD_NAME):
        self.name = (name or "")[:self.name_max]
        self.secret = (secret or "")[:self.secret_max]
        self.active = active

    def append(self, ch):
        """Add `ch` to the active field. False when the field is full."""
        if len(self.text) >= self.limit:
            return False
        if self.active == FIELD_NAME:
            self.name += ch
        else:
            self.secret += ch
        return True

    def backspace(self):
        """Remove the last character of the active field. False when empty."""
        if not self.text:
            return False
        if self.active == FIELD_NAME:
            self.name = self.name[:-1]
        else:
            self.secret = self.secret[:-1]
        return True

    def toggle(self):
        self.active = FIELD_SECRET if self.active == FIELD_NAME else FIELD_NAME

    def clear(self):
        self.set()

    def credential(self):
        return Credential(self.name, self.secret)


class KeyboardEditor:
    """
    Cursor over a KeyboardLayout plus the TextBuffer it edits.

    Held gestures fire once per press: each button has an armed flag that
    is cleared when its gesture fires and set again by rearm() when the
    navigation layer sees the button released.
    """
    def __init__(self, store, connection, layout=None, long_press_ms=LONG_PRESS_MS):
        WXLogger.info("KBED", f"[INIT] KeyboardEditor - long_press: {long_press_ms}ms")
        self.store = store
        self.connection = connection
        self.layout = layout or KeyboardLayout()
        self.long_press_ms = long_press_ms
        self.buffer = TextBuffer()
        self.row = 0
        self.col = 0
        self._armed = [True, True, True, True]
        # Set once confirm fires; cleared when Select or Back is released
        self._confirm_latched = False

    def begin(self, name="", secret="", active=FIELD_NAME):
        """Start an edit session with the given field contents."""
        self.buffer.set(name, secret, active)
        self.reset_cursor()
        WXLogger.debug("KBED", f"Edit session, active field: {active}")

    def reset_cursor(self):
        self.row = 0
        self.col = 0

    #region --- Cursor ---
    def move_up(self):
        if self.row > 0:
            self.row -= 1

    def move_down(self):
        if self.row < self.layout.row_count - 1:
            self.row += 1

    def move_left(self):
        if self.col > 0:
            self.col -= 1

    def move_right(self):
        if self.col < self.layout.col_count - 1:
            self.col += 1

    @property
    def highlighted(self):
        return self.layout.char_at(self.row, self.col)
    #endregion

    #region --- Buffer ---
    def insert_highlighted(self):
        ch = self.highlighted
        if self.buffer.append(ch):
            WXLogger.debug("KBED", f"Insert {ch!r} -> {self.buffer.active}")
            return True
        WXLogger.debug("KBED", f"{self.buffer.active} full ({self.buffer.limit})")
        return False

    def delete_last(self):
        return self.buffer.backspace()

    def confirm_and_connect(self, now=None):
        """Persist both fields, then hand the credential to the ConnectionManager."""
        self.store.store(SSID_KEY, self.buffer.name)
        self.store.store(PASSWORD_KEY, self.buffer.secret)
        WXLogger.info("KBED", f"Credentials saved for {self.buffer.name!r}")
        return self.connection.start(self.buffer.credential(), now)
    #endregion

    #region --- Gesture arming ---
    def is_armed(self, button):
        return self._armed[button]

    def rearm(self, button):
        """Called on an observed release. Returns True if the button was still armed."""
        was_armed = self._armed[button]
        self._armed[button] = True
        if button in (SELECT, BACK):
            self._confirm_latched = False
        return was_armed

    def claim_pressed(self, inputs):
        """Disarm buttons already down, so only presses made from here on can fire."""
        for button in range(len(self._armed)):
            if inputs.is_pressed(button):
                self._armed[button] = False
                if button in (SELECT, BACK):
                    self._confirm_latched = True

    def _fire(self, *buttons):
        for b in buttons:
            self._armed[b] = False

    def handle_held(self, inputs, now=None, allow_toggle=False):
        """
        Evaluate the held gestures for this tick and perform at most one.

        While Select and Back are both down their single-button gestures are
        deferred so the pair can reach the compound confirm threshold. Confirm
        only depends on both press durations, so a Select that already
        inserted can still be joined by Back. It fires once per episode.

        Returns the ACTION_* performed, or None.
        """
        lp = self.long_press_ms
        sel_down = inputs.is_pressed(SELECT)
        back_down = inputs.is_pressed(BACK)

        if sel_down and back_down:
            if (not self._confirm_latched
                    and inputs.is_held(SELECT, lp, now) and inputs.is_held(BACK, lp, now)):
                self._confirm_latched = True
                self._fire(SELECT, BACK)
                self.confirm_and_connect(now)
                return ACTION_CONFIRM
            return None

        if self._armed[SELECT] and inputs.is_held(SELECT, lp, now):
            self._fire(SELECT)
            self.insert_highlighted()
            return ACTION_INSERT

        if self._armed[BACK] and inputs.is_held(BACK, lp, now):
            self._fire(BACK)
            self.delete_last()
            return ACTION_DELETE

        if allow_toggle and self._armed[UP] and inputs.is_held(UP, lp, now):
            self._fire(UP)
            self.buffer.toggle()
            WXLogger.debug("KBED", f"Editing {self.buffer.active}")
            return ACTION_TOGGLE

        if self._armed[DOWN] and inputs.is_held(DOWN, lp, now):
            self._fire(DOWN)
            return ACTION_EXIT

        return None
    #endregion
