# File: src/managers/input_manager.py
"""Debounced button input for the four front-panel buttons."""

from adafruit_ticks import ticks_ms, ticks_diff
from utilities.logger import WXLogger

# Button indices
UP = 0
DOWN = 1
SELECT = 2
BACK = 3
BUTTON_NAMES = ("UP", "DOWN", "SELECT", "BACK")

DEBOUNCE_MS = 30
LONG_PRESS_MS = 1200
REFRESH_MS = 700


class DigitalInputSource:
    """
    Raw level reader for a list of board pins.

    Each pin is configured as an input with the internal pull-up enabled,
    so an idle button reads True and a pressed button reads False.
    """
    def __init__(self, pins):
        import digitalio
        self._pins = []
        for pin in pins:
            io = digitalio.DigitalInOut(pin)
            io.direction = digitalio.Direction.INPUT
            io.pull = digitalio.Pull.UP
            self._pins.append(io)

    def read_level(self, button_id):
        """Return the electrical level of a button pin."""
        return self._pins[button_id].value

    def deinit(self):
        for io in self._pins:
            io.deinit()


class ButtonState:
    """Filter state for one physical button. All levels are logical 'pressed' values."""
    def __init__(self, pressed, now):
        self.raw = pressed
        self.stable = pressed
        self.previous = pressed
        self.raw_changed_at = now
        # None while released
        self.pressed_at = now if pressed else None

    def __repr__(self):
        return (f"ButtonState(raw={self.raw}, stable={self.stable}, "
                f"previous={self.previous}, pressed_at={self.pressed_at})")


class InputManager:
    """
    Two-stage debouncer and edge/duration classifier.

    advance() must be called once per tick. A raw change only records the
    time it was seen; the stable level follows once the raw level has held
    for the debounce window. Edges are derived from the stable level and are
    consumed by the first query that observes them.
    """
    def __init__(self, source, button_count=4, debounce_ms=DEBOUNCE_MS,
                 value_when_pressed=False, now=None):
        WXLogger.info("INPT", f"[INIT] InputManager - buttons: {button_count}, debounce: {debounce_ms}ms")
        self.source = source
        self.debounce_ms = debounce_ms
        self.value_when_pressed = value_when_pressed
        self.now = ticks_ms() if now is None else now
        self.buttons = [
            ButtonState(self._sample(i), self.now) for i in range(button_count)
        ]
        self.last_interaction_time = self.now

    def _sample(self, index):
        return self.source.read_level(index) == self.value_when_pressed

    def advance(self, now=None):
        """Sample every button and run the debounce filter."""
        if now is None:
            now = ticks_ms()
        self.now = now

        for i, state in enumerate(self.buttons):
            raw = self._sample(i)

            # Stage 1: note the change, do not trust it yet
            if raw != state.raw:
                state.raw = raw
                state.raw_changed_at = now
                continue

            # Stage 2: commit once the raw level has settled
            if raw != state.stable and ticks_diff(now, state.raw_changed_at) >= self.debounce_ms:
                state.stable = raw
                state.pressed_at = now if raw else None
                self.last_interaction_time = now
                WXLogger.debug("INPT", f"{BUTTON_NAMES[i] if i < len(BUTTON_NAMES) else i} "
                                       f"{'pressed' if raw else 'released'} @ {now}")

    def pressed_edge(self, index):
        """True once per released->pressed transition of the stable level."""
        state = self.buttons[index]
        if state.stable and not state.previous:
            state.previous = True
            return True
        return False

    def released_edge(self, index):
        """True once per pressed->released transition of the stable level."""
        state = self.buttons[index]
        if not state.stable and state.previous:
            state.previous = False
            return True
        return False

    def is_pressed(self, index):
        return self.buttons[index].stable

    def held_for(self, index, now=None):
        """Milliseconds the button has been stable-pressed, 0 when released."""
        state = self.buttons[index]
        if not state.stable:
            return 0
        if now is None:
            now = self.now
        return ticks_diff(now, state.pressed_at)

    def is_held(self, index, duration=LONG_PRESS_MS, now=None):
        """True while stable-pressed for at least `duration` ms."""
        if not self.buttons[index].stable:
            return False
        return self.held_for(index, now) >= duration

    def flush(self):
        """Drop any unconsumed edges."""
        for state in self.buttons:
            state.previous = state.stable
