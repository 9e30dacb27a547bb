"""Shared fakes for the PocketWX tests."""

from managers.input_manager import InputManager


class FakeInputSource:
    """Raw pin levels set by the test. Pull-up wiring: pressed reads False."""
    def __init__(self, count=4):
        self.levels = [True] * count

    def read_level(self, button_id):
        return self.levels[button_id]

    def press(self, button_id):
        self.levels[button_id] = False

    def release(self, button_id):
        self.levels[button_id] = True


class FakeStore:
    """In-memory credential store."""
    def __init__(self, data=None):
        self.data = dict(data or {})
        self.writes = []

    def load(self, key):
        return self.data.get(key)

    def store(self, key, value):
        self.writes.append((key, value))
        self.data[key] = value


class FakeRadio:
    """Radio whose link state is set directly by the test."""
    def __init__(self, networks=None, address="10.0.0.7"):
        self.networks = list(networks or [])
        self.address = address
        self.linked = False
        self.begin_calls = []
        self.abort_calls = 0
        self.scan_calls = 0

    def begin_association(self, ssid, password):
        self.begin_calls.append((ssid, password))

    def currently_linked(self, now=None):
        return self.linked

    def local_address(self):
        return self.address if self.linked else ""

    def abort(self):
        self.abort_calls += 1

    def scan(self, limit=31):
        self.scan_calls += 1
        return self.networks[:limit]


class Clock:
    """Drives an InputManager through time in fixed steps."""
    def __init__(self, inputs, start=1000, step=10):
        self.inputs = inputs
        self.now = start
        self.step = step

    def run(self, ms, on_tick=None):
        """Advance `ms` milliseconds, one tick per step."""
        end = self.now + ms
        while self.now < end:
            self.now += self.step
            self.inputs.advance(self.now)
            if on_tick is not None:
                on_tick(self.now)


def make_inputs(count=4, now=1000):
    source = FakeInputSource(count)
    return source, InputManager(source, button_count=count, now=now)


class Sim:
    """Runs a DeviceCore tick by tick with scripted button presses."""
    def __init__(self, core, source, now=0, step=10):
        self.core = core
        self.source = source
        self.now = now
        self.step = step

    def run(self, ms):
        end = self.now + ms
        while self.now < end:
            self.now += self.step
            self.core.tick(self.now)

    def tap(self, button, hold_ms=100, times=1):
        for _ in range(times):
            self.source.press(button)
            self.run(hold_ms)
            self.source.release(button)
            self.run(100)

    def hold(self, buttons, hold_ms, release=True):
        for b in buttons:
            self.source.press(b)
        self.run(hold_ms)
        if release:
            for b in buttons:
                self.source.release(b)
            self.run(100)


def make_core(networks=None, store=None, providers=None, config=None):
    """DeviceCore on fakes, booted to the Menu at t=0."""
    from core.device_core import DeviceCore
    from dummies.display_manager import DisplayManager as DummyDisplay
    from dummies.providers import default_providers
    from utilities.context import DeviceContext

    source, inputs = make_inputs(now=0)
    ctx = DeviceContext(
        inputs=inputs,
        store=store if store is not None else FakeStore(),
        radio=FakeRadio(networks),
        display=DummyDisplay(),
        providers=providers if providers is not None else default_providers(),
    )
    core = DeviceCore(ctx, config or {})
    core.boot(now=0)
    return core, Sim(core, source)
