# File: src/utilities/context.py

class DeviceContext:
    """
    Single owner of the interaction core's mutable state and collaborators.

    Components receive this object explicitly instead of reaching for
    module globals. Only the tick loop mutates it.
    """
    def __init__(self, inputs=None, store=None, radio=None, display=None,
                 connection=None, editor=None, providers=None, config=None):
        self.inputs = inputs
        self.store = store
        self.radio = radio
        self.display = display
        self.connection = connection
        self.editor = editor
        # Data sources for the read-only screens, keyed by name
        # ("sensor", "weather", "geolocation"); each has read() -> dict
        self.providers = providers or {}
        self.config = config or {}
        self.renderer = None
        self.navigation = None
