# File: src/core/screens.py
"""
Screen variants for the navigation state machine.

Each screen is a small class carrying only its own state. Code that
behaves differently per screen keeps a dispatch dict keyed by screen class
and validates it with check_dispatch() so a new variant cannot be added
without handling it everywhere.
"""

NO_NETWORKS = "No networks found"
MANUAL_ENTRY = "Enter manually"


class Screen:
    """Base class. ``LEAF`` screens only ever return to the Menu."""
    NAME = "SCREEN"
    LEAF = False
    # Redrawn on every periodic refresh
    REFRESH = False

    def __repr__(self):
        fields = ", ".join(f"{k}={v!r}" for k, v in self.__dict__.items())
        return f"{type(self).__name__}({fields})"


class LoadingScreen(Screen):
    NAME = "LOADING"


class MenuScreen(Screen):
    NAME = "MENU"

    def __init__(self, selected=0):
        self.selected = selected


class LocalWeatherScreen(Screen):
    NAME = "LOCAL_WEATHER"
    LEAF = True
    REFRESH = True


class ApiWeatherScreen(Screen):
    NAME = "API_WEATHER"
    LEAF = True
    REFRESH = True


class GeolocationScreen(Screen):
    NAME = "GEOLOCATION"
    LEAF = True
    REFRESH = True


class NetworkScanScreen(Screen):
    NAME = "NETWORK_SCAN"
    LEAF = True

    def __init__(self, results=None, selected=0):
        self.results = list(results) if results else [NO_NETWORKS]
        self.selected = selected

    @property
    def is_empty(self):
        return self.results == [NO_NETWORKS]

    @property
    def rows(self):
        """Lines shown in the list; real results end with the manual entry row."""
        if self.is_empty:
            return self.results
        return self.results + [MANUAL_ENTRY]

    @property
    def highlighted(self):
        return self.rows[self.selected]

    @property
    def wants_manual_entry(self):
        return self.is_empty or self.selected >= len(self.results)


class ManualCredentialSetupScreen(Screen):
    NAME = "MANUAL_SETUP"

    def __init__(self, field="NAME"):
        self.field = field


class KeyboardEditorScreen(Screen):
    NAME = "KEYBOARD"


class ConnectingScreen(Screen):
    NAME = "CONNECTING"
    REFRESH = True

    def __init__(self, start_time=0):
        self.start_time = start_time


class ConnectionResultScreen(Screen):
    NAME = "CONNECTION_RESULT"
    LEAF = True

    def __init__(self, success=False, message=""):
        self.success = success
        self.message = message


class InfoScreen(Screen):
    NAME = "INFO"
    LEAF = True
    REFRESH = True


ALL_SCREENS = (
    LoadingScreen,
    MenuScreen,
    LocalWeatherScreen,
    ApiWeatherScreen,
    GeolocationScreen,
    NetworkScanScreen,
    ManualCredentialSetupScreen,
    KeyboardEditorScreen,
    ConnectingScreen,
    ConnectionResultScreen,
    InfoScreen,
)

# (label, screen class) in display order
MENU_ITEMS = (
    ("Local weather", LocalWeatherScreen),
    ("Weather forecast", ApiWeatherScreen),
    ("Geolocation", GeolocationScreen),
    ("Connect to network", NetworkScanScreen),
    ("Device info", InfoScreen),
)


def check_dispatch(table, name):
    """Raise ValueError if `table` does not handle every screen variant."""
    missing = [cls.__name__ for cls in ALL_SCREENS if cls not in table]
    if missing:
        raise ValueError(f"{name} does not handle: {', '.join(missing)}")
    return table
