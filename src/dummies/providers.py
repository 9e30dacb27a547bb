# File: src/dummies/providers.py
"""Static data providers for the read-only screens."""


class StaticProvider:
    """Returns the same readings on every call."""
    def __init__(self, data):
        self.data = dict(data)
        self.reads = 0

    def read(self):
        self.reads += 1
        return dict(self.data)


class FailingProvider:
    """Simulates a sensor or service that is not answering."""
    def __init__(self, error=None):
        self.error = error or OSError("no response")

    def read(self):
        raise self.error


def default_providers():
    return {
        "sensor": StaticProvider({"Temp": "21.5C", "Hum": "40%", "Pres": "1013hPa"}),
        "weather": StaticProvider({"Now": "Clear", "High": "24C", "Low": "12C"}),
        "geolocation": StaticProvider({"City": "Unknown", "Lat": "0.00", "Lon": "0.00"}),
    }
