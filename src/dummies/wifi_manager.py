# File: src/dummies/wifi_manager.py
"""Dummy WiFiManager - scripted radio for running without a wireless chip."""

from utilities.logger import WXLogger

SCAN_LIMIT = 31


class WiFiManager:
    """
    Pretends to associate with any network in `networks`.

    The link comes up after `link_after_polls` calls to currently_linked(),
    or never if the ssid is not in `networks` or `link_after_polls` is None.
    """

    def __init__(self, config=None, networks=None, link_after_polls=3, address="192.168.4.2"):
        config = config or {}
        self.networks = list(networks if networks is not None
                             else config.get("dummy_networks", ["PocketWX-Test"]))
        self.link_after_polls = link_after_polls
        self.address = address
        self.ssid = ""
        self.password = ""
        self.linked = False
        self.polls = 0
        self.abort_calls = 0
        self.associations = []

    @property
    def is_connected(self):
        return self.linked

    def begin_association(self, ssid, password):
        WXLogger.debug("WIFI", f"[DUMMY] begin_association {ssid}")
        self.ssid = ssid
        self.password = password
        self.linked = False
        self.polls = 0
        self.associations.append((ssid, password))

    def currently_linked(self, now=None):
        if not self.linked and self.ssid in self.networks and self.link_after_polls is not None:
            self.polls += 1
            self.linked = self.polls >= self.link_after_polls
        return self.linked

    def local_address(self):
        return self.address if self.linked else ""

    def abort(self):
        self.abort_calls += 1
        self.linked = False
        self.ssid = ""

    def scan(self, limit=SCAN_LIMIT):
        return self.networks[:limit]
