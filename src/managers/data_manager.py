# File: src/managers/data_manager.py
"""Persistent key/value store for WiFi credentials."""

import json
import os

from utilities.logger import WXLogger

SSID_KEY = "wifi_ssid"
PASSWORD_KEY = "wifi_password"


class DataManager:
    """Stores string values in a JSON file on the flash or SD card."""
    def __init__(self, root_dir="/", filename="credentials.json"):
        WXLogger.info("DATA", f"[INIT] DataManager - root_dir: {root_dir}")
        self.file_path = f"{root_dir}data/{filename}"
        self.data = {}
        self._ensure_dir(f"{root_dir}data")
        self.reload()

    def _ensure_dir(self, path):
        try:
            os.stat(path)
        except OSError:
            try:
                WXLogger.debug("DATA", f"Creating data directory at: {path}")
                os.mkdir(path)
            except OSError as e:
                WXLogger.error("DATA", f"Error creating data directory at {path}: {e}")

    def reload(self):
        """Read the file again, starting empty if it is missing or corrupt."""
        try:
            with open(self.file_path, "r", encoding="utf-8") as f:
                data = json.load(f)
            self.data = data if isinstance(data, dict) else {}
        except (OSError, ValueError):
            WXLogger.debug("DATA", "No stored data found, starting empty")
            self.data = {}

    def _save(self):
        try:
            with open(self.file_path, "w", encoding="utf-8") as f:
                json.dump(self.data, f)
        except OSError as e:
            # Read-only while mounted over USB
            WXLogger.error("DATA", f"Error saving to {self.file_path}: {e}")

    def load(self, key):
        """Return the stored string for `key`, or None."""
        value = self.data.get(key)
        return value if isinstance(value, str) else None

    def store(self, key, value):
        """Persist `value` under `key`. Write failures are logged only."""
        if self.data.get(key) == value:
            return
        WXLogger.debug("DATA", f"Storing '{key}'")
        self.data[key] = value
        self._save()
