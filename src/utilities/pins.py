# File: src/utilities/pins.py
"""Centralized Pin Map for PocketWX"""
import board


class PicoWProfile:
    """Raspberry Pi Pico W with four buttons to GND and an SSD1306 on I2C0."""

    @classmethod
    def load(cls):
        p = {
            "I2C_SDA": getattr(board, "GP4", None),
            "I2C_SCL": getattr(board, "GP5", None),
            "BTN_UP": getattr(board, "GP10", None),
            "BTN_DOWN": getattr(board, "GP11", None),
            "BTN_SELECT": getattr(board, "GP12", None),
            "BTN_BACK": getattr(board, "GP13", None),
        }

        # Order must match managers.input_manager UP/DOWN/SELECT/BACK
        p["BUTTONS"] = [p["BTN_UP"], p["BTN_DOWN"], p["BTN_SELECT"], p["BTN_BACK"]]
        p["I2C_ADDRESSES"] = {"OLED": 0x3C}
        return p


class Pins:
    """Centralized Pin Map for PocketWX"""

    _PROFILES = {
        "PICO_W": PicoWProfile,
    }

    @classmethod
    def initialize(cls, profile="PICO_W"):
        """Load a profile and expose its entries as class attributes."""
        profile_class = cls._PROFILES.get(profile)

        if not profile_class:
            raise ValueError(f"Unknown pin profile: {profile}")

        for key, value in profile_class.load().items():
            setattr(cls, key, value)
