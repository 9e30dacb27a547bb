# File: src/managers/__init__.py
"""Top-level package for manager classes."""

from .connection_manager import ConnectionManager, Credential
from .data_manager import DataManager
from .display_manager import DisplayManager
from .input_manager import InputManager, DigitalInputSource
from .keyboard_editor import KeyboardEditor, TextBuffer
from .navigation_manager import NavigationManager
from .wifi_manager import WiFiManager

__all__ = [
    "ConnectionManager",
    "Credential",
    "DataManager",
    "DigitalInputSource",
    "DisplayManager",
    "InputManager",
    "KeyboardEditor",
    "NavigationManager",
    "TextBuffer",
    "WiFiManager",
]
