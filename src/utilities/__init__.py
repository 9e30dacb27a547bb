# File: src/utilities/__init__.py
"""Utility modules for PocketWX."""

from .context import DeviceContext
from .keyboard_layout import KeyboardLayout
from .logger import WXLogger, LogLevel
from .pins import Pins

__all__ = [
    'DeviceContext',
    'KeyboardLayout',
    'LogLevel',
    'Pins',
    'WXLogger',
    ]
