# tests/conftest.py
import os
import sys
from unittest import mock

# Appended, not inserted, so src/code.py does not shadow the stdlib 'code' module
src_path = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'src'))
if src_path not in sys.path:
    sys.path.append(src_path)

# Mock the CircuitPython-only modules that might be imported by the code under test.
# supervisor stays unmocked so adafruit_ticks falls back to the host clock.
circuitpython_mocks = [
    'digitalio', 'board', 'busio', 'microcontroller', 'storage',
    'displayio', 'terminalio', 'adafruit_displayio_ssd1306',
    'adafruit_display_text', 'adafruit_display_text.label',
]

for module_name in circuitpython_mocks:
    sys.modules[module_name] = mock.MagicMock()
