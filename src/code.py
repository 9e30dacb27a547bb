# File: src/code.py
"""
PROJECT: PocketWX - button driven weather pocket display
"""

import asyncio
import json
import os
import time

import supervisor

from utilities.logger import WXLogger, LogLevel

# Init logger at DEBUG for initial boot
WXLogger.set_level(LogLevel.DEBUG)

def file_exists(filename):
    """Check if a file exists on the filesystem."""
    try:
        os.stat(filename)
        return True
    except OSError:
        return False

def load_config():
    """Load configuration from config.json if it exists, otherwise return defaults."""
    default_config = {
        "debug_mode": False,
        "log_to_file": False,
        "pin_profile": "PICO_W",
        "root_data_dir": "/",
        "debounce_ms": 30,
        "long_press_ms": 1200,
        "refresh_ms": 700,
        "connect_timeout_ms": 20000,
        "tick_ms": 5,
        "wifi_step_timeout": 0.1,
        "wifi_retry_ms": 1500,
        "hostname": "pocketwx",
        "hardware_features": {}  # Empty dict means all hardware enabled
    }
    try:
        if file_exists("config.json"):
            with open("config.json", "r", encoding="utf-8") as f:
                config_data = json.load(f)
            WXLogger.info("CODE", "Configuration loaded from config.json")
            merged_config = default_config.copy()
            merged_config.update(config_data)
            return merged_config
        WXLogger.warning("CODE", "No config.json found. Using default configuration.")
        return default_config
    except (OSError, ValueError) as e:
        WXLogger.error("CODE", f"Error loading config.json: {e}")
        WXLogger.warning("CODE", "Using default configuration.")
        return default_config

# --- HARDWARE DUMMY INJECTION ---

def _inject_hardware_dummies(features):
    """Replace disabled hardware manager modules with dummy classes.

    Must run before build_context() imports the managers.

    Args:
        features: dict mapping feature name -> bool (True = real hardware,
                  False = inject dummy). Unknown keys are ignored.
    """
    import sys

    dummy_map = {
        "display": ("managers.display_manager", "dummies.display_manager"),
        "wifi":    ("managers.wifi_manager", "dummies.wifi_manager"),
    }

    for feature, enabled in features.items():
        if enabled or feature not in dummy_map:
            continue
        manager_module, dummy_module_name = dummy_map[feature]
        try:
            __import__(dummy_module_name)
            sys.modules[manager_module] = sys.modules[dummy_module_name]
            WXLogger.info("CODE", f"Dummy injected: {manager_module}")
        except ImportError as e:
            WXLogger.warning("CODE", f"Could not load dummy for {manager_module}: {e}")


# --- ENTRY POINT ---
WXLogger.info("CODE", "*** BOOTING POCKETWX ***")
config = load_config()
WXLogger.configure(config)

_inject_hardware_dummies(config.get("hardware_features", {}))

from core.device_core import DeviceCore, build_context
from dummies.providers import default_providers

if "providers" not in config:
    config["providers"] = default_providers()

app = DeviceCore(build_context(config), config)

async def main():
    """Main asynchronous entry point."""
    try:
        await app.start()
    except Exception as e:
        WXLogger.error("CODE", f"CRITICAL CRASH: {e}")
        import traceback
        traceback.print_exception(type(e), e, e.__traceback__)
        time.sleep(2)
        supervisor.reload()

if __name__ == "__main__":
    asyncio.run(main())
