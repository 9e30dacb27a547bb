"""
Logging utilities for PocketWX.
"""

import time

class LogLevel:
    """
    Log levels for categorizing log messages.
    """
    DEBUG = 0
    INFO = 1
    NOTE = 2
    WARNING = 3
    ERROR = 4

    NAMES = {
        "DEBUG": DEBUG,
        "INFO": INFO,
        "NOTE": NOTE,
        "WARNING": WARNING,
        "ERROR": ERROR,
    }

class WXLogger:
    """Small class-level logger shared by every module on the device."""

    LEVEL = LogLevel.INFO
    PRINT_TO_CONSOLE = True
    WRITE_TO_FILE = False
    LOG_FILE_PATH = "/pwx_syslog.txt"

    COLORS = {
        LogLevel.DEBUG: "\033[90m",    # Gray
        LogLevel.INFO: "\033[94m",     # Blue
        LogLevel.NOTE: "\033[96m",     # Cyan
        LogLevel.WARNING: "\033[93m",  # Yellow
        LogLevel.ERROR: "\033[91m",    # Red
        "RESET": "\033[0m"
    }

    LEVEL_TAGS = {
        LogLevel.DEBUG: "DBUG",
        LogLevel.INFO: "INFO",
        LogLevel.NOTE: "NOTE",
        LogLevel.WARNING: "WARN",
        LogLevel.ERROR: "!ERR"
    }

    @classmethod
    def set_level(cls, level):
        """Set the minimum level; accepts a LogLevel value or its name."""
        if isinstance(level, str):
            level = LogLevel.NAMES.get(level.upper(), LogLevel.INFO)
        cls.LEVEL = level

    @classmethod
    def enable_file_logging(cls, enable=True, path=None):
        """Note: the filesystem must be remounted writable in boot.py on real hardware."""
        cls.WRITE_TO_FILE = enable
        if path:
            cls.LOG_FILE_PATH = path

    @classmethod
    def configure(cls, config):
        """Apply the logging keys of a loaded config dict."""
        cls.set_level(LogLevel.DEBUG if config.get("debug_mode") else config.get("log_level", LogLevel.INFO))
        cls.enable_file_logging(config.get("log_to_file", False), config.get("log_file"))

    @classmethod
    def _get_timestamp(cls):
        return f"{time.monotonic():>8.3f}"

    @classmethod
    def format(cls, level, module_tag, message):
        """Format: [ 123.456][INFO][CONN] Associated with HomeNet"""
        return f"[{cls._get_timestamp()}][{cls.LEVEL_TAGS[level]:<4}][{module_tag:<4}] {message}"

    @classmethod
    def _log(cls, level, module_tag, message):
        if level < cls.LEVEL:
            return

        formatted_msg = cls.format(level, module_tag, message)

        if cls.PRINT_TO_CONSOLE:
            print(f"{cls.COLORS[level]}{formatted_msg}{cls.COLORS['RESET']}")

        if cls.WRITE_TO_FILE:
            try:
                # Append and close every line so a brown-out loses at most one entry
                with open(cls.LOG_FILE_PATH, "a") as f:
                    f.write(formatted_msg + "\n")
            except OSError as e:
                # Read-only filesystem when USB is attached
                cls.WRITE_TO_FILE = False
                if cls.PRINT_TO_CONSOLE:
                    print(f"{cls.COLORS[LogLevel.ERROR]}Logger OS Error: {e}{cls.COLORS['RESET']}")

    @classmethod
    def debug(cls, tag, msg):
        cls._log(LogLevel.DEBUG, tag, msg)

    @classmethod
    def info(cls, tag, msg):
        cls._log(LogLevel.INFO, tag, msg)

    @classmethod
    def note(cls, tag, msg):
        cls._log(LogLevel.NOTE, tag, msg)

    @classmethod
    def warning(cls, tag, msg):
        cls._log(LogLevel.WARNING, tag, msg)

    @classmethod
    def error(cls, tag, msg):
        cls._log(LogLevel.ERROR, tag, msg)
