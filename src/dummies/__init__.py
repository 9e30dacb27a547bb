"""
Dummy hardware modules for running without the real peripherals.

These drop-in replacements mirror the real manager interfaces but perform
no hardware I/O. They are injected via sys.modules in code.py when a
hardware feature is disabled in config.json hardware_features, and are
used by the tests as collaborators.
"""
