# src/windcfg/meta.py
"""Program identity, used for env vars, config file names and logger names."""

PROGRAM_DISPLAY = "Windcfg"
PROGRAM_PACKAGE = "windcfg"
PROGRAM_ENV = "WINDCFG"
PROGRAM_CONFIG = "windcfg"
