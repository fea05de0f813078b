"""Default locations of the database, log file and web root for each platform."""

from __future__ import annotations

import ntpath
import os
import sys
from collections.abc import Mapping

from .common import DB_NAME, ENV_DB, LOG_NAME, OUT_DIR

_LINUX = "linux"
_MAC = "darwin"
_WINDOWS = "win32"


def _platform(system: str | None) -> str:
    name = sys.platform if system is None else system
    if name.startswith(_LINUX):
        return _LINUX
    if name in (_MAC, _WINDOWS):
        return name
    raise ValueError(f"unsupported platform: {name!r}")


def _windows_app_dir() -> str:
    base = os.environ.get("ProgramData") or r"C:\ProgramData"
    return ntpath.join(base, OUT_DIR)


def get_db_path(environ: Mapping[str, str] | None = None, system: str | None = None) -> str:
    """Return the database path, taken from BITMETER_DB if that is set."""
    env = os.environ if environ is None else environ
    value = env.get(ENV_DB)
    if value is not None:
        return value
    platform = _platform(system)
    if platform == _WINDOWS:
        return ntpath.join(_windows_app_dir(), DB_NAME)
    if platform == _MAC:
        return "/Library/Application Support/BitMeter/" + DB_NAME
    return "/var/lib/bitmeter/" + DB_NAME


def get_log_path(config_text: str | None = None, system: str | None = None) -> str:
    """Return the log file path, preferring a configured value."""
    if config_text is not None:
        return config_text
    platform = _platform(system)
    if platform == _WINDOWS:
        return ntpath.join(_windows_app_dir(), LOG_NAME)
    if platform == _MAC:
        return "/Library/Logs/" + LOG_NAME
    return "/var/log/bitmeter/" + LOG_NAME


def get_web_root_path(config_text: str | None = None, system: str | None = None) -> str:
    """Return the web server root, preferring a configured value.

    On Windows the path always ends with a backslash.
    """
    platform = _platform(system)
    if platform == _WINDOWS:
        path = config_text if config_text is not None else ntpath.join(_windows_app_dir(), "web")
        return path if path.endswith("\\") else path + "\\"
    if config_text is not None:
        return config_text
    if platform == _MAC:
        return "/Library/Application Support/BitMeter/www/"
    return "/var/www/bitmeter/"