"""Formatting and parsing helpers shared by the capture and reporting tools."""

from __future__ import annotations

import re
import struct
import time

VERSION = "0.7.6.1"
DB_VERSION = 7

DB_NAME = "bitmeter.db"
LOG_NAME = "bitmeter.log"
OUT_DIR = "BitMeterOS"
IN_MEMORY_DB = ":memory:"
ENV_DB = "BITMETER_DB"

CONFIG_DB_VERSION = "db.version"
CONFIG_LOG_PATH = "cap.logpath"
CONFIG_CAP_LOG_LEVEL = "cap.loglevel"
CONFIG_WEB_LOG_LEVEL = "web.loglevel"
CONFIG_WEB_PORT = "web.port"
CONFIG_WEB_DIR = "web.dir"
CONFIG_WEB_MONITOR_INTERVAL = "web.monitor_interval"
CONFIG_WEB_SUMMARY_INTERVAL = "web.summary_interval"
CONFIG_WEB_HISTORY_INTERVAL = "web.history_interval"
CONFIG_WEB_SERVER_NAME = "web.server_name"
CONFIG_WEB_COLOUR_DL = "web.colour_dl"
CONFIG_WEB_COLOUR_UL = "web.colour_ul"
CONFIG_WEB_ALLOW_REMOTE = "web.allow_remote"
CONFIG_WEB_RSS_HOST = "web.rss.host"
CONFIG_WEB_RSS_FREQ = "web.rss.freq"
CONFIG_WEB_RSS_ITEMS = "web.rss.items"
CONFIG_DB_WRITE_INTERVAL = "cap.write_interval"

ALLOW_LOCAL_CONNECT_ONLY = 0
ALLOW_REMOTE_CONNECT = 1
ALLOW_REMOTE_ADMIN = 2

SECS_PER_MIN = 60
SECS_PER_HOUR = 60 * 60
MAC_ADDR_LEN = 6

DL_FLAG = 1
UL_FLAG = 2

BW_INT_MAX = 2**64 - 1
_LONG_MIN = -(2**63)
_LONG_MAX = 2**63 - 1

# (abbreviated, full) unit names, one per power of the base
_UNITS = (
    ("B ", "bytes"),
    ("kB", "kilobytes"),
    ("MB", "megabytes"),
    ("GB", "gigabytes"),
    ("TB", "terabytes"),
    ("PB", "petabytes"),
    ("EB", "exabytes"),
)

_NUMBER_RE = re.compile(r"[ \t\n\v\f\r]*([+-]?)([0-9]+)")


def _single(value: float) -> float:
    """Round a value to single precision."""
    return struct.unpack("f", struct.pack("f", value))[0]


def format_amount(amount: int, binary: bool, abbrev: bool) -> str:
    """Format a byte count with two decimals and a unit.

    Powers of 1024 are used when ``binary`` is true, powers of 1000 otherwise;
    ``abbrev`` selects short unit names.
    """
    base = 1024 if binary else 1000
    power = 0
    while power < len(_UNITS) - 1 and amount >= base ** (power + 1):
        power += 1
    short, full = _UNITS[power]
    # The division is carried out at single precision.
    value = _single(_single(amount) / _single(base**power))
    return f"{value:.2f} {short if abbrev else full}"


def to_time(ts: int) -> str:
    """Return the local time of day of a timestamp as HH:MM:SS."""
    return time.strftime("%H:%M:%S", time.localtime(ts))


def to_date(ts: int) -> str:
    """Return the local date of a timestamp as yyyy-mm-dd."""
    cal = time.localtime(ts)
    return f"{cal.tm_year:04d}-{cal.tm_mon:02d}-{cal.tm_mday:02d}"


def make_hex_string(data: bytes) -> str:
    """Return the bytes as an upper-case hex string."""
    return bytes(data).hex().upper()


def _parse_number(txt: str | None) -> tuple[bool, int] | None:
    if txt is None:
        return None
    match = _NUMBER_RE.fullmatch(txt)
    if match is None:
        return None
    return match.group(1) == "-", int(match.group(2))


def str_to_bw_int(txt: str | None, default: int) -> int:
    """Parse an unsigned 64-bit decimal, returning ``default`` if it is not one."""
    parsed = _parse_number(txt)
    if parsed is None:
        return default
    negative, value = parsed
    if value > BW_INT_MAX:
        return BW_INT_MAX
    return (-value) % 2**64 if negative else value


def str_to_long(txt: str | None, default: int) -> int:
    """Parse a signed decimal, returning ``default`` if it is not one."""
    parsed = _parse_number(txt)
    if parsed is None:
        return default
    negative, value = parsed
    value = -value if negative else value
    return max(_LONG_MIN, min(_LONG_MAX, value))


def str_to_int(txt: str | None, default: int) -> int:
    """Parse a decimal and narrow it to a signed 32-bit value."""
    value = str_to_long(txt, default)
    return (value + 2**31) % 2**32 - 2**31