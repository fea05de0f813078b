"""Writing captured traffic to the data table and compressing old rows."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterable

from .common import SECS_PER_HOUR, SECS_PER_MIN
from .data import Data
from .db import Database, DatabaseError
from .timeutil import next_hour, next_min

CONFIG_KEEP_SEC_LIMIT = "cap.keep_sec_limit"
CONFIG_KEEP_MIN_LIMIT = "cap.keep_min_limit"
CONFIG_COMPRESS_INTERVAL = "cap.compress_interval"

# Duration of a single captured row, in seconds.
PER_SECOND = 1

_SQL_INSERT = "INSERT INTO data (ts,dr,ad,dl,ul,hs) VALUES (?,?,?,?,?,?)"
_SQL_MIN_TS = "SELECT MIN(ts) AS ts FROM data WHERE dr=?"
_SQL_SELECT_FOR_COMPRESSION = (
    "SELECT ad, hs, SUM(dl) AS dl, SUM(ul) AS ul "
    "FROM (SELECT * FROM data WHERE ts<=? AND dr=?) GROUP BY ad, hs"
)
_SQL_DELETE_COMPRESSED = "DELETE FROM data WHERE ts<=? AND dr=?"

_log = logging.getLogger(__name__)


def _now() -> int:
    return int(time.time())


def _to_int64(value: int) -> int:
    """Store unsigned 64-bit counts in SQLite's signed integer column."""
    value = int(value)
    return value - 2**64 if value >= 2**63 else value


class CaptureStore:
    """Inserts traffic rows and amalgamates old short-duration rows into longer ones.

    Rows of one second older than ``cap.keep_sec_limit`` seconds become one-minute
    rows, and one-minute rows older than ``cap.keep_min_limit`` become one-hour rows.
    """

    def __init__(self, db: Database, clock: Callable[[], int] | None = None) -> None:
        self._db = db
        self._clock = _now if clock is None else clock
        self.keep_per_sec_limit = db.config_int(CONFIG_KEEP_SEC_LIMIT, False)
        self.keep_per_min_limit = db.config_int(CONFIG_KEEP_MIN_LIMIT, False)
        self.compress_interval = db.config_int(CONFIG_COMPRESS_INTERVAL, False)

    def _insert_row(self, ts: int, dr: int, ad: str | None, dl: int, ul: int, hs: str | None) -> None:
        self._db.execute(_SQL_INSERT, (ts, dr, ad, _to_int64(dl), _to_int64(ul), hs))

    def update(self, dr: int, diffs: Iterable[Data]) -> None:
        """Insert every record with duration ``dr``, all or none of them."""
        with self._db.transaction():
            for data in diffs:
                self._insert_row(data.ts, dr, data.ad, data.dl, data.ul, data.hs)

    def insert(self, data: Data) -> None:
        """Insert one record with its own duration."""
        self._insert_row(data.ts, data.dr, data.ad, data.dl, data.ul, data.hs)

    def _min_ts(self, dr: int) -> int:
        rows = self._db.select_data(_SQL_MIN_TS, (dr,))
        return rows[0].ts if rows else 0

    def _compress_rows(self, ts: int, old_dr: int, new_dr: int) -> None:
        _log.debug("compressing rows up to %d from dr=%d to dr=%d", ts, old_dr, new_dr)
        groups = self._db.select_data(_SQL_SELECT_FOR_COMPRESSION, (ts, old_dr))
        for group in groups:
            self._insert_row(ts, new_dr, group.ad, group.dl, group.ul, group.hs)
        if groups:
            self._db.execute(_SQL_DELETE_COMPRESSED, (ts, old_dr))

    def _compress_stage(
        self, keep_seconds: int, old_dr: int, new_dr: int, round_up: Callable[[int], int]
    ) -> None:
        keep_boundary = self._clock() - keep_seconds
        min_ts = self._min_ts(old_dr)
        rounded = round_up(min_ts) if min_ts != 0 else 0

        with self._db.transaction():
            while min_ts != 0 and rounded <= keep_boundary:
                self._compress_rows(rounded, old_dr, new_dr)
                previous = min_ts
                min_ts = self._min_ts(old_dr)
                if min_ts != 0:
                    if min_ts <= previous:
                        _log.error(
                            "minimum timestamp did not advance: dr=%d, previous=%d, now=%d",
                            old_dr, previous, min_ts,
                        )
                        raise DatabaseError(
                            f"compression made no progress for dr={old_dr} at ts={min_ts}"
                        )
                    rounded = round_up(min_ts)

    def compress(self) -> None:
        """Compress old per-second rows to per-minute, then per-minute to per-hour."""
        self._compress_stage(self.keep_per_sec_limit, PER_SECOND, SECS_PER_MIN, next_min)
        self._compress_stage(self.keep_per_min_limit, SECS_PER_MIN, SECS_PER_HOUR, next_hour)

    def next_compress_time(self) -> int:
        """When the next compression is due."""
        return self._clock() + self.compress_interval