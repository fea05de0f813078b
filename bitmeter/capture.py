"""The capture cycle: sample adapter counters, work out deltas and store them."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterable

from .common import CONFIG_CAP_LOG_LEVEL, CONFIG_DB_WRITE_INTERVAL
from .data import Data
from .db import Database, DatabaseError
from .log import AppLogger, LogLevel
from .store import CaptureStore

POLL_INTERVAL = 1

_log = logging.getLogger(__name__)


class CaptureError(Exception):
    """Raised when captured data cannot be stored and capturing should stop."""


def _now() -> int:
    return int(time.time())


def extract_diffs(ts: int, old: Iterable[Data] | None, new: Iterable[Data] | None) -> list[Data]:
    """Return the increase in counters for each adapter present in both samples.

    Adapters are matched by address. Adapters whose counters did not change are
    left out, and so are those whose counters went down (they wrapped around).
    """
    new_list = list(new or ())
    diffs = []
    for before in old or ():
        after = next((item for item in new_list if item.ad == before.ad), None)
        if after is None:
            continue
        if after.dl >= before.dl and after.ul >= before.ul:
            dl = after.dl - before.dl
            ul = after.ul - before.ul
            if dl > 0 or ul > 0:
                diffs.append(Data(ts=ts, dl=dl, ul=ul, ad=before.ad, hs=before.hs))
        else:
            _log.warning("Values wrapped around for adapter %s", before.ad)
    return diffs


class Capture:
    """Runs one sampling step at a time against an open database.

    ``source`` returns the current counters of every adapter. Deltas are held
    in ``pending`` until ``write_interval`` steps have been taken, then written.
    """

    def __init__(
        self,
        db: Database,
        source: Callable[[], list[Data]],
        clock: Callable[[], int] | None = None,
        logger: AppLogger | None = None,
    ) -> None:
        self.db = db
        self._source = source
        self._clock = _now if clock is None else clock
        self.logger = AppLogger("CAPTURE", LogLevel.WARN) if logger is None else logger

        level = db.config_int(CONFIG_CAP_LOG_LEVEL, True)
        if level > 0:
            self.logger.level = level
        db.check_version()

        self.store = CaptureStore(db, self._clock)
        try:
            self.store.compress()
        except DatabaseError as exc:
            self.logger.log(LogLevel.ERR, "Database compression failed: %s", exc)

        self.previous: list[Data] = self._read()
        self._compress_at = self.store.next_compress_time()
        self.write_interval = max(1, db.config_int(CONFIG_DB_WRITE_INTERVAL, True))
        self.pending: list[Data] = []
        self._unwritten_count = 0

    def _read(self) -> list[Data]:
        try:
            return list(self._source())
        except (OSError, ValueError) as exc:
            self.logger.log(LogLevel.ERR, "Unable to read adapter data: %s", exc)
            return []

    def _log_data(self, diffs: list[Data]) -> None:
        if self.logger.is_debug():
            for data in diffs:
                self.logger.log(LogLevel.DEBUG, "%d DL=%d UL=%d %s", self._clock(), data.dl, data.ul, data.ad)

    def _write_pending(self) -> None:
        diffs, self.pending = self.pending, []
        try:
            self.store.update(POLL_INTERVAL, diffs)
        except DatabaseError as exc:
            raise CaptureError(f"unable to write traffic data: {exc}") from exc
        finally:
            self._log_data(diffs)

    def process(self) -> None:
        """Take one sample, and write and compress when they are due."""
        ts = self._clock()
        current = self._read()
        self.pending.extend(extract_diffs(ts, self.previous, current))
        self.previous = current

        self._unwritten_count += 1
        if self._unwritten_count < self.write_interval:
            return

        self._write_pending()
        if ts > self._compress_at:
            try:
                self.store.compress()
            except DatabaseError as exc:
                raise CaptureError(f"unable to compress the database: {exc}") from exc
            self._compress_at = self.store.next_compress_time()
        self._unwritten_count = 0

    def shutdown(self) -> None:
        """Write whatever is pending and close the database."""
        try:
            self._write_pending()
        except CaptureError as exc:
            self.logger.log(LogLevel.ERR, "%s", exc)
        self.db.close()