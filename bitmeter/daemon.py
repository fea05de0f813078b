"""Command that captures network traffic into the database until it is stopped."""

from __future__ import annotations

import argparse
import signal
import sys
import time

from .capture import POLL_INTERVAL, Capture, CaptureError
from .common import CONFIG_LOG_PATH, VERSION
from .db import Database, DatabaseError, open_db
from .log import AppLogger, LogLevel
from .net import PROC_NET_DEV, read_adapter_data
from .paths import get_log_path


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bitmeter-capture",
        description="Record network traffic in the BitMeter database until interrupted.",
    )
    parser.add_argument(
        "--stats",
        default=PROC_NET_DEV,
        help="interface statistics file to sample (default: %(default)s)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Capture until SIGINT or SIGTERM arrives or storing fails; return the exit status."""
    args = _build_parser().parse_args(argv)

    if sys.platform == "win32":
        print(f"BitMeter OS v{VERSION}")
        print("Capturing... (Ctrl-C to abort)")

    opened: list[Database] = []

    def log_path() -> str:
        configured = None
        if opened and opened[0].is_open:
            try:
                configured = opened[0].config_text(CONFIG_LOG_PATH, True)
            except DatabaseError:
                configured = None
        return get_log_path(configured)

    logger = AppLogger("CAPTURE", LogLevel.WARN, True, log_path)

    try:
        db = open_db(None, logger)
    except DatabaseError:
        return 1
    opened.append(db)

    try:
        capture = Capture(db, lambda: read_adapter_data(args.stats), None, logger)
    except DatabaseError:
        db.close()
        return 1

    stopping = False

    def request_stop(signum: int, frame: object) -> None:
        nonlocal stopping
        stopping = True

    previous = {sig: signal.signal(sig, request_stop) for sig in (signal.SIGINT, signal.SIGTERM)}
    try:
        while not stopping:
            time.sleep(POLL_INTERVAL)
            try:
                capture.process()
            except CaptureError as exc:
                logger.log(LogLevel.ERR, "%s", exc)
                stopping = True
        capture.shutdown()
    finally:
        for sig, handler in previous.items():
            signal.signal(sig, handler)
    return 0


if __name__ == "__main__":
    sys.exit(main())