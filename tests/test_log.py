import io
import re

import pytest

from bitmeter.log import AppLogger, LogLevel, StatusLine

_STAMP = r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2} "


def test_messages_below_level_are_dropped(tmp_path):
    path = tmp_path / "bm.log"
    logger = AppLogger("CAPTURE", LogLevel.WARN, True, str(path))
    logger.log(LogLevel.DEBUG, "quiet")
    assert not path.exists()


def test_file_line_has_timestamp_and_app_name(tmp_path):
    path = tmp_path / "bm.log"
    logger = AppLogger("CAPTURE", LogLevel.WARN, True, str(path))
    logger.log(LogLevel.WARN, "loud %d", 7)
    assert logger.to_file is True
    assert logger.is_debug() is False
    assert re.fullmatch(_STAMP + r"CAPTURE loud 7\n", path.read_text(encoding="utf-8"))


def test_file_lines_are_appended(tmp_path):
    path = tmp_path / "bm.log"
    logger = AppLogger(None, LogLevel.DEBUG, True, lambda: str(path))
    logger.log(LogLevel.INFO, "one")
    logger.log(LogLevel.ERR, "two")
    lines = path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2
    assert re.fullmatch(_STAMP + "one", lines[0])
    assert re.fullmatch(_STAMP + "two", lines[1])


def test_console_routing(capsys):
    logger = AppLogger("WEB", LogLevel.DEBUG, False, None)
    logger.log(LogLevel.INFO, "info")
    logger.log(LogLevel.ERR, "bad %s", "thing")
    captured = capsys.readouterr()
    assert captured.out == "info\n"
    assert captured.err == "bad thing\n"


def test_unwritable_file_falls_back_to_console(tmp_path, capsys):
    logger = AppLogger("CAPTURE", LogLevel.WARN, True, str(tmp_path))
    logger.log(LogLevel.WARN, "hello")
    assert logger.to_file is False
    captured = capsys.readouterr()
    assert captured.err == f"Unable to log to the file {tmp_path}, logging to stdout instead\nhello\n"


@pytest.mark.parametrize(
    "level, debug, info",
    [
        (LogLevel.DEBUG, True, True),
        (LogLevel.INFO, False, True),
        (LogLevel.WARN, False, False),
        (LogLevel.ERR, False, False),
    ],
)
def test_level_queries(level, debug, info):
    logger = AppLogger("X", level, False, None)
    assert logger.is_debug() is debug
    assert logger.is_info() is info


def test_status_line_erases_previous_message():
    stream = io.StringIO()
    status = StatusLine(stream)
    status.show("abc")
    status.show("de")
    assert stream.getvalue() == "abc" + "\b \b" * 3 + "de"


def test_status_line_reset_skips_erase():
    stream = io.StringIO()
    status = StatusLine(stream)
    status.show("abc")
    status.reset()
    status.show("de")
    assert stream.getvalue() == "abcde"