"""Access to the SQLite database shared by the capture and reporting tools."""

from __future__ import annotations

import os
import re
import sqlite3
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from typing import Any

from .common import CONFIG_DB_VERSION, DB_VERSION, IN_MEMORY_DB
from .data import Data
from .log import AppLogger, LogLevel
from .paths import get_db_path

BUSY_WAIT_SECONDS = 30.0

_SQL_SELECT_CONFIG = "SELECT value FROM config WHERE key=?"
_SQL_INSERT_CONFIG = "INSERT INTO config (key, value) VALUES (?, ?)"
_SQL_UPDATE_CONFIG = "UPDATE config SET key=?, value=? WHERE key=?"
_SQL_DELETE_CONFIG = "DELETE FROM config WHERE key=?"

_INT_PREFIX = re.compile(r"[ \t\n\v\f\r]*([+-]?[0-9]+)")
_MISSING = object()


class DatabaseError(Exception):
    """Raised when the database cannot be opened or a statement fails."""


def _as_int(value: Any) -> int:
    """Read a column value as an integer, the way SQLite converts it."""
    if value is None:
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    if isinstance(value, bytes):
        value = value.decode("utf-8", errors="replace")
    match = _INT_PREFIX.match(str(value))
    return int(match.group(1)) if match else 0


def _as_text(value: Any) -> str | None:
    """Read a column value as text, ``None`` for NULL."""
    if value is None:
        return None
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return str(value)


class Database:
    """A connection to the database, with helpers for data rows and config values."""

    def __init__(self, connection: sqlite3.Connection, logger: AppLogger | None = None) -> None:
        # Transactions are begun and ended explicitly.
        connection.isolation_level = None
        self._conn: sqlite3.Connection | None = connection
        self._logger = logger
        self._in_transaction = False
        self.path: str | None = None

    @property
    def is_open(self) -> bool:
        return self._conn is not None

    def _log(self, level: int, msg: str, *args: object) -> None:
        if self._logger is not None:
            self._logger.log(level, msg, *args)

    def _connection(self) -> sqlite3.Connection:
        if self._conn is None:
            raise DatabaseError("the database is not open")
        return self._conn

    def close(self) -> None:
        """Close the connection; closing twice does nothing."""
        if self._conn is not None:
            self._conn.close()
            self._conn = None
            self._in_transaction = False

    def __enter__(self) -> Database:
        return self

    def __exit__(self, exc_type: object, exc: object, tb: object) -> None:
        self.close()

    def _finish(self, sql: str, action: str) -> None:
        try:
            self._connection().execute(sql)
        except sqlite3.Error as exc:
            self._log(LogLevel.ERR, "Unable to %s transaction. msg=%s", action, exc)
            raise DatabaseError(f"unable to {action} transaction: {exc}") from exc
        finally:
            self._in_transaction = False

    @contextmanager
    def transaction(self, immediate: bool = False) -> Iterator[Database]:
        """Run the block in a transaction, committed on success and rolled back on error.

        Transactions do not nest.
        """
        conn = self._connection()
        if self._in_transaction:
            raise DatabaseError("nested transactions are not supported")
        try:
            conn.execute("BEGIN IMMEDIATE" if immediate else "BEGIN")
        except sqlite3.Error as exc:
            self._log(LogLevel.ERR, "Unable to begin new transaction. msg=%s", exc)
            raise DatabaseError(f"unable to begin transaction: {exc}") from exc
        self._in_transaction = True
        try:
            yield self
        except BaseException:
            self._finish("ROLLBACK", "rollback")
            raise
        self._finish("COMMIT", "commit")

    @staticmethod
    def _data_for_row(names: Sequence[str], row: Sequence[Any]) -> Data:
        data = Data()
        for name, value in zip(names, row):
            if name in ("ts", "dr", "dl", "ul"):
                setattr(data, name, _as_int(value))
            elif name in ("ad", "hs"):
                setattr(data, name, _as_text(value))
        return data

    def select_data(self, sql: str, params: Sequence[Any] = ()) -> list[Data]:
        """Run a SELECT and return a Data record for each row.

        Columns are matched by name (ts, dr, dl, ul, ad, hs); others are ignored.
        """
        conn = self._connection()
        try:
            cursor = conn.execute(sql, tuple(params))
            names = [column[0] for column in cursor.description or ()]
            rows = cursor.fetchall()
        except sqlite3.Error as exc:
            self._log(LogLevel.ERR, "Unable to run select '%s' error=%s", sql, exc)
            raise DatabaseError(f"select failed: {exc}") from exc
        return [self._data_for_row(names, row) for row in rows]

    def execute(self, sql: str, params: Sequence[Any] = ()) -> int:
        """Run a statement that returns no rows, returning the number of rows changed."""
        conn = self._connection()
        try:
            cursor = conn.execute(sql, tuple(params))
        except sqlite3.Error as exc:
            self._log(LogLevel.ERR, "runUpdate() failed, sql='%s' error=%s", sql, exc)
            raise DatabaseError(f"statement failed: {exc}") from exc
        return cursor.rowcount

    def _config_value(self, key: str, quiet: bool) -> Any:
        conn = self._connection()
        try:
            row = conn.execute(_SQL_SELECT_CONFIG, (key,)).fetchone()
        except sqlite3.Error as exc:
            raise DatabaseError(f"unable to read config value for {key!r}: {exc}") from exc
        if row is None:
            if not quiet:
                self._log(LogLevel.ERR, "Unable to retrieve config value for '%s'", key)
            return _MISSING
        return row[0]

    def config_int(self, key: str, quiet: bool = False) -> int:
        """Return a config value as an integer, or -1 if there is none."""
        value = self._config_value(key, quiet)
        return -1 if value is _MISSING else _as_int(value)

    def config_text(self, key: str, quiet: bool = False) -> str | None:
        """Return a config value as text, or ``None`` if there is none."""
        value = self._config_value(key, quiet)
        return None if value is _MISSING else _as_text(value)

    def _set_config(self, key: str, value: Any) -> None:
        if self._config_value(key, True) is _MISSING:
            self.execute(_SQL_INSERT_CONFIG, (key, value))
        else:
            self.execute(_SQL_UPDATE_CONFIG, (key, value, key))

    def set_config_int(self, key: str, value: int) -> None:
        """Add or replace an integer config value."""
        self._set_config(key, int(value))

    def set_config_text(self, key: str, value: str) -> None:
        """Add or replace a text config value."""
        self._set_config(key, value)

    def remove_config(self, key: str) -> None:
        """Delete a config value if it exists."""
        self.execute(_SQL_DELETE_CONFIG, (key,))

    def db_version(self) -> int:
        """Return the schema version; databases without one are version 1."""
        version = self.config_int(CONFIG_DB_VERSION, True)
        return 1 if version <= 0 else version

    def check_version(self) -> None:
        """Close the database and raise if its version is not the one expected."""
        version = self.db_version()
        if version != DB_VERSION:
            self.close()
            where = self.path if self.path is not None else "the database"
            message = (
                f"Bad database version detected. This application requires a database at "
                f"version {DB_VERSION} but the file {where} has version {version}"
            )
            self._log(LogLevel.ERR, "%s", message)
            raise DatabaseError(message)
        self._log(LogLevel.DEBUG, "DB version check ok, level is %d", version)


def open_db(path: str | os.PathLike[str] | None = None, logger: AppLogger | None = None) -> Database:
    """Open the database at ``path``, or at the default location if it is ``None``.

    A file database must already exist.
    """
    db_path = get_db_path() if path is None else os.fspath(path)
    if db_path != IN_MEMORY_DB and not os.path.exists(db_path):
        if logger is not None:
            logger.log(LogLevel.ERR, "The database file %s does not exist", db_path)
        raise DatabaseError(f"the database file {db_path} does not exist")
    try:
        connection = sqlite3.connect(db_path, timeout=BUSY_WAIT_SECONDS, isolation_level=None)
    except sqlite3.Error as exc:
        if logger is not None:
            logger.log(LogLevel.ERR, "Unable to open database %s error=%s", db_path, exc)
        raise DatabaseError(f"unable to open database {db_path}: {exc}") from exc
    database = Database(connection, logger)
    database.path = db_path
    return database