from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import time, timedelta
from typing import Any, Dict, Iterator, List, Optional

import mysql.connector

from ..core.exceptions import RemoteWriteError
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Yield (conn, cursor); commit once on success, roll back on any error.

    Everything executed inside one block runs in a single transaction.
    """
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


@contextmanager
def remote_write(action: str) -> Iterator[None]:
    """Translate driver failures on write paths into RemoteWriteError."""
    try:
        yield
    except mysql.connector.Error as e:
        logger.error("%s failed: %s", action, e)
        raise RemoteWriteError(f"{action} failed: {e}") from e


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def in_clause(values: List[Any]) -> str:
    """Placeholder list for `IN (...)`; caller must pass a non-empty list."""
    return ", ".join(["%s"] * len(values))


def to_minute_of_day(value: Any) -> int:
    """Normalize a stored time value to minutes since midnight.

    Columns hold SMALLINT minutes, but legacy rows or ad-hoc queries can hand
    back what mysql-connector returns for TIME:
    - int
    - datetime.time
    - datetime.timedelta
    - string (e.g. '08:30:00')
    """

    if isinstance(value, bool):
        raise TypeError(f"Unsupported time value type: {type(value)!r}")

    if isinstance(value, int):
        return value

    if isinstance(value, time):
        return value.hour * 60 + value.minute

    if isinstance(value, timedelta):
        total_seconds = int(value.total_seconds()) % 86400
        return total_seconds // 60

    if isinstance(value, str):
        parts = value.strip().split(":")
        if len(parts) < 2:
            raise ValueError(f"Invalid time string: {value!r}")
        return int(parts[0]) * 60 + int(parts[1])

    raise TypeError(f"Unsupported time value type: {type(value)!r}")
