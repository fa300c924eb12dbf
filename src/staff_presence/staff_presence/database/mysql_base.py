from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, List, Optional

import mysql.connector
from mysql.connector import errorcode

from ..common.logger import get_logger
from ..core.exceptions import ConflictError, StorageUnavailableError
from .connection import DatabaseConnection

logger = get_logger(__name__)

# InnoDB reports these when two writers race on the same row
_CONFLICT_ERRNOS = {errorcode.ER_LOCK_DEADLOCK, errorcode.ER_LOCK_WAIT_TIMEOUT}


def translate_error(exc: mysql.connector.Error) -> Exception:
    """Map a driver error onto the domain taxonomy."""
    if getattr(exc, "errno", None) in _CONFLICT_ERRNOS:
        return ConflictError(f"Concurrent write collided: {exc}")
    return StorageUnavailableError(f"Storage failure: {exc}")


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """One connection, one transaction: commit on success, roll back on any error."""
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary, buffered=True)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.Error as e:
        _rollback_quietly(conn)
        translated = translate_error(e)
        if isinstance(translated, StorageUnavailableError):
            logger.error("MySQL error: %s", e)
        raise translated from e
    except Exception:
        _rollback_quietly(conn)
        raise
    finally:
        conn.close()


def _rollback_quietly(conn) -> None:
    try:
        conn.rollback()
    except mysql.connector.Error as e:
        # The original error is the one worth reporting.
        logger.debug("Rollback failed: %s", e)


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])
