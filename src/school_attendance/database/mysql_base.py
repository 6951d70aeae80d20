from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

import mysql.connector

from ..core.exceptions import ConflictError, TransactionFailure
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)

DUPLICATE_ENTRY = 1062


def _rollback(conn) -> None:
    try:
        conn.rollback()
    except mysql.connector.Error as e:
        # connection already gone, the server discards the transaction
        logger.warning("Rollback failed: %s", e)


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """One connection, one transaction: commit on success, rollback on any exception.

    Driver errors are translated to ConflictError (duplicate key) or
    TransactionFailure; domain errors raised inside the block pass through
    untouched after the rollback. A failing rollback never masks the
    original error.
    """
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.IntegrityError as e:
        _rollback(conn)
        if e.errno == DUPLICATE_ENTRY:
            raise ConflictError(e.msg) from e
        logger.exception("Integrity error, transaction rolled back")
        raise TransactionFailure(e.msg) from e
    except mysql.connector.Error as e:
        _rollback(conn)
        logger.exception("Database error, transaction rolled back")
        raise TransactionFailure(e.msg) from e
    except Exception:
        _rollback(conn)
        raise
    finally:
        try:
            conn.close()
        except mysql.connector.Error as e:
            logger.warning("Closing connection failed: %s", e)


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def placeholders(count: int) -> str:
    """'%s,%s,...' for an IN (...) clause."""
    return ",".join(["%s"] * count)
