from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import Optional

from mysql.connector import errors, pooling

from ..core.exceptions import TransactionFailure

logger = logging.getLogger(__name__)


@dataclass
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str
    pool_size: int = 10
    acquire_timeout: float = 2.0

    @classmethod
    def from_dict(cls, db_config: dict) -> "DBConfig":
        return cls(
            host=str(db_config["host"]),
            port=int(db_config.get("port", 3306)),
            user=str(db_config["user"]),
            password=str(db_config["password"]),
            database=str(db_config["database"]),
            pool_size=int(db_config.get("pool_size", 10)),
            acquire_timeout=float(db_config.get("acquire_timeout", 2.0)),
        )


class DatabaseConnection:
    """Pooled connection factory, owned by the container and injected into repositories.

    The pool is created on first use so the app can start without a reachable
    database. connect() hands out pooled connections; closing one returns it
    to the pool.
    """

    _RETRY_INTERVAL = 0.05

    def __init__(self, config: DBConfig):
        self._config = config
        self._pool: Optional[pooling.MySQLConnectionPool] = None
        self._lock = threading.Lock()

    @property
    def config(self) -> DBConfig:
        return self._config

    def _get_pool(self) -> pooling.MySQLConnectionPool:
        with self._lock:
            if self._pool is None:
                logger.info(
                    "Creating connection pool %s@%s:%s/%s (size=%s)",
                    self._config.user,
                    self._config.host,
                    self._config.port,
                    self._config.database,
                    self._config.pool_size,
                )
                self._pool = pooling.MySQLConnectionPool(
                    pool_name="school_attendance",
                    pool_size=int(self._config.pool_size),
                    host=self._config.host,
                    port=int(self._config.port),
                    user=self._config.user,
                    password=self._config.password,
                    database=self._config.database,
                    connection_timeout=max(1, int(self._config.acquire_timeout)),
                )
            return self._pool

    def connect(self):
        """Borrow a connection, failing fast once acquire_timeout has elapsed."""
        try:
            pool = self._get_pool()
        except errors.Error as e:
            raise TransactionFailure(f"Database unavailable: {e.msg}") from e

        deadline = time.monotonic() + float(self._config.acquire_timeout)
        while True:
            try:
                return pool.get_connection()
            except errors.PoolError as e:
                if time.monotonic() >= deadline:
                    logger.error("Connection pool exhausted after %.1fs", self._config.acquire_timeout)
                    raise TransactionFailure("Connection pool exhausted") from e
                time.sleep(self._RETRY_INTERVAL)
            except errors.Error as e:
                raise TransactionFailure(f"Database unavailable: {e.msg}") from e
