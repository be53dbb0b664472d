from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from mysql.connector import pooling

logger = logging.getLogger(__name__)


@dataclass
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str
    pool_size: int = 5

    @classmethod
    def from_dict(cls, db_config: dict, *, pool_size: int = 5) -> "DBConfig":
        return cls(
            host=str(db_config["host"]),
            port=int(db_config.get("port", 3306)),
            user=str(db_config["user"]),
            password=str(db_config["password"]),
            database=str(db_config["database"]),
            pool_size=int(pool_size),
        )


class DatabaseConnection:
    """Connection pool owned by the application container.

    Built once in create_app() and handed to every repository. The pool is
    created on first use; close() drops it so idle connections are released.
    """

    def __init__(self, config: DBConfig, *, pool_name: str = "kintai"):
        self._config = config
        self._pool_name = pool_name
        self._pool: Optional[pooling.MySQLConnectionPool] = None

    def open(self) -> None:
        if self._pool is not None:
            return
        self._pool = pooling.MySQLConnectionPool(
            pool_name=self._pool_name,
            pool_size=int(self._config.pool_size),
            host=self._config.host,
            port=int(self._config.port),
            user=self._config.user,
            password=self._config.password,
            database=self._config.database,
        )
        logger.info(
            "database pool ready: %s@%s:%s/%s (size=%s)",
            self._config.user, self._config.host, self._config.port, self._config.database, self._config.pool_size,
        )

    def connect(self):
        """Borrow a pooled connection; closing it returns it to the pool."""
        self.open()
        return self._pool.get_connection()

    def close(self) -> None:
        if self._pool is not None:
            logger.info("database pool closed")
        self._pool = None
