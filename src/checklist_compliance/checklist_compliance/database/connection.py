from __future__ import annotations

from dataclasses import dataclass

import mysql.connector


@dataclass
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str

    @classmethod
    def from_dict(cls, db_config: dict) -> "DBConfig":
        return cls(
            host=str(db_config["host"]),
            port=int(db_config.get("port", 3306)),
            user=str(db_config["user"]),
            password=str(db_config["password"]),
            database=str(db_config["database"]),
        )


class DatabaseConnection:
    """DB connection factory handed to repositories by reference.

    The caller owns the lifecycle: open() before use, close() when done (or use
    it as a context manager). Connections themselves are short-lived, one per
    repository operation.
    """

    def __init__(self, config: DBConfig):
        self._config = config
        self._open = False

    @property
    def is_open(self) -> bool:
        return self._open

    def open(self) -> "DatabaseConnection":
        self._open = True
        return self

    def close(self) -> None:
        self._open = False

    def __enter__(self) -> "DatabaseConnection":
        return self.open()

    def __exit__(self, *exc) -> None:
        self.close()

    def connect(self):
        if not self._open:
            raise RuntimeError("DatabaseConnection is closed")
        return mysql.connector.connect(
            host=self._config.host,
            port=int(self._config.port),
            user=self._config.user,
            password=self._config.password,
            database=self._config.database,
        )
