from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Optional

import mysql.connector


@dataclass(frozen=True)
class DBConfig:
    host: str = "localhost"
    port: int = 3306
    user: str = "root"
    password: str = ""
    database: str = "timeclock_db"

    @classmethod
    def from_dict(cls, values: dict) -> "DBConfig":
        base = cls()
        return cls(
            host=str(values.get("host") or base.host),
            port=int(values.get("port") or base.port),
            user=str(values.get("user") or base.user),
            password=str(values.get("password") or ""),
            database=str(values.get("database") or base.database),
        )

    def describe(self) -> str:
        return f"{self.user}@{self.host}:{self.port}/{self.database}"

    def connect_args(self, *, with_database: bool = True) -> dict:
        args = {
            "host": self.host,
            "port": self.port,
            "user": self.user,
            "password": self.password,
            # punched_at is stored as naive UTC
            "time_zone": "+00:00",
        }
        if with_database:
            args["database"] = self.database
        return args


class DatabaseConnection:
    """Process-wide MySQL connection factory.

    Each ``cursor()`` block opens a short-lived connection and runs as one
    transaction: committed on success, rolled back if the block raises.
    """

    _instance: Optional["DatabaseConnection"] = None

    def __init__(self, config: DBConfig):
        self.config = config

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        if cls._instance is None or cls._instance.config != config:
            cls._instance = cls(config)
        return cls._instance

    def connect(self, *, with_database: bool = True):
        return mysql.connector.connect(**self.config.connect_args(with_database=with_database))

    @contextmanager
    def cursor(self, *, dictionary: bool = True, with_database: bool = True) -> Iterator:
        conn = self.connect(with_database=with_database)
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield cur
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            cur.close()
            conn.close()
