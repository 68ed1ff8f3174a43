from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

import mysql.connector


@dataclass(frozen=True)
class DBConfig:
    host: str = "localhost"
    port: int = 3306
    user: str = "root"
    password: str = ""
    database: str = "payroll_db"

    @classmethod
    def from_dict(cls, db_config: dict) -> "DBConfig":
        """Build from a settings ``DB_CONFIG`` dict; missing keys keep the defaults."""
        known = {k: db_config[k] for k in ("host", "user", "password", "database") if db_config.get(k) is not None}
        if db_config.get("port") is not None:
            known["port"] = int(db_config["port"])
        return cls(**known)

    def connect_kwargs(self, *, with_database: bool = True) -> Dict[str, Any]:
        kwargs: Dict[str, Any] = {
            "host": self.host,
            "port": self.port,
            "user": self.user,
            "password": self.password,
            "use_pure": True,
        }
        if with_database:
            kwargs["database"] = self.database
        return kwargs


class DatabaseConnection:
    """Hands out a fresh mysql-connector connection per unit of work."""

    def __init__(self, config: DBConfig):
        self.config = config

    @classmethod
    def from_settings(cls, db_config: dict) -> "DatabaseConnection":
        return cls(DBConfig.from_dict(db_config))

    def connect(self, *, with_database: bool = True):
        return mysql.connector.connect(**self.config.connect_kwargs(with_database=with_database))

    def describe(self) -> str:
        return f"{self.config.user}@{self.config.host}:{self.config.port}/{self.config.database}"
