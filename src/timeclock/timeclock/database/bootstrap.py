"""Create the database and apply ``database/schema.sql`` (idempotent)."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable

from .connection import DatabaseConnection, DBConfig

logger = logging.getLogger(__name__)

_DB_SELECTION = re.compile(r"(?im)^\s*(CREATE\s+DATABASE|USE)\b.*?;\s*$")


def iter_sql_statements(sql: str) -> Iterable[str]:
    """Split a script on ';' outside quotes, dropping ``--`` comment lines."""
    buf: list[str] = []
    quote: str | None = None
    escaped = False
    body = "\n".join(line for line in sql.splitlines() if not line.lstrip().startswith("--"))

    for ch in body:
        if escaped:
            escaped = False
        elif quote and ch == "\\":
            escaped = True
        elif ch in "'\"":
            quote = ch if quote is None else (None if quote == ch else quote)
        elif ch == ";" and quote is None:
            stmt = "".join(buf).strip()
            buf = []
            if stmt:
                yield stmt
            continue
        buf.append(ch)

    if "".join(buf).strip():
        yield "".join(buf).strip()


def ensure_database_exists(config: DBConfig) -> None:
    with DatabaseConnection(config).cursor(dictionary=False, with_database=False) as cur:
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{config.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    config = DBConfig.from_dict(db_config)
    ensure_database_exists(config)

    # the configured database wins over any CREATE DATABASE / USE in the script
    sql = _DB_SELECTION.sub("", Path(schema_path).read_text(encoding="utf-8"))
    with DatabaseConnection(config).cursor(dictionary=False) as cur:
        for stmt in iter_sql_statements(sql):
            cur.execute(stmt)
    logger.info("Applied %s to %s", Path(schema_path).name, config.describe())


def list_tables(db_config: dict) -> list[str]:
    with DatabaseConnection(DBConfig.from_dict(db_config)).cursor(dictionary=False) as cur:
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
