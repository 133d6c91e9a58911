"""Schema and demo-data setup for a fresh MySQL database."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

import mysql.connector

from .connection import DBConfig

logger = logging.getLogger(__name__)

DEMO_EMPLOYEES = [
    ("Admin Demo", "admin@example.com", "admin"),
    ("Demo User", "demo@example.com", "employee"),
]


@contextmanager
def _session(config: DBConfig, *, with_database: bool = True):
    conn = mysql.connector.connect(**config.connect_kwargs(with_database=with_database))
    try:
        yield conn.cursor()
        conn.commit()
    finally:
        conn.close()


def _iter_sql_statements(sql: str) -> Iterator[str]:
    # schema.sql keeps one statement per ';'-terminated line group, with '--' line comments
    buf: list[str] = []
    for line in sql.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("--"):
            continue
        buf.append(line)
        if stripped.endswith(";"):
            yield "\n".join(buf).strip().rstrip(";")
            buf = []
    if buf:
        yield "\n".join(buf).strip()


def _targets_other_database(stmt: str) -> bool:
    head = " ".join(stmt.split()[:2]).upper()
    return head.startswith("USE ") or head == "CREATE DATABASE"


def ensure_database_exists(db_config: dict) -> None:
    config = DBConfig.from_settings(db_config)
    with _session(config, with_database=False) as cur:
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{config.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)

    schema_path = Path(schema_path)
    statements = [
        s for s in _iter_sql_statements(schema_path.read_text(encoding="utf-8")) if not _targets_other_database(s)
    ]
    with _session(DBConfig.from_settings(db_config)) as cur:
        for stmt in statements:
            cur.execute(stmt)
    logger.info("schema applied from %s (%d statements)", schema_path, len(statements))


def ensure_demo_employees(db_config: dict) -> None:
    with _session(DBConfig.from_settings(db_config)) as cur:
        cur.executemany(
            """
            INSERT INTO employees(name, email, role)
            VALUES(%s,%s,%s)
            ON DUPLICATE KEY UPDATE name=VALUES(name), role=VALUES(role)
            """,
            DEMO_EMPLOYEES,
        )
    logger.info("demo employees ready (%d)", len(DEMO_EMPLOYEES))


def list_tables(db_config: dict) -> list[str]:
    with _session(DBConfig.from_settings(db_config)) as cur:
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
