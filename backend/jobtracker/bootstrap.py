from __future__ import annotations

import logging

from sqlalchemy import text
from sqlalchemy.engine import Engine


logger = logging.getLogger(__name__)


def _column_exists(conn, table_name: str, column_name: str) -> bool:
    rows = conn.execute(text(f"PRAGMA table_info('{table_name}')")).fetchall()
    return any(row[1] == column_name for row in rows)


def _add_column_if_missing(conn, table_name: str, column_name: str, column_sql: str) -> None:
    if _column_exists(conn, table_name, column_name):
        return
    conn.execute(text(f"ALTER TABLE {table_name} ADD COLUMN {column_sql}"))
    logger.info("Added column %s.%s", table_name, column_name)


def run_runtime_migrations(engine: Engine) -> None:
    """Bring SQLite databases created by older builds up to the current columns."""
    if engine.dialect.name != "sqlite":
        return
    with engine.begin() as conn:
        _add_column_if_missing(conn, "job_applications", "resume_version", "resume_version VARCHAR(255)")
        _add_column_if_missing(conn, "job_applications", "cover_letter_used", "cover_letter_used BOOLEAN")
        _add_column_if_missing(conn, "job_applications", "updated_at", "updated_at DATETIME")
        _add_column_if_missing(conn, "interviews", "updated_at", "updated_at DATETIME")
        conn.execute(
            text("UPDATE job_applications SET updated_at = COALESCE(updated_at, created_at, CURRENT_TIMESTAMP)"),
        )
        conn.execute(
            text("UPDATE interviews SET updated_at = COALESCE(updated_at, created_at, CURRENT_TIMESTAMP)"),
        )
