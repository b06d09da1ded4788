"""Lightweight schema migrations for SQLite databases."""

from __future__ import annotations

import logging

from sqlalchemy import text
from sqlalchemy.engine import Connection, Engine

logger = logging.getLogger(__name__)


def _sqlite_column_names(connection: Connection, table_name: str) -> set[str]:
    """Return column names for a SQLite table using PRAGMA table_info."""
    rows = connection.execute(text(f"PRAGMA table_info({table_name});")).mappings().all()
    return {str(row["name"]) for row in rows}


def _sqlite_index_names(connection: Connection, table_name: str) -> set[str]:
    """Return index names for a SQLite table using PRAGMA index_list."""
    rows = connection.execute(text(f"PRAGMA index_list({table_name});")).mappings().all()
    return {str(row["name"]) for row in rows}


def ensure_sqlite_schema(engine: Engine) -> None:
    """Add per-user and per-day columns to orders tables created before they existed."""
    if engine.dialect.name != "sqlite":
        return

    with engine.begin() as connection:
        table_rows = connection.execute(text("SELECT name FROM sqlite_master WHERE type='table';")).all()
        table_names: set[str] = {str(row[0]) for row in table_rows}
        if "orders" not in table_names:
            return

        orders_columns = _sqlite_column_names(connection, "orders")
        if "user_id" not in orders_columns:
            connection.execute(text("ALTER TABLE orders ADD COLUMN user_id VARCHAR(128)"))
            logger.info("[MIGRATION] Added orders.user_id")

        if "order_date" not in orders_columns:
            connection.execute(text("ALTER TABLE orders ADD COLUMN order_date DATE"))
            connection.execute(
                text("UPDATE orders SET order_date = date(created_at) WHERE order_date IS NULL AND created_at IS NOT NULL")
            )
            logger.info("[MIGRATION] Added orders.order_date")

        if "ix_orders_order_date_user" not in _sqlite_index_names(connection, "orders"):
            connection.execute(text("CREATE INDEX ix_orders_order_date_user ON orders (order_date, user_id)"))
