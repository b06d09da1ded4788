"""Tests for lightweight SQLite schema migrations."""

from datetime import date
from pathlib import Path

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from shared_lunch.db.base import Base
from shared_lunch.db.migrations import ensure_sqlite_schema
from shared_lunch.models import Category, Dish, OrderItem
from shared_lunch.services.order_service import get_user_totals


def _build_test_engine(db_file: Path) -> Engine:
    return create_engine(
        f"sqlite:///{db_file}",
        connect_args={"check_same_thread": False},
    )


def _create_legacy_orders_table(engine: Engine) -> None:
    with engine.begin() as connection:
        connection.execute(
            text(
                """
                CREATE TABLE orders (
                    id INTEGER NOT NULL,
                    created_at DATETIME NOT NULL,
                    status VARCHAR(32) NOT NULL,
                    PRIMARY KEY (id)
                )
                """
            )
        )
        connection.execute(
            text("INSERT INTO orders (id, created_at, status) VALUES (1, '2025-03-14 09:15:00.000000', 'placed')")
        )


def test_migration_adds_user_and_day_columns(tmp_path: Path) -> None:
    engine = _build_test_engine(tmp_path / "legacy.db")
    _create_legacy_orders_table(engine)

    ensure_sqlite_schema(engine)

    with engine.connect() as connection:
        columns = {row[1] for row in connection.execute(text("PRAGMA table_info(orders)")).all()}
        indexes = {row[1] for row in connection.execute(text("PRAGMA index_list(orders)")).all()}
        order_date = connection.execute(text("SELECT order_date FROM orders WHERE id = 1")).scalar_one()

    assert {"user_id", "order_date"} <= columns
    assert "ix_orders_order_date_user" in indexes
    assert order_date == "2025-03-14"


def test_migration_is_idempotent_and_keeps_orm_queries_working(tmp_path: Path) -> None:
    engine = _build_test_engine(tmp_path / "legacy_orm.db")
    _create_legacy_orders_table(engine)
    ensure_sqlite_schema(engine)
    ensure_sqlite_schema(engine)
    Base.metadata.create_all(bind=engine)

    with engine.begin() as connection:
        connection.execute(text("UPDATE orders SET user_id = '@legacy' WHERE id = 1"))

    with Session(engine) as db:
        db.add(Category(id="soups", name="Soups"))
        db.add(Dish(id="soup-1", name="Minestrone", description="", price=420, category_id="soups"))
        db.add(OrderItem(order_id=1, dish_id="soup-1", quantity=2))
        db.commit()

        totals = get_user_totals(db, date(2025, 3, 14))

    assert [(row.user_id, row.base_total) for row in totals] == [("@legacy", 840)]


def test_migration_skips_fresh_schema(tmp_path: Path) -> None:
    engine = _build_test_engine(tmp_path / "fresh.db")
    Base.metadata.create_all(bind=engine)

    ensure_sqlite_schema(engine)

    with engine.connect() as connection:
        indexes = {row[1] for row in connection.execute(text("PRAGMA index_list(orders)")).all()}
    assert "ix_orders_order_date_user" in indexes
