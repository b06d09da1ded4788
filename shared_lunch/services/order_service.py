"""Order storage and per-day aggregation queries."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, datetime

from sqlalchemy import func, select
from sqlalchemy.orm import Session, selectinload

from shared_lunch.models.menu import Dish
from shared_lunch.models.order import Order, OrderItem
from shared_lunch.services.settlement import UserTotal


class EmptyOrderError(Exception):
    """Raised when an order is submitted without items."""


class DishNotFoundError(Exception):
    """Raised when an order references an unknown dish."""

    def __init__(self, dish_id: str) -> None:
        super().__init__(dish_id)
        self.dish_id = dish_id


@dataclass(frozen=True)
class DishTotal:
    dish_id: str
    name: str
    quantity: int
    amount: int


def get_user_totals(db: Session, day: date) -> list[UserTotal]:
    """Return per-user base totals for ``day`` in order of first insertion."""
    amount = func.sum(Dish.price * OrderItem.quantity)
    first_order_id = func.min(Order.id)
    rows = db.execute(
        select(Order.user_id, amount, first_order_id)
        .join(OrderItem, OrderItem.order_id == Order.id)
        .join(Dish, Dish.id == OrderItem.dish_id)
        .where(Order.order_date == day, Order.user_id.is_not(None))
        .group_by(Order.user_id)
        .order_by(first_order_id.asc())
    ).all()
    return [UserTotal(user_id=user_id, base_total=int(total or 0)) for user_id, total, _ in rows]


def get_dish_totals(db: Session, day: date) -> list[DishTotal]:
    """Return ordered quantity and amount per dish for ``day``."""
    quantity = func.sum(OrderItem.quantity)
    rows = db.execute(
        select(Dish.id, Dish.name, quantity, func.sum(Dish.price * OrderItem.quantity))
        .join(OrderItem, OrderItem.dish_id == Dish.id)
        .join(Order, Order.id == OrderItem.order_id)
        .where(Order.order_date == day)
        .group_by(Dish.id, Dish.name)
        .order_by(Dish.name.asc())
    ).all()
    return [
        DishTotal(dish_id=dish_id, name=name, quantity=int(qty or 0), amount=int(total or 0))
        for dish_id, name, qty, total in rows
    ]


def create_order(
    db: Session,
    *,
    user_id: str,
    items: Sequence[tuple[str, int]],
    now: datetime,
) -> Order:
    """Store an order of (dish_id, quantity) pairs for the local day of ``now``."""
    if not items:
        raise EmptyOrderError

    dish_ids = {dish_id for dish_id, _ in items}
    known: set[str] = set(db.scalars(select(Dish.id).where(Dish.id.in_(dish_ids))).all())
    for dish_id, _ in items:
        if dish_id not in known:
            raise DishNotFoundError(dish_id)

    order = Order(user_id=user_id, order_date=now.date(), created_at=now, status="placed")
    order.items = [OrderItem(dish_id=dish_id, quantity=qty) for dish_id, qty in items]
    db.add(order)
    db.commit()
    return get_order(db, order.id)


def get_order(db: Session, order_id: int) -> Order | None:
    return db.scalars(
        select(Order).options(selectinload(Order.items).selectinload(OrderItem.dish)).where(Order.id == order_id)
    ).first()


def get_latest_order(db: Session) -> Order | None:
    return db.scalars(
        select(Order)
        .options(selectinload(Order.items).selectinload(OrderItem.dish))
        .order_by(Order.created_at.desc(), Order.id.desc())
        .limit(1)
    ).first()


def delete_order(db: Session, order_id: int) -> bool:
    order = db.get(Order, order_id)
    if order is None:
        return False
    db.delete(order)
    db.commit()
    return True
