"""Order endpoints."""

from decimal import ROUND_HALF_UP, Decimal
from fractions import Fraction

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from shared_lunch.db.session import get_db
from shared_lunch.models.order import Order
from shared_lunch.schemas.order import (
    DishTotalRead,
    OrderCreate,
    OrderDeleted,
    OrderRead,
    PersonalTodayResponse,
    SettlementLineRead,
    SettlementSummaryRead,
)
from shared_lunch.services.order_service import (
    DishNotFoundError,
    EmptyOrderError,
    create_order,
    delete_order,
    get_dish_totals,
    get_latest_order,
    get_user_totals,
)
from shared_lunch.services.settings_service import get_order_settings
from shared_lunch.services.settlement import settle
from shared_lunch.utils import time as time_utils

router: APIRouter = APIRouter()

CENT: Decimal = Decimal("0.01")


def _money(value: Fraction) -> Decimal:
    return (Decimal(value.numerator) / Decimal(value.denominator)).quantize(CENT, rounding=ROUND_HALF_UP)


@router.post("", response_model=OrderRead, status_code=status.HTTP_201_CREATED)
def place_order(payload: OrderCreate, db: Session = Depends(get_db)) -> Order:
    """Store an order for the current local day."""
    try:
        return create_order(
            db,
            user_id=payload.user_id.strip(),
            items=[(item.dish_id, item.quantity) for item in payload.items],
            now=time_utils.local_now(),
        )
    except EmptyOrderError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="items are required") from exc
    except DishNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Dish not found: {exc.dish_id}") from exc


@router.get("/latest", response_model=OrderRead | None)
def latest_order(db: Session = Depends(get_db)) -> Order | None:
    return get_latest_order(db)


@router.get("/personal-today", response_model=PersonalTodayResponse)
def personal_today(db: Session = Depends(get_db)) -> PersonalTodayResponse:
    """Per-user amounts owed for today's shared order under current settings."""
    today = time_utils.local_today()
    order_settings = get_order_settings(db)
    settlement = settle(
        get_user_totals(db, today),
        discount_percent=order_settings.discount_percent,
        delivery_fee=order_settings.delivery_fee,
    )
    summary = settlement.summary
    return PersonalTodayResponse(
        day=today,
        summary=SettlementSummaryRead(
            base_total=_money(summary.base_total),
            discount_percent=_money(summary.discount_percent),
            discount_amount=summary.discount_amount,
            delivery_fee=_money(summary.delivery_fee),
            final_total=_money(summary.final_total),
            rounding_drift=_money(summary.rounding_drift),
        ),
        users=[
            SettlementLineRead(
                user_id=line.user_id,
                base_total=_money(line.base_total),
                discount_share=line.discount_share,
                delivery_share=_money(line.delivery_share),
                final_total=_money(line.final_total),
            )
            for line in settlement.lines
        ],
    )


@router.get("/dish-totals-today", response_model=list[DishTotalRead])
def dish_totals_today(db: Session = Depends(get_db)) -> list[DishTotalRead]:
    return [
        DishTotalRead(dish_id=row.dish_id, name=row.name, quantity=row.quantity, amount=row.amount)
        for row in get_dish_totals(db, time_utils.local_today())
    ]


@router.delete("/{order_id}", response_model=OrderDeleted)
def remove_order(order_id: int, db: Session = Depends(get_db)) -> OrderDeleted:
    return OrderDeleted(deleted=delete_order(db, order_id))
