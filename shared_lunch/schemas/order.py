"""Order and settlement API schemas."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from shared_lunch.schemas.menu import DishRead
from shared_lunch.schemas.settings import MoneyDecimal

CAMEL_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class OrderItemPayload(BaseModel):
    """Single order item payload."""

    dish_id: str = Field(min_length=1)
    quantity: int = Field(default=1, ge=1)

    model_config = CAMEL_CONFIG


class OrderCreate(BaseModel):
    """Create an order for today."""

    user_id: str = Field(min_length=1, max_length=128)
    items: list[OrderItemPayload]

    model_config = CAMEL_CONFIG


class OrderItemRead(BaseModel):
    """Serialized order item with dish details."""

    dish: DishRead
    quantity: int

    model_config = CAMEL_CONFIG


class OrderRead(BaseModel):
    """Serialized order."""

    id: int
    user_id: str | None
    order_date: date | None
    created_at: datetime
    status: str
    items: list[OrderItemRead]

    model_config = CAMEL_CONFIG


class OrderDeleted(BaseModel):
    deleted: bool


class SettlementLineRead(BaseModel):
    """One participant's share of today's order."""

    user_id: str
    base_total: MoneyDecimal
    discount_share: int
    delivery_share: MoneyDecimal
    final_total: MoneyDecimal

    model_config = CAMEL_CONFIG


class SettlementSummaryRead(BaseModel):
    """Totals for today's shared order."""

    base_total: MoneyDecimal
    discount_percent: MoneyDecimal
    discount_amount: int
    delivery_fee: MoneyDecimal
    final_total: MoneyDecimal
    rounding_drift: MoneyDecimal

    model_config = CAMEL_CONFIG


class PersonalTodayResponse(BaseModel):
    day: date
    summary: SettlementSummaryRead
    users: list[SettlementLineRead]

    model_config = CAMEL_CONFIG


class DishTotalRead(BaseModel):
    dish_id: str
    name: str
    quantity: int
    amount: int

    model_config = CAMEL_CONFIG


class AllowedUserCreate(BaseModel):
    user_id: str | None = None

    model_config = CAMEL_CONFIG


class AllowedUserCreated(BaseModel):
    user_id: str
    created: bool

    model_config = CAMEL_CONFIG
