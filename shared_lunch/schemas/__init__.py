"""Schema exports."""

from shared_lunch.schemas.menu import CategoryRead, DishRead
from shared_lunch.schemas.order import (
    AllowedUserCreate,
    AllowedUserCreated,
    DishTotalRead,
    OrderCreate,
    OrderDeleted,
    OrderItemPayload,
    OrderItemRead,
    OrderRead,
    PersonalTodayResponse,
    SettlementLineRead,
    SettlementSummaryRead,
)
from shared_lunch.schemas.settings import OrderSettings

__all__ = [
    "AllowedUserCreate",
    "AllowedUserCreated",
    "CategoryRead",
    "DishRead",
    "DishTotalRead",
    "OrderCreate",
    "OrderDeleted",
    "OrderItemPayload",
    "OrderItemRead",
    "OrderRead",
    "OrderSettings",
    "PersonalTodayResponse",
    "SettlementLineRead",
    "SettlementSummaryRead",
]
