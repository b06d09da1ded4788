"""Order settings API schemas."""

from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel

# Exact decimals internally, plain JSON numbers on the wire.
MoneyDecimal = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class OrderSettings(BaseModel):
    """Daily discount, delivery fee and cut-off for the shared order."""

    discount_percent: MoneyDecimal = Field(default=Decimal("0"), ge=0, le=100)
    delivery_fee: MoneyDecimal = Field(default=Decimal("0"), ge=0)
    close_at: str | None = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
