"""Menu API schemas."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CategoryRead(BaseModel):
    """Serialized dish category."""

    id: str
    name: str

    model_config = ConfigDict(from_attributes=True)


class DishRead(BaseModel):
    """Serialized dish."""

    id: str
    name: str
    description: str
    price: int
    category_id: str

    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)
