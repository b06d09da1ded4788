"""Menu ORM models."""

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shared_lunch.db.base import Base


class Category(Base):
    """Dish category shown as a menu section."""

    __tablename__ = "categories"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    dishes: Mapped[list["Dish"]] = relationship(back_populates="category", cascade="all, delete-orphan")


class Dish(Base):
    """Orderable dish; price is stored in whole currency units."""

    __tablename__ = "dishes"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    price: Mapped[int] = mapped_column(Integer, nullable=False)
    category_id: Mapped[str] = mapped_column(ForeignKey("categories.id", ondelete="CASCADE"), nullable=False)

    category: Mapped[Category] = relationship(back_populates="dishes")
    order_items: Mapped[list["OrderItem"]] = relationship(back_populates="dish")
