"""Allowed user ORM model."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from shared_lunch.db.base import Base


class AllowedUser(Base):
    """Identifier (Telegram @username or numeric id) permitted to place orders."""

    __tablename__ = "allowed_users"

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[str] = mapped_column(String(128), nullable=False, unique=True, index=True)
