"""Database seeding helpers."""

import logging

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from shared_lunch.core.config import settings
from shared_lunch.models import AllowedUser, Category, Dish

logger = logging.getLogger(__name__)

DEMO_CATEGORIES: list[tuple[str, str]] = [
    ("soups", "Soups"),
    ("salads", "Salads"),
    ("pasta", "Pasta"),
    ("hot", "Hot dishes"),
    ("grill", "Grill"),
]

DEMO_DISHES: list[tuple[str, str, str, int, str]] = [
    ("soup-1", "Minestrone", "Light Italian vegetable soup.", 420, "soups"),
    ("soup-2", "Tomato basil soup", "Rich tomato cream soup with basil.", 390, "soups"),
    ("salad-1", "Caprese", "Mozzarella, tomatoes, basil, olive oil.", 520, "salads"),
    ("salad-2", "Chicken Caesar", "Classic salad with grilled chicken and parmesan.", 560, "salads"),
    ("pasta-1", "Spaghetti carbonara", "Guanciale, parmesan, cream sauce.", 640, "pasta"),
    ("pasta-2", "Pasta bolognese", "Tagliatelle with tomato and meat sauce.", 620, "pasta"),
    ("hot-1", "Chicken in cream sauce", "Served with mashed potatoes.", 690, "hot"),
    ("hot-2", "House lasagna", "Signature meat lasagna.", 720, "hot"),
    ("grill-1", "Ribeye steak", "Medium beef steak, demi-glace.", 1450, "grill"),
    ("grill-2", "Grilled vegetables", "Seasonal vegetables from the grill.", 480, "grill"),
]

DEMO_ALLOWED_USERS: list[str] = ["demo_user", "lunch_staff", "admin_telegram_username"]


def ensure_seed_data(session: Session) -> bool:
    """Seed demo menu and allowed users when the catalog is empty.

    Returns True when rows were inserted.
    """
    if not settings.seed_demo_data:
        return False

    existing = session.scalar(select(func.count()).select_from(Category)) or 0
    if existing > 0:
        return False

    session.add_all(Category(id=category_id, name=name) for category_id, name in DEMO_CATEGORIES)
    session.add_all(
        Dish(id=dish_id, name=name, description=description, price=price, category_id=category_id)
        for dish_id, name, description, price, category_id in DEMO_DISHES
    )
    known_users = set(session.scalars(select(AllowedUser.user_id)).all())
    session.add_all(AllowedUser(user_id=user_id) for user_id in DEMO_ALLOWED_USERS if user_id not in known_users)
    session.commit()
    logger.info("[BOOTSTRAP] Seeded %s categories and %s dishes", len(DEMO_CATEGORIES), len(DEMO_DISHES))
    return True
