"""Read-only menu endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.orm import Session

from shared_lunch.db.session import get_db
from shared_lunch.models.menu import Category, Dish
from shared_lunch.schemas.menu import CategoryRead, DishRead

router: APIRouter = APIRouter()


@router.get("/categories", response_model=list[CategoryRead])
def list_categories(db: Session = Depends(get_db)) -> list[Category]:
    return list(db.scalars(select(Category).order_by(Category.id)).all())


@router.get("/dishes", response_model=list[DishRead])
def list_dishes(db: Session = Depends(get_db)) -> list[Dish]:
    return list(db.scalars(select(Dish).order_by(Dish.category_id, Dish.id)).all())
