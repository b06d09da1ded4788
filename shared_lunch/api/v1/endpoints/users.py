"""Allowed user endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from shared_lunch.db.session import get_db
from shared_lunch.models.user import AllowedUser
from shared_lunch.schemas.order import AllowedUserCreate, AllowedUserCreated

router: APIRouter = APIRouter()


@router.get("", response_model=list[str])
def list_allowed_users(db: Session = Depends(get_db)) -> list[str]:
    return list(db.scalars(select(AllowedUser.user_id).order_by(AllowedUser.id)).all())


@router.post("", response_model=AllowedUserCreated, status_code=status.HTTP_201_CREATED)
def add_allowed_user(
    payload: AllowedUserCreate,
    db: Session = Depends(get_db),
) -> AllowedUserCreated:
    """Add an identifier to the allow list; repeated calls are no-ops."""
    user_id = (payload.user_id or "").strip()
    if not user_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="userId is required")

    existing = db.scalars(select(AllowedUser).where(AllowedUser.user_id == user_id)).first()
    if existing is not None:
        return AllowedUserCreated(user_id=user_id, created=False)

    db.add(AllowedUser(user_id=user_id))
    db.commit()
    return AllowedUserCreated(user_id=user_id, created=True)
