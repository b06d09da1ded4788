"""Order settings endpoints for the administrator."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from shared_lunch.db.session import get_db
from shared_lunch.schemas.settings import OrderSettings
from shared_lunch.services.settings_service import InvalidCloseAtError, get_order_settings, save_order_settings

router: APIRouter = APIRouter()


@router.get("", response_model=OrderSettings)
def read_order_settings(db: Session = Depends(get_db)) -> OrderSettings:
    return get_order_settings(db)


@router.put("", response_model=OrderSettings)
def update_order_settings(payload: OrderSettings, db: Session = Depends(get_db)) -> OrderSettings:
    """Replace discount, delivery fee and cut-off; takes effect on the next scheduler tick."""
    try:
        return save_order_settings(db, payload)
    except InvalidCloseAtError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="closeAt must be HH:MM with hour 0-23 and minute 0-59",
        ) from exc
