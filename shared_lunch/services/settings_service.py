"""Order settings persistence helpers."""

from decimal import Decimal, InvalidOperation

from sqlalchemy.orm import Session

from shared_lunch.models.app_setting import AppSetting
from shared_lunch.schemas.settings import OrderSettings
from shared_lunch.services.closing_time import parse_close_at

DISCOUNT_PERCENT_KEY: str = "discount_percent"
DELIVERY_FEE_KEY: str = "delivery_fee"
CLOSE_AT_KEY: str = "close_at"

MAX_DISCOUNT_PERCENT: Decimal = Decimal("100")


class InvalidCloseAtError(ValueError):
    """Raised when a cut-off time is not in H:MM form."""


def _parse_money(raw: str | None, default: Decimal) -> Decimal:
    if raw is None:
        return default
    try:
        value = Decimal(raw)
    except InvalidOperation:
        return default
    if not value.is_finite():
        return default
    return value


def get_order_settings(db: Session) -> OrderSettings:
    """Read order settings from DB, substituting defaults for missing/invalid values."""
    rows: list[AppSetting] = (
        db.query(AppSetting)
        .filter(AppSetting.key.in_([DISCOUNT_PERCENT_KEY, DELIVERY_FEE_KEY, CLOSE_AT_KEY]))
        .all()
    )
    values: dict[str, str] = {row.key: row.value for row in rows}

    discount_percent = _parse_money(values.get(DISCOUNT_PERCENT_KEY), Decimal("0"))
    discount_percent = min(max(discount_percent, Decimal("0")), MAX_DISCOUNT_PERCENT)

    delivery_fee = max(_parse_money(values.get(DELIVERY_FEE_KEY), Decimal("0")), Decimal("0"))

    close_at: str | None = values.get(CLOSE_AT_KEY) or None

    return OrderSettings(discount_percent=discount_percent, delivery_fee=delivery_fee, close_at=close_at)


def save_order_settings(db: Session, payload: OrderSettings) -> OrderSettings:
    """Persist order settings in app settings table."""
    close_value: str = ""
    if payload.close_at:
        parsed = parse_close_at(payload.close_at)
        if parsed is None:
            raise InvalidCloseAtError(payload.close_at)
        close_value = f"{parsed[0]:02d}:{parsed[1]:02d}"

    for key, value in (
        (DISCOUNT_PERCENT_KEY, str(payload.discount_percent)),
        (DELIVERY_FEE_KEY, str(payload.delivery_fee)),
        (CLOSE_AT_KEY, close_value),
    ):
        setting: AppSetting | None = db.query(AppSetting).filter(AppSetting.key == key).first()
        if setting is None:
            setting = AppSetting(key=key, value=value)
            db.add(setting)
        else:
            setting.value = value

    db.commit()
    return get_order_settings(db)
