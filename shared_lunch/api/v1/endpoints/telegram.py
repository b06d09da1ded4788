"""Telegram webhook endpoint."""

from typing import Any

from fastapi import APIRouter, HTTPException, Request, status

from shared_lunch.services.telegram import handle_update

router: APIRouter = APIRouter()


@router.post("/webhook")
async def telegram_webhook(update: dict[str, Any], request: Request) -> dict[str, bool]:
    """Receive a Bot API update when running in webhook mode."""
    scheduler = getattr(request.app.state, "scheduler", None)
    client = getattr(request.app.state, "telegram_client", None)
    if scheduler is None or client is None:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Notifications are disabled")

    await handle_update(update, scheduler, client)
    return {"ok": True}
