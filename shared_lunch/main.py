"""FastAPI entrypoint for the shared lunch order backend."""

from __future__ import annotations

import asyncio
import logging
from datetime import date

from fastapi import FastAPI
from starlette.concurrency import run_in_threadpool

from shared_lunch.api.v1.api import api_router
from shared_lunch.core.config import settings
from shared_lunch.db import session as db_session
from shared_lunch.db.base import Base
from shared_lunch.db.migrations import ensure_sqlite_schema
from shared_lunch.db.seed import ensure_seed_data
from shared_lunch.schemas.settings import OrderSettings
from shared_lunch.services.notifier import NotificationScheduler, interval_ticks
from shared_lunch.services.order_service import get_user_totals
from shared_lunch.services.settings_service import get_order_settings
from shared_lunch.services.settlement import UserTotal
from shared_lunch.services.telegram import TelegramClient, poll_updates
from shared_lunch.utils import time as time_utils

logger = logging.getLogger(__name__)

app = FastAPI(title=settings.app_name)
app.include_router(api_router, prefix="/api/v1")


def _read_order_settings() -> OrderSettings:
    with db_session.SessionLocal() as db:
        return get_order_settings(db)


def _read_user_totals(day: date) -> list[UserTotal]:
    with db_session.SessionLocal() as db:
        return get_user_totals(db, day)


async def load_order_settings() -> OrderSettings:
    return await run_in_threadpool(_read_order_settings)


async def load_user_totals(day: date) -> list[UserTotal]:
    return await run_in_threadpool(_read_user_totals, day)


def build_scheduler(client: TelegramClient) -> NotificationScheduler:
    """Wire the scheduler to the database and the Telegram channel."""
    return NotificationScheduler(
        load_settings=load_order_settings,
        load_user_totals=load_user_totals,
        deliver=client.send_message,
        clock=time_utils.local_now,
        currency=settings.currency_symbol,
    )


@app.on_event("startup")
async def startup() -> None:
    Base.metadata.create_all(bind=db_session.engine)
    ensure_sqlite_schema(db_session.engine)
    with db_session.SessionLocal() as session:
        try:
            ensure_seed_data(session)
        except Exception:
            logger.exception("[BOOTSTRAP] Seed failed; continuing startup.")

    app.state.background_tasks = []
    if not settings.telegram_bot_token:
        logger.warning("[BOOTSTRAP] BOT_TOKEN not set; settlement notifications are disabled.")
        return

    client = TelegramClient(
        settings.telegram_bot_token,
        api_base=settings.telegram_api_base,
        timeout=settings.telegram_timeout_seconds,
    )
    scheduler = build_scheduler(client)
    app.state.telegram_client = client
    app.state.scheduler = scheduler

    app.state.background_tasks.append(asyncio.create_task(scheduler.run(interval_ticks(settings.notify_tick_seconds))))
    if settings.telegram_mode == "polling":
        app.state.background_tasks.append(asyncio.create_task(poll_updates(client, scheduler)))
    logger.info(
        "[BOOTSTRAP] Notifications enabled (mode=%s, tick=%ss)", settings.telegram_mode, settings.notify_tick_seconds
    )


@app.on_event("shutdown")
async def shutdown() -> None:
    tasks: list[asyncio.Task] = getattr(app.state, "background_tasks", [])
    for task in tasks:
        task.cancel()
    await asyncio.gather(*tasks, return_exceptions=True)

    client: TelegramClient | None = getattr(app.state, "telegram_client", None)
    if client is not None:
        await client.aclose()


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
