"""Telegram Bot API delivery channel."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import httpx

from shared_lunch.services.notifier import NotificationScheduler

logger = logging.getLogger(__name__)

WELCOME_TEXT: str = "\n".join(
    [
        "Hi! I calculate what you owe for the shared lunch order.",
        "",
        "How it works:",
        "1. Order your dishes in the app.",
        "2. Use your Telegram @username or numeric id as your user id there.",
        "3. When the administrator's closing time passes, I compute your share:",
        "   your own dishes, minus your part of the discount, plus your part of delivery.",
        "4. I send you the exact amount here in a private message.",
        "",
        "Nothing else to do: send /start once and keep ordering in the app.",
    ]
)
CLOSE_ORDER_ACK: str = "Trying to send today's totals."


class TelegramClient:
    """Thin async wrapper over the Bot API methods the app uses."""

    def __init__(
        self,
        token: str,
        *,
        api_base: str = "https://api.telegram.org",
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=f"{api_base.rstrip('/')}/bot{token}/",
            timeout=timeout,
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def send_message(self, chat_id: int, text: str) -> bool:
        try:
            response = await self._client.post("sendMessage", json={"chat_id": chat_id, "text": text})
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("[TELEGRAM] sendMessage to %s failed: %s", chat_id, exc)
            return False
        return bool(payload.get("ok", False))

    async def get_updates(self, offset: int | None, timeout: int = 25) -> list[dict[str, Any]]:
        params: dict[str, int] = {"timeout": timeout}
        if offset is not None:
            params["offset"] = offset
        response = await self._client.get(
            "getUpdates", params=params, timeout=httpx.Timeout(timeout + 10.0)
        )
        response.raise_for_status()
        payload = response.json()
        if not isinstance(payload, dict):
            raise ValueError(f"unexpected getUpdates payload: {payload!r}")
        return list(payload.get("result", []))


def identifier_for(sender: dict[str, Any]) -> str:
    username = sender.get("username")
    return f"@{username}" if username else str(sender["id"])


async def handle_update(update: dict[str, Any], scheduler: NotificationScheduler, client: TelegramClient) -> None:
    """Dispatch a single Bot API update to /start or /close_order."""
    message = update.get("message") or {}
    text: str = (message.get("text") or "").strip()
    sender = message.get("from")
    if not text.startswith("/") or sender is None:
        return

    command = text.split()[0].split("@", 1)[0]
    chat_id = int(message.get("chat", {}).get("id", sender["id"]))

    if command == "/start":
        identifier = identifier_for(sender)
        scheduler.on_identify(identifier, int(sender["id"]))
        logger.info("[TELEGRAM] Registered %s -> chat %s", identifier, sender["id"])
        await client.send_message(chat_id, WELCOME_TEXT)
    elif command == "/close_order":
        await scheduler.tick()
        await client.send_message(chat_id, CLOSE_ORDER_ACK)


async def poll_updates(client: TelegramClient, scheduler: NotificationScheduler, *, retry_delay: float = 5.0) -> None:
    """Long-poll getUpdates forever, handing each update to ``handle_update``."""
    offset: int | None = None
    while True:
        try:
            updates = await client.get_updates(offset)
            next_offset = max((int(update["update_id"]) + 1 for update in updates), default=offset)
        except (httpx.HTTPError, ValueError, KeyError, TypeError):
            logger.exception("[TELEGRAM] getUpdates failed; retrying in %ss", retry_delay)
            await asyncio.sleep(retry_delay)
            continue
        offset = next_offset
        for update in updates:
            try:
                await handle_update(update, scheduler, client)
            except Exception:
                logger.exception("[TELEGRAM] Failed to handle update %s", update.get("update_id"))
