"""Daily settlement notification scheduler.

Each tick re-reads the order settings, and once the cut-off has passed it
settles today's orders and messages every participant their share. The day is
marked settled only after every resolvable recipient has been attempted; a
crash before that leaves the day pending, so a fresh process delivers again
(at-least-once per user and day).
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from dataclasses import dataclass, field
from datetime import date, datetime

from shared_lunch.schemas.settings import OrderSettings
from shared_lunch.services.closing_time import should_run
from shared_lunch.services.recipients import RecipientResolver
from shared_lunch.services.settlement import SettlementLine, UserTotal, round_half_away_from_zero, settle

logger = logging.getLogger(__name__)

SettingsLoader = Callable[[], Awaitable[OrderSettings]]
UserTotalsLoader = Callable[[date], Awaitable[list[UserTotal]]]
Deliver = Callable[[int, str], Awaitable[bool]]
Clock = Callable[[], datetime]


@dataclass(frozen=True)
class DeliveryResult:
    user_id: str
    address: int
    delivered: bool
    error: str | None = None


@dataclass
class NotificationReport:
    """Outcome of a settlement pass that reached the delivery stage."""

    day: str
    results: list[DeliveryResult] = field(default_factory=list)
    unresolved: list[str] = field(default_factory=list)

    @property
    def failed(self) -> list[DeliveryResult]:
        return [result for result in self.results if not result.delivered]


def format_message(line: SettlementLine, currency: str) -> str:
    return f"Your total for today's lunch: {round_half_away_from_zero(line.final_total)} {currency}"


async def interval_ticks(seconds: float) -> AsyncIterator[None]:
    """Yield immediately, then once every ``seconds``."""
    while True:
        yield None
        await asyncio.sleep(seconds)


class NotificationScheduler:
    """Owns the run marker and recipient map for one settlement schedule."""

    def __init__(
        self,
        *,
        load_settings: SettingsLoader,
        load_user_totals: UserTotalsLoader,
        deliver: Deliver,
        clock: Clock = datetime.now,
        resolver: RecipientResolver | None = None,
        currency: str = "₽",
    ) -> None:
        self._load_settings = load_settings
        self._load_user_totals = load_user_totals
        self._deliver = deliver
        self._clock = clock
        self._currency = currency
        self._lock = asyncio.Lock()
        self.resolver = resolver if resolver is not None else RecipientResolver()
        self.run_marker: str | None = None

    def on_identify(self, identifier: str, address: int) -> None:
        self.resolver.register(identifier, address)

    async def run(self, ticks: AsyncIterator[None]) -> None:
        """Evaluate one tick at a time until the tick source is exhausted."""
        async for _ in ticks:
            await self.tick()

    async def tick(self) -> NotificationReport | None:
        """Run a settlement pass if due; returns its report or None when skipped."""
        async with self._lock:
            return await self._tick()

    async def _tick(self) -> NotificationReport | None:
        now = self._clock()
        today = now.date()

        try:
            order_settings = await self._load_settings()
        except Exception:
            logger.exception("[NOTIFY] Failed to read order settings")
            return None

        if not should_run(now, order_settings.close_at, self.run_marker):
            return None

        try:
            user_totals = await self._load_user_totals(today)
        except Exception:
            logger.exception("[NOTIFY] Failed to load user totals for %s; will retry", today.isoformat())
            return None

        if not user_totals:
            # Not marked settled: a late order may still arrive today.
            logger.info("[NOTIFY] No orders for %s; nothing to deliver", today.isoformat())
            return None

        settlement = settle(
            user_totals,
            discount_percent=order_settings.discount_percent,
            delivery_fee=order_settings.delivery_fee,
        )

        report = NotificationReport(day=today.isoformat())
        targets: list[tuple[SettlementLine, int]] = []
        for line in settlement.lines:
            address = self.resolver.resolve(line.user_id)
            if address is None:
                logger.warning("[NOTIFY] No chat known for user %s; skipping", line.user_id)
                report.unresolved.append(line.user_id)
                continue
            targets.append((line, address))

        report.results = list(
            await asyncio.gather(*(self._deliver_one(line, address) for line, address in targets))
        )
        for result in report.failed:
            logger.warning(
                "[NOTIFY] Delivery to %s (chat %s) failed: %s", result.user_id, result.address, result.error
            )

        self.run_marker = today.isoformat()
        logger.info(
            "[NOTIFY] Settled %s: %s delivered, %s failed, %s unresolved",
            report.day,
            len(report.results) - len(report.failed),
            len(report.failed),
            len(report.unresolved),
        )
        return report

    async def _deliver_one(self, line: SettlementLine, address: int) -> DeliveryResult:
        try:
            delivered = await self._deliver(address, format_message(line, self._currency))
        except Exception as exc:
            return DeliveryResult(user_id=line.user_id, address=address, delivered=False, error=repr(exc))
        return DeliveryResult(
            user_id=line.user_id,
            address=address,
            delivered=bool(delivered),
            error=None if delivered else "rejected by channel",
        )
