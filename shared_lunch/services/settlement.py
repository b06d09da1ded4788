"""Settlement of a shared daily order into per-user obligations.

The discount is distributed proportionally to each user's share of the base
total, the delivery fee is split evenly. All arithmetic is exact on
``Fraction`` values; rounding to whole currency units is half away from zero,
so ``round(1.5) == 2`` and ``round(2.5) == 3`` (unlike builtin ``round``).
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal
from fractions import Fraction

Money = int | Decimal | Fraction


@dataclass(frozen=True)
class UserTotal:
    """Sum of dish price x quantity for one user on one day."""

    user_id: str
    base_total: Money


@dataclass(frozen=True)
class SettlementLine:
    user_id: str
    base_total: Fraction
    discount_share: int
    delivery_share: Fraction
    final_total: Fraction


@dataclass(frozen=True)
class SettlementSummary:
    base_total: Fraction
    discount_percent: Fraction
    discount_amount: int
    delivery_fee: Fraction
    final_total: Fraction
    lines_total: Fraction

    @property
    def rounding_drift(self) -> Fraction:
        """Difference introduced by rounding each user's discount separately."""
        return self.lines_total - self.final_total


@dataclass(frozen=True)
class Settlement:
    summary: SettlementSummary
    lines: tuple[SettlementLine, ...]


def round_half_away_from_zero(value: Fraction) -> int:
    """Round an exact rational to the nearest integer, ties away from zero."""
    magnitude = int(abs(value) + Fraction(1, 2))
    return magnitude if value >= 0 else -magnitude


def _exact(value: Money) -> Fraction:
    if isinstance(value, Fraction):
        return value
    return Fraction(value)


def settle(
    user_totals: Sequence[UserTotal],
    *,
    discount_percent: Money,
    delivery_fee: Money,
) -> Settlement:
    """Compute per-user settlement lines and the global summary.

    Assumes ``0 <= discount_percent <= 100`` and ``delivery_fee >= 0``; callers
    normalize settings before calling.
    """
    percent = _exact(discount_percent)
    fee = _exact(delivery_fee)
    base_total = sum((_exact(item.base_total) for item in user_totals), Fraction(0))

    if not user_totals:
        zero = Fraction(0)
        summary = SettlementSummary(
            base_total=zero,
            discount_percent=percent,
            discount_amount=0,
            delivery_fee=zero,
            final_total=zero,
            lines_total=zero,
        )
        return Settlement(summary=summary, lines=())

    discount_amount = round_half_away_from_zero(base_total * percent / 100)
    delivery_share = fee / len(user_totals)

    lines: list[SettlementLine] = []
    for item in user_totals:
        user_base = _exact(item.base_total)
        if base_total:
            user_discount = round_half_away_from_zero(user_base / base_total * discount_amount)
        else:
            # Only reachable when every user ordered free dishes.
            user_discount = 0
        lines.append(
            SettlementLine(
                user_id=item.user_id,
                base_total=user_base,
                discount_share=user_discount,
                delivery_share=delivery_share,
                final_total=user_base - user_discount + delivery_share,
            )
        )

    summary = SettlementSummary(
        base_total=base_total,
        discount_percent=percent,
        discount_amount=discount_amount,
        delivery_fee=fee,
        final_total=base_total - discount_amount + fee,
        lines_total=sum((line.final_total for line in lines), Fraction(0)),
    )
    return Settlement(summary=summary, lines=tuple(lines))
