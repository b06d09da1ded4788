"""Settlement calculator tests."""

import random
from decimal import Decimal
from fractions import Fraction

from shared_lunch.services.settlement import UserTotal, round_half_away_from_zero, settle


def _totals(*amounts: int) -> list[UserTotal]:
    return [UserTotal(user_id=f"user-{index}", base_total=amount) for index, amount in enumerate(amounts)]


def test_round_half_away_from_zero_rounds_ties_outward() -> None:
    assert round_half_away_from_zero(Fraction(1, 2)) == 1
    assert round_half_away_from_zero(Fraction(3, 2)) == 2
    assert round_half_away_from_zero(Fraction(5, 2)) == 3
    assert round_half_away_from_zero(Fraction(-3, 2)) == -2
    assert round_half_away_from_zero(Fraction(2, 3)) == 1
    assert round_half_away_from_zero(Fraction(1, 3)) == 0


def test_proportional_discount_and_even_delivery_scenario() -> None:
    settlement = settle(_totals(300, 200, 500), discount_percent=10, delivery_fee=90)

    assert settlement.summary.base_total == 1000
    assert settlement.summary.discount_amount == 100
    assert [line.discount_share for line in settlement.lines] == [30, 20, 50]
    assert [line.delivery_share for line in settlement.lines] == [30, 30, 30]
    assert [line.final_total for line in settlement.lines] == [300, 210, 480]
    assert settlement.summary.final_total == 990
    assert settlement.summary.lines_total == 990
    assert settlement.summary.rounding_drift == 0


def test_fractional_proportion_rounds_to_exact_discount() -> None:
    settlement = settle(_totals(100, 200), discount_percent=33, delivery_fee=0)

    assert settlement.summary.discount_amount == 99
    assert [line.discount_share for line in settlement.lines] == [33, 66]
    assert [line.final_total for line in settlement.lines] == [67, 134]
    assert settlement.summary.final_total == 201


def test_tie_rounding_drift_is_bounded_golden_values() -> None:
    settlement = settle(_totals(1, 1, 1), discount_percent=50, delivery_fee=0)

    # 3 * 50% = 1.5 -> 2; each user gets round(2/3) = 1, so the users
    # collectively receive one unit more discount than the order.
    assert settlement.summary.discount_amount == 2
    assert [line.discount_share for line in settlement.lines] == [1, 1, 1]
    assert [line.final_total for line in settlement.lines] == [0, 0, 0]
    assert settlement.summary.final_total == 1
    assert settlement.summary.lines_total == 0
    assert settlement.summary.rounding_drift == -1
    assert abs(settlement.summary.rounding_drift) <= len(settlement.lines)


def test_discount_rounding_bound_holds_for_random_orders() -> None:
    rng = random.Random(20240601)
    for _ in range(300):
        amounts = [rng.randint(0, 5000) for _ in range(rng.randint(1, 12))]
        if sum(amounts) == 0:
            continue
        percent = Decimal(rng.randint(0, 1000)) / 10
        settlement = settle(_totals(*amounts), discount_percent=percent, delivery_fee=rng.randint(0, 500))

        n = len(amounts)
        discount_sum = sum(line.discount_share for line in settlement.lines)
        assert -n <= discount_sum - settlement.summary.discount_amount <= n
        assert abs(settlement.summary.rounding_drift) <= n


def test_delivery_shares_reconstruct_fee_exactly() -> None:
    for users in range(1, 10):
        settlement = settle(_totals(*([150] * users)), discount_percent=0, delivery_fee=100)

        assert sum(line.delivery_share for line in settlement.lines) == 100

    settlement = settle(_totals(10, 20, 30), discount_percent=0, delivery_fee=Decimal("99.99"))
    assert settlement.lines[0].delivery_share == Fraction(3333, 100)
    assert sum(line.delivery_share for line in settlement.lines) == Fraction(Decimal("99.99"))


def test_settlement_is_deterministic() -> None:
    totals = _totals(420, 1450, 390, 720)

    first = settle(totals, discount_percent=Decimal("12.5"), delivery_fee=250)
    second = settle(totals, discount_percent=Decimal("12.5"), delivery_fee=250)

    assert first == second
    assert [line.user_id for line in first.lines] == ["user-0", "user-1", "user-2", "user-3"]


def test_empty_day_short_circuits_to_zero() -> None:
    settlement = settle([], discount_percent=10, delivery_fee=90)

    assert settlement.lines == ()
    assert settlement.summary.base_total == 0
    assert settlement.summary.discount_amount == 0
    assert settlement.summary.delivery_fee == 0
    assert settlement.summary.final_total == 0


def test_fractional_discount_percent_is_exact() -> None:
    settlement = settle(_totals(1000), discount_percent=Decimal("12.5"), delivery_fee=0)

    assert settlement.summary.discount_amount == 125
    assert settlement.lines[0].final_total == 875


def test_free_dishes_only_split_delivery() -> None:
    settlement = settle(_totals(0, 0), discount_percent=20, delivery_fee=10)

    assert settlement.summary.discount_amount == 0
    assert [line.discount_share for line in settlement.lines] == [0, 0]
    assert [line.final_total for line in settlement.lines] == [5, 5]
