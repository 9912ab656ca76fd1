"""Unit tests for the constant-product pricing functions."""
from decimal import Decimal

import pytest

from src.pm_amm.domain.models import PoolState
from src.pm_amm.domain.pricing import price, prices, simulate_buy, validate_amount
from src.pm_common.amounts import MAX_AMOUNT
from src.pm_common.enums import Outcome
from src.pm_common.errors import InvalidAmountError, InvalidOutcomeError


def _pool(a: str = "1000", b: str = "1000") -> PoolState:
    pa, pb = Decimal(a), Decimal(b)
    return PoolState(pool_a=pa, pool_b=pb, invariant=pa * pb)


class TestPrice:
    def test_equal_pools_price_exactly_half(self) -> None:
        price_a, price_b = prices(_pool())
        assert price_a == Decimal("0.5")
        assert price_b == Decimal("0.5")

    def test_price_is_opposite_reserve_over_total(self) -> None:
        pool = _pool("300", "700")
        assert price(pool, Outcome.A) == Decimal("0.7")
        assert price(pool, Outcome.B) == Decimal("0.3")

    @pytest.mark.parametrize(
        "a,b", [("1", "1"), ("909.0909", "1100"), ("0.0001", "5000"), ("12345.678", "3.14159")]
    )
    def test_prices_sum_to_one(self, a: str, b: str) -> None:
        price_a, price_b = prices(_pool(a, b))
        assert abs(price_a + price_b - 1) < Decimal("1e-30")

    def test_accepts_string_outcome(self) -> None:
        assert price(_pool("300", "700"), "a") == Decimal("0.7")

    def test_unknown_outcome_rejected(self) -> None:
        with pytest.raises(InvalidOutcomeError):
            price(_pool(), "C")


class TestSimulateBuy:
    def test_buy_a_100_from_1000_pool(self) -> None:
        quote = simulate_buy(_pool(), Outcome.A, 100)
        # pool_b -> 1100, pool_a -> 1_000_000 / 1100 = 909.0909...
        assert float(quote.pool_after.pool_b) == 1100.0
        assert float(quote.pool_after.pool_a) == pytest.approx(909.0909, abs=1e-4)
        assert float(quote.tokens_out) == pytest.approx(90.9091, abs=1e-4)
        assert float(quote.price_after) == pytest.approx(0.5475, abs=1e-4)

    def test_avg_price_is_amount_over_tokens(self) -> None:
        quote = simulate_buy(_pool(), Outcome.A, 100)
        assert float(quote.avg_price) == pytest.approx(100 / 90.90909, rel=1e-6)

    def test_price_impact_relative_to_price_before(self) -> None:
        quote = simulate_buy(_pool(), Outcome.B, 50)
        assert quote.price_before == Decimal("0.5")
        expected = (quote.price_after - quote.price_before) / quote.price_before
        assert quote.price_impact == expected
        assert quote.price_impact > 0

    def test_only_traded_pool_decreases(self) -> None:
        pool = _pool()
        quote = simulate_buy(pool, Outcome.B, 40)
        assert quote.pool_after.pool_b < pool.pool_b
        assert quote.pool_after.pool_a == pool.pool_a + 40

    def test_does_not_modify_input_pool(self) -> None:
        pool = _pool()
        simulate_buy(pool, Outcome.A, 500)
        assert pool == _pool()

    def test_invariant_kept_on_curve(self) -> None:
        quote = simulate_buy(_pool(), Outcome.A, Decimal("123.456"))
        after = quote.pool_after
        assert abs(after.pool_a * after.pool_b - after.invariant) < Decimal("1e-20")

    def test_avg_price_non_decreasing_with_size(self) -> None:
        pool = _pool("800", "1250")
        avg = [simulate_buy(pool, Outcome.A, size).avg_price for size in range(1, 2001, 50)]
        assert all(later >= earlier for earlier, later in zip(avg, avg[1:]))

    def test_symmetric_at_equal_pools(self) -> None:
        qa = simulate_buy(_pool(), Outcome.A, 75)
        qb = simulate_buy(_pool(), Outcome.B, 75)
        assert qa.tokens_out == qb.tokens_out

    @pytest.mark.parametrize("amount", [0, -1, "-0.01", "abc", float("nan"), float("inf"), None])
    def test_invalid_amount_rejected(self, amount: object) -> None:
        with pytest.raises(InvalidAmountError):
            simulate_buy(_pool(), Outcome.A, amount)

    def test_exhausted_pool_rejected(self) -> None:
        empty = PoolState(pool_a=Decimal(0), pool_b=Decimal(1000), invariant=Decimal(0))
        with pytest.raises(InvalidAmountError):
            simulate_buy(empty, Outcome.A, 10)


class TestValidateAmount:
    def test_float_goes_through_str(self) -> None:
        assert validate_amount(0.1) == Decimal("0.1")

    def test_bool_is_not_an_amount(self) -> None:
        with pytest.raises(InvalidAmountError):
            validate_amount(True)

    def test_ceiling_is_inclusive(self) -> None:
        assert validate_amount(MAX_AMOUNT) == MAX_AMOUNT

    @pytest.mark.parametrize("amount", [Decimal("1.0000001e30"), "1e1000000", "9e999999"])
    def test_above_ceiling_rejected(self, amount: object) -> None:
        with pytest.raises(InvalidAmountError):
            validate_amount(amount)

    def test_exponent_overflow_surfaces_as_invalid_amount(self) -> None:
        with pytest.raises(InvalidAmountError):
            simulate_buy(_pool(), Outcome.B, "1e1000000")
