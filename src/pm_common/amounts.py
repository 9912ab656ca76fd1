"""Decimal arithmetic utilities for pool, position and payout amounts.

All reserves, token balances, volumes and payouts are Decimal. Floats are
accepted at the edges only and converted through str() so 0.1 stays 0.1.
"""

from decimal import Context, Decimal, InvalidOperation

# Curve math runs under this context (see pm_amm.domain.pricing)
AMM_CONTEXT = Context(prec=40)

ZERO = Decimal(0)
ONE = Decimal(1)
HALF = Decimal("0.5")

# Largest single trade, liquidity seed or book step. Keeps pools and
# volumes inside the decimal exponent range and representable as JSON floats.
MAX_AMOUNT = Decimal("1e30")


def to_amount(value: object) -> Decimal:
    """Coerce int/float/str/Decimal to a Decimal amount.

    Raises ValueError for anything that is not a finite number. Sign is
    not checked here; callers decide what "positive" means for them.
    """
    if isinstance(value, bool):
        raise ValueError(f"Not a numeric amount: {value!r}")
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, float, str)):
        try:
            amount = Decimal(str(value))
        except InvalidOperation as exc:
            raise ValueError(f"Not a numeric amount: {value!r}") from exc
    else:
        raise ValueError(f"Not a numeric amount: {value!r}")
    if not amount.is_finite():
        raise ValueError(f"Amount must be finite, got {value!r}")
    return amount


def is_within_range(amount: Decimal) -> bool:
    """True for 0 < amount <= MAX_AMOUNT."""
    return ZERO < amount <= MAX_AMOUNT


def amount_to_display(amount: Decimal, places: int = 2) -> str:
    """Format an amount for humans: Decimal('1234.5') -> '1,234.50'.

    Uses format() rather than quantize() so totals wider than the context
    precision still render.
    """
    return f"{amount:,.{places}f}"
