"""
Pricing rules for the trading domain.

Money is represented as Decimal quantized to the currency precision
(0.01). Storage uses integer minor units so that balance comparisons
in the database are exact.

Units may be fractional (fund units) but carry at most
MAX_UNIT_PLACES decimal places.
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Optional, Sequence

from tradedesk.domain.trading.errors import InvalidUnitsError

CURRENCY_QUANTUM = Decimal("0.01")
MINOR_UNITS_PER_MAJOR = 100
MAX_UNIT_PLACES = 4
MAX_UNITS = Decimal("1000000000")


def quantize_money(amount: Decimal) -> Decimal:
    """Round an amount to currency precision (half-up)."""
    return amount.quantize(CURRENCY_QUANTUM, rounding=ROUND_HALF_UP)


def to_minor_units(amount: Decimal) -> int:
    """Convert a currency amount to integer minor units (cents)."""
    return int(quantize_money(amount) * MINOR_UNITS_PER_MAJOR)


def from_minor_units(minor: int) -> Decimal:
    """Convert integer minor units back to a quantized currency amount."""
    return quantize_money(Decimal(minor) / MINOR_UNITS_PER_MAJOR)


def parse_units(raw: object) -> Decimal:
    """Parse a client-supplied purchase quantity.

    Accepts ints, floats and numeric strings. Rejects booleans,
    non-numeric text, NaN/Infinity, zero, negatives, quantities above
    MAX_UNITS and values with more than MAX_UNIT_PLACES decimal places.

    Raises:
        InvalidUnitsError: If the value is not a finite positive number.
    """
    if raw is None or isinstance(raw, bool):
        raise InvalidUnitsError(raw)

    try:
        text = raw.strip() if isinstance(raw, str) else str(raw)
        units = Decimal(text)
    except (InvalidOperation, ValueError):
        raise InvalidUnitsError(raw) from None

    if not units.is_finite() or units <= 0 or units > MAX_UNITS:
        raise InvalidUnitsError(raw)
    if units.as_tuple().exponent < -MAX_UNIT_PLACES:
        raise InvalidUnitsError(raw)
    return units


def format_units(units: Decimal) -> str:
    """Render units in plain (non-exponent) notation for storage."""
    return format(units, "f")


def purchase_total(units: Decimal, price_per_unit: Decimal) -> Decimal:
    """Total charged for a purchase, at currency precision."""
    return quantize_money(units * price_per_unit)


@dataclass(frozen=True)
class PriceHistoryStats:
    """Display statistics derived from a product's price history."""

    first: Decimal
    last: Decimal
    low: Decimal
    high: Decimal
    change: Decimal
    change_pct: Optional[Decimal]


def price_history_stats(history: Sequence[Decimal]) -> Optional[PriceHistoryStats]:
    """Return change/low/high over a price history, or None when empty."""
    if not history:
        return None

    first, last = history[0], history[-1]
    change = quantize_money(last - first)
    change_pct = None
    if first != 0:
        change_pct = quantize_money((last - first) / first * 100)

    return PriceHistoryStats(
        first=first,
        last=last,
        low=min(history),
        high=max(history),
        change=change,
        change_pct=change_pct,
    )
