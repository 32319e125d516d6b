"""
Domain service: Portfolio valuation math.

Marks positions to their latest quote and combines them into a
value-weighted daily return. Pure logic, no IO.

Per-position returns divide by previous close and by average cost
without a guard: a zero divisor yields an infinite (or NaN) Decimal
rather than an error. The portfolio-level return is guarded and is
zero for an empty (zero-value) portfolio.
"""

from decimal import Decimal, DivisionByZero, InvalidOperation, localcontext
from typing import Iterable, Optional

from backoffice.domain.trading.entities import (
    Instrument,
    Position,
    PositionValuation,
    Quote,
)

HUNDRED = Decimal("100")
ZERO = Decimal("0")


def _percent_change(current: Decimal, base: Optional[Decimal]) -> Decimal:
    with localcontext() as ctx:
        ctx.traps[DivisionByZero] = False
        ctx.traps[InvalidOperation] = False
        base = ZERO if base is None else base
        return (current - base) / base * HUNDRED


def value_position(
    position: Position, instrument: Instrument, quote: Quote
) -> PositionValuation:
    """Mark one position to market.

    Returns:
        current value, daily return % (close vs previous close) and
        total return % (close vs average cost).
    """
    return PositionValuation(
        instrument_id=position.instrument_id,
        ticker=instrument.ticker,
        name=instrument.name,
        quantity=position.quantity,
        avg_cost=position.avg_cost,
        current_value=position.quantity * quote.close,
        daily_return=_percent_change(quote.close, quote.previous_close),
        total_return=_percent_change(quote.close, position.avg_cost),
    )


def portfolio_daily_return(
    positions: Iterable[PositionValuation], total_value: Decimal
) -> Decimal:
    """Value-weighted average of the positions' daily returns."""
    if total_value == 0:
        return ZERO

    with localcontext() as ctx:
        ctx.traps[DivisionByZero] = False
        ctx.traps[InvalidOperation] = False
        weighted = ZERO
        for item in positions:
            weighted += item.current_value / total_value * item.daily_return
        return weighted
