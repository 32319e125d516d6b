"""
Domain entities for the trading bounded context.

Entities represent core business objects with identity and lifecycle.
They contain no framework imports and no IO operations.
"""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

CURRENCY_INSTRUMENT_TYPE = "MONEDA"
CASH_UNIT_PRICE = Decimal("1")
# Prices are stored with two decimal places.
PRICE_QUANTUM = Decimal("0.01")


class OrderSide(Enum):
    """Direction of an order.

    BUY/SELL trade securities; CASH_IN/CASH_OUT move cash on the
    currency instrument.
    """

    BUY = "BUY"
    SELL = "SELL"
    CASH_IN = "CASH_IN"
    CASH_OUT = "CASH_OUT"

    @property
    def is_cash_movement(self) -> bool:
        return self in (OrderSide.CASH_IN, OrderSide.CASH_OUT)


class OrderType(Enum):
    """Execution kind of an order."""

    MARKET = "MARKET"
    LIMIT = "LIMIT"


class OrderStatus(Enum):
    """Order status. NEW is the only non-terminal state."""

    NEW = "NEW"
    FILLED = "FILLED"
    REJECTED = "REJECTED"
    CANCELLED = "CANCELLED"


@dataclass(frozen=True)
class User:
    """An account holder placing orders."""

    id: int
    email: Optional[str] = None
    account_number: Optional[str] = None


@dataclass(frozen=True)
class Instrument:
    """A catalog instrument. Type MONEDA marks the cash instrument."""

    id: int
    ticker: Optional[str]
    name: Optional[str]
    type: Optional[str]

    @property
    def is_currency(self) -> bool:
        return self.type == CURRENCY_INSTRUMENT_TYPE


@dataclass(frozen=True)
class Quote:
    """Latest end-of-day market data for an instrument."""

    instrument_id: int
    close: Decimal
    previous_close: Optional[Decimal]
    as_of: Optional[date]


@dataclass(frozen=True)
class OrderDraft:
    """Order fields decided by the lifecycle, before persistence assigns identity."""

    user_id: int
    instrument_id: int
    side: OrderSide
    type: OrderType
    size: int
    price: Decimal
    status: OrderStatus


@dataclass(frozen=True)
class Order:
    """A persisted order.

    Fields are immutable; the only permitted change is NEW -> CANCELLED,
    applied by replacing the entity and saving it again.
    `instrument_type` is the category of the attached instrument when the
    store loads it alongside the order.
    """

    id: int
    user_id: int
    instrument_id: int
    side: OrderSide
    type: OrderType
    size: int
    price: Decimal
    status: OrderStatus
    created_at: datetime
    instrument_type: Optional[str] = None
    instrument_ticker: Optional[str] = None

    @property
    def value(self) -> Decimal:
        """Notional value: size x price."""
        return self.size * self.price

    @property
    def is_currency(self) -> bool:
        return self.instrument_type == CURRENCY_INSTRUMENT_TYPE


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of the affordability check for a prospective order."""

    valid: bool
    reason: Optional[str] = None


@dataclass(frozen=True)
class Position:
    """Derived holding in one instrument (never persisted)."""

    instrument_id: int
    quantity: int
    avg_cost: Decimal

    @property
    def total_cost(self) -> Decimal:
        return self.quantity * self.avg_cost


@dataclass(frozen=True)
class PositionValuation:
    """A position marked to its latest quote."""

    instrument_id: int
    ticker: Optional[str]
    name: Optional[str]
    quantity: int
    avg_cost: Decimal
    current_value: Decimal
    daily_return: Decimal
    total_return: Decimal


@dataclass(frozen=True)
class PortfolioValuation:
    """Portfolio report: cash plus marked positions and weighted daily return."""

    total_value: Decimal
    available_cash: Decimal
    daily_return: Decimal
    positions: tuple[PositionValuation, ...]
