"""
Data Transfer Objects for the trading application layer.

DTOs carry data between the interface and application layers.
They are plain dataclasses with no behavior.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from backoffice.domain.trading.entities import Order, OrderSide, OrderType


@dataclass(frozen=True)
class CreateOrderCommand:
    """Input DTO for placing an order.

    Attributes:
        user_id: Account placing the order.
        instrument_id: Instrument traded (the currency instrument for cash moves).
        side: BUY, SELL, CASH_IN or CASH_OUT.
        type: MARKET or LIMIT.
        size: Units to trade. Takes precedence over amount.
        amount: Money to spend; converted to a whole number of units.
        price: Limit price. Ignored for MARKET and cash orders.
    """

    user_id: int
    instrument_id: int
    side: OrderSide
    type: OrderType
    size: Optional[int] = None
    amount: Optional[Decimal] = None
    price: Optional[Decimal] = None


@dataclass(frozen=True)
class CancelOrderCommand:
    """Input DTO for cancelling a resting order."""

    order_id: int


@dataclass(frozen=True)
class GetUserOrdersQuery:
    """Input DTO for listing a user's orders."""

    user_id: int


@dataclass(frozen=True)
class GetPortfolioQuery:
    """Input DTO for a portfolio report."""

    user_id: int


@dataclass(frozen=True)
class OrderResult:
    """Output DTO for a single order.

    Attributes:
        id: Order identifier.
        user_id: Owning user.
        instrument_id: Traded instrument.
        side: Order side value.
        type: Order type value.
        size: Units.
        price: Execution or limit price.
        status: NEW, FILLED, REJECTED or CANCELLED.
        created_at: Creation timestamp.
        reason: Why the order was rejected, when known at creation.
    """

    id: int
    user_id: int
    instrument_id: int
    side: str
    type: str
    size: int
    price: Decimal
    status: str
    created_at: datetime
    reason: Optional[str] = None

    @classmethod
    def from_order(cls, order: Order, reason: Optional[str] = None) -> "OrderResult":
        return cls(
            id=order.id,
            user_id=order.user_id,
            instrument_id=order.instrument_id,
            side=order.side.value,
            type=order.type.value,
            size=order.size,
            price=order.price,
            status=order.status.value,
            created_at=order.created_at,
            reason=reason,
        )


@dataclass(frozen=True)
class PositionResult:
    """Output DTO for one valued position."""

    instrument_id: int
    ticker: Optional[str]
    name: Optional[str]
    quantity: int
    avg_price: Decimal
    total_value: Decimal
    daily_return: Decimal
    total_return: Decimal


@dataclass(frozen=True)
class PortfolioResult:
    """Output DTO for a portfolio report.

    Attributes:
        total_value: Cash plus the market value of reported positions.
        available_cash: Derived spendable cash.
        daily_return: Value-weighted daily return (%).
        positions: Positions that have a quote and catalog entry.
    """

    total_value: Decimal
    available_cash: Decimal
    daily_return: Decimal
    positions: list[PositionResult]


@dataclass(frozen=True)
class ListInstrumentsQuery:
    """Input DTO for browsing the instrument catalog.

    Attributes:
        search: Optional text matched against ticker and name. Blank
            or missing returns the whole catalog.
    """

    search: Optional[str] = None


@dataclass(frozen=True)
class InstrumentResult:
    """Output DTO for one catalog instrument."""

    id: int
    ticker: Optional[str]
    name: Optional[str]
    type: Optional[str]
