"""
Domain-specific errors for the trading bounded context.

All errors raised from the domain layer must be defined here.
These are mapped to HTTP responses at the interface layer.
No framework imports allowed.

An unaffordable order is not an error: it is persisted as REJECTED.
"""

from decimal import Decimal
from typing import Optional


class TradingDomainError(Exception):
    """Base error for all trading domain errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


# --- Not found -------------------------------------------------------


class EntityNotFoundError(TradingDomainError):
    """Base for lookups that returned nothing."""


class UserNotFoundError(EntityNotFoundError):
    """Raised when a user id does not exist."""

    def __init__(self, user_id: int) -> None:
        super().__init__(f"User not found: {user_id}")
        self.user_id = user_id


class InstrumentNotFoundError(EntityNotFoundError):
    """Raised when an instrument id does not exist in the catalog."""

    def __init__(self, instrument_id: int) -> None:
        super().__init__(f"Instrument not found: {instrument_id}")
        self.instrument_id = instrument_id


class OrderNotFoundError(EntityNotFoundError):
    """Raised when an order id does not exist."""

    def __init__(self, order_id: int) -> None:
        super().__init__(f"Order not found: {order_id}")
        self.order_id = order_id


# --- Invalid input ---------------------------------------------------


class InvalidOrderInputError(TradingDomainError):
    """Base for malformed or impossible order requests."""


class MissingSizeOrAmountError(InvalidOrderInputError):
    """Raised when neither size nor amount is supplied."""

    def __init__(self) -> None:
        super().__init__("Either size or amount must be provided")


class InvalidSizeError(InvalidOrderInputError):
    """Raised when an explicit size is not a positive integer."""

    def __init__(self, size: int) -> None:
        super().__init__(f"Size must be a positive integer, got {size}")
        self.size = size


class MissingPriceError(InvalidOrderInputError):
    """Raised when a LIMIT order has no positive price."""

    def __init__(self) -> None:
        super().__init__("Price is required for LIMIT orders")


class InvalidPriceError(InvalidOrderInputError):
    """Raised when a size must be derived from an amount without a usable price."""

    def __init__(self, price: Optional[Decimal]) -> None:
        super().__init__(f"Cannot calculate size without a positive price, got {price}")
        self.price = price


class AmountTooSmallError(InvalidOrderInputError):
    """Raised when an amount does not buy a single unit at the resolved price."""

    def __init__(self, amount: Decimal, price: Decimal) -> None:
        super().__init__(
            f"Amount too small to buy any shares: amount {amount}, price {price}"
        )
        self.amount = amount
        self.price = price


# --- Market data -----------------------------------------------------


class QuoteUnavailableError(TradingDomainError):
    """Raised when a MARKET order's instrument has no market data."""

    def __init__(self, instrument_id: int) -> None:
        super().__init__(f"Market data not available for instrument: {instrument_id}")
        self.instrument_id = instrument_id


# --- State conflicts -------------------------------------------------


class OrderStateConflictError(TradingDomainError):
    """Base for transitions the order's current status does not allow."""


class OrderNotCancellableError(OrderStateConflictError):
    """Raised when cancelling an order that is not NEW."""

    def __init__(self, order_id: int, status: str) -> None:
        super().__init__(
            f"Only NEW orders can be cancelled: order {order_id} is {status}"
        )
        self.order_id = order_id
        self.status = status
