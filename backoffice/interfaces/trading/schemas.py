"""
Pydantic schemas for trading API request/response validation.

These schemas enforce input shape and define the API contract.
Business rules (affordability, price resolution) live in the domain.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from backoffice.domain.trading.entities import OrderSide, OrderType


class CreateOrderRequest(BaseModel):
    """Request schema for order placement.

    Attributes:
        user_id: User placing the order.
        instrument_id: Instrument to trade. Cash moves use the currency instrument.
        side: BUY, SELL, CASH_IN or CASH_OUT.
        type: MARKET executes at the latest close; LIMIT rests at `price`.
        size: Units to trade. Required if amount is not provided.
        amount: Money to spend; the largest whole size it buys is used.
        price: Limit price, at most two decimals. Required for LIMIT
            orders, ignored otherwise.
    """

    user_id: int = Field(..., gt=0, description="User ID placing the order")
    instrument_id: int = Field(..., gt=0, description="Instrument ID to trade")
    side: OrderSide = Field(..., description="Order side")
    type: OrderType = Field(..., description="Order type")
    size: Optional[int] = Field(default=None, gt=0, description="Units to trade")
    amount: Optional[Decimal] = Field(
        default=None, gt=0, description="Total amount to convert into a size"
    )
    price: Optional[Decimal] = Field(
        default=None,
        gt=0,
        decimal_places=2,
        description="Price per unit for LIMIT orders, in cents precision",
    )


class OrderResponse(BaseModel):
    """A single order in the response."""

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


class OrderListResponse(BaseModel):
    """Response schema for a user's orders, newest first."""

    orders: list[OrderResponse]


class PositionItem(BaseModel):
    """A valued position in the portfolio response."""

    instrument_id: int
    ticker: Optional[str]
    name: Optional[str]
    quantity: int
    total_value: Decimal = Field(..., description="Market value of the position")
    daily_return: Decimal = Field(
        ..., allow_inf_nan=True, description="Daily return of the position (%)"
    )
    total_return: Decimal = Field(
        ..., allow_inf_nan=True, description="Return since purchase (%)"
    )
    avg_price: Decimal = Field(..., description="Weighted average purchase price")


class PortfolioResponse(BaseModel):
    """Response schema for the portfolio endpoint."""

    total_value: Decimal = Field(..., description="Cash plus positions")
    available_cash: Decimal = Field(..., description="Cash available to trade")
    daily_return: Decimal = Field(
        ..., allow_inf_nan=True, description="Value-weighted daily return (%)"
    )
    positions: list[PositionItem]


class InstrumentResponse(BaseModel):
    """A catalog instrument. Type MONEDA marks the cash instrument."""

    id: int
    ticker: Optional[str]
    name: Optional[str]
    type: Optional[str]


class InstrumentListResponse(BaseModel):
    """Response schema for catalog listings, ordered by id."""

    instruments: list[InstrumentResponse]


class HealthResponse(BaseModel):
    """Response schema for health check endpoint."""

    status: str
    version: str


class ReadinessResponse(HealthResponse):
    """Response schema for the readiness check."""

    database: str


class ErrorResponse(BaseModel):
    """Standard error response schema.

    Never exposes stack traces or internal details.
    """

    error: str
    detail: str | None = None
