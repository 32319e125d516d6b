"""
Domain layer tests for the trading bounded context.

Tests entity behavior, error hierarchy and pricing rules.
No database, no HTTP: ports are replaced with MagicMock.
"""

from datetime import date, datetime, timezone
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from backoffice.domain.trading.entities import (
    Instrument,
    Order,
    OrderSide,
    OrderStatus,
    OrderType,
    Position,
    Quote,
)
from backoffice.domain.trading.errors import (
    AmountTooSmallError,
    EntityNotFoundError,
    InstrumentNotFoundError,
    InvalidOrderInputError,
    InvalidPriceError,
    MissingPriceError,
    OrderNotCancellableError,
    OrderNotFoundError,
    OrderStateConflictError,
    QuoteUnavailableError,
    TradingDomainError,
    UserNotFoundError,
)
from backoffice.domain.trading.ports import MarketQuoteSource
from backoffice.domain.trading.pricing import PricingResolver


def _order(**overrides) -> Order:
    fields = dict(
        id=1,
        user_id=1,
        instrument_id=1,
        side=OrderSide.BUY,
        type=OrderType.MARKET,
        size=10,
        price=Decimal("150"),
        status=OrderStatus.FILLED,
        created_at=datetime(2024, 1, 15, tzinfo=timezone.utc),
        instrument_type="ACCIONES",
    )
    fields.update(overrides)
    return Order(**fields)


def _quote(close: Decimal | None = Decimal("160"), previous_close=Decimal("155")) -> Quote:
    return Quote(
        instrument_id=1,
        close=close,
        previous_close=previous_close,
        as_of=date(2024, 1, 15),
    )


# ══════════════════════════════════════════════════════════════════════
# Entities
# ══════════════════════════════════════════════════════════════════════


class TestEntities:
    """Tests for computed properties on domain entities."""

    def test_order_value_is_size_times_price(self) -> None:
        """Order value must be size x price."""
        assert _order(size=100, price=Decimal("150")).value == Decimal("15000")

    def test_order_is_currency_from_instrument_type(self) -> None:
        """Only orders on a MONEDA instrument are cash movements on the ledger."""
        assert _order(instrument_type="MONEDA").is_currency is True
        assert _order(instrument_type="ACCIONES").is_currency is False
        assert _order(instrument_type=None).is_currency is False

    def test_instrument_is_currency(self) -> None:
        """Instrument type MONEDA marks the cash instrument."""
        assert Instrument(id=66, ticker="ARS", name="PESOS", type="MONEDA").is_currency
        assert not Instrument(id=1, ticker="AAPL", name="Apple", type="ACCIONES").is_currency

    def test_cash_sides(self) -> None:
        """CASH_IN and CASH_OUT are cash movements, BUY and SELL are not."""
        assert OrderSide.CASH_IN.is_cash_movement
        assert OrderSide.CASH_OUT.is_cash_movement
        assert not OrderSide.BUY.is_cash_movement
        assert not OrderSide.SELL.is_cash_movement

    def test_position_total_cost(self) -> None:
        """Position total cost must be quantity x average cost."""
        position = Position(instrument_id=1, quantity=50, avg_cost=Decimal("150"))
        assert position.total_cost == Decimal("7500")

    def test_order_is_immutable(self) -> None:
        """Orders are frozen; status changes go through replacement."""
        order = _order()
        with pytest.raises(AttributeError):
            order.status = OrderStatus.CANCELLED  # type: ignore[misc]


# ══════════════════════════════════════════════════════════════════════
# Errors
# ══════════════════════════════════════════════════════════════════════


class TestErrors:
    """Tests for the domain error hierarchy."""

    def test_not_found_family(self) -> None:
        """Lookups that return nothing share the not-found base."""
        for error in (UserNotFoundError(1), InstrumentNotFoundError(2), OrderNotFoundError(3)):
            assert isinstance(error, EntityNotFoundError)
            assert isinstance(error, TradingDomainError)

    def test_invalid_input_family(self) -> None:
        """Price and amount problems are invalid input."""
        assert isinstance(MissingPriceError(), InvalidOrderInputError)
        assert isinstance(InvalidPriceError(None), InvalidOrderInputError)
        assert isinstance(AmountTooSmallError(Decimal("100"), Decimal("1000")), InvalidOrderInputError)

    def test_cancel_conflict_message(self) -> None:
        """Cancelling a non-NEW order names the rule that was broken."""
        error = OrderNotCancellableError(7, "FILLED")
        assert isinstance(error, OrderStateConflictError)
        assert "Only NEW orders can be cancelled" in error.message
        assert error.status == "FILLED"

    def test_error_message_includes_id(self) -> None:
        """Error messages must include the offending identifier."""
        assert "42" in UserNotFoundError(42).message
        assert "9" in QuoteUnavailableError(9).message


# ══════════════════════════════════════════════════════════════════════
# Pricing
# ══════════════════════════════════════════════════════════════════════


@pytest.fixture
def quote_source() -> MagicMock:
    return MagicMock(spec=MarketQuoteSource)


class TestResolvePrice:
    """Tests for PricingResolver.resolve_price."""

    def test_cash_orders_price_at_one(self, quote_source: MagicMock) -> None:
        """Cash movements always price at 1, whatever the type."""
        resolver = PricingResolver(quote_source)
        for side in (OrderSide.CASH_IN, OrderSide.CASH_OUT):
            assert resolver.resolve_price(side, OrderType.MARKET, 66) == Decimal("1")
            assert resolver.resolve_price(side, OrderType.LIMIT, 66, Decimal("5")) == Decimal("1")
        quote_source.get_latest.assert_not_called()

    def test_market_uses_latest_close(self, quote_source: MagicMock) -> None:
        """MARKET orders execute at the latest close, ignoring any supplied price."""
        quote_source.get_latest.return_value = _quote(close=Decimal("160"))
        resolver = PricingResolver(quote_source)

        price = resolver.resolve_price(OrderSide.BUY, OrderType.MARKET, 1, Decimal("999"))

        assert price == Decimal("160")
        quote_source.get_latest.assert_called_once_with(1)

    def test_market_without_quote_raises(self, quote_source: MagicMock) -> None:
        """MARKET orders need market data."""
        quote_source.get_latest.return_value = None
        with pytest.raises(QuoteUnavailableError):
            PricingResolver(quote_source).resolve_price(OrderSide.SELL, OrderType.MARKET, 1)

    def test_market_with_null_close_raises(self, quote_source: MagicMock) -> None:
        """A quote without a close is no market data."""
        quote_source.get_latest.return_value = _quote(close=None)
        with pytest.raises(QuoteUnavailableError):
            PricingResolver(quote_source).resolve_price(OrderSide.BUY, OrderType.MARKET, 1)

    def test_limit_uses_supplied_price(self, quote_source: MagicMock) -> None:
        """LIMIT orders rest at the caller's price."""
        resolver = PricingResolver(quote_source)
        price = resolver.resolve_price(OrderSide.BUY, OrderType.LIMIT, 1, Decimal("140.5"))
        assert price == Decimal("140.5")
        quote_source.get_latest.assert_not_called()

    def test_limit_price_rounded_to_cents(self, quote_source: MagicMock) -> None:
        """The price checked and sized against is the one the store keeps."""
        resolver = PricingResolver(quote_source)
        price = resolver.resolve_price(OrderSide.BUY, OrderType.LIMIT, 1, Decimal("150.129"))
        assert price == Decimal("150.13")
        assert str(price) == "150.13"

    @pytest.mark.parametrize(
        "supplied", [None, Decimal("0"), Decimal("-3"), Decimal("0.004")]
    )
    def test_limit_without_positive_price_raises(
        self, quote_source: MagicMock, supplied
    ) -> None:
        """LIMIT orders need a positive price."""
        with pytest.raises(MissingPriceError):
            PricingResolver(quote_source).resolve_price(
                OrderSide.BUY, OrderType.LIMIT, 1, supplied
            )


class TestResolveSizeFromAmount:
    """Tests for PricingResolver.resolve_size_from_amount."""

    def test_exact_division(self) -> None:
        """15000 at 150 buys exactly 100 units."""
        assert PricingResolver.resolve_size_from_amount(Decimal("15000"), Decimal("150")) == 100

    def test_floors_fractional_size(self) -> None:
        """The size is the largest whole number of units the amount buys."""
        assert PricingResolver.resolve_size_from_amount(Decimal("1000"), Decimal("300")) == 3

    def test_amount_below_one_unit_raises(self) -> None:
        """100 at 1000 buys nothing."""
        with pytest.raises(AmountTooSmallError):
            PricingResolver.resolve_size_from_amount(Decimal("100"), Decimal("1000"))

    @pytest.mark.parametrize("price", [None, Decimal("0"), Decimal("-1")])
    def test_unusable_price_raises(self, price) -> None:
        """A size cannot be derived without a positive price."""
        with pytest.raises(InvalidPriceError):
            PricingResolver.resolve_size_from_amount(Decimal("1000"), price)
