"""
Tests for ledger derivation and order validation.

Available cash and shares are folded from filled orders on every call;
the order store is a MagicMock returning hand-built orders.
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from backoffice.domain.trading.entities import (
    Order,
    OrderSide,
    OrderStatus,
    OrderType,
)
from backoffice.domain.trading.ledger import (
    LedgerEngine,
    cash_impact,
    fold_shares,
    share_impact,
)
from backoffice.domain.trading.ports import OrderRepository
from backoffice.domain.trading.validation import (
    INSUFFICIENT_CASH,
    INSUFFICIENT_SHARES,
    OrderValidator,
)

_T0 = datetime(2024, 1, 15, 10, 0, tzinfo=timezone.utc)


def _filled(
    order_id: int,
    side: OrderSide,
    size: int,
    price: str,
    instrument_id: int = 1,
    instrument_type: str = "ACCIONES",
) -> Order:
    return Order(
        id=order_id,
        user_id=1,
        instrument_id=instrument_id,
        side=side,
        type=OrderType.MARKET,
        size=size,
        price=Decimal(price),
        status=OrderStatus.FILLED,
        created_at=_T0 + timedelta(minutes=order_id),
        instrument_type=instrument_type,
    )


def _cash(order_id: int, side: OrderSide, amount: int) -> Order:
    return _filled(order_id, side, amount, "1", instrument_id=66, instrument_type="MONEDA")


@pytest.fixture
def order_repo() -> MagicMock:
    return MagicMock(spec=OrderRepository)


# ══════════════════════════════════════════════════════════════════════
# Per-order impact
# ══════════════════════════════════════════════════════════════════════


class TestCashImpact:
    """Tests for the signed cash effect of one order."""

    def test_cash_in_adds(self) -> None:
        assert cash_impact(_cash(1, OrderSide.CASH_IN, 1000)) == Decimal("1000")

    def test_cash_out_subtracts(self) -> None:
        assert cash_impact(_cash(1, OrderSide.CASH_OUT, 400)) == Decimal("-400")

    def test_buy_subtracts_value(self) -> None:
        assert cash_impact(_filled(1, OrderSide.BUY, 100, "150")) == Decimal("-15000")

    def test_sell_adds_value(self) -> None:
        assert cash_impact(_filled(1, OrderSide.SELL, 50, "160")) == Decimal("8000")

    def test_trade_side_on_currency_has_no_effect(self) -> None:
        """BUY/SELL on the currency instrument do not move cash."""
        assert cash_impact(_cash(1, OrderSide.BUY, 500)) == Decimal("0")


class TestShareImpact:
    """Tests for the signed share effect of one order."""

    def test_buy_and_sell(self) -> None:
        assert share_impact(_filled(1, OrderSide.BUY, 100, "150")) == 100
        assert share_impact(_filled(2, OrderSide.SELL, 30, "150")) == -30

    def test_fold_clamps_at_zero(self) -> None:
        """Selling more than was bought never reports negative shares."""
        orders = [_filled(1, OrderSide.BUY, 10, "150"), _filled(2, OrderSide.SELL, 25, "150")]
        assert fold_shares(orders) == 0


# ══════════════════════════════════════════════════════════════════════
# LedgerEngine
# ══════════════════════════════════════════════════════════════════════


class TestLedgerEngine:
    """Tests for derived balances."""

    def test_available_cash_scenario(self, order_repo: MagicMock) -> None:
        """Deposit 100000, buy 100 @150, sell 50 @160 leaves 93000."""
        order_repo.list_filled_for_user.return_value = [
            _cash(1, OrderSide.CASH_IN, 100_000),
            _filled(2, OrderSide.BUY, 100, "150"),
            _filled(3, OrderSide.SELL, 50, "160"),
        ]

        cash = LedgerEngine(order_repo).available_cash(1)

        assert cash == Decimal("93000")
        order_repo.list_filled_for_user.assert_called_once_with(1)

    def test_available_cash_clamped_at_zero(self, order_repo: MagicMock) -> None:
        """A negative running total is reported as zero."""
        order_repo.list_filled_for_user.return_value = [
            _cash(1, OrderSide.CASH_IN, 1000),
            _filled(2, OrderSide.BUY, 10, "200"),
        ]
        assert LedgerEngine(order_repo).available_cash(1) == Decimal("0")

    def test_available_cash_only_debits(self, order_repo: MagicMock) -> None:
        """A history of withdrawals and purchases with no credit reports zero."""
        order_repo.list_filled_for_user.return_value = [
            _cash(1, OrderSide.CASH_OUT, 500),
            _filled(2, OrderSide.BUY, 10, "150"),
            _cash(3, OrderSide.CASH_OUT, 1),
        ]
        assert LedgerEngine(order_repo).available_cash(1) == Decimal("0")

    def test_available_cash_is_repeatable(self, order_repo: MagicMock) -> None:
        """Folding the same history twice gives the same balance."""
        order_repo.list_filled_for_user.return_value = [
            _cash(1, OrderSide.CASH_IN, 100_000),
            _filled(2, OrderSide.BUY, 100, "150"),
            _filled(3, OrderSide.SELL, 50, "160"),
        ]
        ledger = LedgerEngine(order_repo)

        assert ledger.available_cash(1) == ledger.available_cash(1) == Decimal("93000")

    def test_available_cash_without_orders(self, order_repo: MagicMock) -> None:
        order_repo.list_filled_for_user.return_value = []
        assert LedgerEngine(order_repo).available_cash(1) == Decimal("0")

    def test_available_shares(self, order_repo: MagicMock) -> None:
        """Shares are bought minus sold on the requested instrument."""
        order_repo.list_for_user_and_instrument.return_value = [
            _filled(1, OrderSide.BUY, 100, "150"),
            _filled(2, OrderSide.SELL, 50, "160"),
        ]

        shares = LedgerEngine(order_repo).available_shares(1, 1)

        assert shares == 50
        order_repo.list_for_user_and_instrument.assert_called_once_with(
            1, 1, OrderStatus.FILLED
        )


# ══════════════════════════════════════════════════════════════════════
# OrderValidator
# ══════════════════════════════════════════════════════════════════════


class TestOrderValidator:
    """Tests for the affordability check."""

    @pytest.fixture
    def ledger(self) -> MagicMock:
        ledger = MagicMock(spec=LedgerEngine)
        ledger.available_cash.return_value = Decimal("10000")
        ledger.available_shares.return_value = 50
        return ledger

    def test_cash_in_always_valid(self, ledger: MagicMock) -> None:
        """Deposits need no balance."""
        result = OrderValidator(ledger).validate(1, 66, OrderSide.CASH_IN, 10**9, Decimal("1"))
        assert result.valid
        ledger.available_cash.assert_not_called()

    def test_buy_within_cash(self, ledger: MagicMock) -> None:
        result = OrderValidator(ledger).validate(1, 1, OrderSide.BUY, 50, Decimal("200"))
        assert result.valid
        assert result.reason is None

    def test_buy_exceeding_cash(self, ledger: MagicMock) -> None:
        result = OrderValidator(ledger).validate(1, 1, OrderSide.BUY, 51, Decimal("200"))
        assert not result.valid
        assert result.reason == INSUFFICIENT_CASH

    def test_cash_out_exceeding_cash(self, ledger: MagicMock) -> None:
        """Withdrawals are checked against cash like purchases."""
        result = OrderValidator(ledger).validate(1, 66, OrderSide.CASH_OUT, 10_001, Decimal("1"))
        assert not result.valid
        assert result.reason == INSUFFICIENT_CASH

    def test_sell_within_shares(self, ledger: MagicMock) -> None:
        result = OrderValidator(ledger).validate(1, 1, OrderSide.SELL, 50, Decimal("160"))
        assert result.valid
        ledger.available_shares.assert_called_once_with(1, 1)

    def test_sell_exceeding_shares(self, ledger: MagicMock) -> None:
        result = OrderValidator(ledger).validate(1, 1, OrderSide.SELL, 51, Decimal("160"))
        assert not result.valid
        assert result.reason == INSUFFICIENT_SHARES
