"""
Domain service: Ledger derivation.

Available cash and available shares are never stored. They are folded
from the user's FILLED orders on every call, so the order log stays the
single source of truth.

Cash deltas per filled order (value = size x price):
    currency instrument: +value for CASH_IN, -value for CASH_OUT
    any other instrument: +value for SELL, -value for BUY

Both balances are floored at zero.
"""

import logging
from decimal import Decimal
from typing import Iterable

from backoffice.domain.trading.entities import Order, OrderSide, OrderStatus
from backoffice.domain.trading.ports import OrderRepository

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


def cash_impact(order: Order) -> Decimal:
    """Signed effect of one filled order on the user's cash."""
    if order.is_currency:
        if order.side is OrderSide.CASH_IN:
            return order.value
        if order.side is OrderSide.CASH_OUT:
            return -order.value
        return ZERO

    if order.side is OrderSide.SELL:
        return order.value
    if order.side is OrderSide.BUY:
        return -order.value
    return ZERO


def share_impact(order: Order) -> int:
    """Signed effect of one filled order on the held unit count."""
    if order.side is OrderSide.BUY:
        return order.size
    if order.side is OrderSide.SELL:
        return -order.size
    return 0


def fold_shares(orders: Iterable[Order]) -> int:
    """Sum the share impact of `orders`, clamped to zero."""
    return max(0, sum(share_impact(o) for o in orders))


class LedgerEngine:
    """Derives a user's available cash and shares from the order store."""

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def available_cash(self, user_id: int) -> Decimal:
        """Return the user's spendable cash (never negative)."""
        orders = self._order_repo.list_filled_for_user(user_id)
        logger.debug("Folding %d filled orders for user=%d", len(orders), user_id)

        running = ZERO
        for order in orders:
            running += cash_impact(order)
            logger.debug(
                "Order %d (%s %s) -> cash %s",
                order.id,
                order.side.value,
                order.instrument_ticker,
                running,
            )

        cash = max(ZERO, running)
        logger.info("Available cash for user=%d: %s", user_id, cash)
        return cash

    def available_shares(self, user_id: int, instrument_id: int) -> int:
        """Return how many units of an instrument the user could sell now."""
        orders = self._order_repo.list_for_user_and_instrument(
            user_id, instrument_id, OrderStatus.FILLED
        )
        shares = fold_shares(orders)
        logger.info(
            "Available shares for user=%d instrument=%d: %d",
            user_id,
            instrument_id,
            shares,
        )
        return shares
