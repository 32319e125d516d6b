"""
Domain service: Position replay.

Replays FILLED orders in chronological order into current holdings
using the weighted average cost method. Pure logic, no IO.

Ordering is by (created_at, id) so orders sharing a timestamp replay
deterministically.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable

from backoffice.domain.trading.entities import Order, OrderSide, Position

logger = logging.getLogger(__name__)


@dataclass
class _Lot:
    """Running totals for one instrument during a replay."""

    quantity: int = 0
    avg_cost: Decimal = Decimal("0")
    total_cost: Decimal = Decimal("0")


def replay_key(order: Order) -> tuple:
    return (order.created_at, order.id)


class PositionCalculator:
    """Turns a user's filled orders into per-instrument positions.

    Cash movements on the currency instrument are ignored. A SELL that
    takes the quantity to zero or below closes the position; the excess
    of an oversell is not carried forward.
    """

    def calculate(self, filled_orders: Iterable[Order]) -> dict[int, Position]:
        """Return open positions keyed by instrument id.

        Args:
            filled_orders: FILLED orders with instrument category attached,
                in any order.

        Returns:
            Mapping of instrument id to Position, only for quantity > 0.
        """
        lots: dict[int, _Lot] = {}

        for order in sorted(filled_orders, key=replay_key):
            if order.is_currency:
                continue

            logger.debug(
                "Replaying order %d: %s %d @ %s instrument=%d",
                order.id,
                order.side.value,
                order.size,
                order.price,
                order.instrument_id,
            )

            if order.side is OrderSide.BUY:
                self._apply_buy(lots, order)
            elif order.side is OrderSide.SELL:
                self._apply_sell(lots, order)

        return {
            instrument_id: Position(
                instrument_id=instrument_id,
                quantity=lot.quantity,
                avg_cost=lot.avg_cost,
            )
            for instrument_id, lot in lots.items()
            if lot.quantity > 0
        }

    @staticmethod
    def _apply_buy(lots: dict[int, _Lot], order: Order) -> None:
        lot = lots.setdefault(order.instrument_id, _Lot())
        lot.total_cost += order.size * order.price
        lot.quantity += order.size
        lot.avg_cost = lot.total_cost / lot.quantity

    @staticmethod
    def _apply_sell(lots: dict[int, _Lot], order: Order) -> None:
        lot = lots.get(order.instrument_id, _Lot())
        remaining = lot.quantity - order.size

        if remaining < 0:
            logger.warning(
                "Order %d sells %d of instrument=%d but only %d held; closing position",
                order.id,
                order.size,
                order.instrument_id,
                lot.quantity,
            )

        if remaining <= 0:
            if lots.pop(order.instrument_id, None) is not None:
                logger.info("Position closed for instrument=%d", order.instrument_id)
            return

        lot.quantity = remaining
        lot.total_cost = lot.avg_cost * remaining
