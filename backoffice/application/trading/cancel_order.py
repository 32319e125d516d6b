"""
Use case: Cancel a resting order.

Input: CancelOrderCommand (order_id)
Output: OrderResult
Side effects: Moves the order from NEW to CANCELLED.
Failure cases: OrderNotFoundError, OrderNotCancellableError.
"""

import logging
from dataclasses import replace

from backoffice.application.trading.dtos import CancelOrderCommand, OrderResult
from backoffice.domain.trading.entities import OrderStatus
from backoffice.domain.trading.errors import (
    OrderNotCancellableError,
    OrderNotFoundError,
)
from backoffice.domain.trading.ports import OrderRepository

logger = logging.getLogger(__name__)


class CancelOrderUseCase:
    """Applies the only mutation an order allows: NEW -> CANCELLED."""

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def execute(self, command: CancelOrderCommand) -> OrderResult:
        """Run the cancel-order use case.

        Raises:
            OrderNotFoundError: If the order does not exist.
            OrderNotCancellableError: If the order is not NEW.
        """
        order = self._order_repo.get_by_id(command.order_id)
        if order is None:
            raise OrderNotFoundError(command.order_id)

        if order.status is not OrderStatus.NEW:
            raise OrderNotCancellableError(order.id, order.status.value)

        cancelled = self._order_repo.save(replace(order, status=OrderStatus.CANCELLED))
        logger.info("Order %d cancelled", cancelled.id)
        return OrderResult.from_order(cancelled)
