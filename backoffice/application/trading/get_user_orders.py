"""
Use case: List a user's orders.

Input: GetUserOrdersQuery (user_id)
Output: list[OrderResult], newest first
Side effects: None (read-only query).
Failure cases: UserNotFoundError.
"""

import logging

from backoffice.application.trading.dtos import GetUserOrdersQuery, OrderResult
from backoffice.domain.trading.errors import UserNotFoundError
from backoffice.domain.trading.ports import OrderRepository, UserRepository

logger = logging.getLogger(__name__)


class GetUserOrdersUseCase:
    """Read-only query over the order store for one user."""

    def __init__(
        self, user_repo: UserRepository, order_repo: OrderRepository
    ) -> None:
        self._user_repo = user_repo
        self._order_repo = order_repo

    def execute(self, query: GetUserOrdersQuery) -> list[OrderResult]:
        if self._user_repo.get_by_id(query.user_id) is None:
            raise UserNotFoundError(query.user_id)

        orders = self._order_repo.list_for_user(query.user_id)
        logger.info("Retrieved %d orders for user=%d", len(orders), query.user_id)
        return [OrderResult.from_order(order) for order in orders]
