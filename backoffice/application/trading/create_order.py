"""
Use case: Place an order.

Input: CreateOrderCommand (user, instrument, side, type, size or amount, price)
Output: OrderResult
Side effects: Persists exactly one order.
Failure cases: UserNotFoundError, InstrumentNotFoundError,
    MissingSizeOrAmountError, InvalidSizeError, MissingPriceError,
    InvalidPriceError, AmountTooSmallError, QuoteUnavailableError.

An unaffordable order is not a failure: it is stored as REJECTED.
"""

import logging

from backoffice.application.trading.dtos import CreateOrderCommand, OrderResult
from backoffice.domain.trading.entities import (
    OrderDraft,
    OrderStatus,
    OrderType,
)
from backoffice.domain.trading.errors import (
    InstrumentNotFoundError,
    InvalidSizeError,
    MissingSizeOrAmountError,
    UserNotFoundError,
)
from backoffice.domain.trading.ports import (
    InstrumentRepository,
    OrderRepository,
    UserRepository,
)
from backoffice.domain.trading.pricing import PricingResolver
from backoffice.domain.trading.validation import OrderValidator

logger = logging.getLogger(__name__)


class CreateOrderUseCase:
    """Orchestrates the creation transition of the order lifecycle.

    Resolves price and size, runs the advisory validation, and persists
    the order as REJECTED, FILLED or NEW (a resting LIMIT trade).
    """

    def __init__(
        self,
        user_repo: UserRepository,
        instrument_repo: InstrumentRepository,
        order_repo: OrderRepository,
        pricing: PricingResolver,
        validator: OrderValidator,
    ) -> None:
        self._user_repo = user_repo
        self._instrument_repo = instrument_repo
        self._order_repo = order_repo
        self._pricing = pricing
        self._validator = validator

    def execute(self, command: CreateOrderCommand) -> OrderResult:
        """Run the create-order use case.

        Args:
            command: The order request.

        Returns:
            The persisted order, with the rejection reason if rejected.
        """
        logger.info(
            "Creating order user=%d instrument=%d side=%s type=%s",
            command.user_id,
            command.instrument_id,
            command.side.value,
            command.type.value,
        )

        if self._user_repo.get_by_id(command.user_id) is None:
            raise UserNotFoundError(command.user_id)
        if self._instrument_repo.get_by_id(command.instrument_id) is None:
            raise InstrumentNotFoundError(command.instrument_id)

        if command.size is None and command.amount is None:
            raise MissingSizeOrAmountError()
        if command.size is not None and command.size <= 0:
            raise InvalidSizeError(command.size)

        price = self._pricing.resolve_price(
            command.side, command.type, command.instrument_id, command.price
        )
        size = command.size
        if size is None:
            size = self._pricing.resolve_size_from_amount(command.amount, price)

        validation = self._validator.validate(
            command.user_id, command.instrument_id, command.side, size, price
        )

        if not validation.valid:
            status = OrderStatus.REJECTED
        elif command.type is OrderType.MARKET or command.side.is_cash_movement:
            status = OrderStatus.FILLED
        else:
            status = OrderStatus.NEW

        order = self._order_repo.create(
            OrderDraft(
                user_id=command.user_id,
                instrument_id=command.instrument_id,
                side=command.side,
                type=command.type,
                size=size,
                price=price,
                status=status,
            )
        )

        logger.info(
            "Order %d stored as %s (size=%d price=%s)",
            order.id,
            order.status.value,
            order.size,
            order.price,
        )
        return OrderResult.from_order(order, reason=validation.reason)
