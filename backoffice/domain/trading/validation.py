"""
Domain service: Order validation.

Answers whether a prospective order is affordable (BUY, CASH_OUT) or
coverable (SELL). The answer is advisory: an invalid order is still
recorded, as REJECTED, by the lifecycle.
"""

import logging
from decimal import Decimal

from backoffice.domain.trading.entities import OrderSide, ValidationResult
from backoffice.domain.trading.ledger import LedgerEngine

logger = logging.getLogger(__name__)

INSUFFICIENT_CASH = "insufficient cash"
INSUFFICIENT_SHARES = "insufficient shares"


class OrderValidator:
    """Checks a prospective order against the user's derived balances."""

    def __init__(self, ledger: LedgerEngine) -> None:
        self._ledger = ledger

    def validate(
        self,
        user_id: int,
        instrument_id: int,
        side: OrderSide,
        size: int,
        price: Decimal,
    ) -> ValidationResult:
        """Return whether the order can be honoured from current balances."""
        if side is OrderSide.CASH_IN:
            return ValidationResult(valid=True)

        if side in (OrderSide.BUY, OrderSide.CASH_OUT):
            required = size * price
            available = self._ledger.available_cash(user_id)
            if required > available:
                logger.info(
                    "Order invalid for user=%d: requires %s, cash %s",
                    user_id,
                    required,
                    available,
                )
                return ValidationResult(valid=False, reason=INSUFFICIENT_CASH)
            return ValidationResult(valid=True)

        available_shares = self._ledger.available_shares(user_id, instrument_id)
        if size > available_shares:
            logger.info(
                "Order invalid for user=%d: sells %d of instrument=%d, holds %d",
                user_id,
                size,
                instrument_id,
                available_shares,
            )
            return ValidationResult(valid=False, reason=INSUFFICIENT_SHARES)
        return ValidationResult(valid=True)
