"""
Domain service: Order pricing.

Decides the execution price of a prospective order and, for
amount-based requests, how many units that amount buys.

Price rules:
    - CASH_IN / CASH_OUT: always 1 (cash is already in the ledger's unit).
    - MARKET: latest close from the quote source.
    - LIMIT: the caller's price rounded to the stored scale (cents),
      which must stay positive.
"""

import logging
import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from backoffice.domain.trading.entities import (
    CASH_UNIT_PRICE,
    PRICE_QUANTUM,
    OrderSide,
    OrderType,
)
from backoffice.domain.trading.errors import (
    AmountTooSmallError,
    InvalidPriceError,
    MissingPriceError,
    QuoteUnavailableError,
)
from backoffice.domain.trading.ports import MarketQuoteSource

logger = logging.getLogger(__name__)


class PricingResolver:
    """Resolves execution price and amount-derived size for new orders."""

    def __init__(self, quote_source: MarketQuoteSource) -> None:
        self._quote_source = quote_source

    def resolve_price(
        self,
        side: OrderSide,
        order_type: OrderType,
        instrument_id: int,
        supplied_price: Optional[Decimal] = None,
    ) -> Decimal:
        """Return the price the order will be recorded at.

        Args:
            side: Order side.
            order_type: MARKET or LIMIT.
            instrument_id: Instrument being traded.
            supplied_price: Caller price; required for LIMIT orders.

        Returns:
            The execution price.

        Raises:
            QuoteUnavailableError: MARKET order with no quote for the instrument.
            MissingPriceError: LIMIT order without a price that is positive
                once rounded to cents.
        """
        if side.is_cash_movement:
            return CASH_UNIT_PRICE

        if order_type is OrderType.MARKET:
            quote = self._quote_source.get_latest(instrument_id)
            if quote is None or quote.close is None:
                raise QuoteUnavailableError(instrument_id)
            logger.debug(
                "Resolved market price instrument=%d close=%s", instrument_id, quote.close
            )
            return quote.close

        if supplied_price is None:
            raise MissingPriceError()
        price = Decimal(supplied_price).quantize(PRICE_QUANTUM, rounding=ROUND_HALF_UP)
        if price <= 0:
            raise MissingPriceError()
        return price

    @staticmethod
    def resolve_size_from_amount(
        amount: Decimal, price: Optional[Decimal]
    ) -> int:
        """Return how many whole units `amount` buys at `price`.

        Raises:
            InvalidPriceError: If price is missing, zero or negative.
            AmountTooSmallError: If the floored size is not positive.
        """
        if price is None or price <= 0:
            raise InvalidPriceError(price)

        size = math.floor(Decimal(amount) / price)
        if size <= 0:
            raise AmountTooSmallError(amount, price)
        return size
