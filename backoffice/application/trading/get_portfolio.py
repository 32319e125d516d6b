"""
Use case: Value a user's portfolio.

Input: GetPortfolioQuery (user_id)
Output: PortfolioResult
Side effects: None (read-only query).
Failure cases: UserNotFoundError.

Filled orders and available cash are fetched concurrently; both are
read-only and independent of each other.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal

from backoffice.application.trading.dtos import (
    GetPortfolioQuery,
    PortfolioResult,
    PositionResult,
)
from backoffice.domain.trading.entities import PortfolioValuation, PositionValuation
from backoffice.domain.trading.errors import UserNotFoundError
from backoffice.domain.trading.ledger import LedgerEngine
from backoffice.domain.trading.ports import (
    InstrumentRepository,
    MarketQuoteSource,
    OrderRepository,
    UserRepository,
)
from backoffice.domain.trading.position_calculator import PositionCalculator
from backoffice.domain.trading.valuation import portfolio_daily_return, value_position

logger = logging.getLogger(__name__)


class GetPortfolioUseCase:
    """Combines positions, quotes and cash into a portfolio report.

    Positions without a quote or without a catalog entry are left out
    of the report; they are not an error.
    """

    def __init__(
        self,
        user_repo: UserRepository,
        order_repo: OrderRepository,
        instrument_repo: InstrumentRepository,
        quote_source: MarketQuoteSource,
        ledger: LedgerEngine,
        calculator: PositionCalculator,
        max_workers: int = 2,
    ) -> None:
        self._user_repo = user_repo
        self._order_repo = order_repo
        self._instrument_repo = instrument_repo
        self._quote_source = quote_source
        self._ledger = ledger
        self._calculator = calculator
        self._max_workers = max_workers

    def execute(self, query: GetPortfolioQuery) -> PortfolioResult:
        """Run the get-portfolio use case."""
        if self._user_repo.get_by_id(query.user_id) is None:
            raise UserNotFoundError(query.user_id)

        valuation = self.valuate(query.user_id)
        return PortfolioResult(
            total_value=valuation.total_value,
            available_cash=valuation.available_cash,
            daily_return=valuation.daily_return,
            positions=[
                PositionResult(
                    instrument_id=p.instrument_id,
                    ticker=p.ticker,
                    name=p.name,
                    quantity=p.quantity,
                    avg_price=p.avg_cost,
                    total_value=p.current_value,
                    daily_return=p.daily_return,
                    total_return=p.total_return,
                )
                for p in valuation.positions
            ],
        )

    def valuate(self, user_id: int) -> PortfolioValuation:
        """Build the valuation for a user from the order history."""
        logger.info("Valuing portfolio for user=%d", user_id)

        with ThreadPoolExecutor(max_workers=self._max_workers) as executor:
            orders_future = executor.submit(self._order_repo.list_filled_for_user, user_id)
            cash_future = executor.submit(self._ledger.available_cash, user_id)
            filled_orders = orders_future.result()
            available_cash = cash_future.result()

        positions = self._calculator.calculate(filled_orders)
        quotes = {
            quote.instrument_id: quote
            for quote in self._quote_source.get_latest_batch(set(positions))
        }

        valued: list[PositionValuation] = []
        total_value: Decimal = available_cash
        for instrument_id, position in positions.items():
            quote = quotes.get(instrument_id)
            if quote is None:
                logger.warning("No quote for instrument=%d; position skipped", instrument_id)
                continue
            instrument = self._instrument_repo.get_by_id(instrument_id)
            if instrument is None:
                logger.warning("Instrument %d missing from catalog; position skipped", instrument_id)
                continue

            item = value_position(position, instrument, quote)
            valued.append(item)
            total_value += item.current_value

        daily_return = portfolio_daily_return(valued, total_value)
        logger.info(
            "Portfolio user=%d: %d positions, total=%s, daily_return=%s",
            user_id,
            len(valued),
            total_value,
            daily_return,
        )
        return PortfolioValuation(
            total_value=total_value,
            available_cash=available_cash,
            daily_return=daily_return,
            positions=tuple(valued),
        )
