"""
Dependency injection for the trading bounded context.

Provides FastAPI dependency functions that wire infrastructure
adapters into use cases via constructor injection.
These are the composition root for the trading context.
"""

from functools import lru_cache

from fastapi import Depends
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine

from backoffice.application.trading.cancel_order import CancelOrderUseCase
from backoffice.application.trading.create_order import CreateOrderUseCase
from backoffice.application.trading.get_portfolio import GetPortfolioUseCase
from backoffice.application.trading.get_user_orders import GetUserOrdersUseCase
from backoffice.application.trading.list_instruments import ListInstrumentsUseCase
from backoffice.core.config import settings
from backoffice.domain.trading.ledger import LedgerEngine
from backoffice.domain.trading.position_calculator import PositionCalculator
from backoffice.domain.trading.pricing import PricingResolver
from backoffice.domain.trading.validation import OrderValidator
from backoffice.infrastructure.trading.catalog_repository import (
    InstrumentRepositoryAdapter,
    UserRepositoryAdapter,
)
from backoffice.infrastructure.trading.market_quote_repository import (
    MarketQuoteRepositoryAdapter,
)
from backoffice.infrastructure.trading.order_repository import OrderRepositoryAdapter


@lru_cache(maxsize=1)
def get_engine() -> Engine:
    """Build the process-wide SQLAlchemy engine from application settings."""
    connect_args = {"check_same_thread": False} if settings.is_sqlite else {}
    return create_engine(
        settings.database_url,
        pool_pre_ping=True,
        connect_args=connect_args,
    )


def get_create_order_use_case(
    engine: Engine = Depends(get_engine),
) -> CreateOrderUseCase:
    """Build CreateOrderUseCase with its infrastructure dependencies."""
    order_repo = OrderRepositoryAdapter(engine=engine)
    return CreateOrderUseCase(
        user_repo=UserRepositoryAdapter(engine=engine),
        instrument_repo=InstrumentRepositoryAdapter(engine=engine),
        order_repo=order_repo,
        pricing=PricingResolver(MarketQuoteRepositoryAdapter(engine=engine)),
        validator=OrderValidator(LedgerEngine(order_repo)),
    )


def get_user_orders_use_case(
    engine: Engine = Depends(get_engine),
) -> GetUserOrdersUseCase:
    """Build GetUserOrdersUseCase with its infrastructure dependencies."""
    return GetUserOrdersUseCase(
        user_repo=UserRepositoryAdapter(engine=engine),
        order_repo=OrderRepositoryAdapter(engine=engine),
    )


def get_list_instruments_use_case(
    engine: Engine = Depends(get_engine),
) -> ListInstrumentsUseCase:
    """Build ListInstrumentsUseCase with its infrastructure dependencies."""
    return ListInstrumentsUseCase(
        instrument_repo=InstrumentRepositoryAdapter(engine=engine)
    )


def get_cancel_order_use_case(
    engine: Engine = Depends(get_engine),
) -> CancelOrderUseCase:
    """Build CancelOrderUseCase with its infrastructure dependencies."""
    return CancelOrderUseCase(order_repo=OrderRepositoryAdapter(engine=engine))


def get_portfolio_use_case(
    engine: Engine = Depends(get_engine),
) -> GetPortfolioUseCase:
    """Build GetPortfolioUseCase with its infrastructure dependencies."""
    order_repo = OrderRepositoryAdapter(engine=engine)
    return GetPortfolioUseCase(
        user_repo=UserRepositoryAdapter(engine=engine),
        order_repo=order_repo,
        instrument_repo=InstrumentRepositoryAdapter(engine=engine),
        quote_source=MarketQuoteRepositoryAdapter(engine=engine),
        ledger=LedgerEngine(order_repo),
        calculator=PositionCalculator(),
        max_workers=settings.valuation_workers,
    )
