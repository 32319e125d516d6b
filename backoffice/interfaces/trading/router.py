"""
FastAPI router for the trading bounded context.

All routes delegate to use cases. No business logic here.
Input validation is handled by Pydantic schemas.
Error mapping is handled by centralized error handlers.
"""

from fastapi import APIRouter, Depends, Path, Query, Request, status

from backoffice.application.trading.cancel_order import CancelOrderUseCase
from backoffice.application.trading.create_order import CreateOrderUseCase
from backoffice.application.trading.dtos import (
    CancelOrderCommand,
    CreateOrderCommand,
    GetPortfolioQuery,
    GetUserOrdersQuery,
    InstrumentResult,
    ListInstrumentsQuery,
    OrderResult,
)
from backoffice.application.trading.get_portfolio import GetPortfolioUseCase
from backoffice.application.trading.get_user_orders import GetUserOrdersUseCase
from backoffice.application.trading.list_instruments import ListInstrumentsUseCase
from backoffice.core.config import settings
from backoffice.interfaces.trading.dependencies import (
    get_cancel_order_use_case,
    get_create_order_use_case,
    get_list_instruments_use_case,
    get_portfolio_use_case,
    get_user_orders_use_case,
)
from backoffice.interfaces.trading.schemas import (
    CreateOrderRequest,
    ErrorResponse,
    InstrumentListResponse,
    InstrumentResponse,
    OrderListResponse,
    OrderResponse,
    PortfolioResponse,
    PositionItem,
)
from backoffice.shared.security.rate_limiting import limiter

router = APIRouter(tags=["trading"])


def _to_order_response(result: OrderResult) -> OrderResponse:
    return OrderResponse(
        id=result.id,
        user_id=result.user_id,
        instrument_id=result.instrument_id,
        side=result.side,
        type=result.type,
        size=result.size,
        price=result.price,
        status=result.status,
        created_at=result.created_at,
        reason=result.reason,
    )


@router.post(
    "/orders",
    response_model=OrderResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
    },
    summary="Create order",
    description=(
        "Places a MARKET, LIMIT or cash order. Unaffordable orders are "
        "stored as REJECTED; MARKET and cash orders fill immediately; "
        "LIMIT trades rest as NEW."
    ),
)
@limiter.limit(settings.rate_limit_orders)
def create_order(
    request: Request,
    body: CreateOrderRequest,
    use_case: CreateOrderUseCase = Depends(get_create_order_use_case),
) -> OrderResponse:
    """Place an order for a user."""
    command = CreateOrderCommand(
        user_id=body.user_id,
        instrument_id=body.instrument_id,
        side=body.side,
        type=body.type,
        size=body.size,
        amount=body.amount,
        price=body.price,
    )
    return _to_order_response(use_case.execute(command))


@router.get(
    "/orders/{user_id}",
    response_model=OrderListResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get user orders",
    description="Retrieves all orders for a user, newest first.",
)
def get_user_orders(
    user_id: int = Path(..., gt=0),
    use_case: GetUserOrdersUseCase = Depends(get_user_orders_use_case),
) -> OrderListResponse:
    """List a user's orders."""
    results = use_case.execute(GetUserOrdersQuery(user_id=user_id))
    return OrderListResponse(orders=[_to_order_response(r) for r in results])


@router.patch(
    "/orders/{order_id}/cancel",
    response_model=OrderResponse,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
    summary="Cancel order",
    description="Cancels an order in NEW status.",
)
def cancel_order(
    order_id: int = Path(..., gt=0),
    use_case: CancelOrderUseCase = Depends(get_cancel_order_use_case),
) -> OrderResponse:
    """Cancel a resting order."""
    result = use_case.execute(CancelOrderCommand(order_id=order_id))
    return _to_order_response(result)


@router.get(
    "/portfolio/{user_id}",
    response_model=PortfolioResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get user portfolio",
    description=(
        "Total value, available cash, value-weighted daily return and "
        "every position marked to its latest quote."
    ),
)
def get_portfolio(
    user_id: int = Path(..., gt=0),
    use_case: GetPortfolioUseCase = Depends(get_portfolio_use_case),
) -> PortfolioResponse:
    """Value a user's portfolio."""
    result = use_case.execute(GetPortfolioQuery(user_id=user_id))
    return PortfolioResponse(
        total_value=result.total_value,
        available_cash=result.available_cash,
        daily_return=result.daily_return,
        positions=[
            PositionItem(
                instrument_id=p.instrument_id,
                ticker=p.ticker,
                name=p.name,
                quantity=p.quantity,
                total_value=p.total_value,
                daily_return=p.daily_return,
                total_return=p.total_return,
                avg_price=p.avg_price,
            )
            for p in result.positions
        ],
    )


def _to_instrument_list(results: list[InstrumentResult]) -> InstrumentListResponse:
    return InstrumentListResponse(
        instruments=[
            InstrumentResponse(id=r.id, ticker=r.ticker, name=r.name, type=r.type)
            for r in results
        ]
    )


@router.get(
    "/instruments",
    response_model=InstrumentListResponse,
    summary="Get all instruments",
    description="Retrieves the whole catalog: stocks, ETFs and the currency instrument.",
)
def list_instruments(
    use_case: ListInstrumentsUseCase = Depends(get_list_instruments_use_case),
) -> InstrumentListResponse:
    """List every instrument."""
    return _to_instrument_list(use_case.execute(ListInstrumentsQuery()))


@router.get(
    "/instruments/search",
    response_model=InstrumentListResponse,
    summary="Search instruments",
    description=(
        "Matches the ticker (upper-cased query) or the name (any case) by "
        "substring. Without a query, returns the whole catalog."
    ),
)
def search_instruments(
    query: str | None = Query(default=None, max_length=100),
    use_case: ListInstrumentsUseCase = Depends(get_list_instruments_use_case),
) -> InstrumentListResponse:
    """Search the catalog by ticker or name."""
    return _to_instrument_list(use_case.execute(ListInstrumentsQuery(search=query)))
