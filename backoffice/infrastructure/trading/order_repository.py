"""
Adapter: Order store.

Implements OrderRepository port.
Appends orders to the orders table and reads them back, joined to the
instrument catalog so the ledger can tell cash moves from trades.
Rows are never deleted; `save` writes back the status column only.
"""

import logging
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.engine import Engine

from backoffice.domain.trading.entities import (
    PRICE_QUANTUM,
    Order,
    OrderDraft,
    OrderSide,
    OrderStatus,
    OrderType,
)
from backoffice.domain.trading.ports import OrderRepository
from backoffice.infrastructure.trading.schema import instruments, orders

logger = logging.getLogger(__name__)

_ORDERS_WITH_INSTRUMENT = select(
    orders,
    instruments.c.type.label("instrument_type"),
    instruments.c.ticker.label("instrument_ticker"),
).select_from(
    orders.outerjoin(instruments, orders.c.instrument_id == instruments.c.id)
)


class OrderRepositoryAdapter(OrderRepository):
    """SQLAlchemy implementation of the order store."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def create(self, draft: OrderDraft) -> Order:
        """Insert a new order stamped with the current UTC time.

        Args:
            draft: Fields decided by the order lifecycle.

        Returns:
            The persisted order, with the price at the column scale.
        """
        created_at = datetime.now(timezone.utc)
        with self._engine.begin() as conn:
            result = conn.execute(
                orders.insert().values(
                    user_id=draft.user_id,
                    instrument_id=draft.instrument_id,
                    side=draft.side.value,
                    type=draft.type.value,
                    size=draft.size,
                    price=draft.price,
                    status=draft.status.value,
                    created_at=created_at,
                )
            )
            order_id = result.inserted_primary_key[0]

        logger.debug("Inserted order id=%d status=%s.", order_id, draft.status.value)
        return Order(
            id=order_id,
            user_id=draft.user_id,
            instrument_id=draft.instrument_id,
            side=draft.side,
            type=draft.type,
            size=draft.size,
            price=Decimal(draft.price).quantize(PRICE_QUANTUM),
            status=draft.status,
            created_at=created_at,
        )

    def get_by_id(self, order_id: int) -> Optional[Order]:
        """Return an order by id, or None if not found."""
        with self._engine.connect() as conn:
            row = conn.execute(
                _ORDERS_WITH_INSTRUMENT.where(orders.c.id == order_id)
            ).mappings().first()
        return _to_order(row) if row is not None else None

    def save(self, order: Order) -> Order:
        """Write back the order's status.

        Args:
            order: An order previously returned by this store.

        Returns:
            The same order.
        """
        with self._engine.begin() as conn:
            conn.execute(
                update(orders)
                .where(orders.c.id == order.id)
                .values(status=order.status.value)
            )
        logger.debug("Saved order id=%d status=%s.", order.id, order.status.value)
        return order

    def list_for_user(self, user_id: int) -> list[Order]:
        """Return every order of a user, newest first."""
        query = _ORDERS_WITH_INSTRUMENT.where(orders.c.user_id == user_id).order_by(
            orders.c.created_at.desc(), orders.c.id.desc()
        )
        return self._fetch(query)

    def list_filled_for_user(self, user_id: int) -> list[Order]:
        """Return the FILLED orders of a user with instrument type attached."""
        query = _ORDERS_WITH_INSTRUMENT.where(
            orders.c.user_id == user_id,
            orders.c.status == OrderStatus.FILLED.value,
        ).order_by(orders.c.id)
        return self._fetch(query)

    def list_for_user_and_instrument(
        self,
        user_id: int,
        instrument_id: int,
        status: OrderStatus = OrderStatus.FILLED,
    ) -> list[Order]:
        """Return a user's orders on one instrument in the given status."""
        query = _ORDERS_WITH_INSTRUMENT.where(
            orders.c.user_id == user_id,
            orders.c.instrument_id == instrument_id,
            orders.c.status == status.value,
        ).order_by(orders.c.id)
        return self._fetch(query)

    def _fetch(self, query) -> list[Order]:
        with self._engine.connect() as conn:
            rows = conn.execute(query).mappings().all()
        return [_to_order(row) for row in rows]


def _as_utc(value: datetime) -> datetime:
    # SQLite hands timestamps back naive; they were written in UTC.
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _to_order(row) -> Order:
    return Order(
        id=row["id"],
        user_id=row["user_id"],
        instrument_id=row["instrument_id"],
        side=OrderSide(row["side"]),
        type=OrderType(row["type"]),
        size=row["size"],
        price=row["price"],
        status=OrderStatus(row["status"]),
        created_at=_as_utc(row["created_at"]),
        instrument_type=row["instrument_type"],
        instrument_ticker=row["instrument_ticker"],
    )
