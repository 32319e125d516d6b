"""
Port interfaces (ABCs) for the trading bounded context.

Ports define the contracts that the domain requires from the outside world.
Infrastructure adapters implement these interfaces.
The domain layer never depends on concrete implementations.
"""

from abc import ABC, abstractmethod
from typing import Iterable, Optional

from backoffice.domain.trading.entities import (
    Instrument,
    Order,
    OrderDraft,
    OrderStatus,
    Quote,
    User,
)


class UserRepository(ABC):
    """Port for looking up account holders."""

    @abstractmethod
    def get_by_id(self, user_id: int) -> Optional[User]:
        """Return a user by id, or None if not found."""
        raise NotImplementedError


class InstrumentRepository(ABC):
    """Port for the instrument reference catalog."""

    @abstractmethod
    def get_by_id(self, instrument_id: int) -> Optional[Instrument]:
        """Return an instrument by id, or None if not found."""
        raise NotImplementedError

    @abstractmethod
    def list_all(self) -> list[Instrument]:
        """Return every instrument in the catalog, ordered by id."""
        raise NotImplementedError

    @abstractmethod
    def search(self, query: str) -> list[Instrument]:
        """Return instruments whose ticker contains the upper-cased query
        or whose name contains the query, ignoring case.
        """
        raise NotImplementedError


class MarketQuoteSource(ABC):
    """Port for end-of-day market quotes."""

    @abstractmethod
    def get_latest(self, instrument_id: int) -> Optional[Quote]:
        """Return the most recent quote for an instrument, or None."""
        raise NotImplementedError

    @abstractmethod
    def get_latest_batch(self, instrument_ids: Iterable[int]) -> list[Quote]:
        """Return the most recent quote for each instrument that has data.

        Instruments without data are simply absent from the result.
        An empty input returns an empty list.
        """
        raise NotImplementedError


class OrderRepository(ABC):
    """Port for the append-only order store.

    Orders are never deleted. The only update is a status change
    written back through `save`.
    """

    @abstractmethod
    def create(self, draft: OrderDraft) -> Order:
        """Persist a new order and return it with id and creation time."""
        raise NotImplementedError

    @abstractmethod
    def get_by_id(self, order_id: int) -> Optional[Order]:
        """Return an order by id, or None if not found."""
        raise NotImplementedError

    @abstractmethod
    def save(self, order: Order) -> Order:
        """Persist the status of an existing order and return it."""
        raise NotImplementedError

    @abstractmethod
    def list_for_user(self, user_id: int) -> list[Order]:
        """Return all orders of a user, newest first, instrument attached."""
        raise NotImplementedError

    @abstractmethod
    def list_filled_for_user(self, user_id: int) -> list[Order]:
        """Return the FILLED orders of a user with instrument category attached."""
        raise NotImplementedError

    @abstractmethod
    def list_for_user_and_instrument(
        self,
        user_id: int,
        instrument_id: int,
        status: OrderStatus = OrderStatus.FILLED,
    ) -> list[Order]:
        """Return a user's orders on one instrument in the given status."""
        raise NotImplementedError
