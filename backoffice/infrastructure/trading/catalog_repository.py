"""
Adapter: User and instrument catalog.

Implements the UserRepository and InstrumentRepository ports.
Both catalogs are reference data owned outside the core; these
adapters only read them.
"""

import logging
from typing import Optional

from sqlalchemy import or_, select
from sqlalchemy.engine import Engine

from backoffice.domain.trading.entities import Instrument, User
from backoffice.domain.trading.ports import InstrumentRepository, UserRepository
from backoffice.infrastructure.trading.schema import instruments, users

logger = logging.getLogger(__name__)


class UserRepositoryAdapter(UserRepository):
    """Reads account holders from the users table."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def get_by_id(self, user_id: int) -> Optional[User]:
        with self._engine.connect() as conn:
            row = conn.execute(
                select(users).where(users.c.id == user_id)
            ).mappings().first()

        if row is None:
            return None
        return User(id=row["id"], email=row["email"], account_number=row["account_number"])


class InstrumentRepositoryAdapter(InstrumentRepository):
    """Reads the instrument catalog from the instruments table."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def get_by_id(self, instrument_id: int) -> Optional[Instrument]:
        """Return an instrument by id, or None if not found."""
        with self._engine.connect() as conn:
            row = conn.execute(
                select(instruments).where(instruments.c.id == instrument_id)
            ).mappings().first()

        if row is None:
            logger.debug("Instrument %d not in catalog.", instrument_id)
            return None
        return _to_instrument(row)

    def list_all(self) -> list[Instrument]:
        """Return the whole catalog, ordered by id."""
        return self._fetch(select(instruments).order_by(instruments.c.id))

    def search(self, query: str) -> list[Instrument]:
        """Return instruments matching `query` by ticker or name.

        The ticker is compared against the upper-cased query, the name
        case-insensitively. LIKE wildcards in the query match literally.
        """
        statement = (
            select(instruments)
            .where(
                or_(
                    instruments.c.ticker.contains(query.upper(), autoescape=True),
                    instruments.c.name.icontains(query, autoescape=True),
                )
            )
            .order_by(instruments.c.id)
        )
        found = self._fetch(statement)
        logger.debug("Instrument search %r matched %d rows.", query, len(found))
        return found

    def _fetch(self, statement) -> list[Instrument]:
        with self._engine.connect() as conn:
            rows = conn.execute(statement).mappings().all()
        return [_to_instrument(row) for row in rows]


def _to_instrument(row) -> Instrument:
    return Instrument(
        id=row["id"],
        ticker=row["ticker"],
        name=row["name"],
        type=row["type"],
    )
