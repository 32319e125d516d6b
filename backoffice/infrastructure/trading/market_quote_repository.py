"""
Adapter: Market quote source.

Implements MarketQuoteSource port.
Reads the latest end-of-day row per instrument from the marketdata table.
"""

import logging
from typing import Iterable, Optional

from sqlalchemy import func, select
from sqlalchemy.engine import Engine

from backoffice.domain.trading.entities import Quote
from backoffice.domain.trading.ports import MarketQuoteSource
from backoffice.infrastructure.trading.schema import marketdata

logger = logging.getLogger(__name__)


class MarketQuoteRepositoryAdapter(MarketQuoteSource):
    """Serves latest quotes from the marketdata table.

    A row whose close is NULL is treated as no data.
    """

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def get_latest(self, instrument_id: int) -> Optional[Quote]:
        """Return the most recent quote for an instrument, or None.

        Args:
            instrument_id: Instrument to look up.

        Returns:
            Quote from the row with the greatest date.
        """
        query = (
            select(marketdata)
            .where(marketdata.c.instrument_id == instrument_id)
            .order_by(marketdata.c.date.desc(), marketdata.c.id.desc())
            .limit(1)
        )
        with self._engine.connect() as conn:
            row = conn.execute(query).mappings().first()

        if row is None or row["close"] is None:
            logger.info("No market data for instrument=%d.", instrument_id)
            return None
        return _to_quote(row)

    def get_latest_batch(self, instrument_ids: Iterable[int]) -> list[Quote]:
        """Return the latest quote for each instrument that has data.

        Args:
            instrument_ids: Instruments to look up.

        Returns:
            At most one quote per instrument; instruments without data are absent.
        """
        ids = sorted(set(instrument_ids))
        if not ids:
            return []

        peer = marketdata.alias("peer")
        latest_date = (
            select(func.max(peer.c.date))
            .where(peer.c.instrument_id == marketdata.c.instrument_id)
            .scalar_subquery()
        )
        query = (
            select(marketdata)
            .where(marketdata.c.instrument_id.in_(ids))
            .where(marketdata.c.date == latest_date)
            .order_by(marketdata.c.id)
        )
        with self._engine.connect() as conn:
            rows = conn.execute(query).mappings().all()

        latest: dict[int, Quote] = {}
        for row in rows:
            if row["close"] is not None:
                latest[row["instrument_id"]] = _to_quote(row)

        logger.debug("Fetched quotes for %d of %d instruments.", len(latest), len(ids))
        return list(latest.values())


def _to_quote(row) -> Quote:
    return Quote(
        instrument_id=row["instrument_id"],
        close=row["close"],
        previous_close=row["previous_close"],
        as_of=row["date"],
    )
