"""
Use case: Browse the instrument catalog.

Input: ListInstrumentsQuery (optional search text)
Output: list[InstrumentResult], ordered by id
Side effects: None (read-only query).
Failure cases: None; no match is an empty list.
"""

import logging

from backoffice.application.trading.dtos import InstrumentResult, ListInstrumentsQuery
from backoffice.domain.trading.ports import InstrumentRepository

logger = logging.getLogger(__name__)


class ListInstrumentsUseCase:
    """Lists the catalog, optionally filtered by ticker or name."""

    def __init__(self, instrument_repo: InstrumentRepository) -> None:
        self._instrument_repo = instrument_repo

    def execute(self, query: ListInstrumentsQuery) -> list[InstrumentResult]:
        search = (query.search or "").strip()
        if search:
            instruments = self._instrument_repo.search(search)
        else:
            instruments = self._instrument_repo.list_all()

        logger.info("Listed %d instruments (search=%r)", len(instruments), search)
        return [
            InstrumentResult(id=i.id, ticker=i.ticker, name=i.name, type=i.type)
            for i in instruments
        ]
