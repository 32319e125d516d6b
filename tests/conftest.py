"""
Shared pytest fixtures.

Provides a file-backed SQLite store seeded with a small catalog, and an
API client wired to it. A file (not :memory:) is used because portfolio
valuation reads from worker threads.
"""

from datetime import date
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine

from backoffice.infrastructure.trading.schema import (
    create_schema,
    instruments,
    marketdata,
    users,
)
from backoffice.shared.security.rate_limiting import limiter

CASH_INSTRUMENT_ID = 66


@pytest.fixture(autouse=True)
def _reset_rate_limits():
    """Start every test with empty rate-limit counters."""
    limiter.reset()
    yield


@pytest.fixture
def engine(tmp_path):
    engine = create_engine(
        f"sqlite:///{tmp_path / 'backoffice.db'}",
        connect_args={"check_same_thread": False},
    )
    create_schema(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def seeded_engine(engine):
    """Two users, three stocks, the currency instrument and quotes for two stocks.

    AAPL (1): latest close 160, previous close 155.
    MSFT (2): latest close 260, previous close 255.
    NOQ (3): no market data.
    """
    with engine.begin() as conn:
        conn.execute(
            users.insert(),
            [
                {"id": 1, "email": "ana@example.com", "account_number": "10001"},
                {"id": 2, "email": "leo@example.com", "account_number": "10002"},
            ],
        )
        conn.execute(
            instruments.insert(),
            [
                {"id": 1, "ticker": "AAPL", "name": "Apple Inc.", "type": "ACCIONES"},
                {"id": 2, "ticker": "MSFT", "name": "Microsoft Corp.", "type": "ACCIONES"},
                {"id": 3, "ticker": "NOQ", "name": "No Quote SA", "type": "ACCIONES"},
                {"id": CASH_INSTRUMENT_ID, "ticker": "ARS", "name": "PESOS", "type": "MONEDA"},
            ],
        )
        conn.execute(
            marketdata.insert(),
            [
                {
                    "instrument_id": 1,
                    "close": Decimal("150.00"),
                    "previous_close": Decimal("148.00"),
                    "date": date(2024, 1, 14),
                },
                {
                    "instrument_id": 1,
                    "close": Decimal("160.00"),
                    "previous_close": Decimal("155.00"),
                    "date": date(2024, 1, 15),
                },
                {
                    "instrument_id": 2,
                    "close": Decimal("260.00"),
                    "previous_close": Decimal("255.00"),
                    "date": date(2024, 1, 15),
                },
            ],
        )
    return engine


@pytest.fixture
def client(seeded_engine):
    """TestClient whose engine dependency points at the seeded store."""
    from backoffice.interfaces.trading.dependencies import get_engine
    from backoffice.main import app

    app.dependency_overrides[get_engine] = lambda: seeded_engine
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
