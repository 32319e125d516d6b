"""
Relational schema for the trading store.

SQLAlchemy Core table definitions shared by every repository adapter.
`create_schema` is idempotent and is run at startup when enabled.
"""

import logging

from sqlalchemy import (
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    MetaData,
    Numeric,
    String,
    Table,
)
from sqlalchemy.engine import Engine

logger = logging.getLogger(__name__)

metadata = MetaData()

users = Table(
    "users",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("email", String(255)),
    Column("account_number", String(20)),
)

instruments = Table(
    "instruments",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("ticker", String(10)),
    Column("name", String(255)),
    Column("type", String(10)),
)

marketdata = Table(
    "marketdata",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("instrument_id", Integer, ForeignKey("instruments.id"), nullable=False, index=True),
    Column("high", Numeric(10, 2)),
    Column("low", Numeric(10, 2)),
    Column("open", Numeric(10, 2)),
    Column("close", Numeric(10, 2)),
    Column("previous_close", Numeric(10, 2)),
    Column("date", Date),
)

orders = Table(
    "orders",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("instrument_id", Integer, ForeignKey("instruments.id"), nullable=False),
    Column("user_id", Integer, ForeignKey("users.id"), nullable=False, index=True),
    Column("size", Integer, nullable=False),
    Column("price", Numeric(10, 2), nullable=False),
    Column("type", String(10), nullable=False),
    Column("side", String(10), nullable=False),
    Column("status", String(20), nullable=False),
    Column("created_at", DateTime(timezone=True), nullable=False),
)


def create_schema(engine: Engine) -> None:
    """Create any missing tables."""
    metadata.create_all(engine)
    logger.info("Database tables verified/created.")
