"""
Infrastructure adapters for the trading bounded context.

Each adapter implements a domain port (ABC) and connects
to the relational store through a SQLAlchemy engine.
"""
