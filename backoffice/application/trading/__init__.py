"""
Application layer for the trading bounded context.

Use cases drive the order lifecycle and the portfolio report through
domain services (pricing, ledger, validation, position replay) and
repository ports. No framework or infrastructure imports allowed.
"""
