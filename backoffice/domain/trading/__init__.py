"""
Trading bounded context: domain layer.

This module contains all domain logic for the trading context:
- Order pricing and amount-to-size resolution
- Ledger derivation (available cash and shares)
- Order validation
- Position replay and portfolio valuation
"""
