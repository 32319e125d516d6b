"""
Shared error handling package.

Translates the trading error families (not found, invalid input,
missing market data, state conflict) into JSON HTTP responses.
"""
