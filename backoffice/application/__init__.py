"""
Application layer package.

Holds the back office use cases: placing and cancelling orders,
listing a user's orders and valuing a portfolio. Each use case is a
single class with one public `execute` method and depends on domain
ports, never on infrastructure.
"""
