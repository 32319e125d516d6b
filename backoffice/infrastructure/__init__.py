"""
Infrastructure layer package.

Adapters for the ports declared in the domain layer. The order store,
the user and instrument catalog and the market quote source all live
in one relational database reached through SQLAlchemy.
"""
