"""
Interfaces layer package.

The HTTP shell of the back office: FastAPI routers for orders,
portfolios and health checks, plus the Pydantic schemas that define
the API contract. Routes validate shape, call a use case and map the
result; business rules stay in the domain.
"""
