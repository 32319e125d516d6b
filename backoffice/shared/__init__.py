"""
Shared module package.

Contains cross-cutting concerns used across bounded contexts:
- Error handling and mapping
- Security middleware (headers, body size)
- Rate limiting
- Logging configuration
"""
