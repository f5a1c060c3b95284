"""
motzkin_store.observability

Observability package.

Responsibilities:
- structlog configuration and request-scoped logging context.
"""

# Package marker.
