"""HTTP middleware."""

from lostfound_disputes.api.middleware.logging_middleware import LoggingMiddleware

__all__ = ["LoggingMiddleware"]
