"""Middleware package for the application."""

from cardsearch.middleware.request_context import RequestContextMiddleware

__all__ = ["RequestContextMiddleware"]
