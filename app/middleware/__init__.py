"""
Middleware package for the Real Estate Listings API.
"""

from .logging import RequestLoggingMiddleware

__all__ = ["RequestLoggingMiddleware"]
