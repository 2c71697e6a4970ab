"""Middleware package for the CONCORD API."""
from .logging_middleware import RequestLoggingMiddleware
from .error_handler import DomainError, PayloadTooLargeError, register_error_handlers

__all__ = [
    "DomainError",
    "PayloadTooLargeError",
    "RequestLoggingMiddleware",
    "register_error_handlers",
]
