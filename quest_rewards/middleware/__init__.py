"""Middleware package for the quest reward service."""

from .request_context import RequestContextMiddleware, request_id_var

__all__ = [
    "RequestContextMiddleware",
    "request_id_var",
]
