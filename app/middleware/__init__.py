"""
Middleware components for request processing.

This package contains middleware for:
- Request context (request ID bound into log context)
- CORS for browser clients of the dashboard API
"""

from app.middleware.cors import CORSMiddleware
from app.middleware.request_context import RequestContextMiddleware

__all__ = [
    "RequestContextMiddleware",
    "CORSMiddleware",
]
