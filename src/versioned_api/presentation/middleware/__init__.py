"""ASGI middleware."""

from versioned_api.presentation.middleware.trace_middleware import (
    TRACE_ID_HEADER,
    TraceMiddleware,
    get_trace_id,
)

__all__ = ["TRACE_ID_HEADER", "TraceMiddleware", "get_trace_id"]
