"""ASGI application serving a Router.

Every HTTP request, whatever its method or path, is adapted into an
ApiRequest and dispatched by the router in the threadpool (handlers are
synchronous). Plain-route misses raise HTTPException, which Starlette's
exception middleware renders.

Usage:
    uvicorn versioned_api.presentation.asgi:app --factory
"""

from starlette.applications import Starlette
from starlette.concurrency import run_in_threadpool
from starlette.middleware import Middleware
from starlette.requests import Request
from starlette.responses import Response
from starlette.routing import Route

from versioned_api.core.config import settings
from versioned_api.domain.entities.route import HTTPMethod
from versioned_api.presentation.http.request import ApiRequest
from versioned_api.presentation.middleware.trace_middleware import TraceMiddleware
from versioned_api.presentation.router import Router


def create_app(router: Router | None = None) -> Starlette:
    """Build the Starlette app for a router.

    Args:
        router: Router to serve; defaults to the container's router.

    Returns:
        Starlette: Application with a catch-all route and trace middleware.
    """
    if router is None:
        from versioned_api.core.container import get_router

        router = get_router()

    async def endpoint(request: Request) -> Response:
        return await run_in_threadpool(router.dispatch, ApiRequest.from_starlette(request))

    return Starlette(
        debug=settings.debug,
        routes=[
            Route(
                "/{path:path}",
                endpoint,
                methods=[method.value for method in HTTPMethod],
            )
        ],
        middleware=[Middleware(TraceMiddleware)],
    )


def app() -> Starlette:
    """App factory for ASGI servers."""
    return create_app()
