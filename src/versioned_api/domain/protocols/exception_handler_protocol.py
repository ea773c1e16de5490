"""Override exception handler port.

An application can hand the router an object that claims some failures
before the built-in translation runs. Whatever it returns is sent as-is, and
its claim wins even for internal requests, which otherwise re-raise.

Usage:
    class TeapotHandler:
        def will_handle(self, exc: Exception) -> bool:
            return isinstance(exc, TeapotError)

        def handle(self, exc: Exception) -> Response:
            return PlainTextResponse("short and stout", status_code=418)

    router.exception_handler = TeapotHandler()
"""

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from starlette.responses import Response

    from versioned_api.presentation.http.response import ApiResponse


class ExceptionHandlerProtocol(Protocol):
    """Claims and renders selected failures raised during API dispatch."""

    def will_handle(self, exc: Exception) -> bool:
        """Return True to take over translation of ``exc``."""
        ...

    def handle(self, exc: Exception) -> "Response | ApiResponse":
        """Build the response for a claimed failure."""
        ...
