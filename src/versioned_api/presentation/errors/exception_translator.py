"""Exception translation at the API dispatch boundary.

Order of precedence for a failure raised while dispatching an API request:

1. The override handler, when its ``will_handle()`` claims the failure. Its
   ``handle()`` result is returned untouched.
2. Built-in translation:
   - ResourceError -> 422 with ``{"message", "errors"}``
   - HTTPException -> its status; the message falls back to
     ``"<code> <Reason Phrase>"`` when the detail is empty or is just the
     default reason phrase; structured details are rendered as compact JSON
   - anything else -> 500 ``"500 Internal Server Error"``; details are
     logged, never rendered

Translation never raises.
"""

import json
from dataclasses import dataclass, field
from http import HTTPStatus

from fastapi.encoders import jsonable_encoder
from starlette.exceptions import HTTPException
from starlette.responses import Response

from versioned_api.domain.protocols.exception_handler_protocol import (
    ExceptionHandlerProtocol,
)
from versioned_api.domain.protocols.logger_protocol import LoggerProtocol
from versioned_api.presentation.errors.error_response import ErrorResponse
from versioned_api.presentation.errors.resource_error import ResourceError
from versioned_api.presentation.http.response import ApiResponse

INTERNAL_SERVER_ERROR = 500


@dataclass(frozen=True, slots=True, kw_only=True)
class TranslatedError:
    """Status, body and headers of a translated failure."""

    status_code: int
    body: ErrorResponse
    headers: dict[str, str] = field(default_factory=dict)

    @property
    def message(self) -> str:
        return self.body.message

    def to_response(self) -> ApiResponse:
        return ApiResponse(
            content=self.body, status_code=self.status_code, headers=self.headers
        )


def status_message(status_code: int) -> str:
    """Canonical ``"<code> <Reason Phrase>"`` message for a status code.

    Example:
        >>> status_message(404)
        '404 Not Found'
    """
    return f"{status_code} {_reason_phrase(status_code)}"


def _reason_phrase(status_code: int) -> str:
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return "Error"


class ExceptionTranslator:
    """Convert failures raised during API dispatch into responses.

    Args:
        logger: Structured logger; translated 5xx failures are logged here.
        handler: Optional override handler consulted before translation.
    """

    def __init__(
        self,
        *,
        logger: LoggerProtocol,
        handler: ExceptionHandlerProtocol | None = None,
    ) -> None:
        self._logger = logger
        self.handler = handler

    def will_override(self, exc: Exception) -> bool:
        """Whether the override handler claims ``exc``."""
        return self.handler is not None and bool(self.handler.will_handle(exc))

    def handle(self, exc: Exception) -> Response | ApiResponse:
        """Produce the response for a failure.

        The override handler's result is returned as-is; otherwise the
        translated error is wrapped in an ApiResponse for the negotiated
        formatter.
        """
        if self.will_override(exc):
            self._logger.debug(
                "Exception claimed by override handler",
                exception_type=type(exc).__name__,
            )
            return self.handler.handle(exc)  # type: ignore[union-attr]
        return self.translate(exc).to_response()

    def translate(self, exc: Exception) -> TranslatedError:
        """Apply the built-in translation rules. Never raises."""
        try:
            translated = self._translate(exc)
        except Exception as translation_error:
            self._logger.error(
                "Exception translation failed",
                error=translation_error,
                exception_type=type(exc).__name__,
            )
            return self._internal_error()

        if translated.status_code >= INTERNAL_SERVER_ERROR:
            self._logger.error(
                "API request failed",
                error=exc,
                status_code=translated.status_code,
            )
        return translated

    def _translate(self, exc: Exception) -> TranslatedError:
        if isinstance(exc, ResourceError):
            return TranslatedError(
                status_code=exc.status_code,
                body=ErrorResponse(
                    message=self._http_message(exc), errors=exc.errors
                ),
                headers=dict(exc.headers or {}),
            )

        if isinstance(exc, HTTPException):
            return TranslatedError(
                status_code=exc.status_code,
                body=ErrorResponse(message=self._http_message(exc)),
                headers=dict(exc.headers or {}),
            )

        return self._internal_error()

    @staticmethod
    def _http_message(exc: HTTPException) -> str:
        detail = exc.detail
        if detail and not isinstance(detail, str):
            try:
                return json.dumps(jsonable_encoder(detail), separators=(",", ":"))
            except (TypeError, ValueError):
                return status_message(exc.status_code)
        if not detail or detail == _reason_phrase(exc.status_code):
            return status_message(exc.status_code)
        return detail

    @staticmethod
    def _internal_error() -> TranslatedError:
        return TranslatedError(
            status_code=INTERNAL_SERVER_ERROR,
            body=ErrorResponse(message=status_message(INTERNAL_SERVER_ERROR)),
        )
