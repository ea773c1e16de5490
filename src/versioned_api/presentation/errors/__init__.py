"""Failure translation for API dispatch.

Exports:
    ErrorBag: Structured field -> messages mapping
    ErrorResponse: Failure body ``{"message", "errors"?}``
    ResourceError: 422 validation failure carrying an ErrorBag
    ExceptionTranslator: Failure -> response conversion
    TranslatedError: Status, body and headers of a translated failure
"""

from versioned_api.presentation.errors.error_response import ErrorBag, ErrorResponse
from versioned_api.presentation.errors.exception_translator import (
    ExceptionTranslator,
    TranslatedError,
)
from versioned_api.presentation.errors.resource_error import ResourceError

__all__ = [
    "ErrorBag",
    "ErrorResponse",
    "ExceptionTranslator",
    "ResourceError",
    "TranslatedError",
]
