"""Validation failure raised by API handlers."""

from collections.abc import Mapping
from typing import Any

from fastapi import HTTPException
from pydantic import ValidationError

from versioned_api.presentation.errors.error_response import ErrorBag


class ResourceError(HTTPException):
    """A request could not be processed because the resource is invalid.

    Always translated to 422 with an ``errors`` bag, even an empty one.

    Args:
        message: Human-readable failure message.
        errors: Field errors; values may be one message or a sequence.
        headers: Extra response headers.

    Raises:
        TypeError: If errors is not a mapping of field names to messages.

    Example:
        >>> raise ResourceError("Could not create user", {"email": "taken"})
    """

    def __init__(
        self,
        message: str = "",
        errors: ErrorBag | Mapping[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        super().__init__(
            status_code=422,
            detail=message,
            headers=headers,
        )
        try:
            self.errors = ErrorBag.model_validate(errors)
        except ValidationError as exc:
            raise TypeError(
                "ResourceError errors must map field names to messages, "
                f"got {type(errors).__name__}"
            ) from exc
