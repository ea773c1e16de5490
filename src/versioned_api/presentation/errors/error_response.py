"""Failure response body.

Every translated failure is rendered as::

    {"message": "404 Not Found"}
    {"message": "Could not create user", "errors": {"email": ["taken"]}}

``errors`` appears only for validation failures, and always appears for
them, even when empty.
"""

from collections.abc import Iterator, Mapping
from typing import Any

from pydantic import BaseModel, Field, RootModel, model_validator


class ErrorBag(RootModel[dict[str, list[str]]]):
    """Field name to ordered error messages.

    Accepts a mapping whose values are a single message or a sequence of
    messages; every message is coerced to ``str``.

    Examples:
        >>> ErrorBag.model_validate({"email": "taken"}).root
        {'email': ['taken']}
        >>> ErrorBag.model_validate(None).root
        {}
    """

    root: dict[str, list[str]] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def coerce_messages(cls, data: Any) -> Any:
        if data is None:
            return {}
        if isinstance(data, ErrorBag):
            return data.root
        if not isinstance(data, Mapping):
            return data
        coerced: dict[str, list[str]] = {}
        for field, messages in data.items():
            if isinstance(messages, (str, bytes)) or not isinstance(
                messages, (list, tuple, set, frozenset)
            ):
                messages = [messages]
            coerced[str(field)] = [str(message) for message in messages]
        return coerced

    def get(self, field: str) -> list[str]:
        """Messages for one field (empty when the field has none)."""
        return list(self.root.get(field, []))

    def has(self, field: str) -> bool:
        return field in self.root

    def is_empty(self) -> bool:
        return not self.root

    def __iter__(self) -> Iterator[str]:  # type: ignore[override]
        return iter(self.root)

    def __len__(self) -> int:
        return len(self.root)


class ErrorResponse(BaseModel):
    """Body of a translated failure.

    Attributes:
        message: Human-readable failure message.
        errors: Field errors, validation failures only.
    """

    message: str = Field(..., description="Human-readable failure message")
    errors: ErrorBag | None = Field(None, description="Field errors")
