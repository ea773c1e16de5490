"""API responses.

Handlers may return an ``ApiResponse`` to control status and headers while
leaving serialization to the negotiated formatter. Rendering produces a
``FormattedResponse``: an ordinary Starlette response that remembers the
content it was built from.
"""

from collections.abc import Mapping
from typing import Any

from starlette.responses import Response

from versioned_api.domain.protocols.response_formatter_protocol import (
    ResponseFormatterProtocol,
)


class FormattedResponse(Response):
    """Starlette response rendered by a formatter.

    Attributes:
        original_content: Content before formatting.
    """

    def __init__(
        self,
        content: bytes,
        *,
        original_content: Any,
        status_code: int = 200,
        headers: Mapping[str, str] | None = None,
        media_type: str | None = None,
    ) -> None:
        super().__init__(
            content=content,
            status_code=status_code,
            headers=headers,
            media_type=media_type,
        )
        self.original_content = original_content


class ApiResponse:
    """Unrendered response content.

    Args:
        content: Raw content handed to the formatter unchanged.
        status_code: HTTP status.
        headers: Extra response headers.
    """

    def __init__(
        self,
        content: Any = None,
        status_code: int = 200,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        self.content = content
        self.status_code = status_code
        self.headers = dict(headers or {})

    def render(self, formatter: ResponseFormatterProtocol) -> FormattedResponse:
        return FormattedResponse(
            formatter.format(self.content),
            original_content=self.content,
            status_code=self.status_code,
            headers=self.headers,
            media_type=formatter.media_type,
        )

    def __repr__(self) -> str:
        return f"ApiResponse(status_code={self.status_code}, content={self.content!r})"
