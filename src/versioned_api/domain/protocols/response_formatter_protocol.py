"""Response formatter port.

A formatter turns a handler's raw return value (or an error body) into bytes
for one response format token (``json``, ``xml``...). The router picks the
formatter from the negotiated format.
"""

from typing import Any, Protocol


class ResponseFormatterProtocol(Protocol):
    """Serializes response content for one format."""

    media_type: str

    def format(self, content: Any) -> bytes:
        """Serialize content into the response body."""
        ...
