"""Transport-neutral request/response types."""

from versioned_api.presentation.http.request import ApiRequest
from versioned_api.presentation.http.response import ApiResponse, FormattedResponse

__all__ = ["ApiRequest", "ApiResponse", "FormattedResponse"]
