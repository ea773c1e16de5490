"""In-process API client.

Lets application code call its own API without going through HTTP. Requests
are marked internal, so failures the override handler does not claim
propagate to the caller unchanged instead of being rendered:

    users = router.internal().version("v2").get("api/users")
    user = router.internal().header("x-tenant", "acme").get("api/users/1")

Responses are unwrapped: the caller receives the handler's original content.
"""

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Self

from versioned_api.domain.value_objects.version_id import VersionId, version_id
from versioned_api.presentation.http.request import ApiRequest
from versioned_api.presentation.http.response import FormattedResponse

if TYPE_CHECKING:
    from versioned_api.presentation.router import Router


class InternalDispatcher:
    """Issue internal requests against a router.

    ``version()`` and ``header()`` return configured copies; the dispatcher
    itself is never mutated, so one instance can be shared.

    Args:
        router: Router requests are dispatched through.
        version: Version to request; defaults to the router's default version.
        headers: Extra request headers.
    """

    def __init__(
        self,
        router: "Router",
        *,
        version: VersionId | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        self._router = router
        self._version = version
        self._headers = dict(headers or {})

    def version(self, value: str) -> Self:
        return type(self)(self._router, version=version_id(value), headers=self._headers)

    def header(self, name: str, value: str) -> Self:
        return type(self)(
            self._router,
            version=self._version,
            headers={**self._headers, name.lower(): value},
        )

    def get(self, uri: str) -> Any:
        return self.request("GET", uri)

    def post(self, uri: str) -> Any:
        return self.request("POST", uri)

    def put(self, uri: str) -> Any:
        return self.request("PUT", uri)

    def patch(self, uri: str) -> Any:
        return self.request("PATCH", uri)

    def delete(self, uri: str) -> Any:
        return self.request("DELETE", uri)

    def request(self, method: str, uri: str) -> Any:
        """Dispatch an internal request and return the original content.

        Responses not produced by a formatter (returned directly by a
        handler or by the override handler) are returned as-is.
        """
        response = self._router.dispatch(self._build(method, uri))
        if isinstance(response, FormattedResponse):
            return response.original_content
        return response

    def _build(self, method: str, uri: str) -> ApiRequest:
        router = self._router
        version = self._version or router.default_version
        accept = f"application/vnd.{router.vendor}.{version}+{router.default_format}"
        headers = {**self._headers, "accept": accept}
        return ApiRequest.create(uri, method, headers, internal=True)

    def __repr__(self) -> str:
        return f"InternalDispatcher(version={self._version!r})"
