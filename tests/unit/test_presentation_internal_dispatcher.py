"""Unit tests for InternalDispatcher (in-process API calls)."""

import pytest
from fastapi import HTTPException
from starlette.responses import PlainTextResponse

from versioned_api.core.errors import ConfigurationError
from versioned_api.presentation.internal_dispatcher import InternalDispatcher
from versioned_api.presentation.router import get_negotiated_context


@pytest.fixture
def api_router(router):
    def v1(api):
        api.get("users", lambda: [{"id": 1}])
        api.post("users", lambda: {"created": True})
        api.put("users/{user_id:int}", lambda user_id: {"put": user_id})
        api.patch("users/{user_id:int}", lambda user_id: {"patch": user_id})
        api.delete("users/{user_id:int}", lambda user_id: None)
        api.get("missing", _raise_not_found)

    router.api({"version": "v1", "prefix": "api"}, v1)
    router.api({"version": "v2", "prefix": "api"}, lambda api: api.get("users", lambda: "v2 users"))
    return router


def _raise_not_found():
    raise HTTPException(status_code=404, detail="nope")


@pytest.mark.unit
class TestInternalDispatcher:
    """Test internal requests through router.internal()."""

    def test_returns_original_content(self, api_router):
        """Test the caller gets the handler's raw value."""
        assert api_router.internal().get("api/users") == [{"id": 1}]

    def test_version_selects_collection(self, api_router):
        """Test version() targets another collection."""
        assert api_router.internal().version("v2").get("api/users") == "v2 users"

    @pytest.mark.parametrize(
        "verb,expected",
        [
            ("post", {"created": True}),
            ("put", {"put": 7}),
            ("patch", {"patch": 7}),
            ("delete", None),
        ],
    )
    def test_verbs(self, api_router, verb, expected):
        """Test every verb dispatches with its method."""
        uri = "api/users" if verb == "post" else "api/users/7"

        assert getattr(api_router.internal(), verb)(uri) == expected

    def test_failures_propagate_unchanged(self, api_router):
        """Test unclaimed failures reach the caller."""
        with pytest.raises(HTTPException) as exc_info:
            api_router.internal().get("api/missing")

        assert exc_info.value.detail == "nope"

    def test_claimed_failures_return_handler_response(self, api_router, exception_handler):
        """Test the override handler still wins for internal requests."""
        handled = PlainTextResponse("handled", status_code=404)
        exception_handler.will_handle.return_value = True
        exception_handler.handle.return_value = handled

        assert api_router.internal().get("api/missing") is handled

    def test_requests_are_marked_internal(self, router):
        """Test the negotiated context carries the internal flag."""
        seen = {}

        def handler():
            seen["context"] = get_negotiated_context()
            return "ok"

        router.api({"version": "v1"}, lambda api: api.get("foo", handler))

        router.internal().get("foo")

        assert seen["context"].internal is True
        assert seen["context"].version == "v1"

    def test_headers_are_sent(self, router):
        """Test header() adds request headers."""
        from versioned_api.presentation.router import get_current_request

        router.api(
            {"version": "v1"},
            lambda api: api.get("foo", lambda: get_current_request().headers.get("x-tenant")),
        )

        assert router.internal().header("X-Tenant", "acme").get("foo") == "acme"

    def test_configured_copies_do_not_mutate_original(self, router):
        """Test version() and header() return new dispatchers."""
        base = router.internal()

        versioned = base.version("v2")
        with_header = versioned.header("x-a", "1")

        assert isinstance(versioned, InternalDispatcher)
        assert versioned is not base
        assert with_header is not versioned
        assert repr(base) == "InternalDispatcher(version=None)"
        assert repr(with_header) == "InternalDispatcher(version='v2')"

    def test_invalid_version_is_rejected(self, router):
        """Test version() validates the id."""
        with pytest.raises(ConfigurationError):
            router.internal().version("v2.")

    def test_nested_internal_dispatch_restores_outer_context(self, api_router):
        """Test an internal call inside a handler restores the outer context."""
        seen = {}

        def outer():
            seen["inner"] = api_router.internal().version("v2").get("api/users")
            seen["after"] = api_router.requested_version
            return "outer"

        router = api_router
        router.api({"version": "v3", "prefix": "api"}, lambda api: api.get("outer", outer))

        assert router.internal().version("v3").get("api/outer") == "outer"
        assert seen == {"inner": "v2 users", "after": "v3"}
