"""Unit tests for group option parsing and route builders.

Tests cover:
- GroupOptions normalization (version, scopes, prefix/domain)
- Missing version and unknown options
- Context merging for nested groups
- Protected precedence and scope merge order
- Registration into every version of an API group
"""

from unittest.mock import MagicMock

import pytest

from versioned_api.application.controller_inspector import (
    ControllerInspector,
    action,
    controller,
)
from versioned_api.application.group_builder import (
    ApiGroupBuilder,
    GroupAttributes,
    GroupContext,
    RouteRegistrar,
    parse_group_attributes,
    parse_group_options,
)
from versioned_api.application.route_registry import RouteCollectionRegistry
from versioned_api.core.enums import ErrorCode
from versioned_api.core.errors import ConfigurationError
from versioned_api.domain.entities import HTTPMethod


@controller(scopes=["foo", "bar"])
class ScopedController:
    @action(scopes="qux")
    def index(self):
        return "index"


@controller(protected=True)
class ProtectedController:
    def index(self):
        return "index"

    @action(protected=False)
    def public(self):
        return "public"


def make_builder(versions=("v1",), **context):
    registry = RouteCollectionRegistry()
    builder = ApiGroupBuilder(
        registry=registry,
        context=GroupContext(versions=tuple(versions), **context),
        inspector=ControllerInspector(),
        logger=MagicMock(),
    )
    return registry, builder


@pytest.mark.unit
class TestParseGroupOptions:
    """Test parse_group_options()."""

    def test_string_version_becomes_tuple(self):
        """Test a single version string is wrapped."""
        assert parse_group_options({"version": "v1"}).version == ("v1",)

    def test_sequence_versions_keep_order_and_drop_duplicates(self):
        """Test sequences keep order, duplicates removed."""
        options = parse_group_options({"version": ["v2", "v1", "v2"]})

        assert options.version == ("v2", "v1")

    def test_set_versions_are_sorted(self):
        """Test sets are ordered deterministically."""
        assert parse_group_options({"version": {"v2", "v1"}}).version == ("v1", "v2")

    @pytest.mark.parametrize("options", [{}, {"version": ""}, {"version": []}, {"prefix": "api"}])
    def test_missing_version_raises(self, options):
        """Test a group without version is a configuration error."""
        with pytest.raises(ConfigurationError) as exc_info:
            parse_group_options(options)

        assert exc_info.value.code is ErrorCode.VERSION_REQUIRED

    def test_malformed_version_raises(self):
        """Test invalid ids are rejected as invalid group options."""
        with pytest.raises(ConfigurationError) as exc_info:
            parse_group_options({"version": ["v1", "v2."]})

        assert exc_info.value.code is ErrorCode.INVALID_GROUP_OPTIONS

    def test_unknown_option_raises(self):
        """Test unknown keys are rejected."""
        with pytest.raises(ConfigurationError) as exc_info:
            parse_group_options({"version": "v1", "middleware": "auth"})

        assert exc_info.value.code is ErrorCode.INVALID_GROUP_OPTIONS

    def test_scopes_and_prefix_are_normalized(self):
        """Test scope strings are wrapped and prefix slashes stripped."""
        options = parse_group_options(
            {"version": "v1", "scopes": "read", "prefix": "/api/", "domain": " "}
        )

        assert options.scopes == ("read",)
        assert options.prefix == "api"
        assert options.domain is None
        assert options.protected is None

    def test_parse_group_attributes_rejects_version(self):
        """Test plain groups do not accept a version."""
        with pytest.raises(ConfigurationError):
            parse_group_attributes({"version": "v1"})

    def test_parsed_options_pass_through(self):
        """Test already parsed models are returned unchanged."""
        attributes = GroupAttributes(prefix="api")

        assert parse_group_attributes(attributes) is attributes


@pytest.mark.unit
class TestGroupContext:
    """Test GroupContext.merge()."""

    def test_merge_nested_attributes(self):
        """Test prefixes join, domain overrides, scopes concatenate."""
        outer = GroupContext(
            prefix="api", domain="foo.bar", protected=True, scopes=("a",), versions=("v1",)
        )

        inner = outer.merge(
            GroupAttributes(prefix="admin", domain="admin.foo.bar", scopes=("b",))
        )

        assert inner.prefix == "api/admin"
        assert inner.domain == "admin.foo.bar"
        assert inner.protected is True
        assert inner.scopes == ("a", "b")
        assert inner.versions == ("v1",)

    def test_merge_explicit_protected_overrides(self):
        """Test an explicit nested flag replaces the inherited one."""
        outer = GroupContext(protected=True)

        assert outer.merge(GroupAttributes(protected=False)).protected is False

    def test_merge_without_prefix_keeps_outer(self):
        """Test missing nested prefix/domain inherit."""
        outer = GroupContext(prefix="api", domain="foo.bar")

        inner = outer.merge(GroupAttributes())

        assert (inner.prefix, inner.domain) == ("api", "foo.bar")


@pytest.mark.unit
class TestApiGroupBuilder:
    """Test route registration through an API group builder."""

    def test_get_registers_get_and_head_in_every_version(self):
        """Test one route lands in each version collection."""
        registry, builder = make_builder(versions=("v1", "v2"))

        route = builder.get("foo", lambda: "bar")

        assert route.methods == frozenset({HTTPMethod.GET, HTTPMethod.HEAD})
        assert registry.lookup("v1").routes == (route,)
        assert registry.lookup("v2").routes == (route,)
        assert route.action.versions == frozenset({"v1", "v2"})

    def test_builder_creates_empty_collections(self):
        """Test declaring a group registers its versions even without routes."""
        registry, builder = make_builder(versions=("v3",))

        assert registry.has("v3")
        assert builder.versions == ("v3",)

    @pytest.mark.parametrize(
        "verb,method",
        [
            ("post", HTTPMethod.POST),
            ("put", HTTPMethod.PUT),
            ("patch", HTTPMethod.PATCH),
            ("delete", HTTPMethod.DELETE),
            ("options", HTTPMethod.OPTIONS),
        ],
    )
    def test_single_method_verbs(self, verb, method):
        """Test each verb registers exactly its method."""
        _, builder = make_builder()

        route = getattr(builder, verb)("foo", lambda: None)

        assert route.methods == frozenset({method})

    def test_any_registers_all_methods(self):
        """Test any() answers every method."""
        _, builder = make_builder()

        assert builder.any("foo", lambda: None).methods == frozenset(HTTPMethod)

    def test_match_registers_given_methods(self):
        """Test match() accepts method names."""
        _, builder = make_builder()

        route = builder.match(["get", "post"], "foo", lambda: None)

        assert route.methods == frozenset({HTTPMethod.GET, HTTPMethod.POST})

    def test_prefix_is_applied_to_uri(self):
        """Test the group prefix is prepended."""
        _, builder = make_builder(prefix="foo/bar")

        route = builder.get("foo", lambda: None)

        assert route.uri == "/foo/bar/foo"
        assert route.action.prefix == "foo/bar"

    def test_group_scopes_precede_controller_scopes(self):
        """Test scopes merge as group + class + method, duplicates kept."""
        _, builder = make_builder(scopes=("baz", "foo"))

        route = builder.get("foo", (ScopedController, "index"))

        assert route.action.scopes == ("baz", "foo", "foo", "bar", "qux")

    def test_group_protected_applies_by_default(self):
        """Test an undecorated handler inherits the group flag."""
        _, builder = make_builder(protected=True)

        assert builder.get("foo", lambda: None).action.protected is True

    def test_unset_protected_defaults_to_false(self):
        """Test no flag anywhere means unprotected."""
        _, builder = make_builder()

        assert builder.get("foo", lambda: None).action.protected is False

    def test_class_flag_beats_group_flag(self):
        """Test a class-level flag overrides the group."""
        _, builder = make_builder(protected=False)

        route = builder.get("foo", (ProtectedController, "index"))

        assert route.action.protected is True

    def test_method_flag_beats_class_and_group(self):
        """Test a method-level flag overrides class and group."""
        _, builder = make_builder(protected=True)

        route = builder.get("foo", (ProtectedController, "public"))

        assert route.action.protected is False

    def test_nested_group_inherits_context(self):
        """Test nested groups register into the same versions with merged options."""
        registry, builder = make_builder(versions=("v1", "v2"), prefix="api", scopes=("a",))
        registered = []

        def nested(admin):
            registered.append(admin.get("users", lambda: None))

        builder.group({"prefix": "admin", "scopes": "b", "protected": True}, nested)

        route = registered[0]
        assert route.uri == "/api/admin/users"
        assert route.action.scopes == ("a", "b")
        assert route.action.protected is True
        assert registry.lookup("v2").routes == (route,)

    def test_registration_is_logged(self):
        """Test each API route registration is logged at debug."""
        logger = MagicMock()
        registry = RouteCollectionRegistry()
        builder = ApiGroupBuilder(
            registry=registry,
            context=GroupContext(versions=("v1",)),
            inspector=ControllerInspector(),
            logger=logger,
        )

        builder.get("foo", lambda: None)

        logger.debug.assert_called_once()
        assert logger.debug.call_args.kwargs["uri"] == "/foo"


@pytest.mark.unit
class TestRouteRegistrar:
    """Test the plain registrar."""

    def test_routes_go_to_store(self):
        """Test the registrar hands built routes to its store."""
        stored = []
        registrar = RouteRegistrar(
            context=GroupContext(),
            inspector=ControllerInspector(),
            store=stored.append,
            logger=MagicMock(),
        )

        route = registrar.get("foo", lambda: "bar")

        assert stored == [route]
        assert route.action.versions == frozenset()

    def test_nested_group_shares_store(self):
        """Test nested plain groups use the same store."""
        stored = []
        registrar = RouteRegistrar(
            context=GroupContext(),
            inspector=ControllerInspector(),
            store=stored.append,
            logger=MagicMock(),
        )

        registrar.group({"prefix": "api"}, lambda plain: plain.get("foo", lambda: "foo"))

        assert [route.uri for route in stored] == ["/api/foo"]
