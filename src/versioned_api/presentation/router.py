"""Versioned API router.

The Router is the single entry point of the package. At build time it
collects routes into per-version collections (``api()``) and a plain,
version-agnostic collection (``get()``/``group()``...). At serve time
``dispatch()`` decides whether a request targets the API, negotiates the
version and format from the ``Accept`` header, invokes the matched handler
and renders the result, translating any failure into an error response.

Usage:
    router = Router(vendor="acme", default_version="v1")

    def v1(api: ApiGroupBuilder) -> None:
        api.get("users/{user_id:int}", show_user)

    router.api({"version": "v1", "prefix": "api"}, v1)

    response = router.dispatch(
        ApiRequest.create("api/users/1", headers={"accept": "application/vnd.acme.v1+json"})
    )

Per-request state (current request, negotiated context) lives in context
variables that are reset after every dispatch, so nested internal
dispatches restore the outer request's values.
"""

from collections.abc import Callable, Iterable, Mapping
from contextvars import ContextVar
from typing import TYPE_CHECKING, Any

from fastapi.encoders import jsonable_encoder
from fastapi import HTTPException
from starlette.responses import JSONResponse, PlainTextResponse, Response

from versioned_api.application.controller_inspector import (
    ControllerInspector,
    HandlerTarget,
)
from versioned_api.application.group_builder import (
    ApiGroupBuilder,
    GroupAttributes,
    GroupContext,
    GroupOptions,
    RouteRegistrar,
    parse_group_options,
)
from versioned_api.application.media_type_parser import parse_accept_header
from versioned_api.application.route_registry import RouteCollectionRegistry
from versioned_api.application.version_resolver import (
    NegotiationDefaults,
    VersionResolver,
)
from versioned_api.core.result import Failure, Success
from versioned_api.domain.entities.route import HTTPMethod, Route, RouteMatch
from versioned_api.domain.entities.route_collection import RouteCollection
from versioned_api.domain.protocols.exception_handler_protocol import (
    ExceptionHandlerProtocol,
)
from versioned_api.domain.protocols.logger_protocol import LoggerProtocol
from versioned_api.domain.protocols.response_formatter_protocol import (
    ResponseFormatterProtocol,
)
from versioned_api.domain.value_objects.negotiated_context import (
    NegotiatedRequestContext,
)
from versioned_api.domain.value_objects.version_id import VersionId, version_id
from versioned_api.infrastructure.formatters.json_formatter import (
    JsonResponseFormatter,
)
from versioned_api.presentation.errors.exception_translator import (
    ExceptionTranslator,
)
from versioned_api.presentation.http.request import ApiRequest
from versioned_api.presentation.http.response import ApiResponse

if TYPE_CHECKING:
    from versioned_api.presentation.internal_dispatcher import InternalDispatcher

_current_request: ContextVar[ApiRequest | None] = ContextVar(
    "current_api_request", default=None
)
_negotiated_context: ContextVar[NegotiatedRequestContext | None] = ContextVar(
    "negotiated_api_context", default=None
)


def get_current_request() -> ApiRequest | None:
    """Request being dispatched, or None outside a dispatch."""
    return _current_request.get()


def get_negotiated_context() -> NegotiatedRequestContext | None:
    """Negotiated context of the API request being dispatched, if any."""
    return _negotiated_context.get()


def _clean_path(value: str | None) -> str | None:
    if value is None:
        return None
    cleaned = value.strip().strip("/")
    return cleaned or None


class Router:
    """Versioned API router.

    Args:
        vendor: Vendor expected in ``application/vnd.<vendor>.<version>+<format>``.
        default_version: Version used when the Accept header is absent,
            unusable or names an unregistered version.
        default_format: Format used when the requested one has no formatter.
        default_prefix: Prefix applied to API groups declaring none.
        default_domain: Domain applied to API groups declaring none.
        exception_handler: Override handler consulted before translation.
        formatters: Response formatters keyed by format token; defaults to
            ``{"json": JsonResponseFormatter()}``.
        inspector: Controller inspector reading handler metadata.
        logger: Structured logger; defaults to the container's logger.
    """

    def __init__(
        self,
        *,
        vendor: str = "api",
        default_version: str = "v1",
        default_format: str = "json",
        default_prefix: str | None = None,
        default_domain: str | None = None,
        exception_handler: ExceptionHandlerProtocol | None = None,
        formatters: Mapping[str, ResponseFormatterProtocol] | None = None,
        inspector: ControllerInspector | None = None,
        logger: LoggerProtocol | None = None,
    ) -> None:
        if logger is None:
            from versioned_api.core.container import get_logger

            logger = get_logger()

        self._logger = logger
        self._inspector = inspector or ControllerInspector()
        self._formatters: dict[str, ResponseFormatterProtocol] = dict(
            formatters or {"json": JsonResponseFormatter()}
        )
        self._registry = RouteCollectionRegistry()
        self._routes = RouteCollection()
        self._translator = ExceptionTranslator(
            logger=self._logger, handler=exception_handler
        )
        self._resolver = VersionResolver(
            self._registry, self._negotiation_defaults, self._formatters
        )
        self._plain = RouteRegistrar(
            context=GroupContext(),
            inspector=self._inspector,
            store=self._store_plain,
            logger=self._logger,
        )

        self.vendor = vendor
        self.default_version = default_version
        self.default_format = default_format
        self.default_prefix = default_prefix
        self.default_domain = default_domain

    # =========================================================================
    # Configuration
    # =========================================================================

    @property
    def vendor(self) -> str:
        return self._vendor

    @vendor.setter
    def vendor(self, value: str) -> None:
        self._vendor = value.strip()

    @property
    def default_version(self) -> VersionId:
        return self._default_version

    @default_version.setter
    def default_version(self, value: str) -> None:
        self._default_version = version_id(value)

    @property
    def default_format(self) -> str:
        return self._default_format

    @default_format.setter
    def default_format(self, value: str) -> None:
        self._default_format = value.strip().lower()

    @property
    def default_prefix(self) -> str | None:
        return self._default_prefix

    @default_prefix.setter
    def default_prefix(self, value: str | None) -> None:
        self._default_prefix = _clean_path(value)

    @property
    def default_domain(self) -> str | None:
        return self._default_domain

    @default_domain.setter
    def default_domain(self, value: str | None) -> None:
        self._default_domain = _clean_path(value)

    @property
    def exception_handler(self) -> ExceptionHandlerProtocol | None:
        return self._translator.handler

    @exception_handler.setter
    def exception_handler(self, handler: ExceptionHandlerProtocol | None) -> None:
        self._translator.handler = handler

    @property
    def inspector(self) -> ControllerInspector:
        return self._inspector

    @property
    def formatters(self) -> dict[str, ResponseFormatterProtocol]:
        return self._formatters

    @property
    def requested_version(self) -> VersionId | None:
        """Version negotiated for the current dispatch, None outside one."""
        context = _negotiated_context.get()
        return context.version if context is not None else None

    @property
    def requested_format(self) -> str | None:
        """Format negotiated for the current dispatch, None outside one."""
        context = _negotiated_context.get()
        return context.format if context is not None else None

    # =========================================================================
    # Registration
    # =========================================================================

    def api(
        self,
        options: GroupOptions | Mapping[str, Any],
        callback: Callable[[ApiGroupBuilder], None],
    ) -> ApiGroupBuilder:
        """Register a group of API routes under one or more versions.

        Args:
            options: ``version`` (required; str or set/sequence of str),
                ``prefix``, ``domain``, ``protected``, ``scopes``.
            callback: Receives the group's builder and registers routes on it.

        Returns:
            ApiGroupBuilder: The builder passed to ``callback``.

        Raises:
            ConfigurationError: If ``version`` is missing, an option is
                malformed, or dispatching has already started.
        """
        group = parse_group_options(options)
        builder = ApiGroupBuilder(
            registry=self._registry,
            context=GroupContext(
                prefix=group.prefix or self._default_prefix,
                domain=group.domain or self._default_domain,
                protected=group.protected,
                scopes=group.scopes,
                versions=group.version,
            ),
            inspector=self._inspector,
            logger=self._logger,
        )
        callback(builder)
        self._logger.info(
            "API route group registered",
            versions=list(group.version),
            prefix=builder.context.prefix,
            domain=builder.context.domain,
        )
        return builder

    def group(
        self,
        attributes: GroupAttributes | Mapping[str, Any],
        callback: Callable[[RouteRegistrar], None],
    ) -> None:
        """Register a group of plain routes sharing prefix, domain and flags."""
        self._plain.group(attributes, callback)

    def get(self, uri: str, handler: HandlerTarget) -> Route:
        return self._plain.get(uri, handler)

    def post(self, uri: str, handler: HandlerTarget) -> Route:
        return self._plain.post(uri, handler)

    def put(self, uri: str, handler: HandlerTarget) -> Route:
        return self._plain.put(uri, handler)

    def patch(self, uri: str, handler: HandlerTarget) -> Route:
        return self._plain.patch(uri, handler)

    def delete(self, uri: str, handler: HandlerTarget) -> Route:
        return self._plain.delete(uri, handler)

    def options(self, uri: str, handler: HandlerTarget) -> Route:
        return self._plain.options(uri, handler)

    def any(self, uri: str, handler: HandlerTarget) -> Route:
        return self._plain.any(uri, handler)

    def match(
        self, methods: Iterable[str | HTTPMethod], uri: str, handler: HandlerTarget
    ) -> Route:
        return self._plain.match(methods, uri, handler)

    @property
    def routes(self) -> RouteCollection:
        """The plain (version-agnostic) route collection."""
        return self._routes

    def get_api_route_collection(self, version: str) -> RouteCollection:
        """Route collection of one version.

        Raises:
            VersionNotRegisteredError: If no group registered the version.
        """
        return self._registry.lookup(version)

    def has_api_route_collection(self, version: str) -> bool:
        return self._registry.has(version)

    @property
    def registry(self) -> RouteCollectionRegistry:
        return self._registry

    def freeze(self) -> None:
        """End the build phase. Called automatically by the first dispatch."""
        if self._registry.frozen:
            return
        self._registry.freeze()
        self._routes.freeze()
        self._logger.info(
            "Router frozen",
            versions=list(self._registry.versions()),
            plain_routes=len(self._routes),
        )

    def _store_plain(self, route: Route) -> None:
        self._routes.add(route)
        self._logger.debug(
            "Route registered",
            methods=sorted(m.value for m in route.methods),
            uri=route.uri,
        )

    # =========================================================================
    # Dispatch
    # =========================================================================

    def request_targeting_api(self, request: ApiRequest) -> bool:
        """Whether the request belongs to a registered API.

        True when an API route's domain matches the host, an API route's
        prefix covers the path, or an API route matches the path outright.
        """
        return any(
            collection.claims(request.path, request.host)
            for collection in self._registry.collections()
        )

    def dispatch(self, request: ApiRequest) -> Response:
        """Dispatch a request and return the response.

        API requests always get a response, failures included, unless the
        request is internal and the override handler does not claim the
        failure; the original exception is then re-raised. Plain requests
        that match nothing raise HTTPException (404/405) for the host
        framework to render.
        """
        self.freeze()
        token = _current_request.set(request)
        try:
            if self.request_targeting_api(request):
                return self._dispatch_api(request)
            return self._dispatch_plain(request)
        finally:
            _current_request.reset(token)

    def handle_exception(self, exc: Exception) -> Response:
        """Translate a failure into a response in the current format."""
        return self._render(self._translator.handle(exc), _negotiated_context.get())

    def internal(self) -> "InternalDispatcher":
        """In-process client issuing internal requests to this router."""
        from versioned_api.presentation.internal_dispatcher import InternalDispatcher

        return InternalDispatcher(self)

    def _dispatch_api(self, request: ApiRequest) -> Response:
        context: NegotiatedRequestContext | None = None
        token = None
        try:
            context = self._negotiate(request)
            token = _negotiated_context.set(context)
            matched = self._match(self._registry.lookup(context.version), request)
            response = self._render(
                matched.route.handler(**matched.params), context
            )
        except Exception as exc:
            if request.internal and not self._translator.will_override(exc):
                self._logger.debug(
                    "Internal request failure propagated",
                    exception_type=type(exc).__name__,
                    path=request.path,
                )
                raise
            response = self._render_error(exc, context)
        finally:
            if token is not None:
                _negotiated_context.reset(token)

        self._logger.debug(
            "API request dispatched",
            method=request.method,
            path=request.path,
            version=context.version if context else None,
            status_code=response.status_code,
            internal=request.internal,
        )
        return response

    def _negotiate(self, request: ApiRequest) -> NegotiatedRequestContext:
        accept = parse_accept_header(request.accept, self._vendor)
        match self._resolver.resolve(accept, internal=request.internal):
            case Success(value=context):
                return context
            case Failure(error=error):
                raise error

    def _dispatch_plain(self, request: ApiRequest) -> Response:
        matched = self._match(self._routes, request)
        result = matched.route.handler(**matched.params)
        if isinstance(result, Response):
            return result
        if isinstance(result, ApiResponse):
            return result.render(self._formatter(None))
        if isinstance(result, str):
            return PlainTextResponse(result)
        return JSONResponse(jsonable_encoder(result))

    @staticmethod
    def _match(collection: RouteCollection, request: ApiRequest) -> RouteMatch:
        matched = collection.match(request.method, request.path, request.host)
        if matched is not None:
            return matched
        allowed = collection.allowed_methods(request.path, request.host)
        if allowed:
            raise HTTPException(
                status_code=405,
                headers={"Allow": ", ".join(sorted(m.value for m in allowed))},
            )
        raise HTTPException(status_code=404)

    def _render(
        self,
        result: Any,
        context: NegotiatedRequestContext | None,
    ) -> Response:
        if isinstance(result, Response):
            return result
        if not isinstance(result, ApiResponse):
            result = ApiResponse(content=result)
        return result.render(self._formatter(context))

    def _render_error(
        self,
        exc: Exception,
        context: NegotiatedRequestContext | None,
    ) -> Response:
        """Render a failure, retrying with the default then JSON formatter.

        Only the override handler may raise from here; formatter failures
        never reach the caller.
        """
        result = self._translator.handle(exc)
        if isinstance(result, Response):
            return result
        if not isinstance(result, ApiResponse):
            result = ApiResponse(content=result)
        try:
            return self._render(result, context)
        except Exception as render_exc:
            self._logger.error(
                "Error response rendering failed",
                error=render_exc,
                format=context.format if context else self._default_format,
            )

        fallback = self._formatters.get(self._default_format)
        if fallback is not None:
            try:
                return result.render(fallback)
            except Exception as render_exc:
                self._logger.error(
                    "Default format rendering failed",
                    error=render_exc,
                    format=self._default_format,
                )
        return result.render(JsonResponseFormatter())

    def _formatter(
        self, context: NegotiatedRequestContext | None
    ) -> ResponseFormatterProtocol:
        response_format = context.format if context else self._default_format
        formatter = self._formatters.get(response_format) or self._formatters.get(
            self._default_format
        )
        if formatter is None:
            return JsonResponseFormatter()
        return formatter

    def _negotiation_defaults(self) -> NegotiationDefaults:
        return NegotiationDefaults(
            vendor=self._vendor,
            version=self._default_version,
            format=self._default_format,
        )
