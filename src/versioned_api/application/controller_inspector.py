"""Declarative handler metadata.

Handlers declare whether they are protected and which scopes they need by
decoration, and the metadata is read once when the route is registered:

    @controller(scopes=["read"])           # class level, applies to every method
    class UserController:
        @action(scopes=["users:list"])     # method level
        def index(self): ...

        @action(protected=False)
        def ping(self): ...

    api.get("users", (UserController, "index"))

A method-level protected flag beats the class-level one, which beats the
group's. Scopes accumulate: group, then class, then method.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, TypeVar

from versioned_api.core.enums import ErrorCode
from versioned_api.core.errors import ConfigurationError

ACTION_METADATA_ATTR = "__api_action__"

F = TypeVar("F", bound=Callable[..., Any])
C = TypeVar("C", bound=type)

# A route target: a callable, or a (ControllerClass, "method_name") pair.
type HandlerTarget = Callable[..., Any] | tuple[type, str]


@dataclass(frozen=True, slots=True, kw_only=True)
class ActionMetadata:
    """Protection and scopes declared on a handler or controller.

    Attributes:
        protected: Explicit protection flag, None when undeclared.
        scopes: Declared scopes in declaration order.
    """

    protected: bool | None = None
    scopes: tuple[str, ...] = ()


_UNDECLARED = ActionMetadata()


def _normalize_scopes(scopes: str | Sequence[str] | None) -> tuple[str, ...]:
    if scopes is None:
        return ()
    if isinstance(scopes, str):
        return (scopes,)
    return tuple(scopes)


def action(
    *, protected: bool | None = None, scopes: str | Sequence[str] | None = None
) -> Callable[[F], F]:
    """Attach method-level metadata to a handler function or controller method."""

    def decorator(func: F) -> F:
        setattr(
            func,
            ACTION_METADATA_ATTR,
            ActionMetadata(protected=protected, scopes=_normalize_scopes(scopes)),
        )
        return func

    return decorator


def controller(
    *, protected: bool | None = None, scopes: str | Sequence[str] | None = None
) -> Callable[[C], C]:
    """Attach class-level metadata applying to every method of a controller."""

    def decorator(cls: C) -> C:
        setattr(
            cls,
            ACTION_METADATA_ATTR,
            ActionMetadata(protected=protected, scopes=_normalize_scopes(scopes)),
        )
        return cls

    return decorator


class ControllerAction:
    """Callable that instantiates a controller and invokes one of its methods."""

    def __init__(self, controller_class: type, method: str) -> None:
        self.controller_class = controller_class
        self.method = method

    def __call__(self, **params: Any) -> Any:
        return getattr(self.controller_class(), self.method)(**params)

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, ControllerAction)
            and other.controller_class is self.controller_class
            and other.method == self.method
        )

    def __hash__(self) -> int:
        return hash((self.controller_class, self.method))

    def __repr__(self) -> str:
        return f"{self.controller_class.__name__}.{self.method}"


@dataclass(frozen=True, slots=True)
class InspectedHandler:
    """A resolved handler with its class- and method-level metadata."""

    handler: Callable[..., Any]
    class_metadata: ActionMetadata
    method_metadata: ActionMetadata


class ControllerInspector:
    """Resolve route targets and read their declared metadata."""

    def inspect(self, target: HandlerTarget) -> InspectedHandler:
        """Resolve a route target.

        Args:
            target: A callable (plain function, bound method) or a
                ``(ControllerClass, "method")`` pair.

        Raises:
            ConfigurationError: If the target cannot be invoked.
        """
        if isinstance(target, tuple):
            return self._inspect_controller(target)

        if not callable(target):
            raise ConfigurationError(
                ErrorCode.INVALID_HANDLER,
                f"Route handler must be callable or (Controller, 'method'), got {target!r}",
            )

        owner = getattr(target, "__self__", None)
        class_metadata = (
            self.metadata_of(type(owner)) if owner is not None else _UNDECLARED
        )
        return InspectedHandler(target, class_metadata, self.metadata_of(target))

    def _inspect_controller(self, target: tuple[Any, ...]) -> InspectedHandler:
        if len(target) != 2 or not isinstance(target[0], type) or not isinstance(target[1], str):
            raise ConfigurationError(
                ErrorCode.INVALID_HANDLER,
                f"Controller route target must be (Controller, 'method'), got {target!r}",
            )
        controller_class, method = target
        func = getattr(controller_class, method, None)
        if not callable(func):
            raise ConfigurationError(
                ErrorCode.INVALID_HANDLER,
                f"{controller_class.__name__} has no method {method!r}",
            )
        return InspectedHandler(
            ControllerAction(controller_class, method),
            self.metadata_of(controller_class),
            self.metadata_of(func),
        )

    @staticmethod
    def metadata_of(obj: Any) -> ActionMetadata:
        """Metadata declared directly on ``obj``, or an empty declaration."""
        metadata = getattr(obj, ACTION_METADATA_ATTR, None)
        return metadata if isinstance(metadata, ActionMetadata) else _UNDECLARED
