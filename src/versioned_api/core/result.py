"""Outcome types for operations with an expected failure path.

Version resolution can legitimately fail (the default version has no route
collection), so it returns a Result rather than raising. The router unwraps
it at the dispatch boundary and decides whether the failure propagates.

Usage:
    match resolver.resolve(accept, internal=False):
        case Success(value=context):
            ...  # NegotiatedRequestContext
        case Failure(error=error):
            raise error  # VersionNotRegisteredError
"""

from dataclasses import dataclass

__all__ = ["Failure", "Result", "Success"]


@dataclass(frozen=True, slots=True, kw_only=True)
class Success[T]:
    """Resolved value, e.g. the negotiated request context."""

    value: T


@dataclass(frozen=True, slots=True, kw_only=True)
class Failure[E]:
    """Expected failure, e.g. an unregistered default version.

    Attributes:
        error: The routing error to raise or translate.
    """

    error: E


type Result[T, E] = Success[T] | Failure[E]
