"""Per-request negotiation result."""

from dataclasses import dataclass

from versioned_api.domain.value_objects.version_id import VersionId


@dataclass(frozen=True, slots=True, kw_only=True)
class NegotiatedRequestContext:
    """What a single API dispatch resolved to.

    Created at the start of an API dispatch and discarded at its end; never
    shared between requests.

    Attributes:
        vendor: Vendor the request was negotiated under.
        version: Route collection the request is dispatched against.
        format: Response format used to render the result.
        internal: Whether the request came from in-process code, in which
            case unhandled failures propagate instead of being rendered.
    """

    vendor: str
    version: VersionId
    format: str
    internal: bool = False
