"""Parsed vendor media type."""

from dataclasses import dataclass

from versioned_api.domain.value_objects.version_id import VersionId


@dataclass(frozen=True, slots=True, kw_only=True)
class AcceptHeader:
    """The (vendor, version, format) triple of a vendor media type.

    ``application/vnd.acme.v2+json`` parses to
    ``AcceptHeader(vendor="acme", version="v2", format="json")``.

    Attributes:
        vendor: Vendor namespace (lowercase).
        version: Requested version id, verbatim.
        format: Requested response format token (lowercase).
    """

    vendor: str
    version: VersionId
    format: str

    @property
    def media_type(self) -> str:
        """Render the triple back into a media type string."""
        return f"application/vnd.{self.vendor}.{self.version}+{self.format}"
