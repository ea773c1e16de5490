"""Vendor media type parsing.

Extracts the (vendor, version, format) triple from an Accept header such as::

    Accept: application/vnd.acme.v2.0.1+json

The header may carry several media ranges; they are tried in descending
quality order and the first naming the configured vendor wins. A missing,
malformed or foreign header is not an error: the caller falls back to its
defaults.
"""

import re
from functools import lru_cache

from versioned_api.domain.value_objects.media_type import AcceptHeader
from versioned_api.domain.value_objects.version_id import VERSION_ID_PATTERN, VersionId


def parse_accept_header(header: str | None, vendor: str) -> AcceptHeader | None:
    """Parse the vendor media type out of an Accept header.

    Args:
        header: Raw Accept header value (may be None or empty).
        vendor: Configured vendor name.

    Returns:
        AcceptHeader for the best matching media range, or None when no range
        names the vendor.

    Example:
        >>> parse_accept_header("application/vnd.acme.v2+json", "acme")
        AcceptHeader(vendor='acme', version='v2', format='json')
        >>> parse_accept_header("application/json", "acme") is None
        True
    """
    if not header or not vendor:
        return None

    pattern = _vendor_pattern(vendor.lower())
    for media_range in _media_ranges(header):
        match = pattern.fullmatch(media_range)
        if match is not None:
            return AcceptHeader(
                vendor=vendor.lower(),
                version=VersionId(match["version"]),
                format=match["format"].lower(),
            )
    return None


@lru_cache(maxsize=32)
def _vendor_pattern(vendor: str) -> re.Pattern[str]:
    return re.compile(
        rf"application/vnd\.{re.escape(vendor)}"
        rf"\.(?P<version>{VERSION_ID_PATTERN})"
        r"\+(?P<format>[A-Za-z0-9]+)",
        re.IGNORECASE,
    )


def _media_ranges(header: str) -> list[str]:
    """Media ranges ordered by quality; ties keep header order, q=0 is dropped."""
    ranked: list[tuple[float, str]] = []
    for item in header.split(","):
        media, *params = item.split(";")
        media = media.strip()
        if not media:
            continue
        quality = 1.0
        for param in params:
            name, _, value = param.partition("=")
            if name.strip().lower() == "q":
                try:
                    quality = float(value.strip())
                except ValueError:
                    quality = 0.0
        if quality > 0:
            ranked.append((quality, media))
    ranked.sort(key=lambda entry: entry[0], reverse=True)
    return [media for _, media in ranked]
