"""Unit tests for Accept header parsing.

Tests cover:
- Vendor media type extraction (version, format)
- Point-release versions
- Multiple media ranges ordered by quality
- Absent, malformed and foreign-vendor headers yield None
"""

import pytest

from versioned_api.application.media_type_parser import parse_accept_header
from versioned_api.domain.value_objects.media_type import AcceptHeader


@pytest.mark.unit
class TestParseAcceptHeader:
    """Test parse_accept_header()."""

    def test_parses_vendor_version_and_format(self):
        """Test a plain vendor media type yields the triple."""
        result = parse_accept_header("application/vnd.testing.v2+json", "testing")

        assert result == AcceptHeader(vendor="testing", version="v2", format="json")

    @pytest.mark.parametrize("version", ["v1.1", "v2.0.1", "2024.01"])
    def test_parses_point_release_versions(self, version):
        """Test dotted version ids are kept verbatim."""
        result = parse_accept_header(f"application/vnd.testing.{version}+json", "testing")

        assert result is not None
        assert result.version == version

    def test_media_type_match_is_case_insensitive(self):
        """Test vendor and format compare case-insensitively, version verbatim."""
        result = parse_accept_header("Application/VND.Testing.V2+JSON", "testing")

        assert result == AcceptHeader(vendor="testing", version="V2", format="json")

    def test_media_type_property_renders_triple(self):
        """Test AcceptHeader.media_type round trips to the header form."""
        result = parse_accept_header("application/vnd.testing.v3+xml", "testing")

        assert result.media_type == "application/vnd.testing.v3+xml"

    @pytest.mark.parametrize(
        "header",
        [
            None,
            "",
            "application/json",
            "*/*",
            "application/vnd.testing+json",
            "application/vnd.testing.v1",
            "application/vnd.testing.v1.+json",
            "application/vnd.testing..v1+json",
            "application/vnd.testing.v 1+json",
        ],
    )
    def test_unusable_headers_yield_none(self, header):
        """Test absent or malformed headers are 'no match', never errors."""
        assert parse_accept_header(header, "testing") is None

    def test_foreign_vendor_yields_none(self):
        """Test a media type for another vendor is ignored."""
        assert parse_accept_header("application/vnd.other.v2+json", "testing") is None

    def test_vendor_is_escaped(self):
        """Test regex metacharacters in the vendor do not widen the match."""
        assert parse_accept_header("application/vnd.aXb.v1+json", "a.b") is None
        assert parse_accept_header("application/vnd.a.b.v1+json", "a.b") is not None

    def test_first_vendor_range_wins_among_equal_quality(self):
        """Test ties keep header order."""
        header = (
            "application/json, application/vnd.testing.v1+json, "
            "application/vnd.testing.v2+json"
        )

        assert parse_accept_header(header, "testing").version == "v1"

    def test_ranges_are_tried_by_descending_quality(self):
        """Test a higher q range beats an earlier lower q range."""
        header = (
            "application/vnd.testing.v1+json;q=0.5, "
            "application/vnd.testing.v2+json;q=0.9"
        )

        assert parse_accept_header(header, "testing").version == "v2"

    def test_zero_quality_ranges_are_skipped(self):
        """Test q=0 means 'not acceptable'."""
        header = "application/vnd.testing.v2+json;q=0, application/vnd.testing.v1+json;q=0.1"

        assert parse_accept_header(header, "testing").version == "v1"

    def test_invalid_quality_is_skipped(self):
        """Test an unparsable q value drops the range."""
        assert parse_accept_header("application/vnd.testing.v2+json;q=high", "testing") is None

    def test_other_parameters_are_ignored(self):
        """Test parameters other than q do not affect parsing."""
        header = "application/vnd.testing.v2+json; charset=utf-8"

        assert parse_accept_header(header, "testing").version == "v2"
