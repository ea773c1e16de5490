"""Unit tests for JsonResponseFormatter."""

from dataclasses import dataclass
from datetime import date

import pytest

from versioned_api.infrastructure.formatters import JsonResponseFormatter
from versioned_api.presentation.errors import ErrorBag, ErrorResponse


@dataclass
class User:
    name: str
    joined: date


@pytest.mark.unit
class TestJsonResponseFormatter:
    """Test JSON serialization of response content."""

    def test_string_is_wrapped_in_message(self):
        """Test a bare string renders as {"message": ...}."""
        assert JsonResponseFormatter().format("bar") == b'{"message":"bar"}'

    def test_mapping_is_compact_json(self):
        """Test output uses compact separators."""
        assert JsonResponseFormatter().format({"a": 1, "b": [1, 2]}) == b'{"a":1,"b":[1,2]}'

    def test_dataclasses_and_dates_are_encoded(self):
        """Test jsonable_encoder handles dataclasses and dates."""
        body = JsonResponseFormatter().format(User(name="ana", joined=date(2024, 1, 2)))

        assert body == b'{"name":"ana","joined":"2024-01-02"}'

    def test_error_response_omits_missing_errors(self):
        """Test None fields of models are dropped."""
        body = JsonResponseFormatter().format(ErrorResponse(message="404 Not Found"))

        assert body == b'{"message":"404 Not Found"}'

    def test_error_response_keeps_empty_error_bag(self):
        """Test an empty bag still renders as {}."""
        body = JsonResponseFormatter().format(
            ErrorResponse(message="testing", errors=ErrorBag.model_validate({}))
        )

        assert body == b'{"message":"testing","errors":{}}'

    def test_unicode_is_not_escaped(self):
        """Test non-ASCII text is emitted as UTF-8."""
        assert JsonResponseFormatter().format("café") == '{"message":"café"}'.encode()

    def test_media_type(self):
        """Test the formatter advertises JSON."""
        assert JsonResponseFormatter.media_type == "application/json"
