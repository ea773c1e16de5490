"""Response formatters keyed by format token."""

from versioned_api.infrastructure.formatters.json_formatter import JsonResponseFormatter

__all__ = ["JsonResponseFormatter"]
