"""Shared pytest fixtures.

Every router built here is isolated: its own registry, a MagicMock logger
and a MagicMock override handler that claims nothing unless a test says so.
"""

from unittest.mock import MagicMock

import pytest

from versioned_api.presentation.router import Router

VENDOR = "testing"


def accept(version: str, fmt: str = "json", vendor: str = VENDOR) -> dict[str, str]:
    """Accept header naming a vendor media type.

    Usage:
        ApiRequest.create("foo", headers=accept("v2"))
    """
    return {"accept": f"application/vnd.{vendor}.{version}+{fmt}"}


@pytest.fixture
def mock_logger():
    """Logger double implementing LoggerProtocol."""
    return MagicMock()


@pytest.fixture
def exception_handler():
    """Override handler that claims no failures by default."""
    handler = MagicMock()
    handler.will_handle.return_value = False
    return handler


@pytest.fixture
def router(exception_handler, mock_logger):
    """Router with vendor 'testing' and default version 'v1'."""
    return Router(
        vendor=VENDOR,
        default_version="v1",
        exception_handler=exception_handler,
        logger=mock_logger,
    )
