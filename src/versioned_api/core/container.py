"""Composition root.

Application-scoped singletons built from settings:
- Logging (console, JSON in testing/CI)
- Router (routing defaults from settings)

Usage:
    from versioned_api.core.container import get_logger, get_router

    logger = get_logger()
    router = get_router()
"""

from functools import lru_cache
from typing import TYPE_CHECKING

from versioned_api.core.config import settings

if TYPE_CHECKING:
    from versioned_api.domain.protocols.logger_protocol import LoggerProtocol
    from versioned_api.presentation.router import Router


@lru_cache()
def get_logger() -> "LoggerProtocol":
    """Return the application-scoped logger singleton.

    Adapter selection:
    - testing/ci: ConsoleAdapter (JSON)
    - everything else: ConsoleAdapter (human-readable)

    Returns:
        LoggerProtocol: Logger instance implementing the protocol.
    """
    from versioned_api.infrastructure.logging.console_adapter import ConsoleAdapter

    use_json = settings.is_testing or settings.is_ci
    return ConsoleAdapter(use_json=use_json, log_level=settings.log_level)


def create_router() -> "Router":
    """Build a new Router seeded with the routing defaults from settings."""
    from versioned_api.presentation.router import Router

    return Router(
        vendor=settings.api_vendor,
        default_version=settings.api_default_version,
        default_format=settings.api_default_format,
        default_prefix=settings.api_default_prefix,
        default_domain=settings.api_default_domain,
        logger=get_logger(),
    )


@lru_cache()
def get_router() -> "Router":
    """Return the application-scoped router singleton.

    Routes are registered on it during startup; the first dispatch freezes it.
    """
    return create_router()
