"""Domain protocols (ports).

Structural interfaces (PEP 544); implementations do not inherit from them.
"""

from versioned_api.domain.protocols.exception_handler_protocol import (
    ExceptionHandlerProtocol,
)
from versioned_api.domain.protocols.logger_protocol import LoggerProtocol
from versioned_api.domain.protocols.response_formatter_protocol import (
    ResponseFormatterProtocol,
)

__all__ = [
    "ExceptionHandlerProtocol",
    "LoggerProtocol",
    "ResponseFormatterProtocol",
]
