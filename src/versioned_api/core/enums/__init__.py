"""Core enums package.

Usage:
    from versioned_api.core.enums import ErrorCode, Environment
"""

from versioned_api.core.enums.environment import Environment
from versioned_api.core.enums.error_code import ErrorCode

__all__ = ["ErrorCode", "Environment"]
