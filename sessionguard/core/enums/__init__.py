"""Core enums package.

Usage:
    from sessionguard.core.enums import ErrorCode, Environment
"""

from sessionguard.core.enums.environment import Environment
from sessionguard.core.enums.error_code import ErrorCode

__all__ = ["ErrorCode", "Environment"]
