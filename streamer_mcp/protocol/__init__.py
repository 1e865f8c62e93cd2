"""
Protocol Package - Error Handling

This package contains:
- Error codes and the MCPError hierarchy
- Argument validation helpers
"""

from .errors import (
    MCPError,
    InvalidParams,
    InternalError,
    AuthError,
    NetworkError,
    StorageError,
    ErrorHandler,
    ErrorCode
)

__all__ = [
    'MCPError',
    'InvalidParams',
    'InternalError',
    'AuthError',
    'NetworkError',
    'StorageError',
    'ErrorHandler',
    'ErrorCode'
]
