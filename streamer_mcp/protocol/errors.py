"""
MCP Error Handling

JSON-RPC style error codes plus the domain failures raised by the
registry store, the credential cache and the status resolver.
"""

from typing import Optional, Any, Dict
from enum import IntEnum


class ErrorCode(IntEnum):
    """Standard JSON-RPC 2.0 and server-defined error codes"""

    # JSON-RPC 2.0 Standard Errors
    INVALID_PARAMS = -32602        # Invalid method parameter(s)
    INTERNAL_ERROR = -32603        # Internal JSON-RPC error

    # Implementation-defined errors (-32000 to -32099)
    AUTH_FAILED = -32001           # Twitch token exchange failed
    UPSTREAM_UNAVAILABLE = -32003  # Twitch API request failed or timed out
    STORAGE_FAILED = -32004        # Registry file could not be written


class MCPError(Exception):
    """Base class for all server errors"""

    def __init__(
        self,
        code: int,
        message: str,
        data: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize MCP error

        Args:
            code: Error code from ErrorCode enum
            message: Human-readable error message
            data: Optional additional error data
        """
        self.code = code
        self.message = message
        self.data = data or {}
        super().__init__(message)


class InvalidParams(MCPError):
    """Invalid tool argument(s)"""

    def __init__(self, message: str = "Invalid parameters", data: Optional[Dict] = None):
        super().__init__(
            ErrorCode.INVALID_PARAMS,
            f"Invalid params: {message}",
            data
        )


class InternalError(MCPError):
    """Unexpected failure inside a tool"""

    def __init__(self, message: str = "Internal error", data: Optional[Dict] = None):
        super().__init__(
            ErrorCode.INTERNAL_ERROR,
            f"Internal error: {message}",
            data
        )


class AuthError(MCPError):
    """Twitch app access token could not be obtained"""

    def __init__(self, message: str, status_code: Optional[int] = None,
                 data: Optional[Dict] = None):
        self.status_code = status_code
        payload = dict(data or {})
        if status_code is not None:
            payload.setdefault("status_code", status_code)
        super().__init__(
            ErrorCode.AUTH_FAILED,
            f"Twitch authentication failed: {message}",
            payload
        )


class NetworkError(MCPError):
    """Request to the Twitch API failed, timed out or returned garbage"""

    def __init__(self, message: str, status_code: Optional[int] = None,
                 data: Optional[Dict] = None):
        self.status_code = status_code
        payload = dict(data or {})
        if status_code is not None:
            payload.setdefault("status_code", status_code)
        super().__init__(
            ErrorCode.UPSTREAM_UNAVAILABLE,
            f"Twitch request failed: {message}",
            payload
        )


class StorageError(MCPError):
    """Registry file could not be written"""

    def __init__(self, path: str, reason: str, data: Optional[Dict] = None):
        self.path = path
        super().__init__(
            ErrorCode.STORAGE_FAILED,
            f"Could not save streamers to {path}: {reason}",
            data or {"path": path}
        )


class ErrorHandler:
    """Utility class for validating and normalizing errors"""

    @staticmethod
    def wrap_exception(e: Exception) -> MCPError:
        """
        Convert any exception to an MCPError

        Args:
            e: Exception to convert

        Returns:
            The exception itself if already an MCPError, else InternalError
        """
        if isinstance(e, MCPError):
            return e
        return InternalError(str(e), {"exception_type": type(e).__name__})

    @staticmethod
    def validate_name(value: Any, field: str = "name") -> str:
        """
        Validate a streamer name argument

        Args:
            value: Raw argument value
            field: Argument name used in the error message

        Returns:
            The name with surrounding whitespace removed

        Raises:
            InvalidParams: If the value is missing, not a string or blank
        """
        if not isinstance(value, str):
            raise InvalidParams(
                f"'{field}' must be a string",
                {"field": field, "received": type(value).__name__}
            )
        name = value.strip()
        if not name:
            raise InvalidParams(f"'{field}' must not be empty", {"field": field})
        return name
