"""Module errors: structured error taxonomy for SchemaHub."""
#
# PURPOSE:
# Provides error codes, a typed exception and a helper for wrapping foreign
# exceptions so every failure leaving the aggregator carries the same shape.
#
# ERROR CODE FORMAT:
# - SCHEMA_XXX: Document compilation errors
# - REGISTRY_XXX: Service registry errors
# - CONFIG_XXX: Configuration errors
# - SYSTEM_XXX: Everything else
#
# USAGE:
#   from schemahub.errors import SchemaHubError, ErrorCode
#
#   raise SchemaHubError(
#       ErrorCode.SCHEMA_PATH_INVALID,
#       "Action fragment has no $path",
#       details={"action": "products.create"}
#   )
#
import json
from enum import Enum
from typing import Dict, Any, Optional


class ErrorCode(Enum):
    # Schema Errors
    SCHEMA_COMPILE_FAILED = "SCHEMA_001"
    SCHEMA_PATH_INVALID = "SCHEMA_002"
    SCHEMA_FRAGMENT_INVALID = "SCHEMA_003"

    # Registry Errors
    REGISTRY_SERVICE_INVALID = "REGISTRY_001"
    REGISTRY_SERVICE_NOT_FOUND = "REGISTRY_002"

    # Config Errors
    CONFIG_INVALID = "CONFIG_001"
    CONFIG_FILE_NOT_FOUND = "CONFIG_002"
    CONFIG_PARSE_ERROR = "CONFIG_003"

    # System Errors
    SYSTEM_INTERNAL_ERROR = "SYSTEM_001"


class SchemaHubError(Exception):
    """
    Base exception class for SchemaHub with structured error information.

    Attributes:
        code: ErrorCode enum value (e.g., "SCHEMA_001")
        message: Human-readable error message
        details: Optional dictionary with additional context
        http_status: Suggested HTTP status code for API responses
    """

    HTTP_STATUS_MAP: Dict[ErrorCode, int] = {
        ErrorCode.SCHEMA_COMPILE_FAILED: 500,
        ErrorCode.SCHEMA_PATH_INVALID: 500,
        ErrorCode.SCHEMA_FRAGMENT_INVALID: 500,

        ErrorCode.REGISTRY_SERVICE_INVALID: 400,   # Bad Request
        ErrorCode.REGISTRY_SERVICE_NOT_FOUND: 404,

        ErrorCode.CONFIG_INVALID: 500,
        ErrorCode.CONFIG_FILE_NOT_FOUND: 500,
        ErrorCode.CONFIG_PARSE_ERROR: 500,

        ErrorCode.SYSTEM_INTERNAL_ERROR: 500,
    }

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        http_status: Optional[int] = None
    ):
        self.code = code
        self.message = message
        self.details = details or {}
        self.http_status = http_status or self.HTTP_STATUS_MAP.get(code, 500)

        # Code in the message keeps log lines searchable
        super().__init__(f"[{code.value}] {message}")

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert error to dictionary for JSON serialization.

        Returns:
            Dictionary with code, message, details, and http_status
        """
        return {
            "code": self.code.value,
            "message": self.message,
            "details": self.details,
            "http_status": self.http_status
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), default=str)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SchemaHubError":
        """
        Deserialize error from dictionary.

        Args:
            data: Dictionary with code, message, details, http_status

        Returns:
            SchemaHubError instance
        """
        code = ErrorCode(data["code"])
        message = data["message"]
        details = data.get("details", {})
        http_status = data.get("http_status")
        return cls(code, message, details, http_status)


# ============================================================================
# Convenience Functions
# ============================================================================

def handle_error(error: Exception, context: Optional[str] = None) -> SchemaHubError:
    """
    Convert a generic exception to a SchemaHubError.

    Args:
        error: The original exception
        context: Optional context string (e.g., "while merging service fragment")

    Returns:
        SchemaHubError with appropriate code and message
    """
    if isinstance(error, SchemaHubError):
        return error

    error_type = type(error).__name__

    if isinstance(error, FileNotFoundError):
        code = ErrorCode.CONFIG_FILE_NOT_FOUND
    elif isinstance(error, json.JSONDecodeError):
        code = ErrorCode.CONFIG_PARSE_ERROR
    else:
        code = ErrorCode.SYSTEM_INTERNAL_ERROR

    message = str(error)
    if context:
        message = f"{context}: {message}"

    return SchemaHubError(
        code=code,
        message=message,
        details={
            "original_type": error_type,
            "original_message": str(error)
        }
    )


__all__ = ["ErrorCode", "SchemaHubError", "handle_error"]
