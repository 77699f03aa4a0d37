"""
Standardized errors for the rest-do endpoint client.

Every failure produced by the dispatch core is an ApiError subclass carrying
a numeric code, so callers can catch the whole family with one except clause
or branch on the code.

Error Code Ranges:
- 1xxx: Configuration errors
- 2xxx: Validation errors
- 3xxx: Method errors
- 4xxx: Environment errors
- 5xxx: Transport errors
"""

from __future__ import annotations

from enum import IntEnum
from typing import Any


# ============================================================================
# Standard Error Codes
# ============================================================================


class ErrorCode(IntEnum):
    """Error codes used by rest-do."""

    # Endpoint is unknown or its configuration cannot serve the call
    CONFIGURATION_ERROR = 1001

    # Parameter object is missing a required field
    VALIDATION_ERROR = 2001

    # Endpoint does not accept the HTTP method the call shape needs
    METHOD_NOT_SUPPORTED = 3001

    # Session/cookie operation used with a transport that cannot hold a session
    ENVIRONMENT_MISMATCH = 4001

    # Network failure or non-2xx response reported by the transport
    TRANSPORT_ERROR = 5001


ERROR_CODE_NAMES: dict[ErrorCode, str] = {
    ErrorCode.CONFIGURATION_ERROR: "CONFIGURATION_ERROR",
    ErrorCode.VALIDATION_ERROR: "VALIDATION_ERROR",
    ErrorCode.METHOD_NOT_SUPPORTED: "METHOD_NOT_SUPPORTED",
    ErrorCode.ENVIRONMENT_MISMATCH: "ENVIRONMENT_MISMATCH",
    ErrorCode.TRANSPORT_ERROR: "TRANSPORT_ERROR",
}


# ============================================================================
# Base Error Class
# ============================================================================


class ApiError(Exception):
    """
    Base error class for all rest-do errors.

    Error Hierarchy:
    - ApiError (base)
      - ConfigurationError: Unknown endpoint or unusable endpoint config
      - ValidationError: Missing field in a parameter object
      - MethodNotSupportedError: Endpoint excludes the needed HTTP method
      - EnvironmentMismatchError: Session feature unavailable
      - TransportError: Network failure or non-2xx response

    Example:
        ```python
        try:
            await client.api.user.login(email="a@b.com")
        except ApiError as error:
            print(f"API error [{error.code}]: {error.message}")
        ```

    Attributes:
        message: Human-readable error message.
        code: Numeric error code (e.g., 1001, 2001).
        code_name: String name of the error code (e.g., 'CONFIGURATION_ERROR').
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode,
        code_name: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.code_name = code_name or ERROR_CODE_NAMES.get(code, "UNKNOWN_ERROR")

    def __str__(self) -> str:
        return f"{self.code_name}({self.code}): {self.message}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, code={self.code})"

    def to_dict(self) -> dict[str, Any]:
        """Return a dictionary representation of the error."""
        return {
            "name": self.__class__.__name__,
            "message": self.message,
            "code": int(self.code),
            "code_name": self.code_name,
        }


# ============================================================================
# Specific Error Types
# ============================================================================


class ConfigurationError(ApiError):
    """
    Error raised when an endpoint configuration is missing, invalid, or
    conflicts with the existing namespace tree.

    Error Code: 1001 (CONFIGURATION_ERROR)

    Common causes:
    - Calling an endpoint that was never registered
    - Positional call against an endpoint without argument names
    - Registering ``a/b/c`` after ``a/b`` was registered as an endpoint

    Attributes:
        path: Canonical endpoint path involved, when known.
    """

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message, ErrorCode.CONFIGURATION_ERROR, "CONFIGURATION_ERROR")
        self.path = path


class ValidationError(ApiError):
    """
    Error raised when a parameter object is missing a required field.

    Error Code: 2001 (VALIDATION_ERROR)

    Attributes:
        path: Canonical endpoint path.
        field: Name of the offending field.
    """

    def __init__(
        self, message: str, path: str | None = None, field: str | None = None
    ) -> None:
        super().__init__(message, ErrorCode.VALIDATION_ERROR, "VALIDATION_ERROR")
        self.path = path
        self.field = field


class MethodNotSupportedError(ApiError):
    """
    Error raised when an endpoint's declared methods exclude the method the
    call shape would use (e.g. a zero-argument GET against a POST-only endpoint).

    Error Code: 3001 (METHOD_NOT_SUPPORTED)

    Attributes:
        path: Canonical endpoint path.
        method: The HTTP method that was refused.
    """

    def __init__(
        self, message: str, path: str | None = None, method: str | None = None
    ) -> None:
        super().__init__(message, ErrorCode.METHOD_NOT_SUPPORTED, "METHOD_NOT_SUPPORTED")
        self.path = path
        self.method = method


class EnvironmentMismatchError(ApiError):
    """
    Error raised when a session or cookie operation is used with a transport
    that does not keep session state.

    Error Code: 4001 (ENVIRONMENT_MISMATCH)
    """

    def __init__(self, message: str) -> None:
        super().__init__(message, ErrorCode.ENVIRONMENT_MISMATCH, "ENVIRONMENT_MISMATCH")


class TransportError(ApiError):
    """
    Error raised by the transport for network failures and non-2xx responses.

    Error Code: 5001 (TRANSPORT_ERROR)

    Attributes:
        status: HTTP status code, or None for network failures.
        response: The response object, when one was received.
    """

    def __init__(
        self,
        message: str,
        status: int | None = None,
        response: Any = None,
    ) -> None:
        super().__init__(message, ErrorCode.TRANSPORT_ERROR, "TRANSPORT_ERROR")
        self.status = status
        self.response = response


# ============================================================================
# Error Utilities
# ============================================================================


def is_error_code(error: BaseException, code: ErrorCode) -> bool:
    """
    Check if an error is an ApiError with a specific error code.

    Example:
        ```python
        try:
            await client.api.search()
        except Exception as error:
            if is_error_code(error, ErrorCode.METHOD_NOT_SUPPORTED):
                ...
        ```
    """
    return isinstance(error, ApiError) and error.code == code
