# =============================================================================
# rubber_core/errors/exceptions.py
# Custom Exception Hierarchy for the Rubber Stock core
# =============================================================================

from typing import Optional, Dict, Any


class RubberStockError(Exception):
    """
    Base exception for all Rubber Stock errors.

    Attributes:
        message: Human-readable error description
        code: Machine-readable error code (e.g., "NOT_FOUND")
        details: Additional context as a dictionary
        recoverable: Whether the error can be recovered from
    """

    default_code = "RUBBER_000"

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        recoverable: bool = True,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.details = details or {}
        self.recoverable = recoverable

    def __str__(self) -> str:
        base = f"[{self.code}] {self.message}"
        if self.details:
            base += f" | Details: {self.details}"
        return base

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization"""
        return {
            "error_type": self.__class__.__name__,
            "code": self.code,
            "message": self.message,
            "details": self.details,
            "recoverable": self.recoverable,
        }


# =============================================================================
# REMOTE API EXCEPTIONS
# =============================================================================

class TransportError(RubberStockError):
    """Raised when the remote API cannot be reached (DNS, refused, timeout)"""

    default_code = "TRANSPORT"

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        method: Optional[str] = None,
        **kwargs,
    ):
        details = kwargs.pop("details", {})
        if url:
            details["url"] = url
        if method:
            details["method"] = method

        super().__init__(message=message, details=details, **kwargs)


class HTTPStatusError(RubberStockError):
    """Raised when the remote API answers with a non-2xx status"""

    default_code = "HTTP_STATUS"

    def __init__(
        self,
        message: str,
        status_code: int,
        url: Optional[str] = None,
        **kwargs,
    ):
        details = kwargs.pop("details", {})
        details["status_code"] = status_code
        if url:
            details["url"] = url

        super().__init__(message=message, details=details, **kwargs)
        self.status_code = status_code


class ResourceNotFoundError(HTTPStatusError):
    """Raised when a keyed resource does not exist (HTTP 404)"""

    default_code = "NOT_FOUND"

    def __init__(self, message: str, url: Optional[str] = None, **kwargs):
        super().__init__(message=message, status_code=404, url=url, **kwargs)


class MalformedResponseError(RubberStockError):
    """Raised when a response body is not the JSON shape we expect"""

    default_code = "MALFORMED_RESPONSE"

    def __init__(self, message: str, payload: Any = None, **kwargs):
        details = kwargs.pop("details", {})
        if payload is not None:
            details["payload"] = repr(payload)[:200]

        super().__init__(message=message, details=details, **kwargs)


# =============================================================================
# DOMAIN EXCEPTIONS
# =============================================================================

class DomainValidationError(RubberStockError):
    """Raised when user input is rejected before any request is made"""

    default_code = "VALIDATION"

    def __init__(self, message: str, field: Optional[str] = None, **kwargs):
        details = kwargs.pop("details", {})
        if field:
            details["field"] = field

        super().__init__(message=message, details=details, **kwargs)


class DuplicateNameError(DomainValidationError):
    """Raised when a color or formula with the same name already exists"""

    default_code = "DUPLICATE"

    def __init__(self, message: str, name: Optional[str] = None, **kwargs):
        details = kwargs.pop("details", {})
        if name:
            details["name"] = name

        super().__init__(message=message, field="name", details=details, **kwargs)


class IngredientIndexError(DomainValidationError):
    """Raised when an ingredient index falls outside [0, length)"""

    default_code = "INVALID_INDEX"

    def __init__(self, index: int, length: Optional[int] = None, **kwargs):
        details = kwargs.pop("details", {})
        details["index"] = index
        if length is not None:
            details["length"] = length
            message = f"Ingredient index {index} out of range for {length} ingredients"
        else:
            message = f"Ingredient index {index} is negative"

        super().__init__(message=message, field="index", details=details, **kwargs)


class VersionConflictError(RubberStockError):
    """Raised when a formula changed since the caller last read it"""

    default_code = "CONFLICT"

    def __init__(
        self,
        message: str,
        expected: Optional[str] = None,
        actual: Optional[str] = None,
        **kwargs,
    ):
        details = kwargs.pop("details", {})
        details["expected"] = expected
        details["actual"] = actual

        super().__init__(message=message, details=details, **kwargs)


# =============================================================================
# LOCAL STATE EXCEPTIONS
# =============================================================================

class PersistenceError(RubberStockError):
    """Raised when the local settings store cannot be read or written"""

    default_code = "PERSISTENCE"

    def __init__(self, message: str, key: Optional[str] = None, **kwargs):
        details = kwargs.pop("details", {})
        if key:
            details["key"] = key

        super().__init__(message=message, details=details, **kwargs)


class ConfigurationError(RubberStockError):
    """Raised when configuration is invalid or missing"""

    default_code = "CONFIG"

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        expected_type: Optional[str] = None,
        **kwargs,
    ):
        details = kwargs.pop("details", {})
        if config_key:
            details["config_key"] = config_key
        if expected_type:
            details["expected_type"] = expected_type

        super().__init__(
            message=message,
            details=details,
            recoverable=False,
            **kwargs,
        )
