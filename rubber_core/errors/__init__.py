# =============================================================================
# rubber_core/errors/__init__.py
# Centralized Error Handling for the Rubber Stock core
# =============================================================================

from .exceptions import (
    RubberStockError,
    TransportError,
    HTTPStatusError,
    ResourceNotFoundError,
    MalformedResponseError,
    DomainValidationError,
    DuplicateNameError,
    IngredientIndexError,
    VersionConflictError,
    PersistenceError,
    ConfigurationError,
)

from .handlers import handle_error

__all__ = [
    # Exceptions
    "RubberStockError",
    "TransportError",
    "HTTPStatusError",
    "ResourceNotFoundError",
    "MalformedResponseError",
    "DomainValidationError",
    "DuplicateNameError",
    "IngredientIndexError",
    "VersionConflictError",
    "PersistenceError",
    "ConfigurationError",
    # Handlers
    "handle_error",
]
