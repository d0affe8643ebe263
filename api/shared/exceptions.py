"""Shared exceptions for the marketplace API."""
from typing import Any, Dict, Optional


class MarketplaceException(Exception):
    """Base exception for the marketplace API."""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        error_code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(MarketplaceException):
    """Raised when a required field is missing or malformed."""

    status_code = 400

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        error_code: str = "VALIDATION_ERROR",
    ):
        super().__init__(message, error_code, details)


class NotFoundError(MarketplaceException):
    """Raised when a referenced user or message does not exist."""

    status_code = 404

    def __init__(self, resource: str, identifier: Any):
        message = f"{resource} with identifier '{identifier}' not found"
        super().__init__(
            message, "NOT_FOUND", {"resource": resource, "identifier": str(identifier)}
        )


class StoreError(MarketplaceException):
    """Raised when the persistence layer fails (connectivity, constraints)."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "STORE_ERROR", details)
