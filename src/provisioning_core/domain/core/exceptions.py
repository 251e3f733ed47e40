# src/provisioning_core/domain/core/exceptions.py
from typing import Any, List, Optional

MAX_MESSAGE_LENGTH = 1024


def bounded_message(message: str, limit: int = MAX_MESSAGE_LENGTH) -> str:
    """
    Cap a human-readable message so inventories never end up in exceptions.

    Args:
        message: Message to cap
        limit: Maximum length of the returned message

    Returns:
        The message, truncated with a trailing ellipsis when longer than limit
    """
    if len(message) <= limit:
        return message
    return message[: limit - 3] + "..."


class DomainException(Exception):
    """Base exception for all domain-specific errors."""

    def __init__(self, message: str):
        super().__init__(bounded_message(message))


class ValidationError(DomainException):
    """Raised when domain validation fails."""
    def __init__(self, message: str, details: Any = None):
        super().__init__(message)
        self.details = details


class ConfigurationError(DomainException):
    """Raised when configuration or inventory state makes a query impossible.

    Fatal, never retried.
    """
    def __init__(self, message: str, missing_fields: Optional[List[str]] = None):
        super().__init__(message)
        self.missing_fields = missing_fields or []


class NotFoundError(DomainException):
    """Raised when a constraint cannot be satisfied by any known resource."""
    def __init__(self, message: str, resource_type: Optional[str] = None,
                 resource_id: Optional[str] = None):
        super().__init__(message)
        self.resource_type = resource_type
        self.resource_id = resource_id


class OperationTimeoutError(DomainException, TimeoutError):
    """Raised when a polled condition did not hold before the timeout elapsed.

    The remote operation may still complete later; only the caller gave up.
    """
    def __init__(self, message: str, timeout: Optional[float] = None):
        super().__init__(message)
        self.timeout = timeout


class TransientProviderError(DomainException):
    """Raised when a single fetch of remote state fails but may succeed on retry."""
    def __init__(self, message: str, details: Any = None):
        super().__init__(message)
        self.details = details
