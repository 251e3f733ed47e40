"""Core domain primitives shared by every bounded context."""

from .exceptions import (
    MAX_MESSAGE_LENGTH,
    ConfigurationError,
    DomainException,
    NotFoundError,
    OperationTimeoutError,
    TransientProviderError,
    ValidationError,
    bounded_message,
)
from .ordering import Ordering, multi_max

__all__ = [
    "MAX_MESSAGE_LENGTH",
    "bounded_message",
    "DomainException",
    "ValidationError",
    "ConfigurationError",
    "NotFoundError",
    "OperationTimeoutError",
    "TransientProviderError",
    "Ordering",
    "multi_max",
]
