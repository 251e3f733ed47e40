"""Resilience primitives."""
from provisioning_core.infrastructure.resilience.retryable_predicate import (
    DEFAULT_MAX_PERIOD,
    DEFAULT_PERIOD,
    RetryablePredicate,
    retry,
)

__all__ = ["DEFAULT_MAX_PERIOD", "DEFAULT_PERIOD", "RetryablePredicate", "retry"]
