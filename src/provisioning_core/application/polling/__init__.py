"""Completion tracking of asynchronous provider operations."""
from provisioning_core.application.polling.completion_predicates import CompletionPredicates
from provisioning_core.application.polling.factories import (
    InstanceInStatePredicateFactory,
    ResourceAvailablePredicateFactory,
    ResourcePresencePredicateFactory,
)
from provisioning_core.application.polling.predicates import (
    ImageCapturedPredicate,
    OperationDonePredicate,
    ResourceInStatusPredicate,
)

__all__ = [
    "CompletionPredicates",
    "ImageCapturedPredicate",
    "InstanceInStatePredicateFactory",
    "OperationDonePredicate",
    "ResourceAvailablePredicateFactory",
    "ResourceInStatusPredicate",
    "ResourcePresencePredicateFactory",
]
