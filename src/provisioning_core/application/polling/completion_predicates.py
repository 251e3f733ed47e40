"""Pre-configured completion checks for the common provisioning waits."""
from typing import Any

from provisioning_core.application.polling.factories import (
    InstanceInStatePredicateFactory,
    ResourceAvailablePredicateFactory,
    ResourcePresencePredicateFactory,
)
from provisioning_core.application.polling.predicates import (
    ImageCapturedPredicate,
    OperationDonePredicate,
)
from provisioning_core.config.schemas import PollingConfig
from provisioning_core.domain.operation import PowerState, ResourceKind, ResourceStatusPort
from provisioning_core.infrastructure.resilience import RetryablePredicate, retry


class CompletionPredicates:
    """
    Completion checks sharing one status port and one poll configuration.

    Attributes:
        node_running: Factory waiting for instances to run
        node_suspended: Factory waiting for instances to stop
        node_terminated: Factory waiting for instances to disappear
        image_available: Factory waiting for images to be usable
        operation_done: Retrying predicate over operation ids
    """

    def __init__(self, status_port: ResourceStatusPort, polling_config: PollingConfig,
                 **retry_options: Any):
        self._status_port = status_port
        self._config = polling_config
        period = polling_config.period
        timeouts = polling_config.timeouts
        self._poll = dict(period=period.initial_period, max_period=period.max_period, **retry_options)

        self.node_running = InstanceInStatePredicateFactory(
            status_port, PowerState.RUNNING, timeouts.node_running, **self._poll)
        self.node_suspended = InstanceInStatePredicateFactory(
            status_port, PowerState.STOPPED, timeouts.node_suspended, **self._poll)
        self.node_terminated = InstanceInStatePredicateFactory(
            status_port, PowerState.TERMINATED, timeouts.node_terminated, **self._poll)
        self.image_available = ResourceAvailablePredicateFactory(
            status_port, ResourceKind.IMAGE, timeouts.image_available, **self._poll)
        self.operation_done: RetryablePredicate[str] = retry(
            OperationDonePredicate(status_port), timeouts.operation_timeout, **self._poll)

    @classmethod
    def from_config(cls, status_port: ResourceStatusPort, polling_config: PollingConfig,
                    **retry_options: Any) -> "CompletionPredicates":
        return cls(status_port, polling_config, **retry_options)

    def image_captured(self, scope: str) -> RetryablePredicate[str]:
        """Retrying predicate over capture operation ids in ``scope``."""
        return retry(ImageCapturedPredicate(self._status_port, scope),
                     self._config.timeouts.image_available, **self._poll)

    def resource_available(self, kind: ResourceKind) -> ResourceAvailablePredicateFactory:
        return ResourceAvailablePredicateFactory(
            self._status_port, kind, self._config.timeouts.operation_timeout, **self._poll)

    def resource_deleted(self, kind: ResourceKind) -> ResourcePresencePredicateFactory:
        """Factory waiting for a resource of ``kind`` to vanish from the live listing."""
        return ResourcePresencePredicateFactory(
            self._status_port, kind, False, self._config.timeouts.operation_timeout, **self._poll)

    def resource_soft_deleted(self, kind: ResourceKind, should_be_present: bool = True
                              ) -> ResourcePresencePredicateFactory:
        """Factory watching the soft-deleted listing, for deletion or recovery of vault items."""
        return ResourcePresencePredicateFactory(
            self._status_port, kind, should_be_present, self._config.timeouts.operation_timeout,
            in_deleted=True, **self._poll)
