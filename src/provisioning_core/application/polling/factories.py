"""
Factories of retrying predicates bound to a scope.

Each factory closes over the status port and the poll settings; ``create``
binds a scope (a region, resource group, vault...) and returns a retrying
predicate over a resource name.
"""
from typing import Any, Optional

from provisioning_core.application.polling.predicates import ResourceInStatusPredicate
from provisioning_core.domain.operation import PowerState, ResourceKind, ResourceStatusPort
from provisioning_core.infrastructure.resilience import RetryablePredicate, retry

SUCCEEDED = "Succeeded"


class _PollingFactory:

    def __init__(self, status_port: ResourceStatusPort, timeout: float,
                 period: Optional[float] = None, max_period: Optional[float] = None,
                 **retry_options: Any):
        self._status_port = status_port
        self._timeout = timeout
        self._period = period
        self._max_period = max_period
        self._retry_options = retry_options

    def _retry(self, predicate) -> RetryablePredicate[str]:
        return retry(predicate, self._timeout, self._period, self._max_period, **self._retry_options)


class _ScopedPredicate:
    """Callable with a readable name, so timeouts log something useful."""

    def __init__(self, test, description: str):
        self._test = test
        self._description = description

    def __call__(self, name: str) -> bool:
        return self._test(name)

    def __str__(self) -> str:
        return self._description


class InstanceInStatePredicateFactory(_PollingFactory):
    """Waits for an instance to reach a power state.

    A missing instance counts as TERMINATED.
    """

    def __init__(self, status_port: ResourceStatusPort, state: PowerState, timeout: float,
                 period: Optional[float] = None, max_period: Optional[float] = None,
                 **retry_options: Any):
        super().__init__(status_port, timeout, period, max_period, **retry_options)
        self._state = state

    def create(self, scope: str) -> RetryablePredicate[str]:
        def in_state(name: str) -> bool:
            instance = self._status_port.get_instance(scope, name)
            if instance is None:
                return self._state == PowerState.TERMINATED
            return instance.power_state == self._state

        return self._retry(_ScopedPredicate(in_state, f"instanceInState({scope}, {self._state.value})"))


class ResourceAvailablePredicateFactory(_PollingFactory):
    """Waits for a resource's provisioning state to reach ``expected_status``."""

    def __init__(self, status_port: ResourceStatusPort, kind: ResourceKind, timeout: float,
                 period: Optional[float] = None, max_period: Optional[float] = None,
                 expected_status: str = SUCCEEDED, **retry_options: Any):
        super().__init__(status_port, timeout, period, max_period, **retry_options)
        self._kind = kind
        self._in_status = ResourceInStatusPredicate(expected_status)

    def create(self, scope: str) -> RetryablePredicate[str]:
        def available(name: str) -> bool:
            return self._in_status(lambda: self._status_port.get_resource(self._kind, scope, name))

        return self._retry(_ScopedPredicate(available, f"{self._kind.value}Available({scope})"))


class ResourcePresencePredicateFactory(_PollingFactory):
    """
    Waits for a resource name to appear in, or vanish from, a listing.

    With ``in_deleted`` the soft-deleted listing is watched instead, which is
    how vault deletion (name appears) and recovery (name disappears) are
    confirmed.
    """

    def __init__(self, status_port: ResourceStatusPort, kind: ResourceKind, should_be_present: bool,
                 timeout: float, period: Optional[float] = None, max_period: Optional[float] = None,
                 in_deleted: bool = False, **retry_options: Any):
        super().__init__(status_port, timeout, period, max_period, **retry_options)
        self._kind = kind
        self._should_be_present = should_be_present
        self._in_deleted = in_deleted

    def create(self, scope: str) -> RetryablePredicate[str]:
        def presence(name: str) -> bool:
            names = self._status_port.list_resource_names(self._kind, scope, deleted=self._in_deleted)
            return (name in names) == self._should_be_present

        listing = "deleted" if self._in_deleted else "live"
        description = (f"{self._kind.value}Present({scope}, {listing}, "
                       f"shouldBePresent={self._should_be_present})")
        return self._retry(_ScopedPredicate(presence, description))
