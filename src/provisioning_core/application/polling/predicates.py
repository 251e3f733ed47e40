"""Predicates over freshly fetched provider state."""
from typing import Callable, Optional

from provisioning_core.domain.operation import (
    OperationStatus,
    ProvisionedResource,
    ResourceKind,
    ResourceStatusPort,
)


class OperationDonePredicate:
    """Holds once an operation reports DONE or NO_CONTENT.

    A failed operation never satisfies it; callers give up at the timeout.
    """

    def __init__(self, status_port: ResourceStatusPort):
        self._status_port = status_port

    def __call__(self, operation_id: str) -> bool:
        operation = self._status_port.get_operation(operation_id)
        if operation is None:
            return False
        return operation.status in (OperationStatus.DONE, OperationStatus.NO_CONTENT)

    def __str__(self) -> str:
        return "operationDone"


class ImageCapturedPredicate:
    """Holds once a capture operation is DONE and its image can be fetched."""

    def __init__(self, status_port: ResourceStatusPort, scope: str):
        self._status_port = status_port
        self._scope = scope

    def __call__(self, operation_id: str) -> bool:
        operation = self._status_port.get_operation(operation_id)
        if operation is None or operation.status != OperationStatus.DONE:
            return False
        if not operation.target_ref:
            return False
        image = self._status_port.get_resource(ResourceKind.IMAGE, self._scope, operation.target_ref)
        return image is not None

    def __str__(self) -> str:
        return f"imageCaptured({self._scope})"


class ResourceInStatusPredicate:
    """Holds when the supplied resource exists and its provisioning state matches, ignoring case."""

    def __init__(self, expected_status: str):
        self._expected_status = expected_status.lower()

    def __call__(self, supplier: Callable[[], Optional[ProvisionedResource]]) -> bool:
        resource = supplier()
        if resource is None or resource.provisioning_state is None:
            return False
        return resource.provisioning_state.lower() == self._expected_status

    def __str__(self) -> str:
        return f"resourceInStatus({self._expected_status})"
