"""Provider operations and the port used to poll their state."""
from provisioning_core.domain.operation.operation import (
    Operation,
    OperationStatus,
    PowerState,
    ProvisionedResource,
    ResourceKind,
)
from provisioning_core.domain.operation.ports import ResourceStatusPort

__all__ = [
    "Operation",
    "OperationStatus",
    "PowerState",
    "ProvisionedResource",
    "ResourceKind",
    "ResourceStatusPort",
]
