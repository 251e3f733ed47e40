"""Asynchronous provider operations and the resources they act on."""
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict


class OperationStatus(str, Enum):
    """Status of a provider-side asynchronous task."""
    PENDING = "PENDING"
    RUNNING = "RUNNING"
    DONE = "DONE"
    ERROR = "ERROR"
    NO_CONTENT = "NO_CONTENT"
    UNRECOGNIZED = "UNRECOGNIZED"

    @classmethod
    def from_value(cls, value: Optional[str]) -> "OperationStatus":
        if not value:
            return cls.UNRECOGNIZED
        try:
            return cls(value.upper())
        except ValueError:
            return cls.UNRECOGNIZED

    @property
    def is_terminal(self) -> bool:
        return self in (OperationStatus.DONE, OperationStatus.ERROR, OperationStatus.NO_CONTENT)


class PowerState(str, Enum):
    """Power state of a provisioned instance."""
    RUNNING = "RUNNING"
    STOPPED = "STOPPED"
    TERMINATED = "TERMINATED"
    PENDING = "PENDING"
    UNRECOGNIZED = "UNRECOGNIZED"


class ResourceKind(str, Enum):
    """Kinds of provider resources whose state can be polled."""
    INSTANCE = "instance"
    IMAGE = "image"
    NETWORK = "network"
    SECURITY_GROUP = "security_group"
    PUBLIC_IP = "public_ip"
    VAULT = "vault"
    VAULT_SECRET = "vault_secret"
    VAULT_KEY = "vault_key"
    VAULT_CERTIFICATE = "vault_certificate"


class Operation(BaseModel):
    """Handle to an eventually-consistent remote task, fetched fresh on each poll."""
    model_config = ConfigDict(frozen=True)

    id: str
    status: OperationStatus = OperationStatus.PENDING
    target_ref: Optional[str] = None
    error_code: Optional[str] = None
    error_message: Optional[str] = None

    @property
    def is_terminal(self) -> bool:
        return self.status.is_terminal

    @property
    def failed(self) -> bool:
        return self.status == OperationStatus.ERROR


class ProvisionedResource(BaseModel):
    """Snapshot of a provisioned resource as reported by the provider."""
    model_config = ConfigDict(frozen=True)

    kind: ResourceKind
    scope: str
    name: str
    provisioning_state: Optional[str] = None
    power_state: PowerState = PowerState.UNRECOGNIZED
