# src/provisioning_core/domain/compute/value_objects.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from provisioning_core.domain.core.exceptions import ValidationError


class LocationScope(str, Enum):
    """Scope of a location, from widest to narrowest."""
    PROVIDER = "PROVIDER"
    REGION = "REGION"
    ZONE = "ZONE"

    @property
    def depth(self) -> int:
        return _SCOPE_DEPTH[self]

    def is_wider_than(self, other: "LocationScope") -> bool:
        return self.depth < other.depth


_SCOPE_DEPTH = {
    LocationScope.PROVIDER: 0,
    LocationScope.REGION: 1,
    LocationScope.ZONE: 2,
}


class OsFamily(str, Enum):
    """Operating system families recognised by the resolver."""
    UNRECOGNIZED = "unrecognized"
    AMZN_LINUX = "amzn-linux"
    CENTOS = "centos"
    COREOS = "coreos"
    DEBIAN = "debian"
    FEDORA = "fedora"
    FREEBSD = "freebsd"
    RHEL = "rhel"
    SUSE = "suse"
    UBUNTU = "ubuntu"
    WINDOWS = "windows"

    @classmethod
    def from_value(cls, value: str) -> "OsFamily":
        """Parse a family leniently; unknown names map to UNRECOGNIZED."""
        normalized = value.strip().lower().replace("_", "-")
        for family in cls:
            if family.value == normalized:
                return family
        return cls.UNRECOGNIZED

    def __str__(self) -> str:
        return self.value


class ImageStatus(str, Enum):
    """Lifecycle status of an image."""
    AVAILABLE = "AVAILABLE"
    PENDING = "PENDING"
    DELETED = "DELETED"
    ERROR = "ERROR"
    UNRECOGNIZED = "UNRECOGNIZED"


@dataclass(frozen=True)
class Processor:
    """A processor bundle: core count and per-core speed (GHz)."""
    cores: float
    speed: float = 1.0

    def __post_init__(self):
        if self.cores <= 0:
            raise ValidationError("Processor cores must be positive")
        if self.speed < 0:
            raise ValidationError("Processor speed must be non-negative")


@dataclass(frozen=True)
class Volume:
    """A storage volume attached to a hardware profile (size in GB)."""
    size: float
    is_boot_device: bool = False
    durable: bool = True

    def __post_init__(self):
        if self.size < 0:
            raise ValidationError("Volume size must be non-negative")
