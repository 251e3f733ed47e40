"""Operating system and image value objects."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from provisioning_core.domain.compute.location import Location
from provisioning_core.domain.compute.value_objects import ImageStatus, OsFamily
from provisioning_core.domain.core.exceptions import ValidationError


@dataclass(frozen=True)
class OperatingSystem:
    """
    Operating system installed on an image.

    ``arch`` may be None, which is distinct from any explicit architecture
    and ranks above them in the default image ordering.
    """
    family: OsFamily = OsFamily.UNRECOGNIZED
    name: Optional[str] = None
    version: Optional[str] = None
    arch: Optional[str] = None
    is_64bit: bool = False
    description: Optional[str] = None


@dataclass(frozen=True)
class Image:
    """Immutable machine image as reported by a provider inventory."""
    id: str
    provider_id: Optional[str] = None
    name: Optional[str] = None
    version: Optional[str] = None
    description: Optional[str] = None
    status: ImageStatus = ImageStatus.AVAILABLE
    operating_system: OperatingSystem = field(default_factory=OperatingSystem)
    location: Optional[Location] = None

    def __post_init__(self):
        if not self.id:
            raise ValidationError("Image ID is required")
        if self.provider_id is None:
            object.__setattr__(self, "provider_id", self.id)

    def __str__(self) -> str:
        location_id = self.location.id if self.location else None
        return (f"[id={self.id}, name={self.name}, os={self.operating_system.family.value}, "
                f"arch={self.operating_system.arch}, location={location_id}]")
