"""Hardware profile value object."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional, Tuple

from provisioning_core.domain.compute.image import Image
from provisioning_core.domain.compute.location import Location
from provisioning_core.domain.compute.predicates import ImagePredicates
from provisioning_core.domain.compute.value_objects import Processor, Volume
from provisioning_core.domain.core.exceptions import ValidationError


@dataclass(frozen=True)
class Hardware:
    """
    A named bundle of processors, memory and volumes.

    ``supports_image`` is opaque provider logic deciding which images the
    profile can boot. Its ``str()`` is used when no profile supports any
    candidate image, so prefer the predicates from ``ImagePredicates``.

    Attributes:
        id: Provider-unique hardware identifier
        ram: Memory in MB
        processors: Processor bundles; cores and compute are summed over them
        volumes: Attached volumes; disk is summed over them
        hypervisor: Virtualization technology, if reported
        location: Where the profile is offered, None for everywhere
        deprecated: Still usable but loses ties to non-deprecated profiles
    """
    id: str
    name: Optional[str] = None
    ram: int = 0
    processors: Tuple[Processor, ...] = ()
    volumes: Tuple[Volume, ...] = ()
    hypervisor: Optional[str] = None
    location: Optional[Location] = None
    deprecated: bool = False
    supports_image: Callable[[Image], bool] = field(
        default_factory=ImagePredicates.any_image, compare=False
    )

    def __post_init__(self):
        if not self.id:
            raise ValidationError("Hardware ID is required")
        if self.ram < 0:
            raise ValidationError("Hardware ram must be non-negative")
        object.__setattr__(self, "processors", tuple(self.processors))
        object.__setattr__(self, "volumes", tuple(self.volumes))

    @property
    def total_cores(self) -> float:
        return sum(processor.cores for processor in self.processors)

    @property
    def total_compute(self) -> float:
        """Sum of cores times speed over all processors."""
        return sum(processor.cores * processor.speed for processor in self.processors)

    @property
    def total_disk(self) -> float:
        return sum(volume.size for volume in self.volumes)

    def __str__(self) -> str:
        location_id = self.location.id if self.location else None
        return (f"[id={self.id}, ram={self.ram}, cores={self.total_cores}, "
                f"disk={self.total_disk}, hypervisor={self.hypervisor}, "
                f"location={location_id}, deprecated={self.deprecated}]")
