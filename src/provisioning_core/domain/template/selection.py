"""
Selection modes of the template builder.

Image and hardware selection are each either by explicit id or by
attributes, never both. Switching mode replaces the whole selection so
constraints of the other mode cannot linger.
"""
from dataclasses import dataclass, replace
from typing import Callable, Optional, Union

from provisioning_core.domain.compute import Image, OsFamily


@dataclass(frozen=True)
class ImagesByAttributes:
    image_name: Optional[str] = None
    image_description: Optional[str] = None
    image_version: Optional[str] = None
    os_family: Optional[OsFamily] = None
    os_name: Optional[str] = None
    os_description: Optional[str] = None
    os_version: Optional[str] = None
    os_arch: Optional[str] = None
    os_64bit: Optional[bool] = None
    image_predicate: Optional[Callable[[Image], bool]] = None

    def with_changes(self, **changes) -> "ImagesByAttributes":
        return replace(self, **changes)

    @property
    def is_empty(self) -> bool:
        return self == ImagesByAttributes()


@dataclass(frozen=True)
class ImageById:
    image_id: str


@dataclass(frozen=True)
class HardwareByAttributes:
    hypervisor: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return self.hypervisor is None


@dataclass(frozen=True)
class HardwareById:
    hardware_id: str


ImageSelection = Union[ImagesByAttributes, ImageById]
HardwareSelection = Union[HardwareByAttributes, HardwareById]
