"""Compute inventory model: locations, images and hardware profiles."""
from provisioning_core.domain.compute.hardware import Hardware
from provisioning_core.domain.compute.image import Image, OperatingSystem
from provisioning_core.domain.compute.location import Location
from provisioning_core.domain.compute.predicates import (
    ImagePredicate,
    ImagePredicates,
    location_compatible,
    matches,
)
from provisioning_core.domain.compute.value_objects import (
    ImageStatus,
    LocationScope,
    OsFamily,
    Processor,
    Volume,
)

__all__ = [
    "Hardware",
    "Image",
    "ImagePredicate",
    "ImagePredicates",
    "ImageStatus",
    "Location",
    "LocationScope",
    "OperatingSystem",
    "OsFamily",
    "Processor",
    "Volume",
    "location_compatible",
    "matches",
]
