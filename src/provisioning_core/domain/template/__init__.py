"""Template resolution: constraints in, one image/hardware/location out."""
from provisioning_core.domain.template.exceptions import (
    HardwareNotFoundError,
    ImageNotFoundError,
    LocationNotFoundError,
    NoMatchingImageError,
    NoSupportedHardwareError,
)
from provisioning_core.domain.template.orderings import (
    BY_CORES,
    BY_DISK,
    BY_RAM,
    DEFAULT_IMAGE_ORDERING,
    DEFAULT_SIZE_ORDERING,
    NON_DEPRECATED_FIRST,
)
from provisioning_core.domain.template.selection import (
    HardwareByAttributes,
    HardwareById,
    ImageById,
    ImagesByAttributes,
)
from provisioning_core.domain.template.template import Template, TemplateOptions
from provisioning_core.domain.template.template_builder import (
    DEFAULT_IMAGE_CHOOSER,
    TemplateBuilder,
    image_chooser_from_ordering,
)

__all__ = [
    "BY_CORES",
    "BY_DISK",
    "BY_RAM",
    "DEFAULT_IMAGE_CHOOSER",
    "DEFAULT_IMAGE_ORDERING",
    "DEFAULT_SIZE_ORDERING",
    "NON_DEPRECATED_FIRST",
    "HardwareByAttributes",
    "HardwareById",
    "HardwareNotFoundError",
    "ImageById",
    "ImageNotFoundError",
    "ImagesByAttributes",
    "LocationNotFoundError",
    "NoMatchingImageError",
    "NoSupportedHardwareError",
    "Template",
    "TemplateBuilder",
    "TemplateOptions",
    "image_chooser_from_ordering",
]
