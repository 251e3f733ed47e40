"""Default orderings used to rank images and hardware profiles."""
from provisioning_core.domain.compute import Hardware, Image
from provisioning_core.domain.core.ordering import Ordering

_NATURAL_NULLS_LAST = Ordering.natural().nulls_last()


def _arch_tier(image: Image) -> int:
    # unset architecture ranks above any explicit one, then 64-bit above the rest
    operating_system = image.operating_system
    if operating_system.arch is None:
        return 2
    return 1 if operating_system.is_64bit else 0


def _image_name(image: Image):
    return image.name


def _image_version(image: Image):
    return image.version


def _image_description(image: Image):
    return image.description


def _os_name(image: Image):
    return image.operating_system.name


def _os_version(image: Image):
    return image.operating_system.version


def _os_description(image: Image):
    return image.operating_system.description


def _os_arch(image: Image):
    return image.operating_system.arch


DEFAULT_IMAGE_ORDERING: Ordering[Image] = (
    Ordering.natural().on_result_of(_arch_tier)
    .compound(_NATURAL_NULLS_LAST.on_result_of(_image_name))
    .compound(_NATURAL_NULLS_LAST.on_result_of(_image_version))
    .compound(_NATURAL_NULLS_LAST.on_result_of(_image_description))
    .compound(_NATURAL_NULLS_LAST.on_result_of(_os_name))
    .compound(_NATURAL_NULLS_LAST.on_result_of(_os_version))
    .compound(_NATURAL_NULLS_LAST.on_result_of(_os_description))
    .compound(_NATURAL_NULLS_LAST.on_result_of(_os_arch))
)


def _ram(hardware: Hardware):
    return hardware.ram


def _compute(hardware: Hardware):
    return hardware.total_compute


def _disk(hardware: Hardware):
    return hardware.total_disk


def _not_deprecated(hardware: Hardware):
    return not hardware.deprecated


BY_RAM: Ordering[Hardware] = Ordering.natural().on_result_of(_ram)
BY_CORES: Ordering[Hardware] = Ordering.natural().on_result_of(_compute)
BY_DISK: Ordering[Hardware] = Ordering.natural().on_result_of(_disk)
DEFAULT_SIZE_ORDERING: Ordering[Hardware] = BY_RAM.compound(BY_CORES).compound(BY_DISK)
NON_DEPRECATED_FIRST: Ordering[Hardware] = Ordering.natural().on_result_of(_not_deprecated)
