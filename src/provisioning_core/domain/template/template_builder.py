# src/provisioning_core/domain/template/template_builder.py
"""Template builder - resolves constraints into one image, hardware and location."""
import logging
from typing import Callable, Dict, Iterable, List, Optional

from provisioning_core.domain.base.ports import LoggingPort
from provisioning_core.domain.compute import (
    Hardware,
    Image,
    Location,
    OsFamily,
    location_compatible,
    matches,
)
from provisioning_core.domain.core.exceptions import ConfigurationError
from provisioning_core.domain.core.ordering import Ordering, multi_max
from provisioning_core.domain.template.exceptions import (
    HardwareNotFoundError,
    LocationNotFoundError,
    NoMatchingImageError,
    NoSupportedHardwareError,
)
from provisioning_core.domain.template.orderings import (
    BY_CORES,
    DEFAULT_IMAGE_ORDERING,
    DEFAULT_SIZE_ORDERING,
    NON_DEPRECATED_FIRST,
)
from provisioning_core.domain.template.ports import ImageCachePort
from provisioning_core.domain.template.selection import (
    HardwareByAttributes,
    HardwareById,
    HardwareSelection,
    ImageById,
    ImagesByAttributes,
    ImageSelection,
)
from provisioning_core.domain.template.template import Template, TemplateOptions

ImageChooser = Callable[[List[Image]], Image]

SPEC_KEYS = ("imageId", "hardwareId", "locationId", "loginUser", "authenticateSudo")
PEM_PREFIX = "-----BEGIN"


def image_chooser_from_ordering(ordering: Callable[[Image, Image], int]) -> ImageChooser:
    """Chooser picking the first image ranked highest by ``ordering``."""

    def choose(images: List[Image]) -> Image:
        return multi_max(ordering, images)[0]

    return choose


DEFAULT_IMAGE_CHOOSER = image_chooser_from_ordering(DEFAULT_IMAGE_ORDERING)
SMALLEST_FIRST = DEFAULT_SIZE_ORDERING.reverse()


class TemplateBuilder:
    """
    Fluent accumulator of template constraints.

    Image selection is either by id or by attributes, and so is hardware
    selection; each setter switches the mode it belongs to and drops the
    constraints of the other mode. ``build()`` resolves the constraints
    against the current inventories and returns an immutable Template.

    A builder is not thread-safe; use one per resolution.
    """

    def __init__(self,
                 locations: Callable[[], Iterable[Location]],
                 image_cache: ImageCachePort,
                 hardware: Callable[[], Iterable[Hardware]],
                 default_location: Callable[[], Location],
                 options_provider: Callable[[], TemplateOptions],
                 default_template_provider: Optional[Callable[[], "TemplateBuilder"]] = None,
                 logger: Optional[LoggingPort] = None):
        """
        Initialize the builder.

        Args:
            locations: Supplier of the known locations
            image_cache: Memoized image inventory
            hardware: Supplier of the hardware profiles
            default_location: Supplier of the location used when nothing pins one
            options_provider: Supplier of fresh default options
            default_template_provider: Supplier of a pre-configured builder used
                when no constraint other than options was set
            logger: Optional logger, defaults to the module logger
        """
        self._locations = locations
        self._image_cache = image_cache
        self._hardware = hardware
        self._default_location = default_location
        self._options_provider = options_provider
        self._default_template_provider = default_template_provider
        self._logger = logger or logging.getLogger(__name__)

        self._image_selection: ImageSelection = ImagesByAttributes()
        self._hardware_selection: HardwareSelection = HardwareByAttributes()
        self._location_id: Optional[str] = None
        self._min_ram: Optional[int] = None
        self._min_cores: Optional[float] = None
        self._min_disk: Optional[float] = None
        # None until a ranking or chooser is requested; the defaults apply then
        self._hardware_ordering: Optional[Ordering[Hardware]] = None
        self._image_chooser: Optional[ImageChooser] = None
        self._options: Optional[TemplateOptions] = None

    @property
    def image_selection(self) -> ImageSelection:
        return self._image_selection

    @property
    def hardware_selection(self) -> HardwareSelection:
        return self._hardware_selection

    @property
    def location(self) -> Optional[str]:
        return self._location_id

    # Image selection

    def image_id(self, image_id: Optional[str]) -> "TemplateBuilder":
        """Select an image by id; ``None`` resets to an empty attribute selection."""
        self._image_selection = ImageById(image_id) if image_id is not None else ImagesByAttributes()
        return self

    def _with_image_attributes(self, **changes) -> "TemplateBuilder":
        current = self._image_selection
        if not isinstance(current, ImagesByAttributes):
            current = ImagesByAttributes()
        self._image_selection = current.with_changes(**changes)
        return self

    def image_name_matches(self, pattern: str) -> "TemplateBuilder":
        return self._with_image_attributes(image_name=pattern)

    def image_description_matches(self, pattern: str) -> "TemplateBuilder":
        return self._with_image_attributes(image_description=pattern)

    def image_version_matches(self, pattern: str) -> "TemplateBuilder":
        return self._with_image_attributes(image_version=pattern)

    def image_matches(self, predicate: Callable[[Image], bool]) -> "TemplateBuilder":
        return self._with_image_attributes(image_predicate=predicate)

    def os_family(self, family: OsFamily) -> "TemplateBuilder":
        return self._with_image_attributes(os_family=family)

    def os_name_matches(self, pattern: str) -> "TemplateBuilder":
        return self._with_image_attributes(os_name=pattern)

    def os_description_matches(self, pattern: str) -> "TemplateBuilder":
        return self._with_image_attributes(os_description=pattern)

    def os_version_matches(self, pattern: str) -> "TemplateBuilder":
        return self._with_image_attributes(os_version=pattern)

    def os_arch_matches(self, pattern: str) -> "TemplateBuilder":
        return self._with_image_attributes(os_arch=pattern)

    def os_64bit(self, is_64bit: bool) -> "TemplateBuilder":
        return self._with_image_attributes(os_64bit=is_64bit)

    # Hardware selection

    def hardware_id(self, hardware_id: Optional[str]) -> "TemplateBuilder":
        """Select hardware by id; ``None`` resets to an empty attribute selection."""
        self._hardware_selection = (
            HardwareById(hardware_id) if hardware_id is not None else HardwareByAttributes()
        )
        return self

    def hypervisor_matches(self, pattern: str) -> "TemplateBuilder":
        self._hardware_selection = HardwareByAttributes(hypervisor=pattern)
        return self

    def min_ram(self, megabytes: int) -> "TemplateBuilder":
        self._min_ram = megabytes
        return self

    def min_cores(self, cores: float) -> "TemplateBuilder":
        self._min_cores = cores
        return self

    def min_disk(self, gigabytes: float) -> "TemplateBuilder":
        self._min_disk = gigabytes
        return self

    def smallest(self) -> "TemplateBuilder":
        return self._rank_hardware_by(SMALLEST_FIRST)

    def biggest(self) -> "TemplateBuilder":
        return self._rank_hardware_by(DEFAULT_SIZE_ORDERING)

    def fastest(self) -> "TemplateBuilder":
        return self._rank_hardware_by(BY_CORES)

    def _rank_hardware_by(self, ordering: Ordering[Hardware]) -> "TemplateBuilder":
        self._hardware_ordering = ordering
        return self

    # Independent constraints

    def location_id(self, location_id: Optional[str]) -> "TemplateBuilder":
        self._location_id = location_id
        return self

    def options(self, options: TemplateOptions) -> "TemplateBuilder":
        self._options = options
        return self

    def image_chooser(self, chooser: ImageChooser) -> "TemplateBuilder":
        self._image_chooser = chooser
        return self

    image_chooser_from_ordering = staticmethod(image_chooser_from_ordering)

    def from_spec(self, spec: str) -> "TemplateBuilder":
        """
        Apply constraints from a flat ``key=value,key=value`` string.

        Recognised keys are imageId, hardwareId, locationId, loginUser
        (``user`` or ``user:secret``, where a PEM secret is taken as a private
        key) and authenticateSudo.

        Args:
            spec: Comma-separated constraint string

        Returns:
            This builder

        Raises:
            ConfigurationError: On unknown, duplicate or malformed keys
        """
        values = _parse_spec(spec)
        if "imageId" in values:
            self.image_id(values["imageId"])
        if "hardwareId" in values:
            self.hardware_id(values["hardwareId"])
        if "locationId" in values:
            self.location_id(values["locationId"])

        login: Dict[str, object] = {}
        if "loginUser" in values:
            user, _, secret = values["loginUser"].partition(":")
            if not user:
                raise ConfigurationError("loginUser must name a user", ["loginUser"])
            login["login_user"] = user
            if secret:
                key = "login_private_key" if secret.startswith(PEM_PREFIX) else "login_password"
                login[key] = secret
        if "authenticateSudo" in values:
            login["authenticate_sudo"] = _parse_bool("authenticateSudo", values["authenticateSudo"])
        if login:
            base = self._options if self._options is not None else self._options_provider()
            self._options = base.model_copy(update=login)
        return self

    # Resolution

    def _nothing_changed_except_options(self) -> bool:
        return (
            self._location_id is None
            and isinstance(self._image_selection, ImagesByAttributes)
            and self._image_selection.is_empty
            and isinstance(self._hardware_selection, HardwareByAttributes)
            and self._hardware_selection.is_empty
            and self._min_ram is None
            and self._min_cores is None
            and self._min_disk is None
        )

    def build(self) -> Template:
        """
        Resolve the accumulated constraints.

        Returns:
            The resolved template

        Raises:
            ConfigurationError: If the image or hardware inventory is empty
            NotFoundError: If an explicit id is unknown or nothing matches
        """
        if self._nothing_changed_except_options() and self._default_template_provider is not None:
            default_builder = self._default_template_provider()
            if self._options is not None:
                default_builder.options(self._options)
            if self._hardware_ordering is not None:
                default_builder._rank_hardware_by(self._hardware_ordering)
            if self._image_chooser is not None:
                default_builder.image_chooser(self._image_chooser)
            return default_builder.build()

        options = self._options if self._options is not None else self._options_provider()
        location = self._resolve_location()

        images = list(self._image_cache.get())
        if not images:
            raise ConfigurationError("no images present!")
        hardware = list(self._hardware())
        if not hardware:
            raise ConfigurationError("no hardware profiles present!")

        image: Optional[Image] = None
        explicit: Optional[Hardware] = None
        if isinstance(self._image_selection, ImageById):
            image = self._image_cache.resolve(self._image_selection.image_id)
            location = _widen(location, image.location)
        if isinstance(self._hardware_selection, HardwareById):
            explicit = _find_hardware(hardware, self._hardware_selection.hardware_id)
            location = _widen(location, explicit.location)
        if location is None:
            location = self._default_location()
        if image is not None and not location_compatible(image.location, location):
            raise NoMatchingImageError(
                f"imageId({image.id}) in location {image.location.id} is not usable in location {location.id}"
            )
        if explicit is not None and not location_compatible(explicit.location, location):
            raise NoSupportedHardwareError(
                f"hardwareId({explicit.id}) in location {explicit.location.id} "
                f"is not usable in location {location.id}"
            )

        self._logger.debug(">> searching params(%s)", self)
        candidates = [image] if image is not None else self._supported_images(images, location)
        chosen_hardware = self._resolve_hardware(hardware, candidates, location)
        if image is None:
            chooser = self._image_chooser if self._image_chooser is not None else DEFAULT_IMAGE_CHOOSER
            image = chooser(
                [candidate for candidate in candidates if chosen_hardware.supports_image(candidate)]
            )
        self._logger.debug("<< matched image(%s) hardware(%s) location(%s)",
                           image.id, chosen_hardware.id, location.id)
        return Template(image=image, hardware=chosen_hardware, location=location, options=options)

    def _resolve_location(self) -> Optional[Location]:
        if self._location_id is None:
            return None
        for location in self._locations():
            if location.id == self._location_id:
                return location
        raise LocationNotFoundError(self._location_id)

    def _supported_images(self, images: List[Image], location: Location) -> List[Image]:
        supported = [
            image for image in images
            if location_compatible(image.location, location) and self._image_matches(image)
        ]
        if not supported:
            raise NoMatchingImageError(f"no image matched params: {self}")
        return supported

    def _image_matches(self, image: Image) -> bool:
        selection = self._image_selection
        if not isinstance(selection, ImagesByAttributes):
            return True
        operating_system = image.operating_system
        if selection.os_family is not None and operating_system.family != selection.os_family:
            return False
        if selection.os_64bit is not None and operating_system.is_64bit != selection.os_64bit:
            return False
        checks = (
            (image.name, selection.image_name),
            (image.description, selection.image_description),
            (image.version, selection.image_version),
            (operating_system.name, selection.os_name),
            (operating_system.description, selection.os_description),
            (operating_system.version, selection.os_version),
            (operating_system.arch, selection.os_arch),
        )
        for value, constraint in checks:
            if constraint is not None and not matches(value, constraint):
                return False
        if selection.image_predicate is not None and not selection.image_predicate(image):
            return False
        return True

    def _resolve_hardware(self, hardware: List[Hardware], images: List[Image],
                          location: Location) -> Hardware:
        in_location = [h for h in hardware if location_compatible(h.location, location)]
        supporting = [h for h in in_location if any(h.supports_image(image) for image in images)]
        if not supporting:
            predicates = dict.fromkeys(str(h.supports_image) for h in (in_location or hardware))
            raise NoSupportedHardwareError(
                "no hardware profiles support images matching params: " + ", ".join(predicates)
            )
        matching = [h for h in supporting if self._hardware_matches(h)]
        if not matching:
            raise NoSupportedHardwareError(f"no hardware profiles match params: {self}")
        preferred = multi_max(NON_DEPRECATED_FIRST, matching)
        ordering = self._hardware_ordering if self._hardware_ordering is not None else SMALLEST_FIRST
        return multi_max(ordering, preferred)[0]

    def _hardware_matches(self, hardware: Hardware) -> bool:
        selection = self._hardware_selection
        if isinstance(selection, HardwareById) and hardware.id != selection.hardware_id:
            return False
        if (isinstance(selection, HardwareByAttributes) and selection.hypervisor is not None
                and not matches(hardware.hypervisor, selection.hypervisor)):
            return False
        if self._min_ram is not None and hardware.ram < self._min_ram:
            return False
        if self._min_cores is not None and hardware.total_cores < self._min_cores:
            return False
        if self._min_disk is not None and hardware.total_disk < self._min_disk:
            return False
        return True

    def __str__(self) -> str:
        image_selection = self._image_selection
        hardware_selection = self._hardware_selection
        fields = []
        if isinstance(image_selection, ImageById):
            fields.append(("imageId", image_selection.image_id))
        else:
            fields.extend([
                ("imageName", image_selection.image_name),
                ("imageDescription", image_selection.image_description),
                ("imageVersion", image_selection.image_version),
                ("osFamily", image_selection.os_family.value if image_selection.os_family else None),
                ("osName", image_selection.os_name),
                ("osDescription", image_selection.os_description),
                ("osVersion", image_selection.os_version),
                ("osArch", image_selection.os_arch),
                ("os64Bit", str(image_selection.os_64bit).lower()
                 if image_selection.os_64bit is not None else None),
            ])
        fields.append(("locationId", self._location_id))
        if isinstance(hardware_selection, HardwareById):
            fields.append(("hardwareId", hardware_selection.hardware_id))
        else:
            fields.append(("hypervisor", hardware_selection.hypervisor))
        fields.extend([
            ("minCores", self._min_cores),
            ("minRam", self._min_ram),
            ("minDisk", self._min_disk),
        ])
        return "{" + ", ".join(f"{key}={value}" for key, value in fields if value is not None) + "}"


def _widen(current: Optional[Location], resource_location: Optional[Location]) -> Optional[Location]:
    # a resource pinned inside the current choice narrows it
    if resource_location is None:
        return current
    if current is None or (current.scope.depth < resource_location.scope.depth
                           and resource_location.is_same_or_descendant_of(current)):
        return resource_location
    return current


def _find_hardware(hardware: List[Hardware], hardware_id: str) -> Hardware:
    for profile in hardware:
        if profile.id == hardware_id:
            return profile
    raise HardwareNotFoundError(hardware_id)


def _parse_spec(spec: str) -> Dict[str, str]:
    values: Dict[str, str] = {}
    for entry in spec.split(","):
        entry = entry.strip()
        if not entry:
            continue
        key, separator, value = entry.partition("=")
        key = key.strip()
        if not separator or not key:
            raise ConfigurationError(f"malformed template spec entry: {entry}")
        if key not in SPEC_KEYS:
            raise ConfigurationError(f"unrecognized template spec key: {key}", [key])
        if key in values:
            raise ConfigurationError(f"duplicate template spec key: {key}", [key])
        values[key] = value.strip()
    return values


def _parse_bool(key: str, value: str) -> bool:
    lowered = value.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    raise ConfigurationError(f"{key} must be true or false, got: {value}", [key])
