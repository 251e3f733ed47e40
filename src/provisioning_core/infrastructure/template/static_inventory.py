"""In-memory inventory, loadable from a plain dictionary (e.g. a YAML file)."""
from typing import Any, Dict, Iterable, List, Optional

from provisioning_core.domain.compute import (
    Hardware,
    Image,
    ImagePredicates,
    ImageStatus,
    Location,
    LocationScope,
    OperatingSystem,
    OsFamily,
    Processor,
    Volume,
)
from provisioning_core.domain.core.exceptions import ConfigurationError
from provisioning_core.domain.template.ports import GetImageStrategy, InventoryPort
from provisioning_core.domain.template.template import TemplateOptions


class StaticInventoryProvider(InventoryPort, GetImageStrategy):
    """
    Fixed inventory held in memory.

    ``hidden_images`` are not part of the listed inventory but can still be
    looked up by id, like private images a provider does not list.
    """

    def __init__(self,
                 locations: Iterable[Location],
                 images: Iterable[Image],
                 hardware: Iterable[Hardware],
                 default_location_id: Optional[str] = None,
                 default_options: Optional[TemplateOptions] = None,
                 hidden_images: Iterable[Image] = ()):
        self._locations = list(locations)
        self._images = list(images)
        self._hardware = list(hardware)
        self._hidden_images = {image.id: image for image in hidden_images}
        self._default_options = default_options or TemplateOptions()
        if not self._locations:
            raise ConfigurationError("static inventory needs at least one location")
        self._default_location = self._find_location(default_location_id) \
            if default_location_id else self._locations[0]

    def _find_location(self, location_id: str) -> Location:
        for location in self._locations:
            if location.id == location_id:
                return location
        raise ConfigurationError(f"unknown location id in static inventory: {location_id}")

    def locations(self) -> List[Location]:
        return list(self._locations)

    def images(self) -> List[Image]:
        return list(self._images)

    def hardware(self) -> List[Hardware]:
        return list(self._hardware)

    def default_location(self) -> Location:
        return self._default_location

    def default_template_options(self) -> TemplateOptions:
        return self._default_options

    def get_image(self, image_id: str) -> Optional[Image]:
        for image in self._images:
            if image.id == image_id:
                return image
        return self._hidden_images.get(image_id)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StaticInventoryProvider":
        """
        Build an inventory from a dictionary.

        Locations must be listed parents first. Images and hardware refer to
        locations by id; hardware may restrict images with ``supported_image_ids``.

        Args:
            data: Mapping with ``locations``, ``images``, ``hardware`` and
                optional ``default_location``, ``hidden_images`` and ``options``

        Returns:
            The inventory

        Raises:
            ConfigurationError: If an entry is malformed or refers to an unknown location
        """
        locations: Dict[str, Location] = {}
        try:
            for entry in data.get("locations", []):
                parent_id = entry.get("parent")
                if parent_id is not None and parent_id not in locations:
                    raise ConfigurationError(f"location {entry['id']} refers to unknown parent {parent_id}")
                locations[entry["id"]] = Location(
                    id=entry["id"],
                    scope=LocationScope(entry.get("scope", "REGION").upper()),
                    description=entry.get("description", entry["id"]),
                    parent=locations.get(parent_id) if parent_id else None,
                    iso_codes=frozenset(entry.get("iso_codes", [])),
                )

            def location_of(entry: Dict[str, Any]) -> Optional[Location]:
                location_id = entry.get("location")
                if location_id is None:
                    return None
                if location_id not in locations:
                    raise ConfigurationError(f"{entry.get('id')} refers to unknown location {location_id}")
                return locations[location_id]

            def image_of(entry: Dict[str, Any]) -> Image:
                os_data = entry.get("os", {})
                return Image(
                    id=entry["id"],
                    provider_id=entry.get("provider_id"),
                    name=entry.get("name"),
                    version=entry.get("version"),
                    description=entry.get("description"),
                    status=ImageStatus(entry.get("status", "AVAILABLE").upper()),
                    operating_system=OperatingSystem(
                        family=OsFamily.from_value(os_data.get("family", "unrecognized")),
                        name=os_data.get("name"),
                        version=os_data.get("version"),
                        arch=os_data.get("arch"),
                        is_64bit=bool(os_data.get("is_64bit", False)),
                        description=os_data.get("description"),
                    ),
                    location=location_of(entry),
                )

            hardware = []
            for entry in data.get("hardware", []):
                supported = entry.get("supported_image_ids")
                hardware.append(Hardware(
                    id=entry["id"],
                    name=entry.get("name"),
                    ram=int(entry.get("ram", 0)),
                    processors=tuple(Processor(p["cores"], p.get("speed", 1.0))
                                     for p in entry.get("processors", [])),
                    volumes=tuple(Volume(v["size"], v.get("boot", False), v.get("durable", True))
                                  for v in entry.get("volumes", [])),
                    hypervisor=entry.get("hypervisor"),
                    location=location_of(entry),
                    deprecated=bool(entry.get("deprecated", False)),
                    supports_image=ImagePredicates.id_in(supported) if supported
                    else ImagePredicates.any_image(),
                ))

            return cls(
                locations=locations.values(),
                images=[image_of(entry) for entry in data.get("images", [])],
                hardware=hardware,
                default_location_id=data.get("default_location"),
                default_options=TemplateOptions(**data.get("options", {})),
                hidden_images=[image_of(entry) for entry in data.get("hidden_images", [])],
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ConfigurationError(f"malformed static inventory: {e}")
