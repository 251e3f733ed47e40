"""In-memory fakes and builders shared by the test modules."""
from typing import Dict, List, Optional

from provisioning_core.domain.compute import (
    Hardware,
    Image,
    Location,
    OperatingSystem,
    Processor,
    Volume,
)
from provisioning_core.domain.template.ports import GetImageStrategy


class FakeClock:
    """Manually advanced monotonic clock; ``sleep`` advances it."""

    def __init__(self, start: float = 0.0):
        self.now = start
        self.sleeps: List[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeImageStrategy(GetImageStrategy):
    """In-memory single-image lookup that records the ids it was asked for."""

    def __init__(self, images: Optional[List[Image]] = None):
        self.images: Dict[str, Image] = {image.id: image for image in images or []}
        self.requested: List[str] = []

    def get_image(self, image_id: str) -> Optional[Image]:
        self.requested.append(image_id)
        return self.images.get(image_id)


class FakeInventory:
    """Mutable inventory the tests fill in before building."""

    def __init__(self, locations, images=(), hardware=(), default_location=None):
        self.locations = list(locations)
        self.images = list(images)
        self.hardware = list(hardware)
        self.default_location = default_location or self.locations[0]
        self.image_loads = 0

    def load_images(self) -> List[Image]:
        self.image_loads += 1
        return list(self.images)


def make_image(image_id: str, arch: Optional[str] = None, is_64bit: bool = False,
               name: Optional[str] = None, location: Optional[Location] = None, **os_fields) -> Image:
    return Image(
        id=image_id,
        name=name,
        operating_system=OperatingSystem(arch=arch, is_64bit=is_64bit, **os_fields),
        location=location,
    )


def make_hardware(hardware_id: str, ram: int = 1024, cores: float = 1, disk: float = 10,
                  **fields) -> Hardware:
    return Hardware(
        id=hardware_id,
        ram=ram,
        processors=(Processor(cores, 1.0),),
        volumes=(Volume(disk, is_boot_device=True),),
        **fields,
    )

