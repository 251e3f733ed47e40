"""Inventory port interfaces for dependency inversion."""

from abc import ABC, abstractmethod
from typing import Iterable, Optional

from provisioning_core.domain.compute import Hardware, Image, Location
from provisioning_core.domain.template.template import TemplateOptions


class InventoryPort(ABC):
    """
    Port interface for the raw inventories a provider exposes.

    Each call returns the provider's current snapshot; callers decide how
    long to keep it.
    """

    @abstractmethod
    def locations(self) -> Iterable[Location]:
        pass

    @abstractmethod
    def images(self) -> Iterable[Image]:
        pass

    @abstractmethod
    def hardware(self) -> Iterable[Hardware]:
        pass

    @abstractmethod
    def default_location(self) -> Location:
        """
        Location used when neither the caller nor a resolved resource pins one.

        Returns:
            The provider's default location
        """
        pass

    def default_template_options(self) -> TemplateOptions:
        return TemplateOptions()


class GetImageStrategy(ABC):
    """Fallback lookup of a single image that is missing from a cached snapshot."""

    @abstractmethod
    def get_image(self, image_id: str) -> Optional[Image]:
        """
        Look up one image directly at the provider.

        Args:
            image_id: Image identifier

        Returns:
            The image, or None when the provider does not know it
        """
        pass
