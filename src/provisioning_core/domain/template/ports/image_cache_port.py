"""Image cache port interface for dependency inversion."""

from abc import ABC, abstractmethod
from typing import List

from provisioning_core.domain.compute import Image


class ImageCachePort(ABC):
    """Port interface for a memoized image inventory with single-image fallback."""

    @abstractmethod
    def get(self) -> List[Image]:
        """Return the current snapshot, refreshing it when expired."""
        pass

    @abstractmethod
    def resolve(self, image_id: str) -> Image:
        """
        Resolve one image by id, falling back to a direct provider lookup.

        An image found by the fallback is merged into the current snapshot.

        Args:
            image_id: Image identifier

        Returns:
            The image

        Raises:
            ImageNotFoundError: If neither the snapshot nor the fallback knows the id
        """
        pass
