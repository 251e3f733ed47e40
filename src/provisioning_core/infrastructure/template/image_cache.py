"""Memoized image inventory with single-image fallback."""
import logging
import threading
import time
from typing import Callable, Dict, Iterable, List, Optional

from provisioning_core.domain.base.ports import LoggingPort
from provisioning_core.domain.compute import Image
from provisioning_core.domain.template.exceptions import ImageNotFoundError
from provisioning_core.domain.template.ports import GetImageStrategy, ImageCachePort

DEFAULT_TTL_SECONDS = 60


class ImageCache(ImageCachePort):
    """
    Time-bounded snapshot of an image inventory.

    The snapshot is reloaded from the supplier once it is older than the TTL.
    Images found through the fallback strategy are merged into the current
    snapshot and live until the next reload.

    Safe to share between threads: the supplier runs under the lock, so only
    one reload happens at a time, while the fallback strategy runs outside it.
    Concurrent merges never drop each other's images.
    """

    def __init__(self,
                 images_supplier: Callable[[], Iterable[Image]],
                 get_image_strategy: GetImageStrategy,
                 ttl_seconds: float = DEFAULT_TTL_SECONDS,
                 clock: Callable[[], float] = time.monotonic,
                 logger: Optional[LoggingPort] = None):
        """
        Initialize the cache.

        Args:
            images_supplier: Returns the provider's full image inventory
            get_image_strategy: Looks up a single image missing from the snapshot
            ttl_seconds: Snapshot lifetime in seconds
            clock: Monotonic time source
            logger: Optional logger, defaults to the module logger
        """
        self._images_supplier = images_supplier
        self._get_image_strategy = get_image_strategy
        self._ttl_seconds = ttl_seconds
        self._clock = clock
        self._logger = logger or logging.getLogger(__name__)
        self._lock = threading.RLock()
        self._images: Dict[str, Image] = {}
        # requested id -> image id, for lookups that return a differently keyed image
        self._aliases: Dict[str, str] = {}
        self._loaded_at: Optional[float] = None

    def _snapshot(self) -> Dict[str, Image]:
        with self._lock:
            if self._loaded_at is None or self._clock() - self._loaded_at >= self._ttl_seconds:
                self._images = {image.id: image for image in self._images_supplier()}
                self._aliases = {}
                self._loaded_at = self._clock()
                self._logger.debug("Loaded %d images into cache", len(self._images))
            return self._images

    def get(self) -> List[Image]:
        """Return the current snapshot, reloading it when expired."""
        with self._lock:
            return list(self._snapshot().values())

    def resolve(self, image_id: str) -> Image:
        """
        Resolve an image by id from the snapshot or the fallback strategy.

        Args:
            image_id: Image identifier

        Returns:
            The image

        Raises:
            ImageNotFoundError: If neither the snapshot nor the strategy knows the id
        """
        with self._lock:
            snapshot = self._snapshot()
            image = snapshot.get(image_id) or snapshot.get(self._aliases.get(image_id, image_id))
        if image is not None:
            return image

        self._logger.debug("Image %s not cached, asking fallback strategy", image_id)
        image = self._get_image_strategy.get_image(image_id)
        if image is None:
            raise ImageNotFoundError(image_id)
        with self._lock:
            self.register_image(image)
            if image.id != image_id:
                self._aliases[image_id] = image.id
        return image

    def register_image(self, image: Image) -> None:
        """Add or replace an image in the current snapshot."""
        with self._lock:
            self._snapshot()[image.id] = image
        self._logger.debug("Cached image %s", image.id)

    def remove_image(self, image_id: str) -> None:
        """Drop an image from the current snapshot, e.g. after deleting it."""
        with self._lock:
            self._snapshot().pop(image_id, None)

    def invalidate(self) -> None:
        """Force a reload on next access."""
        with self._lock:
            self._loaded_at = None
