from provisioning_core.infrastructure.template.image_cache import DEFAULT_TTL_SECONDS, ImageCache
from provisioning_core.infrastructure.template.static_inventory import StaticInventoryProvider

__all__ = ["DEFAULT_TTL_SECONDS", "ImageCache", "StaticInventoryProvider"]
