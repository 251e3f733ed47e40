from provisioning_core.domain.template.ports.image_cache_port import ImageCachePort
from provisioning_core.domain.template.ports.inventory_port import GetImageStrategy, InventoryPort

__all__ = ["GetImageStrategy", "ImageCachePort", "InventoryPort"]
