"""Infrastructure layer: logging, caching, retry and inventory adapters."""
