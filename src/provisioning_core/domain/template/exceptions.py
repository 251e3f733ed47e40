from provisioning_core.domain.core.exceptions import NotFoundError


class LocationNotFoundError(NotFoundError):
    """Raised when a location id matches no known location."""
    def __init__(self, location_id: str):
        super().__init__(f"location id {location_id} not found", "Location", location_id)


class ImageNotFoundError(NotFoundError):
    """Raised when an explicit image id is unknown to the cache and the fallback lookup."""
    def __init__(self, image_id: str):
        super().__init__(f"imageId({image_id}) not found", "Image", image_id)


class HardwareNotFoundError(NotFoundError):
    """Raised when an explicit hardware id is unknown."""
    def __init__(self, hardware_id: str):
        super().__init__(f"hardwareId({hardware_id}) not found", "Hardware", hardware_id)


class NoMatchingImageError(NotFoundError):
    """Raised when no image satisfies the attribute constraints."""
    def __init__(self, message: str):
        super().__init__(message, "Image")


class NoSupportedHardwareError(NotFoundError):
    """Raised when no hardware profile satisfies the constraints for the candidate images."""
    def __init__(self, message: str):
        super().__init__(message, "Hardware")
