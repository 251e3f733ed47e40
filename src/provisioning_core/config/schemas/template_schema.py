"""Template resolution configuration schemas."""
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class DefaultTemplateConfig(BaseModel):
    """Constraints applied when a caller asks for a template without constraints."""

    os_family: Optional[str] = Field(None, description="Operating system family, e.g. ubuntu")
    os_version_matches: Optional[str] = Field(None, description="Regex over the OS version")
    os_64bit: Optional[bool] = Field(None, description="Require a 64-bit operating system")
    image_name_matches: Optional[str] = Field(None, description="Regex over the image name")
    location_id: Optional[str] = Field(None, description="Location to pin the default template to")
    min_ram: Optional[int] = Field(None, description="Minimum memory in MB")
    min_cores: Optional[float] = Field(None, description="Minimum number of cores")
    hardware_id: Optional[str] = Field(None, description="Explicit hardware profile")
    spec: Optional[str] = Field(None, description="Flat key=value constraint string")


class TemplateConfig(BaseModel):
    """Template resolution configuration."""

    image_cache_ttl: int = Field(60, description="Image inventory cache time-to-live in seconds")
    default_template: DefaultTemplateConfig = Field(default_factory=DefaultTemplateConfig)

    @field_validator("image_cache_ttl")
    @classmethod
    def validate_image_cache_ttl(cls, v: int) -> int:
        """Validate cache TTL."""
        if v < 0:
            raise ValueError("Image cache TTL must be non-negative")
        return v
