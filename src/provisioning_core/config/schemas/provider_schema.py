"""Provider configuration schemas."""
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


class AWSProviderConfig(BaseModel):
    """AWS provider configuration."""

    region: str = Field("us-east-1", description="Default region, also the default location")
    regions: List[str] = Field(default_factory=list, description="Regions to inventory, defaults to the default region")
    profile: Optional[str] = Field(None, description="Named credentials profile")
    image_owners: List[str] = Field(
        default_factory=lambda: ["self", "amazon"], description="Owners whose images are inventoried"
    )
    instance_types: List[str] = Field(
        default_factory=list, description="Instance types to inventory, empty for all offered types"
    )
    request_retry_attempts: int = Field(3, description="botocore standard-mode retry attempts")
    connect_timeout: float = Field(1.0, description="Connection timeout in seconds")
    read_timeout: float = Field(30.0, description="Read timeout in seconds")
    proxy_host: Optional[str] = Field(None, description="HTTPS proxy host")
    proxy_port: Optional[int] = Field(None, description="HTTPS proxy port")

    @field_validator("request_retry_attempts")
    @classmethod
    def validate_retry_attempts(cls, v: int) -> int:
        """Validate retry attempts."""
        if v < 0:
            raise ValueError("Retry attempts must be non-negative")
        return v

    def all_regions(self) -> List[str]:
        """Regions to inventory; the default region always comes first."""
        regions = [self.region]
        regions.extend(region for region in self.regions if region != self.region)
        return regions


class ProviderConfig(BaseModel):
    """Provider configuration."""

    type: str = Field("aws", description="Provider type")
    aws: AWSProviderConfig = Field(default_factory=AWSProviderConfig)

    @field_validator("type")
    @classmethod
    def validate_type(cls, v: str) -> str:
        """Validate provider type."""
        valid_types = ["aws", "static"]
        if v not in valid_types:
            raise ValueError(f"Provider type must be one of {valid_types}")
        return v
