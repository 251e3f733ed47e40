from typing import Optional, Any

from provisioning_core.domain.core.exceptions import bounded_message


class InfrastructureError(Exception):
    """Base exception for infrastructure-related errors."""
    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(bounded_message(message))
        self.details = details


class AWSError(InfrastructureError):
    """Raised when AWS operations fail in a way that retrying will not fix."""
    pass


class ConfigurationLoadError(InfrastructureError):
    """Raised when a configuration file cannot be read or parsed."""
    pass
