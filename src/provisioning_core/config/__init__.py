"""Configuration package: schemas, loading and typed access."""
from provisioning_core.config.loader import ConfigurationLoader
from provisioning_core.config.manager import ConfigurationManager
from provisioning_core.config.schemas import (
    AppConfig,
    AWSProviderConfig,
    DefaultTemplateConfig,
    LogFileConfig,
    LoggingConfig,
    PollingConfig,
    PollPeriodConfig,
    ProviderConfig,
    TemplateConfig,
    TimeoutsConfig,
    validate_config,
)

__all__ = [
    "AppConfig",
    "AWSProviderConfig",
    "ConfigurationLoader",
    "ConfigurationManager",
    "DefaultTemplateConfig",
    "LogFileConfig",
    "LoggingConfig",
    "PollingConfig",
    "PollPeriodConfig",
    "ProviderConfig",
    "TemplateConfig",
    "TimeoutsConfig",
    "validate_config",
]
