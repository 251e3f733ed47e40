"""Configuration schemas package."""

from .app_schema import AppConfig, validate_config
from .logging_schema import LogFileConfig, LoggingConfig
from .polling_schema import PollingConfig, PollPeriodConfig, TimeoutsConfig
from .provider_schema import AWSProviderConfig, ProviderConfig
from .template_schema import DefaultTemplateConfig, TemplateConfig

__all__ = [
    # Main configuration
    "AppConfig",
    "validate_config",
    # Logging
    "LoggingConfig",
    "LogFileConfig",
    # Polling
    "PollingConfig",
    "PollPeriodConfig",
    "TimeoutsConfig",
    # Providers
    "ProviderConfig",
    "AWSProviderConfig",
    # Templates
    "TemplateConfig",
    "DefaultTemplateConfig",
]
