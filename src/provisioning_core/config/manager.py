from __future__ import annotations

import logging
import threading
from typing import Any, Optional, Type, TypeVar, cast

from pydantic import ValidationError as PydanticValidationError

from provisioning_core.config.loader import ConfigurationLoader
from provisioning_core.config.schemas import (
    AppConfig,
    AWSProviderConfig,
    LoggingConfig,
    PollingConfig,
    PollPeriodConfig,
    ProviderConfig,
    TemplateConfig,
    TimeoutsConfig,
)
from provisioning_core.domain.core.exceptions import ConfigurationError

T = TypeVar("T")
logger = logging.getLogger(__name__)


class ConfigurationManager:
    """
    Single source of truth for configuration.

    Loading is lazy and guarded by a lock, so one manager can be shared
    between threads. Typed sections are pydantic models taken from the
    validated AppConfig.
    """

    def __init__(self, config_file: Optional[str] = None,
                 loader: Optional[ConfigurationLoader] = None):
        """Initialize configuration manager with lazy loading."""
        self._config_file = config_file
        self._lock = threading.RLock()
        self._app_config: Optional[AppConfig] = None
        self._loader = loader

    @property
    def loader(self) -> ConfigurationLoader:
        """Lazy load configuration loader."""
        if self._loader is None:
            self._loader = ConfigurationLoader()
        return self._loader

    @property
    def app_config(self) -> AppConfig:
        """Lazy load application configuration."""
        if self._app_config is None:
            with self._lock:
                if self._app_config is None:
                    self._app_config = self._load_app_config()
        return self._app_config

    def _load_app_config(self) -> AppConfig:
        raw_config = self.loader.load_configuration(self._config_file)
        try:
            app_config = AppConfig(**raw_config)
        except PydanticValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {str(e)}")
        logger.debug("Configuration loaded for environment %s", app_config.environment)
        return app_config

    def get_typed(self, config_class: Type[T]) -> T:
        """
        Get typed configuration object.

        Args:
            config_class: Configuration class

        Returns:
            Typed configuration object

        Raises:
            ConfigurationError: If the class is not a known configuration section
        """
        app_config = self.app_config
        config_mapping = {
            AppConfig: app_config,
            ProviderConfig: app_config.provider,
            AWSProviderConfig: app_config.provider.aws,
            LoggingConfig: app_config.logging,
            TemplateConfig: app_config.template,
            PollingConfig: app_config.polling,
            PollPeriodConfig: app_config.polling.period,
            TimeoutsConfig: app_config.polling.timeouts,
        }
        if config_class in config_mapping:
            return cast(T, config_mapping[config_class])
        raise ConfigurationError(f"Unknown configuration class: {config_class.__name__}")

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by key.

        Args:
            key: Configuration key (dot notation for nested keys)
            default: Default value if key not found

        Returns:
            Configuration value
        """
        value: Any = self.app_config.model_dump()
        for k in key.split("."):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        return value

    def reload(self) -> None:
        """Reload configuration from sources on next access."""
        with self._lock:
            self._app_config = None
