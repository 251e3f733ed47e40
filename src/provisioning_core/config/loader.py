"""Configuration loading from files and the environment."""
import copy
import json
import logging
import os
import re
from typing import Any, Dict, Mapping, Optional

import yaml

from provisioning_core.infrastructure.exceptions import ConfigurationLoadError

logger = logging.getLogger(__name__)

ENV_PREFIX = "PROVISIONING_CORE_"
DEFAULT_CONFIG_ENV = "PROVISIONING_CORE_CONFIG"

_VARIABLE_PATTERN = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)(?::([^}]*))?\}|\$([A-Za-z_][A-Za-z0-9_]*)")


def deep_update(target: Dict[str, Any], source: Mapping[str, Any]) -> Dict[str, Any]:
    """Merge ``source`` into ``target`` recursively; scalars and lists replace."""
    for key, value in source.items():
        if key in target and isinstance(target[key], dict) and isinstance(value, Mapping):
            deep_update(target[key], value)
        else:
            target[key] = copy.deepcopy(value)
    return target


class ConfigurationLoader:
    """
    Load raw configuration data.

    Sources, lowest priority first: built-in defaults, a JSON or YAML file,
    then ``PROVISIONING_CORE_<SECTION>__<KEY>`` environment variables.
    ``$VAR``, ``${VAR}`` and ``${VAR:default}`` references inside string
    values are expanded from the environment.
    """

    def __init__(self, environ: Optional[Mapping[str, str]] = None,
                 defaults: Optional[Dict[str, Any]] = None):
        self._environ = environ if environ is not None else os.environ
        self._defaults = defaults or {}

    def load_from_file(self, path: str) -> Dict[str, Any]:
        """
        Load one configuration file.

        Args:
            path: Path to a .json, .yaml or .yml file

        Returns:
            Parsed configuration dictionary

        Raises:
            ConfigurationLoadError: If the file cannot be read or parsed
        """
        try:
            with open(path, "r") as f:
                if path.endswith((".yaml", ".yml")):
                    data = yaml.safe_load(f) or {}
                else:
                    data = json.load(f)
        except (OSError, ValueError, yaml.YAMLError) as e:
            raise ConfigurationLoadError(f"Failed to load configuration from {path}: {str(e)}")
        if not isinstance(data, dict):
            raise ConfigurationLoadError(f"Configuration in {path} must be a mapping")
        logger.debug("Loaded configuration file %s", path)
        return data

    def load_configuration(self, config_file: Optional[str] = None) -> Dict[str, Any]:
        """
        Load defaults, merge the configuration file over them and apply overrides.

        Args:
            config_file: Optional file path; falls back to $PROVISIONING_CORE_CONFIG

        Returns:
            Merged and expanded configuration dictionary
        """
        config = copy.deepcopy(self._defaults)
        path = config_file or self._environ.get(DEFAULT_CONFIG_ENV)
        if path:
            deep_update(config, self.load_from_file(path))
        config = self.apply_environment_overrides(config)
        return self.expand_variables(config)

    def apply_environment_overrides(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """
        Apply ``PROVISIONING_CORE_<SECTION>__<KEY>`` variables.

        Double underscores separate nesting levels and names are lower-cased,
        so ``PROVISIONING_CORE_LOGGING__LEVEL=DEBUG`` sets ``logging.level``.
        Values are parsed as JSON when possible, otherwise kept as strings.
        """
        for name, raw_value in self._environ.items():
            if not name.startswith(ENV_PREFIX) or name == DEFAULT_CONFIG_ENV:
                continue
            path = [part.lower() for part in name[len(ENV_PREFIX):].split("__") if part]
            if not path:
                continue
            self._set_nested_value(config, path, _parse_env_value(raw_value))
        return config

    def expand_variables(self, value: Any) -> Any:
        """Expand environment variable references in every string value."""
        if isinstance(value, str):
            return _VARIABLE_PATTERN.sub(self._replace_variable, value)
        if isinstance(value, dict):
            return {k: self.expand_variables(v) for k, v in value.items()}
        if isinstance(value, list):
            return [self.expand_variables(v) for v in value]
        return value

    def _replace_variable(self, match: "re.Match[str]") -> str:
        name = match.group(1) or match.group(3)
        default = match.group(2)
        if name in self._environ:
            return self._environ[name]
        if default is not None:
            return default
        # unknown variables without a default stay as written
        return match.group(0)

    @staticmethod
    def _set_nested_value(config: Dict[str, Any], path: list, value: Any) -> None:
        current = config
        for key in path[:-1]:
            if not isinstance(current.get(key), dict):
                current[key] = {}
            current = current[key]
        current[path[-1]] = value


def _parse_env_value(raw_value: str) -> Any:
    try:
        return json.loads(raw_value)
    except ValueError:
        return raw_value
