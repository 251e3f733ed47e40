import json

import pytest
import yaml

from provisioning_core.config import (
    AppConfig,
    AWSProviderConfig,
    ConfigurationLoader,
    ConfigurationManager,
    LoggingConfig,
    PollPeriodConfig,
    TemplateConfig,
    TimeoutsConfig,
)
from provisioning_core.config.loader import deep_update
from provisioning_core.domain.core import ConfigurationError
from provisioning_core.infrastructure.exceptions import ConfigurationLoadError


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.yml"
    path.write_text(yaml.safe_dump({
        "environment": "testing",
        "provider": {"aws": {"region": "eu-west-1", "profile": "${AWS_PROFILE:default}"}},
        "template": {"image_cache_ttl": 30, "default_template": {"os_family": "ubuntu"}},
        "logging": {"file": {"path": "$LOG_DIR/core.log"}},
    }))
    return str(path)


def manager(config_file=None, **environ):
    return ConfigurationManager(config_file, loader=ConfigurationLoader(environ=environ))


def test_defaults_without_file():
    app_config = manager().app_config

    assert app_config == AppConfig()
    assert app_config.template.image_cache_ttl == 60
    assert app_config.polling.period.initial_period == 5.0


def test_yaml_file(config_file):
    config = manager(config_file, LOG_DIR="/var/log/core")

    assert config.get_typed(AWSProviderConfig).region == "eu-west-1"
    assert config.get_typed(AWSProviderConfig).profile == "default"
    assert config.get_typed(TemplateConfig).default_template.os_family == "ubuntu"
    assert config.get_typed(LoggingConfig).file.path == "/var/log/core/core.log"
    assert config.get("template.image_cache_ttl") == 30
    assert config.get("template.missing", "fallback") == "fallback"


def test_json_file_from_environment(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"polling": {"timeouts": {"node_running": 60}}}))

    config = manager(PROVISIONING_CORE_CONFIG=str(path))

    assert config.get_typed(TimeoutsConfig).node_running == 60


def test_environment_overrides(config_file):
    config = manager(
        config_file,
        PROVISIONING_CORE_TEMPLATE__IMAGE_CACHE_TTL="5",
        PROVISIONING_CORE_PROVIDER__AWS__REGIONS='["us-west-2"]',
        PROVISIONING_CORE_LOGGING__LEVEL="debug",
    )

    assert config.get_typed(TemplateConfig).image_cache_ttl == 5
    assert config.get_typed(AWSProviderConfig).all_regions() == ["eu-west-1", "us-west-2"]
    assert config.get_typed(LoggingConfig).level == "DEBUG"


def test_unknown_variables_kept():
    loader = ConfigurationLoader(environ={"KNOWN": "yes"})

    assert loader.expand_variables({"a": ["$KNOWN", "${UNKNOWN}", "${UNKNOWN:fallback}"]}) == {
        "a": ["yes", "${UNKNOWN}", "fallback"]
    }


def test_invalid_values_raise_configuration_error():
    config = manager(PROVISIONING_CORE_ENVIRONMENT="nowhere")

    with pytest.raises(ConfigurationError) as exc:
        config.app_config
    assert "Invalid configuration" in str(exc.value)


def test_poll_period_validation():
    with pytest.raises(ValueError):
        PollPeriodConfig(initial_period=10, max_period=5)


def test_unreadable_file(tmp_path):
    path = tmp_path / "broken.yml"
    path.write_text("provider: [unclosed")

    with pytest.raises(ConfigurationLoadError):
        manager(str(path)).app_config

    with pytest.raises(ConfigurationLoadError):
        manager(str(tmp_path / "absent.json")).app_config


def test_unknown_section_class():
    with pytest.raises(ConfigurationError):
        manager().get_typed(dict)


def test_reload(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"environment": "staging"}))
    config = manager(str(path))
    assert config.app_config.environment == "staging"

    path.write_text(json.dumps({"environment": "production"}))
    config.reload()

    assert config.app_config.environment == "production"


def test_deep_update_merges_nested_mappings():
    target = {"a": {"b": 1, "c": 2}, "d": [1]}

    deep_update(target, {"a": {"b": 3}, "d": [2]})

    assert target == {"a": {"b": 3, "c": 2}, "d": [2]}
