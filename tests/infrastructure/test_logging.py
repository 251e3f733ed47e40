import json
import logging

import pytest

from provisioning_core.config.schemas import LogFileConfig, LoggingConfig
from provisioning_core.infrastructure.adapters import LoggingAdapter
from provisioning_core.infrastructure.logging import ROOT_LOGGER_NAME, get_logger, setup_logging


@pytest.fixture(autouse=True)
def reset_package_logger():
    yield
    package_logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in package_logger.handlers[:]:
        package_logger.removeHandler(handler)
        handler.close()
    package_logger.setLevel(logging.NOTSET)


def test_get_logger_prefixes_package_name():
    assert get_logger("template").name == "provisioning_core.template"
    assert get_logger("provisioning_core.config").name == "provisioning_core.config"
    assert get_logger(ROOT_LOGGER_NAME).name == ROOT_LOGGER_NAME


def test_json_file_logging(tmp_path):
    log_file = tmp_path / "logs" / "core.log"
    config = LoggingConfig(level="debug", destination="file", format="json",
                           file=LogFileConfig(path=str(log_file)))

    package_logger = setup_logging(config)
    get_logger("template").info("Resolved template %s", "[image=img-1]")
    for handler in package_logger.handlers:
        handler.flush()

    records = [json.loads(line) for line in log_file.read_text().splitlines()]
    resolved = records[-1]
    assert resolved["event"] == "Resolved template [image=img-1]"
    assert resolved["level"] == "info"
    assert resolved["logger"] == "provisioning_core.template"
    assert "timestamp" in resolved


def test_level_filters_records(tmp_path):
    log_file = tmp_path / "core.log"
    config = LoggingConfig(level="WARNING", destination="file", format="console",
                           file=LogFileConfig(path=str(log_file)))

    setup_logging(config)
    get_logger("poller").info("not written")
    get_logger("poller").warning("written")

    text = log_file.read_text()
    assert "written" in text
    assert "not written" not in text


def test_setup_replaces_handlers(tmp_path):
    config = LoggingConfig(destination="both", file=LogFileConfig(path=str(tmp_path / "core.log")))

    setup_logging(config)
    package_logger = setup_logging(config)

    assert len(package_logger.handlers) == 2


def test_adapter_reports_caller(caplog):
    adapter = LoggingAdapter("adapter-test")

    with caplog.at_level(logging.DEBUG, logger="provisioning_core.adapter-test"):
        adapter.debug("searching %s", "params")

    record = caplog.records[-1]
    assert record.getMessage() == "searching params"
    assert record.funcName == "test_adapter_reports_caller"


def test_invalid_logging_config():
    with pytest.raises(ValueError):
        LoggingConfig(format="xml")
