"""Logging setup: stdlib handlers rendered through structlog."""
import logging
import os
from logging.handlers import RotatingFileHandler
from typing import List, Optional

import structlog

from provisioning_core.config.schemas.logging_schema import LoggingConfig

ROOT_LOGGER_NAME = "provisioning_core"

_SHARED_PROCESSORS = [
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.stdlib.PositionalArgumentsFormatter(),
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
]


def _build_formatter(config: LoggingConfig) -> structlog.stdlib.ProcessorFormatter:
    if config.format == "json":
        renderer = structlog.processors.JSONRenderer()
        processors = [
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            renderer,
        ]
    else:
        processors = [
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.dev.ConsoleRenderer(colors=False),
        ]
    return structlog.stdlib.ProcessorFormatter(
        processors=processors,
        foreign_pre_chain=_SHARED_PROCESSORS,
    )


def _build_handlers(config: LoggingConfig) -> List[logging.Handler]:
    handlers: List[logging.Handler] = []
    if config.destination in ("file", "both"):
        log_path = os.path.expandvars(config.file.path)
        log_dir = os.path.dirname(log_path)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        handlers.append(RotatingFileHandler(
            log_path,
            maxBytes=config.file.max_size_mb * 1024 * 1024,
            backupCount=config.file.backup_count,
        ))
    if config.destination in ("stdout", "both"):
        handlers.append(logging.StreamHandler())
    return handlers


def setup_logging(config: Optional[LoggingConfig] = None) -> logging.Logger:
    """
    Set up logging for the package.

    Records from both stdlib loggers and structlog loggers end up in the
    same handlers and are rendered by structlog, as console text or JSON.

    Args:
        config: Logging configuration, defaults to LoggingConfig()

    Returns:
        The package root logger
    """
    config = config or LoggingConfig()
    formatter = _build_formatter(config)

    package_logger = logging.getLogger(ROOT_LOGGER_NAME)
    package_logger.setLevel(getattr(logging, config.level))
    for handler in package_logger.handlers[:]:
        package_logger.removeHandler(handler)
        handler.close()
    for handler in _build_handlers(config):
        handler.setFormatter(formatter)
        package_logger.addHandler(handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *_SHARED_PROCESSORS,
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    package_logger.debug(
        "Logging configured: level=%s destination=%s format=%s",
        config.level, config.destination, config.format,
    )
    return package_logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger below the package root logger.

    Args:
        name: Logger name, usually ``__name__``

    Returns:
        Standard library logger
    """
    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)
