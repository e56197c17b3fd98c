"""
Logging utilities for ldapguard.

Every processor chain built here redacts credential fields, so a bind logged
with ``password=...`` never reaches the output in clear text.
"""

import logging
import sys
from typing import Any, List, Optional

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from ldapguard.utils.config import Config, get_config

REDACTED = "********"

SENSITIVE_KEYS = frozenset({
    "password",
    "admin_password",
    "bind_password",
    "credentials",
})


def redact_credentials(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """
    Replace the value of credential fields in an event dict.

    Matching is case-insensitive on the key. Empty values are left alone so
    a missing password is still visible as such.
    """
    for key in list(event_dict):
        if key.lower() in SENSITIVE_KEYS and event_dict[key]:
            event_dict[key] = REDACTED
    return event_dict


def build_processors(config: Config) -> List[Processor]:
    """
    Build the structlog processor chain for a configuration.

    Args:
        config: Configuration selecting the renderer

    Returns:
        Processors, ending with a JSON or console renderer
    """
    processors: List[Processor] = [
        structlog.contextvars.merge_contextvars,
        redact_credentials,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
    ]

    if config.log_format.lower() == "json":
        processors.extend([
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.JSONRenderer()
        ])
    else:
        processors.extend([
            structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S"),
            structlog.dev.ConsoleRenderer()
        ])

    return processors


def setup_logging(config: Optional[Config] = None) -> None:
    """
    Setup structured logging for ldapguard.

    Args:
        config: Configuration object (uses global config if None)
    """
    config = config or get_config()
    level = getattr(logging, config.log_level.upper())

    logging.basicConfig(
        level=level,
        format="%(message)s",
        stream=sys.stdout,
    )

    structlog.configure(
        processors=build_processors(config),
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.WriteLoggerFactory(),
        cache_logger_on_first_use=True,
    )


class LoggerMixin:
    """Mixin giving instances a logger bound to their class name."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._logger = structlog.get_logger(type(self).__module__).bind(
            component=type(self).__name__
        )

    @property
    def logger(self) -> structlog.BoundLogger:
        """Get the logger for this instance."""
        return self._logger


# Setup logging on import
setup_logging()
