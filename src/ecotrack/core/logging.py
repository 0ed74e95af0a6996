"""
Logging configuration.

The packaged `ecotrack/config/logging.yaml` describes handlers and formatters; the
effective level comes from settings (`ECOTRACK_LOG_LEVEL`) unless a caller such as
the CLI passes one explicitly.
"""

from __future__ import annotations

import copy
import logging.config

from ecotrack.config.settings import get_logging_config, get_settings


def configure_logging(level: str | None = None) -> str:
    """Apply the packaged logging config and return the level that was used."""
    effective = (level or get_settings().app.log_level).upper()
    # get_logging_config() is cached; never mutate the shared copy.
    config = copy.deepcopy(get_logging_config())

    config.setdefault("root", {})["level"] = effective
    for handler in config.get("handlers", {}).values():
        if isinstance(handler, dict) and "level" in handler:
            handler["level"] = effective
    for logger_cfg in config.get("loggers", {}).values():
        if isinstance(logger_cfg, dict) and logger_cfg.get("level") == "INHERIT":
            logger_cfg["level"] = effective

    logging.config.dictConfig(config)
    return effective
