"""Logging configuration helpers for blsagg."""
from __future__ import annotations

import logging
import os
from typing import Any, Optional

_DEFAULT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
_DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"

_PROJECT_LOGGERS = ["blsagg", "instantiations", "bench"]
_THIRD_PARTY_LOGGERS = ["py_ecc", "matplotlib", "PIL", "numpy", "pandas"]


def _coerce_level(level: Optional[Any]) -> int:
    """Translate a human readable level into the logging module's numeric level."""
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        numeric = getattr(logging, level.strip().upper(), None)
        if isinstance(numeric, int):
            return numeric
    env_default = os.environ.get("BLSAGG_LOG_LEVEL", "INFO").strip().upper()
    return getattr(logging, env_default, logging.INFO)


def configure(logging_settings: Optional[Any] = None) -> None:
    """Install a console handler and set blsagg loggers to the configured level.

    Safe to call repeatedly; existing root handlers are replaced.
    """
    level = fmt = datefmt = None
    if logging_settings is not None:
        if isinstance(logging_settings, dict):
            level = logging_settings.get("level")
            fmt = logging_settings.get("format")
            datefmt = logging_settings.get("datefmt")
        else:
            level = getattr(logging_settings, "level", None)
            fmt = getattr(logging_settings, "format", None)
            datefmt = getattr(logging_settings, "datefmt", None)

    level = _coerce_level(level)
    formatter = logging.Formatter(fmt or _DEFAULT_FORMAT, datefmt or _DEFAULT_DATEFMT)

    root_logger = logging.getLogger()
    root_logger.setLevel(max(logging.WARNING, level))
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    for name in _PROJECT_LOGGERS:
        logging.getLogger(name).setLevel(level)
    for name in _THIRD_PARTY_LOGGERS:
        logging.getLogger(name).setLevel(max(logging.WARNING, level))

    logging.captureWarnings(True)
