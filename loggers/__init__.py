# -*- coding: utf-8 -*-
"""
MEREC Logging Package
=====================

Two channels:
  * the stdlib ``logging`` hierarchy under ``merec``, configured by the
    host application (``setup_logger`` is a convenience, never called by
    the library itself)
  * **Diagnostics**: a per-call sink returning warnings as data

Usage::

    from loggers import Diagnostics
    diag = Diagnostics()
    weights = compute_merec_weights(matrix, types, diagnostics=diag)
    diag.warnings
"""

import logging
from typing import Optional, Union

from .context import LogContext, StageMetrics
from .diagnostics import Diagnostics, report
from .decorators import log_execution, log_exceptions, log_context, timed_stage

LOG_NAME = 'merec'


def setup_logger(
    name: str = LOG_NAME,
    level: Union[int, str] = logging.WARNING,
    fmt: Optional[str] = None,
    datefmt: Optional[str] = None,
) -> logging.Logger:
    """Attach a single stream handler to the ``merec`` logger.

    Calling it again only updates the level and formatter of the handler
    installed the first time.
    """
    from config import get_config
    log_cfg = get_config().logging
    logger = logging.getLogger(name)
    logger.setLevel(level)

    formatter = logging.Formatter(fmt or log_cfg.format,
                                  datefmt or log_cfg.date_format)
    handler = next((h for h in logger.handlers
                    if getattr(h, '_merec_handler', False)), None)
    if handler is None:
        handler = logging.StreamHandler()
        handler._merec_handler = True
        logger.addHandler(handler)
    handler.setFormatter(formatter)
    return logger


def get_logger(name: str = LOG_NAME) -> logging.Logger:
    return logging.getLogger(name)


def get_module_logger(module_name: str) -> logging.Logger:
    return logging.getLogger(f'{LOG_NAME}.{module_name}')


__all__ = [
    # Primary API
    'Diagnostics',
    'report',
    'setup_logger',
    'get_logger',
    'get_module_logger',

    # Context & metrics
    'LogContext',
    'StageMetrics',

    # Decorators & context managers
    'log_execution',
    'log_exceptions',
    'log_context',
    'timed_stage',
]
