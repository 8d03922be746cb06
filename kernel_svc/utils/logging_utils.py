# File: kernel_svc/utils/logging_utils.py

"""
Logging helpers for kernel-svc.

Library modules only ask for named loggers through ``get_logger``; handlers are
attached by applications (scripts, notebooks, tests) through ``setup_logger``.
"""

import os
import logging
from typing import Any, Dict, Optional, Union

DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def get_logger(name: str) -> logging.Logger:
    """Return the named logger without touching its handlers."""
    return logging.getLogger(name)


def setup_logger(name: str, log_dir: Optional[str] = None,
                 level: Union[str, int] = 'INFO',
                 fmt: str = DEFAULT_FORMAT) -> logging.Logger:
    """
    Configure a logger with a console handler and an optional file handler.

    Args:
        name: Logger name
        log_dir: Directory for ``<name>.log``; no file handler when None
        level: Logging level name or number
        fmt: Format string for both handlers

    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)
    logger.setLevel(level)

    # Calling twice must not duplicate output
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(fmt)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_dir is not None:
        os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.FileHandler(os.path.join(log_dir, f"{name}.log"), encoding='utf-8')
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.propagate = False
    return logger


def log_performance_metrics(logger: logging.Logger, metrics: Dict[str, Any],
                            prefix: str = "") -> None:
    """Write one INFO line per metric."""
    for name, value in metrics.items():
        label = f"{prefix}{name}" if prefix else name
        if isinstance(value, float):
            logger.info(f"{label}: {value:.4f}")
        else:
            logger.info(f"{label}: {value}")
