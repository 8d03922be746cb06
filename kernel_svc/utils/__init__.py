# File: kernel_svc/utils/__init__.py

"""
Utilities Module
================

Support utilities:
- LoggingUtils: logger setup and metric logging
- Validation: kernel matrix, label and hyperparameter checks
- Parallel: joblib-backed task map
"""

from .logging_utils import setup_logger, get_logger, log_performance_metrics
from .parallel import parallel_map

__all__ = [
    'setup_logger',
    'get_logger',
    'log_performance_metrics',
    'parallel_map',
]
