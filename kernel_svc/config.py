# File: kernel_svc/config.py

"""
Configuration for kernel-svc models and scripts.

``KernelSVCConfig`` holds estimator hyperparameters; ``DEFAULT_CONFIG`` is the
nested dictionary used by the training script, which ``load_config`` merges a
JSON file into.
"""

import copy
import json
import os
from dataclasses import dataclass, asdict, fields
from typing import Any, Dict, Optional


@dataclass
class KernelSVCConfig:

    reg_param: float = 1.0
    max_iter: int = 1000
    probability: bool = False
    n_jobs: Optional[int] = None
    random_state: Optional[int] = None
    calibration_max_iter: int = 100
    calibration_min_step: float = 1e-10
    calibration_sigma: float = 1e-12

    @classmethod
    def from_dict(cls, params: Dict[str, Any]) -> 'KernelSVCConfig':
        """Build a config, ignoring keys that are not hyperparameters."""
        known = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in params.items() if key in known})

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


DEFAULT_CONFIG = {
    'model': KernelSVCConfig(random_state=1).to_dict(),
    'dataset': {
        'n_samples': 300,
        'centers': [[0.0, 5.0], [-5.0, -5.0], [5.0, -5.0]],
        'cluster_std': 0.5,
        'test_size': 0.2,
        'random_state': 1
    },
    'kernel': {
        'gamma': 1.0
    },
    'logging': {
        'level': 'INFO',
        'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    },
    'model_save_dir': 'models'
}


def _deep_update(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _deep_update(base[key], value)
        else:
            base[key] = value
    return base


def get_default_config() -> Dict[str, Any]:
    return copy.deepcopy(DEFAULT_CONFIG)


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load a JSON configuration merged over ``DEFAULT_CONFIG``.

    Args:
        path: JSON file; the defaults are returned when None

    Returns:
        Nested configuration dictionary
    """
    config = get_default_config()
    if path is None:
        return config
    if not os.path.exists(path):
        raise FileNotFoundError(f"Configuration file not found: {path}")
    with open(path, 'r', encoding='utf-8') as fh:
        overrides = json.load(fh)
    if not isinstance(overrides, dict):
        raise ValueError(f"Configuration file {path} must contain a JSON object")
    return _deep_update(config, overrides)
