# File: kernel_svc/__init__.py

"""
kernel-svc: Pegasos Kernel Support Vector Classifier
====================================================

A kernel SVC trained by stochastic sub-gradient (Pegasos) steps on a
precomputed kernel matrix, with one-vs-rest multiclass support and optional
Platt-scaled probabilities.

Main Components:
---------------
- KernelSVC estimator (core.kernel_svc)
- Pegasos binary trainer (core.pegasos)
- Platt calibrator (core.calibration)
- Deterministic sampler (core.sampler)

Usage Example:
--------------
>>> from sklearn.metrics.pairwise import rbf_kernel
>>> from kernel_svc import KernelSVC

>>> model = KernelSVC(reg_param=1.0, max_iter=1000, probability=True, random_state=1)
>>> model.fit(rbf_kernel(X_train, gamma=1.0), y_train)
>>> probs = model.predict_proba(rbf_kernel(X_test, X_train, gamma=1.0))

"""

__version__ = "1.0.0"
__license__ = "MIT"

from .core.kernel_svc import KernelSVC
from .core.pegasos import train_binary
from .core.calibration import fit_sigmoid, sigmoid_proba
from .core.sampler import IndexPool
from .config import KernelSVCConfig, DEFAULT_CONFIG, load_config
from .utils.logging_utils import setup_logger

__all__ = [
    'KernelSVC',
    'train_binary',
    'fit_sigmoid',
    'sigmoid_proba',
    'IndexPool',
    'KernelSVCConfig',
    'DEFAULT_CONFIG',
    'load_config',
    'setup_logger',
    'create_default_model',
    '__version__',
]


def create_default_model(**kwargs) -> KernelSVC:
    """
    Create a KernelSVC with the default model configuration.

    Args:
        **kwargs: Overrides for individual hyperparameters

    Returns:
        Unfitted KernelSVC
    """
    params = dict(DEFAULT_CONFIG['model'])
    params.update(kwargs)
    return KernelSVC.from_config(KernelSVCConfig.from_dict(params))
