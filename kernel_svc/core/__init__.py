# File: kernel_svc/core/__init__.py

"""
Core Algorithms
===============

- KernelSVC: one-vs-rest kernel SVC estimator
- train_binary: kernel Pegasos trainer for one binary sub-problem
- fit_sigmoid: Platt scaling by damped Newton's method
- IndexPool: without-replacement index sampler
"""

from .kernel_svc import KernelSVC, ProblemKind, Calibration
from .pegasos import train_binary, PegasosResult
from .calibration import fit_sigmoid, newton_sigmoid_fit, sigmoid_proba, SigmoidFit
from .sampler import IndexPool, make_seed_sequence, spawn_seeds, derive_generator

__all__ = [
    'KernelSVC',
    'ProblemKind',
    'Calibration',
    'train_binary',
    'PegasosResult',
    'fit_sigmoid',
    'newton_sigmoid_fit',
    'sigmoid_proba',
    'SigmoidFit',
    'IndexPool',
    'make_seed_sequence',
    'spawn_seeds',
    'derive_generator',
]
