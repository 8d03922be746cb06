# File: kernel_svc/core/pegasos.py

"""
Kernel Pegasos trainer for a single binary sub-problem.

The trainer walks the training set in random passes and counts how often each
point violates the margin. The counts are the dual coefficients; the signed
weight used at prediction time is ``alpha * bin_y``. Existing coefficients are
never shrunk between steps.

Reference:
    Shalev-Shwartz, S., Singer, Y., Srebro, N., and Cotter, A., "Pegasos: Primal
    Estimated sub-GrAdient SOlver for SVM," Mathematical Programming, 127 (1),
    pp. 3--30, 2011.
"""

import numpy as np
from dataclasses import dataclass
from typing import Optional

from .sampler import IndexPool
from ..utils.logging_utils import get_logger
from ..utils.validation import (
    check_kernel_matrix, check_binary_labels, check_sample_size,
    check_positive, check_positive_int
)

logger = get_logger(__name__)


@dataclass
class PegasosResult:
    """Output of one binary training run."""
    alpha: np.ndarray
    weight: np.ndarray
    n_updates: int = 0
    n_passes: int = 0


def train_binary(kernel_mat: np.ndarray, bin_y: np.ndarray, reg_param: float = 1.0,
                 max_iter: int = 1000, rng: Optional[np.random.Generator] = None,
                 validate: bool = True) -> PegasosResult:
    """
    Run the margin-violation counting loop on one binary problem.

    Args:
        kernel_mat: Square training kernel matrix, shape (n, n)
        bin_y: Labels in {-1, +1}, shape (n,)
        reg_param: Regularization strength, > 0
        max_iter: Number of sampled points, >= 1
        rng: Generator owned by this sub-problem
        validate: Skip input checks when the caller already ran them

    Returns:
        PegasosResult with integer counts ``alpha`` and float ``weight``
    """
    if validate:
        kernel_mat = check_kernel_matrix(kernel_mat, square=True)
        bin_y = check_binary_labels(bin_y)
        check_sample_size(kernel_mat, bin_y)
        check_positive(reg_param=reg_param)
        check_positive_int(max_iter=max_iter)

    if rng is None:
        rng = np.random.default_rng()

    n_samples = kernel_mat.shape[0]
    signs = bin_y.astype(np.float64)
    alpha = np.zeros(n_samples, dtype=np.int64)
    # alpha * bin_y, kept in sync with alpha
    weight = np.zeros(n_samples, dtype=np.float64)
    pool = IndexPool(n_samples, rng)
    n_updates = 0

    for t in range(max_iter):
        target = pool.next_index()
        margin = np.dot(weight, kernel_mat[target])
        margin *= signs[target] / (reg_param * (t + 1))
        if margin < 1.0:
            alpha[target] += 1
            weight[target] += signs[target]
            n_updates += 1

    logger.debug(f"Pegasos finished: {n_updates}/{max_iter} margin updates "
                 f"over {pool.n_refills} passes")

    return PegasosResult(alpha=alpha, weight=alpha * signs,
                         n_updates=n_updates, n_passes=pool.n_refills)
