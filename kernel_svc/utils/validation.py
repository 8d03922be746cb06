# File: kernel_svc/utils/validation.py

"""
Input checks shared by the trainer, the calibrator and the estimator.

Every check raises ``ValueError`` so callers can fail before any optimizer
state is allocated.
"""

import numbers
import numpy as np
from typing import Any, Optional

from sklearn.utils import check_array


def check_kernel_matrix(kernel_mat: Any, square: bool = False) -> np.ndarray:
    """Convert a kernel matrix to a dense 2-D float64 array."""
    kernel_mat = check_array(kernel_mat, dtype=np.float64, ensure_2d=True)
    if square and kernel_mat.shape[0] != kernel_mat.shape[1]:
        raise ValueError(
            f"Training kernel matrix must be square, got shape {kernel_mat.shape}"
        )
    return kernel_mat


def check_label_vector(y: Any) -> np.ndarray:
    y = np.asarray(y)
    if y.ndim != 1:
        raise ValueError(f"Label array is expected to be 1-D, got {y.ndim}-D")
    if y.shape[0] == 0:
        raise ValueError("Label array must not be empty")
    return y


def check_sample_size(kernel_mat: np.ndarray, y: np.ndarray) -> None:
    if kernel_mat.shape[0] != y.shape[0]:
        raise ValueError(
            "Kernel matrix and label array are expected to have the same number of samples "
            f"({kernel_mat.shape[0]} != {y.shape[0]})"
        )


def check_test_kernel(kernel_mat: Any, n_training_samples: int) -> np.ndarray:
    """Validate a test-vs-train kernel matrix against the training size."""
    kernel_mat = check_kernel_matrix(kernel_mat)
    if kernel_mat.shape[1] != n_training_samples:
        raise ValueError(
            f"Kernel matrix has {kernel_mat.shape[1]} columns, "
            f"but the model was fitted on {n_training_samples} training samples"
        )
    return kernel_mat


def check_binary_labels(bin_y: Any) -> np.ndarray:
    bin_y = np.asarray(bin_y)
    if bin_y.ndim != 1:
        raise ValueError(f"Binary label array is expected to be 1-D, got {bin_y.ndim}-D")
    if not np.all(np.isin(bin_y, (-1, 1))):
        raise ValueError("Binary labels must take values in {-1, +1}")
    return bin_y.astype(np.int64)


def check_positive(**params: Any) -> None:
    for name, value in params.items():
        if isinstance(value, bool) or not isinstance(value, numbers.Real):
            raise ValueError(f"{name} must be a real number, got {value!r}")
        if not value > 0:
            raise ValueError(f"{name} must be positive, got {value!r}")


def check_positive_int(**params: Any) -> None:
    for name, value in params.items():
        if isinstance(value, bool) or not isinstance(value, numbers.Integral):
            raise ValueError(f"{name} must be an integer, got {value!r}")
        if value < 1:
            raise ValueError(f"{name} must be at least 1, got {value!r}")


def check_boolean(**params: Any) -> None:
    for name, value in params.items():
        if not isinstance(value, (bool, np.bool_)):
            raise ValueError(f"{name} must be a boolean, got {value!r}")


def check_n_jobs(n_jobs: Optional[int]) -> None:
    if n_jobs is None:
        return
    if isinstance(n_jobs, bool) or not isinstance(n_jobs, numbers.Integral):
        raise ValueError(f"n_jobs must be an integer or None, got {n_jobs!r}")


def check_seed(random_state: Optional[int]) -> None:
    if random_state is None:
        return
    if isinstance(random_state, bool) or not isinstance(random_state, numbers.Integral):
        raise ValueError(f"random_state must be a non-negative integer or None, got {random_state!r}")
    if random_state < 0:
        raise ValueError(f"random_state must be non-negative, got {random_state!r}")
