# File: kernel_svc/core/calibration.py

"""
Platt scaling for SVM decision values.

Fits ``P(positive | f) = 1 / (1 + exp(A * f + B))`` by Newton's method with a
ridge-regularized Hessian and backtracking line search, following Lin, Lin and
Weng's numerically stable formulation.

References:
    Platt, J. C., "Probabilistic Outputs for Support Vector Machines and
    Comparisons to Regularized Likelihood Methods," Advances in Large Margin
    Classifiers, pp. 61--74, 2000.
    Lin, H.-T., Lin, C.-J., and Weng, R. C., "A Note on Platt's Probabilistic
    Outputs for Support Vector Machines," Machine Learning, 68 (3),
    pp. 267--276, 2007.
"""

import numpy as np
from dataclasses import dataclass
from typing import Tuple

from scipy.special import expit

from ..utils.logging_utils import get_logger

logger = get_logger(__name__)

GRADIENT_TOL = 1e-5
ARMIJO_COEF = 1e-4

STOP_GRADIENT = 'gradient'
STOP_STALLED = 'stalled'
STOP_LINE_SEARCH = 'line_search'
STOP_MAX_ITER = 'max_iter'


@dataclass
class SigmoidFit:
    """Fitted sigmoid parameters plus solver diagnostics."""
    alpha: float
    beta: float
    n_iter: int = 0
    converged: bool = False
    stop_reason: str = STOP_MAX_ITER
    error: float = float('nan')

    @property
    def params(self) -> np.ndarray:
        return np.array([self.alpha, self.beta], dtype=np.float64)


def _target_probs(bin_y: np.ndarray) -> Tuple[np.ndarray, int, int]:
    negative_label = bin_y.min()
    pos = bin_y != negative_label
    n_pos = int(np.count_nonzero(pos))
    n_neg = bin_y.shape[0] - n_pos
    targets = np.where(pos, (n_pos + 1) / (n_pos + 2.0), 1.0 / (n_neg + 2.0))
    return targets, n_pos, n_neg


def _error_function(targets: np.ndarray, df: np.ndarray, alpha: float, beta: float) -> float:
    """Negative log-likelihood, split on the sign of A*f+B."""
    fn = alpha * df + beta
    pos = fn >= 0.0
    neg = ~pos
    err = 0.0
    if pos.any():
        err += np.sum(targets[pos] * fn[pos] + np.log1p(np.exp(-fn[pos])))
    if neg.any():
        err += np.sum((targets[neg] - 1.0) * fn[neg] + np.log1p(np.exp(fn[neg])))
    return float(err)


def _predicted_probs(df: np.ndarray, alpha: float, beta: float) -> np.ndarray:
    fn = alpha * df + beta
    pos = fn >= 0.0
    neg = ~pos
    probs = np.zeros(df.shape[0], dtype=np.float64)
    if pos.any():
        exp_fn = np.exp(-fn[pos])
        probs[pos] = exp_fn / (1.0 + exp_fn)
    if neg.any():
        probs[neg] = 1.0 / (1.0 + np.exp(fn[neg]))
    return probs


def _gradient(targets: np.ndarray, probs: np.ndarray, df: np.ndarray) -> np.ndarray:
    sub = targets - probs
    return np.array([np.sum(df * sub), np.sum(sub)])


def _hessian(probs: np.ndarray, df: np.ndarray, sigma: float) -> np.ndarray:
    sub = probs * (1.0 - probs)
    h11 = np.sum(df ** 2 * sub) + sigma
    h22 = np.sum(sub) + sigma
    h21 = np.sum(df * sub)
    return np.array([[h11, h21], [h21, h22]])


def _newton_direction(grad: np.ndarray, hess: np.ndarray) -> np.ndarray:
    det = hess[0, 0] * hess[1, 1] - hess[0, 1] * hess[1, 0]
    inv_hess = np.array([[hess[1, 1], -hess[0, 1]],
                         [-hess[1, 0], hess[0, 0]]]) / det
    return -inv_hess.dot(grad)


def newton_sigmoid_fit(df: np.ndarray, bin_y: np.ndarray, max_iter: int = 100,
                       min_step: float = 1e-10, sigma: float = 1e-12) -> SigmoidFit:
    """
    Fit Platt's sigmoid and report how the solver stopped.

    The negative class is the smallest value present in ``bin_y``. Running out
    of iterations or line-search steps is not an error; the last accepted
    parameters are returned.

    Args:
        df: Decision values, shape (n,)
        bin_y: Binary labels, shape (n,)
        max_iter: Maximum number of Newton iterations
        min_step: Smallest step size tried by the line search
        sigma: Ridge term added to the Hessian diagonal

    Returns:
        SigmoidFit
    """
    df = np.asarray(df, dtype=np.float64).ravel()
    bin_y = np.asarray(bin_y).ravel()
    if df.shape[0] != bin_y.shape[0]:
        raise ValueError(
            f"Decision values and labels differ in length ({df.shape[0]} != {bin_y.shape[0]})"
        )
    if df.shape[0] == 0:
        raise ValueError("Cannot calibrate on an empty set of decision values")

    targets, n_pos, n_neg = _target_probs(bin_y)
    alpha = 0.0
    beta = float(np.log((n_neg + 1) / (n_pos + 1.0)))
    err = _error_function(targets, df, alpha, beta)

    old_grad = np.zeros(2)
    stop_reason = STOP_MAX_ITER
    line_search_failed = False
    n_iter = 0

    for n_iter in range(1, max_iter + 1):
        probs = _predicted_probs(df, alpha, beta)
        grad = _gradient(targets, probs, df)
        hess = _hessian(probs, df, sigma)
        if np.all(np.abs(grad) < GRADIENT_TOL):
            stop_reason = STOP_GRADIENT
            break
        if np.sum(np.abs(old_grad - grad)) < GRADIENT_TOL:
            # An unchanged point after a failed line search stalls here too
            stop_reason = STOP_LINE_SEARCH if line_search_failed else STOP_STALLED
            break
        old_grad = grad

        direction = _newton_direction(grad, hess)
        grad_dir = grad.dot(direction)
        step = 2.0
        accepted = False
        while step >= min_step:
            step *= 0.5
            new_alpha = alpha + step * direction[0]
            new_beta = beta + step * direction[1]
            new_err = _error_function(targets, df, new_alpha, new_beta)
            if new_err < err + ARMIJO_COEF * step * grad_dir:
                alpha, beta, err = new_alpha, new_beta, new_err
                accepted = True
                break

        line_search_failed = not accepted
        if line_search_failed:
            logger.debug(f"Line search reached min_step={min_step} at iteration {n_iter}")

    converged = stop_reason in (STOP_GRADIENT, STOP_STALLED)
    logger.debug(f"Sigmoid fit stopped ({stop_reason}) after {n_iter} iterations: "
                 f"A={alpha:.6f}, B={beta:.6f}")

    return SigmoidFit(alpha=float(alpha), beta=float(beta), n_iter=n_iter,
                      converged=converged, stop_reason=stop_reason, error=err)


def fit_sigmoid(df: np.ndarray, bin_y: np.ndarray, max_iter: int = 100,
                min_step: float = 1e-10, sigma: float = 1e-12) -> np.ndarray:
    """Return Platt's ``[A, B]`` for the given decision values and labels."""
    return newton_sigmoid_fit(df, bin_y, max_iter=max_iter,
                              min_step=min_step, sigma=sigma).params


def sigmoid_proba(df: np.ndarray, params: np.ndarray) -> np.ndarray:
    """
    Probability of the positive class, ``1 / (1 + exp(A * df + B))``.

    ``params`` is either a pair ``[A, B]`` or an (n_classes, 2) matrix applied
    column-wise to an (n_samples, n_classes) score matrix.
    """
    params = np.asarray(params, dtype=np.float64)
    if params.ndim == 1:
        return expit(-(params[0] * df + params[1]))
    return expit(-(df * params[:, 0] + params[:, 1]))
