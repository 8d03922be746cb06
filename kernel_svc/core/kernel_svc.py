# File: kernel_svc/core/kernel_svc.py
"""
Kernel Support Vector Classifier trained with kernel Pegasos.

The estimator consumes precomputed kernel matrices: ``fit`` takes the square
training Gram matrix and the prediction methods take the kernel between test
and training samples. Multiclass problems are decomposed one-vs-rest, with one
independently seeded Pegasos run per class. Optional Platt scaling turns the
decision values into class probabilities.

Example:
    >>> from sklearn.metrics.pairwise import rbf_kernel
    >>> model = KernelSVC(reg_param=1.0, max_iter=1000, random_state=1)
    >>> model.fit(rbf_kernel(X_train), y_train)
    >>> model.predict(rbf_kernel(X_test, X_train))

"""

import time
import numpy as np
from enum import Enum
from functools import partial
from typing import Any, List, Optional, Tuple

import joblib
from sklearn.base import BaseEstimator, ClassifierMixin
from sklearn.exceptions import NotFittedError
from sklearn.utils.metaestimators import available_if
from sklearn.utils.validation import check_is_fitted

from .pegasos import train_binary, PegasosResult
from .calibration import newton_sigmoid_fit, sigmoid_proba, SigmoidFit
from .sampler import make_seed_sequence, spawn_seeds
from ..config import KernelSVCConfig
from ..utils.logging_utils import get_logger
from ..utils.parallel import parallel_map
from ..utils.validation import (
    check_kernel_matrix, check_label_vector, check_sample_size, check_test_kernel,
    check_positive, check_positive_int, check_boolean, check_n_jobs, check_seed
)

logger = get_logger(__name__)


class ProblemKind(Enum):
    BINARY = 'binary'
    MULTICLASS = 'multiclass'


class Calibration(Enum):
    UNCALIBRATED = 'uncalibrated'
    CALIBRATED = 'calibrated'


def _fit_subproblem(kernel_mat: np.ndarray, settings: dict,
                    task: Tuple[np.ndarray, np.random.SeedSequence]
                    ) -> Tuple[PegasosResult, Optional[SigmoidFit]]:
    """Train (and optionally calibrate) one binary sub-problem."""
    bin_y, seed = task
    rng = np.random.default_rng(seed)
    result = train_binary(kernel_mat, bin_y, reg_param=settings['reg_param'],
                          max_iter=settings['max_iter'], rng=rng, validate=False)
    if not settings['probability']:
        return result, None

    sigmoid = newton_sigmoid_fit(kernel_mat.dot(result.weight), bin_y,
                                 max_iter=settings['calibration_max_iter'],
                                 min_step=settings['calibration_min_step'],
                                 sigma=settings['calibration_sigma'])
    return result, sigmoid


def _check_proba(estimator: 'KernelSVC') -> bool:
    if not estimator.probability:
        raise AttributeError("predict_proba is not available when probability=False")
    return True


class KernelSVC(ClassifierMixin, BaseEstimator):
    """
    Kernel SVC with Pegasos optimization on a precomputed kernel matrix.

    Args:
        reg_param: Regularization parameter (lambda), > 0
        max_iter: Number of Pegasos iterations per binary sub-problem
        probability: Fit Platt sigmoids for ``predict_proba``
        n_jobs: Workers for the one-vs-rest fan-out; None runs sequentially,
            zero or less uses every processor
        random_state: Seed for the owned random generator; None draws fresh entropy
        calibration_max_iter: Newton iterations for each sigmoid fit
        calibration_min_step: Smallest line-search step for each sigmoid fit
        calibration_sigma: Ridge term keeping the sigmoid Hessian invertible

    Reference:
        Shalev-Shwartz, S., Singer, Y., Srebro, N., and Cotter, A., "Pegasos:
        Primal Estimated sub-GrAdient SOlver for SVM," Mathematical
        Programming, 127 (1), pp. 3--30, 2011.
    """

    def __init__(self, reg_param: float = 1.0, max_iter: int = 1000,
                 probability: bool = False, n_jobs: Optional[int] = None,
                 random_state: Optional[int] = None,
                 calibration_max_iter: int = 100,
                 calibration_min_step: float = 1e-10,
                 calibration_sigma: float = 1e-12):

        self.reg_param = reg_param
        self.max_iter = max_iter
        self.probability = probability
        self.n_jobs = n_jobs
        self.random_state = random_state
        self.calibration_max_iter = calibration_max_iter
        self.calibration_min_step = calibration_min_step
        self.calibration_sigma = calibration_sigma

    @classmethod
    def from_config(cls, config: KernelSVCConfig) -> 'KernelSVC':
        return cls(**config.to_dict())

    def _validate_params(self) -> None:
        check_positive(reg_param=self.reg_param,
                       calibration_min_step=self.calibration_min_step,
                       calibration_sigma=self.calibration_sigma)
        check_positive_int(max_iter=self.max_iter,
                           calibration_max_iter=self.calibration_max_iter)
        check_boolean(probability=self.probability)
        check_n_jobs(self.n_jobs)
        check_seed(self.random_state)

    def _settings(self) -> dict:
        return {
            'reg_param': self.reg_param,
            'max_iter': self.max_iter,
            'probability': bool(self.probability),
            'calibration_max_iter': self.calibration_max_iter,
            'calibration_min_step': self.calibration_min_step,
            'calibration_sigma': self.calibration_sigma,
        }

    def fit(self, X: Any, y: Any) -> 'KernelSVC':
        """
        Fit the model on a training kernel matrix.

        Args:
            X: Training kernel matrix, shape (n_samples, n_samples)
            y: Class labels, shape (n_samples,)

        Returns:
            The fitted classifier
        """
        try:
            self._validate_params()
            X = check_kernel_matrix(X, square=True)
            y = check_label_vector(y)
            check_sample_size(X, y)

            start_time = time.time()
            classes = np.unique(y)
            n_classes = classes.shape[0]
            n_samples = X.shape[0]
            logger.info(f"Training KernelSVC on {n_samples} samples, {n_classes} classes")

            kind = ProblemKind.BINARY if n_classes <= 2 else ProblemKind.MULTICLASS
            calibration = Calibration.CALIBRATED if self.probability else Calibration.UNCALIBRATED

            if kind is ProblemKind.BINARY:
                # The smallest label is the negative class
                bin_ys = [np.where(y != classes[0], 1, -1)]
            else:
                bin_ys = [np.where(y == label, 1, -1) for label in classes]

            root = make_seed_sequence(self.random_state)
            seeds = spawn_seeds(root, len(bin_ys))

            results = parallel_map(partial(_fit_subproblem, X, self._settings()),
                                   list(zip(bin_ys, seeds)), n_jobs=self.n_jobs)

            self._assemble(results, kind, calibration)

            self.classes_ = classes
            self.n_features_in_ = n_samples
            self.problem_kind_ = kind
            self.calibration_ = calibration
            self.seed_ = root.entropy
            self.rng_ = np.random.default_rng(root)
            self.n_iter_ = self.max_iter
            self.training_time_ = time.time() - start_time
            self.is_fitted_ = True

            logger.info(f"KernelSVC training completed in {self.training_time_:.2f}s")
            return self

        except Exception as e:
            logger.error(f"Training failed for {self.__class__.__name__}: {str(e)}")
            raise

    def _assemble(self, results: List[Tuple[PegasosResult, Optional[SigmoidFit]]],
                  kind: ProblemKind, calibration: Calibration) -> None:
        """Stack per-class results in class order."""
        for n, (result, sigmoid) in enumerate(results):
            logger.debug(f"Sub-problem {n}: {result.n_updates} updates"
                         + (f", sigmoid stop={sigmoid.stop_reason}" if sigmoid else ""))

        if kind is ProblemKind.BINARY:
            result, sigmoid = results[0]
            self.weight_vec_ = result.weight
            self.dual_coef_ = result.alpha
            sigmoids = [sigmoid]
        else:
            self.weight_vec_ = np.vstack([result.weight for result, _ in results])
            self.dual_coef_ = np.vstack([result.alpha for result, _ in results])
            sigmoids = [sigmoid for _, sigmoid in results]

        if calibration is Calibration.CALIBRATED:
            params = np.vstack([sigmoid.params for sigmoid in sigmoids])
            self.prob_param_ = params[0] if kind is ProblemKind.BINARY else params
            self.calibration_info_ = sigmoids
        else:
            self.prob_param_ = None
            self.calibration_info_ = []

    def decision_function(self, X: Any) -> np.ndarray:
        """
        Confidence scores for test samples.

        Args:
            X: Kernel matrix between test and training samples,
                shape (n_samples, n_training_samples)

        Returns:
            Shape (n_samples,) for binary problems, (n_samples, n_classes) otherwise
        """
        check_is_fitted(self, 'weight_vec_')
        try:
            X = check_test_kernel(X, self.n_features_in_)
            return X.dot(self.weight_vec_.T)
        except Exception as e:
            logger.error(f"Decision function computation failed: {str(e)}")
            raise

    def predict(self, X: Any) -> np.ndarray:
        """Predict class labels; multiclass ties go to the lowest class index."""
        scores = self.decision_function(X)

        if self.problem_kind_ is ProblemKind.BINARY:
            return np.where(scores >= 0.0, self.classes_[-1], self.classes_[0])

        # argmax returns the first maximal column
        return self.classes_[np.argmax(scores, axis=1)]

    @available_if(_check_proba)
    def predict_proba(self, X: Any) -> np.ndarray:
        """
        Class probabilities from the fitted sigmoids.

        Multiclass probabilities are the per-class sigmoids divided by their
        row sum.

        Returns:
            Shape (n_samples, n_classes); binary problems return two columns
            ordered like ``classes_``
        """
        check_is_fitted(self, 'weight_vec_')
        if self.calibration_ is not Calibration.CALIBRATED:
            raise NotFittedError(
                "This KernelSVC was fitted with probability=False; refit to use predict_proba"
            )
        scores = self.decision_function(X)

        if self.problem_kind_ is ProblemKind.MULTICLASS:
            probs = sigmoid_proba(scores, self.prob_param_)
            return probs / probs.sum(axis=1, keepdims=True)

        if self.classes_.shape[0] == 1:
            return np.ones((scores.shape[0], 1))

        probs = np.zeros((scores.shape[0], 2))
        probs[:, 1] = sigmoid_proba(scores, self.prob_param_)
        probs[:, 0] = 1.0 - probs[:, 1]
        return probs

    def save_model(self, filepath: str) -> None:

        check_is_fitted(self, 'weight_vec_')
        try:
            joblib.dump(self, filepath)
            logger.info(f"Model saved to {filepath}")
        except Exception as e:
            logger.error(f"Model saving failed: {str(e)}")
            raise

    @classmethod
    def load_model(cls, filepath: str) -> 'KernelSVC':

        try:
            model = joblib.load(filepath)
        except Exception as e:
            logger.error(f"Model loading failed: {str(e)}")
            raise
        if not isinstance(model, cls):
            raise TypeError(f"{filepath} does not contain a {cls.__name__}")
        logger.info(f"Model loaded from {filepath}")
        return model
