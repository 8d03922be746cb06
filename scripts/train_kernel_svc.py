# File: scripts/train_kernel_svc.py

"""
Training script for kernel-svc.
Builds a synthetic blob dataset, computes RBF kernels, trains KernelSVC,
reports validation metrics and persists the model.
"""

import os
import sys
import argparse
import json
import time
import numpy as np
from typing import Any, Dict, Optional, Tuple

from sklearn.datasets import make_blobs
from sklearn.metrics import accuracy_score, log_loss
from sklearn.metrics.pairwise import rbf_kernel
from sklearn.model_selection import train_test_split

# Add parent directory to path for imports
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from kernel_svc.core.kernel_svc import KernelSVC
from kernel_svc.config import KernelSVCConfig, load_config
from kernel_svc.utils.logging_utils import setup_logger, log_performance_metrics, DEFAULT_FORMAT


class KernelSVCTrainer:
    """
    Training orchestrator for KernelSVC.

    Handles dataset generation, kernel computation, training, validation
    and model persistence.
    """

    def __init__(self, config: Dict[str, Any], log_dir: Optional[str] = None):
        self.config = config
        self.log_dir = log_dir
        logging_config = config.get('logging', {})
        self.logger = setup_logger("KernelSVCTrainer", log_dir,
                                   level=logging_config.get('level', 'INFO'),
                                   fmt=logging_config.get('format', DEFAULT_FORMAT))
        self.model = None
        os.makedirs(config.get('model_save_dir', 'models'), exist_ok=True)

    def load_data(self) -> Tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
        """
        Generate the blob dataset and split it.

        Returns:
            Tuple of (X_train, X_val, y_train, y_val)
        """
        dataset_config = self.config.get('dataset', {})
        X, y = make_blobs(
            n_samples=dataset_config.get('n_samples', 300),
            centers=np.asarray(dataset_config.get('centers', [[0.0, 5.0], [-5.0, -5.0], [5.0, -5.0]])),
            cluster_std=dataset_config.get('cluster_std', 0.5),
            random_state=dataset_config.get('random_state', 1)
        )
        X_train, X_val, y_train, y_val = train_test_split(
            X, y,
            test_size=dataset_config.get('test_size', 0.2),
            random_state=dataset_config.get('random_state', 1),
            stratify=y
        )
        self.logger.info(f"Data loaded: {len(X_train)} training samples, {len(X_val)} validation samples")
        return X_train, X_val, y_train, y_val

    def train(self, X_train: np.ndarray, y_train: np.ndarray,
              X_val: np.ndarray, y_val: np.ndarray) -> Dict[str, Any]:

        gamma = self.config.get('kernel', {}).get('gamma', 1.0)
        model_config = KernelSVCConfig.from_dict(self.config.get('model', {}))
        self.model = KernelSVC.from_config(model_config)

        start_time = time.time()
        train_kernel = rbf_kernel(X_train, gamma=gamma)
        val_kernel = rbf_kernel(X_val, X_train, gamma=gamma)
        kernel_time = time.time() - start_time

        self.model.fit(train_kernel, y_train)

        metrics = {
            'kernel_time_s': kernel_time,
            'training_time_s': self.model.training_time_,
            'train_accuracy': float(self.model.score(train_kernel, y_train)),
            'val_accuracy': float(accuracy_score(y_val, self.model.predict(val_kernel))),
            'n_classes': int(len(self.model.classes_)),
        }
        if model_config.probability:
            probs = self.model.predict_proba(val_kernel)
            metrics['val_log_loss'] = float(log_loss(y_val, probs, labels=self.model.classes_))

        log_performance_metrics(self.logger, metrics, prefix="metrics/")
        return {'metrics': metrics, 'model_config': model_config.to_dict()}

    def save_model(self, filepath: str) -> None:
        if self.model is None:
            raise ValueError("No model to save")
        self.model.save_model(filepath)


def main(argv=None) -> int:

    parser = argparse.ArgumentParser(description='Train a Pegasos kernel SVC')
    parser.add_argument('--config', type=str, help='Path to JSON configuration file')
    parser.add_argument('--output-dir', type=str, default=None, help='Output directory for models')
    parser.add_argument('--log-dir', type=str, default=None, help='Log directory')
    parser.add_argument('--reg-param', type=float, help='Regularization parameter')
    parser.add_argument('--max-iter', type=int, help='Pegasos iterations per class')
    parser.add_argument('--probability', action='store_true', help='Fit Platt sigmoids')
    parser.add_argument('--n-jobs', type=int, help='Parallel workers for one-vs-rest training')
    parser.add_argument('--seed', type=int, help='Random seed')

    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
    except (OSError, ValueError) as e:
        print(f"Could not load configuration: {str(e)}")
        return 1

    # Override config with CLI arguments
    model_config = config['model']
    if args.reg_param is not None:
        model_config['reg_param'] = args.reg_param
    if args.max_iter is not None:
        model_config['max_iter'] = args.max_iter
    if args.probability:
        model_config['probability'] = True
    if args.n_jobs is not None:
        model_config['n_jobs'] = args.n_jobs
    if args.seed is not None:
        model_config['random_state'] = args.seed
    if args.output_dir:
        config['model_save_dir'] = args.output_dir

    trainer = KernelSVCTrainer(config, args.log_dir)

    try:
        X_train, X_val, y_train, y_val = trainer.load_data()
        results = trainer.train(X_train, y_train, X_val, y_val)

        model_path = os.path.join(config['model_save_dir'], 'kernel_svc.joblib')
        trainer.save_model(model_path)
        results['model_path'] = model_path

        results_path = os.path.join(config['model_save_dir'], 'training_results.json')
        with open(results_path, 'w', encoding='utf-8') as f:
            json.dump(results, f, indent=2, default=str)

        print(f"Final Model: {model_path}")
        print(f"Validation Accuracy: {results['metrics']['val_accuracy']:.4f}")
        return 0

    except Exception as e:
        trainer.logger.error(f"Training failed: {str(e)}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
