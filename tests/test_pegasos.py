# File: tests/test_pegasos.py

"""
Unit tests for the kernel Pegasos binary trainer.
"""

import unittest
import numpy as np
import os
import sys

from sklearn.metrics.pairwise import rbf_kernel, linear_kernel

# Add parent directory to path for imports
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from kernel_svc.core.pegasos import train_binary, PegasosResult


class TestTrainBinary(unittest.TestCase):
    """Test cases for train_binary."""

    def setUp(self):
        """Set up test fixtures."""
        data_rng = np.random.default_rng(0)
        self.samples = data_rng.normal(size=(40, 3))
        self.kernel_mat = rbf_kernel(self.samples, gamma=0.5)
        self.bin_y = np.where(self.samples[:, 0] > 0, 1, -1)

    def test_coefficient_bounds(self):
        """Counts are non-negative integers, each at most T, summing to at most T."""
        linear = linear_kernel(self.samples)
        for reg_param in (0.01, 1.0, 10.0):
            for max_iter in (1, 7, 100, 333):
                for kernel_mat in (self.kernel_mat, linear):
                    result = train_binary(kernel_mat, self.bin_y, reg_param=reg_param,
                                          max_iter=max_iter, rng=np.random.default_rng(1))
                    self.assertTrue(np.issubdtype(result.alpha.dtype, np.integer))
                    self.assertTrue(np.all(result.alpha >= 0))
                    self.assertTrue(np.all(result.alpha <= max_iter))
                    self.assertLessEqual(int(result.alpha.sum()), max_iter)
                    self.assertEqual(int(result.alpha.sum()), result.n_updates)

    def test_weight_is_signed_alpha(self):
        result = train_binary(self.kernel_mat, self.bin_y, max_iter=200,
                              rng=np.random.default_rng(2))
        self.assertIsInstance(result, PegasosResult)
        np.testing.assert_array_equal(result.weight, result.alpha * self.bin_y)
        self.assertEqual(result.weight.dtype, np.float64)

    def test_bounded_kernel_updates_every_step(self):
        """With kernel values in [0, 1] and lambda = 1 the margin never reaches 1."""
        n_samples = self.kernel_mat.shape[0]
        result = train_binary(self.kernel_mat, self.bin_y, reg_param=1.0,
                              max_iter=3 * n_samples, rng=np.random.default_rng(4))
        np.testing.assert_array_equal(result.alpha, np.full(n_samples, 3))
        self.assertEqual(result.n_passes, 3)

    def test_block_kernel_is_separated(self):
        kernel_mat = np.array([[2.0, 1.0, 0.0, 0.0],
                               [1.0, 2.0, 0.0, 0.0],
                               [0.0, 0.0, 2.0, 1.0],
                               [0.0, 0.0, 1.0, 2.0]])
        bin_y = np.array([1, 1, -1, -1])
        result = train_binary(kernel_mat, bin_y, reg_param=1.0, max_iter=1000,
                              rng=np.random.default_rng(1))
        np.testing.assert_array_equal(np.sign(kernel_mat.dot(result.weight)), bin_y)

    def test_single_sample(self):
        result = train_binary(np.array([[1.0]]), np.array([1]), max_iter=5,
                              rng=np.random.default_rng(0))
        np.testing.assert_array_equal(result.alpha, [5])

    def test_large_margin_skips_updates(self):
        """A strongly self-similar point stops violating the margin."""
        result = train_binary(np.array([[100.0]]), np.array([-1]), reg_param=1.0,
                              max_iter=10, rng=np.random.default_rng(0))
        # t=0 updates; afterwards 100 * alpha / (t + 1) >= 1 until t reaches 99
        np.testing.assert_array_equal(result.alpha, [1])

    def test_all_one_class(self):
        bin_y = -np.ones(self.kernel_mat.shape[0], dtype=int)
        result = train_binary(self.kernel_mat, bin_y, max_iter=50,
                              rng=np.random.default_rng(0))
        self.assertTrue(np.all(result.weight <= 0))

    def test_reproducible(self):
        max_iter = 55
        first = train_binary(self.kernel_mat, self.bin_y, max_iter=max_iter,
                             rng=np.random.default_rng(9))
        second = train_binary(self.kernel_mat, self.bin_y, max_iter=max_iter,
                              rng=np.random.default_rng(9))
        other = train_binary(self.kernel_mat, self.bin_y, max_iter=max_iter,
                             rng=np.random.default_rng(10))
        np.testing.assert_array_equal(first.alpha, second.alpha)
        self.assertFalse(np.array_equal(first.alpha, other.alpha))

    def test_invalid_inputs(self):
        with self.assertRaises(ValueError):
            train_binary(self.kernel_mat[:, :10], self.bin_y)
        with self.assertRaises(ValueError):
            train_binary(self.kernel_mat, np.zeros(40, dtype=int))
        with self.assertRaises(ValueError):
            train_binary(self.kernel_mat, self.bin_y[:10])
        with self.assertRaises(ValueError):
            train_binary(self.kernel_mat, self.bin_y, reg_param=0.0)
        with self.assertRaises(ValueError):
            train_binary(self.kernel_mat, self.bin_y, max_iter=0)


if __name__ == '__main__':
    unittest.main()
