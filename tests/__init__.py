# File: tests/__init__.py

"""
Test Suite
==========

Tests for kernel-svc:
- Unit tests for the sampler, trainer and calibrator
- Estimator tests (binary, one-vs-rest, persistence)
- End-to-end integration tests
"""

# Tests are run directly via unittest or pytest

__all__ = []
