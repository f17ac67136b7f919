"""
Unit tests for sparsity patterns.
"""

import numpy as np
import pytest

from latopt.optimization import SparsityPattern


class TestSparsityPattern:
    """Construction and assembly."""

    def test_from_pairs(self):
        pattern = SparsityPattern.from_pairs([(0, 1), (1, 0)], (2, 2))
        assert pattern.rows == (0, 1)
        assert pattern.cols == (1, 0)
        assert pattern.nnz == 2
        assert list(pattern) == [(0, 1), (1, 0)]

    def test_diagonal(self):
        pattern = SparsityPattern.diagonal(3)
        assert pattern.pairs() == [(0, 0), (1, 1), (2, 2)]
        assert pattern.shape == (3, 3)

    def test_to_scipy(self):
        pattern = SparsityPattern.from_pairs([(0, 2), (1, 0), (1, 1)], (2, 3))
        dense = pattern.to_scipy([1.0, 2.0, 3.0]).toarray()
        np.testing.assert_array_equal(dense, [[0.0, 0.0, 1.0], [2.0, 3.0, 0.0]])

    def test_to_scipy_checks_value_count(self):
        pattern = SparsityPattern.diagonal(2)
        with pytest.raises(ValueError):
            pattern.to_scipy([1.0])

    def test_mismatched_index_lists(self):
        with pytest.raises(ValueError):
            SparsityPattern((0, 1), (0,), (2, 2))

    def test_immutable(self):
        pattern = SparsityPattern.diagonal(2)
        with pytest.raises(AttributeError):
            pattern.rows = (1, 0)
