"""
Tests for synthetic count simulation.
"""

import numpy as np
import pytest

from poissonreg.core.exceptions import ValidationError
from poissonreg.regression import fit
from poissonreg.report.simulate import simulate_counts


class TestSimulateCounts:

    def test_shape_and_names(self):
        design = simulate_counts(100, [0.5, 0.1])
        assert (design.n, design.p) == (100, 2)
        assert design.names == ("(Intercept)", "x1")
        np.testing.assert_array_equal(design.X[:, 0], np.ones(100))

    def test_counts_are_nonnegative_integers(self):
        y = simulate_counts(200, [0.5, 0.1]).y
        assert np.all(y >= 0)
        np.testing.assert_array_equal(y, np.round(y))

    def test_covariate_range(self):
        X = simulate_counts(200, [0.0, 0.1], x_low=5.0, x_high=10.0).X
        assert X[:, 1].min() >= 5.0
        assert X[:, 1].max() < 10.0

    def test_seeded(self):
        a = simulate_counts(50, [0.5, 0.1], seed=7)
        b = simulate_counts(50, [0.5, 0.1], seed=7)
        np.testing.assert_array_equal(a.y, b.y)

    def test_two_covariates_recovered(self):
        design = simulate_counts(2000, [0.2, 0.05, -0.03], seed=3)
        result = fit(design)
        np.testing.assert_allclose(result.coefficients, [0.2, 0.05, -0.03], atol=0.1)

    def test_rejects_too_few_observations(self):
        with pytest.raises(ValidationError, match="more observations"):
            simulate_counts(2, [0.5, 0.1])

    def test_rejects_empty_range(self):
        with pytest.raises(ValidationError, match="range"):
            simulate_counts(10, [0.5, 0.1], x_low=3.0, x_high=3.0)
