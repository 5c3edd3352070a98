"""
Tests for Design construction and boundary validation.
"""

import numpy as np
import pandas as pd
import pytest

from poissonreg import DataSource
from poissonreg.core.exceptions import DimensionError, ValidationError
from poissonreg.regression import Design


class TestFromArrays:

    def test_shapes_and_default_names(self, rng):
        X = np.column_stack([np.ones(10), rng.standard_normal(10)])
        design = Design.from_arrays(X, np.arange(10))
        assert (design.n, design.p) == (10, 2)
        assert design.names == ("(Intercept)", "x1")
        assert design.has_intercept

    def test_1d_x_becomes_column(self):
        design = Design.from_arrays(np.arange(5.0), np.arange(5))
        assert design.X.shape == (5, 1)

    def test_intercept_prepended(self):
        design = Design.from_arrays(np.arange(5.0), np.arange(5),
                                    names=["shots"], intercept=True)
        assert design.names == ("(Intercept)", "shots")
        np.testing.assert_array_equal(design.X[:, 0], np.ones(5))

    def test_row_mismatch(self):
        with pytest.raises(DimensionError, match="Inconsistent lengths"):
            Design.from_arrays(np.ones((5, 1)), np.arange(6))

    def test_n_not_greater_than_p(self):
        with pytest.raises(ValidationError, match="at least 3 samples"):
            Design.from_arrays(np.ones((2, 2)), [1, 2])

    def test_non_finite(self):
        with pytest.raises(ValidationError, match="non-finite"):
            Design.from_arrays(np.ones((4, 1)), [1, np.nan, 2, 3])

    def test_wrong_name_count(self):
        with pytest.raises(ValidationError, match="names"):
            Design.from_arrays(np.ones((4, 1)), [1, 2, 3, 4], names=["a", "b"])

    def test_frozen(self):
        design = Design.from_arrays(np.ones((4, 1)), [1, 2, 3, 4])
        with pytest.raises(Exception):
            design._n = 3


class TestFromDataSource:

    def test_named_columns(self):
        ds = DataSource.from_dataframe(pd.DataFrame({"goals": [0, 1, 2, 3], "shots": [4, 8, 12, 15]}))
        design = Design.from_datasource(ds, x="shots", y="goals", intercept=True)
        assert design.names == ("(Intercept)", "shots")
        np.testing.assert_array_equal(design.y, [0, 1, 2, 3])
        assert design.source is ds

    def test_all_other_columns(self):
        ds = DataSource.from_dataframe(
            pd.DataFrame({"goals": [0, 1, 2, 3, 1], "a": [1, 2, 3, 4, 2], "b": [0, 1, 0, 1, 1]})
        )
        design = Design.from_datasource(ds, y="goals")
        assert design.names == ("a", "b")

    def test_missing_y(self):
        ds = DataSource.from_dataframe(pd.DataFrame({"shots": [1, 2, 3]}))
        with pytest.raises(ValidationError, match="Must specify y"):
            Design.from_datasource(ds)
