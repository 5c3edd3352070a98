"""
Tests for the Result[P] envelope and DataSource container.
"""

from dataclasses import FrozenInstanceError, dataclass

import numpy as np
import pandas as pd
import pytest

from poissonreg.core.datasource import DataSource
from poissonreg.core.result import Result


@dataclass(frozen=True)
class FakeParams:
    value: float


class TestResult:

    def test_basic_creation(self):
        result = Result(
            params=FakeParams(value=1.0),
            info={"method": "test"},
            timing=None,
            backend_name="cpu_test",
        )
        assert result.params.value == 1.0
        assert result.warnings == ()

    def test_frozen(self):
        result = Result(params=FakeParams(1.0), info={}, timing=None, backend_name="x")
        with pytest.raises(FrozenInstanceError):
            result.backend_name = "y"

class TestDataSource:

    def test_missing_key_lists_available(self):
        ds = DataSource.from_dataframe(pd.DataFrame({"goals": [1, 2]}))
        with pytest.raises(KeyError, match="Available"):
            ds["shots"]

    def test_from_dataframe_skips_text_columns(self):
        df = pd.DataFrame({"HomeTeam": ["A", "B"], "FTHG": [1, 2], "HS": [10, 12]})
        ds = DataSource.from_dataframe(df)
        assert ds.keys() == frozenset({"FTHG", "HS"})
        assert "HomeTeam" not in ds
        assert ds["HS"].dtype == np.float64
