"""
Tests for match data preparation.
"""

import numpy as np
import pandas as pd
import pytest

from poissonreg.core.exceptions import ValidationError
from poissonreg.regression import fit
from poissonreg.report.data import home_design, home_matches, load_matches


@pytest.fixture
def matches():
    return pd.DataFrame({
        "Date": ["01/08/2020"] * 8,
        "HomeTeam": ["Arsenal", "Chelsea", "Arsenal", "Leeds",
                     "Arsenal", "Chelsea", "Arsenal", "Arsenal"],
        "AwayTeam": ["Leeds", "Arsenal", "Chelsea", "Arsenal",
                     "Everton", "Leeds", "Fulham", "Burnley"],
        "FTHG": [2, 1, 0, 1, 3, 2, 1, 4],
        "FTAG": [0, 1, 2, 1, 1, 0, 1, 0],
        "HS": [14, 9, 6, 11, 19, 12, 10, 22],
        "AS": [7, 12, 13, 9, 8, 5, 9, 4],
    })


@pytest.fixture
def matches_csv(matches, tmp_path):
    path = tmp_path / "E0.csv"
    matches.to_csv(path, index=False)
    return path


class TestLoadMatches:

    def test_reads_csv(self, matches_csv):
        df = load_matches(matches_csv)
        assert len(df) == 8
        assert "HomeTeam" in df.columns

    def test_missing_columns(self, tmp_path):
        path = tmp_path / "bad.csv"
        pd.DataFrame({"HomeTeam": ["A"], "FTHG": [1]}).to_csv(path, index=False)
        with pytest.raises(ValidationError, match="missing required columns"):
            load_matches(path)


class TestHomeMatches:

    def test_filters_and_renames(self, matches):
        home = home_matches(matches, "Arsenal")
        assert len(home) == 5
        assert (home["HomeTeam"] == "Arsenal").all()
        assert list(home["goals"]) == [2, 0, 3, 1, 4]
        assert list(home["shots"]) == [14, 6, 19, 10, 22]
        assert "FTHG" not in home.columns

    def test_drops_missing_values(self, matches):
        matches.loc[0, "HS"] = np.nan
        home = home_matches(matches, "Arsenal")
        assert len(home) == 4

    def test_unknown_team(self, matches):
        with pytest.raises(ValidationError, match="no home matches"):
            home_matches(matches, "Barnet")

    def test_custom_columns(self, matches):
        home = home_matches(matches, "Chelsea", goals="FTHG", shots="AS")
        assert list(home["shots"]) == [12, 5]

    def test_unknown_column(self, matches):
        with pytest.raises(ValidationError, match="HST"):
            home_matches(matches, "Arsenal", shots="HST")

    def test_non_numeric_column(self, matches):
        with pytest.raises(ValidationError, match="must be numeric"):
            home_matches(matches, "Arsenal", shots="AwayTeam")

    def test_non_numeric_column_in_design(self, matches):
        matches["HS"] = matches["HS"].astype(str) + " shots"
        with pytest.raises(ValidationError, match="'HS' must be numeric"):
            home_design(matches, "Arsenal")


class TestHomeDesign:

    def test_design_layout(self, matches):
        design = home_design(matches, "Arsenal")
        assert design.names == ("(Intercept)", "shots")
        assert design.n == 5
        np.testing.assert_array_equal(design.X[:, 1], [14, 6, 19, 10, 22])
        np.testing.assert_array_equal(design.y, [2, 0, 3, 1, 4])

    def test_fit_end_to_end(self, matches):
        result = fit(home_design(matches, "Arsenal"))
        assert result.coefficient_table()[1].name == "shots"
        assert result.coefficients[1] > 0
        assert result.df_residual == 3
