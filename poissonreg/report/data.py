"""
Match data preparation.

Reads a football-data.co.uk style results file and narrows it to the
matches one team played at home, with the goal and shot columns renamed
to the names the model uses.

Expected columns (others are carried along untouched):
    HomeTeam, AwayTeam   team names
    FTHG, FTAG           full-time home/away goals
    HS, AS               home/away shots
"""

from __future__ import annotations

from pathlib import Path

import pandas as pd

from poissonreg.core.datasource import DataSource
from poissonreg.core.exceptions import ValidationError
from poissonreg.regression.design import Design

REQUIRED_COLUMNS = ('HomeTeam', 'AwayTeam', 'FTHG', 'HS')


def load_matches(path: str | Path) -> pd.DataFrame:
    """Read a match results CSV.

    Raises:
        ValidationError: If a required column is missing.
    """
    df = pd.read_csv(path)
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise ValidationError(
            f"{path}: missing required columns {missing}; "
            f"found {list(df.columns)}"
        )
    return df


def home_matches(
    df: pd.DataFrame,
    team: str,
    *,
    goals: str = 'FTHG',
    shots: str = 'HS',
) -> pd.DataFrame:
    """Matches where `team` played at home, as columns `goals` and `shots`.

    Rows with a missing goal or shot count are dropped.

    Raises:
        ValidationError: If a column is missing or not numeric, or the team
            never appears as home side.
    """
    for col in ('HomeTeam', goals, shots):
        if col not in df.columns:
            raise ValidationError(f"column {col!r} not in data")
    for col in (goals, shots):
        if not pd.api.types.is_numeric_dtype(df[col]):
            raise ValidationError(
                f"column {col!r} must be numeric, got dtype {df[col].dtype}"
            )

    home = df.loc[df['HomeTeam'] == team]
    if home.empty:
        teams = sorted(df['HomeTeam'].dropna().unique())
        raise ValidationError(
            f"team {team!r} has no home matches. Available: {teams}"
        )

    out = home.rename(columns={goals: 'goals', shots: 'shots'})
    out = out.dropna(subset=['goals', 'shots'])
    return out.reset_index(drop=True)


def home_design(df: pd.DataFrame, team: str, **columns: str) -> Design:
    """Design for goals ~ 1 + shots over the team's home matches."""
    matches = home_matches(df, team, **columns)
    ds = DataSource.from_dataframe(matches[['goals', 'shots']])
    return Design.from_datasource(ds, x='shots', y='goals', intercept=True)
