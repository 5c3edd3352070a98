"""
DataSource: named numeric columns for poissonreg.

DataSource is the "I have data" abstraction. It doesn't know it will be
used for a Poisson fit; it only holds named float arrays. A Design pulls
the response and predictor columns out of it.

Usage:
    from poissonreg import DataSource

    ds = DataSource.from_dataframe(df)

    ds.keys()  # frozenset({'goals', 'shots'})
    y = ds['goals']
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING
import numpy as np

if TYPE_CHECKING:
    import pandas as pd


@dataclass
class DataSource:
    """
    Domain-agnostic container of named numeric arrays.

    Construct via factory classmethods, not directly.
    """
    _data: dict[str, Any]

    # === Array Access ===

    def keys(self) -> frozenset[str]:
        """
        Return the names of all available arrays.

        Example:
            >>> ds = DataSource.from_dataframe(df[['goals', 'shots']])
            >>> ds.keys()
            frozenset({'goals', 'shots'})
        """
        return frozenset(k for k in self._data.keys() if not k.startswith('_'))

    def __getitem__(self, key: str) -> Any:
        """
        Access a named array.

        Raises:
            KeyError: If key not found, listing the available keys
        """
        if key not in self._data:
            available = sorted(self.keys())
            raise KeyError(
                f"DataSource has no array '{key}'. Available: {available}"
            )
        return self._data[key]

    def __contains__(self, key: str) -> bool:
        return key in self._data

    # === Factory Methods ===

    @classmethod
    def from_dataframe(cls, df: 'pd.DataFrame') -> DataSource:
        """Construct from the numeric columns of a pandas DataFrame."""
        numeric = df.select_dtypes(include='number')
        storage: dict[str, Any] = {
            col: numeric[col].to_numpy(dtype=np.float64) for col in numeric.columns
        }
        return cls(_data=storage)
