"""
DataSource: named numeric columns to train a regression from.

Design.from_datasource picks the label and feature columns by name, so a
DataSource only has to answer three questions: which names exist, what
array a name refers to, and how many rows there are.

    ds = DataSource.from_arrays(X=xt, y=labels)
    ds = DataSource.from_file("sales.csv")
    ds = DataSource.from_dataframe(df)
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping, TYPE_CHECKING
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pymlr.core.exceptions import ConfigurationError

if TYPE_CHECKING:
    import pandas as pd


class DataSource:
    """
    Read-only mapping from column name to float64 array.

    Use the from_* constructors. Arrays are stored as given; shape and
    finiteness checks happen when a Design is built from them.
    """

    def __init__(self, columns: Mapping[str, NDArray[np.floating[Any]]], origin: str):
        self._columns = dict(columns)
        self._origin = origin

    def keys(self) -> frozenset[str]:
        return frozenset(self._columns)

    def __getitem__(self, name: str) -> NDArray[np.floating[Any]]:
        try:
            return self._columns[name]
        except KeyError:
            raise KeyError(
                f"DataSource has no column '{name}'. Available: {sorted(self._columns)}"
            ) from None

    def __contains__(self, name: object) -> bool:
        return name in self._columns

    @property
    def n_observations(self) -> int:
        """Row count of the first column, 0 for an empty source."""
        for arr in self._columns.values():
            return int(arr.shape[0]) if arr.ndim else 0
        return 0

    @property
    def origin(self) -> str:
        """'arrays', 'dataframe', or the path a file was read from."""
        return self._origin

    def __repr__(self) -> str:
        return f"DataSource({sorted(self._columns)}, n={self.n_observations}, origin={self._origin!r})"

    # === Constructors ===

    @classmethod
    def from_arrays(
        cls,
        *,
        X: ArrayLike | None = None,
        y: ArrayLike | None = None,
        **columns: ArrayLike,
    ) -> DataSource:
        """
        Wrap in-memory arrays.

        X is the feature matrix (a flat sequence becomes one column) and
        y the labels (an (n, 1) column is flattened). Any other keyword
        becomes a named column.
        """
        stored: dict[str, NDArray[np.floating[Any]]] = {}
        if X is not None:
            X_arr = np.asarray(X, dtype=np.float64)
            stored['X'] = X_arr.reshape(-1, 1) if X_arr.ndim == 1 else X_arr
        if y is not None:
            y_arr = np.asarray(y, dtype=np.float64)
            stored['y'] = y_arr.ravel() if y_arr.ndim == 2 and y_arr.shape[1] == 1 else y_arr
        for name, values in columns.items():
            stored[name] = np.asarray(values, dtype=np.float64)
        return cls(stored, origin='arrays')

    @classmethod
    def from_dataframe(cls, df: 'pd.DataFrame', *, origin: str = 'dataframe') -> DataSource:
        """One column per DataFrame column. Every column must be numeric."""
        stored: dict[str, NDArray[np.floating[Any]]] = {}
        for col in df.columns:
            try:
                stored[str(col)] = df[col].to_numpy(dtype=np.float64)
            except (ValueError, TypeError) as e:
                raise ConfigurationError(
                    f"column '{col}': cannot convert to float64: {e}"
                ) from e
        return cls(stored, origin=origin)

    @classmethod
    def from_file(cls, path: str | Path, *, columns: list[str] | None = None) -> DataSource:
        """
        Load a .csv or .tsv table (header row required) or a 2D .npy array.

        Args:
            path: File to read
            columns: For tables, the subset of columns to load. For .npy,
                the name of every column of the array.

        Raises:
            ConfigurationError: On an unknown suffix, or .npy names that
                do not match the array width
        """
        path = Path(path)
        suffix = path.suffix.lower()

        if suffix in ('.csv', '.tsv'):
            import pandas as pd
            df = pd.read_csv(path, sep='\t' if suffix == '.tsv' else ',', usecols=columns)
            return cls.from_dataframe(df, origin=str(path))

        if suffix == '.npy':
            data = np.asarray(np.load(path), dtype=np.float64)
            if data.ndim != 2:
                raise ConfigurationError(f"{path.name}: expected a 2D array, got shape {data.shape}")
            names = columns if columns is not None else [f"x{i}" for i in range(data.shape[1])]
            if len(names) != data.shape[1]:
                raise ConfigurationError(
                    f"{path.name}: {len(names)} column names given for array of shape {data.shape}"
                )
            return cls({name: data[:, i] for i, name in enumerate(names)}, origin=str(path))

        raise ConfigurationError(f"Unknown file format: {suffix}")
