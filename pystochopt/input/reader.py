# pystochopt/input/reader.py

"""
Reads historical series and run configuration from disk.
"""
import os
from typing import Any, Dict, List, Optional, Tuple

import numpy as np
import pandas as pd
import yaml

from ..exceptions import SourceFormatError, SourceNotFoundError


class TabularSource:
    """
    Ordered (index, value) rows of a historical series.

    The first row of the file is a header and is skipped. Fields of a row
    are joined and re-split on whitespace, so "0 1.5" in a single delimited
    field reads the same as "0,1.5". Indices must be strictly increasing.

    Parameters
    ----------
    file_name : str
        File to read.
    file_path : str, optional
        Directory joined in front of file_name.
    """

    COLUMNS = ['index', 'value']

    def __init__(self, file_name: str, file_path: Optional[str] = None):
        self.file_name = file_name
        self.file_path = file_path
        self.frame: Optional[pd.DataFrame] = None

    def __repr__(self) -> str:
        return f"TabularSource({self.path!r})"

    def __len__(self) -> int:
        return len(self._loaded())

    @property
    def path(self) -> str:
        if self.file_path:
            return os.path.join(self.file_path, self.file_name)
        return self.file_name

    @classmethod
    def from_frame(cls, frame: pd.DataFrame, name: str = "<frame>") -> "TabularSource":
        """Wrap an in-memory DataFrame whose first two columns are index and value."""
        source = cls(name)
        rows = [[str(v) for v in row] for row in frame.itertuples(index=False)]
        source.frame = source._normalise(rows)
        return source

    def read(self) -> "TabularSource":
        """
        Load the file.

        Raises
        ------
        SourceNotFoundError
            If the file cannot be opened.
        SourceFormatError
            If a row has fewer than two fields, an unparsable field or a
            non-increasing index.
        """
        if not os.path.isfile(self.path):
            raise SourceNotFoundError(f"Tabular source not found: {self.path}")
        try:
            raw = pd.read_csv(self.path, header=0, dtype=str, keep_default_na=False)
        except pd.errors.EmptyDataError as e:
            raise SourceFormatError(f"empty source: {e}", source=self.path) from e
        except pd.errors.ParserError as e:
            raise SourceFormatError(f"malformed source: {e}", source=self.path) from e
        except UnicodeDecodeError as e:
            raise SourceFormatError(f"source is not valid UTF-8: {e}", source=self.path) from e
        except OSError as e:
            raise SourceNotFoundError(f"Tabular source cannot be opened: {self.path} ({e})") from e
        self.frame = self._normalise(raw.values.tolist())
        return self

    def _normalise(self, rows: List[List[str]]) -> pd.DataFrame:
        indices, values = [], []
        # row numbers are 1-based file lines after the header
        for row_number, row in enumerate(rows, start=2):
            tokens = " ".join(str(f) for f in row if f is not None).split()
            if len(tokens) < 2:
                raise SourceFormatError(
                    f"expected index and value, got {tokens}", source=self.path, row=row_number
                )
            try:
                indices.append(int(tokens[0]))
                values.append(float(tokens[1]))
            except ValueError as e:
                raise SourceFormatError(
                    f"unparsable field: {e}", source=self.path, row=row_number
                ) from e

        frame = pd.DataFrame({'index': indices, 'value': values}, columns=self.COLUMNS)
        if len(frame) > 1 and not (np.diff(frame['index'].to_numpy()) > 0).all():
            raise SourceFormatError("sequence index is not strictly increasing", source=self.path)
        return frame

    def _loaded(self) -> pd.DataFrame:
        if self.frame is None:
            self.read()
        return self.frame

    @property
    def values(self) -> np.ndarray:
        """Series values in sequence order."""
        return self._loaded()['value'].to_numpy(dtype=float)

    def rows(self) -> List[Tuple[int, float]]:
        frame = self._loaded()
        return list(zip(frame['index'].astype(int).tolist(), frame['value'].tolist()))

    def to_text(self) -> str:
        """Records as comma-joined lines, header excluded."""
        return "".join(f"{i},{v}\n" for i, v in self.rows())


def read_csv(file_name: str, file_path: Optional[str] = None) -> TabularSource:
    """Open and load a tabular source, optionally relative to `file_path`."""
    return TabularSource(file_name, file_path).read()


def read_config(config_path: str) -> Dict[str, Any]:
    """Reads a YAML config file. A missing file yields an empty config."""
    if os.path.exists(config_path):
        with open(config_path, 'r') as f:
            return yaml.safe_load(f) or {}
    return {}
