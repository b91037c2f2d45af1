"""
pystochopt/output/writer.py

Writes the tables of a StochasticGrid export to CSV files.
"""
import logging
import os
from typing import Dict, List

import pandas as pd

from ..exceptions import StochOptError

logger = logging.getLogger(__name__)

EXPORT_COLUMNS: Dict[str, List[str]] = {
    'grid': ['scenario', 'time', 'depth', 'index'],
    'values': ['scenario', 'time', 'depth', 'value'],
    'weights': ['scenario', 'time', 'depth', 'weight'],
    'segments': ['scenario', 'start', 'length', 'value'],
    'regrid': ['scenario', 'time', 'coarse_scenario', 'coarse_time', 'coarse_depth'],
}


class ExportWriter:
    """
    Writes exported tables to `<run_name>_<table>.csv` in the output directory.

    Only the tables of StochasticGrid.export() are accepted, and each must
    carry exactly its export columns, in order.
    """
    def __init__(self, output_dir: str, run_name: str = "pystochopt"):
        self.output_dir = output_dir
        self.run_name = run_name
        os.makedirs(self.output_dir, exist_ok=True)

    def path_for(self, table: str) -> str:
        return os.path.join(self.output_dir, f"{self.run_name}_{table}.csv")

    @staticmethod
    def check_table(table: str, frame: pd.DataFrame):
        """
        Raises
        ------
        StochOptError
            If `table` is not an export table or its columns differ.
        """
        if table not in EXPORT_COLUMNS:
            raise StochOptError(f"unknown export table {table!r}")
        expected = EXPORT_COLUMNS[table]
        if list(frame.columns) != expected:
            raise StochOptError(
                f"table {table!r} has columns {list(frame.columns)}, expected {expected}"
            )

    def write_table(self, table: str, frame: pd.DataFrame) -> str:
        """Writes one exported table; returns its path."""
        self.check_table(table, frame)
        path = self.path_for(table)
        frame.to_csv(path, index=False)
        logger.debug(f"Wrote {len(frame)} rows to {path}")
        return path

    def write_export(self, frames: Dict[str, pd.DataFrame]) -> Dict[str, str]:
        """Writes every table present in `frames`, in export order. Returns table -> path."""
        for table, frame in frames.items():
            self.check_table(table, frame)
        paths = {table: self.write_table(table, frames[table])
                 for table in EXPORT_COLUMNS if table in frames}
        logger.info(f"Wrote {len(paths)} tables to {self.output_dir}")
        return paths
