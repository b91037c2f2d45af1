"""
tests/test_output_writer.py

Unit tests for ExportWriter.
"""
import os

import pandas as pd
import pytest

from pystochopt import StochasticGrid
from pystochopt.exceptions import StochOptError
from pystochopt.output.writer import EXPORT_COLUMNS, ExportWriter


@pytest.fixture
def frames():
    tree = StochasticGrid(depth=1, branching_factor=2, stage_length=2, seed=42)
    tree.assign_dataset(list(range(10)), compress=False)
    return tree.export(grid_duration=2)


def test_write_table(tmp_path):
    writer = ExportWriter(str(tmp_path), run_name="demo")
    df = pd.DataFrame({"scenario": [0, 1], "start": [2, 2], "length": [1, 2], "value": [0.5, 1.5]})
    path = writer.write_table("segments", df)
    assert path == str(tmp_path / "demo_segments.csv")
    pd.testing.assert_frame_equal(df, pd.read_csv(path))


def test_write_export(tmp_path, frames):
    paths = ExportWriter(str(tmp_path / "out")).write_export(frames)
    assert list(paths) == list(EXPORT_COLUMNS)
    for table, path in paths.items():
        assert os.path.basename(path) == f"pystochopt_{table}.csv"
        assert list(pd.read_csv(path).columns) == EXPORT_COLUMNS[table]
    pd.testing.assert_frame_equal(frames["grid"], pd.read_csv(paths["grid"]))


def test_regrid_table_optional(tmp_path, frames):
    del frames["regrid"]
    paths = ExportWriter(str(tmp_path)).write_export(frames)
    assert "regrid" not in paths
    assert not os.path.exists(tmp_path / "pystochopt_regrid.csv")


def test_unknown_table_rejected(tmp_path):
    with pytest.raises(StochOptError, match="unknown export table"):
        ExportWriter(str(tmp_path)).write_export({"extra": pd.DataFrame()})
    assert os.listdir(tmp_path) == []


def test_wrong_columns_rejected(tmp_path):
    with pytest.raises(StochOptError, match="expected"):
        ExportWriter(str(tmp_path)).write_table("weights", pd.DataFrame({"weight": [1]}))


def test_nothing_written_when_a_table_is_invalid(tmp_path, frames):
    frames["weights"] = frames["weights"].rename(columns={"weight": "w"})
    with pytest.raises(StochOptError):
        ExportWriter(str(tmp_path)).write_export(frames)
    assert os.listdir(tmp_path) == []
