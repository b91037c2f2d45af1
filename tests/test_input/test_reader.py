# tests/test_input/test_reader.py

import pandas as pd
import pytest

from pystochopt.exceptions import SourceFormatError, SourceNotFoundError
from pystochopt.input.reader import TabularSource, read_csv, read_config


class TestTabularSource:
    """Tests for reading historical (index, value) series."""

    def test_comma_separated(self, tmp_path):
        (tmp_path / 'load.csv').write_text('index,value\n0,1.5\n1,2.5\n2,-0.5\n')
        source = read_csv(str(tmp_path / 'load.csv'))
        assert source.rows() == [(0, 1.5), (1, 2.5), (2, -0.5)]
        assert source.values.tolist() == [1.5, 2.5, -0.5]
        assert len(source) == 3

    def test_whitespace_within_single_field(self, tmp_path):
        (tmp_path / 'load.csv').write_text('index value\n0 1.5\n1  2.5\n')
        assert read_csv(str(tmp_path / 'load.csv')).rows() == [(0, 1.5), (1, 2.5)]

    def test_file_path_joined(self, tmp_path):
        (tmp_path / 'load.csv').write_text('index,value\n0,1.0\n')
        source = read_csv('load.csv', file_path=str(tmp_path))
        assert source.path == str(tmp_path / 'load.csv')
        assert source.rows() == [(0, 1.0)]

    def test_lazy_read(self, tmp_path):
        (tmp_path / 'load.csv').write_text('index,value\n0,1.0\n1,2.0\n')
        source = TabularSource('load.csv', str(tmp_path))
        assert source.frame is None
        assert source.values.tolist() == [1.0, 2.0]

    def test_to_text(self, tmp_path):
        (tmp_path / 'load.csv').write_text('index,value\n0,1.5\n1,2.0\n')
        assert read_csv(str(tmp_path / 'load.csv')).to_text() == '0,1.5\n1,2.0\n'

    def test_from_frame(self):
        df = pd.DataFrame({'index': [0, 1], 'value': [0.25, 0.75]})
        assert TabularSource.from_frame(df).values.tolist() == [0.25, 0.75]

    def test_missing_file(self, tmp_path):
        with pytest.raises(SourceNotFoundError, match='missing.csv'):
            read_csv('missing.csv', file_path=str(tmp_path))

    def test_missing_file_is_file_not_found(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            read_csv(str(tmp_path / 'missing.csv'))

    def test_unparsable_value(self, tmp_path):
        (tmp_path / 'load.csv').write_text('index,value\n0,1.0\n1,abc\n')
        with pytest.raises(SourceFormatError, match='unparsable') as exc_info:
            read_csv(str(tmp_path / 'load.csv'))
        assert exc_info.value.row == 3

    def test_missing_value(self, tmp_path):
        (tmp_path / 'load.csv').write_text('index,value\n0,\n')
        with pytest.raises(SourceFormatError, match='expected index and value'):
            read_csv(str(tmp_path / 'load.csv'))

    def test_non_increasing_index(self, tmp_path):
        (tmp_path / 'load.csv').write_text('index,value\n0,1.0\n2,1.0\n1,1.0\n')
        with pytest.raises(SourceFormatError, match='strictly increasing'):
            read_csv(str(tmp_path / 'load.csv'))

    def test_invalid_utf8(self, tmp_path):
        (tmp_path / 'load.csv').write_bytes(b'index,value\n0,1.0\n1,\xff\xfe\n')
        with pytest.raises(SourceFormatError, match='UTF-8') as exc_info:
            read_csv(str(tmp_path / 'load.csv'))
        assert exc_info.value.source == str(tmp_path / 'load.csv')


class TestReadConfig:

    def test_read_config(self, tmp_path):
        config_path = tmp_path / 'config.yaml'
        config_path.write_text('grid:\n  depth: 2\n  branching_factor: 3\n  stage_length: 4\n')
        assert read_config(str(config_path))['grid'] == {
            'depth': 2, 'branching_factor': 3, 'stage_length': 4,
        }

    def test_missing_config_is_empty(self, tmp_path):
        assert read_config(str(tmp_path / 'config.yaml')) == {}
