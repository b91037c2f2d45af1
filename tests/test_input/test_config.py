# tests/test_input/test_config.py

import pytest

from pystochopt.exceptions import DegenerateConfigurationError
from pystochopt.input.structures import GridConfig, SamplingConfig, RegridConfig, RunConfig


class TestRunConfig:
    """Tests for building run configuration from parsed YAML."""

    def test_full_config(self):
        config = RunConfig.from_dict({
            'grid': {'depth': 2, 'branching_factor': 2, 'stage_length': 24, 'seed': 42, 'n_jobs': -1},
            'sampling': {'compress': False, 'epsilon': 0.5, 'policy': 'index', 'break_points': [[24, 0]]},
            'regrid': {'grid_duration': 12, 'delay': 6},
        })
        assert config.grid == GridConfig(2, 2, 24, seed=42, n_jobs=-1)
        assert config.sampling.break_points == [(24, 0)]
        assert config.sampling.policy == 'index'
        assert config.regrid == RegridConfig(12, 6)

    def test_defaults(self):
        config = RunConfig.from_dict({'grid': {'depth': 1, 'branching_factor': 2, 'stage_length': 2}})
        assert config.sampling == SamplingConfig()
        assert config.sampling.compress
        assert config.sampling.epsilon == 0.01
        assert config.regrid is None

    def test_unknown_keys_ignored(self):
        config = RunConfig.from_dict({
            'grid': {'depth': 1, 'branching_factor': 2, 'stage_length': 2, 'colour': 'red'},
            'sampling': {'break_points': None},
        })
        assert config.grid.seed is None
        assert config.sampling.break_points == []

    def test_missing_grid_keys(self):
        with pytest.raises(DegenerateConfigurationError, match='stage_length'):
            RunConfig.from_dict({'grid': {'depth': 1, 'branching_factor': 2}})

    @pytest.mark.parametrize("section, match", [
        ({'grid': {'depth': 1, 'branching_factor': 0, 'stage_length': 2}}, 'branching_factor'),
        ({'grid': {'depth': 1, 'branching_factor': 2, 'stage_length': 0}}, 'stage_length'),
        ({'grid': {'depth': 1, 'branching_factor': 2, 'stage_length': 2},
          'sampling': {'epsilon': -0.1}}, 'epsilon'),
        ({'grid': {'depth': 1, 'branching_factor': 2, 'stage_length': 2},
          'sampling': {'policy': 'leaf'}}, 'policy'),
        ({'grid': {'depth': 1, 'branching_factor': 2, 'stage_length': 2},
          'regrid': {'grid_duration': 0}}, 'grid_duration'),
    ])
    def test_invalid_values(self, section, match):
        with pytest.raises(DegenerateConfigurationError, match=match):
            RunConfig.from_dict(section)
