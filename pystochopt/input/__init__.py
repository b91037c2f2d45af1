# pystochopt/input/__init__.py

"""
Input data handling submodule: historical series and run configuration.
"""
from .reader import TabularSource, read_csv, read_config
from .structures import GridConfig, SamplingConfig, RegridConfig, RunConfig
