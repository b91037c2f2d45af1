# pystochopt/__init__.py

"""
Stochastic scenario-tree indexing (PyStochOpt).

Builds and compresses the flat indexing and data structures an external
stochastic optimisation solver consumes for a multi-stage, exponentially
branching scenario tree.

Main Components
---------------
StochasticGrid : class
    Exported query surface: grid, regrid, dataset assignment, leaf weights.
TreeShape, Node, Grid : dataclasses
    Tree shape, node coordinates and the canonical flat enumeration.
TabularSource : class
    Historical (index, value) series read from a delimited file.

Subpackages
-----------
tree : Flat indexing, grid construction, decision-grid projection, weights
sampling : Bootstrap sampling of historical data and run-length compression
input : Tabular sources and YAML configuration
output : CSV export

Example
-------
>>> from pystochopt import StochasticGrid
>>> tree = StochasticGrid(depth=1, branching_factor=2, stage_length=2, seed=42)
>>> values = tree.assign_dataset([0.0, 1.0, 2.0, 3.0, 4.0, 5.0], compress=False)
>>> tree.leaf_weights()[tree.get_grid()[0]]
2
"""

from .core import StochasticGrid
from .exceptions import (StochOptError, OutOfRangeError, InsufficientDataError,
                         SourceFormatError, SourceNotFoundError,
                         DegenerateConfigurationError)
from .input import TabularSource, read_csv
from .tree import TreeShape, Node, Grid, deduplicate

__all__ = [
    # Core classes
    'StochasticGrid',
    'TreeShape',
    'Node',
    'Grid',
    'TabularSource',
    # Functions
    'read_csv',
    'deduplicate',
    # Errors
    'StochOptError',
    'OutOfRangeError',
    'InsufficientDataError',
    'SourceFormatError',
    'SourceNotFoundError',
    'DegenerateConfigurationError',
]

__version__ = '0.1.0'
