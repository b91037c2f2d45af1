# pystochopt/tree/__init__.py

"""
Scenario-tree indexing submodule: flat indexing, grid construction,
decision-grid projection and leaf weighting.
"""

from .structures import TreeShape, Node, Grid
from .indexer import flat_index, node_index, node_at, time_indices, total_count
from .builder import build_grid
from .regrid import coarse_node, regrid
from .weights import leaf_weight, leaf_weights
from .utils import deduplicate

__all__ = [
    'TreeShape',
    'Node',
    'Grid',
    'flat_index',
    'node_index',
    'node_at',
    'time_indices',
    'total_count',
    'build_grid',
    'coarse_node',
    'regrid',
    'leaf_weight',
    'leaf_weights',
    'deduplicate',
]
