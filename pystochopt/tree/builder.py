# pystochopt/tree/builder.py

"""
Enumerate every tree node into the canonical flat Grid.
"""
import logging
from typing import List, Tuple

import numpy as np
from joblib import Parallel, delayed

from .indexer import time_indices
from .structures import TreeShape, Node, Grid
from ..constants import DEFAULT_N_JOBS, DEFAULT_NODE

logger = logging.getLogger(__name__)


def _nodes_at_time(shape: TreeShape, t: int) -> Tuple[np.ndarray, List[Node]]:
    """Return the flat positions and nodes of every scenario alive at t."""
    keys = time_indices(shape, t)
    return keys, [Node(s, t) for s in range(len(keys))]


def build_grid(shape: TreeShape, n_jobs: int = DEFAULT_N_JOBS) -> Grid:
    """
    Build the canonical grid of a tree.

    Time steps are fanned out over a joblib worker pool; each task returns
    its own disjoint set of flat positions, which are then scattered into a
    buffer of exactly shape.total_count slots.

    Parameters
    ----------
    shape : TreeShape
        Tree shape.
    n_jobs : int, default=1
        joblib worker count (-1 uses all cores).

    Returns
    -------
    Grid
        Nodes ordered by flat index.
    """
    buffer = [Node(*DEFAULT_NODE)] * shape.total_count

    results = Parallel(n_jobs=n_jobs, prefer="threads")(
        delayed(_nodes_at_time)(shape, t) for t in shape.times()
    )
    for keys, nodes in results:
        for key, node in zip(keys, nodes):
            buffer[key] = node

    logger.info(
        f"Built grid: depth={shape.depth}, branching_factor={shape.branching_factor}, "
        f"stage_length={shape.stage_length}, nodes={shape.total_count}"
    )
    return Grid(shape=shape, nodes=tuple(buffer))
