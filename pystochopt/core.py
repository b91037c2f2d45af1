# pystochopt/core.py

"""
StochasticGrid: the exported query surface over a virtual scenario tree.
"""
import logging
from typing import Dict, Hashable, Iterable, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from .constants import DEFAULT_EPSILON, DEFAULT_N_JOBS, DEFAULT_POLICY, SEED_BITS
from .exceptions import DegenerateConfigurationError
from .sampling.assign import SampleAssigner
from .sampling.structures import SamplingState
from .tree.builder import build_grid
from .tree.indexer import flat_index, node_at
from .tree.regrid import regrid
from .tree.structures import TreeShape, Node, Grid
from .tree.utils import deduplicate
from .tree.weights import leaf_weights

logger = logging.getLogger(__name__)


def random_seed() -> int:
    """Draw a fresh 64-bit seed from OS entropy."""
    return int(np.random.default_rng().integers(0, 2 ** SEED_BITS, dtype=np.uint64))


class StochasticGrid:
    """
    Flattened index over a multi-stage scenario tree, with sampled node values.

    The shape and canonical grid are fixed at construction. Each call to
    assign_dataset() replaces the sampling state (values, cluster map and
    surviving nodes) as a whole.

    Parameters
    ----------
    depth : int
        Number of branching stages D.
    branching_factor : int
        Children per node at each new stage, B >= 1.
    stage_length : int
        Time steps per stage, L >= 1.
    seed : int, optional
        64-bit seed for all sampling draws; drawn at random when omitted.
    n_jobs : int, default=1
        joblib worker count for grid construction, regridding and sampling.

    Example
    -------
    >>> tree = StochasticGrid(depth=1, branching_factor=2, stage_length=2, seed=42)
    >>> len(tree.get_grid())
    6
    """

    def __init__(self, depth: int, branching_factor: int, stage_length: int,
                 seed: Optional[int] = None, n_jobs: int = DEFAULT_N_JOBS):
        self._shape = TreeShape(depth, branching_factor, stage_length)
        self._seed = random_seed() if seed is None else int(seed)
        if not 0 <= self._seed < 2 ** SEED_BITS:
            raise DegenerateConfigurationError(
                f"seed must be in [0, 2**{SEED_BITS}), got {self._seed}"
            )
        self.n_jobs = n_jobs
        self._grid = build_grid(self._shape, n_jobs=n_jobs)
        self._state = self._unsampled_state()

    def __repr__(self) -> str:
        s = self._shape
        return (f"StochasticGrid(depth={s.depth}, branching_factor={s.branching_factor}, "
                f"stage_length={s.stage_length}, seed={self._seed})")

    def _unsampled_state(self) -> SamplingState:
        return SamplingState(
            values={},
            cluster_map={node: node for node in self._grid},
            keep_set=tuple(sorted(self._grid)),
        )

    @property
    def shape(self) -> TreeShape:
        return self._shape

    @property
    def seed(self) -> int:
        return self._seed

    @property
    def grid(self) -> Grid:
        return self._grid

    @property
    def state(self) -> SamplingState:
        return self._state

    @property
    def cluster_map(self) -> Dict[Node, Node]:
        return self._state.cluster_map

    @property
    def keep_set(self) -> Tuple[Node, ...]:
        return self._state.keep_set

    def flat_index(self, scenario: int, t: int) -> int:
        return flat_index(self._shape, scenario, t)

    def node_at(self, index: int) -> Node:
        return node_at(self._shape, index)

    def get_grid(self) -> List[Node]:
        """Surviving nodes in flat-index order; the full grid until a compressed pass runs."""
        state = self._state
        if not state.compressed:
            return list(self._grid)
        keep = set(state.keep_set)
        return [node for node in self._grid if node in keep]

    def regrid(self, grid_duration: int, delay: int = 0) -> List[Node]:
        """
        Project surviving nodes onto a coarser decision grid.

        See pystochopt.tree.regrid.regrid.
        """
        state = self._state
        return regrid(self._shape, state.keep_set, grid_duration, delay,
                      cluster_map=state.cluster_map, n_jobs=self.n_jobs)

    def assign_dataset(self, source,
                       compress: bool = True,
                       epsilon: float = DEFAULT_EPSILON,
                       break_points: Optional[Sequence[Tuple[int, int]]] = None,
                       policy: Optional[str] = None) -> Dict[Node, float]:
        """
        Sample historical data onto the tree and optionally compress it.

        Parameters
        ----------
        source : TabularSource, pandas object or array-like
            Historical series in sequence order.
        compress : bool, default=True
            Collapse near-constant runs within each scenario.
        epsilon : float, default=0.01
            Merge tolerance, >= 0.
        break_points : list of (period, phase), optional
            Forced run terminators.
        policy : {'path', 'index'}, optional
            Ancestor-sharing policy; defaults to 'path'.

        Returns
        -------
        dict
            Node -> value, for every node or, when compressed, for every
            run keyed as (scenario, run start, run length).

        Raises
        ------
        InsufficientDataError
            If the series is too short for some leaf; the previous state is kept.
        DegenerateConfigurationError
            If epsilon < 0, a break point is invalid or the policy is unknown.
        """
        assigner = SampleAssigner(self._shape, self._seed,
                                  policy=policy or DEFAULT_POLICY, n_jobs=self.n_jobs)
        state = assigner.sample(self._grid, source, compress=compress,
                                epsilon=epsilon, break_points=break_points)
        self._state = state
        return dict(state.values)

    def leaf_weights(self) -> Dict[Node, int]:
        """Leaf-descendant count of every surviving node, keyed by master node."""
        state = self._state
        return leaf_weights(self._shape, state.keep_set, state.cluster_map)

    @staticmethod
    def deduplicate(sequence: Iterable[Hashable]) -> List[Hashable]:
        return deduplicate(sequence)

    def export(self, grid_duration: Optional[int] = None, delay: int = 0) -> Dict[str, pd.DataFrame]:
        """
        Generate CSV-ready DataFrames of the grid, values, weights and runs.

        A 'regrid' frame pairing every surviving node with its decision-grid
        node is added when grid_duration is given.
        """
        state = self._state
        grid_frame = self._grid.to_frame()
        if state.compressed:
            keep = set(state.keep_set)
            grid_frame = grid_frame[[n in keep for n in self._grid]].reset_index(drop=True)

        weights = self.leaf_weights()
        result = {
            'grid': grid_frame,
            'values': state.to_frame(),
            'weights': pd.DataFrame(
                [(n.scenario, n.time, n.depth, w) for n, w in weights.items()],
                columns=['scenario', 'time', 'depth', 'weight'],
            ),
            'segments': pd.DataFrame(
                [(s.scenario, s.start, s.length, s.value) for s in state.segments],
                columns=['scenario', 'start', 'length', 'value'],
            ),
        }
        if grid_duration is not None:
            coarse = self.regrid(grid_duration, delay)
            result['regrid'] = pd.DataFrame(
                [(n.scenario, n.time, c.scenario, c.time, c.depth)
                 for n, c in zip(state.keep_set, coarse)],
                columns=['scenario', 'time', 'coarse_scenario', 'coarse_time', 'coarse_depth'],
            )
        return result
