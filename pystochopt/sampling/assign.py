# pystochopt/sampling/assign.py

"""
Bootstrap sampling of historical data onto the nodes of a scenario tree.

Every leaf scenario draws one contiguous window from the historical series
and writes it along the nodes it owns. Each leaf uses its own generator,
seeded with seed + leaf index, so results do not depend on the order in
which leaves are processed.
"""
import logging
from collections import defaultdict
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd
from joblib import Parallel, delayed

from .cluster import ClusterCompressor
from .structures import SamplingState
from ..constants import (DEFAULT_EPSILON, DEFAULT_N_JOBS, DEFAULT_POLICY,
                         POLICIES, POLICY_INDEX)
from ..exceptions import (DegenerateConfigurationError, InsufficientDataError,
                          SourceFormatError)
from ..tree.indexer import flat_index
from ..tree.structures import TreeShape, Grid

logger = logging.getLogger(__name__)


def required_samples(branch_length: int, stage_length: int) -> int:
    """Minimum series length for a leaf spanning `branch_length` stages."""
    return stage_length * branch_length * (branch_length + 1) // 2


def as_values(source) -> np.ndarray:
    """
    Coerce a historical source to a 1-D float array.

    Accepts a TabularSource (anything with a `values` attribute holding a
    1-D array), a pandas Series, a DataFrame (its 'value' column, or the
    last column) or any array-like. A 2-D array-like is read as
    (index, value) rows and its last column is used.

    Raises
    ------
    SourceFormatError
        If the source is not one or two dimensional.
    """
    if isinstance(source, pd.DataFrame):
        column = 'value' if 'value' in source.columns else source.columns[-1]
        return source[column].to_numpy(dtype=float)
    if isinstance(source, pd.Series):
        return source.to_numpy(dtype=float)
    values = np.asarray(getattr(source, 'values', source), dtype=float)
    if values.ndim == 2:
        return values[:, -1]
    if values.ndim != 1:
        raise SourceFormatError(f"expected a 1-D series or (index, value) rows, got {values.ndim}-D data")
    return values


class SampleAssigner:
    """
    Assign historical values to every node of a tree.

    Parameters
    ----------
    shape : TreeShape
        Tree shape.
    seed : int
        Base seed; leaf s samples with numpy.random.default_rng(seed + s).
    policy : {'path', 'index'} (default='path')
        Which leaf writes each shared node.

        - 'path': the parent of scenario s is floor(s / B). A leaf owns its
          root-to-leaf path from the first stage at which it is the
          lowest-numbered leaf below its ancestor, so every path reads one
          contiguous stretch of history.
        - 'index': leaf s owns the nodes (s, t) for every t from the stage
          ceil(log_B(s + 1)) on.
    n_jobs : int (default=1)
        joblib worker count.
    """

    def __init__(self,
                 shape: TreeShape,
                 seed: int,
                 policy: str = DEFAULT_POLICY,
                 n_jobs: int = DEFAULT_N_JOBS):
        if policy not in POLICIES:
            raise DegenerateConfigurationError(
                f"policy must be one of {POLICIES}, got {policy!r}"
            )
        self.shape = shape
        self.seed = int(seed)
        self.policy = policy
        self.n_jobs = n_jobs

    def __repr__(self) -> str:
        return f"SampleAssigner(seed={self.seed}, policy={self.policy!r})"

    def branch_stage(self, leaf: int) -> int:
        """First stage at which `leaf` writes its own values."""
        B, D = self.shape.branching_factor, self.shape.depth
        if self.policy == POLICY_INDEX:
            # ceil(log_B(leaf + 1)) without floating point
            stage = 0
            while B ** stage < leaf + 1:
                stage += 1
            return stage
        for stage in range(D + 1):
            if leaf % B ** (D - stage) == 0:
                return stage
        return D

    def branch_length(self, leaf: int) -> int:
        """Number of stages from the leaf's branch stage to the end of the horizon."""
        return self.shape.depth + 1 - self.branch_stage(leaf)

    def scenario_at(self, leaf: int, t: int) -> int:
        """Scenario index of the node `leaf` writes at time t."""
        if self.policy == POLICY_INDEX:
            return leaf
        return leaf // self.shape.branching_factor ** (self.shape.depth - self.shape.stage(t))

    def draw_start(self, leaf: int, n_samples: int) -> int:
        """
        Draw the window start offset of a leaf.

        Raises
        ------
        InsufficientDataError
            If the series is shorter than the leaf's required sample count.
        """
        branch_length = self.branch_length(leaf)
        required = required_samples(branch_length, self.shape.stage_length)
        if n_samples < required:
            raise InsufficientDataError(
                f"leaf {leaf} needs at least {required} samples "
                f"(branch length {branch_length}), source has {n_samples}"
            )
        window = branch_length * self.shape.stage_length
        rng = np.random.default_rng(self.seed + leaf)
        return int(rng.integers(0, n_samples - window + 1))

    def _sample_leaf(self, leaf: int, data: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        start = self.draw_start(leaf, len(data))
        branch_t = self.branch_stage(leaf) * self.shape.stage_length
        times = range(branch_t, self.shape.horizon)
        keys = np.array(
            [flat_index(self.shape, self.scenario_at(leaf, t), t) for t in times],
            dtype=np.int64,
        )
        logger.debug(f"Leaf {leaf}: start={start}, branch_time={branch_t}, nodes={len(keys)}")
        return keys, data[start:start + len(keys)]

    def assign(self, source) -> np.ndarray:
        """
        Sample a value for every flat index.

        Parameters
        ----------
        source : TabularSource, pandas object or array-like
            Historical series, in sequence order.

        Returns
        -------
        np.ndarray
            Values indexed by flat position, length shape.total_count.

        Raises
        ------
        InsufficientDataError
            If any leaf's window does not fit into the series.
        """
        data = as_values(source)
        leaves = range(self.shape.n_leaves)

        results = Parallel(n_jobs=self.n_jobs, prefer="threads")(
            delayed(self._sample_leaf)(leaf, data) for leaf in leaves
        )
        buffer = np.full(self.shape.total_count, np.nan)
        for keys, values in results:
            buffer[keys] = values

        logger.info(
            f"Sampled {len(data)} historical values onto {self.shape.n_leaves} leaves ({self!r})"
        )
        return buffer

    @staticmethod
    def sequences(grid: Grid, buffer: np.ndarray) -> Dict[int, List[Tuple[int, float]]]:
        """Group flat values into per-scenario (time, value) sequences, time ascending."""
        grouped = defaultdict(list)
        # flat order is time-major within each stage, so times arrive ascending
        for index, node in enumerate(grid):
            grouped[node.scenario].append((node.time, float(buffer[index])))
        return dict(grouped)

    def sample(self,
               grid: Grid,
               source,
               compress: bool = True,
               epsilon: float = DEFAULT_EPSILON,
               break_points: Optional[Sequence[Tuple[int, int]]] = None) -> SamplingState:
        """
        Run a complete sampling pass.

        Parameters
        ----------
        grid : Grid
            Canonical grid of self.shape.
        source : TabularSource, pandas object or array-like
            Historical series.
        compress : bool, default=True
            Collapse near-constant runs with a ClusterCompressor.
        epsilon : float, default=0.01
            Merge tolerance for compression.
        break_points : list of (period, phase), optional
            Forced run terminators for compression.

        Returns
        -------
        SamplingState
            Values, cluster map and surviving nodes of this pass.
        """
        compressor = None
        if compress:
            compressor = ClusterCompressor(
                self.shape.stage_length, epsilon=epsilon,
                break_points=break_points, n_jobs=self.n_jobs,
            )
        elif epsilon < 0:
            raise DegenerateConfigurationError(f"epsilon must be non-negative, got {epsilon}")

        buffer = self.assign(source)

        if compressor is None:
            values = {node: float(buffer[i]) for i, node in enumerate(grid)}
            return SamplingState(
                values=values,
                cluster_map={node: node for node in grid},
                keep_set=tuple(sorted(grid)),
            )

        result = compressor.compress(self.sequences(grid, buffer))
        masters = set(result.keep_set)
        keep_set = tuple(sorted(node for node in grid if node in masters))
        logger.info(
            f"Kept {len(keep_set)} of {len(grid)} nodes after compression"
        )
        return SamplingState(
            values={seg.node: seg.value for seg in result.segments},
            cluster_map=result.cluster_map,
            keep_set=keep_set,
            segments=result.segments,
            compressed=True,
        )
