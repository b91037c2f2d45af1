# pystochopt/sampling/cluster.py

"""
Run-length clustering of near-constant sampled values along each scenario.
"""
import logging
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from joblib import Parallel, delayed

from .base import Compressor
from .structures import CompressionResult, Segment
from ..constants import DEFAULT_EPSILON, DEFAULT_N_JOBS
from ..exceptions import DegenerateConfigurationError
from ..tree.structures import Node

logger = logging.getLogger(__name__)


class ClusterCompressor(Compressor):
    """
    Collapse consecutive near-equal values of a scenario into one run.

    A run is extended while the next value stays strictly within `epsilon`
    of the run's first (anchor) value. Steps next to a stage boundary and
    configured break points always close the current run, so runs never
    span two stages.

    Parameters
    ----------
    stage_length : int
        Time steps per stage.
    epsilon : float (default=0.01)
        Merge tolerance, >= 0. With 0 nothing is ever merged.
    break_points : list of (period, phase), optional
        Extra run terminators at every t with (t - phase) % period == 0,
        checked at t and t+1.
    n_jobs : int (default=1)
        joblib worker count; scenarios are compressed independently.
    """

    def __init__(self,
                 stage_length: int,
                 epsilon: float = DEFAULT_EPSILON,
                 break_points: Optional[Sequence[Tuple[int, int]]] = None,
                 n_jobs: int = DEFAULT_N_JOBS):
        self.stage_length = stage_length
        self.epsilon = epsilon
        self.break_points = [tuple(int(v) for v in bp) for bp in (break_points or [])]
        self.n_jobs = n_jobs
        super().__init__()

    def _validate_parameters(self) -> None:
        if self.stage_length < 1:
            raise DegenerateConfigurationError(
                f"stage_length must be positive, got {self.stage_length}"
            )
        if self.epsilon < 0:
            raise DegenerateConfigurationError(
                f"epsilon must be non-negative, got {self.epsilon}"
            )
        for bp in self.break_points:
            if len(bp) != 2 or bp[0] <= 0:
                raise DegenerateConfigurationError(
                    f"break points must be (period > 0, phase) pairs, got {bp}"
                )

    def __repr__(self) -> str:
        return f"ClusterCompressor(ε={self.epsilon}, L={self.stage_length}, breaks={self.break_points})"

    def is_stage_boundary(self, t: int) -> bool:
        """True when t or t+1 is the first or last step of a stage."""
        edges = (0, self.stage_length - 1)
        return (t % self.stage_length) in edges or ((t + 1) % self.stage_length) in edges

    def is_break_point(self, t: int) -> bool:
        for period, phase in self.break_points:
            if (t - phase) % period == 0 or (t + 1 - phase) % period == 0:
                return True
        return False

    def _extends_run(self, t: int, value: float, anchor: float) -> bool:
        return (abs(value - anchor) < self.epsilon
                and not self.is_stage_boundary(t)
                and not self.is_break_point(t))

    def _compress_scenario(self, scenario: int,
                           sequence: Sequence[Tuple[int, float]]
                           ) -> Tuple[List[Segment], Dict[Node, Node]]:
        segments = []
        cluster_map = {}
        if not sequence:
            return segments, cluster_map

        def close(members: List[int], anchor: float) -> None:
            master = Node(scenario, members[0])
            segments.append(Segment(scenario, members[0], len(members), anchor))
            for t in members:
                cluster_map[Node(scenario, t)] = master

        first_t, first_value = sequence[0]
        members = [int(first_t)]
        anchor = float(first_value)
        for t, value in sequence[1:]:
            t, value = int(t), float(value)
            if self._extends_run(t, value, anchor):
                members.append(t)
            else:
                close(members, anchor)
                members = [t]
                anchor = value
        close(members, anchor)
        return segments, cluster_map

    def compress(self,
                 sequences: Mapping[int, Sequence[Tuple[int, float]]]) -> CompressionResult:
        scenarios = sorted(sequences)
        results = Parallel(n_jobs=self.n_jobs, prefer="threads")(
            delayed(self._compress_scenario)(s, list(sequences[s])) for s in scenarios
        )

        segments: List[Segment] = []
        cluster_map: Dict[Node, Node] = {}
        for scenario_segments, scenario_map in results:
            segments.extend(scenario_segments)
            cluster_map.update(scenario_map)

        keep_set = tuple(sorted(seg.master for seg in segments))
        result = CompressionResult(cluster_map=cluster_map, keep_set=keep_set, segments=segments)
        logger.info(
            f"Compressed {len(cluster_map)} nodes into {result.n_segments} runs ({self!r})"
        )
        return result
