# pystochopt/sampling/structures.py

import pandas as pd
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from ..tree.structures import Node


@dataclass(frozen=True)
class Segment:
    """A closed cluster run: `length` consecutive steps of one scenario sharing `value`."""
    scenario: int
    start: int
    length: int
    value: float

    @property
    def master(self) -> Node:
        return Node(self.scenario, self.start)

    @property
    def node(self) -> Node:
        """The run as a node whose tag carries the run length."""
        return Node(self.scenario, self.start, self.length)


@dataclass(frozen=True)
class CompressionResult:
    """
    Output of one compression pass.

    Attributes
    ----------
    cluster_map : dict
        Every scanned node -> first node of its run.
    keep_set : tuple of Node
        Run masters, ascending by (scenario, time, depth).
    segments : list of Segment
        Closed runs in scenario, then time, order.
    """
    cluster_map: Dict[Node, Node]
    keep_set: Tuple[Node, ...]
    segments: List[Segment] = field(default_factory=list)

    @property
    def n_segments(self) -> int:
        return len(self.segments)

    @property
    def n_merged(self) -> int:
        """Number of nodes absorbed into an earlier node's run."""
        return len(self.cluster_map) - len(self.keep_set)

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(
            [(s.scenario, s.start, s.length, s.value) for s in self.segments],
            columns=['scenario', 'start', 'length', 'value'],
        )


@dataclass(frozen=True)
class SamplingState:
    """
    Snapshot of the latest sampling pass, replaced as a whole.

    Attributes
    ----------
    values : dict
        Exported node -> value. Keys carry the run length as their tag
        when the pass was compressed.
    cluster_map : dict
        Canonical node -> master node.
    keep_set : tuple of Node
        Surviving canonical nodes, ascending by (scenario, time, depth).
    segments : list of Segment
        Cluster runs; empty for an uncompressed pass.
    compressed : bool
        Whether the pass ran the cluster compressor.
    """
    values: Dict[Node, float]
    cluster_map: Dict[Node, Node]
    keep_set: Tuple[Node, ...]
    segments: List[Segment] = field(default_factory=list)
    compressed: bool = False

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(
            [(n.scenario, n.time, n.depth, v) for n, v in self.values.items()],
            columns=['scenario', 'time', 'depth', 'value'],
        )
