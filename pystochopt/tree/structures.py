# pystochopt/tree/structures.py

import pandas as pd
from dataclasses import dataclass, field
from typing import Iterator, Tuple, Union

from ..constants import DEFAULT_DEPTH
from ..exceptions import DegenerateConfigurationError


@dataclass(frozen=True)
class TreeShape:
    """
    Shape parameters of a virtual, exponentially-branching scenario tree.

    Only the shape is stored; nodes are addressed arithmetically.

    Attributes
    ----------
    depth : int
        Number of branching stages D (the tree has D+1 stages).
    branching_factor : int
        Children per node entering a new stage, B >= 1.
    stage_length : int
        Time steps per stage, L >= 1.
    """
    depth: int
    branching_factor: int
    stage_length: int

    def __post_init__(self):
        self.validate()

    def validate(self):
        """
        Reject shapes the indexing scheme cannot represent.

        Raises
        ------
        DegenerateConfigurationError
            If depth < 0, branching_factor < 1 or stage_length < 1.
        """
        if self.depth < 0:
            raise DegenerateConfigurationError(
                f"depth must be non-negative, got {self.depth}"
            )
        if self.branching_factor < 1:
            raise DegenerateConfigurationError(
                f"branching_factor must be at least 1, got {self.branching_factor}"
            )
        if self.stage_length < 1:
            raise DegenerateConfigurationError(
                f"stage_length must be positive, got {self.stage_length}"
            )

    @property
    def n_stages(self) -> int:
        return self.depth + 1

    @property
    def horizon(self) -> int:
        """Total number of time steps, (D+1)*L."""
        return self.n_stages * self.stage_length

    @property
    def n_leaves(self) -> int:
        return self.branching_factor ** self.depth

    @property
    def total_count(self) -> int:
        """Number of (scenario, time) nodes in the whole tree."""
        B, L = self.branching_factor, self.stage_length
        if B == 1:
            return L * self.n_stages
        return L * (B ** self.n_stages - 1) // (B - 1)

    def stage(self, t: int) -> int:
        return t // self.stage_length

    def n_scenarios(self, stage: int) -> int:
        """Number of distinct scenarios alive during `stage`."""
        return self.branching_factor ** stage

    def stage_offset(self, stage: int) -> int:
        """Flat position of the first node of `stage`."""
        B, L = self.branching_factor, self.stage_length
        if B == 1:
            return stage * L
        return L * (B ** stage - 1) // (B - 1)

    def times(self) -> range:
        return range(self.horizon)

    def is_valid(self, scenario: int, t: int) -> bool:
        if t < 0 or t >= self.horizon or scenario < 0:
            return False
        return scenario < self.n_scenarios(self.stage(t))


@dataclass(frozen=True, order=True)
class Node:
    """
    A (scenario, time) coordinate of the tree.

    Ordering is lexicographic on (scenario, time, depth).

    Attributes
    ----------
    scenario : int
        Scenario index, valid in [0, B**stage(time)).
    time : int
        Time step in [0, (D+1)*L).
    depth : int
        Cluster run-length tag; 1 for every canonical node.
    """
    scenario: int
    time: int
    depth: int = DEFAULT_DEPTH

    def canonical(self) -> "Node":
        """Return the node with its run-length tag reset to 1."""
        if self.depth == DEFAULT_DEPTH:
            return self
        return Node(self.scenario, self.time)

    def as_tuple(self) -> Tuple[int, int, int]:
        return (self.scenario, self.time, self.depth)

    @classmethod
    def from_tuple(cls, value: Union[Tuple[int, int], Tuple[int, int, int]]) -> "Node":
        if isinstance(value, Node):
            return value
        return cls(*(int(v) for v in value))


@dataclass(frozen=True)
class Grid:
    """
    Canonical enumeration of every tree node, indexed by flat position.

    Attributes
    ----------
    shape : TreeShape
        Shape the grid was built from.
    nodes : tuple of Node
        Node at each flat index; length equals shape.total_count.
    """
    shape: TreeShape
    nodes: Tuple[Node, ...] = field(repr=False)

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self) -> Iterator[Node]:
        return iter(self.nodes)

    def __getitem__(self, index: int) -> Node:
        return self.nodes[index]

    def __contains__(self, node) -> bool:
        node = Node.from_tuple(node)
        return node.depth == DEFAULT_DEPTH and self.shape.is_valid(node.scenario, node.time)

    def to_frame(self) -> pd.DataFrame:
        """Return the grid as a DataFrame with one row per flat index."""
        return pd.DataFrame({
            'scenario': [n.scenario for n in self.nodes],
            'time': [n.time for n in self.nodes],
            'depth': [n.depth for n in self.nodes],
            'index': range(len(self.nodes)),
        })
