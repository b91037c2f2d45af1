# pystochopt/tree/indexer.py

"""
Bijection between tree coordinates and flat array positions.

Within a stage k the B**k scenarios are laid out time-major:

    index = B**k * (t - k*L) + s + L*(B**k - 1)/(B - 1)

so every stage occupies one contiguous block of L*B**k positions. No tree
is ever walked or allocated; everything is derived from the TreeShape.
"""
import numpy as np

from .structures import TreeShape, Node
from ..exceptions import OutOfRangeError


def total_count(shape: TreeShape) -> int:
    """Size of the flat index space, [0, total_count)."""
    return shape.total_count


def _check_time(shape: TreeShape, t: int) -> None:
    if t < 0 or t >= shape.horizon:
        raise OutOfRangeError(
            f"time {t} outside horizon [0, {shape.horizon})"
        )


def flat_index(shape: TreeShape, scenario: int, t: int) -> int:
    """
    Compute the flat position of the node (scenario, t).

    Parameters
    ----------
    shape : TreeShape
        Tree shape.
    scenario : int
        Scenario index, must be < B**stage(t).
    t : int
        Time step, must be < (D+1)*L.

    Returns
    -------
    int
        Index in [0, shape.total_count).

    Raises
    ------
    OutOfRangeError
        If t is outside the horizon or the scenario does not exist at t.
    """
    _check_time(shape, t)
    stage = shape.stage(t)
    count = shape.n_scenarios(stage)
    if scenario < 0 or scenario >= count:
        raise OutOfRangeError(
            f"scenario {scenario} invalid at time {t} (stage {stage} has {count} scenarios)"
        )
    if shape.branching_factor == 1:
        return t
    return count * (t - stage * shape.stage_length) + scenario + shape.stage_offset(stage)


def node_index(shape: TreeShape, node: Node) -> int:
    """Flat position of a Node; the run-length tag is ignored."""
    return flat_index(shape, node.scenario, node.time)


def node_at(shape: TreeShape, index: int) -> Node:
    """
    Invert flat_index.

    Raises
    ------
    OutOfRangeError
        If index is outside [0, shape.total_count).
    """
    if index < 0 or index >= shape.total_count:
        raise OutOfRangeError(
            f"flat index {index} outside [0, {shape.total_count})"
        )
    L = shape.stage_length
    stage = 0
    while shape.stage_offset(stage + 1) <= index:
        stage += 1
    count = shape.n_scenarios(stage)
    relative = index - shape.stage_offset(stage)
    return Node(relative % count, stage * L + relative // count)


def time_indices(shape: TreeShape, t: int) -> np.ndarray:
    """
    Flat positions of every scenario alive at time t, ordered by scenario.

    Vectorised form of flat_index over s in [0, B**stage(t)).
    """
    _check_time(shape, t)
    stage = shape.stage(t)
    count = shape.n_scenarios(stage)
    start = count * (t - stage * shape.stage_length) + shape.stage_offset(stage)
    return np.arange(start, start + count, dtype=np.int64)
