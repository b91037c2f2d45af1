# pystochopt/tree/regrid.py

"""
Projection of the fine scenario grid onto a coarser decision grid.

Fine scenarios sharing floor(s / B**(stage(t) - coarse_stage)) collapse onto
one coarse scenario, so decisions are only distinguished where the coarse
time bucket has already branched.
"""
import logging
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from joblib import Parallel, delayed

from .structures import TreeShape, Node
from ..constants import DEFAULT_N_JOBS, DEFAULT_NODE
from ..exceptions import DegenerateConfigurationError

logger = logging.getLogger(__name__)


def _validate(grid_duration: int, delay: int) -> None:
    if grid_duration <= 0:
        raise DegenerateConfigurationError(
            f"grid_duration must be positive, got {grid_duration}"
        )
    if delay < 0:
        raise DegenerateConfigurationError(
            f"delay must be non-negative, got {delay}"
        )


def coarse_node(shape: TreeShape, scenario: int, t: int,
                grid_duration: int, delay: int = 0) -> Node:
    """
    Map a fine node onto the decision grid.

    Before `delay` the coarse time is pinned to 0; from `delay` on, time is
    bucketed by `grid_duration` counting from `delay`.

    Parameters
    ----------
    shape : TreeShape
        Tree shape.
    scenario, t : int
        Fine coordinates.
    grid_duration : int
        Width of a coarse time bucket (> 0).
    delay : int, default=0
        Time before which the coarse time is reported as 0.

    Returns
    -------
    Node
        (coarse scenario, coarse time) with run-length tag 1.
    """
    if t < delay:
        grid_t = (t // grid_duration) * grid_duration
    else:
        grid_t = ((t - delay) // grid_duration) * grid_duration
    grid_stage = shape.stage(grid_t)
    ratio = shape.branching_factor ** (shape.stage(t) - grid_stage)
    if t < delay:
        return Node(scenario // ratio, 0)
    return Node(scenario // ratio, grid_t)


def _coarse_at_time(shape: TreeShape, t: int, grid_duration: int,
                    delay: int) -> List[Tuple[Node, Node]]:
    count = shape.n_scenarios(shape.stage(t))
    return [
        (Node(s, t), coarse_node(shape, s, t, grid_duration, delay))
        for s in range(count)
    ]


def regrid(shape: TreeShape,
           keep_set: Iterable[Node],
           grid_duration: int,
           delay: int = 0,
           cluster_map: Optional[Mapping[Node, Node]] = None,
           n_jobs: int = DEFAULT_N_JOBS) -> List[Node]:
    """
    Coarsen every surviving node onto the decision grid.

    Parameters
    ----------
    shape : TreeShape
        Tree shape.
    keep_set : iterable of Node
        Surviving nodes, emitted in the given order.
    grid_duration : int
        Width of a coarse time bucket (> 0).
    delay : int, default=0
        Time before which a stage-ratio-only bucketing applies (>= 0).
    cluster_map : mapping, optional
        Node -> master node of the latest compression pass. Coarse nodes
        are translated through it, falling back to (0, 0, 1) when absent.
        When omitted, coarse nodes are returned as they are.
    n_jobs : int, default=1
        joblib worker count.

    Returns
    -------
    list of Node
        One coarse node per surviving node.

    Raises
    ------
    DegenerateConfigurationError
        If grid_duration <= 0 or delay < 0.
    """
    _validate(grid_duration, delay)

    results = Parallel(n_jobs=n_jobs, prefer="threads")(
        delayed(_coarse_at_time)(shape, t, grid_duration, delay)
        for t in shape.times()
    )
    mapping: Dict[Node, Node] = {}
    for pairs in results:
        mapping.update(pairs)

    fallback = Node(*DEFAULT_NODE)
    coarse = []
    for node in keep_set:
        target = mapping.get(node.canonical(), fallback)
        if cluster_map is not None:
            target = cluster_map.get(target, fallback)
        coarse.append(target)

    logger.info(
        f"Regridded {len(coarse)} nodes onto grid_duration={grid_duration}, delay={delay}"
    )
    return coarse
