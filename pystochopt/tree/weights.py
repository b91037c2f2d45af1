# pystochopt/tree/weights.py

"""
Leaf-descendant counts used as unnormalised probability weights.
"""
from typing import Dict, Iterable, Mapping, Optional

from .structures import TreeShape, Node


def leaf_weight(shape: TreeShape, t: int) -> int:
    """Number of leaves below any node alive at time t, B**(D - stage(t))."""
    return shape.branching_factor ** (shape.depth - shape.stage(t))


def leaf_weights(shape: TreeShape,
                 keep_set: Iterable[Node],
                 cluster_map: Optional[Mapping[Node, Node]] = None) -> Dict[Node, int]:
    """
    Weight every surviving node by its leaf-descendant count.

    Assumes every leaf is equally likely. Nodes are reported under their
    master identity when a cluster map is given.

    Parameters
    ----------
    shape : TreeShape
        Tree shape.
    keep_set : iterable of Node
        Surviving nodes.
    cluster_map : mapping, optional
        Node -> master node of the latest compression pass.

    Returns
    -------
    dict
        Node -> weight.
    """
    weights = {}
    for node in keep_set:
        key = node if cluster_map is None else cluster_map.get(node, node)
        weights[key] = leaf_weight(shape, node.time)
    return weights
