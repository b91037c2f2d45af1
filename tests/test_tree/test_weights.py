# tests/test_tree/test_weights.py

from collections import Counter

from pystochopt.tree.builder import build_grid
from pystochopt.tree.structures import TreeShape, Node
from pystochopt.tree.weights import leaf_weight, leaf_weights


class TestLeafWeights:
    """Tests for leaf-descendant weighting."""

    def test_ternary_stage_weights(self):
        shape = TreeShape(depth=2, branching_factor=3, stage_length=1)
        assert leaf_weight(shape, 0) == 9
        assert leaf_weight(shape, 1) == 3
        assert leaf_weight(shape, 2) == 1

    def test_each_time_step_sums_to_leaf_count(self, small_shape):
        weights = leaf_weights(small_shape, build_grid(small_shape))
        per_time = Counter()
        for node, weight in weights.items():
            per_time[node.time] += weight
        assert set(per_time.values()) == {small_shape.n_leaves}

    def test_leaves_under_root_sum(self):
        shape = TreeShape(depth=2, branching_factor=3, stage_length=1)
        weights = leaf_weights(shape, build_grid(shape))
        assert sum(w for n, w in weights.items() if n.time == 2) == 9

    def test_reported_under_master(self):
        shape = TreeShape(depth=0, branching_factor=1, stage_length=4)
        keep = [Node(0, 0), Node(0, 2)]
        cluster_map = {Node(0, 0): Node(0, 0), Node(0, 2): Node(0, 2)}
        assert leaf_weights(shape, keep, cluster_map) == {Node(0, 0): 1, Node(0, 2): 1}
