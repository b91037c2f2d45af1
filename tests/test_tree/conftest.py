# tests/test_tree/conftest.py

import pytest

from pystochopt.tree.builder import build_grid
from pystochopt.tree.structures import TreeShape


# Small shapes that are cheap to enumerate exhaustively
SMALL_SHAPES = [
    (0, 1, 1),
    (0, 3, 2),
    (1, 2, 2),
    (2, 1, 3),
    (2, 2, 3),
    (2, 3, 1),
    (3, 2, 2),
]


@pytest.fixture(params=SMALL_SHAPES, ids=lambda p: f"D{p[0]}_B{p[1]}_L{p[2]}")
def small_shape(request):
    """Every shape in SMALL_SHAPES."""
    return TreeShape(*request.param)


@pytest.fixture
def binary_shape():
    """D=2, B=2, L=3: 21 nodes over a 9-step horizon."""
    return TreeShape(depth=2, branching_factor=2, stage_length=3)


@pytest.fixture
def binary_grid(binary_shape):
    return build_grid(binary_shape)
