# tests/test_sampling/conftest.py

import numpy as np
import pytest

from pystochopt.sampling.cluster import ClusterCompressor
from pystochopt.tree.builder import build_grid
from pystochopt.tree.structures import TreeShape


@pytest.fixture
def compressor():
    """Stage length 10: only steps with t % 10 in 1..7 can join a run."""
    return ClusterCompressor(stage_length=10, epsilon=0.01)


@pytest.fixture
def binary_shape():
    """D=2, B=2, L=2: four leaves, 14 nodes."""
    return TreeShape(depth=2, branching_factor=2, stage_length=2)


@pytest.fixture
def binary_grid(binary_shape):
    return build_grid(binary_shape)


@pytest.fixture
def ramp():
    """Strictly increasing series; consecutive samples differ by exactly 1."""
    return np.arange(100, dtype=float)
