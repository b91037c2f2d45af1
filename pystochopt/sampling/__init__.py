# pystochopt/sampling/__init__.py

"""
Historical-data sampling and cluster compression submodule.
"""

from .structures import Segment, CompressionResult, SamplingState
from .base import Compressor
from .cluster import ClusterCompressor
from .assign import SampleAssigner, required_samples, as_values

__all__ = [
    'Segment',
    'CompressionResult',
    'SamplingState',
    'Compressor',
    'ClusterCompressor',
    'SampleAssigner',
    'required_samples',
    'as_values',
]
