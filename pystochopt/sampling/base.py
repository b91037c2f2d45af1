# pystochopt/sampling/base.py

"""
Base class for per-scenario value compression.
"""
from abc import ABC, abstractmethod
from typing import Mapping, Sequence, Tuple

from .structures import CompressionResult


class Compressor(ABC):
    """
    Base class for algorithms that collapse runs of sampled values.

    Design principles:
    - Algorithm parameters are set at initialization
    - Per-scenario (time, value) sequences are passed to compress()
    - Returns a CompressionResult mapping every node to its run master
    """

    def __init__(self):
        """Initialize compressor with algorithm-specific parameters."""
        self._validate_parameters()

    @abstractmethod
    def _validate_parameters(self) -> None:
        """Validate algorithm-specific parameters. Raise DegenerateConfigurationError if invalid."""
        pass

    @abstractmethod
    def compress(self,
                 sequences: Mapping[int, Sequence[Tuple[int, float]]]) -> CompressionResult:
        """
        Compress sampled values scenario by scenario.

        Parameters
        ----------
        sequences : mapping
            Scenario index -> (time, value) pairs in increasing time.

        Returns
        -------
        CompressionResult
            Cluster map, surviving masters and closed runs.
        """
        pass

    def get_params(self) -> dict:
        """Return algorithm parameters for reproducibility."""
        return {k: v for k, v in self.__dict__.items() if not k.startswith('_')}
