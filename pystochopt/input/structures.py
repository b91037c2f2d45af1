# pystochopt/input/structures.py

from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Optional, Tuple

from ..constants import DEFAULT_EPSILON, DEFAULT_N_JOBS, DEFAULT_POLICY, POLICIES
from ..exceptions import DegenerateConfigurationError


def _known(cls, section: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Keep only the keys of `section` that are fields of `cls`."""
    names = {f.name for f in fields(cls)}
    return {k: v for k, v in (section or {}).items() if k in names}


@dataclass
class GridConfig:
    """Tree construction parameters."""
    depth: int
    branching_factor: int
    stage_length: int
    seed: Optional[int] = None
    n_jobs: int = DEFAULT_N_JOBS

    def __post_init__(self):
        if self.depth < 0:
            raise DegenerateConfigurationError(f"depth must be non-negative, got {self.depth}")
        if self.branching_factor < 1:
            raise DegenerateConfigurationError(
                f"branching_factor must be at least 1, got {self.branching_factor}"
            )
        if self.stage_length < 1:
            raise DegenerateConfigurationError(
                f"stage_length must be positive, got {self.stage_length}"
            )


@dataclass
class SamplingConfig:
    """Dataset sampling and compression parameters."""
    compress: bool = True
    epsilon: float = DEFAULT_EPSILON
    policy: str = DEFAULT_POLICY
    break_points: List[Tuple[int, int]] = field(default_factory=list)

    def __post_init__(self):
        if self.epsilon < 0:
            raise DegenerateConfigurationError(f"epsilon must be non-negative, got {self.epsilon}")
        if self.policy not in POLICIES:
            raise DegenerateConfigurationError(
                f"policy must be one of {POLICIES}, got {self.policy!r}"
            )
        self.break_points = [tuple(int(v) for v in bp) for bp in (self.break_points or [])]


@dataclass
class RegridConfig:
    """Decision-grid projection parameters."""
    grid_duration: int
    delay: int = 0

    def __post_init__(self):
        if self.grid_duration <= 0:
            raise DegenerateConfigurationError(
                f"grid_duration must be positive, got {self.grid_duration}"
            )
        if self.delay < 0:
            raise DegenerateConfigurationError(f"delay must be non-negative, got {self.delay}")


@dataclass
class RunConfig:
    """
    Complete configuration of one build-and-sample run.

    Attributes
    ----------
    grid : GridConfig
        Tree shape, seed and worker count.
    sampling : SamplingConfig
        Compression settings.
    regrid : RegridConfig, optional
        Decision grid; no regrid is produced when omitted.
    """
    grid: GridConfig
    sampling: SamplingConfig = field(default_factory=SamplingConfig)
    regrid: Optional[RegridConfig] = None

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> "RunConfig":
        """
        Build a RunConfig from a parsed YAML mapping.

        Unknown keys are ignored.

        Raises
        ------
        DegenerateConfigurationError
            If the grid section is missing a required key or any value is invalid.
        """
        config = config or {}
        grid_section = _known(GridConfig, config.get('grid'))
        missing = [k for k in ('depth', 'branching_factor', 'stage_length') if k not in grid_section]
        if missing:
            raise DegenerateConfigurationError(f"grid configuration missing {missing}")
        regrid_section = config.get('regrid')
        return cls(
            grid=GridConfig(**grid_section),
            sampling=SamplingConfig(**_known(SamplingConfig, config.get('sampling'))),
            regrid=RegridConfig(**_known(RegridConfig, regrid_section)) if regrid_section else None,
        )
