"""
pystochopt/__main__.py

Entry point for the scenario-tree indexing CLI.
"""

import argparse
import logging
import sys

from .core import StochasticGrid
from .exceptions import DegenerateConfigurationError, StochOptError
from .input import TabularSource, RunConfig, read_config
from .logs.logger import get_logger
from .output import ExportWriter


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pystochopt",
        description="Build, sample and compress a stochastic scenario-tree grid."
    )
    parser.add_argument("--config", type=str, default="config.yaml", help="Path to YAML run configuration.")
    parser.add_argument("--input", type=str, required=True, help="Path to historical (index, value) CSV.")
    parser.add_argument("--output", type=str, help="Directory to write exported CSVs to.")
    parser.add_argument("--depth", type=int, help="Number of branching stages.")
    parser.add_argument("--branching-factor", type=int, help="Children per node at each stage.")
    parser.add_argument("--stage-length", type=int, help="Time steps per stage.")
    parser.add_argument("--seed", type=int, help="64-bit sampling seed.")
    parser.add_argument("--n-jobs", type=int, help="joblib worker count (-1 for all cores).")
    parser.add_argument("--no-compress", action="store_true", help="Export raw per-node values.")
    parser.add_argument("--epsilon", type=float, help="Compression tolerance.")
    parser.add_argument("--policy", choices=["path", "index"], help="Ancestor-sharing policy.")
    parser.add_argument("--grid-duration", type=int, help="Decision grid bucket width.")
    parser.add_argument("--delay", type=int, help="Time before which the decision grid is pinned to 0.")
    parser.add_argument("--log-dir", type=str, default="logs", help="Directory for the run log.")
    parser.add_argument("--loglevel", type=str, default="INFO", help="Set logging level.")
    return parser


def merge_overrides(config: dict, args: argparse.Namespace) -> dict:
    """Apply command-line values on top of the YAML configuration."""
    config = {k: dict(v) if isinstance(v, dict) else v for k, v in (config or {}).items()}
    grid = config['grid'] = config.get('grid') or {}
    sampling = config['sampling'] = config.get('sampling') or {}
    for key in ('depth', 'branching_factor', 'stage_length', 'seed', 'n_jobs'):
        if getattr(args, key) is not None:
            grid[key] = getattr(args, key)
    if args.no_compress:
        sampling['compress'] = False
    if args.epsilon is not None:
        sampling['epsilon'] = args.epsilon
    if args.policy is not None:
        sampling['policy'] = args.policy
    if args.grid_duration is not None:
        config['regrid'] = config.get('regrid') or {}
        config['regrid']['grid_duration'] = args.grid_duration
    if args.delay is not None:
        if not config.get('regrid'):
            raise DegenerateConfigurationError(
                "--delay requires --grid-duration or a regrid section in the config"
            )
        config['regrid']['delay'] = args.delay
    return config


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logger = get_logger(run_name="pystochopt", scenario="run", log_dir=args.log_dir,
                        level=getattr(logging, args.loglevel.upper(), logging.INFO))

    try:
        run_config = RunConfig.from_dict(merge_overrides(read_config(args.config), args))
        grid_cfg, sampling = run_config.grid, run_config.sampling

        tree = StochasticGrid(grid_cfg.depth, grid_cfg.branching_factor, grid_cfg.stage_length,
                              seed=grid_cfg.seed, n_jobs=grid_cfg.n_jobs)
        source = TabularSource(args.input).read()
        values = tree.assign_dataset(source, compress=sampling.compress, epsilon=sampling.epsilon,
                                     break_points=sampling.break_points, policy=sampling.policy)
        regrid_cfg = run_config.regrid
        frames = tree.export(
            grid_duration=regrid_cfg.grid_duration if regrid_cfg else None,
            delay=regrid_cfg.delay if regrid_cfg else 0,
        )
        if args.output:
            ExportWriter(args.output).write_export(frames)
    except StochOptError as e:
        logger.error(f"Run failed: {e}")
        return 1

    print(f"{tree!r}: {len(tree.get_grid())} nodes kept, {len(values)} values assigned")
    return 0


if __name__ == "__main__":
    sys.exit(main())
