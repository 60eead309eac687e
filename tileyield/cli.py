"""
Console entry point.

Without arguments, runs the default experiment list. With --trials,
--fault-probability and --fault-fraction, runs one experiment.
"""
import argparse
import logging
import sys
from typing import List, Optional

from tileyield.core.config import (
    DEFAULT_CONFIG, DEFAULT_EXPERIMENTS, DEFAULT_FAULT_FRACTION, DEFAULT_FAULT_PROBABILITY,
    DEFAULT_TRIALS, WaferConfig
)
from tileyield.experiment import ExperimentParams, run_experiments
from tileyield.reporting import format_reports
from tileyield.utils.logger import configure_logging, get_logger

logger = get_logger(__name__)

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tileyield",
        description="Monte Carlo yield of Large/Medium/Small chips on a tiled wafer."
    )
    parser.add_argument("--trials", type=int, help=f"Wafers per experiment (default {DEFAULT_TRIALS})")
    parser.add_argument("--fault-probability", type=float,
                        help=f"Probability that a tile is faulty (default {DEFAULT_FAULT_PROBABILITY})")
    parser.add_argument("--fault-fraction",
                        help=f"Largest acceptable faulty-tile fraction per chip, e.g. 0.1 or 3/30 (default {DEFAULT_FAULT_FRACTION})")
    parser.add_argument("--seed", type=int, help="Seed for reproducible runs")
    parser.add_argument("--tiles-per-segment", type=int, default=DEFAULT_CONFIG.tiles_per_segment)
    parser.add_argument("-v", "--verbose", action="store_true", help="Log progress to stderr")
    return parser

def _selected_experiments(args: argparse.Namespace) -> List[ExperimentParams]:
    if args.trials is None and args.fault_probability is None and args.fault_fraction is None:
        return [ExperimentParams.from_tuple(values) for values in DEFAULT_EXPERIMENTS]

    return [ExperimentParams(
        trials=args.trials if args.trials is not None else DEFAULT_TRIALS,
        fault_probability=args.fault_probability if args.fault_probability is not None else DEFAULT_FAULT_PROBABILITY,
        fault_fraction=args.fault_fraction if args.fault_fraction is not None else DEFAULT_FAULT_FRACTION,
    )]

def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(logging.INFO if args.verbose else logging.WARNING, stream=sys.stderr)

    try:
        experiments = _selected_experiments(args)
        config = WaferConfig(
            tiles_per_segment=args.tiles_per_segment,
            segments_per_wafer=DEFAULT_CONFIG.segments_per_wafer,
            device_segments=dict(DEFAULT_CONFIG.device_segments),
        )
    except ValueError as e:
        parser.error(str(e))

    logger.info(f"Running {len(experiments)} experiment(s)")
    print(format_reports(run_experiments(experiments, config, seed=args.seed)))
    print()
    return 0

if __name__ == "__main__":
    sys.exit(main())
