"""
Experiment Runner.

Repeatedly generates a wafer and counts the good chips of every device class on
it, collecting one report row per trial.
"""
import logging
from dataclasses import dataclass
from fractions import Fraction
from typing import Iterable, List, Optional, Tuple

import numpy as np
import pandas as pd

from tileyield.core.config import DEFAULT_CONFIG, WaferConfig
from tileyield.enums import DeviceClass
from tileyield.io.sample_generator import generate_wafer, validate_probability
from tileyield.analytics.models import YieldReportRow
from tileyield.analytics.verification import Threshold, as_fraction
from tileyield.analytics.yield_analysis import count_all_device_classes
from tileyield.utils.telemetry import track_performance

logger = logging.getLogger(__name__)

RESULT_COLUMNS = ['Wafer'] + DeviceClass.values()

@dataclass(frozen=True)
class ExperimentParams:
    """
    Parameters of one experiment. Validated on construction so a bad value
    fails before any wafer is generated.
    """
    trials: int
    fault_probability: float
    fault_fraction: Threshold

    def __post_init__(self):
        if isinstance(self.trials, bool) or not isinstance(self.trials, (int, np.integer)) or self.trials < 1:
            raise ValueError(f"Trial count must be a positive integer, got {self.trials!r}.")
        validate_probability(self.fault_probability)
        as_fraction(self.fault_fraction)

    @property
    def fraction(self) -> Fraction:
        """The acceptance threshold as an exact fraction."""
        return as_fraction(self.fault_fraction)

    @classmethod
    def from_tuple(cls, values: Tuple[int, float, Threshold]) -> "ExperimentParams":
        trials, fault_probability, fault_fraction = values
        return cls(trials, fault_probability, fault_fraction)

def trial_generators(trials: int, seed: Optional[int] = None) -> List[np.random.Generator]:
    """
    One independent generator per trial, spawned from a single seed sequence.
    The same seed reproduces every trial; seed=None draws fresh OS entropy.
    """
    return [np.random.default_rng(child) for child in np.random.SeedSequence(seed).spawn(trials)]

def run_trial(
    wafer_number: int,
    params: ExperimentParams,
    config: WaferConfig = DEFAULT_CONFIG,
    rng: Optional[np.random.Generator] = None
) -> YieldReportRow:
    wafer = generate_wafer(params.fault_probability, config, rng)
    counts = count_all_device_classes(wafer, params.fraction, config)
    logger.debug(f"Wafer {wafer_number}: {wafer.fault_count} faulty tiles, counts {counts}")
    return YieldReportRow.from_counts(wafer_number, counts)

@track_performance("run_experiment", describe=lambda df: f"{len(df)} wafers")
def run_experiment(
    params: ExperimentParams,
    config: WaferConfig = DEFAULT_CONFIG,
    seed: Optional[int] = None
) -> pd.DataFrame:
    """
    Runs `params.trials` independent wafer trials.

    Returns:
        DataFrame with columns Wafer, Large, Medium, Small; one row per trial,
        Wafer numbered from 1.
    """
    logger.info(
        f"Running {params.trials} trials (p={params.fault_probability}, "
        f"fault fraction={params.fault_fraction}, seed={seed})"
    )

    rows = [
        run_trial(i, params, config, rng).as_record()
        for i, rng in enumerate(trial_generators(params.trials, seed), start=1)
    ]

    results = pd.DataFrame(rows, columns=RESULT_COLUMNS).astype(int)
    logger.info(f"Experiment finished: mean good chips {results[DeviceClass.values()].mean().round(3).to_dict()}")
    return results

def run_experiments(
    param_list: Iterable[ExperimentParams],
    config: WaferConfig = DEFAULT_CONFIG,
    seed: Optional[int] = None
) -> List[Tuple[ExperimentParams, pd.DataFrame]]:
    """
    Runs several experiments in order. With a seed, experiment i uses the
    i-th child of that seed so experiments stay independent of each other.
    """
    param_list = list(param_list)
    if seed is None:
        seeds = [None] * len(param_list)
    else:
        seeds = [int(s.generate_state(1)[0]) for s in np.random.SeedSequence(seed).spawn(len(param_list))]
    return [(params, run_experiment(params, config, s)) for params, s in zip(param_list, seeds)]
