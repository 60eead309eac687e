import pandas as pd
import numpy as np
from typing import Dict, Union
from tileyield.core.config import DEFAULT_CONFIG, WaferConfig
from tileyield.core.models import WaferMap
from tileyield.enums import DeviceClass
from tileyield.analytics.models import ClassYield, YieldSummary
from tileyield.analytics.verification import Threshold, as_fraction, is_acceptable

WaferLike = Union[WaferMap, np.ndarray, list]

def _as_wafer(wafer: WaferLike) -> WaferMap:
    return wafer if isinstance(wafer, WaferMap) else WaferMap(wafer)

def chip_window_mask(wafer: WaferLike, segments_per_chip: int, fault_fraction: Threshold) -> np.ndarray:
    """
    Slides a window of `segments_per_chip` consecutive segments over the wafer
    and evaluates each placement.

    Windows overlap: offsets 0..S-k each start a candidate, so one faulty
    segment can sink up to k candidates.

    Returns:
        Boolean array of length S - k + 1, True where the candidate is usable.
    """
    wafer = _as_wafer(wafer)
    num_segments = wafer.num_segments

    if not 1 <= segments_per_chip <= num_segments:
        raise ValueError(
            f"Chip size {segments_per_chip} is outside the wafer's 1..{num_segments} segments."
        )

    threshold = as_fraction(fault_fraction)
    num_windows = num_segments - segments_per_chip + 1

    return np.array(
        [is_acceptable(wafer.window(i, segments_per_chip), threshold) for i in range(num_windows)],
        dtype=bool
    )

def count_good_chips(wafer: WaferLike, segments_per_chip: int, fault_fraction: Threshold) -> int:
    """Counts acceptable chip placements of the given size on one wafer."""
    return int(np.count_nonzero(chip_window_mask(wafer, segments_per_chip, fault_fraction)))

def count_device_class(
    wafer: WaferLike,
    device_class: DeviceClass,
    fault_fraction: Threshold,
    config: WaferConfig = DEFAULT_CONFIG
) -> int:
    return count_good_chips(wafer, config.segments_for(device_class), fault_fraction)

def count_large_chips(wafer: WaferLike, fault_fraction: Threshold, config: WaferConfig = DEFAULT_CONFIG) -> int:
    return count_device_class(wafer, DeviceClass.LARGE, fault_fraction, config)

def count_medium_chips(wafer: WaferLike, fault_fraction: Threshold, config: WaferConfig = DEFAULT_CONFIG) -> int:
    return count_device_class(wafer, DeviceClass.MEDIUM, fault_fraction, config)

def count_small_chips(wafer: WaferLike, fault_fraction: Threshold, config: WaferConfig = DEFAULT_CONFIG) -> int:
    return count_device_class(wafer, DeviceClass.SMALL, fault_fraction, config)

def count_all_device_classes(
    wafer: WaferLike,
    fault_fraction: Threshold,
    config: WaferConfig = DEFAULT_CONFIG
) -> Dict[DeviceClass, int]:
    """Good-chip counts for every device class, in report column order."""
    wafer = _as_wafer(wafer)
    return {dc: count_device_class(wafer, dc, fault_fraction, config) for dc in DeviceClass}

def summarize_results(results_df: pd.DataFrame, config: WaferConfig = DEFAULT_CONFIG) -> YieldSummary:
    """
    Calculates per-class KPIs from a per-wafer results table
    (columns 'Wafer' plus one column per device class label).
    """
    classes = {}
    for dc in DeviceClass:
        counts = results_df[dc.value].astype(float) if not results_df.empty else pd.Series(dtype=float)
        max_chips = config.max_chips(dc)

        if counts.empty:
            classes[dc] = ClassYield(dc, max_chips, 0.0, 0.0, 0.0, 0.0)
            continue

        mean = float(counts.mean())
        classes[dc] = ClassYield(
            device_class=dc,
            max_chips=max_chips,
            mean_good_chips=mean,
            # Population std: a single wafer has zero spread, not NaN
            std_good_chips=float(counts.std(ddof=0)),
            wafers_with_good_chip=float((counts > 0).mean()),
            window_yield=mean / max_chips,
        )

    return YieldSummary(trials=len(results_df), classes=classes)

def count_distribution(results_df: pd.DataFrame, config: WaferConfig = DEFAULT_CONFIG) -> pd.DataFrame:
    """
    Tabulates how many wafers produced each possible good-chip count.

    Returns:
        DataFrame indexed by good-chip count (0..largest max_chips) with one
        column per device class label. Counts above a class's bound are
        impossible and show as 0.
    """
    upper = max(config.max_chips(dc) for dc in DeviceClass)
    index = pd.RangeIndex(0, upper + 1, name='Good Chips')

    table = {}
    for dc in DeviceClass:
        if results_df.empty:
            table[dc.value] = pd.Series(0, index=index)
        else:
            table[dc.value] = results_df[dc.value].value_counts().reindex(index, fill_value=0)

    return pd.DataFrame(table, index=index).astype(int)
