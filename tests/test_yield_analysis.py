import pytest
import numpy as np
import pandas as pd
from fractions import Fraction
from tileyield.core.config import WaferConfig, DEFAULT_CONFIG
from tileyield.core.models import WaferMap
from tileyield.enums import DeviceClass
from tileyield.analytics.yield_analysis import (
    chip_window_mask, count_good_chips, count_device_class, count_all_device_classes,
    count_large_chips, count_medium_chips, count_small_chips,
    summarize_results, count_distribution
)
from tileyield.io.sample_generator import generate_wafer

ONE_FAULT = [0, 1, 1, 1, 1, 1, 1, 1, 1, 1]
ALL_GOOD = [1] * 10

@pytest.fixture
def three_segment_wafer() -> WaferMap:
    """Three segments, one faulty tile each (first position)."""
    return WaferMap.from_segments([ONE_FAULT] * 3)

def test_three_segment_window(three_segment_wafer):
    assert count_good_chips(three_segment_wafer, 3, Fraction(3, 30)) == 1
    assert count_good_chips(three_segment_wafer, 3, Fraction(4, 30)) == 1
    assert count_good_chips(three_segment_wafer, 3, 0.095) == 0

def test_counter_accepts_plain_nested_lists():
    assert count_good_chips([ONE_FAULT] * 3, 3, "3/30") == 1

def test_largest_class_on_five_faulty_segments():
    wafer = WaferMap.from_segments([ONE_FAULT] * 5)
    assert count_large_chips(wafer, Fraction(1, 20)) == 0

    repaired = WaferMap.from_segments([ONE_FAULT] * 2 + [ALL_GOOD] * 3)
    assert count_large_chips(repaired, Fraction(1, 20)) == 1

def test_smallest_class_with_one_clean_segment():
    wafer = WaferMap.from_segments([ALL_GOOD] + [ONE_FAULT] * 4)
    assert count_small_chips(wafer, Fraction(2, 30)) == 1
    assert count_small_chips(wafer, Fraction(3, 30)) == 3

def test_windows_overlap_not_partition():
    # One bad segment in the middle sinks every window that covers it
    wafer = WaferMap.from_segments([ALL_GOOD, ALL_GOOD, [0] * 10, ALL_GOOD, ALL_GOOD])
    mask = chip_window_mask(wafer, 2, 0)
    assert mask.tolist() == [True, False, False, True]
    assert count_good_chips(wafer, 1, 0) == 4

def test_window_mask_length_and_count_agree():
    wafer = WaferMap.from_segments([ALL_GOOD] * 5)
    for k in range(1, 6):
        mask = chip_window_mask(wafer, k, 0)
        assert len(mask) == 5 - k + 1
        assert count_good_chips(wafer, k, 0) == mask.sum() == 5 - k + 1

@pytest.mark.parametrize("k", [0, -1, 6])
def test_invalid_window_size_rejected(k):
    wafer = WaferMap.from_segments([ALL_GOOD] * 5)
    with pytest.raises(ValueError):
        count_good_chips(wafer, k, 0.1)

def test_invalid_threshold_rejected_before_scan():
    wafer = WaferMap.from_segments([ALL_GOOD] * 5)
    with pytest.raises(ValueError):
        count_good_chips(wafer, 3, 1.5)

def test_counts_stay_within_window_bounds():
    rng = np.random.default_rng(11)
    for p in (0.0, 0.05, 0.2, 0.5, 1.0):
        for _ in range(20):
            wafer = generate_wafer(p, DEFAULT_CONFIG, rng)
            for k in range(1, wafer.num_segments + 1):
                assert 0 <= count_good_chips(wafer, k, 0.1) <= wafer.num_segments - k + 1

def test_device_class_bounds_with_default_config():
    assert [DEFAULT_CONFIG.max_chips(dc) for dc in DeviceClass] == [1, 2, 3]

    perfect = generate_wafer(0.0)
    assert count_all_device_classes(perfect, 0) == {
        DeviceClass.LARGE: 1, DeviceClass.MEDIUM: 2, DeviceClass.SMALL: 3
    }
    dead = generate_wafer(1.0)
    assert count_all_device_classes(dead, 0.99) == {
        DeviceClass.LARGE: 0, DeviceClass.MEDIUM: 0, DeviceClass.SMALL: 0
    }
    # Any wafer passes at threshold 1
    assert count_medium_chips(dead, 1) == 2

def test_device_class_counters_follow_config():
    config = WaferConfig(tiles_per_segment=4, segments_per_wafer=6,
                         device_segments={DeviceClass.LARGE: 4, DeviceClass.MEDIUM: 2, DeviceClass.SMALL: 1})
    wafer = generate_wafer(0.0, config)
    assert count_device_class(wafer, DeviceClass.LARGE, 0, config) == 3
    assert count_medium_chips(wafer, 0, config) == 5
    assert count_small_chips(wafer, 0, config) == 6

def test_count_all_device_classes_order():
    counts = count_all_device_classes(WaferMap.from_segments([ALL_GOOD] * 5), 0)
    assert list(counts.keys()) == list(DeviceClass)

@pytest.fixture
def sample_results() -> pd.DataFrame:
    return pd.DataFrame({
        'Wafer': [1, 2, 3, 4],
        'Large': [1, 0, 0, 1],
        'Medium': [2, 1, 0, 2],
        'Small': [3, 2, 1, 3],
    })

def test_summarize_results(sample_results):
    summary = summarize_results(sample_results)
    assert summary.trials == 4

    large = summary[DeviceClass.LARGE]
    assert large.max_chips == 1
    assert large.mean_good_chips == pytest.approx(0.5)
    assert large.std_good_chips == pytest.approx(0.5)
    assert large.wafers_with_good_chip == pytest.approx(0.5)
    assert large.window_yield == pytest.approx(0.5)

    small = summary[DeviceClass.SMALL]
    assert small.mean_good_chips == pytest.approx(2.25)
    assert small.window_yield == pytest.approx(0.75)
    assert small.wafers_with_good_chip == pytest.approx(1.0)

def test_summarize_empty_results():
    summary = summarize_results(pd.DataFrame(columns=['Wafer', 'Large', 'Medium', 'Small']))
    assert summary.trials == 0
    assert summary[DeviceClass.MEDIUM].mean_good_chips == 0.0

def test_count_distribution(sample_results):
    dist = count_distribution(sample_results)
    assert dist.index.tolist() == [0, 1, 2, 3]
    assert dist['Large'].tolist() == [2, 2, 0, 0]
    assert dist['Medium'].tolist() == [1, 1, 2, 0]
    assert dist['Small'].tolist() == [0, 1, 1, 2]
    assert (dist.sum() == 4).all()
