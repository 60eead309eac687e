import pytest
from decimal import Decimal
from fractions import Fraction
import numpy as np
from tileyield.analytics.verification import as_fraction, count_faulty, is_acceptable, max_allowed_faults

ONE_FAULT_OF_TEN = [0, 1, 1, 1, 1, 1, 1, 1, 1, 1]

def test_boundary_at_one_tenth():
    """floor(0.1 * 10) = 1 allows exactly one fault; 0.09 allows none."""
    assert is_acceptable(ONE_FAULT_OF_TEN, 0.09) is False
    assert is_acceptable(ONE_FAULT_OF_TEN, 0.1) is True

def test_full_threshold_always_passes():
    assert is_acceptable([0] * 10, 1.0)
    assert is_acceptable([False] * 7, Fraction(1))
    assert is_acceptable([1] * 3, 1)

def test_zero_floor_requires_zero_faults():
    # floor(0.05 * 10) = 0
    assert is_acceptable([1] * 10, 0.05)
    assert not is_acceptable(ONE_FAULT_OF_TEN, 0.05)
    assert not is_acceptable(ONE_FAULT_OF_TEN, 0)

def test_rational_and_decimal_thresholds_floor_identically():
    """3/30 must land on the same integer boundary as 0.1."""
    for m in (10, 20, 30, 50, 100):
        assert max_allowed_faults(m, Fraction(3, 30)) == max_allowed_faults(m, 0.1) == m // 10
    # 0.29 * 100 is 28.999999999999996 in binary floating point
    assert max_allowed_faults(100, 0.29) == 29
    assert max_allowed_faults(10, 0.3) == 3
    # and exact thirds stay exact
    assert max_allowed_faults(30, Fraction(1, 3)) == 10

def test_threshold_string_and_decimal_inputs():
    assert as_fraction("3/30") == Fraction(1, 10)
    assert as_fraction(" 0.25 ") == Fraction(1, 4)
    assert as_fraction(Decimal("0.1")) == Fraction(1, 10)
    assert as_fraction(np.float64(0.1)) == Fraction(1, 10)
    assert as_fraction(0) == 0

@pytest.mark.parametrize("bad", [-0.01, 1.01, "2", "abc", None, float("nan"), float("inf"), True, "1/0"])
def test_invalid_thresholds_raise(bad):
    with pytest.raises(ValueError):
        as_fraction(bad)

def test_is_acceptable_monotonic_in_threshold():
    rng = np.random.default_rng(7)
    thresholds = [Fraction(i, 40) for i in range(41)]
    for _ in range(25):
        tiles = rng.random(40) >= 0.2
        results = [is_acceptable(tiles, f) for f in thresholds]
        # Once acceptable, stays acceptable for every larger threshold
        first_pass = results.index(True)
        assert all(results[first_pass:])
        assert not any(results[:first_pass])

def test_is_acceptable_is_idempotent():
    tiles = np.array([True, False, True, True, False, True])
    first = is_acceptable(tiles, "1/3")
    assert all(is_acceptable(tiles, "1/3") == first for _ in range(10))
    assert tiles.tolist() == [True, False, True, True, False, True]

def test_count_faulty_accepts_ints_and_bools():
    assert count_faulty(ONE_FAULT_OF_TEN) == 1
    assert count_faulty([True, False, False]) == 2
    assert count_faulty(np.ones((2, 3), dtype=bool)) == 0
