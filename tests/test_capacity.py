"""
Capacity accounting: allocation sums, availability, over-allocation and the
warning-only policy for new or edited assignments.
"""
from datetime import date, timedelta
from types import SimpleNamespace

import pytest
from hypothesis import given, strategies as st

from apps.capacity.services import (
    InvalidDateRange,
    available_capacity,
    capacity_snapshot,
    check_assignment_capacity,
    compute_allocation,
    is_over_allocated,
    overlaps,
    utilization_percentage,
)


def eng(pk=1, max_capacity=100):
    return SimpleNamespace(pk=pk, max_capacity=max_capacity)


def asg(pk, pct, start, end, engineer_id=1):
    return SimpleNamespace(pk=pk, engineer_id=engineer_id, allocation_percentage=pct,
                           start_date=start, end_date=end)


JAN_1, JAN_15, JAN_31 = date(2025, 1, 1), date(2025, 1, 15), date(2025, 1, 31)
FEB_1, FEB_15 = date(2025, 2, 1), date(2025, 2, 15)


# =============================================================================
# compute_allocation
# =============================================================================


def test_overlapping_assignment_is_counted():
    e = eng()
    assert compute_allocation(e, [asg(1, 50, JAN_1, JAN_31)], JAN_15, FEB_15) == 50


def test_non_overlapping_assignment_is_ignored():
    e = eng()
    assert compute_allocation(e, [asg(1, 50, JAN_1, JAN_15)], FEB_1, FEB_15) == 0


def test_boundary_touching_ranges_overlap():
    e = eng()
    # ends on the first day of the query
    assert compute_allocation(e, [asg(1, 30, JAN_1, JAN_15)], JAN_15, JAN_31) == 30
    # starts on the last day of the query
    assert compute_allocation(e, [asg(2, 20, JAN_31, FEB_15)], JAN_15, JAN_31) == 20


def test_other_engineers_assignments_are_ignored():
    e = eng(pk=1)
    items = [asg(1, 40, JAN_1, JAN_31), asg(2, 70, JAN_1, JAN_31, engineer_id=2)]
    assert compute_allocation(e, items, JAN_1, JAN_31) == 40


def test_excluded_assignment_is_skipped():
    e = eng()
    items = [asg(1, 40, JAN_1, JAN_31), asg(2, 30, JAN_1, JAN_31)]
    assert compute_allocation(e, items, JAN_1, JAN_31, exclude=2) == 40


def test_missing_engineer_or_assignments_count_as_zero():
    assert compute_allocation(None, [asg(1, 40, JAN_1, JAN_31)], JAN_1, JAN_31) == 0
    assert compute_allocation(eng(), None, JAN_1, JAN_31) == 0
    assert compute_allocation(eng(), [], JAN_1, JAN_31) == 0


def test_reversed_range_is_rejected():
    with pytest.raises(InvalidDateRange):
        compute_allocation(eng(), [], JAN_31, JAN_1)


def test_missing_range_is_rejected():
    with pytest.raises(InvalidDateRange) as exc:
        compute_allocation(eng(), [], None, JAN_1)
    assert "required" in str(exc.value)


def test_single_day_range_is_valid():
    assert compute_allocation(eng(), [asg(1, 25, JAN_1, JAN_31)], JAN_15, JAN_15) == 25


# =============================================================================
# available / over-allocated / snapshot
# =============================================================================


def test_available_capacity_never_negative():
    assert available_capacity(eng(max_capacity=100), 130) == 0
    assert available_capacity(eng(max_capacity=50), 20) == 30


def test_missing_engineer_has_no_capacity():
    assert available_capacity(None, 0) == 0
    assert is_over_allocated(None, 0) is False


def test_over_allocated_is_strictly_greater():
    e = eng(max_capacity=80)
    assert is_over_allocated(e, 80) is False
    assert is_over_allocated(e, 81) is True


def test_snapshot_example_january():
    e = eng()
    snap = capacity_snapshot(e, [asg(1, 50, JAN_1, JAN_31)], JAN_15, FEB_15)
    assert snap.allocated == 50
    assert snap.available == 50
    assert snap.is_over_allocated is False
    assert snap.as_dict()["start_date"] == "2025-01-15"


def test_utilization_percentage_handles_zero_capacity():
    assert utilization_percentage(eng(max_capacity=0), 10) == 0.0
    assert utilization_percentage(eng(max_capacity=50), 25) == 50.0


# =============================================================================
# create / update policy
# =============================================================================


def test_new_assignment_over_capacity_warns():
    e = eng()
    check = check_assignment_capacity(e, [asg(1, 50, JAN_1, JAN_31)], 60, JAN_15, FEB_15)
    assert check.allocated == 50
    assert check.total == 110
    assert check.over_allocated is True
    assert "50%" in check.message


def test_new_assignment_within_capacity_does_not_warn():
    e = eng()
    check = check_assignment_capacity(e, [asg(1, 50, JAN_1, JAN_31)], 50, JAN_15, FEB_15)
    assert check.total == 100
    assert check.over_allocated is False


def test_edit_excludes_the_assignment_being_edited():
    e = eng()
    items = [asg(1, 50, JAN_1, JAN_31), asg(2, 40, JAN_1, JAN_31)]
    # raising #2 from 40 to 50 keeps the engineer at 100
    check = check_assignment_capacity(e, items, 50, JAN_1, JAN_31, exclude=2)
    assert check.allocated == 50
    assert check.over_allocated is False


def test_check_as_dict_keys():
    data = check_assignment_capacity(eng(), [], 30, JAN_1, JAN_31).as_dict()
    assert data == {
        "max_capacity": 100, "allocated": 0, "available": 100, "proposed": 30,
        "total": 30, "over_allocated": False,
        "message": "100% capacity available during this period",
    }


# =============================================================================
# properties
# =============================================================================

BASE = date(2025, 1, 1)
day_offsets = st.integers(min_value=0, max_value=120)


@st.composite
def ranges(draw):
    a, b = draw(day_offsets), draw(day_offsets)
    lo, hi = min(a, b), max(a, b)
    return BASE + timedelta(days=lo), BASE + timedelta(days=hi)


@st.composite
def assignment_lists(draw):
    out = []
    for i in range(draw(st.integers(min_value=0, max_value=8))):
        start, end = draw(ranges())
        out.append(asg(i + 1, draw(st.integers(min_value=1, max_value=100)), start, end,
                       engineer_id=draw(st.sampled_from([1, 2]))))
    return out


@given(st.integers(min_value=0, max_value=100), assignment_lists(), ranges())
def test_available_is_never_negative(cap, items, window):
    e = eng(max_capacity=cap)
    allocated = compute_allocation(e, items, *window)
    assert available_capacity(e, allocated) >= 0


@given(st.integers(min_value=0, max_value=100), assignment_lists(), ranges())
def test_allocated_plus_available_is_capacity_when_not_over(cap, items, window):
    e = eng(max_capacity=cap)
    allocated = compute_allocation(e, items, *window)
    if allocated <= cap:
        assert allocated + available_capacity(e, allocated) == cap
    else:
        assert is_over_allocated(e, allocated)


@given(ranges(), ranges())
def test_overlap_is_symmetric(a, b):
    assert overlaps(a[0], a[1], b[0], b[1]) == overlaps(b[0], b[1], a[0], a[1])
