# Capacity accounting
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional


class InvalidDateRange(ValueError):
    """Date range is missing an end or ends before it starts."""

    def __init__(self, start: Optional[date], end: Optional[date]):
        self.start = start
        self.end = end
        if start is None or end is None:
            super().__init__("start_date and end_date are required")
        else:
            super().__init__(f"end date {end} is before start date {start}")


@dataclass(frozen=True)
class CapacitySnapshot:
    engineer_id: Optional[int]
    range_start: date
    range_end: date
    max_capacity: int
    allocated: int
    available: int
    is_over_allocated: bool

    def as_dict(self) -> dict:
        return {
            "engineer_id": self.engineer_id,
            "start_date": self.range_start.isoformat(),
            "end_date": self.range_end.isoformat(),
            "max_capacity": self.max_capacity,
            "allocated": self.allocated,
            "available": self.available,
            "is_over_allocated": self.is_over_allocated,
        }


@dataclass(frozen=True)
class CapacityCheck:
    """Result of checking a proposed assignment against the engineer's capacity."""
    max_capacity: int
    allocated: int
    available: int
    proposed: int

    @property
    def total(self) -> int:
        return self.allocated + self.proposed

    @property
    def over_allocated(self) -> bool:
        return self.total > self.max_capacity

    @property
    def message(self) -> str:
        if self.over_allocated:
            return (f"Engineer only has {self.available}% capacity available; "
                    f"this assignment brings allocation to {self.total}% of {self.max_capacity}%")
        if self.available > 0:
            return f"{self.available}% capacity available during this period"
        return "Engineer is fully allocated during this period"

    def as_dict(self) -> dict:
        return {
            "max_capacity": self.max_capacity,
            "allocated": self.allocated,
            "available": self.available,
            "proposed": self.proposed,
            "total": self.total,
            "over_allocated": self.over_allocated,
            "message": self.message,
        }


def validate_range(range_start: date, range_end: date) -> None:
    if range_start is None or range_end is None:
        raise InvalidDateRange(range_start, range_end)
    if range_end < range_start:
        raise InvalidDateRange(range_start, range_end)


def overlaps(start_a: date, end_a: date, start_b: date, end_b: date) -> bool:
    """Closed-interval intersection; ranges that only touch at a boundary overlap."""
    return start_a <= end_b and end_a >= start_b


def _max_capacity(engineer) -> int:
    if engineer is None:
        return 0
    return int(getattr(engineer, "max_capacity", 0) or 0)


def compute_allocation(engineer, assignments: Iterable, range_start: date, range_end: date,
                       exclude: Optional[int] = None) -> int:
    """
    Sum allocation_percentage of the engineer's assignments intersecting
    [range_start, range_end]. `exclude` is the pk of an assignment to skip
    (the one being edited). A missing engineer has zero allocation.
    """
    validate_range(range_start, range_end)
    if engineer is None:
        return 0

    allocated = 0
    for a in assignments or ():
        if a.engineer_id != engineer.pk:
            continue
        if exclude is not None and a.pk == exclude:
            continue
        if overlaps(a.start_date, a.end_date, range_start, range_end):
            allocated += int(a.allocation_percentage or 0)
    return allocated


def available_capacity(engineer, allocated: int) -> int:
    return max(0, _max_capacity(engineer) - allocated)


def is_over_allocated(engineer, allocated: int) -> bool:
    return allocated > _max_capacity(engineer)


def capacity_snapshot(engineer, assignments: Iterable, range_start: date, range_end: date) -> CapacitySnapshot:
    allocated = compute_allocation(engineer, assignments, range_start, range_end)
    return CapacitySnapshot(
        engineer_id=getattr(engineer, "pk", None),
        range_start=range_start,
        range_end=range_end,
        max_capacity=_max_capacity(engineer),
        allocated=allocated,
        available=available_capacity(engineer, allocated),
        is_over_allocated=is_over_allocated(engineer, allocated),
    )


def check_assignment_capacity(engineer, assignments: Iterable, proposed: int,
                              range_start: date, range_end: date,
                              exclude: Optional[int] = None) -> CapacityCheck:
    """
    Check a new or edited assignment before it is saved.
    Over-allocation is reported on the result, never raised: the caller
    decides whether to warn and still writes the assignment.
    """
    allocated = compute_allocation(engineer, assignments, range_start, range_end, exclude=exclude)
    return CapacityCheck(
        max_capacity=_max_capacity(engineer),
        allocated=allocated,
        available=available_capacity(engineer, allocated),
        proposed=int(proposed or 0),
    )


def utilization_percentage(engineer, allocated: int) -> float:
    cap = _max_capacity(engineer)
    if cap <= 0:
        return 0.0
    return allocated / cap * 100.0
