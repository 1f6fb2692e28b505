from collections import defaultdict
from datetime import date
from typing import Iterable, Optional

from apps.capacity.services import (
    CapacityCheck, CapacitySnapshot, capacity_snapshot, check_assignment_capacity,
    compute_allocation, validate_range,
)
from .models import Assignment


def overlapping_assignments(engineer, range_start: date, range_end: date):
    """Assignments of the engineer whose interval touches [range_start, range_end]."""
    validate_range(range_start, range_end)
    if engineer is None or engineer.pk is None:
        return Assignment.objects.none()
    return Assignment.objects.filter(
        engineer_id=engineer.pk, start_date__lte=range_end, end_date__gte=range_start
    )


def engineer_snapshot(engineer, range_start: date, range_end: date) -> CapacitySnapshot:
    qs = overlapping_assignments(engineer, range_start, range_end)
    return capacity_snapshot(engineer, list(qs), range_start, range_end)


def check_capacity(engineer, proposed: int, range_start: date, range_end: date,
                   exclude: Optional[int] = None) -> CapacityCheck:
    qs = overlapping_assignments(engineer, range_start, range_end)
    return check_assignment_capacity(engineer, list(qs), proposed, range_start, range_end, exclude=exclude)


def current_allocations(engineers: Iterable, on: Optional[date] = None) -> dict:
    """
    {engineer_id: allocated %} for the given day (today by default), using
    a single query for all engineers.
    """
    on = on or date.today()
    engineers = list(engineers)
    by_engineer = defaultdict(list)
    qs = Assignment.objects.filter(
        engineer_id__in=[e.pk for e in engineers], start_date__lte=on, end_date__gte=on
    )
    for a in qs:
        by_engineer[a.engineer_id].append(a)
    return {e.pk: compute_allocation(e, by_engineer[e.pk], on, on) for e in engineers}
