from collections import Counter
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional

from apps.capacity.services import (
    available_capacity, compute_allocation, is_over_allocated, overlaps, utilization_percentage,
)

UNDER_UTILIZED_BELOW = 60.0
TOP_SKILLS = 10


def _round2(x: float) -> float:
    return float(Decimal(x).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def _norm(skills) -> dict:
    return {s.strip().lower(): s for s in (skills or []) if s and s.strip()}


def skill_match(engineer_skills, required_skills) -> tuple[float, list]:
    """
    Share of the project's required skills the engineer has, in percent,
    plus the matching skills. A project without requirements scores 0.
    """
    required = _norm(required_skills)
    if not required:
        return 0.0, []
    have = _norm(engineer_skills)
    matching = [required[k] for k in required if k in have]
    return _round2(len(matching) / len(required) * 100.0), matching


def utilization_rows(engineers: Iterable, allocations: dict) -> list[dict]:
    rows = []
    for e in engineers:
        allocated = allocations.get(e.pk, 0)
        rows.append({
            "engineer_id": e.pk,
            "name": e.name,
            "seniority": e.seniority,
            "skills": list(e.skills or []),
            "max_capacity": e.max_capacity,
            "current_allocation": allocated,
            "available": available_capacity(e, allocated),
            "utilization_percentage": _round2(utilization_percentage(e, allocated)),
            "is_over_allocated": is_over_allocated(e, allocated),
        })
    return rows


def project_status_distribution(projects: Iterable) -> list[dict]:
    projects = list(projects)
    counts = Counter(p.status for p in projects)
    total = len(projects)
    out = []
    for status in ("planning", "active", "completed"):
        n = counts.get(status, 0)
        out.append({"status": status, "count": n, "percentage": _round2(n / total * 100.0) if total else 0.0})
    return out


def skills_distribution(engineers: Iterable, top: int = TOP_SKILLS) -> list[dict]:
    engineers = list(engineers)
    counts = Counter()
    spelling = {}
    for e in engineers:
        skills = _norm(e.skills)
        counts.update(skills.keys())
        for key, s in skills.items():
            spelling.setdefault(key, s.strip())
    # most common first, ties alphabetically
    ranked = sorted(counts.items(), key=lambda kv: (-kv[1], kv[0]))[:top]
    return [
        {"skill": spelling[key], "count": n, "percentage": _round2(n / len(engineers) * 100.0)}
        for key, n in ranked
    ]


def seniority_workload(engineers: Iterable, allocations: dict) -> list[dict]:
    acc = {}
    for e in engineers:
        level = e.seniority or "unknown"
        row = acc.setdefault(level, {"count": 0, "allocated": 0, "capacity": 0})
        row["count"] += 1
        row["allocated"] += allocations.get(e.pk, 0)
        row["capacity"] += e.max_capacity
    return [
        {
            "seniority": level,
            "engineers": row["count"],
            "total_capacity": row["capacity"],
            "total_allocation": row["allocated"],
            "avg_utilization": _round2(row["allocated"] / row["capacity"] * 100.0) if row["capacity"] else 0.0,
        }
        for level, row in acc.items()
    ]


def assignment_efficiency(assignments: Iterable, on: date) -> list[dict]:
    rows = []
    for a in assignments:
        score, matching = skill_match(a.engineer.skills, a.project.required_skills)
        rows.append({
            "assignment_id": a.pk,
            "engineer_name": a.engineer.name,
            "project_name": a.project.name,
            "allocation": a.allocation_percentage,
            "skill_match": score,
            "matching_skills": matching,
            "duration_days": (a.end_date - a.start_date).days,
            "is_active": overlaps(a.start_date, a.end_date, on, on),
        })
    return rows


def kpis(utilization: list[dict], statuses: list[dict], efficiency: list[dict]) -> dict:
    total_projects = sum(s["count"] for s in statuses)
    by_status = {s["status"]: s["count"] for s in statuses}
    n = len(utilization)
    return {
        "average_utilization": _round2(sum(r["utilization_percentage"] for r in utilization) / n) if n else 0.0,
        "over_allocated_engineers": sum(1 for r in utilization if r["is_over_allocated"]),
        "under_utilized_engineers": sum(
            1 for r in utilization
            if not r["is_over_allocated"] and r["utilization_percentage"] < UNDER_UTILIZED_BELOW
        ),
        "project_completion_rate": (
            _round2(by_status.get("completed", 0) / total_projects * 100.0) if total_projects else 0.0
        ),
        "active_project_count": by_status.get("active", 0),
        "average_skill_match": (
            _round2(sum(r["skill_match"] for r in efficiency) / len(efficiency)) if efficiency else 0.0
        ),
        "total_team_capacity": sum(r["max_capacity"] for r in utilization),
        "total_allocated_capacity": sum(r["current_allocation"] for r in utilization),
    }


# ---- database-backed entry points ----

def team_utilization(on: Optional[date] = None) -> list[dict]:
    from apps.users.models import EngineerProfile
    from apps.assignments.services import current_allocations

    engineers = list(EngineerProfile.objects.select_related("user"))
    return utilization_rows(engineers, current_allocations(engineers, on))


def team_overview(on: Optional[date] = None) -> dict:
    from apps.users.models import EngineerProfile
    from apps.projects.models import Project
    from apps.assignments.models import Assignment
    from apps.assignments.services import current_allocations

    on = on or date.today()
    engineers = list(EngineerProfile.objects.select_related("user"))
    allocations = current_allocations(engineers, on)

    utilization = utilization_rows(engineers, allocations)
    statuses = project_status_distribution(Project.objects.all())
    efficiency = assignment_efficiency(
        Assignment.objects.select_related("engineer", "engineer__user", "project"), on
    )
    return {
        "as_of": on.isoformat(),
        "utilization": utilization,
        "project_status": statuses,
        "skills": skills_distribution(engineers),
        "seniority": seniority_workload(engineers, allocations),
        "assignment_efficiency": efficiency,
        "kpis": kpis(utilization, statuses, efficiency),
    }


def rank_candidates_for_project(project) -> list[dict]:
    """
    Every engineer scored against the project's required skills, with the
    capacity they have left over the project's dates. Best match first,
    then most available.
    """
    from apps.users.models import EngineerProfile
    from apps.assignments.models import Assignment

    engineers = list(EngineerProfile.objects.select_related("user"))
    window = list(Assignment.objects.filter(
        engineer__in=engineers, start_date__lte=project.end_date, end_date__gte=project.start_date
    ))
    rows = []
    for e in engineers:
        score, matching = skill_match(e.skills, project.required_skills)
        allocated = compute_allocation(e, window, project.start_date, project.end_date)
        rows.append({
            "engineer_id": e.pk,
            "name": e.name,
            "seniority": e.seniority,
            "skills": list(e.skills or []),
            "matching_skills": matching,
            "skill_match": score,
            "max_capacity": e.max_capacity,
            "allocated": allocated,
            "available": available_capacity(e, allocated),
        })
    rows.sort(key=lambda r: (-r["skill_match"], -r["available"], r["name"]))
    return rows
