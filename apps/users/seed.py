# Demo data for local development
from datetime import date, timedelta

from django.contrib.auth import get_user_model
from django.db import transaction

User = get_user_model()

DEMO_PASSWORD = "password123"

MANAGER = {"email": "manager@example.com", "name": "Sarah Manager", "department": "Engineering"}

ENGINEERS = [
    {"email": "john@example.com", "name": "John Smith", "skills": ["React", "Node.js", "TypeScript"],
     "seniority": "senior", "max_capacity": 100},
    {"email": "jane@example.com", "name": "Jane Doe", "skills": ["Python", "Django", "PostgreSQL"],
     "seniority": "mid", "max_capacity": 100},
    {"email": "mike@example.com", "name": "Mike Johnson", "skills": ["Java", "AWS", "Docker"],
     "seniority": "junior", "max_capacity": 50},
    {"email": "emma@example.com", "name": "Emma Wilson", "skills": ["React", "Python", "Machine Learning"],
     "seniority": "senior", "max_capacity": 100},
]

# (name, description, required skills, team size, start offset, end offset in days)
PROJECTS = [
    ("Customer Portal", "Self-service portal for customers", ["React", "Node.js", "TypeScript"], 3, -30, 60),
    ("Data Pipeline", "Nightly ETL into the warehouse", ["Python", "PostgreSQL", "AWS"], 2, -10, 90),
    ("Mobile App", "Companion mobile application", ["React", "TypeScript"], 2, 20, 120),
]

# (engineer email, project name, allocation %, role)
ASSIGNMENTS = [
    ("john@example.com", "Customer Portal", 60, "Tech Lead"),
    ("jane@example.com", "Data Pipeline", 80, "Backend Engineer"),
    ("mike@example.com", "Data Pipeline", 50, "Developer"),
    ("emma@example.com", "Customer Portal", 40, "Frontend Engineer"),
    ("emma@example.com", "Mobile App", 50, "Frontend Engineer"),
]


def _user(email, role, **fields):
    user = User.objects.filter(email=email).first()
    if user is None:
        user = User.objects.create_user(email=email, password=DEMO_PASSWORD, role=role, **fields)
    return user


@transaction.atomic
def create_seed_data(today=None) -> dict:
    """Create demo users, projects and assignments; safe to run repeatedly."""
    from apps.assignments.models import Assignment
    from apps.projects.models import Project

    today = today or date.today()
    manager = _user(MANAGER["email"], User.UserRole.MANAGER,
                    name=MANAGER["name"], department=MANAGER["department"])

    engineers = {}
    for row in ENGINEERS:
        user = _user(row["email"], User.UserRole.ENGINEER, name=row["name"], department="Engineering")
        prof = user.engineer_profile
        prof.skills = row["skills"]
        prof.seniority = row["seniority"]
        prof.max_capacity = row["max_capacity"]
        prof.save()
        engineers[row["email"]] = prof

    projects = {}
    for name, description, skills, team_size, start, end in PROJECTS:
        project = Project.objects.filter(name=name).first()
        if project is None:
            project = Project.objects.create(
                name=name, description=description, required_skills=skills, team_size=team_size,
                start_date=today + timedelta(days=start), end_date=today + timedelta(days=end),
                status="active" if start <= 0 else "planning", manager=manager,
            )
        projects[name] = project

    created = 0
    for email, project_name, pct, role in ASSIGNMENTS:
        project = projects[project_name]
        _, was_created = Assignment.objects.get_or_create(
            engineer=engineers[email], project=project,
            defaults={"allocation_percentage": pct, "role": role,
                      "start_date": project.start_date, "end_date": project.end_date},
        )
        created += int(was_created)

    return {
        "manager": manager.email,
        "engineers": len(engineers),
        "projects": len(projects),
        "assignments_created": created,
        "password": DEMO_PASSWORD,
    }
