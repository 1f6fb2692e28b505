"""
Shared fixtures: users of both roles, projects, assignments and API clients.
"""
from datetime import date

import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from apps.assignments.models import Assignment
from apps.projects.models import Project

User = get_user_model()

JAN_1 = date(2025, 1, 1)
JAN_15 = date(2025, 1, 15)
JAN_31 = date(2025, 1, 31)
FEB_15 = date(2025, 2, 15)
MAR_31 = date(2025, 3, 31)


@pytest.fixture
def make_manager(db):
    def make(email="manager@example.com", name="Maria Manager"):
        return User.objects.create_user(email=email, password="Str0ng-pass!", role="MANAGER", name=name)
    return make


@pytest.fixture
def make_engineer(db):
    def make(email="eng@example.com", name="Erin Engineer", skills=None, seniority="mid", max_capacity=100):
        user = User.objects.create_user(email=email, password="Str0ng-pass!", role="ENGINEER", name=name)
        prof = user.engineer_profile
        prof.skills = skills if skills is not None else ["Python", "React"]
        prof.seniority = seniority
        prof.max_capacity = max_capacity
        prof.save()
        return prof
    return make


@pytest.fixture
def manager(make_manager):
    return make_manager()


@pytest.fixture
def engineer(make_engineer):
    return make_engineer()


@pytest.fixture
def make_project(db):
    def make(manager, name="Portal", start=JAN_1, end=MAR_31, skills=None, status="planning"):
        return Project.objects.create(
            name=name, description="", start_date=start, end_date=end,
            required_skills=skills if skills is not None else ["Python", "Go"],
            team_size=2, status=status, manager=manager,
        )
    return make


@pytest.fixture
def project(make_project, manager):
    return make_project(manager)


@pytest.fixture
def make_assignment(db):
    def make(engineer, project, pct=50, start=JAN_1, end=JAN_31, role="Developer"):
        return Assignment.objects.create(
            engineer=engineer, project=project, allocation_percentage=pct,
            start_date=start, end_date=end, role=role,
        )
    return make


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def manager_client(manager):
    client = APIClient()
    client.force_authenticate(user=manager)
    return client


@pytest.fixture
def engineer_client(engineer):
    client = APIClient()
    client.force_authenticate(user=engineer.user)
    return client
