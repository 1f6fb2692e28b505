"""
Assignment endpoints: manager-only writes, per-engineer visibility and the
capacity warning returned on create/update.
"""
from apps.assignments.models import Assignment
from apps.audit.models import AuditLog
from tests.conftest import JAN_1, JAN_15, JAN_31, FEB_15

URL = "/api/v1/assignments/"


def payload(engineer, project, pct, start=JAN_15, end=FEB_15, role="Developer"):
    return {
        "engineer": engineer.pk, "project": project.pk, "allocation_percentage": pct,
        "start_date": start.isoformat(), "end_date": end.isoformat(), "role": role,
    }


def test_create_within_capacity(manager_client, engineer, project):
    resp = manager_client.post(URL, payload(engineer, project, 40), format="json")
    assert resp.status_code == 201
    assert resp.data["success"] is True
    assert resp.data["message"] == "Assignment created"
    cap = resp.data["data"]["capacity"]
    assert cap["allocated"] == 0
    assert cap["total"] == 40
    assert cap["over_allocated"] is False


def test_over_allocation_warns_but_still_creates(manager_client, engineer, project, make_assignment):
    make_assignment(engineer, project, pct=50, start=JAN_1, end=JAN_31)
    resp = manager_client.post(URL, payload(engineer, project, 60), format="json")

    assert resp.status_code == 201
    cap = resp.data["data"]["capacity"]
    assert cap["allocated"] == 50
    assert cap["available"] == 50
    assert cap["total"] == 110
    assert cap["over_allocated"] is True
    assert resp.data["message"] == cap["message"]
    assert Assignment.objects.filter(engineer=engineer).count() == 2

    warning = AuditLog.objects.get(action="CAPACITY_WARNING")
    assert warning.object_id == str(resp.data["data"]["id"])
    assert warning.diff_json["total"] == 110


def test_update_excludes_itself(manager_client, engineer, project, make_assignment):
    make_assignment(engineer, project, pct=50, start=JAN_1, end=JAN_31)
    other = make_assignment(engineer, project, pct=40, start=JAN_1, end=JAN_31)

    resp = manager_client.patch(f"{URL}{other.pk}/", {"allocation_percentage": 50}, format="json")
    assert resp.status_code == 200
    cap = resp.data["data"]["capacity"]
    assert cap["allocated"] == 50
    assert cap["total"] == 100
    assert cap["over_allocated"] is False
    assert not AuditLog.objects.filter(action="CAPACITY_WARNING").exists()


def test_reversed_dates_rejected(manager_client, engineer, project):
    resp = manager_client.post(URL, payload(engineer, project, 40, start=FEB_15, end=JAN_15), format="json")
    assert resp.status_code == 400
    assert resp.data["success"] is False
    assert "end_date" in resp.data["errors"]
    assert not Assignment.objects.exists()


def test_allocation_bounds(manager_client, engineer, project):
    resp = manager_client.post(URL, payload(engineer, project, 0), format="json")
    assert resp.status_code == 400
    assert resp.data["errors"]["allocation_percentage"] == ["Allocation must be at least 1%"]

    resp = manager_client.post(URL, payload(engineer, project, 101), format="json")
    assert resp.status_code == 400
    assert resp.data["errors"]["allocation_percentage"] == ["Allocation cannot exceed 100%"]


def test_allocation_bounds_on_update(manager_client, engineer, project, make_assignment):
    a = make_assignment(engineer, project, pct=30)
    resp = manager_client.patch(f"{URL}{a.pk}/", {"allocation_percentage": 101}, format="json")
    assert resp.status_code == 400
    assert resp.data["success"] is False
    assert Assignment.objects.get(pk=a.pk).allocation_percentage == 30


def test_engineer_cannot_write(engineer_client, engineer, project):
    resp = engineer_client.post(URL, payload(engineer, project, 20), format="json")
    assert resp.status_code == 403
    assert resp.data["success"] is False


def test_engineer_sees_only_own(engineer_client, engineer, make_engineer, project, make_assignment):
    mine = make_assignment(engineer, project, pct=30)
    other = make_engineer(email="other@example.com", name="Olga Other")
    make_assignment(other, project, pct=30)

    resp = engineer_client.get(URL)
    assert resp.status_code == 200
    assert [row["id"] for row in resp.data] == [mine.pk]


def test_manager_sees_all_and_deletion_frees_capacity(manager_client, engineer, project, make_assignment):
    a = make_assignment(engineer, project, pct=70)
    assert len(manager_client.get(URL).data) == 1

    assert manager_client.delete(f"{URL}{a.pk}/").status_code == 204
    resp = manager_client.get(
        f"/api/v1/engineers/{engineer.pk}/capacity/",
        {"start_date": JAN_1.isoformat(), "end_date": JAN_31.isoformat()},
    )
    assert resp.data["data"]["allocated"] == 0
    assert resp.data["data"]["available"] == 100


def test_requires_authentication(api_client):
    assert api_client.get(URL).status_code == 401
