"""
Audit trail: model signals, HTTP access logging and the manager-only log API.
"""
from apps.audit.models import AuditLog
from apps.audit.utils import log_event


def test_model_changes_are_recorded(project):
    created = AuditLog.objects.get(object_type="projects.project", action="CREATE")
    assert created.object_id == str(project.pk)
    assert created.diff_json["after"]["name"] == "Portal"

    project.name = "Renamed"
    project.save()
    assert AuditLog.objects.filter(object_type="projects.project", action="UPDATE").exists()

    pk = project.pk
    project.delete()
    deleted = AuditLog.objects.get(object_type="projects.project", action="DELETE")
    assert deleted.object_id == str(pk)
    assert deleted.diff_json["before"]["name"] == "Renamed"


def test_password_is_never_logged(manager):
    entry = AuditLog.objects.filter(object_type="users.customuser", object_id=str(manager.pk)).first()
    assert entry is not None
    assert "password" not in entry.diff_json["after"]
    assert entry.diff_json["after"]["email"] == manager.email


def test_disabled_audit_records_nothing(settings, make_manager):
    settings.AUDIT_ENABLED = False
    make_manager(email="quiet@example.com")
    assert not AuditLog.objects.exists()


def test_log_event_serializes_dates(manager, project):
    entry = log_event(actor=manager, action="CAPACITY_WARNING", obj=project,
                      diff_json={"start": project.start_date})
    assert entry.object_type == "projects.project"
    assert entry.diff_json == {"start": "2025-01-01"}
    assert entry.actor == manager


def test_http_logging_when_enabled(settings, manager_client):
    settings.AUDIT_LOG_HTTP = True
    manager_client.get("/api/v1/projects/")
    entry = AuditLog.objects.get(action="VIEW")
    assert entry.object_type == "HTTP GET"
    assert entry.diff_json == {"path": "/api/v1/projects/", "status": 200}


def test_no_http_logging_by_default(manager_client):
    manager_client.get("/api/v1/projects/")
    assert not AuditLog.objects.filter(action="VIEW").exists()


def test_log_api_is_manager_only(manager_client, engineer_client, project):
    resp = manager_client.get("/api/v1/audit/logs/", {"action": "CREATE"})
    assert resp.status_code == 200
    assert all(row["action"] == "CREATE" for row in resp.data)
    assert engineer_client.get("/api/v1/audit/logs/").status_code == 403


def test_capacity_warnings_endpoint(manager_client, engineer, make_engineer, project, make_assignment):
    other = make_engineer(email="other@example.com")
    make_assignment(engineer, project, pct=80)
    make_assignment(other, project, pct=80)
    for target in (engineer, other):
        manager_client.post("/api/v1/assignments/", {
            "engineer": target.pk, "project": project.pk, "allocation_percentage": 40,
            "start_date": "2025-01-10", "end_date": "2025-01-20",
        }, format="json")

    resp = manager_client.get("/api/v1/audit/logs/capacity-warnings/")
    assert resp.status_code == 200
    assert len(resp.data["data"]) == 2
    assert resp.data["data"][0]["action_display"] == "Capacity warning"

    resp = manager_client.get("/api/v1/audit/logs/capacity-warnings/", {"engineer": engineer.pk})
    rows = resp.data["data"]
    assert len(rows) == 1
    assert rows[0]["diff_json"]["total"] == 120
    assert rows[0]["diff_json"]["start_date"] == "2025-01-10"


def test_capacity_warnings_bad_engineer(manager_client):
    resp = manager_client.get("/api/v1/audit/logs/capacity-warnings/", {"engineer": "abc"})
    assert resp.status_code == 400
