# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false

"""
Tests for the Developer Portal HTTP API.
Every request goes through the full middleware stack against in-memory SQLite.
"""

import uuid

import pytest

from app.core.config import settings
from app.services.pagination import MAX_OFFSET

API = "/api/v1"
GROUP_ID = "6f1c2a3e-8d4b-4c1a-9e7f-0a1b2c3d4e5f"
ORG_ID = "0b7e9c2d-1f3a-4e5b-8c6d-7a8b9c0d1e2f"


# ============================================
# Helpers
# ============================================
def create_team(client, name="core-platform", metadata=None):
    response = client.post(f"{API}/teams", json={
        "group_id": GROUP_ID, "name": name, "title": name.replace("-", " ").title(),
        "metadata": metadata,
    })
    assert response.status_code == 201, response.text
    return response.json()


def create_member(client, iuser, team_id=None, metadata=None):
    response = client.post(f"{API}/members", json={
        "organization_id": ORG_ID, "team_id": team_id,
        "full_name": f"User {iuser}", "first_name": "User", "last_name": iuser,
        "email": f"{iuser.lower()}@example.com", "iuser": iuser,
        "metadata": metadata,
    })
    assert response.status_code == 201, response.text
    return response.json()


def create_call(client, team_id, **overrides):
    body = {"team_id": team_id, "title": "Payments down", "severity": "critical"}
    body.update(overrides)
    response = client.post(f"{API}/outage-calls", json=body)
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def call_and_members(client):
    team = create_team(client)
    call = create_call(client, team["id"])
    members = [create_member(client, f"I{n:06d}", team["id"]) for n in range(3)]
    return call, members


# ============================================
# Health & Metrics
# ============================================
class TestSystem:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["service"] == settings.SERVICE_NAME

    def test_readiness(self, client):
        response = client.get("/health/ready")
        assert response.status_code == 200
        assert response.json()["database"] == "connected"

    def test_metrics_exposed(self, client):
        client.get(f"{API}/teams")
        response = client.get("/metrics")
        assert response.status_code == 200
        assert "portal_requests_total" in response.text

    def test_request_id_generated(self, client):
        assert client.get("/health").headers.get("X-Request-ID")

    def test_request_id_propagated(self, client):
        response = client.get("/health", headers={"X-Request-ID": "req-42"})
        assert response.headers["X-Request-ID"] == "req-42"


class TestAuth:
    @pytest.fixture
    def auth_on(self, monkeypatch):
        monkeypatch.setattr(settings, "API_KEYS", {"secret-key"})
        monkeypatch.setattr(settings, "AUTH_ENABLED", True)

    def test_missing_key(self, client, auth_on):
        assert client.get(f"{API}/teams").status_code == 401

    def test_invalid_key(self, client, auth_on):
        response = client.get(f"{API}/teams", headers={"X-API-Key": "wrong"})
        assert response.status_code == 403

    def test_valid_key(self, client, auth_on):
        response = client.get(f"{API}/teams", headers={"X-API-Key": "secret-key"})
        assert response.status_code == 200

    def test_health_bypasses_auth(self, client, auth_on):
        assert client.get("/health").status_code == 200


# ============================================
# Teams
# ============================================
class TestTeams:
    def test_create_and_get_with_jira_team(self, client):
        team = create_team(client, metadata={"jira": {"team": "CORE"}})
        create_member(client, "I100001", team["id"])

        response = client.get(f"{API}/teams/{team['id']}")

        assert response.status_code == 200
        data = response.json()
        assert data["jira_team"] == "CORE"
        assert [m["iuser"] for m in data["members"]] == ["I100001"]

    def test_duplicate_name_conflicts(self, client):
        create_team(client, "dup")
        response = client.post(f"{API}/teams", json={
            "group_id": GROUP_ID, "name": "dup", "title": "Dup",
        })
        assert response.status_code == 409
        assert response.json()["error"] == "TeamExists"

    def test_get_unknown_team(self, client):
        response = client.get(f"{API}/teams/{uuid.uuid4()}")
        assert response.status_code == 404
        assert response.json()["detail"] == "team not found"

    def test_malformed_team_id(self, client):
        response = client.get(f"{API}/teams/not-a-uuid")
        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "team_id"

    def test_list_paginates_with_normalized_params(self, client):
        for n in range(3):
            create_team(client, f"team-{n}")
        response = client.get(f"{API}/teams", params={"page": "0", "page_size": "500"})
        data = response.json()
        assert data["page"] == 1
        assert data["page_size"] == 20
        assert data["total"] == 3

    def test_list_second_page(self, client):
        for n in range(5):
            create_team(client, f"team-{n}")
        data = client.get(f"{API}/teams", params={"page": 2, "page_size": 2}).json()
        assert [t["name"] for t in data["teams"]] == ["team-2", "team-3"]

    def test_list_by_group(self, client):
        create_team(client, "mine")
        data = client.get(f"{API}/teams", params={"group_id": str(uuid.uuid4())}).json()
        assert data["total"] == 0

    def test_search(self, client):
        create_team(client, "payments-core")
        create_team(client, "search-infra")
        data = client.get(f"{API}/teams/search", params={"q": "PAYMENTS"}).json()
        assert [t["name"] for t in data["teams"]] == ["payments-core"]

    def test_merge_metadata(self, client):
        team = create_team(client, metadata={"jira": {"team": "CORE"}, "slack": "#core"})
        response = client.patch(f"{API}/teams/{team['id']}/metadata",
                                json={"metadata": {"slack": "#core-oncall"}})
        assert response.status_code == 200
        assert response.json()["metadata"] == {"jira": {"team": "CORE"}, "slack": "#core-oncall"}

    def test_merge_metadata_unknown_team(self, client):
        response = client.patch(f"{API}/teams/{uuid.uuid4()}/metadata", json={"metadata": {}})
        assert response.status_code == 404

    def test_delete(self, client):
        team = create_team(client)
        assert client.delete(f"{API}/teams/{team['id']}").status_code == 204
        assert client.get(f"{API}/teams/{team['id']}").status_code == 404
        assert client.delete(f"{API}/teams/{team['id']}").status_code == 404

    def test_delete_cascades_to_dependents(self, client):
        team = create_team(client)
        call = create_call(client, team["id"])
        member = create_member(client, "I300001", team["id"])
        component = client.post(f"{API}/components", json={
            "owner_id": team["id"], "name": "billing", "title": "Billing",
        }).json()
        client.post(f"{API}/outage-calls/{call['id']}/assignees",
                    json={"member_id": member["id"], "role": "primary"})

        assert client.delete(f"{API}/teams/{team['id']}").status_code == 204

        assert client.get(f"{API}/outage-calls/{call['id']}").status_code == 404
        assert client.get(f"{API}/components/{component['id']}").status_code == 404
        kept = client.get(f"{API}/members/{member['id']}").json()
        assert kept["team_id"] is None
        assert client.get(f"{API}/members/{member['id']}/assignments").json() == []

    def test_detail_includes_members_beyond_one_page(self, client, make_member):
        team = create_team(client)
        for _ in range(settings.MAX_PAGE_SIZE + 5):
            make_member(team_id=team["id"])

        data = client.get(f"{API}/teams/{team['id']}").json()

        assert data["member_count"] == settings.MAX_PAGE_SIZE + 5
        assert len(data["members"]) == settings.MAX_PAGE_SIZE + 5
        assert len({m["id"] for m in data["members"]}) == settings.MAX_PAGE_SIZE + 5

    def test_list_with_huge_page_number(self, client):
        create_team(client)
        response = client.get(f"{API}/teams", params={"page": "99999999999999999999"})

        assert response.status_code == 200
        data = response.json()
        assert data["teams"] == []
        assert data["page"] == MAX_OFFSET // data["page_size"] + 1


# ============================================
# Members
# ============================================
class TestMembers:
    def test_create_and_get(self, client):
        member = create_member(client, "I200001")
        response = client.get(f"{API}/members/{member['id']}")
        assert response.status_code == 200
        assert response.json()["email"] == "i200001@example.com"

    def test_duplicate_email_or_iuser(self, client):
        create_member(client, "I200002")
        response = client.post(f"{API}/members", json={
            "organization_id": ORG_ID, "full_name": "Other", "first_name": "O",
            "last_name": "Ther", "email": "other@example.com", "iuser": "I200002",
        })
        assert response.status_code == 409

    def test_unknown_team(self, client):
        response = client.post(f"{API}/members", json={
            "organization_id": ORG_ID, "team_id": str(uuid.uuid4()),
            "full_name": "X Y", "first_name": "X", "last_name": "Y",
            "email": "xy@example.com", "iuser": "I200003",
        })
        assert response.status_code == 404
        assert response.json()["error"] == "TeamNotFound"

    def test_schema_error_is_422(self, client):
        response = client.post(f"{API}/members", json={"organization_id": ORG_ID})
        assert response.status_code == 422

    def test_list_by_team(self, client):
        team = create_team(client)
        for n in range(3):
            create_member(client, f"I30000{n}", team["id"])
        data = client.get(f"{API}/teams/{team['id']}/members", params={"page_size": 2}).json()
        assert data["total"] == 3
        assert len(data["members"]) == 2

    def test_merge_metadata(self, client):
        member = create_member(client, "I200004", metadata={"pager": {"id": 1}, "tz": "UTC"})
        response = client.patch(f"{API}/members/{member['id']}/metadata",
                                json={"metadata": {"pager": {"id": 2}}})
        assert response.json()["metadata"] == {"pager": {"id": 2}, "tz": "UTC"}


class TestQuickLinks:
    def test_add_list_remove(self, client):
        member = create_member(client, "I400001", metadata={"tz": "CET"})
        url = f"{API}/members/{member['id']}/quick-links"

        added = client.post(url, json={"url": "https://grafana.example.com", "title": "Grafana"})
        assert added.status_code == 201
        assert added.json()["quick_links"][0]["title"] == "Grafana"

        listed = client.get(url).json()["quick_links"]
        assert [link["url"] for link in listed] == ["https://grafana.example.com"]

        removed = client.delete(url, params={"url": "https://grafana.example.com"})
        assert removed.status_code == 200
        assert removed.json()["quick_links"] == []
        assert client.get(f"{API}/members/{member['id']}").json()["metadata"]["tz"] == "CET"

    def test_duplicate_url(self, client):
        member = create_member(client, "I400002")
        url = f"{API}/members/{member['id']}/quick-links"
        client.post(url, json={"url": "https://wiki.example.com", "title": "Wiki"})
        response = client.post(url, json={"url": "https://wiki.example.com", "title": "Again"})
        assert response.status_code == 409

    def test_remove_unknown_link(self, client):
        member = create_member(client, "I400003")
        response = client.delete(f"{API}/members/{member['id']}/quick-links",
                                 params={"url": "https://nowhere.example.com"})
        assert response.status_code == 404
        assert response.json()["error"] == "LinkNotFound"

    def test_non_http_url_rejected(self, client):
        member = create_member(client, "I400004")
        response = client.post(f"{API}/members/{member['id']}/quick-links",
                               json={"url": "ftp://files", "title": "Files"})
        assert response.status_code == 422


# ============================================
# Components
# ============================================
class TestComponents:
    def test_list_projected_view(self, client):
        team = create_team(client)
        response = client.post(f"{API}/components", json={
            "owner_id": team["id"], "name": "checkout", "title": "Checkout",
            "metadata": {
                "ci": {"qos": "green"},
                "sonar": {"project_id": "checkout"},
                "github": {"url": "https://github.com/acme/checkout"},
            },
        })
        assert response.status_code == 201

        views = client.get(f"{API}/components", params={"team-id": team["id"]}).json()
        assert views == [{
            "id": response.json()["id"], "owner_id": team["id"], "project_id": None,
            "name": "checkout", "title": "Checkout", "description": "",
            "qos": "green", "sonar": settings.SONAR_DASHBOARD_URL + "checkout",
            "github": "https://github.com/acme/checkout",
        }]

    def test_malformed_metadata_fields_empty(self, client):
        team = create_team(client)
        client.post(f"{API}/components", json={
            "owner_id": team["id"], "name": "legacy", "title": "Legacy",
            "metadata": {"ci": "none", "github": {"url": 3}},
        })
        view = client.get(f"{API}/teams/{team['id']}/components").json()[0]
        assert (view["qos"], view["sonar"], view["github"]) == ("", "", "")

    def test_owner_must_exist(self, client):
        response = client.post(f"{API}/components", json={
            "owner_id": str(uuid.uuid4()), "name": "x", "title": "X",
        })
        assert response.status_code == 404

    def test_get_unknown_component(self, client):
        assert client.get(f"{API}/components/{uuid.uuid4()}").status_code == 404


# ============================================
# Outage calls
# ============================================
class TestOutageCalls:
    def test_create_requires_team(self, client):
        response = client.post(f"{API}/outage-calls", json={
            "team_id": str(uuid.uuid4()), "title": "Down",
        })
        assert response.status_code == 404

    def test_get_includes_assignees(self, client, call_and_members):
        call, members = call_and_members
        client.post(f"{API}/outage-calls/{call['id']}/assignees",
                    json={"member_id": members[0]["id"], "role": "primary"})
        data = client.get(f"{API}/outage-calls/{call['id']}").json()
        assert data["severity"] == "critical"
        assert [a["member_id"] for a in data["assignees"]] == [members[0]["id"]]

    def test_list_filters_and_stats(self, client):
        team = create_team(client)
        create_call(client, team["id"])
        create_call(client, team["id"], status="resolved")
        resolved = client.get(f"{API}/outage-calls", params={"status": "resolved"}).json()
        assert resolved["total"] == 1
        by_team = client.get(f"{API}/outage-calls", params={"team-id": team["id"]}).json()
        assert by_team["total"] == 2

        stats = client.get(f"{API}/outage-calls/stats").json()
        assert stats["total"] == 2
        assert stats["by_status"]["open"] == 1
        assert stats["by_status"]["cancelled"] == 0

    def test_list_unknown_status(self, client):
        response = client.get(f"{API}/outage-calls", params={"status": "exploded"})
        assert response.status_code == 400

    def test_delete(self, client):
        team = create_team(client)
        call = create_call(client, team["id"])
        assert client.delete(f"{API}/outage-calls/{call['id']}").status_code == 204
        assert client.get(f"{API}/outage-calls/{call['id']}").status_code == 404

    def test_delete_removes_assignments(self, client, call_and_members):
        call, members = call_and_members
        member_id = members[0]["id"]
        client.post(f"{API}/outage-calls/{call['id']}/assignees",
                    json={"member_id": member_id, "role": "primary"})
        assert client.get(f"{API}/members/{member_id}/workload").json()["active_assignments"] == 1

        assert client.delete(f"{API}/outage-calls/{call['id']}").status_code == 204

        assert client.get(f"{API}/members/{member_id}/assignments").json() == []
        assert client.get(f"{API}/members/{member_id}/workload").json()["active_assignments"] == 0


# ============================================
# Assignees
# ============================================
class TestAssignees:
    def test_assign_and_status(self, client, call_and_members):
        call, members = call_and_members
        base = f"{API}/outage-calls/{call['id']}/assignees"
        response = client.post(base, json={"member_id": members[0]["id"], "role": "primary"})
        assert response.status_code == 201
        assert response.json()["is_active"] is True

        status = client.get(f"{base}/{members[0]['id']}").json()
        assert status["assigned"] is True
        assert client.get(f"{base}/{members[1]['id']}").json()["assigned"] is False

    def test_double_assign_conflicts(self, client, call_and_members):
        call, members = call_and_members
        base = f"{API}/outage-calls/{call['id']}/assignees"
        client.post(base, json={"member_id": members[0]["id"], "role": "primary"})
        response = client.post(base, json={"member_id": members[0]["id"], "role": "observer"})
        assert response.status_code == 409
        assert response.json()["error"] == "MemberAlreadyAssigned"

    def test_assign_unknown_call(self, client, call_and_members):
        _, members = call_and_members
        response = client.post(f"{API}/outage-calls/{uuid.uuid4()}/assignees",
                               json={"member_id": members[0]["id"], "role": "primary"})
        assert response.status_code == 404
        assert response.json()["detail"] == "outage call not found"

    def test_unassign(self, client, call_and_members):
        call, members = call_and_members
        base = f"{API}/outage-calls/{call['id']}/assignees"
        client.post(base, json={"member_id": members[0]["id"], "role": "primary"})
        assert client.delete(f"{base}/{members[0]['id']}").status_code == 204
        response = client.delete(f"{base}/{members[0]['id']}")
        assert response.status_code == 404
        assert response.json()["error"] == "MemberNotAssigned"

    def test_bulk_assign_partial(self, client, call_and_members):
        call, members = call_and_members
        base = f"{API}/outage-calls/{call['id']}/assignees"
        client.post(base, json={"member_id": members[1]["id"], "role": "observer"})

        response = client.post(f"{base}/bulk", json={"members": [
            {"member_id": m["id"], "role": "secondary"} for m in members
        ]})

        assert response.status_code == 200
        data = response.json()
        assert len(data["assigned"]) == 2
        assert data["errors"] == [{
            "index": 1, "member_id": members[1]["id"],
            "error": "member is already assigned to this outage call",
            "error_type": "MemberAlreadyAssigned",
        }]

    def test_bulk_assign_empty_is_422(self, client, call_and_members):
        call, _ = call_and_members
        response = client.post(f"{API}/outage-calls/{call['id']}/assignees/bulk",
                               json={"members": []})
        assert response.status_code == 422

    def test_bulk_unassign(self, client, call_and_members):
        call, members = call_and_members
        base = f"{API}/outage-calls/{call['id']}/assignees"
        client.post(base, json={"member_id": members[0]["id"], "role": "primary"})
        response = client.request("DELETE", f"{base}/bulk", json={
            "member_ids": [members[0]["id"], members[2]["id"]],
        })
        data = response.json()
        assert data["unassigned"] == [members[0]["id"]]
        assert data["errors"][0]["error_type"] == "MemberNotAssigned"

    def test_bulk_assign_bad_item_fails_alone(self, client, call_and_members):
        call, members = call_and_members
        response = client.post(f"{API}/outage-calls/{call['id']}/assignees/bulk", json={"members": [
            {"member_id": members[0]["id"], "role": "primary"},
            {"member_id": members[1]["id"], "role": "commander"},
            {"member_id": "not-a-uuid", "role": "observer"},
            {"member_id": members[2]["id"], "role": "observer"},
        ]})

        assert response.status_code == 200
        data = response.json()
        assert [a["member_id"] for a in data["assigned"]] == [members[0]["id"], members[2]["id"]]
        assert [(e["index"], e["error_type"]) for e in data["errors"]] == [
            (1, "ValidationFailed"), (2, "ValidationFailed"),
        ]
        assert data["errors"][1]["member_id"] == "not-a-uuid"

    def test_bulk_unassign_malformed_id_fails_alone(self, client, call_and_members):
        call, members = call_and_members
        base = f"{API}/outage-calls/{call['id']}/assignees"
        client.post(base, json={"member_id": members[0]["id"], "role": "primary"})

        data = client.request("DELETE", f"{base}/bulk", json={
            "member_ids": ["nope", members[0]["id"]],
        }).json()

        assert data["unassigned"] == [members[0]["id"]]
        assert data["errors"][0]["index"] == 0
        assert data["errors"][0]["error_type"] == "ValidationFailed"

    def test_update_role_in_place(self, client, call_and_members):
        call, members = call_and_members
        base = f"{API}/outage-calls/{call['id']}/assignees"
        created = client.post(base, json={"member_id": members[0]["id"], "role": "observer"}).json()

        response = client.patch(f"{base}/{members[0]['id']}/role", json={"role": "primary"})

        assert response.status_code == 200
        updated = response.json()
        assert updated["role"] == "primary"
        assert updated["id"] == created["id"]
        assert updated["assigned_at"] == created["assigned_at"]

    def test_update_role_not_assigned(self, client, call_and_members):
        call, members = call_and_members
        response = client.patch(
            f"{API}/outage-calls/{call['id']}/assignees/{members[0]['id']}/role",
            json={"role": "primary"},
        )
        assert response.status_code == 404

    def test_role_filters_and_counts(self, client, call_and_members):
        call, members = call_and_members
        base = f"{API}/outage-calls/{call['id']}/assignees"
        for member, role in zip(members, ["primary", "observer", "observer"]):
            client.post(base, json={"member_id": member["id"], "role": role})

        assert len(client.get(f"{base}/primary").json()) == 1
        assert client.get(f"{base}/secondary").json() == []
        assert len(client.get(f"{base}/observers").json()) == 2
        assert len(client.get(base, params={"role": "observer"}).json()) == 2
        assert client.get(f"{base}/count").json() == {"count": 3}
        assert client.get(f"{base}/count", params={"role": "primary"}).json() == {"count": 1}

    def test_unknown_role_filter_is_400(self, client, call_and_members):
        call, _ = call_and_members
        response = client.get(f"{API}/outage-calls/{call['id']}/assignees",
                              params={"role": "boss"})
        assert response.status_code == 400

    def test_workload_and_deactivation(self, client):
        team = create_team(client)
        member = create_member(client, "I500001", team["id"])
        calls = [create_call(client, team["id"]) for _ in range(2)]
        for call in calls:
            client.post(f"{API}/outage-calls/{call['id']}/assignees",
                        json={"member_id": member["id"], "role": "primary"})

        workload = f"{API}/members/{member['id']}/workload"
        assert client.get(workload).json()["active_assignments"] == 2

        response = client.patch(
            f"{API}/outage-calls/{calls[0]['id']}/assignees/{member['id']}/active",
            json={"is_active": False},
        )
        assert response.json()["is_active"] is False
        assert client.get(workload).json()["active_assignments"] == 1

        assignments = f"{API}/members/{member['id']}/assignments"
        assert len(client.get(assignments).json()) == 2
        assert len(client.get(assignments, params={"active_only": True}).json()) == 1

    def test_workload_unknown_member(self, client):
        assert client.get(f"{API}/members/{uuid.uuid4()}/workload").status_code == 404
