from __future__ import annotations

from urllib.parse import quote

from fastapi.testclient import TestClient

from rollcall.api.parsing import PRINCIPAL_HEADER
from rollcall.config import Settings
from rollcall.core.registry import MembershipRegistry
from rollcall.core.sequence import SequenceClock
from rollcall.runtime.app import create_app


def _as(principal: str) -> dict[str, str]:
    return {PRINCIPAL_HEADER: principal}


def _client(*, admin: str | None = None) -> tuple[TestClient, MembershipRegistry, SequenceClock]:
    registry = MembershipRegistry(admin=admin)
    clock = SequenceClock(start=100)
    app = create_app(Settings(admin=admin), registry=registry, clock=clock)
    return TestClient(app), registry, clock


def _register(client: TestClient, principal: str = "alice", **body) -> int:
    payload = {"nickname": "alice", "bio": "hi", "preferences": ["coding"], **body}
    res = client.post("/api/members", json=payload, headers=_as(principal))
    assert res.status_code == 200, res.text
    return int(res.json()["memberId"])


def test_register_and_read_back_with_sequence_timestamp() -> None:
    client, _, clock = _client()

    member_id = _register(client)
    assert member_id == 1

    res = client.get(f"/api/members/{member_id}", headers=_as("alice"))
    assert res.status_code == 200
    body = res.json()
    assert body["nickname"] == "alice"
    assert body["bio"] == "hi"
    assert body["preferences"] == ["coding"]
    assert body["owner"] == "alice"
    assert body["registeredAt"] == 101
    assert clock.current() == 101


def test_missing_principal_is_rejected() -> None:
    client, registry, _ = _client()
    res = client.post("/api/members", json={"nickname": "a", "preferences": ["x"]})
    assert res.status_code == 401
    assert registry.member_count() == 0


def test_invalid_input_maps_to_400_with_code() -> None:
    client, registry, _ = _client()

    res = client.post("/api/members", json={"nickname": "", "preferences": ["x"]}, headers=_as("alice"))
    assert res.status_code == 400
    assert res.json()["detail"]["code"] == "invalid_input"

    malformed = client.post("/api/members", json={"nickname": "ok", "preferences": "x"}, headers=_as("alice"))
    assert malformed.status_code == 400
    assert registry.member_count() == 0


def test_owner_gated_updates() -> None:
    client, _, _ = _client()
    member_id = _register(client)

    ok = client.patch(f"/api/members/{member_id}/nickname", json={"nickname": "alice2"}, headers=_as("alice"))
    assert ok.status_code == 200
    assert ok.json() == {"ok": True}

    denied = client.patch(f"/api/members/{member_id}/nickname", json={"nickname": "x"}, headers=_as("mallory"))
    assert denied.status_code == 403
    assert denied.json()["detail"]["code"] == "forbidden"

    bio = client.patch(f"/api/members/{member_id}/bio", json={"bio": ""}, headers=_as("alice"))
    assert bio.status_code == 200

    too_many = client.patch(
        f"/api/members/{member_id}/preferences",
        json={"preferences": ["a", "b", "c", "d", "e", "f"]},
        headers=_as("alice"),
    )
    assert too_many.status_code == 400

    combined = client.patch(
        f"/api/members/{member_id}",
        json={"bio": "combined", "preferences": ["go", "rust"]},
        headers=_as("alice"),
    )
    assert combined.status_code == 200

    body = client.get(f"/api/members/{member_id}", headers=_as("alice")).json()
    assert body["nickname"] == "alice2"
    assert body["bio"] == "combined"
    assert body["preferences"] == ["go", "rust"]
    assert body["revision"] == 4


def test_profile_patch_rejects_unknown_or_empty_body() -> None:
    client, _, _ = _client()
    member_id = _register(client)

    assert client.patch(f"/api/members/{member_id}", json={}, headers=_as("alice")).status_code == 400
    assert client.patch(f"/api/members/{member_id}", json={"owner": "bob"}, headers=_as("alice")).status_code == 400


def test_secure_read_is_owner_only() -> None:
    client, _, _ = _client()
    member_id = _register(client)

    res = client.get(f"/api/members/{member_id}", headers=_as("bob"))
    assert res.status_code == 401
    assert res.json()["detail"]["code"] == "unauthorized"

    assert client.get("/api/members/999", headers=_as("alice")).status_code == 404


def test_remove_and_admin_override() -> None:
    client, _, _ = _client(admin="root")
    first = _register(client)
    second = _register(client, nickname="alice-two")

    assert client.delete("/api/members/77", headers=_as("alice")).status_code == 404
    assert client.delete(f"/api/members/{first}", headers=_as("bob")).status_code == 403
    assert client.delete(f"/api/members/{first}", headers=_as("alice")).status_code == 200
    assert client.get(f"/api/members/{first}", headers=_as("alice")).status_code == 404

    assert client.delete(f"/api/members/{second}", headers=_as("root")).status_code == 200

    third = _register(client)
    assert third == 3


def test_visibility_endpoints() -> None:
    client, _, _ = _client()
    member_id = _register(client)

    own = client.get(f"/api/members/{member_id}/visibility/alice")
    assert own.status_code == 200
    assert own.json()["granted"] is True

    assert client.get(f"/api/members/{member_id}/visibility/bob").status_code == 404

    put = client.put(f"/api/members/{member_id}/visibility/bob", json={"granted": False}, headers=_as("alice"))
    assert put.status_code == 200
    assert client.get(f"/api/members/{member_id}/visibility/bob").json()["granted"] is False

    bad = client.put(f"/api/members/{member_id}/visibility/bob", json={"granted": "maybe"}, headers=_as("alice"))
    assert bad.status_code == 400

    foreign = client.put(f"/api/members/{member_id}/visibility/carol", json={"granted": True}, headers=_as("bob"))
    assert foreign.status_code == 403


def test_visibility_viewer_is_one_escaped_segment() -> None:
    client, registry, _ = _client()
    member_id = _register(client)
    path = f"/api/members/{member_id}/visibility/{quote('team/ops#2', safe='')}"

    put = client.put(path, json={"granted": True}, headers=_as("alice"))
    assert put.status_code == 200, put.text
    assert registry.check_visibility(member_id, "team/ops#2") is True
    assert client.get(path).json()["granted"] is True
    assert client.get(f"/api/members/{member_id}/visibility/team").status_code == 404


def test_logins_activity_and_reputation() -> None:
    client, _, clock = _client()
    member_id = _register(client)

    fresh = client.get(f"/api/members/{member_id}/activity").json()
    assert (fresh["lastLogin"], fresh["totalLogins"], fresh["lastAction"]) == (0, 0, "None")

    assert client.post(f"/api/members/{member_id}/logins").status_code == 200
    assert client.post(f"/api/members/{member_id}/logins").status_code == 200

    activity = client.get(f"/api/members/{member_id}/activity").json()
    assert activity["totalLogins"] == 2
    assert activity["lastAction"] == "login"
    assert activity["lastLogin"] == clock.current()

    assert client.post("/api/members/55/logins").status_code == 404

    rep = client.get(f"/api/members/{member_id}/reputation").json()
    assert (rep["score"], rep["endorsements"], rep["lastUpdated"]) == (0, 0, 0)


def test_events_reports_counters() -> None:
    client, registry, clock = _client()
    _register(client)

    assert client.get("/healthz").json() == {"ok": True}
    events = client.get("/api/events").json()
    assert events["globalRevision"] == registry.global_revision() == 1
    assert events["sequence"] == clock.current()
    assert events["memberCount"] == 1
