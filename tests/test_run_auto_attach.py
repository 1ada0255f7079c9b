from __future__ import annotations

import pytest

from rollcall.config import Settings
from rollcall.core.errors import Forbidden, InvalidInput, NotFound, Unauthorized
from rollcall.runtime.server import RollcallServer, run
from rollcall.sdk.client import RollcallClient


def _start() -> RollcallServer:
    server = run(settings=Settings(host="127.0.0.1", port=0), new_server=True)
    assert isinstance(server, RollcallServer)
    return server


def test_run_auto_attaches_to_existing_server() -> None:
    server = _start()

    attached = run(host=server.host, port=server.port, principal="alice", settings=Settings())

    assert isinstance(attached, RollcallClient)
    assert attached.base_url == f"http://{server.host}:{server.port}"
    assert attached.principal == "alice"


def test_run_new_server_ignores_configured_url() -> None:
    s1 = _start()
    s2 = run(settings=Settings(host="127.0.0.1", port=0, url=s1.url), new_server=True)

    assert isinstance(s2, RollcallServer)
    assert (s2.host, s2.port) != (s1.host, s1.port)


def test_client_round_trip_against_live_server() -> None:
    server = _start()
    alice = server.client("alice")
    bob = alice.as_principal("bob")

    member = alice.register("alice", ["coding"], bio="hi")
    assert member == 1
    assert server.registry.get_profile_secure(int(member), "alice").nickname == "alice"

    member.update(nickname="alice2")
    assert member.profile()["nickname"] == "alice2"

    with pytest.raises(Forbidden):
        bob.update_nickname(member.id, "x")
    assert member.profile()["nickname"] == "alice2"

    with pytest.raises(NotFound):
        bob.check_visibility(member.id, "bob")
    member.grant("bob")
    assert member.visible_to("bob") is True

    bob.member(member.id).login()
    assert member.activity()["totalLogins"] == 1

    member.delete()
    with pytest.raises(NotFound):
        alice.get_profile(member.id)


@pytest.mark.parametrize("viewer", ["bob#2", "team/ops", "who?x=1", "50% off"])
def test_client_keeps_reserved_characters_in_viewer(viewer: str) -> None:
    server = _start()
    member = server.client("alice").register("alice", ["coding"])

    member.grant(viewer)

    assert server.registry.check_visibility(int(member), viewer) is True
    assert member.visible_to(viewer) is True
    with pytest.raises(NotFound):
        server.registry.check_visibility(int(member), viewer[:3])


def test_client_maps_uncoded_rejections_to_registry_errors() -> None:
    server = _start()
    member = server.client("alice").register("alice", ["coding"])

    with pytest.raises(InvalidInput):
        member.update()
    with pytest.raises(Unauthorized):
        RollcallClient(server.url).register("anon", ["coding"])
    assert server.registry.member_count() == 1
