from __future__ import annotations

from typing import Any

from fastapi import FastAPI, HTTPException, Request

from ...core.errors import DuplicateMember, Forbidden, InvalidInput, NotFound, RegistryError, Unauthorized
from ...core.registry import MembershipRegistry
from ...core.sequence import SequenceClock
from ..parsing import (
    PRINCIPAL_HEADER,
    parse_principal,
    parse_profile_body,
    parse_register_body,
    parse_single_field,
    parse_visibility_body,
)
from ..serializers import activity_to_item, member_to_item, reputation_to_item

_STATUS_BY_ERROR: tuple[tuple[type[RegistryError], int], ...] = (
    (NotFound, 404),
    (Forbidden, 403),
    (Unauthorized, 401),
    (InvalidInput, 400),
    (DuplicateMember, 409),
)


def _http_error(ex: RegistryError) -> HTTPException:
    status = 500
    for kind, code in _STATUS_BY_ERROR:
        if isinstance(ex, kind):
            status = code
            break
    return HTTPException(status_code=status, detail={"message": str(ex), "code": ex.code})


def _require_caller(request: Request) -> str:
    caller = parse_principal(request.headers.get(PRINCIPAL_HEADER))
    if caller is None:
        raise HTTPException(status_code=401, detail=f"Missing {PRINCIPAL_HEADER} header")
    return caller


def mount_members_api(app: FastAPI, registry: MembershipRegistry, clock: SequenceClock) -> None:
    """Mount the member endpoints.

    The caller principal comes from the `X-Rollcall-Principal` header and every
    request that needs `now` takes one tick of `clock`.
    """

    @app.post("/api/members")
    def register_member(request: Request, body: dict) -> dict[str, Any]:
        caller = _require_caller(request)
        try:
            nickname, bio, preferences = parse_register_body(body)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        try:
            member_id = registry.register(nickname, bio, preferences, caller, clock.tick())
        except RegistryError as ex:
            raise _http_error(ex)
        return {"ok": True, "memberId": member_id}

    @app.get("/api/members/{member_id}")
    def get_member(request: Request, member_id: int) -> dict[str, Any]:
        caller = _require_caller(request)
        try:
            record = registry.get_profile_secure(member_id, caller)
        except RegistryError as ex:
            raise _http_error(ex)
        return member_to_item(record)

    @app.patch("/api/members/{member_id}")
    def update_profile(request: Request, member_id: int, body: dict) -> dict[str, Any]:
        caller = _require_caller(request)
        try:
            fields = parse_profile_body(body)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        try:
            registry.update_profile(member_id, caller, clock.tick(), **fields)
        except RegistryError as ex:
            raise _http_error(ex)
        return {"ok": True}

    def _mount_single_field(field: str) -> None:
        updaters = {
            "bio": registry.update_bio,
            "nickname": registry.update_nickname,
            "preferences": registry.update_preferences,
        }
        update = updaters[field]

        def update_field(request: Request, member_id: int, body: dict) -> dict[str, Any]:
            caller = _require_caller(request)
            try:
                value = parse_single_field(body, field)
            except ValueError as e:
                raise HTTPException(status_code=400, detail=str(e))
            try:
                update(member_id, value, caller, clock.tick())
            except RegistryError as ex:
                raise _http_error(ex)
            return {"ok": True}

        app.add_api_route(
            f"/api/members/{{member_id}}/{field}",
            update_field,
            methods=["PATCH"],
            name=f"update_{field}",
        )

    for field in ("bio", "nickname", "preferences"):
        _mount_single_field(field)

    @app.delete("/api/members/{member_id}")
    def remove_member(request: Request, member_id: int) -> dict[str, Any]:
        caller = _require_caller(request)
        try:
            registry.remove(member_id, caller)
        except RegistryError as ex:
            raise _http_error(ex)
        return {"ok": True}

    @app.get("/api/members/{member_id}/visibility/{viewer:path}")
    def check_visibility(member_id: int, viewer: str) -> dict[str, Any]:
        try:
            granted = registry.check_visibility(member_id, viewer)
        except RegistryError as ex:
            raise _http_error(ex)
        return {"memberId": member_id, "viewer": viewer, "granted": granted}

    @app.put("/api/members/{member_id}/visibility/{viewer:path}")
    def set_visibility(request: Request, member_id: int, viewer: str, body: dict) -> dict[str, Any]:
        caller = _require_caller(request)
        try:
            granted = parse_visibility_body(body)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        try:
            registry.set_visibility(member_id, viewer, granted, caller, clock.tick())
        except RegistryError as ex:
            raise _http_error(ex)
        return {"ok": True}

    @app.post("/api/members/{member_id}/logins")
    def record_login(member_id: int) -> dict[str, Any]:
        try:
            registry.record_login(member_id, clock.tick())
        except RegistryError as ex:
            raise _http_error(ex)
        return {"ok": True}

    @app.get("/api/members/{member_id}/activity")
    def get_activity(member_id: int) -> dict[str, Any]:
        try:
            entry = registry.get_activity(member_id)
        except RegistryError as ex:
            raise _http_error(ex)
        return activity_to_item(entry)

    @app.get("/api/members/{member_id}/reputation")
    def get_reputation(member_id: int) -> dict[str, Any]:
        try:
            score = registry.get_reputation(member_id)
        except RegistryError as ex:
            raise _http_error(ex)
        return reputation_to_item(score)
