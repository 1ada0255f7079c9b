from __future__ import annotations

from typing import Any
from urllib.parse import quote

import httpx

from ..api.parsing import PRINCIPAL_HEADER
from ..core.errors import DuplicateMember, Forbidden, InvalidInput, NotFound, RegistryError, Unauthorized
from .handles import MemberHandle

_ERROR_BY_CODE: dict[str, type[RegistryError]] = {
    NotFound.code: NotFound,
    Forbidden.code: Forbidden,
    Unauthorized.code: Unauthorized,
    InvalidInput.code: InvalidInput,
    DuplicateMember.code: DuplicateMember,
}

# Rejections raised before the registry is reached (body parsing, missing
# principal header) carry a plain-string detail.
_ERROR_BY_STATUS: dict[int, type[RegistryError]] = {
    400: InvalidInput,
    401: Unauthorized,
    403: Forbidden,
    404: NotFound,
    409: DuplicateMember,
}


def _raise_for_response(res: httpx.Response) -> None:
    if res.status_code < 400:
        return
    try:
        detail = res.json().get("detail")
    except (ValueError, AttributeError):
        detail = None
    if isinstance(detail, dict):
        kind = _ERROR_BY_CODE.get(str(detail.get("code")))
        if kind is not None:
            raise kind(str(detail.get("message", "")))
    kind = _ERROR_BY_STATUS.get(res.status_code)
    if kind is not None:
        raise kind(str(detail) if detail is not None else res.text)
    raise RuntimeError(f"Request failed: {res.status_code} {res.text}")


def _visibility_path(member_id: int, viewer: str) -> str:
    # Principals are opaque; '/', '?' and '#' must stay part of the segment.
    return f"/api/members/{int(member_id)}/visibility/{quote(str(viewer), safe='')}"


class RollcallClient:
    """HTTP client for a running rollcall server, acting as one principal.

    Registry rejections come back as the same `RegistryError` subclasses the
    in-process registry raises, so callers can handle both the same way.
    """

    def __init__(self, base_url: str = "http://127.0.0.1:8000", *, principal: str | None = None) -> None:
        self.base_url = base_url.rstrip("/")
        self.principal = principal

    def as_principal(self, principal: str) -> "RollcallClient":
        return RollcallClient(self.base_url, principal=principal)

    def _headers(self) -> dict[str, str]:
        if self.principal is None:
            return {}
        return {PRINCIPAL_HEADER: self.principal}

    def ping(self, *, timeout_s: float = 0.2) -> bool:
        """Return True if a rollcall server answers `/healthz` at `base_url`."""
        try:
            with httpx.Client(base_url=self.base_url, timeout=timeout_s) as client:
                res = client.get("/healthz")
            return res.status_code == 200 and bool(res.json().get("ok"))
        except (httpx.HTTPError, ValueError):
            return False

    def _request(self, method: str, path: str, *, json: dict[str, Any] | None = None, timeout_s: float = 10.0) -> dict[str, Any]:
        with httpx.Client(base_url=self.base_url, timeout=timeout_s) as client:
            res = client.request(method, path, json=json, headers=self._headers())
        _raise_for_response(res)
        return res.json()

    def register(
        self,
        nickname: str,
        preferences: list[str],
        *,
        bio: str = "",
        timeout_s: float = 10.0,
    ) -> MemberHandle:
        """Register a new member owned by this client's principal."""
        data = self._request(
            "POST",
            "/api/members",
            json={"nickname": nickname, "bio": bio, "preferences": list(preferences)},
            timeout_s=timeout_s,
        )
        return MemberHandle(int(data["memberId"]), ops=self)

    def member(self, member_id: int) -> MemberHandle:
        return MemberHandle(int(member_id), ops=self)

    def get_profile(self, member_id: int, *, timeout_s: float = 10.0) -> dict[str, Any]:
        return self._request("GET", f"/api/members/{int(member_id)}", timeout_s=timeout_s)

    def update_profile(
        self,
        member_id: int,
        *,
        nickname: str | None = None,
        bio: str | None = None,
        preferences: list[str] | None = None,
        timeout_s: float = 10.0,
    ) -> None:
        body: dict[str, Any] = {}
        if nickname is not None:
            body["nickname"] = nickname
        if bio is not None:
            body["bio"] = bio
        if preferences is not None:
            body["preferences"] = list(preferences)
        self._request("PATCH", f"/api/members/{int(member_id)}", json=body, timeout_s=timeout_s)

    def update_bio(self, member_id: int, bio: str, *, timeout_s: float = 10.0) -> None:
        self._request("PATCH", f"/api/members/{int(member_id)}/bio", json={"bio": bio}, timeout_s=timeout_s)

    def update_nickname(self, member_id: int, nickname: str, *, timeout_s: float = 10.0) -> None:
        self._request("PATCH", f"/api/members/{int(member_id)}/nickname", json={"nickname": nickname}, timeout_s=timeout_s)

    def update_preferences(self, member_id: int, preferences: list[str], *, timeout_s: float = 10.0) -> None:
        self._request(
            "PATCH",
            f"/api/members/{int(member_id)}/preferences",
            json={"preferences": list(preferences)},
            timeout_s=timeout_s,
        )

    def remove(self, member_id: int, *, timeout_s: float = 10.0) -> None:
        self._request("DELETE", f"/api/members/{int(member_id)}", timeout_s=timeout_s)

    def check_visibility(self, member_id: int, viewer: str, *, timeout_s: float = 10.0) -> bool:
        data = self._request("GET", _visibility_path(member_id, viewer), timeout_s=timeout_s)
        return bool(data["granted"])

    def set_visibility(self, member_id: int, viewer: str, granted: bool, *, timeout_s: float = 10.0) -> None:
        self._request(
            "PUT",
            _visibility_path(member_id, viewer),
            json={"granted": bool(granted)},
            timeout_s=timeout_s,
        )

    def record_login(self, member_id: int, *, timeout_s: float = 10.0) -> None:
        self._request("POST", f"/api/members/{int(member_id)}/logins", timeout_s=timeout_s)

    def get_activity(self, member_id: int, *, timeout_s: float = 10.0) -> dict[str, Any]:
        return self._request("GET", f"/api/members/{int(member_id)}/activity", timeout_s=timeout_s)

    def get_reputation(self, member_id: int, *, timeout_s: float = 10.0) -> dict[str, Any]:
        return self._request("GET", f"/api/members/{int(member_id)}/reputation", timeout_s=timeout_s)
