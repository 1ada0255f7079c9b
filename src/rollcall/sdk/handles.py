from __future__ import annotations

from typing import Any, Protocol


class MemberOps(Protocol):
    def get_profile(self, member_id: int, *, timeout_s: float = 10.0) -> dict[str, Any]: ...
    def update_profile(
        self,
        member_id: int,
        *,
        nickname: str | None = None,
        bio: str | None = None,
        preferences: list[str] | None = None,
        timeout_s: float = 10.0,
    ) -> None: ...
    def remove(self, member_id: int, *, timeout_s: float = 10.0) -> None: ...
    def check_visibility(self, member_id: int, viewer: str, *, timeout_s: float = 10.0) -> bool: ...
    def set_visibility(self, member_id: int, viewer: str, granted: bool, *, timeout_s: float = 10.0) -> None: ...
    def record_login(self, member_id: int, *, timeout_s: float = 10.0) -> None: ...
    def get_activity(self, member_id: int, *, timeout_s: float = 10.0) -> dict[str, Any]: ...


class MemberHandle:
    """A member id bound to the client that registered or looked it up.

    Behaves like an int where an id is expected (`int(handle)`, `handle == 1`).
    """

    def __init__(self, member_id: int, *, ops: MemberOps) -> None:
        self.id = int(member_id)
        self._ops = ops

    def __int__(self) -> int:
        return self.id

    def __index__(self) -> int:
        return self.id

    def __eq__(self, other: object) -> bool:
        if isinstance(other, MemberHandle):
            return self.id == other.id
        if isinstance(other, int):
            return self.id == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        return f"MemberHandle(id={self.id})"

    def profile(self, *, timeout_s: float = 10.0) -> dict[str, Any]:
        return self._ops.get_profile(self.id, timeout_s=timeout_s)

    def update(
        self,
        *,
        nickname: str | None = None,
        bio: str | None = None,
        preferences: list[str] | None = None,
        timeout_s: float = 10.0,
    ) -> None:
        self._ops.update_profile(self.id, nickname=nickname, bio=bio, preferences=preferences, timeout_s=timeout_s)

    def grant(self, viewer: str, *, timeout_s: float = 10.0) -> None:
        self._ops.set_visibility(self.id, viewer, True, timeout_s=timeout_s)

    def revoke(self, viewer: str, *, timeout_s: float = 10.0) -> None:
        self._ops.set_visibility(self.id, viewer, False, timeout_s=timeout_s)

    def visible_to(self, viewer: str, *, timeout_s: float = 10.0) -> bool:
        return self._ops.check_visibility(self.id, viewer, timeout_s=timeout_s)

    def login(self, *, timeout_s: float = 10.0) -> None:
        self._ops.record_login(self.id, timeout_s=timeout_s)

    def activity(self, *, timeout_s: float = 10.0) -> dict[str, Any]:
        return self._ops.get_activity(self.id, timeout_s=timeout_s)

    def delete(self, *, timeout_s: float = 10.0) -> None:
        self._ops.remove(self.id, timeout_s=timeout_s)
