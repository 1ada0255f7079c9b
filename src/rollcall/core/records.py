from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


DEFAULT_LAST_ACTION = "None"
LOGIN_ACTION = "login"


class Role(str, Enum):
    """Capacity in which a principal acts on a record."""

    OWNER = "owner"
    ADMIN = "admin"


@dataclass(frozen=True, kw_only=True)
class MemberRecord:
    """A member profile.

    Notes:
    - `member_id`, `owner` and `registered_at` never change after creation.
    - `revision` is bumped on every accepted mutation; `updated_at` is the
      sequence number of that mutation.
    """

    member_id: int
    nickname: str
    owner: str
    registered_at: int
    bio: str
    preferences: tuple[str, ...]
    revision: int = 1
    updated_at: int = 0


@dataclass(frozen=True)
class VisibilityGrant:
    member_id: int
    viewer: str
    granted: bool


@dataclass(frozen=True)
class ActivityLogEntry:
    member_id: int
    last_login: int = 0
    total_logins: int = 0
    last_action: str = DEFAULT_LAST_ACTION


@dataclass(frozen=True)
class ReputationScore:
    # Reserved: nothing writes this table yet.
    member_id: int
    score: int = 0
    endorsements: int = 0
    last_updated: int = 0
