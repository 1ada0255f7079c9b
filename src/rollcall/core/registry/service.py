from __future__ import annotations

import threading
from dataclasses import replace
from typing import Any, Iterable

from ...logs import get_logger
from ..errors import DuplicateMember, Forbidden, InvalidInput, NotFound, Unauthorized
from ..records import (
    LOGIN_ACTION,
    ActivityLogEntry,
    MemberRecord,
    ReputationScore,
    Role,
    VisibilityGrant,
)
from ..validation import require_bio, require_nickname, require_preferences

logger = get_logger(__name__)

_VALIDATORS = {
    "nickname": require_nickname,
    "bio": require_bio,
    "preferences": require_preferences,
}


class MembershipRegistry:
    """In-memory membership state machine.

    Every public method is one atomic transition: it takes the lock, runs all
    lookups, authorization and validation, and only then writes. A raised
    `RegistryError` therefore never leaves partial state behind.

    `caller` and `now` come from the surrounding environment on each call.
    """

    def __init__(self, *, admin: str | None = None) -> None:
        self._lock = threading.RLock()
        self._members: dict[int, MemberRecord] = {}
        self._visibility: dict[tuple[int, str], VisibilityGrant] = {}
        self._activity: dict[int, ActivityLogEntry] = {}
        self._reputation: dict[int, ReputationScore] = {}
        self._counter = 0
        self._global_revision = 0
        self._admin = str(admin) if admin else None

    @property
    def admin(self) -> str | None:
        return self._admin

    def next_id(self) -> int:
        with self._lock:
            return self._counter + 1

    def member_count(self) -> int:
        with self._lock:
            return len(self._members)

    def global_revision(self) -> int:
        with self._lock:
            return self._global_revision

    def _require_member_locked(self, member_id: int) -> MemberRecord:
        record = self._members.get(int(member_id))
        if record is None:
            raise NotFound(f"Unknown member: {member_id}", member_id=int(member_id))
        return record

    def _authorize_locked(self, record: MemberRecord, caller: str, *, allowed: Iterable[Role]) -> Role:
        allowed = frozenset(allowed)
        if Role.OWNER in allowed and caller == record.owner:
            return Role.OWNER
        if Role.ADMIN in allowed and self._admin is not None and caller == self._admin:
            return Role.ADMIN
        logger.warning("Rejected %s on member %d by %r", "/".join(sorted(r.value for r in allowed)), record.member_id, caller)
        raise Forbidden(f"Caller is not allowed to modify member {record.member_id}", member_id=record.member_id)

    # Registration

    def register(
        self,
        nickname: str,
        bio: str,
        preferences: list[str] | tuple[str, ...],
        caller: str,
        now: int,
    ) -> int:
        nickname_v = require_nickname(nickname)
        bio_v = require_bio(bio)
        preferences_v = require_preferences(preferences)
        caller = str(caller)
        now = int(now)

        with self._lock:
            member_id = self.next_id()
            if member_id in self._members:
                raise DuplicateMember(f"Member id {member_id} is already taken", member_id=member_id)

            self._members[member_id] = MemberRecord(
                member_id=member_id,
                nickname=nickname_v,
                owner=caller,
                registered_at=now,
                bio=bio_v,
                preferences=preferences_v,
                revision=1,
                updated_at=now,
            )
            self._visibility[(member_id, caller)] = VisibilityGrant(member_id=member_id, viewer=caller, granted=True)
            self._counter = member_id
            self._global_revision += 1

        logger.info("Registered member %d for %r at %d", member_id, caller, now)
        return member_id

    # Profile mutation

    def _update_locked(self, member_id: int, caller: str, now: int, changes: dict[str, Any]) -> MemberRecord:
        record = self._require_member_locked(member_id)
        self._authorize_locked(record, caller, allowed=(Role.OWNER,))

        if not changes:
            raise InvalidInput("No profile fields to update", member_id=record.member_id)
        validated = {name: _VALIDATORS[name](value) for name, value in changes.items()}

        updated = replace(record, **validated, revision=record.revision + 1, updated_at=int(now))
        self._members[record.member_id] = updated
        self._global_revision += 1
        return updated

    def update_profile(
        self,
        member_id: int,
        caller: str,
        now: int,
        *,
        nickname: str | None = None,
        bio: str | None = None,
        preferences: list[str] | tuple[str, ...] | None = None,
    ) -> bool:
        """Replace any subset of nickname / bio / preferences in one step.

        All supplied fields are validated before any is applied.
        """
        changes: dict[str, Any] = {}
        if nickname is not None:
            changes["nickname"] = nickname
        if bio is not None:
            changes["bio"] = bio
        if preferences is not None:
            changes["preferences"] = preferences

        with self._lock:
            updated = self._update_locked(member_id, str(caller), now, changes)
        logger.info("Updated %s of member %d (revision %d)", ", ".join(sorted(changes)), updated.member_id, updated.revision)
        return True

    def update_bio(self, member_id: int, bio: str, caller: str, now: int) -> bool:
        return self.update_profile(member_id, caller, now, bio=bio)

    def update_nickname(self, member_id: int, nickname: str, caller: str, now: int) -> bool:
        return self.update_profile(member_id, caller, now, nickname=nickname)

    def update_preferences(self, member_id: int, preferences: list[str] | tuple[str, ...], caller: str, now: int) -> bool:
        return self.update_profile(member_id, caller, now, preferences=preferences)

    # Deletion

    def remove(self, member_id: int, caller: str) -> bool:
        """Delete a member. Owner, or the configured admin, only.

        Visibility, activity and reputation rows stay behind keyed by the old id.
        """
        with self._lock:
            record = self._require_member_locked(member_id)
            role = self._authorize_locked(record, str(caller), allowed=(Role.OWNER, Role.ADMIN))
            del self._members[record.member_id]
            self._global_revision += 1

        logger.info("Removed member %d as %s", record.member_id, role.value)
        return True

    # Visibility

    def check_visibility(self, member_id: int, viewer: str) -> bool:
        with self._lock:
            grant = self._visibility.get((int(member_id), str(viewer)))
            if grant is None:
                raise NotFound(f"No visibility grant for member {member_id} and viewer {viewer!r}", member_id=int(member_id))
            return grant.granted

    def set_visibility(self, member_id: int, viewer: str, granted: bool, caller: str, now: int) -> bool:
        viewer = str(viewer)
        with self._lock:
            record = self._require_member_locked(member_id)
            self._authorize_locked(record, str(caller), allowed=(Role.OWNER,))
            if not viewer:
                raise InvalidInput("viewer cannot be empty", field="viewer", member_id=record.member_id)
            if viewer == record.owner and not granted:
                raise InvalidInput("The owner's own visibility cannot be revoked", field="granted", member_id=record.member_id)

            self._visibility[(record.member_id, viewer)] = VisibilityGrant(
                member_id=record.member_id,
                viewer=viewer,
                granted=bool(granted),
            )
            self._global_revision += 1

        logger.info("Set visibility of member %d for %r to %s at %d", record.member_id, viewer, bool(granted), int(now))
        return True

    def get_profile_secure(self, member_id: int, caller: str) -> MemberRecord:
        with self._lock:
            record = self._require_member_locked(member_id)
            if str(caller) != record.owner:
                raise Unauthorized(f"Only the owner may read member {record.member_id}", member_id=record.member_id)
            logger.debug("Read member %d", record.member_id)
            return record

    # Activity

    def record_login(self, member_id: int, now: int) -> bool:
        with self._lock:
            record = self._require_member_locked(member_id)
            prev = self._activity.get(record.member_id, ActivityLogEntry(member_id=record.member_id))
            self._activity[record.member_id] = replace(
                prev,
                last_login=int(now),
                total_logins=prev.total_logins + 1,
                last_action=LOGIN_ACTION,
            )
            self._global_revision += 1
            total = prev.total_logins + 1

        logger.info("Recorded login %d for member %d", total, record.member_id)
        return True

    def get_activity(self, member_id: int) -> ActivityLogEntry:
        with self._lock:
            member_id = int(member_id)
            entry = self._activity.get(member_id)
            if entry is not None:
                return entry
            self._require_member_locked(member_id)
            return ActivityLogEntry(member_id=member_id)

    # Reputation

    def get_reputation(self, member_id: int) -> ReputationScore:
        with self._lock:
            member_id = int(member_id)
            score = self._reputation.get(member_id)
            if score is not None:
                return score
            self._require_member_locked(member_id)
            return ReputationScore(member_id=member_id)


