from __future__ import annotations

from typing import Any

from ...core.records import ActivityLogEntry, MemberRecord, ReputationScore


def member_to_item(m: MemberRecord) -> dict[str, Any]:
    return {
        "memberId": int(m.member_id),
        "nickname": m.nickname,
        "owner": m.owner,
        "registeredAt": int(m.registered_at),
        "bio": m.bio,
        "preferences": list(m.preferences),
        "revision": int(m.revision),
        "updatedAt": int(m.updated_at),
    }


def activity_to_item(a: ActivityLogEntry) -> dict[str, Any]:
    return {
        "memberId": int(a.member_id),
        "lastLogin": int(a.last_login),
        "totalLogins": int(a.total_logins),
        "lastAction": a.last_action,
    }


def reputation_to_item(r: ReputationScore) -> dict[str, Any]:
    return {
        "memberId": int(r.member_id),
        "score": int(r.score),
        "endorsements": int(r.endorsements),
        "lastUpdated": int(r.last_updated),
    }
