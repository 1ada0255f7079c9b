from __future__ import annotations

from .errors import DuplicateMember, Forbidden, InvalidInput, NotFound, RegistryError, Unauthorized
from .records import ActivityLogEntry, MemberRecord, ReputationScore, Role, VisibilityGrant
from .registry import MembershipRegistry
from .sequence import SequenceClock
from .validation import validate_bio, validate_nickname, validate_preference, validate_preferences

__all__ = [
    "MembershipRegistry",
    "SequenceClock",
    "MemberRecord",
    "VisibilityGrant",
    "ActivityLogEntry",
    "ReputationScore",
    "Role",
    "RegistryError",
    "NotFound",
    "Forbidden",
    "Unauthorized",
    "InvalidInput",
    "DuplicateMember",
    "validate_nickname",
    "validate_bio",
    "validate_preference",
    "validate_preferences",
]
