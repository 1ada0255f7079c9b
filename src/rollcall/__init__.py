from __future__ import annotations

from .config import Settings
from .core import (
    ActivityLogEntry,
    DuplicateMember,
    Forbidden,
    InvalidInput,
    MemberRecord,
    MembershipRegistry,
    NotFound,
    RegistryError,
    ReputationScore,
    Role,
    SequenceClock,
    Unauthorized,
    VisibilityGrant,
)
from .runtime.server import RollcallServer, run
from .sdk import MemberHandle, RollcallClient

__all__ = [
    "run",
    "Settings",
    "RollcallServer",
    "RollcallClient",
    "MemberHandle",
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
]
