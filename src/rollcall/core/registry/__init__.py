from __future__ import annotations

from .service import MembershipRegistry

__all__ = ["MembershipRegistry"]
