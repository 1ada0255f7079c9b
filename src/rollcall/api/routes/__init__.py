from __future__ import annotations

from .members import mount_members_api

__all__ = ["mount_members_api"]
