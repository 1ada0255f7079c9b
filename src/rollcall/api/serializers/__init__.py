from __future__ import annotations

from .members import activity_to_item, member_to_item, reputation_to_item

__all__ = [
    "member_to_item",
    "activity_to_item",
    "reputation_to_item",
]
