from __future__ import annotations

from .client import RollcallClient
from .handles import MemberHandle

__all__ = [
    "RollcallClient",
    "MemberHandle",
]
