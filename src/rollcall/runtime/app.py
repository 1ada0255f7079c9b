from __future__ import annotations

from fastapi import FastAPI

from ..api import create_api_app
from ..config import Settings
from ..core.registry import MembershipRegistry
from ..core.sequence import SequenceClock


def create_app(
    settings: Settings | None = None,
    *,
    registry: MembershipRegistry | None = None,
    clock: SequenceClock | None = None,
) -> FastAPI:
    """Create the full app around a registry and its sequence clock.

    Both default to fresh instances; the admin principal comes from `settings`.
    """

    settings = settings or Settings.from_env()
    if registry is None:
        registry = MembershipRegistry(admin=settings.admin)
    if clock is None:
        clock = SequenceClock()
    return create_api_app(registry, clock, cors_origins=settings.cors_origins)
