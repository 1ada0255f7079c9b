from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ..core.registry import MembershipRegistry
from ..core.sequence import SequenceClock
from .routes import mount_members_api


def create_api_app(
    registry: MembershipRegistry,
    clock: SequenceClock,
    *,
    cors_origins: list[str] | tuple[str, ...] = (),
) -> FastAPI:
    app = FastAPI(title="rollcall", version="0.1.0")

    if cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=list(cors_origins),
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    app.state.registry = registry
    app.state.clock = clock

    mount_members_api(app, registry, clock)

    @app.get("/healthz")
    def healthz() -> dict[str, bool]:
        return {"ok": True}

    @app.get("/api/events")
    def events() -> dict[str, int]:
        # Minimal polling endpoint.
        return {
            "globalRevision": registry.global_revision(),
            "sequence": clock.current(),
            "memberCount": registry.member_count(),
        }

    return app
