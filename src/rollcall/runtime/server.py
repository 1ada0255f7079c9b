from __future__ import annotations

import socket
import threading
import time
from dataclasses import dataclass

import uvicorn

from ..config import Settings
from ..core.registry import MembershipRegistry
from ..core.sequence import SequenceClock
from ..logs import configure_logging, get_logger
from ..sdk.client import RollcallClient
from .app import create_app

logger = get_logger(__name__)


@dataclass(frozen=True)
class RollcallServer:
    host: str
    port: int
    url: str
    registry: MembershipRegistry
    clock: SequenceClock

    def client(self, principal: str | None = None) -> RollcallClient:
        """Return an HTTP client for this server acting as `principal`."""
        return RollcallClient(self.url.rstrip("/"), principal=principal)


def _ephemeral_port(host: str) -> int:
    with socket.create_server((host, 0)) as sock:
        return int(sock.getsockname()[1])


def _attach(candidates: list[str], *, principal: str | None, timeout_s: float) -> RollcallClient | None:
    for base_url in candidates:
        client = RollcallClient(base_url, principal=principal)
        if client.ping(timeout_s=timeout_s):
            logger.info("Attached to %s", base_url)
            return client
    return None


def _serve_in_background(server: uvicorn.Server, health: RollcallClient, *, startup_timeout_s: float) -> None:
    threading.Thread(target=server.run, daemon=True, name="rollcall-uvicorn").start()

    deadline = time.monotonic() + startup_timeout_s
    while not health.ping(timeout_s=0.2):
        if time.monotonic() >= deadline:
            raise RuntimeError(f"rollcall server did not start at {health.base_url}")
        time.sleep(0.02)


def run(
    *,
    host: str | None = None,
    port: int | None = None,
    principal: str | None = None,
    settings: Settings | None = None,
    log_level: str | None = None,
    access_log: bool = False,
    new_server: bool = False,
    connect_timeout_s: float = 0.2,
    startup_timeout_s: float = 5.0,
) -> RollcallServer | RollcallClient:
    """Start a rollcall server in a background thread, or attach to one.

    Behavior:
    - If ROLLCALL_URL is set, attach to that server (client mode) unless
      `new_server=True`.
    - Otherwise, if `port != 0` and a server already answers at host:port,
      attach to it unless `new_server=True`.
    - Otherwise start a new server and return a `RollcallServer`.

    `principal` is only used for the returned client in attach mode.
    """

    settings = settings or Settings.from_env()
    overrides: dict[str, object] = {}
    if host is not None:
        overrides["host"] = host
    if port is not None:
        overrides["port"] = int(port)
    if overrides:
        settings = settings.model_copy(update=overrides)
    level = log_level or settings.log_level
    configure_logging(level)

    if not new_server:
        candidates: list[str] = []
        if settings.url:
            candidates.append(settings.url)
        # port 0 means "pick one", so there is nothing to attach to.
        if settings.port != 0:
            candidates.append(f"http://{settings.host}:{settings.port}")
        attached = _attach(candidates, principal=principal, timeout_s=connect_timeout_s)
        if attached is not None:
            return attached

    bind_port = settings.port or _ephemeral_port(settings.host)
    registry = MembershipRegistry(admin=settings.admin)
    clock = SequenceClock()
    app = create_app(settings, registry=registry, clock=clock)

    config = uvicorn.Config(app, host=settings.host, port=bind_port, log_level=level, access_log=access_log)
    url = f"http://{settings.host}:{bind_port}/"
    _serve_in_background(uvicorn.Server(config), RollcallClient(url), startup_timeout_s=startup_timeout_s)
    logger.info("Serving rollcall at %s", url)

    return RollcallServer(host=settings.host, port=bind_port, url=url, registry=registry, clock=clock)
