from __future__ import annotations

import argparse
import time

from .config import Settings
from .runtime.server import run


def main() -> None:
    settings = Settings.from_env()
    p = argparse.ArgumentParser(prog="rollcall", description="rollcall: single-tenant membership registry")
    p.add_argument("--host", default=settings.host)
    p.add_argument("--port", type=int, default=settings.port)
    p.add_argument("--admin", default=settings.admin, help="principal allowed to remove any member")
    p.add_argument("--log-level", default=settings.log_level)
    args = p.parse_args()

    settings = Settings(
        host=args.host,
        port=args.port,
        admin=args.admin or None,
        log_level=args.log_level,
        cors_origins=settings.cors_origins,
    )
    srv = run(settings=settings, new_server=True)
    print(srv.url)

    # Block forever (so it behaves like a normal CLI server)
    while True:
        time.sleep(3600)


if __name__ == "__main__":
    main()
