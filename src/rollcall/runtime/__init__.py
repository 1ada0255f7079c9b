from __future__ import annotations

from .app import create_app
from .server import RollcallServer, run

__all__ = ["create_app", "RollcallServer", "run"]
