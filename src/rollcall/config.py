from __future__ import annotations

from typing import Annotated, Any, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Process-level settings, read from ROLLCALL_* environment variables.

    - ROLLCALL_HOST / ROLLCALL_PORT: where `run()` binds a new server.
    - ROLLCALL_URL: an already-running server to attach to instead.
    - ROLLCALL_ADMIN: principal allowed to remove any member (unset = nobody).
    - ROLLCALL_LOG_LEVEL: level for the `rollcall` logger.
    - ROLLCALL_CORS_ORIGINS: comma-separated browser origins to allow.
    """

    host: str = "127.0.0.1"
    port: int = 8000
    url: str = ""
    admin: Optional[str] = None
    log_level: str = "info"
    cors_origins: Annotated[tuple[str, ...], NoDecode] = ()

    model_config = SettingsConfigDict(
        env_prefix="ROLLCALL_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    @classmethod
    def from_env(cls) -> "Settings":
        return cls()

    @field_validator("host", mode="before")
    @classmethod
    def default_blank_host(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return "127.0.0.1"
        return v.strip() if isinstance(v, str) else v

    @field_validator("port")
    @classmethod
    def port_in_range(cls, v: int) -> int:
        if v < 0 or v > 65535:
            raise ValueError(f"port out of range: {v}")
        return v

    @field_validator("url")
    @classmethod
    def normalize_url(cls, v: str) -> str:
        v = v.strip()
        if not v:
            return ""
        # Allow passing just host:port.
        if "://" not in v:
            v = "http://" + v
        return v.rstrip("/")

    @field_validator("admin", mode="before")
    @classmethod
    def blank_admin_is_none(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip() or None
        return v

    @field_validator("log_level")
    @classmethod
    def lower_log_level(cls, v: str) -> str:
        return v.strip().lower() or "info"

    @field_validator("cors_origins", mode="before")
    @classmethod
    def split_cors_origins(cls, v: Any) -> Any:
        if isinstance(v, str):
            return tuple(o.strip() for o in v.split(",") if o.strip())
        return v
