from __future__ import annotations

from typing import Any

PRINCIPAL_HEADER = "X-Rollcall-Principal"


def parse_bool(value: Any, *, field: str) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        raise ValueError(f"Missing {field}")
    s = str(value).strip().lower()
    if s in {"1", "true", "yes", "on"}:
        return True
    if s in {"0", "false", "no", "off"}:
        return False
    raise ValueError(f"Invalid {field}")


def parse_principal(value: Any) -> str | None:
    if value is None:
        return None
    s = str(value).strip()
    return s or None


def _require_str(body: dict[str, Any], key: str) -> str:
    if key not in body:
        raise ValueError(f"Missing field: {key}")
    value = body[key]
    if not isinstance(value, str):
        raise ValueError(f"{key} must be a string")
    return value


def _require_str_list(body: dict[str, Any], key: str) -> list[str]:
    if key not in body:
        raise ValueError(f"Missing field: {key}")
    value = body[key]
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ValueError(f"{key} must be a list of strings")
    return list(value)


def parse_register_body(body: dict[str, Any]) -> tuple[str, str, list[str]]:
    nickname = _require_str(body, "nickname")
    bio = _require_str(body, "bio") if "bio" in body else ""
    preferences = _require_str_list(body, "preferences")
    return nickname, bio, preferences


def parse_profile_body(body: dict[str, Any]) -> dict[str, Any]:
    """Pick the profile fields present in a PATCH body.

    Unknown keys are rejected so a typo does not silently turn into a no-op.
    """

    allowed = {"nickname", "bio", "preferences"}
    unknown = sorted(set(body) - allowed)
    if unknown:
        raise ValueError(f"Unsupported field(s): {', '.join(unknown)}")

    out: dict[str, Any] = {}
    if "nickname" in body:
        out["nickname"] = _require_str(body, "nickname")
    if "bio" in body:
        out["bio"] = _require_str(body, "bio")
    if "preferences" in body:
        out["preferences"] = _require_str_list(body, "preferences")
    if not out:
        raise ValueError("Provide at least one of nickname, bio or preferences")
    return out


def parse_single_field(body: dict[str, Any], key: str) -> Any:
    if key == "preferences":
        return _require_str_list(body, key)
    return _require_str(body, key)


def parse_visibility_body(body: dict[str, Any]) -> bool:
    return parse_bool(body.get("granted"), field="granted")
