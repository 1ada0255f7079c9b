"""Field bounds for member profiles.

Lengths are counted in UTF-8 bytes, so a nickname of 50 ASCII characters is
accepted while 50 accented characters are not.
"""

from __future__ import annotations

from typing import Any

from .errors import InvalidInput

NICKNAME_MIN_BYTES = 1
NICKNAME_MAX_BYTES = 50
BIO_MAX_BYTES = 160
PREFERENCE_MIN_BYTES = 1
PREFERENCE_MAX_BYTES = 30
PREFERENCES_MIN_COUNT = 1
PREFERENCES_MAX_COUNT = 5


def _byte_length(value: Any) -> int | None:
    if not isinstance(value, str):
        return None
    return len(value.encode("utf-8"))


def _within(value: Any, lo: int, hi: int) -> bool:
    n = _byte_length(value)
    return n is not None and lo <= n <= hi


def validate_nickname(value: Any) -> bool:
    return _within(value, NICKNAME_MIN_BYTES, NICKNAME_MAX_BYTES)


def validate_bio(value: Any) -> bool:
    return _within(value, 0, BIO_MAX_BYTES)


def validate_preference(value: Any) -> bool:
    return _within(value, PREFERENCE_MIN_BYTES, PREFERENCE_MAX_BYTES)


def validate_preferences(values: Any) -> bool:
    if isinstance(values, (str, bytes)) or not isinstance(values, (list, tuple)):
        return False
    if not (PREFERENCES_MIN_COUNT <= len(values) <= PREFERENCES_MAX_COUNT):
        return False
    return all(validate_preference(v) for v in values)


def require_nickname(value: Any) -> str:
    if not validate_nickname(value):
        raise InvalidInput(
            f"nickname must be {NICKNAME_MIN_BYTES}-{NICKNAME_MAX_BYTES} bytes",
            field="nickname",
        )
    return value


def require_bio(value: Any) -> str:
    if not validate_bio(value):
        raise InvalidInput(f"bio must be at most {BIO_MAX_BYTES} bytes", field="bio")
    return value


def require_preferences(values: Any) -> tuple[str, ...]:
    if not validate_preferences(values):
        raise InvalidInput(
            f"preferences must hold {PREFERENCES_MIN_COUNT}-{PREFERENCES_MAX_COUNT} entries "
            f"of {PREFERENCE_MIN_BYTES}-{PREFERENCE_MAX_BYTES} bytes each",
            field="preferences",
        )
    return tuple(values)
