from __future__ import annotations

import pytest

from rollcall.core.errors import InvalidInput
from rollcall.core.validation import (
    require_bio,
    require_nickname,
    require_preferences,
    validate_bio,
    validate_nickname,
    validate_preference,
    validate_preferences,
)


def test_nickname_bounds() -> None:
    assert not validate_nickname("")
    assert validate_nickname("a")
    assert validate_nickname("a" * 50)
    assert not validate_nickname("a" * 51)


def test_bio_may_be_empty_up_to_160_bytes() -> None:
    assert validate_bio("")
    assert validate_bio("b" * 160)
    assert not validate_bio("b" * 161)


def test_preference_bounds() -> None:
    assert not validate_preference("")
    assert validate_preference("x")
    assert validate_preference("x" * 30)
    assert not validate_preference("x" * 31)


def test_preferences_count_and_elements() -> None:
    assert not validate_preferences([])
    assert validate_preferences(["a"])
    assert validate_preferences(["a", "b", "c", "d", "e"])
    assert not validate_preferences(["a", "b", "c", "d", "e", "f"])
    assert not validate_preferences(["ok", ""])
    assert not validate_preferences(["ok", "x" * 31])


def test_lengths_are_counted_in_utf8_bytes() -> None:
    # "é" is two bytes in UTF-8.
    assert validate_nickname("é" * 25)
    assert not validate_nickname("é" * 26)


def test_non_string_input_is_invalid() -> None:
    assert not validate_nickname(None)
    assert not validate_bio(42)
    assert not validate_preferences("coding")
    assert not validate_preferences(["ok", 3])


def test_require_helpers_name_the_field() -> None:
    with pytest.raises(InvalidInput) as info:
        require_nickname("")
    assert info.value.field == "nickname"

    with pytest.raises(InvalidInput) as info:
        require_bio("z" * 200)
    assert info.value.field == "bio"

    assert require_preferences(["a", "b"]) == ("a", "b")
