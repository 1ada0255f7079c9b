from __future__ import annotations

from .members import (
    PRINCIPAL_HEADER,
    parse_bool,
    parse_principal,
    parse_profile_body,
    parse_register_body,
    parse_single_field,
    parse_visibility_body,
)

__all__ = [
    "PRINCIPAL_HEADER",
    "parse_bool",
    "parse_principal",
    "parse_register_body",
    "parse_profile_body",
    "parse_single_field",
    "parse_visibility_body",
]
