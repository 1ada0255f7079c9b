from __future__ import annotations


class RegistryError(Exception):
    """Base class for every rejected registry transition.

    A transition raises before touching any table, so catching one of these
    always means the stored state is exactly what it was before the call.
    """

    code = "registry_error"

    def __init__(self, message: str, *, member_id: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.member_id = member_id


class NotFound(RegistryError, KeyError):
    code = "not_found"

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message.
        return self.message


class Forbidden(RegistryError):
    """Caller is not allowed to mutate the record."""

    code = "forbidden"


class Unauthorized(RegistryError):
    """Caller is not allowed to read the record through the self-only path."""

    code = "unauthorized"


class InvalidInput(RegistryError, ValueError):
    code = "invalid_input"

    def __init__(self, message: str, *, field: str | None = None, member_id: int | None = None) -> None:
        super().__init__(message, member_id=member_id)
        self.field = field


class DuplicateMember(RegistryError):
    """The freshly allocated id is already occupied. Should be unreachable."""

    code = "duplicate_member"
