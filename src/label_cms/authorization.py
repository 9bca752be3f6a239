"""Authorization gate for mutating operations."""

import enum

from label_cms.exceptions import AuthorizationError
from label_cms.models.user import User, UserRole


class Operation(enum.StrEnum):
    """Class of operation being requested."""

    READ = "read"
    WRITE = "write"


def is_allowed(role: UserRole | str | None, operation: Operation) -> bool:
    """Return whether a principal with ``role`` may perform ``operation``.

    Reads are open to everyone, including anonymous callers (``role=None``).
    Writes require the admin role exactly.
    """
    if operation is Operation.READ:
        return True
    return role is not None and role == UserRole.ADMIN


def authorize(principal: User | None, operation: Operation) -> None:
    """Raise AuthorizationError unless ``principal`` may perform ``operation``."""
    role = principal.role if principal is not None else None
    if is_allowed(role, operation):
        return

    if principal is None:
        raise AuthorizationError("Authentication required", status_code=401)
    raise AuthorizationError()
