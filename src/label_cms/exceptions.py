"""Domain error kinds raised by repositories and mapped to responses in main."""

from collections.abc import Iterable


class LabelError(Exception):
    """Base exception for all domain errors."""

    status_code: int = 500
    default_message: str = "An unexpected error occurred"

    def __init__(self, message: str | None = None, status_code: int | None = None) -> None:
        super().__init__(message or self.default_message)
        if status_code is not None:
            self.status_code = status_code

    @property
    def message(self) -> str:
        return str(self)


class ValidationError(LabelError):
    """Raised when a required field is missing or a field is malformed."""

    status_code = 400
    default_message = "Invalid request"

    def __init__(
        self,
        message: str | None = None,
        missing: Iterable[str] = (),
        invalid: Iterable[str] = (),
    ) -> None:
        self.missing = list(missing)
        self.invalid = list(invalid)
        if message is None:
            parts = []
            if self.missing:
                parts.append(f"Missing required fields: {', '.join(self.missing)}")
            if self.invalid:
                parts.append(f"Invalid fields: {', '.join(self.invalid)}")
            message = "; ".join(parts) or None
        super().__init__(message)


class AuthorizationError(LabelError):
    """Raised when the acting principal may not perform the operation.

    401 for anonymous callers, 403 for authenticated users without the
    required role. The message never mentions the target entity.
    """

    status_code = 403
    default_message = "You do not have permission to perform this action"


class NotFoundError(LabelError):
    """Raised when an id does not resolve to a stored entity."""

    status_code = 404
    default_message = "Resource not found"


class StorageUnavailableError(LabelError):
    """Raised when the database cannot be reached."""

    status_code = 503
    default_message = "Storage is temporarily unavailable"


class UnexpectedError(LabelError):
    """Wrapper for failures with no more specific kind."""

    status_code = 500
