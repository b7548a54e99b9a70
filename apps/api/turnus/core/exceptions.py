# apps/api/turnus/core/exceptions.py


class DomainError(Exception):
    """Base exception for business rule violations."""

    status_code = 400
    kind = "error"

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class ValidationError(DomainError):
    """Raised when input data is malformed or a required field is missing."""

    status_code = 400
    kind = "validation_error"


class PermissionDenied(DomainError):
    """Raised when the caller's role does not allow the action."""

    status_code = 403
    kind = "permission_denied"


class NotFoundError(DomainError):
    """Raised when a referenced record does not exist."""

    status_code = 404
    kind = "not_found"


class ConflictError(DomainError):
    """Raised on an illegal state transition or a duplicate shift."""

    status_code = 409
    kind = "conflict"
