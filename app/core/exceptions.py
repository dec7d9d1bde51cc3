"""Domain exceptions raised by the service layer.

Each error carries a machine-readable ``code`` and the HTTP status it maps
to. Services raise them; the handler registered in ``app.main`` turns them
into the standard ``ErrorResponse`` envelope.
"""

from fastapi import status


class DomainError(Exception):
    """Base class for expected, request-scoped failures"""

    code: str = "DOMAIN_ERROR"
    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(DomainError):
    """Malformed or out-of-range input (bad quantity, overpayment, ...)"""

    code = "VALIDATION_ERROR"
    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(DomainError):
    """A referenced entity does not exist"""

    code = "RESOURCE_NOT_FOUND"
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(DomainError):
    """The requested transition is impossible in the current state"""

    code = "CONFLICT"
    status_code = status.HTTP_409_CONFLICT


class InvalidStateError(DomainError):
    """The operation is not allowed in the entity's lifecycle state"""

    code = "INVALID_STATE"
    status_code = status.HTTP_409_CONFLICT
