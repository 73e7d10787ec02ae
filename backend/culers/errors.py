"""
Exceptions raised by the allocation, scoring and vote services.

Each carries an operator-facing message and a caller-facing ``user_message``;
the app factory renders the latter as ``{"error": ...}`` with ``status_code``.
"""


class CulersError(Exception):
    """Base exception for service-level errors."""
    status_code = 500

    def __init__(self, message: str, user_message: str = None):
        super().__init__(message)
        self.user_message = user_message or message


class ValidationError(CulersError):
    """Raised when request input is missing, malformed or out of range."""
    status_code = 400


class NotFoundError(CulersError):
    """Raised when a referenced player or match does not exist."""
    status_code = 404

    def __init__(self, entity: str, entity_id):
        super().__init__(
            f"{entity} {entity_id} not found",
            f"{entity} not found"
        )
        self.entity = entity
        self.entity_id = entity_id


class ConflictError(CulersError):
    """Raised when a uniqueness constraint is lost to a concurrent writer."""
    status_code = 409


class WriteFailure(CulersError):
    """Raised when an atomic write fails and has been rolled back."""
    status_code = 500

    def __init__(self, operation: str, details: str = None):
        super().__init__(
            f"Write failed during {operation}: {details}",
            f"{operation.capitalize()} failed"
        )
        self.operation = operation
