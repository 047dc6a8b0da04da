"""
Errors Core - Failure Taxonomy.

Every failure raised by the store and the domain services carries a
machine-readable ``code`` next to its human-readable message, so the web
layer can pick a status without parsing text.
"""


class ChoreError(Exception):
    """Base class for expected, structured failures."""

    code = "error"
    http_status = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"error": self.message, "code": self.code}


class ValidationError(ChoreError):
    """A required field is missing or a value is malformed."""

    code = "validation_error"
    http_status = 400


class InvalidReferenceError(ChoreError):
    """A foreign key target (e.g. an assignee) does not exist."""

    code = "reference_error"
    http_status = 400


class ConstraintViolation(ChoreError):
    """A uniqueness rule was violated."""

    code = "constraint_violation"
    http_status = 409


class NotFoundError(ChoreError):
    code = "not_found"
    http_status = 404


class ConflictError(ChoreError):
    """The request conflicts with current state (e.g. re-completing a chore)."""

    code = "conflict"
    http_status = 409


class StoreClosedError(ChoreError):
    code = "store_closed"
    http_status = 503


class FeatureNotImplementedError(ChoreError):
    code = "not_implemented"
    http_status = 501
