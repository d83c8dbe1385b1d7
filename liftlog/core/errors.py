"""Error taxonomy shared by services and the API layer.

Every error raised from a service means the unit of work was rolled back;
nothing is partially persisted.
"""


class LiftlogError(Exception):
    """Base class for expected, caller-facing failures."""

    code: str = "error"
    status_code: int = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(LiftlogError):
    """Malformed numeric input (reps, weight, RPE out of range)."""

    code = "validation_error"
    status_code = 422


class NotFoundError(LiftlogError):
    """Unknown session, exercise or user."""

    code = "not_found"
    status_code = 404


class ForbiddenError(LiftlogError):
    """Resource exists but the caller may not act on it."""

    code = "forbidden"
    status_code = 403


class LedgerConflictError(LiftlogError):
    """Ledger contention exceeded the retry bound; retry the whole call."""

    code = "conflict"
    status_code = 409


class RestrictedError(LiftlogError):
    """Deletion blocked by rows that still reference the target."""

    code = "restricted"
    status_code = 409
