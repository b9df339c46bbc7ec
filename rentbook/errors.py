"""Error kinds raised by the billing engine and its services.

Every error carries a short machine-readable ``code`` and the HTTP status the
API layer answers with. All of them are recoverable by the caller.
"""


class LedgerError(Exception):
    """Base error for billing and payment operations."""

    def __init__(self, message: str, code: str = "error", http_status: int = 400):
        self.message = message
        self.code = code
        self.http_status = http_status
        super().__init__(message)


class DataValidationError(LedgerError):
    """Bad or missing input (no rate configured, non-positive consumption, etc.)."""

    def __init__(self, message: str):
        super().__init__(message, "validation", 422)


class NotFoundError(LedgerError):
    """Referenced tenant, bill or payment does not exist."""

    def __init__(self, message: str):
        super().__init__(message, "not_found", 404)


class ConflictError(LedgerError):
    """Illegal state transition or duplicate record."""

    def __init__(self, message: str):
        super().__init__(message, "conflict", 409)


__all__ = ["LedgerError", "DataValidationError", "NotFoundError", "ConflictError"]
