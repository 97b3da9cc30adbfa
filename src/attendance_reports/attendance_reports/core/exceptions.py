class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class IngestionError(ValidationError):
    """Raised when an uploaded punch file cannot be turned into punches."""


class ReportNotFoundError(DomainError):
    """Raised when a report id does not exist in the store."""


class ShiftOverrideNotFoundError(DomainError):
    """Raised when an employee has no shift assignment to remove."""
