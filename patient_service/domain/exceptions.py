from __future__ import annotations


class DomainError(Exception):
    """Base class for errors raised by patient business rules."""

    error_code = "domain_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class BusinessValidationError(DomainError):
    """Raised when input passes field validation but violates a business rule."""

    error_code = "business_validation"


class InvalidDateFormatError(BusinessValidationError):
    """Raised when a date field is not an ISO-8601 calendar date (YYYY-MM-DD)."""

    error_code = "invalid_date_format"


class EmailAlreadyExistsError(DomainError):
    error_code = "email_already_exists"


class PatientNotFoundError(DomainError):
    error_code = "patient_not_found"


class StoreUnavailableError(Exception):
    """Infrastructure fault talking to the patient store.

    Not a domain error: the service lets it propagate untouched.
    """

    error_code = "store_unavailable"

    def __init__(self, message: str = "Patient store is unavailable."):
        super().__init__(message)
        self.message = message
