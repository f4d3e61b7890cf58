class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class NotFoundError(DomainError):
    """Raised when a referenced employee or document does not exist."""


class SpreadsheetImportError(ValidationError):
    """Raised when an attendance spreadsheet cannot be reconciled.

    The import is aborted as a whole; nothing has been written when this is raised.
    """
