"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """An entity invariant was violated (empty field, negative amount, ...)."""


class NotFoundError(DomainException):
    """A requested entity does not exist."""


class DomainError(DomainException):
    """A business rule that is not a single-field invariant was violated."""
