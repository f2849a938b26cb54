"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EmptyCartError(ValidationError):
    """Checkout was attempted with nothing in the cart."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class StoreError(DomainException):
    """The document store failed to read or write."""


class IndexRequiredError(StoreError):
    """The store cannot serve a query without a composite index."""


class UnauthenticatedError(DomainException):
    """An operation needs a signed-in user and there is none."""


class ConfigError(DomainException):
    """The configuration file is missing a value or holds a bad one."""
