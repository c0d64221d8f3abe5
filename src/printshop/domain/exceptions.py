"""Domain-level exceptions.

Every business rule violation is a subclass of DomainException.  Each
class carries a ``category`` the outer layer (CLI today, HTTP tomorrow)
uses to pick a status or exit code without knowing the concrete type.
"""


class DomainException(Exception):
    """Base class for all domain errors."""

    category = "invalid_input"


# --- not_found ---------------------------------------------------------------


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""

    category = "not_found"


class ServiceNotFound(EntityNotFoundError):
    pass


class OrderNotFound(EntityNotFoundError):
    pass


class ItemIndexOutOfRange(EntityNotFoundError):
    pass


# --- invalid_input -----------------------------------------------------------


class ValidationError(DomainException):
    """A business rule or invariant was violated."""

    category = "invalid_input"


class InvalidQuantity(ValidationError):
    pass


class ServiceInactive(ValidationError):
    pass


class InvalidOptionSelection(ValidationError):
    """The option payload sent with an item does not match the service."""


class MissingRequiredOption(ValidationError):
    pass


class InvalidStatusTransition(ValidationError):
    pass


# --- forbidden / conflict ----------------------------------------------------


class ForbiddenError(DomainException):
    """The actor's role or ownership does not allow the operation."""

    category = "forbidden"


class ConflictError(DomainException):
    """A concurrent write or a duplicate identifier was detected."""

    category = "conflict"
