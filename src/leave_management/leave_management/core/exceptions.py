class DomainError(Exception):
    """Base class for errors the API reports back to the caller as-is."""


class ValidationError(DomainError):
    """Bad input: unknown leave type or department, reversed date range, empty reason."""


class AuthenticationError(DomainError):
    """Unknown username or wrong password."""


class AuthorizationError(DomainError):
    """The caller's role may not perform this action (e.g. a teacher filing leave)."""


class NotFoundError(DomainError):
    pass


class ConflictError(DomainError):
    """The write clashes with stored state: duplicate username or cohort, request already reviewed."""
