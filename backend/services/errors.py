"""Domain errors raised by services and translated to HTTP by the router."""


class ServiceError(Exception):
    """Base class for errors a service reports to its caller."""


class NotFoundError(ServiceError):
    pass


class PermissionDeniedError(ServiceError):
    pass


class ConflictError(ServiceError):
    pass


class PersistenceError(ServiceError):
    """The store rejected a write; nothing from the failed operation was committed."""
