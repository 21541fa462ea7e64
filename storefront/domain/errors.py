# storefront/domain/errors.py


class StorefrontError(Exception):
    """Base for errors the API layer translates into HTTP responses."""


class AccessDeniedError(StorefrontError, PermissionError):
    def __init__(self, message: str = "Admin access required"):
        super().__init__(message)


class NotAuthenticatedError(AccessDeniedError):
    def __init__(self, message: str = "Authentication required"):
        super().__init__(message)


class NotFoundError(StorefrontError, LookupError):
    pass


class ValidationError(StorefrontError, ValueError):
    pass


class ConflictError(StorefrontError, RuntimeError):
    pass
