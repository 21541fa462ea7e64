# storefront/services/access.py
from storefront.domain.entities import Identity
from storefront.domain.errors import AccessDeniedError, NotAuthenticatedError


def require_authenticated(identity: Identity | None) -> Identity:
    if identity is None:
        raise NotAuthenticatedError()
    return identity


def require_admin_session(identity: Identity | None) -> Identity:
    """
    Gate for every admin mutation. Fails closed: no identity is a 401,
    an identity without the admin flag is a 403.
    """
    identity = require_authenticated(identity)

    if not identity.is_admin:
        raise AccessDeniedError()

    return identity
