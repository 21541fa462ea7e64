# storefront/api/deps.py
from functools import lru_cache

from fastapi import Depends, Header, HTTPException

from storefront.domain.entities import Identity
from storefront.domain.errors import NotAuthenticatedError, AccessDeniedError
from storefront.services.access import require_admin_session, require_authenticated
from storefront.services.geocode_client import GeocodingClient
from storefront.services.session_store import SessionStore


@lru_cache
def get_session_store() -> SessionStore:
    return SessionStore()


def get_geocoder() -> GeocodingClient:
    return GeocodingClient()


def get_identity(
    authorization: str | None = Header(None),
    sessions: SessionStore = Depends(get_session_store),
) -> Identity | None:
    if not authorization:
        return None

    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token:
        return None

    return sessions.resolve(token.strip())


def require_user(identity: Identity | None = Depends(get_identity)) -> Identity:
    try:
        return require_authenticated(identity)
    except NotAuthenticatedError as e:
        raise HTTPException(status_code=401, detail=str(e))


def require_admin(identity: Identity | None = Depends(get_identity)) -> Identity:
    try:
        return require_admin_session(identity)
    except NotAuthenticatedError as e:
        raise HTTPException(status_code=401, detail=str(e))
    except AccessDeniedError as e:
        raise HTTPException(status_code=403, detail=str(e))
