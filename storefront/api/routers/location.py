# storefront/api/routers/location.py
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from storefront.api.deps import get_geocoder, get_identity, require_user
from storefront.data.database import get_db
from storefront.domain.entities import Identity
from storefront.domain.errors import NotFoundError, ValidationError
from storefront.domain.i18n import DEFAULT_LOCALE
from storefront.domain.schemas import (
    CoordinateIn,
    LocationIn,
    LocationCheckOut,
    LocationUpdateOut,
    ZoneMatchOut,
)
from storefront.services.geocode_client import GeocodingClient
from storefront.services.location_service import LocationService

router = APIRouter(tags=["location"])


def get_service(db: Session, geocoder: GeocodingClient | None = None):
    return LocationService(db, geocoder)


@router.post("/zone/check", response_model=ZoneMatchOut)
def check_zone(
    payload: CoordinateIn,
    locale: str = Query(DEFAULT_LOCALE),
    db: Session = Depends(get_db),
):
    return get_service(db).check_zone(payload.lat, payload.lng, locale)


@router.post("/location/check", response_model=LocationCheckOut)
def check_location(
    payload: LocationIn,
    locale: str = Query(DEFAULT_LOCALE),
    identity: Identity | None = Depends(get_identity),
    db: Session = Depends(get_db),
    geocoder: GeocodingClient = Depends(get_geocoder),
):
    """Which zone a new location falls in, without saving anything."""
    svc = get_service(db, geocoder)
    try:
        return svc.check_location(identity, payload, locale)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/location", response_model=LocationUpdateOut)
def update_location(
    payload: LocationIn,
    locale: str = Query(DEFAULT_LOCALE),
    identity: Identity = Depends(require_user),
    db: Session = Depends(get_db),
    geocoder: GeocodingClient = Depends(get_geocoder),
):
    svc = get_service(db, geocoder)
    try:
        return svc.update_location(identity, payload, locale)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
