# storefront/api/routers/admin_zones.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from storefront.api.deps import require_admin
from storefront.data.database import get_db
from storefront.domain.errors import NotFoundError, ValidationError
from storefront.domain.schemas import (
    ZoneCreate,
    ZoneUpdate,
    ZoneOut,
    ZoneDetailOut,
    ZoneStoreIn,
    ZoneMutationOut,
    SyncOut,
)
from storefront.services.zone_service import ZoneService

# admin gate runs before any handler body
router = APIRouter(
    prefix="/admin/zones",
    tags=["admin-zones"],
    dependencies=[Depends(require_admin)],
)


def get_service(db: Session):
    return ZoneService(db)


@router.get("/", response_model=List[ZoneOut])
def list_zones(db: Session = Depends(get_db)):
    return get_service(db).list_zones()


@router.post("/", response_model=ZoneOut, status_code=201)
def create_zone(payload: ZoneCreate, db: Session = Depends(get_db)):
    return get_service(db).create_zone(payload)


@router.get("/{zone_id}", response_model=ZoneDetailOut)
def get_zone(zone_id: int, db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        return svc.get_zone_detail(zone_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.put("/{zone_id}", response_model=ZoneOut)
def update_zone(zone_id: int, payload: ZoneUpdate, db: Session = Depends(get_db)):
    """Update name, translations or polygon, then re-sync the zone's users."""
    svc = get_service(db)
    try:
        zone, _ = svc.update_zone(zone_id, payload)
        return zone
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/{zone_id}", response_model=ZoneMutationOut)
def delete_zone(zone_id: int, db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        result = svc.delete_zone(zone_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"success": True, "sync": SyncOut.model_validate(result)}


@router.post("/{zone_id}/stores", response_model=ZoneMutationOut)
def add_store(zone_id: int, payload: ZoneStoreIn, db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        result = svc.add_store(zone_id, payload.store_id)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"success": True, "sync": SyncOut.model_validate(result)}


@router.delete("/{zone_id}/stores/{store_id}", response_model=ZoneMutationOut)
def remove_store(zone_id: int, store_id: int, db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        result = svc.remove_store(zone_id, store_id)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"success": True, "sync": SyncOut.model_validate(result)}
