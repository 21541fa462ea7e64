# storefront/api/routers/admin_stores.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from storefront.api.deps import require_admin
from storefront.data.database import get_db
from storefront.domain.errors import NotFoundError
from storefront.domain.schemas import StoreCreate, StoreOut, StoreProductCreate, StoreProductOut
from storefront.services.store_service import StoreService

router = APIRouter(
    prefix="/admin/stores",
    tags=["admin-stores"],
    dependencies=[Depends(require_admin)],
)


@router.get("/", response_model=List[StoreOut])
def list_stores(search: str | None = Query(None), db: Session = Depends(get_db)):
    return StoreService(db).list_stores(search)


@router.post("/", response_model=StoreOut, status_code=201)
def create_store(payload: StoreCreate, db: Session = Depends(get_db)):
    return StoreService(db).create_store(payload)


@router.post("/{store_id}/products", response_model=StoreProductOut, status_code=201)
def add_product(store_id: int, payload: StoreProductCreate, db: Session = Depends(get_db)):
    try:
        return StoreService(db).add_product(store_id, payload)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
