#storefront/api/routers/carts.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from storefront.api.deps import require_user
from storefront.data.database import get_db
from storefront.domain.entities import Identity
from storefront.domain.errors import ConflictError, NotFoundError, ValidationError
from storefront.domain.schemas import ItemIn, CartOut
from storefront.services.cart_service import CartService

router = APIRouter(prefix="/cart", tags=["cart"])


def get_service(db: Session):
    return CartService(db)


@router.get("/", response_model=CartOut)
def get_cart(identity: Identity = Depends(require_user), db: Session = Depends(get_db)):
    try:
        return get_service(db).get_cart(identity.user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/items", response_model=CartOut)
def add_item(
    payload: ItemIn,
    identity: Identity = Depends(require_user),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        return svc.add_product(
            user_id=identity.user_id,
            store_product_id=payload.store_product_id,
            quantity=payload.quantity,
        )
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.delete("/items/{item_id}", response_model=CartOut)
def remove_item(
    item_id: int,
    identity: Identity = Depends(require_user),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        return svc.remove_item(identity.user_id, item_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.post("/checkout", response_model=CartOut)
def checkout(identity: Identity = Depends(require_user), db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        return svc.checkout(identity.user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))
