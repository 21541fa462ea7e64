# storefront/services/store_service.py
from decimal import Decimal
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from storefront.data.models.store import StoreModel
from storefront.data.models.store_product import StoreProductModel
from storefront.domain.errors import NotFoundError
from storefront.domain.i18n import normalize_translations
from storefront.domain.schemas import StoreCreate, StoreProductCreate
from storefront.repos.store_repo import StoreRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def store_to_dict(store: StoreModel) -> Dict[str, Any]:
    return {
        "id": store.id,
        "name": store.name,
        "name_translations": normalize_translations(store.name_translations),
        "latitude": store.latitude,
        "longitude": store.longitude,
        "address": store.address,
        "city": store.city,
        "state": store.state,
        "country": store.country,
        "postal_code": store.postal_code,
        "zone_ids": sorted(link.zone_id for link in store.zones),
    }


class StoreService:
    def __init__(self, db: Session):
        self.repo = StoreRepo(db)

    def list_stores(self, search: str | None = None) -> List[Dict[str, Any]]:
        return [store_to_dict(s) for s in self.repo.list_stores(search)]

    def create_store(self, payload: StoreCreate) -> Dict[str, Any]:
        translations = normalize_translations(payload.translations)

        store = self.repo.create_store(
            StoreModel(
                name=translations.get("en") or "Unnamed Store",
                name_translations=translations,
                latitude=payload.latitude,
                longitude=payload.longitude,
                address=payload.address or None,
                city=payload.city or None,
                state=payload.state or None,
                country=payload.country or None,
                postal_code=payload.postal_code or None,
            )
        )

        logger.info(f"Created store {store.id} ({store.name})")
        return store_to_dict(store)

    def add_product(self, store_id: int, payload: StoreProductCreate) -> StoreProductModel:
        if not self.repo.get_store(store_id):
            raise NotFoundError(f"Store {store_id} not found")

        translations = normalize_translations(payload.translations)
        product = self.repo.create_product(
            StoreProductModel(
                store_id=store_id,
                name=translations.get("en") or "Unnamed Product",
                name_translations=translations,
                price=Decimal(str(payload.price)),
            )
        )

        logger.info(f"Added product {product.id} to store {store_id}")
        return product
