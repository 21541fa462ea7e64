# storefront/services/zone_service.py
from typing import Any, Dict, List, Tuple

from sqlalchemy.orm import Session

from storefront.data.models.zone import ZoneModel
from storefront.domain.entities import SyncResult
from storefront.domain.errors import NotFoundError, ValidationError
from storefront.domain.i18n import normalize_translations
from storefront.domain.schemas import ZoneCreate, ZoneUpdate
from storefront.repos.store_repo import StoreRepo
from storefront.repos.zone_repo import SqlZoneRepository
from storefront.services.zone_sync import ZoneMembershipSynchronizer
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_ZONE_NAME = "New Zone"


def zone_to_dict(zone: ZoneModel) -> Dict[str, Any]:
    return {
        "id": zone.id,
        "name": zone.name,
        "name_translations": normalize_translations(zone.name_translations),
        "coordinates": list(zone.coordinates or []),
    }


class ZoneService:
    """
    Admin use cases for zones and their store rosters.

    Every mutation and the membership sync it triggers share one
    transaction: either both are committed or neither is.
    """

    def __init__(self, db: Session):
        self.repo = SqlZoneRepository(db)
        self.stores = StoreRepo(db)
        self.synchronizer = ZoneMembershipSynchronizer(self.repo)

    #queries
    def list_zones(self) -> List[Dict[str, Any]]:
        return [zone_to_dict(z) for z in self.repo.list_zone_models()]

    def get_zone_detail(self, zone_id: int) -> Dict[str, Any]:
        zone = self._get_zone(zone_id)
        roster = self.repo.list_zone_store_ids(zone.id)

        stores = [
            {
                "id": s.id,
                "name": s.name,
                "name_translations": normalize_translations(s.name_translations),
                "latitude": s.latitude,
                "longitude": s.longitude,
                "address": s.address,
                "city": s.city,
                "in_zone": s.id in roster,
            }
            for s in self.stores.list_stores()
        ]

        users = self.repo.list_zone_users(zone.id)
        counts = self.repo.cart_counts_by_user([u.id for u in users])

        return {
            "zone": zone_to_dict(zone),
            "stores": stores,
            "users": [
                {
                    "id": u.id,
                    "name": u.name,
                    "email": u.email,
                    "address": u.address,
                    "city": u.city,
                    "state": u.state,
                    "country": u.country,
                    "postal_code": u.postal_code,
                    "open_carts": counts[u.id]["open"],
                    "completed_carts": counts[u.id]["completed"],
                }
                for u in users
            ],
        }

    #commands
    def create_zone(self, payload: ZoneCreate) -> Dict[str, Any]:
        raw = payload.translations if payload.translations is not None else {
            "en": payload.name or DEFAULT_ZONE_NAME
        }
        translations = normalize_translations(raw)
        name = translations.get("en") or (payload.name or "").strip() or DEFAULT_ZONE_NAME

        zone = self.repo.add_zone(
            ZoneModel(name=name, name_translations=translations, coordinates=[])
        )
        self.repo.commit()

        logger.info(f"Created zone {zone.id} ({name})")
        return zone_to_dict(zone)

    def update_zone(self, zone_id: int, payload: ZoneUpdate) -> Tuple[Dict[str, Any], SyncResult]:
        zone = self._get_zone(zone_id)

        def apply():
            translations = None
            if payload.translations is not None:
                translations = normalize_translations(payload.translations)
                zone.name_translations = translations

            name = (translations or {}).get("en") or (payload.name or "").strip()
            if name:
                zone.name = name

            if payload.coordinates is not None:
                zone.coordinates = [{"lat": c.lat, "lng": c.lng} for c in payload.coordinates]

            logger.info(f"Updated zone {zone.id}")

        result = self._mutate_and_sync(zone.id, apply)
        return zone_to_dict(zone), result

    def delete_zone(self, zone_id: int) -> SyncResult:
        zone = self._get_zone(zone_id)

        def clear_polygon():
            # an empty polygon matches nobody, the sync moves its users out
            zone.coordinates = []

        result = self._mutate_and_sync(zone.id, clear_polygon, commit=False)

        try:
            self.repo.delete_zone(zone)
            self.repo.commit()
        except Exception as e:
            logger.error(f"Failed to delete zone {zone_id}: {e}")
            self.repo.rollback()
            raise

        logger.info(f"Deleted zone {zone_id}")
        return result

    def add_store(self, zone_id: int, store_id: int | None) -> SyncResult:
        if store_id is None:
            raise ValidationError("store_id required")

        zone = self._get_zone(zone_id)
        if not self.stores.get_store(store_id):
            raise NotFoundError(f"Store {store_id} not found")

        def link():
            self.repo.link_store(zone.id, store_id)
            logger.info(f"Store {store_id} linked to zone {zone.id}")

        return self._mutate_and_sync(zone.id, link)

    def remove_store(self, zone_id: int, store_id: int | None) -> SyncResult:
        if store_id is None:
            raise ValidationError("store_id required")

        zone = self._get_zone(zone_id)

        def unlink():
            self.repo.unlink_store(zone.id, store_id)
            logger.info(f"Store {store_id} unlinked from zone {zone.id}")

        return self._mutate_and_sync(zone.id, unlink)

    # helpers

    def _get_zone(self, zone_id: int) -> ZoneModel:
        zone = self.repo.get_zone_model(zone_id)
        if not zone:
            raise NotFoundError(f"Zone {zone_id} not found")
        return zone

    def _mutate_and_sync(self, zone_id: int, mutation, commit: bool = True) -> SyncResult:
        try:
            mutation()
            self.repo.db.flush()
            result = self.synchronizer.sync_zone_membership(zone_id)
            if commit:
                self.repo.commit()
            return result
        except Exception as e:
            logger.error(f"Zone {zone_id} update rolled back: {e}")
            self.repo.rollback()
            raise
