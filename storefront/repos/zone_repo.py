# storefront/repos/zone_repo.py
from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional, Set

from sqlalchemy import select, or_, func
from sqlalchemy.orm import Session

from storefront.data.models.cart import CartModel, CART_SHOPPING
from storefront.data.models.cart_item import CartItemModel
from storefront.data.models.store_product import StoreProductModel
from storefront.data.models.user import UserModel
from storefront.data.models.zone import ZoneModel
from storefront.data.models.zone_store import ZoneStoreModel
from storefront.domain.entities import UserLocation, ZoneSnapshot
from storefront.domain.geo import to_vertices


class ZoneRepository(ABC):
    """
    Persistence operations the zone membership engine depends on.
    Writes are not committed until commit() is called.
    """

    @abstractmethod
    def get_zone(self, zone_id: int) -> ZoneSnapshot | None: ...

    @abstractmethod
    def list_zones(self) -> List[ZoneSnapshot]:
        """All zones ordered by id."""

    @abstractmethod
    def list_candidate_users(self, zone_id: int) -> List[UserLocation]:
        """Users with a coordinate whose zone is null or equals zone_id."""

    @abstractmethod
    def list_zone_user_ids(self, zone_id: int) -> List[int]:
        """Every user assigned to zone_id, with or without a coordinate."""

    @abstractmethod
    def set_user_zone(self, user_id: int, zone_id: Optional[int]) -> None: ...

    @abstractmethod
    def list_zone_store_ids(self, zone_id: int) -> Set[int]: ...

    @abstractmethod
    def get_active_cart_id(self, user_id: int) -> int | None: ...

    @abstractmethod
    def delete_cart_items(self, cart_id: int, keep_store_ids: Optional[Iterable[int]] = None) -> int:
        """
        Delete the cart's items, or only those whose store is not in
        keep_store_ids. Returns the number of deleted rows.
        """

    @abstractmethod
    def link_store(self, zone_id: int, store_id: int) -> None:
        """Idempotent, at most one link per (zone_id, store_id)."""

    @abstractmethod
    def unlink_store(self, zone_id: int, store_id: int) -> None: ...

    @abstractmethod
    def commit(self) -> None: ...

    @abstractmethod
    def rollback(self) -> None: ...


class SqlZoneRepository(ZoneRepository):
    def __init__(self, db: Session):
        self.db = db

    def _snapshot(self, zone: ZoneModel) -> ZoneSnapshot:
        # roster read from the link table, zone.stores may be stale after link/unlink
        return ZoneSnapshot(
            id=zone.id,
            name=zone.name,
            vertices=to_vertices(zone.coordinates),
            store_ids=self.list_zone_store_ids(zone.id),
        )

    # engine operations

    def get_zone(self, zone_id: int) -> ZoneSnapshot | None:
        zone = self.db.get(ZoneModel, zone_id)
        return self._snapshot(zone) if zone else None

    def list_zones(self) -> List[ZoneSnapshot]:
        zones = self.db.execute(select(ZoneModel).order_by(ZoneModel.id)).scalars().all()
        return [self._snapshot(z) for z in zones]

    def list_candidate_users(self, zone_id: int) -> List[UserLocation]:
        users = self.db.execute(
            select(UserModel)
            .where(
                UserModel.latitude.is_not(None),
                UserModel.longitude.is_not(None),
                or_(UserModel.zone_id.is_(None), UserModel.zone_id == zone_id),
            )
            .order_by(UserModel.id)
        ).scalars().all()

        return [
            UserLocation(id=u.id, zone_id=u.zone_id, latitude=u.latitude, longitude=u.longitude)
            for u in users
        ]

    def list_zone_user_ids(self, zone_id: int) -> List[int]:
        return self.db.execute(
            select(UserModel.id).where(UserModel.zone_id == zone_id).order_by(UserModel.id)
        ).scalars().all()

    def set_user_zone(self, user_id: int, zone_id: Optional[int]) -> None:
        user = self.db.get(UserModel, user_id)
        if user:
            user.zone_id = zone_id
            self.db.flush()

    def list_zone_store_ids(self, zone_id: int) -> Set[int]:
        rows = self.db.execute(
            select(ZoneStoreModel.store_id).where(ZoneStoreModel.zone_id == zone_id)
        ).scalars().all()
        return set(rows)

    def get_active_cart_id(self, user_id: int) -> int | None:
        return self.db.execute(
            select(CartModel.id)
            .where(CartModel.user_id == user_id, CartModel.status == CART_SHOPPING)
            .order_by(CartModel.id.desc())
            .limit(1)
        ).scalar_one_or_none()

    def delete_cart_items(self, cart_id: int, keep_store_ids: Optional[Iterable[int]] = None) -> int:
        stmt = (
            select(CartItemModel)
            .join(StoreProductModel, CartItemModel.store_product_id == StoreProductModel.id)
            .where(CartItemModel.cart_id == cart_id)
        )
        if keep_store_ids is not None:
            stmt = stmt.where(StoreProductModel.store_id.not_in(list(keep_store_ids)))

        items = self.db.execute(stmt).scalars().all()
        for item in items:
            self.db.delete(item)
        self.db.flush()

        return len(items)

    def link_store(self, zone_id: int, store_id: int) -> None:
        existing = self.db.execute(
            select(ZoneStoreModel).where(
                ZoneStoreModel.zone_id == zone_id,
                ZoneStoreModel.store_id == store_id,
            )
        ).scalar_one_or_none()

        if not existing:
            self.db.add(ZoneStoreModel(zone_id=zone_id, store_id=store_id))
            self.db.flush()

    def unlink_store(self, zone_id: int, store_id: int) -> None:
        link = self.db.execute(
            select(ZoneStoreModel).where(
                ZoneStoreModel.zone_id == zone_id,
                ZoneStoreModel.store_id == store_id,
            )
        ).scalar_one_or_none()

        if link:
            self.db.delete(link)
            self.db.flush()

    def commit(self) -> None:
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()

    # admin queries

    def get_zone_model(self, zone_id: int) -> ZoneModel | None:
        return self.db.get(ZoneModel, zone_id)

    def list_zone_models(self) -> List[ZoneModel]:
        return self.db.execute(select(ZoneModel).order_by(ZoneModel.name)).scalars().all()

    def add_zone(self, zone: ZoneModel) -> ZoneModel:
        self.db.add(zone)
        self.db.flush()
        return zone

    def delete_zone(self, zone: ZoneModel) -> None:
        self.db.delete(zone)
        self.db.flush()

    def list_zone_users(self, zone_id: int) -> List[UserModel]:
        return self.db.execute(
            select(UserModel).where(UserModel.zone_id == zone_id).order_by(UserModel.id)
        ).scalars().all()

    def cart_counts_by_user(self, user_ids: List[int]) -> Dict[int, Dict[str, int]]:
        counts = {uid: {"open": 0, "completed": 0} for uid in user_ids}
        if not user_ids:
            return counts

        rows = self.db.execute(
            select(CartModel.user_id, CartModel.status, func.count(CartModel.id))
            .where(CartModel.user_id.in_(user_ids))
            .group_by(CartModel.user_id, CartModel.status)
        ).all()

        for user_id, status, count in rows:
            key = "open" if status == CART_SHOPPING else "completed"
            counts[user_id][key] += count

        return counts
