# storefront/repos/memory_repo.py
from typing import Dict, Iterable, List, Optional, Set, Tuple

from storefront.data.models.cart import CART_SHOPPING
from storefront.domain.entities import Coordinate, UserLocation, ZoneSnapshot
from storefront.domain.geo import to_coordinate
from storefront.repos.zone_repo import ZoneRepository


class InMemoryZoneRepository(ZoneRepository):
    """Dict-backed ZoneRepository; writes apply immediately."""

    def __init__(self):
        self.zones: Dict[int, ZoneSnapshot] = {}
        self.links: Set[Tuple[int, int]] = set()
        self.users: Dict[int, UserLocation] = {}
        # cart_id -> (user_id, status)
        self.carts: Dict[int, Tuple[int, str]] = {}
        # item_id -> (cart_id, store_id)
        self.items: Dict[int, Tuple[int, int]] = {}
        self.commits = 0
        self.rollbacks = 0

    # seeding

    def add_zone(self, zone_id: int, vertices=(), store_ids=(), name: str = "") -> ZoneSnapshot:
        self.zones[zone_id] = ZoneSnapshot(
            id=zone_id,
            name=name or f"Zone {zone_id}",
            vertices=[to_coordinate(v) for v in vertices],
        )
        for store_id in store_ids:
            self.links.add((zone_id, store_id))
        return self.zones[zone_id]

    def set_zone_vertices(self, zone_id: int, vertices) -> None:
        self.zones[zone_id].vertices = [to_coordinate(v) for v in vertices]

    def add_user(self, user_id: int, point: Coordinate | None = None, zone_id: int | None = None) -> UserLocation:
        lat, lng = point if point is not None else (None, None)
        self.users[user_id] = UserLocation(id=user_id, zone_id=zone_id, latitude=lat, longitude=lng)
        return self.users[user_id]

    def add_cart(self, cart_id: int, user_id: int, status: str = CART_SHOPPING) -> None:
        self.carts[cart_id] = (user_id, status)

    def add_item(self, item_id: int, cart_id: int, store_id: int) -> None:
        self.items[item_id] = (cart_id, store_id)

    def cart_store_ids(self, cart_id: int) -> List[int]:
        return sorted(store_id for cid, store_id in self.items.values() if cid == cart_id)

    # ZoneRepository

    def _snapshot(self, zone: ZoneSnapshot) -> ZoneSnapshot:
        return ZoneSnapshot(
            id=zone.id,
            name=zone.name,
            vertices=list(zone.vertices),
            store_ids=self.list_zone_store_ids(zone.id),
        )

    def get_zone(self, zone_id: int) -> ZoneSnapshot | None:
        zone = self.zones.get(zone_id)
        return self._snapshot(zone) if zone else None

    def list_zones(self) -> List[ZoneSnapshot]:
        return [self._snapshot(self.zones[zid]) for zid in sorted(self.zones)]

    def list_candidate_users(self, zone_id: int) -> List[UserLocation]:
        return [
            UserLocation(u.id, u.zone_id, u.latitude, u.longitude)
            for uid, u in sorted(self.users.items())
            if u.point is not None and (u.zone_id is None or u.zone_id == zone_id)
        ]

    def list_zone_user_ids(self, zone_id: int) -> List[int]:
        return sorted(uid for uid, u in self.users.items() if u.zone_id == zone_id)

    def set_user_zone(self, user_id: int, zone_id: Optional[int]) -> None:
        if user_id in self.users:
            self.users[user_id].zone_id = zone_id

    def list_zone_store_ids(self, zone_id: int) -> Set[int]:
        return {store_id for zid, store_id in self.links if zid == zone_id}

    def get_active_cart_id(self, user_id: int) -> int | None:
        active = [cid for cid, (uid, status) in self.carts.items() if uid == user_id and status == CART_SHOPPING]
        return max(active) if active else None

    def delete_cart_items(self, cart_id: int, keep_store_ids: Optional[Iterable[int]] = None) -> int:
        keep = set(keep_store_ids) if keep_store_ids is not None else None
        doomed = [
            item_id
            for item_id, (cid, store_id) in self.items.items()
            if cid == cart_id and (keep is None or store_id not in keep)
        ]
        for item_id in doomed:
            del self.items[item_id]
        return len(doomed)

    def link_store(self, zone_id: int, store_id: int) -> None:
        self.links.add((zone_id, store_id))

    def unlink_store(self, zone_id: int, store_id: int) -> None:
        self.links.discard((zone_id, store_id))

    def commit(self) -> None:
        self.commits += 1

    def rollback(self) -> None:
        self.rollbacks += 1
