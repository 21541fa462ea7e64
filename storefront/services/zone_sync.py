# storefront/services/zone_sync.py
from typing import Dict, List, Optional, Set

from storefront.domain.entities import SyncResult, UserLocation, ZoneSnapshot
from storefront.domain.errors import NotFoundError
from storefront.domain.geo import find_zone_for_point
from storefront.repos.zone_repo import ZoneRepository
from storefront.services.cart_pruner import CartPruner
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class ZoneMembershipSynchronizer:
    """
    Keeps User.zone_id and active carts consistent with zone polygons and
    store rosters.

    Store membership comes from the admin-declared roster, the polygon only
    decides which users a zone serves. Overlapping zones resolve to the lowest
    zone id. Nothing is committed here, the caller owns the transaction.

    Only users that are unassigned or already in the synced zone are
    re-evaluated. A user sitting in a higher-id zone that a lower-id zone now
    also covers stays where they are until their own zone is synced (the
    reconcile task syncs every zone), while update_location at the same point
    already picks the lower id.

    A zone without a usable polygon serves nobody: every user still assigned
    to it afterwards, including users without a coordinate, is unassigned and
    their active cart emptied.
    """

    def __init__(self, repo: ZoneRepository, pruner: CartPruner | None = None):
        self.repo = repo
        self.pruner = pruner or CartPruner(repo)

    def sync_zone_membership(self, zone_id: int) -> SyncResult:
        zone = self.repo.get_zone(zone_id)
        if not zone:
            raise NotFoundError(f"Zone {zone_id} not found")

        zones = self.repo.list_zones()
        rosters: Dict[Optional[int], Set[int]] = {z.id: z.store_ids for z in zones}
        rosters[None] = set()

        result = SyncResult(zone_id=zone_id)

        for user in self.repo.list_candidate_users(zone_id):
            new_zone = find_zone_for_point(zones, user.point)
            new_zone_id = new_zone.id if new_zone else None

            if new_zone_id != user.zone_id:
                self._record_change(result, user, new_zone_id)
                self.repo.set_user_zone(user.id, new_zone_id)
            elif new_zone_id != zone_id:
                # unassigned before and after, no cart can hold reachable items
                continue

            result.removed_items += self._prune_user_cart(user.id, rosters[new_zone_id])

        if len(zone.vertices) < 3:
            for user_id in self.repo.list_zone_user_ids(zone_id):
                result.unassigned.append(user_id)
                self.repo.set_user_zone(user_id, None)
                result.removed_items += self._prune_user_cart(user_id, set())
                logger.info(f"User {user_id} zone {zone_id} -> None (zone has no polygon)")

        logger.info(
            f"Zone {zone_id} synced: {len(result.assigned)} assigned, "
            f"{len(result.unassigned)} unassigned, {len(result.reassigned)} reassigned, "
            f"{result.removed_items} cart item(s) removed"
        )

        return result

    def resolve_zone(self, point, zones: List[ZoneSnapshot] | None = None) -> ZoneSnapshot | None:
        return find_zone_for_point(zones if zones is not None else self.repo.list_zones(), point)

    def _record_change(self, result: SyncResult, user: UserLocation, new_zone_id: Optional[int]) -> None:
        if user.zone_id is None:
            result.assigned.append(user.id)
        elif new_zone_id is None:
            result.unassigned.append(user.id)
        else:
            result.reassigned.append(user.id)

        logger.info(f"User {user.id} zone {user.zone_id} -> {new_zone_id}")

    def _prune_user_cart(self, user_id: int, allowed_store_ids: Set[int]) -> int:
        cart_id = self.repo.get_active_cart_id(user_id)
        if cart_id is None:
            return 0
        return self.pruner.remove_items_outside_zone(cart_id, allowed_store_ids)
