# storefront/services/cart_pruner.py
from typing import Iterable

from storefront.repos.zone_repo import ZoneRepository
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class CartPruner:
    """
    Removes cart items whose store is not reachable any more.
    Safe to re-run, and a missing cart simply means nothing is deleted.
    """

    def __init__(self, repo: ZoneRepository):
        self.repo = repo

    def remove_items_outside_zone(self, cart_id: int, allowed_store_ids: Iterable[int]) -> int:
        allowed = set(allowed_store_ids or ())

        #no zone -> nothing is reachable
        if not allowed:
            removed = self.repo.delete_cart_items(cart_id)
        else:
            removed = self.repo.delete_cart_items(cart_id, keep_store_ids=allowed)

        if removed:
            logger.info(f"Removed {removed} item(s) outside zone from cart {cart_id}")

        return removed
