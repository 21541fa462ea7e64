# storefront/tasks/reconcile.py
from storefront.celery_worker import celery_app
from storefront.data import database
from storefront.repos.zone_repo import SqlZoneRepository
from storefront.services.zone_sync import ZoneMembershipSynchronizer
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@celery_app.task(name="storefront.tasks.reconcile.reconcile_zones_task")
def reconcile_zones_task():
    """Re-sync every zone, one transaction per zone."""
    logger.info("Reconcile zones task started")

    db = database.SessionLocal()
    summary = {"zones": 0, "failed": [], "changed_users": 0, "removed_items": 0}
    try:
        repo = SqlZoneRepository(db)
        synchronizer = ZoneMembershipSynchronizer(repo)

        for zone in repo.list_zones():
            try:
                result = synchronizer.sync_zone_membership(zone.id)
                repo.commit()
            except Exception as e:
                repo.rollback()
                logger.warning(f"Failed to reconcile zone {zone.id}: {e}")
                summary["failed"].append(zone.id)
                continue

            summary["zones"] += 1
            summary["changed_users"] += len(result.changed_users)
            summary["removed_items"] += result.removed_items

        logger.info(f"Reconcile zones task finished: {summary}")
        return summary

    finally:
        db.close()
