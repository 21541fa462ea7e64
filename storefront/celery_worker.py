# storefront/celery_worker.py
from celery import Celery

from storefront.utils.settings import CELERY_BROKER_URL, CELERY_RESULT_BACKEND, ZONE_RECONCILE_SECONDS

celery_app = Celery(
    "storefront",
    broker=CELERY_BROKER_URL,
    backend=CELERY_RESULT_BACKEND,
)

# tasks must be imported explicitly for the worker to register them
celery_app.conf.imports = (
    "storefront.tasks.reconcile",
)

celery_app.conf.beat_schedule = {
    "reconcile-zones": {
        "task": "storefront.tasks.reconcile.reconcile_zones_task",
        "schedule": ZONE_RECONCILE_SECONDS,
    },
}

celery_app.conf.timezone = "UTC"
