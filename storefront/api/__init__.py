# storefront/api/__init__.py
from fastapi import FastAPI

from storefront.api.routers import admin_stores, admin_zones, carts, health, location


def include_routers(app: FastAPI) -> FastAPI:
    app.include_router(health.router)
    app.include_router(admin_zones.router)
    app.include_router(admin_stores.router)
    app.include_router(location.router)
    app.include_router(carts.router)
    return app
