import os

# the app engine must not point at postgres while testing
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["GOOGLE_MAPS_API_KEY"] = ""

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import storefront.data.models  # noqa: F401
from storefront.api.deps import get_geocoder, get_session_store
from storefront.data.database import Base, get_db
from storefront.data.models import (
    CartItemModel,
    CartModel,
    StoreModel,
    StoreProductModel,
    UserModel,
    ZoneModel,
    ZoneStoreModel,
)
from storefront.main import create_app
from storefront.services.geocode_client import NormalizedAddress
from storefront.services.session_store import SessionStore

SQUARE = [
    {"lat": 0.0, "lng": 0.0},
    {"lat": 0.0, "lng": 1.0},
    {"lat": 1.0, "lng": 1.0},
    {"lat": 1.0, "lng": 0.0},
]

FAR_SQUARE = [
    {"lat": 10.0, "lng": 10.0},
    {"lat": 10.0, "lng": 11.0},
    {"lat": 11.0, "lng": 11.0},
    {"lat": 11.0, "lng": 10.0},
]


class FakeRedis:
    """The subset of redis.Redis the session store calls."""

    def __init__(self):
        self.data = {}
        self.ttls = {}

    def setex(self, name, time, value):
        self.data[name] = value
        self.ttls[name] = time
        return True

    def get(self, name):
        return self.data.get(name)

    def delete(self, *names):
        return sum(1 for n in names if self.data.pop(n, None) is not None)


class FakeGeocoder:
    def __init__(self):
        self.forward_result = None
        self.reverse_result = None
        self.calls = []

    def geocode_address(self, **parts):
        self.calls.append(("geocode", parts))
        return self.forward_result

    def reverse_geocode(self, lat, lng):
        self.calls.append(("reverse", (lat, lng)))
        return self.reverse_result


class Factory:
    def __init__(self, db):
        self.db = db

    def _save(self, obj):
        self.db.add(obj)
        self.db.commit()
        self.db.refresh(obj)
        return obj

    def user(self, name="Ann", lat=None, lng=None, zone=None, is_admin=False):
        return self._save(
            UserModel(
                name=name,
                is_admin=is_admin,
                latitude=lat,
                longitude=lng,
                zone_id=zone.id if zone else None,
            )
        )

    def zone(self, coordinates=None, name="Downtown", translations=None):
        return self._save(
            ZoneModel(
                name=name,
                name_translations=translations if translations is not None else {"en": name},
                coordinates=coordinates if coordinates is not None else [],
            )
        )

    def store(self, name="Corner Shop", lat=0.5, lng=0.5):
        return self._save(StoreModel(name=name, name_translations={"en": name}, latitude=lat, longitude=lng))

    def link(self, zone, store):
        return self._save(ZoneStoreModel(zone_id=zone.id, store_id=store.id))

    def product(self, store, name="Milk", price="2.50"):
        return self._save(
            StoreProductModel(store_id=store.id, name=name, name_translations={"en": name}, price=Decimal(price))
        )

    def cart(self, user, products=(), status="shopping"):
        cart = self._save(CartModel(user_id=user.id, status=status, version=1))
        for product in products:
            self.db.add(CartItemModel(cart_id=cart.id, store_product_id=product.id, quantity=1, price=product.price))
        self.db.commit()
        return cart

    def cart_store_ids(self, cart):
        self.db.expire_all()
        items = self.db.query(CartItemModel).filter(CartItemModel.cart_id == cart.id).all()
        return sorted(i.store_product.store_id for i in items)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=True, autocommit=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def factory(db):
    return Factory(db)


@pytest.fixture
def sessions():
    return SessionStore(client=FakeRedis(), ttl=60)


@pytest.fixture
def geocoder():
    return FakeGeocoder()


@pytest.fixture
def client(session_factory, sessions, geocoder):
    app = create_app()

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_store] = lambda: sessions
    app.dependency_overrides[get_geocoder] = lambda: geocoder

    return TestClient(app)


@pytest.fixture
def admin(factory):
    return factory.user(name="Admin", is_admin=True)


@pytest.fixture
def admin_headers(admin, sessions):
    return {"Authorization": f"Bearer {sessions.issue(admin.id, is_admin=True)}"}


def headers_for(sessions, user):
    return {"Authorization": f"Bearer {sessions.issue(user.id, is_admin=user.is_admin)}"}


def address(lat, lng, **parts):
    return NormalizedAddress(latitude=lat, longitude=lng, **parts)
