# storefront/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict
from typing import Any, Dict, List, Optional
from decimal import Decimal
from datetime import datetime


class CoordinateIn(BaseModel):
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)


# zones

class ZoneCreate(BaseModel):
    """Create a zone; translations may be any JSON, non-string values are dropped."""

    name: Optional[str] = None
    translations: Optional[Any] = None


class ZoneUpdate(BaseModel):
    name: Optional[str] = None
    translations: Optional[Any] = None
    coordinates: Optional[List[CoordinateIn]] = None


class ZoneOut(BaseModel):
    id: int
    name: str
    name_translations: Dict[str, str]
    coordinates: List[Dict[str, float]]

    model_config = ConfigDict(from_attributes=True)


class ZoneStoreIn(BaseModel):
    """store_id is validated by the service so a missing one is a 400."""

    store_id: Optional[int] = None


class ZoneStoreRow(BaseModel):
    id: int
    name: str
    name_translations: Dict[str, str]
    latitude: float
    longitude: float
    address: Optional[str] = None
    city: Optional[str] = None
    in_zone: bool


class ZoneUserRow(BaseModel):
    id: int
    name: str
    email: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    postal_code: Optional[str] = None
    open_carts: int
    completed_carts: int


class ZoneDetailOut(BaseModel):
    zone: ZoneOut
    stores: List[ZoneStoreRow]
    users: List[ZoneUserRow]


class SyncOut(BaseModel):
    zone_id: int
    assigned: List[int]
    unassigned: List[int]
    reassigned: List[int]
    removed_items: int

    model_config = ConfigDict(from_attributes=True)


class ZoneMutationOut(BaseModel):
    success: bool = True
    sync: SyncOut


# stores

class StoreCreate(BaseModel):
    translations: Optional[Any] = None
    latitude: float = Field(0.0, ge=-90, le=90)
    longitude: float = Field(0.0, ge=-180, le=180)
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    postal_code: Optional[str] = None


class StoreOut(BaseModel):
    id: int
    name: str
    name_translations: Dict[str, str]
    latitude: float
    longitude: float
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    postal_code: Optional[str] = None
    zone_ids: List[int] = []


class StoreProductCreate(BaseModel):
    translations: Optional[Any] = None
    price: Decimal = Field(..., gt=0)


class StoreProductOut(BaseModel):
    id: int
    store_id: int
    name: str
    name_translations: Dict[str, str]
    price: Decimal

    model_config = ConfigDict(from_attributes=True)


# location

class LocationIn(BaseModel):
    """Either an address part or both lat and lng."""

    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    postal_code: Optional[str] = None
    lat: Optional[float] = Field(None, ge=-90, le=90)
    lng: Optional[float] = Field(None, ge=-180, le=180)


class LocationOut(BaseModel):
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    postal_code: Optional[str] = None
    latitude: float
    longitude: float


class ZoneMatchOut(BaseModel):
    in_zone: bool
    zone_id: Optional[int] = None
    zone_name: Optional[str] = None


class LocationUpdateOut(BaseModel):
    location: LocationOut
    zone: ZoneMatchOut
    cart_id: Optional[int] = None
    removed_items: int


class LocationCheckOut(BaseModel):
    location: LocationOut
    new_zone: ZoneMatchOut
    current_zone_id: Optional[int] = None
    zone_changed: bool


# cart

class ItemIn(BaseModel):
    """Schema for adding a store product to the cart."""

    store_product_id: int = Field(..., gt=0)
    quantity: int = Field(1, gt=0)


class CartItemOut(BaseModel):
    id: int
    store_product_id: int
    store_id: int
    name: str
    quantity: int
    price: Decimal


class CartOut(BaseModel):
    cart_id: int
    user_id: int
    status: str
    zone_id: Optional[int] = None
    items: List[CartItemOut]
    total: Decimal
    version: int
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)
