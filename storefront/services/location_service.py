# storefront/services/location_service.py
from typing import Any, Dict

from sqlalchemy.orm import Session

from storefront.domain.entities import Coordinate, Identity, ZoneSnapshot
from storefront.domain.errors import NotFoundError, ValidationError
from storefront.domain.i18n import DEFAULT_LOCALE, get_localized_name
from storefront.domain.schemas import LocationIn
from storefront.repos.user_repo import UserRepo
from storefront.repos.zone_repo import SqlZoneRepository
from storefront.services.cart_pruner import CartPruner
from storefront.services.geocode_client import GeocodingClient
from storefront.services.zone_sync import ZoneMembershipSynchronizer
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

ADDRESS_FIELDS = ("address", "city", "state", "country", "postal_code")


class LocationService:
    """
    Where is the shopper and which zone serves them.

    update_location moves the user between zones and prunes the active cart
    the same way an admin zone edit does, check_location only reports.
    """

    def __init__(self, db: Session, geocoder: GeocodingClient | None = None):
        self.users = UserRepo(db)
        self.zones = SqlZoneRepository(db)
        self.pruner = CartPruner(self.zones)
        self.synchronizer = ZoneMembershipSynchronizer(self.zones, self.pruner)
        self.geocoder = geocoder

    def check_zone(self, lat: float, lng: float, locale: str = DEFAULT_LOCALE) -> Dict[str, Any]:
        zone = self.synchronizer.resolve_zone(Coordinate(lat, lng))
        return self._zone_match(zone, locale)

    def check_location(self, identity: Identity | None, payload: LocationIn, locale: str = DEFAULT_LOCALE) -> Dict[str, Any]:
        location = self.resolve_location(payload)
        zone = self.synchronizer.resolve_zone(Coordinate(location["latitude"], location["longitude"]))

        current_zone_id = None
        if identity:
            user = self.users.get_user(identity.user_id)
            current_zone_id = user.zone_id if user else None

        new_zone_id = zone.id if zone else None

        return {
            "location": location,
            "new_zone": self._zone_match(zone, locale),
            "current_zone_id": current_zone_id,
            "zone_changed": current_zone_id != new_zone_id,
        }

    def update_location(self, identity: Identity, payload: LocationIn, locale: str = DEFAULT_LOCALE) -> Dict[str, Any]:
        user = self.users.get_user(identity.user_id)
        if not user:
            raise NotFoundError(f"User {identity.user_id} not found")

        location = self.resolve_location(payload)
        zone = self.synchronizer.resolve_zone(Coordinate(location["latitude"], location["longitude"]))
        new_zone_id = zone.id if zone else None

        try:
            if user.zone_id != new_zone_id:
                logger.info(f"User {user.id} zone {user.zone_id} -> {new_zone_id}")

            self.users.update_user(user, zone_id=new_zone_id, **location)

            cart_id = self.zones.get_active_cart_id(user.id)
            removed = 0
            if cart_id is not None:
                removed = self.pruner.remove_items_outside_zone(cart_id, zone.store_ids if zone else ())

            self.zones.commit()
        except Exception as e:
            logger.error(f"Location update for user {identity.user_id} rolled back: {e}")
            self.zones.rollback()
            raise

        return {
            "location": location,
            "zone": self._zone_match(zone, locale),
            "cart_id": cart_id,
            "removed_items": removed,
        }

    def resolve_location(self, payload: LocationIn) -> Dict[str, Any]:
        """Fill in coordinates or address parts through the geocoder."""
        parts = {f: getattr(payload, f) for f in ADDRESS_FIELDS}
        has_coordinates = payload.lat is not None and payload.lng is not None

        if not any(parts.values()) and not has_coordinates:
            raise ValidationError("Address or coordinates required")

        latitude, longitude = payload.lat, payload.lng

        if not has_coordinates:
            geocoded = self.geocoder.geocode_address(**parts)
            if not geocoded:
                raise ValidationError("Unable to geocode address")

            latitude, longitude = geocoded.latitude, geocoded.longitude
            parts = {f: getattr(geocoded, f) or parts[f] for f in ADDRESS_FIELDS}

        elif not (parts["address"] and parts["city"] and parts["country"]):
            reverse = self.geocoder.reverse_geocode(latitude, longitude)
            if reverse:
                parts = {f: parts[f] or getattr(reverse, f) for f in ADDRESS_FIELDS}

        return {**parts, "latitude": latitude, "longitude": longitude}

    def _zone_match(self, zone: ZoneSnapshot | None, locale: str) -> Dict[str, Any]:
        if not zone:
            return {"in_zone": False, "zone_id": None, "zone_name": None}

        model = self.zones.get_zone_model(zone.id)
        translations = model.name_translations if model else {}

        return {
            "in_zone": True,
            "zone_id": zone.id,
            "zone_name": get_localized_name(translations, locale, fallback=zone.name),
        }
