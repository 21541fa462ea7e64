# storefront/services/geocode_client.py
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import requests

from storefront.utils.retry import http_retry
from storefront.utils.settings import GEOCODING_URL, GOOGLE_MAPS_API_KEY
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass
class NormalizedAddress:
    latitude: float
    longitude: float
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    postal_code: Optional[str] = None


def _component(components: List[Dict[str, Any]], kind: str) -> Optional[str]:
    for component in components:
        if kind in component.get("types", []):
            return component.get("long_name")
    return None


def to_normalized_address(result: Dict[str, Any]) -> NormalizedAddress | None:
    location = result.get("geometry", {}).get("location", {})
    if location.get("lat") is None or location.get("lng") is None:
        return None

    components = result.get("address_components", [])
    street = " ".join(
        part for part in (_component(components, "street_number"), _component(components, "route")) if part
    )

    return NormalizedAddress(
        latitude=float(location["lat"]),
        longitude=float(location["lng"]),
        address=street or result.get("formatted_address"),
        city=_component(components, "locality") or _component(components, "administrative_area_level_2"),
        state=_component(components, "administrative_area_level_1"),
        country=_component(components, "country"),
        postal_code=_component(components, "postal_code"),
    )


class GeocodingClient:
    """Google Geocoding API. Without an API key every lookup returns None."""

    def __init__(self, api_key: str | None = None, base_url: str | None = None, timeout: int = 5):
        self.api_key = GOOGLE_MAPS_API_KEY if api_key is None else api_key
        self.base_url = base_url or GEOCODING_URL
        self.timeout = timeout

    def geocode_address(
        self,
        address: str | None = None,
        city: str | None = None,
        state: str | None = None,
        country: str | None = None,
        postal_code: str | None = None,
    ) -> NormalizedAddress | None:
        line = ", ".join(part for part in (address, city, state, postal_code, country) if part)
        if not line:
            return None
        return self._lookup({"address": line})

    def reverse_geocode(self, lat: float, lng: float) -> NormalizedAddress | None:
        return self._lookup({"latlng": f"{lat},{lng}"})

    def _lookup(self, params: Dict[str, str]) -> NormalizedAddress | None:
        if not self.api_key:
            return None

        try:
            data = self._get({**params, "key": self.api_key})
        except requests.RequestException as e:
            logger.error(f"Geocoding request failed: {e}")
            return None

        if data.get("status") != "OK" or not data.get("results"):
            logger.info(f"Geocoding returned {data.get('status')} for {params}")
            return None

        return to_normalized_address(data["results"][0])

    @http_retry()
    def _get(self, params: Dict[str, str]) -> Dict[str, Any]:
        logger.info(f"GeocodingClient GET {self.base_url}")
        resp = requests.get(self.base_url, params=params, timeout=self.timeout)
        resp.raise_for_status()
        return resp.json()
