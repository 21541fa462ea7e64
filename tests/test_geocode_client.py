import pytest
import requests

from storefront.services import geocode_client
from storefront.services.geocode_client import GeocodingClient

RESULT = {
    "formatted_address": "1 Main St, Montreal, QC H2X 1Y4, Canada",
    "geometry": {"location": {"lat": 45.5, "lng": -73.57}},
    "address_components": [
        {"long_name": "1", "types": ["street_number"]},
        {"long_name": "Main St", "types": ["route"]},
        {"long_name": "Montreal", "types": ["locality", "political"]},
        {"long_name": "Quebec", "types": ["administrative_area_level_1"]},
        {"long_name": "Canada", "types": ["country"]},
        {"long_name": "H2X 1Y4", "types": ["postal_code"]},
    ],
}


class FakeResponse:
    def __init__(self, payload, status_code=200):
        self.payload = payload
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code}")

    def json(self):
        return self.payload


class RecordedCalls(list):
    pass


@pytest.fixture
def calls(monkeypatch):
    calls = RecordedCalls()

    def install(*responses):
        queue = list(responses)

        def fake_get(url, params=None, timeout=None):
            calls.append({"url": url, "params": params, "timeout": timeout})
            return queue.pop(0) if len(queue) > 1 else queue[0]

        monkeypatch.setattr(geocode_client.requests, "get", fake_get)

    calls.install = install
    return calls


def test_geocode_address_normalizes_first_result(calls):
    calls.install(FakeResponse({"status": "OK", "results": [RESULT]}))
    client = GeocodingClient(api_key="k", base_url="http://geo.test")

    result = client.geocode_address(address="1 Main St", city="Montreal", country="Canada")

    assert result.latitude == 45.5
    assert result.longitude == -73.57
    assert result.address == "1 Main St"
    assert result.city == "Montreal"
    assert result.state == "Quebec"
    assert result.postal_code == "H2X 1Y4"
    assert calls[0]["params"] == {"address": "1 Main St, Montreal, Canada", "key": "k"}


def test_reverse_geocode_sends_latlng(calls):
    calls.install(FakeResponse({"status": "OK", "results": [RESULT]}))

    result = GeocodingClient(api_key="k", base_url="http://geo.test").reverse_geocode(45.5, -73.57)

    assert result.country == "Canada"
    assert calls[0]["params"]["latlng"] == "45.5,-73.57"


def test_no_api_key_means_no_request(calls):
    calls.install(FakeResponse({"status": "OK", "results": [RESULT]}))

    assert GeocodingClient(api_key="").geocode_address(address="x") is None
    assert calls == []


def test_empty_address_means_no_request(calls):
    calls.install(FakeResponse({"status": "OK", "results": [RESULT]}))

    assert GeocodingClient(api_key="k").geocode_address() is None
    assert calls == []


def test_zero_results_is_none(calls):
    calls.install(FakeResponse({"status": "ZERO_RESULTS", "results": []}))

    assert GeocodingClient(api_key="k").geocode_address(city="Atlantis") is None


def test_transient_failure_is_retried(calls):
    calls.install(
        FakeResponse({}, status_code=503),
        FakeResponse({"status": "OK", "results": [RESULT]}),
    )

    result = GeocodingClient(api_key="k").reverse_geocode(45.5, -73.57)

    assert result.city == "Montreal"
    assert len(calls) == 2


def test_persistent_failure_is_none(calls):
    calls.install(FakeResponse({}, status_code=500))

    assert GeocodingClient(api_key="k").reverse_geocode(1, 2) is None
    assert len(calls) == 3
