import threading

import pytest

from core.errors import TransportError


class FakeClient:
    """
    Scripted stand-in for APIClient.

    routes maps (method, path) to a payload, an exception instance, or a
    callable taking the POST body and returning either.
    """

    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.calls = []
        self._lock = threading.Lock()

    def fetch(self, method, path, body=None):
        with self._lock:
            self.calls.append((method, path, body))
        key = (method, path)
        if key not in self.routes:
            raise TransportError(f"Unexpected HTTP status 404 for {method} {path}", url=path, status_code=404)
        route = self.routes[key]
        if callable(route):
            route = route(body)
        if isinstance(route, Exception):
            raise route
        return route

    def download(self, url):
        return b"<svg/>"

    @property
    def api_calls(self):
        return len(self.calls)


def population_payload(country, code, counts):
    return {
        "error": False,
        "msg": "all good",
        "data": {
            "country": country,
            "code": code,
            "iso3": code,
            "populationCounts": [{"year": y, "value": v} for y, v in counts],
        },
    }


@pytest.fixture
def fake_client():
    return FakeClient()


@pytest.fixture
def make_client():
    return FakeClient


@pytest.fixture
def make_population():
    return population_payload


@pytest.fixture
def currency_payload():
    return {
        "error": False,
        "msg": "countries and currencies retrieved",
        "data": [
            {"name": "Czechia", "currency": "CZK", "iso2": "CZ", "iso3": "CZE"},
            {"name": "Germany", "currency": "EUR", "iso2": "DE", "iso3": "DEU"},
            {"name": "Atlantis", "currency": "ATL", "iso2": "AT", "iso3": "ATL"},
        ],
    }


@pytest.fixture
def codes_payload():
    return {
        "error": False,
        "msg": "success",
        "data": [
            {"name": "Czechia", "code": "CZ", "dial_code": "+420"},
            {"name": "Germany", "code": "DE", "dial_code": "+49"},
            {"name": "Austria", "code": "AT", "dial_code": "+43"},
        ],
    }
