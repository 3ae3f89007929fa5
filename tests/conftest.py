"""Shared fixtures: a fake HIBP API served through httpx.MockTransport."""

import httpx
import pytest

from hibpleaks.hibp.client import HIBPClient
from hibpleaks.hibp.config import ClientConfig

TEST_ACCOUNT = "troyhunt@gmail.com"
BASE_URL = "https://hibp.test"

RIVER_CITY_MEDIA = {
    "Name": "RiverCityMedia",
    "Title": "River City Media Spam List",
    "Domain": "rivercitymediaonline.com",
    "BreachDate": "2017-01-01",
    "AddedDate": "2017-03-08T23:49:53Z",
    "ModifiedDate": "2017-03-08T23:49:53Z",
    "PwnCount": 393430309,
    "Description": "In January 2017, a massive trove of data from River City Media was found exposed online.",
    "DataClasses": ["Email addresses", "IP addresses", "Names", "Physical addresses"],
    "IsVerified": True,
    "IsFabricated": False,
    "IsSensitive": False,
    "IsRetired": False,
    "IsSpamList": True,
    "LogoPath": "https://haveibeenpwned.com/Content/Images/PwnedLogos/Email.png",
}

MODERN_BUSINESS_SOLUTIONS = {
    "Name": "ModernBusinessSolutions",
    "Title": "Modern Business Solutions",
    "Domain": "modbsolutions.com",
    "BreachDate": "2016-10-08",
    "AddedDate": "2016-10-12T09:09:11Z",
    "ModifiedDate": "2016-10-12T09:09:11Z",
    "PwnCount": 58843488,
    "Description": "In October 2016, a large Mongo DB file containing tens of millions of accounts was shared publicly.",
    "DataClasses": [
        "Dates of birth", "Email addresses", "Genders", "IP addresses",
        "Job titles", "Names", "Phone numbers", "Physical addresses",
    ],
    "IsVerified": True,
    "IsFabricated": False,
    "IsSensitive": False,
    "IsRetired": False,
    "IsSpamList": False,
    "LogoPath": "https://haveibeenpwned.com/Content/Images/PwnedLogos/ModernBusinessSolutions.png",
}


class FakeSleep:
    """Records requested sleeps instead of blocking."""

    def __init__(self):
        self.calls: list[float] = []

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


class FakeAPI:
    """Routes requests by path; each route is a response or a callable.

    A list of responses is consumed one per request, the last one repeating.
    Every handled request is kept in ``requests``.
    """

    def __init__(self, routes: dict):
        self.routes = routes
        self.requests: list[httpx.Request] = []

    @property
    def paths(self) -> list[str]:
        return [r.url.path for r in self.requests]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if path not in self.routes:
            pytest.fail(f"requested invalid path: {path}")

        route = self.routes[path]
        if isinstance(route, list):
            route = route.pop(0) if len(route) > 1 else route[0]
        if callable(route):
            return route(request)
        # fresh copy so a canned response can be served more than once
        return httpx.Response(route.status_code, headers=route.headers, content=route.content)


def breaches_path(account: str = TEST_ACCOUNT) -> str:
    return f"/api/v2/breachedaccount/{account}"


def pastes_path(account: str = TEST_ACCOUNT) -> str:
    return f"/api/v2/pasteaccount/{account}"


@pytest.fixture
def fake_sleep() -> FakeSleep:
    return FakeSleep()


@pytest.fixture
def fixture_api() -> FakeAPI:
    """Two breaches and no pastes for TEST_ACCOUNT."""
    return FakeAPI({
        breaches_path(): httpx.Response(200, json=[RIVER_CITY_MEDIA, MODERN_BUSINESS_SOLUTIONS]),
        pastes_path(): httpx.Response(200, json=[]),
    })


@pytest.fixture
def make_client(fake_sleep):
    """Build an HIBPClient talking to a FakeAPI, without real sleeps."""
    clients: list[HIBPClient] = []

    def _make(api: FakeAPI, **config) -> HIBPClient:
        settings = {"base_url": BASE_URL, "max_retries": 0, "request_delay": 0}
        settings.update(config)
        http_client = httpx.Client(transport=httpx.MockTransport(api))
        client = HIBPClient(ClientConfig(**settings), http_client=http_client, sleep=fake_sleep)
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.executor.http_client.close()
