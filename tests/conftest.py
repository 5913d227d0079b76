# tests/conftest.py
import copy

import httpx
import pytest

from rentwise.adapters.clients.api_client import ApiClient
from rentwise.adapters.clients.properties import PropertiesApi
from rentwise.adapters.clients.rental_applications import RentalApplicationsApi
from rentwise.adapters.clients.session import Session
from rentwise.service_layer.form_state import FormStateController

BASE_URL = "http://api.test/api"

VALID_ANSWERS = {
    "personalInfo": {
        "firstName": "Ada",
        "lastName": "Lovelace",
        "email": "ada@example.com",
        "phone": "555-0100",
        "dateOfBirth": "1990-05-01",
        "currentAddress": {"city": "Austin", "state": "TX"},
    },
    "employment": {
        "employer": "Acme",
        "jobTitle": "Engineer",
        "monthlyIncome": "6500",
        "employmentDuration": "2 years",
    },
    "rentalInfo": {
        "desiredMoveInDate": "2026-12-01",
        "leaseDuration": "12",
        "numberOfOccupants": 2,
        "hasPets": True,
        "petDetails": "one cat",
    },
    "financialInfo": {"creditScore": "720"},
    "additionalInfo": {
        "reasonForMoving": "Closer to work",
        "emergencyContact": {"name": "Charles", "email": "charles@example.com"},
    },
}


def application_record(app_id: str = "app-1", status: str = "pending", **extra) -> dict:
    rec = {
        "_id": app_id,
        "status": status,
        "property": {"_id": "prop-1", "title": "Sunny 2BR"},
        "applicationDate": "2026-10-01T12:00:00.000Z",
        "personalInfo": {
            "firstName": "Ada",
            "lastName": "Lovelace",
            "email": "ada@example.com",
            "phone": "555-0100",
            "dateOfBirth": "1990-05-01T00:00:00.000Z",
        },
        "rentalInfo": {"desiredMoveInDate": "2026-12-01T00:00:00.000Z", "leaseDuration": 12},
        "messages": [],
    }
    rec.update(extra)
    return rec


class FakeApi:
    """
    In-process stand-in for the marketplace API, plugged in via httpx.MockTransport.
    Routes are keyed by (METHOD, path-after-/api); every request is recorded.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._routes: dict[tuple[str, str], object] = {}

    def on(self, method: str, path: str, *, status: int = 200, json=None, content: bytes | None = None, handler=None):
        if handler is None:

            def handler(request: httpx.Request) -> httpx.Response:
                if content is not None:
                    return httpx.Response(status, content=content)
                return httpx.Response(status, json=copy.deepcopy(json))

        self._routes[(method.upper(), path)] = handler

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method.upper() and self._path(r) == path]

    @staticmethod
    def _path(request: httpx.Request) -> str:
        return request.url.path.removeprefix("/api")

    def __call__(self, request: httpx.Request):
        self.requests.append(request)
        handler = self._routes.get((request.method, self._path(request)))
        if handler is None:
            return httpx.Response(404, json={"message": "Not found"})
        # async handlers are awaited by MockTransport
        return handler(request)


@pytest.fixture
def session():
    return Session(token="tok-123")


@pytest.fixture
def fake_api():
    return FakeApi()


@pytest.fixture
def client(session, fake_api):
    return ApiClient(session=session, base_url=BASE_URL, transport=httpx.MockTransport(fake_api))


@pytest.fixture
def applications_api(client):
    return RentalApplicationsApi(client)


@pytest.fixture
def properties_api(client):
    return PropertiesApi(client)


@pytest.fixture
def filled_form():
    form = FormStateController()
    form.load(VALID_ANSWERS)
    return form
