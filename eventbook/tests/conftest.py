import os

import pytest

# Ensure JWT_SECRET is set for tests
os.environ["JWT_SECRET"] = "test_secret"

from eventbook.config import TestingConfig  # noqa: E402
from eventbook.gateway.server import create_app  # noqa: E402
from eventbook.tests.helpers import login, register  # noqa: E402


@pytest.fixture
def app():
    app = create_app(TestingConfig)
    database = app.extensions["db"]
    database.init_db()
    yield app
    database.drop_db()
    database.dispose()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def run_in_db(app):
    """
    Run a callable against a short-lived session on the app's database.
    """
    def _run(fn):
        with app.extensions["db"].session() as session:
            return fn(session)
    return _run


@pytest.fixture
def organizer(client):
    """
    Registered and logged-in organizer: {"user", "organizer", "token"}.
    """
    register(client, "jane@x.com", role="ORGANIZER", name="Jane")
    body = login(client, "jane@x.com", role="ORGANIZER")
    return {"user": body["user"], "organizer": body["user"]["organizer"], "token": body["token"]}


@pytest.fixture
def attendee(client):
    return register(client, "bob@x.com", name="Bob")


@pytest.fixture
def event(client, organizer):
    response = client.post("/organizer/events", json={
        "organizerId": organizer["organizer"]["id"],
        "title": "Conf",
        "type": "CONFERENCE",
        "price": 100,
    })
    assert response.status_code == 201
    return response.get_json()["event"]


@pytest.fixture
def order_payload(attendee, event):
    return {
        "userId": attendee["id"],
        "eventId": event["id"],
        "bookingDate": "2025-01-01T10:00:00.000Z",
        "selectedDateTime": "2025-02-01T09:00:00.000Z",
        "finalCost": 100,
        "paymentMethod": "Cash on Delivery",
    }
