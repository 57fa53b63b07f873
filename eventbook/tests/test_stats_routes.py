import pytest

from eventbook.tests.helpers import register


def _event(client, organizer_id, title, type_, price):
    response = client.post("/organizer/events", json={
        "organizerId": organizer_id, "title": title, "type": type_, "price": price,
    })
    return response.get_json()["event"]


def _order(client, user_id, event, status, booking_date):
    response = client.post("/orders", json={
        "userId": user_id,
        "eventId": event["id"],
        "bookingDate": booking_date,
        "selectedDateTime": "2025-03-01T09:00:00Z",
        "finalCost": event["price"],
        "paymentMethod": "Online Payment",
        "paymentStatus": status,
    })
    assert response.status_code == 201
    return response.get_json()["order"]


@pytest.fixture
def bookings(client, organizer, attendee):
    organizer_id = organizer["organizer"]["id"]
    conf = _event(client, organizer_id, "Conf", "CONFERENCE", 100)
    fest = _event(client, organizer_id, "Fest", "FESTIVAL", "49.50")
    _event(client, organizer_id, "Quiet", "SEMINAR", 10)
    other = register(client, "amy@x.com", name="Amy")

    _order(client, attendee["id"], conf, "COMPLETED", "2025-01-01T10:00:00Z")
    _order(client, other["id"], conf, "PENDING", "2025-01-02T10:00:00Z")
    _order(client, attendee["id"], fest, "COMPLETED", "2025-01-03T10:00:00Z")
    _order(client, other["id"], fest, "FAILED", "2025-01-04T10:00:00Z")
    _order(client, attendee["id"], conf, "COMPLETED", "2025-01-05T10:00:00Z")
    return {"conf": conf, "fest": fest}


def test_stats_empty(client):
    response = client.get("/registrations")

    assert response.status_code == 200
    assert response.get_json() == {
        "totalRegistrations": 0,
        "registrationsByStatus": [],
        "totalRevenue": 0.0,
        "registrationsByEventType": {},
        "topEvents": [],
        "recentRegistrations": [],
    }


def test_stats_totals(client, bookings):
    stats = client.get("/registrations").get_json()

    assert stats["totalRegistrations"] == 5
    assert stats["registrationsByStatus"] == [
        {"paymentStatus": "COMPLETED", "count": 3},
        {"paymentStatus": "FAILED", "count": 1},
        {"paymentStatus": "PENDING", "count": 1},
    ]
    assert sum(row["count"] for row in stats["registrationsByStatus"]) == stats["totalRegistrations"]
    # 100 + 100 + 49.50, pending and failed orders excluded
    assert stats["totalRevenue"] == 249.5


def test_stats_by_type_and_top_events(client, bookings):
    stats = client.get("/registrations").get_json()

    assert stats["registrationsByEventType"] == {"CONFERENCE": 3, "FESTIVAL": 2}
    assert [(e["title"], e["orderCount"]) for e in stats["topEvents"]] == [
        ("Conf", 3),
        ("Fest", 2),
        ("Quiet", 0),
    ]


def test_stats_recent_newest_booking_first(client, bookings):
    recent = client.get("/registrations").get_json()["recentRegistrations"]

    assert [r["bookingDate"][:10] for r in recent] == [
        "2025-01-05", "2025-01-04", "2025-01-03", "2025-01-02", "2025-01-01",
    ]
    assert recent[0]["user"]["email"] == "bob@x.com"
    assert recent[0]["event"]["title"] == "Conf"
