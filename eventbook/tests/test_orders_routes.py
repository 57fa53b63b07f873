import pytest

from eventbook.database.models import Order
from eventbook.tests.helpers import bearer, login, register


@pytest.fixture
def order(client, order_payload):
    response = client.post("/orders", json=order_payload)
    assert response.status_code == 201
    return response.get_json()["order"]


def test_create_order_defaults(client, order_payload, event):
    response = client.post("/orders", json=order_payload)

    assert response.status_code == 201
    data = response.get_json()
    assert data["message"] == "Order created successfully"
    order = data["order"]
    assert order["paymentStatus"] == "PENDING"
    assert order["organizerConfirmation"] == "PENDING"
    assert order["finalCost"] == 100.0
    assert order["paymentMethod"] == "Cash on Delivery"
    assert order["selectedDateTime"].startswith("2025-02-01T09:00:00")
    assert order["event"]["id"] == event["id"]
    assert order["event"]["organizer"]["name"] == "Jane"


def test_create_order_ignores_client_confirmation(client, order_payload):
    order_payload["organizerConfirmation"] = "CONFIRMED"
    order_payload["paymentStatus"] = "COMPLETED"

    response = client.post("/orders", json=order_payload)

    assert response.status_code == 201
    assert response.get_json()["order"]["organizerConfirmation"] == "PENDING"
    assert response.get_json()["order"]["paymentStatus"] == "COMPLETED"


def test_create_order_free_event(client, order_payload):
    order_payload["finalCost"] = 0

    response = client.post("/orders", json=order_payload)

    assert response.status_code == 201
    assert response.get_json()["order"]["finalCost"] == 0.0


@pytest.mark.parametrize("field", ["userId", "eventId", "bookingDate", "selectedDateTime", "finalCost", "paymentMethod"])
def test_create_order_missing_field(client, order_payload, field, run_in_db):
    del order_payload[field]

    response = client.post("/orders", json=order_payload)

    assert response.status_code == 400
    assert response.get_json()["error"] == "Missing required fields"
    assert run_in_db(lambda db: db.query(Order).count()) == 0


def test_create_order_bad_date(client, order_payload):
    order_payload["selectedDateTime"] = "next tuesday"

    response = client.post("/orders", json=order_payload)

    assert response.status_code == 400
    assert "selectedDateTime" in response.get_json()["error"]


def test_create_order_invalid_payment_status(client, order_payload):
    order_payload["paymentStatus"] = "PAID"

    response = client.post("/orders", json=order_payload)

    assert response.status_code == 400


def test_create_order_unknown_event(client, order_payload, run_in_db):
    order_payload["eventId"] = 9999

    response = client.post("/orders", json=order_payload)

    assert response.status_code == 500
    assert response.get_json()["error"] == "Internal server error"
    assert run_in_db(lambda db: db.query(Order).count()) == 0


def test_list_user_orders(client, attendee, order):
    response = client.get(f"/user/orders?userId={attendee['id']}")

    assert response.status_code == 200
    orders = response.get_json()["orders"]
    assert [o["id"] for o in orders] == [order["id"]]
    assert orders[0]["event"]["title"] == "Conf"


def test_list_user_orders_requires_id(client):
    response = client.get("/user/orders")

    assert response.status_code == 400
    assert response.get_json()["error"] == "User ID is required"


def test_list_organizer_orders_with_filter(client, organizer, order):
    organizer_id = organizer["organizer"]["id"]

    response = client.get(f"/organizer/orders?organizerId={organizer_id}")
    assert response.status_code == 200
    orders = response.get_json()["orders"]
    assert len(orders) == 1
    assert orders[0]["user"] == {"name": "Bob", "email": "bob@x.com"}
    assert orders[0]["event"] == {"title": "Conf", "type": "CONFERENCE"}

    response = client.get(f"/organizer/orders?organizerId={organizer_id}&status=CONFIRMED")
    assert response.get_json()["orders"] == []

    response = client.get(f"/organizer/orders?organizerId={organizer_id}&status=PENDING")
    assert len(response.get_json()["orders"]) == 1


def test_list_organizer_orders_bad_status(client, organizer):
    response = client.get(f"/organizer/orders?organizerId={organizer['organizer']['id']}&status=DONE")
    assert response.status_code == 400


def test_confirm_invalid_status_leaves_order(client, organizer, order, run_in_db):
    response = client.put(
        f"/organizer/orders/{order['id']}", json={"status": "APPROVED"}, headers=bearer(organizer["token"])
    )

    assert response.status_code == 400
    assert response.get_json()["error"] == "Invalid status"
    assert run_in_db(lambda db: db.get(Order, order["id"]).organizer_confirmation) == "PENDING"


def test_confirm_requires_token(client, order):
    response = client.put(f"/organizer/orders/{order['id']}", json={"status": "CONFIRMED"})

    assert response.status_code == 401


def test_confirm_rejects_attendee_token(client, order):
    token = login(client, "bob@x.com")["token"]

    response = client.put(f"/organizer/orders/{order['id']}", json={"status": "CONFIRMED"}, headers=bearer(token))

    assert response.status_code == 403


def test_confirm_rejects_other_organizer(client, order, run_in_db):
    register(client, "mallory@x.com", role="ORGANIZER", name="Mallory")
    token = login(client, "mallory@x.com", role="ORGANIZER")["token"]

    response = client.put(f"/organizer/orders/{order['id']}", json={"status": "CANCELLED"}, headers=bearer(token))

    assert response.status_code == 403
    assert response.get_json()["error"] == "You are not the organizer of this event"
    assert run_in_db(lambda db: db.get(Order, order["id"]).organizer_confirmation) == "PENDING"


def test_confirm_unknown_order(client, organizer):
    response = client.put("/organizer/orders/999", json={"status": "CONFIRMED"}, headers=bearer(organizer["token"]))

    assert response.status_code == 404
    assert response.get_json()["error"] == "Order not found"


def test_cod_booking_confirmed_by_organizer(client):
    register(client, "jane@x.com", role="ORGANIZER", name="Jane")
    jane = login(client, "jane@x.com", role="ORGANIZER")
    event = client.post("/organizer/events", json={
        "organizerId": jane["user"]["organizer"]["id"], "title": "Conf", "type": "CONFERENCE", "price": 100,
    }).get_json()["event"]

    bob = register(client, "bob@x.com", name="Bob")
    created = client.post("/orders", json={
        "userId": bob["id"],
        "eventId": event["id"],
        "bookingDate": "2025-01-01T10:00:00.000Z",
        "selectedDateTime": "2025-02-01T09:00:00.000Z",
        "finalCost": 100,
        "paymentMethod": "Cash on Delivery",
        "paymentStatus": "PENDING",
    }).get_json()["order"]

    response = client.put(
        f"/organizer/orders/{created['id']}", json={"status": "CONFIRMED"}, headers=bearer(jane["token"])
    )

    assert response.status_code == 200
    assert response.get_json()["message"] == "Order confirmed successfully"
    updated = response.get_json()["order"]
    assert updated["organizerConfirmation"] == "CONFIRMED"
    assert updated["paymentStatus"] == "PENDING"

    mine = client.get(f"/user/orders?userId={bob['id']}").get_json()["orders"]
    assert mine[0]["organizerConfirmation"] == "CONFIRMED"
    assert mine[0]["paymentStatus"] == "PENDING"


@pytest.mark.parametrize("cost", [1e30, 123456789012])
def test_create_order_cost_out_of_range(client, order_payload, cost, run_in_db):
    order_payload["finalCost"] = cost

    response = client.post("/orders", json=order_payload)

    assert response.status_code == 400
    assert run_in_db(lambda db: db.query(Order).count()) == 0


@pytest.mark.parametrize("field,value", [("userId", True), ("eventId", 1.9)])
def test_create_order_rejects_non_integer_ids(client, order_payload, field, value):
    order_payload[field] = value

    response = client.post("/orders", json=order_payload)

    assert response.status_code == 400
    assert response.get_json()["error"] == f"{field} must be an integer"
