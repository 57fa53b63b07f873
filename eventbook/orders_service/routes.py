"""
Orders service routes: the booking lifecycle after checkout.

- POST /orders                      : a user completes checkout.
- GET  /user/orders                 : a user's bookings.
- GET  /organizer/orders            : bookings against an organizer's events.
- PUT  /organizer/orders/<id>       : the owning organizer confirms or cancels.

Payment status and organizer confirmation are independent: a paid order still
waits for the organizer, and confirming never touches payment.
"""

import logging
from typing import Tuple, Dict, Any

from flask import Blueprint, request, jsonify, Response
from sqlalchemy.orm import joinedload

from eventbook.auth_service.utils import require_token
from eventbook.common.errors import ForbiddenError, NotFoundError, ValidationError
from eventbook.common.helpers import json_body, missing_fields, require_dt, require_int, to_money
from eventbook.database.db_connection import get_db
from eventbook.database.models import (
    CONFIRMATION_STATUSES,
    PAYMENT_STATUSES,
    Event,
    Order,
    Organizer,
)

orders_bp = Blueprint("orders", __name__)

REQUIRED_ORDER_FIELDS = ("userId", "eventId", "bookingDate", "selectedDateTime", "finalCost", "paymentMethod")
# Organizers may only move an order out of PENDING
ORGANIZER_DECISIONS = ["CONFIRMED", "CANCELLED"]


def _newest_first(query):
    return query.order_by(Order.created_at.desc(), Order.id.desc())


def _order_with_event(order: Order) -> Dict[str, Any]:
    row = order.to_dict()
    row["event"] = {
        "id": order.event.id,
        "title": order.event.title,
        "type": order.event.type,
        "price": order.event.to_dict()["price"],
        "organizer": {"name": order.event.organizer.name},
    }
    return row


def _order_for_organizer(order: Order) -> Dict[str, Any]:
    row = order.to_dict()
    row["user"] = {"name": order.user.name, "email": order.user.email}
    row["event"] = {"title": order.event.title, "type": order.event.type}
    return row


# --- CREATE ORDER ---
@orders_bp.route("/orders", methods=["POST"])
def create_order() -> Tuple[Response, int]:
    """
    Create an order at the end of the booking workflow.

    Expects JSON:
        { "userId", "eventId", "bookingDate", "selectedDateTime",
          "finalCost", "paymentMethod", "paymentStatus" (optional) }

    organizerConfirmation always starts as PENDING; paymentStatus defaults to
    PENDING. A finalCost of 0 is valid. Whether the user and event exist is
    left to the store's foreign keys.

    Returns:
        201: {"message": ..., "order": {...}}
        400: Missing or malformed fields.
        500: Referenced user/event missing, or database error.
    """
    data: Dict[str, Any] = json_body()

    if missing_fields(data, REQUIRED_ORDER_FIELDS):
        raise ValidationError("Missing required fields")

    user_id = require_int(data["userId"], "userId")
    event_id = require_int(data["eventId"], "eventId")
    booking_date = require_dt(data["bookingDate"], "bookingDate")
    selected_dt = require_dt(data["selectedDateTime"], "selectedDateTime")
    final_cost = to_money(data["finalCost"], "finalCost")

    payment_status = data.get("paymentStatus") or "PENDING"
    if payment_status not in PAYMENT_STATUSES:
        raise ValidationError(f"paymentStatus must be one of: {', '.join(PAYMENT_STATUSES)}")

    with get_db() as db:
        order = Order(
            user_id=user_id,
            event_id=event_id,
            booking_date=booking_date,
            selected_date_time=selected_dt,
            final_cost=final_cost,
            payment_method=str(data["paymentMethod"]),
            payment_status=payment_status,
            organizer_confirmation="PENDING",
        )
        db.add(order)
        db.flush()
        order = (
            db.query(Order)
            .options(joinedload(Order.event).joinedload(Event.organizer))
            .filter(Order.id == order.id)
            .one()
        )
        order_dict = _order_with_event(order)

    logging.info(
        f"[Orders] User {user_id} booked event {event_id} "
        f"(order {order_dict['id']}, payment {payment_status})"
    )
    return jsonify({"message": "Order created successfully", "order": order_dict}), 201


# --- USER ORDERS ---
@orders_bp.route("/user/orders", methods=["GET"])
def list_user_orders() -> Tuple[Response, int]:
    """
    List a user's orders, newest first, with event and organizer name.

    Query:
    - ?userId=<id> (required)
    """
    raw = request.args.get("userId")
    if not raw:
        raise ValidationError("User ID is required")
    user_id = require_int(raw, "userId")

    with get_db() as db:
        orders = _newest_first(
            db.query(Order)
            .options(joinedload(Order.event).joinedload(Event.organizer))
            .filter(Order.user_id == user_id)
        ).all()
        rows = [_order_with_event(o) for o in orders]

    return jsonify({"orders": rows}), 200


# --- ORGANIZER ORDERS ---
@orders_bp.route("/organizer/orders", methods=["GET"])
def list_organizer_orders() -> Tuple[Response, int]:
    """
    List orders placed against an organizer's events, newest first.

    Query:
    - ?organizerId=<id> (required)
    - ?status=PENDING|CONFIRMED|CANCELLED (optional, filters organizerConfirmation)
    """
    raw = request.args.get("organizerId")
    if not raw:
        raise ValidationError("Organizer ID is required")
    organizer_id = require_int(raw, "organizerId")

    status = request.args.get("status")
    if status and status not in CONFIRMATION_STATUSES:
        raise ValidationError(f"status must be one of: {', '.join(CONFIRMATION_STATUSES)}")

    with get_db() as db:
        query = (
            db.query(Order)
            .join(Order.event)
            .options(joinedload(Order.user), joinedload(Order.event))
            .filter(Event.organizer_id == organizer_id)
        )
        if status:
            query = query.filter(Order.organizer_confirmation == status)
        rows = [_order_for_organizer(o) for o in _newest_first(query).all()]

    return jsonify({"orders": rows}), 200


# --- CONFIRM / CANCEL ---
@orders_bp.route("/organizer/orders/<int:order_id>", methods=["PUT"])
def update_order_confirmation(order_id: int) -> Tuple[Response, int]:
    """
    Confirm or cancel an order on behalf of the organizer who owns its event.

    Requires Authorization header: Bearer <token> of an ORGANIZER.

    Expects JSON:
        { "status": "CONFIRMED" | "CANCELLED" }

    Returns:
        200: {"message": ..., "order": {...}} (payment status untouched)
        400: Invalid status.
        401/403: Missing token, wrong role, or not the event's organizer.
        404: Order not found.
    """
    data: Dict[str, Any] = json_body()
    status = data.get("status")

    if status not in ORGANIZER_DECISIONS:
        raise ValidationError("Invalid status")

    user_id, _ = require_token(required_roles=["ORGANIZER"])

    with get_db() as db:
        order = (
            db.query(Order)
            .options(joinedload(Order.user), joinedload(Order.event))
            .filter(Order.id == order_id)
            .first()
        )
        if not order:
            raise NotFoundError("Order not found")

        organizer = db.query(Organizer).filter(Organizer.user_id == user_id).first()
        if not organizer or order.event.organizer_id != organizer.id:
            raise ForbiddenError("You are not the organizer of this event")

        order.organizer_confirmation = status
        db.flush()
        order_dict = _order_for_organizer(order)

    logging.info(f"[Orders] Organizer {organizer.id} set order {order_id} to {status}")
    return jsonify({"message": f"Order {status.lower()} successfully", "order": order_dict}), 200
