"""
Events service routes: public catalog and organizer event management.

- /events                 : list and detail, readable by anyone.
- /organizer/events       : an organizer's own events, and event creation.
"""

import logging
from typing import Tuple, Dict, Any

from flask import Blueprint, request, jsonify, Response
from sqlalchemy.orm import joinedload

from eventbook.common.errors import NotFoundError, ValidationError
from eventbook.common.helpers import json_body, missing_fields, optional_str, require_int, to_money
from eventbook.database.db_connection import get_db
from eventbook.database.models import EVENT_TYPES, Event

events_bp = Blueprint("events", __name__)

# --- CONSTANTS FOR VALIDATION ---
TITLE_MAX_LENGTH = 200


def _newest_first(query):
    return query.order_by(Event.created_at.desc(), Event.id.desc())


@events_bp.route("/events", methods=["GET"])
def list_events() -> Tuple[Response, int]:
    """
    Return all events, newest first, with the organizer's name and bio.

    Returns:
        200: {"events": [...]}
        500: Database error.
    """
    with get_db() as db:
        events = _newest_first(db.query(Event).options(joinedload(Event.organizer))).all()
        rows = []
        for event in events:
            row = event.to_dict()
            row["organizer"] = {"name": event.organizer.name, "bio": event.organizer.bio}
            rows.append(row)

    return jsonify({"events": rows}), 200


@events_bp.route("/events/<int:event_id>", methods=["GET"])
def get_event(event_id: int) -> Tuple[Response, int]:
    """
    Get a single event by ID, including organizer name, bio and video link.

    Returns:
        200: {"event": {...}}
        404: Event not found.
    """
    with get_db() as db:
        event = db.get(Event, event_id)
        if not event:
            raise NotFoundError("Event not found")

        event_dict = event.to_dict()
        event_dict["organizer"] = {
            "name": event.organizer.name,
            "bio": event.organizer.bio,
            "videoUrl": event.organizer.video_url,
        }

    return jsonify({"event": event_dict}), 200


@events_bp.route("/organizer/events", methods=["GET"])
def list_organizer_events() -> Tuple[Response, int]:
    """
    List one organizer's events, newest first.

    Query:
    - ?organizerId=<id> (required)

    Returns:
        200: {"events": [...]}
        400: organizerId missing or not an integer.
    """
    raw = request.args.get("organizerId")
    if not raw:
        raise ValidationError("Organizer ID is required")
    organizer_id = require_int(raw, "organizerId")

    with get_db() as db:
        events = _newest_first(db.query(Event).filter(Event.organizer_id == organizer_id)).all()
        rows = [e.to_dict() for e in events]

    return jsonify({"events": rows}), 200


@events_bp.route("/organizer/events", methods=["POST"])
def create_event() -> Tuple[Response, int]:
    """
    Create an event for an organizer.

    Expects JSON:
        { "organizerId": int, "title": str, "type": str, "price": number,
          "description": str (optional) }

    Validations:
    - organizerId, title, type present; price present (0 is allowed).
    - type is one of EVENT_TYPES.
    - price is a non-negative amount, stored to two decimal places.

    Returns:
        201: {"message": ..., "event": {...}}
        400: Validation error.
        500: Unknown organizer or database error.
    """
    data: Dict[str, Any] = json_body()

    # --- START VALIDATION ---
    if missing_fields(data, ("organizerId", "title", "type", "price")):
        raise ValidationError("Missing required fields")

    organizer_id = require_int(data["organizerId"], "organizerId")
    title = data["title"]

    if not isinstance(title, str) or len(title) > TITLE_MAX_LENGTH:
        raise ValidationError(f"Title must be {TITLE_MAX_LENGTH} characters or less.")

    if data["type"] not in EVENT_TYPES:
        raise ValidationError(f"type must be one of: {', '.join(EVENT_TYPES)}")

    price = to_money(data["price"], "price")
    description = optional_str(data.get("description"), "description")
    # --- END VALIDATION ---

    with get_db() as db:
        event = Event(
            organizer_id=organizer_id,
            title=title,
            description=description,
            type=data["type"],
            price=price,
        )
        db.add(event)
        db.flush()
        event_dict = event.to_dict()

    logging.info(f"[Events] Organizer {organizer_id} created event {event_dict['id']}")
    return jsonify({"message": "Event created successfully", "event": event_dict}), 201
