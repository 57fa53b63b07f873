"""
Profile routes for attendees and organizers.

Both PUT endpoints are upserts with replace semantics: any optional field not
sent in the request is stored as null.
"""

import logging
from typing import Tuple, Dict, Any

from flask import Blueprint, request, jsonify, Response

from eventbook.common.errors import NotFoundError, ValidationError
from eventbook.common.helpers import json_body, optional_str, require_int, require_str
from eventbook.database.db_connection import get_db
from eventbook.database.models import Organizer, User, UserProfile

profile_bp = Blueprint("profile", __name__)

# JSON key -> column
ADDRESS_FIELDS = {
    "country": "country",
    "state": "state",
    "city": "city",
    "pinCode": "pin_code",
    "address": "address",
}


def _user_id_from_args() -> int:
    raw = request.args.get("userId")
    if not raw:
        raise ValidationError("User ID is required")
    return require_int(raw, "userId")


# --- USER PROFILE ---
@profile_bp.route("/user/profile", methods=["GET"])
def get_user_profile() -> Tuple[Response, int]:
    """
    Return the user's public fields and saved address profile.

    Returns:
        200: {"user": {...}, "profile": {...} | null}
        400: userId missing.
        404: User not found.
    """
    user_id = _user_id_from_args()

    with get_db() as db:
        user = db.get(User, user_id)
        if not user:
            raise NotFoundError("User not found")
        body = {
            "user": user.to_public(),
            "profile": user.profile.to_dict() if user.profile else None,
        }

    return jsonify(body), 200


@profile_bp.route("/user/profile", methods=["PUT"])
def update_user_profile() -> Tuple[Response, int]:
    """
    Update the user's name and, when `profile` is sent, replace the address.

    Expects JSON:
        { "userId": int, "name": str (optional),
          "profile": {country, state, city, pinCode, address} (optional) }

    The name update and the profile upsert commit together or not at all.

    Returns:
        200: {"message": ..., "user": {...}, "profile": {...} | null}
        400: userId missing or profile not an object.
        404: User not found.
    """
    data: Dict[str, Any] = json_body()

    if not data.get("userId"):
        raise ValidationError("User ID is required")
    user_id = require_int(data["userId"], "userId")

    profile_data = data.get("profile")
    if profile_data is not None and not isinstance(profile_data, dict):
        raise ValidationError("profile must be an object")

    name = optional_str(data.get("name"), "name")
    address = None
    if profile_data is not None:
        address = {key: optional_str(profile_data.get(key), key) for key in ADDRESS_FIELDS}

    with get_db() as db:
        user = db.get(User, user_id)
        if not user:
            raise NotFoundError("User not found")

        user.name = name

        profile = user.profile
        if profile_data is not None:
            if profile is None:
                profile = UserProfile(user_id=user.id)
                db.add(profile)
            for key, column in ADDRESS_FIELDS.items():
                setattr(profile, column, address[key])

        db.flush()
        body = {
            "message": "Profile updated successfully",
            "user": user.to_public(),
            "profile": profile.to_dict() if profile else None,
        }

    logging.info(f"[Profile] Updated profile for user {user_id}")
    return jsonify(body), 200


# --- ORGANIZER PROFILE ---
@profile_bp.route("/organizer/profile", methods=["GET"])
def get_organizer_profile() -> Tuple[Response, int]:
    """
    Return the organizer profile linked to a user.

    Returns:
        200: {"organizer": {...} | null}
        400: userId missing.
    """
    user_id = _user_id_from_args()

    with get_db() as db:
        organizer = db.query(Organizer).filter(Organizer.user_id == user_id).first()
        body = {"organizer": organizer.to_dict() if organizer else None}

    return jsonify(body), 200


@profile_bp.route("/organizer/profile", methods=["PUT"])
def update_organizer_profile() -> Tuple[Response, int]:
    """
    Create or replace an organizer profile.

    Expects JSON:
        { "userId": int, "name": str, "bio": str (optional), "videoUrl": str (optional) }

    Returns:
        200: {"message": ..., "organizer": {...}}
        400: userId or name missing.
        500: Unknown user or database error.
    """
    data: Dict[str, Any] = json_body()

    if not data.get("userId") or not data.get("name"):
        raise ValidationError("User ID and name are required")
    user_id = require_int(data["userId"], "userId")
    name = require_str(data["name"], "name")
    bio = optional_str(data.get("bio"), "bio")
    video_url = optional_str(data.get("videoUrl"), "videoUrl")

    with get_db() as db:
        organizer = db.query(Organizer).filter(Organizer.user_id == user_id).first()
        if organizer is None:
            organizer = Organizer(user_id=user_id)
            db.add(organizer)

        organizer.name = name
        organizer.bio = bio
        organizer.video_url = video_url
        db.flush()
        body = {"message": "Organizer profile updated successfully", "organizer": organizer.to_dict()}

    logging.info(f"[Profile] Saved organizer profile for user {user_id}")
    return jsonify(body), 200
