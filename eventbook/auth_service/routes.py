"""
Authentication service route handlers.

Provides routes for:
- User registration (USER or ORGANIZER, the latter with a stub organizer profile)
- User login (credential + role check, token mint)

Token and hashing logic is delegated to `auth_service.utils`.
"""

import logging
from typing import Tuple, Dict, Any

from flask import Blueprint, jsonify, Response
from sqlalchemy.exc import IntegrityError

from eventbook.auth_service.utils import check_password, create_token, hash_password
from eventbook.common.errors import AuthError, ConflictError, ValidationError
from eventbook.common.helpers import json_body, missing_fields, optional_str, require_str
from eventbook.database.db_connection import get_db
from eventbook.database.models import ROLES, Organizer, User

auth_bp = Blueprint("auth", __name__)

DEFAULT_ORGANIZER_NAME = "Organizer"


# --- REGISTER ---
@auth_bp.route("/register", methods=["POST"])
def register() -> Tuple[Response, int]:
    """
    Register a new user in the system.

    Expects a JSON body with:
    - email (str): Unique email address, matched exactly as given.
    - password (str)
    - name (str, optional)
    - role (str): USER or ORGANIZER.

    Returns:
        201: JSON with the created user's public fields.
        400: Missing fields, unknown role, or email already exists.
        500: Server-side error (hashing or database).
    """
    data: Dict[str, Any] = json_body()

    if missing_fields(data, ("email", "password", "role")):
        raise ValidationError("Missing required fields")

    email: str = data["email"]
    password: str = data["password"]
    name = optional_str(data.get("name"), "name")
    role: str = data["role"]

    if not isinstance(email, str) or not isinstance(password, str):
        raise ValidationError("email and password must be strings")

    if role not in ROLES:
        raise ValidationError(f"role must be one of: {', '.join(ROLES)}")

    try:
        with get_db() as db:
            if db.query(User).filter(User.email == email).first():
                raise ConflictError("User already exists")

            user = User(email=email, password_hash=hash_password(password), name=name, role=role)
            db.add(user)
            db.flush()

            if role == "ORGANIZER":
                db.add(Organizer(user_id=user.id, name=name or DEFAULT_ORGANIZER_NAME))

            public = user.to_public()
    except IntegrityError:
        # Lost a race with a concurrent registration for the same email
        raise ConflictError("User already exists")

    logging.info(f"[Auth] Registered user {public['id']} as {role}")
    return jsonify({"message": "Registration successful", "user": public}), 201


# --- LOGIN ---
@auth_bp.route("/login", methods=["POST"])
def login() -> Tuple[Response, int]:
    """
    Authenticate a user for a given role and return a token.

    Expects a JSON body with:
    - email (str)
    - password (str)
    - role (str)

    Returns:
        200: JSON with user public fields (+ organizer for ORGANIZER) and token.
        400: Missing credentials.
        401: Invalid credentials (unknown email, wrong password or wrong role).
        500: Database error.
    """
    data: Dict[str, Any] = json_body()

    if missing_fields(data, ("email", "password", "role")):
        raise ValidationError("Missing required fields")

    email = require_str(data["email"], "email")
    role = require_str(data["role"], "role")

    if not isinstance(data["password"], str):
        raise AuthError("Invalid credentials")

    with get_db() as db:
        user = (
            db.query(User)
            .filter(User.email == email, User.role == role)
            .first()
        )

        if not user or not check_password(user.password_hash, data["password"]):
            raise AuthError("Invalid credentials")

        public = user.to_public()
        if user.role == "ORGANIZER":
            public["organizer"] = user.organizer.to_dict() if user.organizer else None

    token = create_token(public["id"], public["role"])

    return jsonify({"message": "Login successful", "user": public, "token": token}), 200
