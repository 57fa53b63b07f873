"""
Shared authentication helpers.
Provides password hashing, token creation, verification, and role enforcement.
"""

import os
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple

import jwt
from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError
from dotenv import load_dotenv
from flask import request

from eventbook.common.errors import AuthError, ForbiddenError

# Load .env only once here
load_dotenv()

# Load secrets & configs
JWT_SECRET = os.getenv("JWT_SECRET")
if not JWT_SECRET:
    raise RuntimeError("JWT_SECRET is missing. Set it in .env")

TOKEN_EXPIRATION_MINUTES = int(os.getenv("TOKEN_EXPIRATION_MINUTES", 1440))  # Default 24 hours

ph = PasswordHasher()


# --- PASSWORDS ---
def hash_password(password: str) -> str:
    return ph.hash(password)


def check_password(password_hash: str, password: str) -> bool:
    """
    Compare a plaintext password against its stored argon2 hash.

    A corrupt stored hash counts as a mismatch rather than an error so the
    caller can answer with the same generic "invalid credentials".
    """
    try:
        return ph.verify(password_hash, password)
    except (VerificationError, InvalidHashError):
        return False


# --- JWT CREATION ---
def create_token(user_id: int, role: str) -> str:
    """
    Generates a new JWT for a given user.

    Args:
        user_id (int): The unique ID of the user.
        role (str): The role of the user (USER, ORGANIZER).

    Returns:
        str: Encoded JWT string.
    """
    now = datetime.now(timezone.utc)

    payload = {
        "sub": str(user_id),
        "role": role,
        "exp": now + timedelta(minutes=TOKEN_EXPIRATION_MINUTES),
        "iat": now
    }

    return jwt.encode(payload, JWT_SECRET, algorithm="HS256")


def _decode(token: str) -> dict:
    return jwt.decode(token, JWT_SECRET, algorithms=["HS256"])


# --- JWT VALIDATION ---
def require_token(required_roles: Optional[list] = None) -> Tuple[int, str]:
    """
    Verify the JWT in the Authorization header.

    Args:
        required_roles (list, optional): List of allowed roles.

    Returns:
        tuple: (user_id, role)

    Raises:
        AuthError: Header missing, token expired or invalid.
        ForbiddenError: Token valid but role not allowed.
    """
    auth = request.headers.get("Authorization", "")

    if not auth.startswith("Bearer "):
        raise AuthError("missing token")

    token = auth.split(" ", 1)[1]

    try:
        payload = _decode(token)
        user_id = int(payload["sub"])
    except jwt.ExpiredSignatureError:
        raise AuthError("token expired")
    except (jwt.InvalidTokenError, KeyError, TypeError, ValueError):
        raise AuthError("invalid token")

    role = payload.get("role")

    if required_roles and role not in required_roles:
        raise ForbiddenError("permission denied")

    return user_id, role


def verify_token(token: str) -> Optional[int]:
    """
    Validate a JWT manually (optional usage).

    Args:
        token (str): JWT string.

    Returns:
        int: user_id if valid, None otherwise.
    """
    try:
        return int(_decode(token)["sub"])
    except (jwt.InvalidTokenError, KeyError, TypeError, ValueError):
        return None
