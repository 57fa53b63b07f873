"""
Small parsing/formatting helpers used by the route handlers.
"""

from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Iterable, Optional

from flask import request

from eventbook.common.errors import ValidationError

CENTS = Decimal("0.01")
# Largest value a Numeric(10, 2) column holds
MAX_AMOUNT = Decimal("99999999.99")


def parse_dt(val: Optional[str]) -> Optional[datetime]:
    """
    Safely parse an ISO-8601 string to a naive UTC datetime.

    Accepts the browser's `toISOString()` output ('...Z', with milliseconds)
    as well as plain 'YYYY-MM-DDTHH:MM' values.

    Returns:
        datetime: The parsed datetime, or None if invalid.
    """
    if not val or not isinstance(val, str):
        return None
    try:
        if val.endswith('Z'):
            val = val[:-1] + '+00:00'
        dt = datetime.fromisoformat(val)
    except (ValueError, TypeError):
        return None
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc).replace(tzinfo=None)
    return dt


def require_dt(val: Any, field: str) -> datetime:
    dt = parse_dt(val)
    if dt is None:
        raise ValidationError(f"Invalid {field} format. Use ISO-8601.")
    return dt


def to_money(value: Any, field: str) -> Decimal:
    """
    Convert a JSON number or numeric string to a two-place Decimal.

    Raises:
        ValidationError: Non-numeric, non-finite, negative or oversized amounts.
    """
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be a number")
    try:
        amount = Decimal(str(value).strip())
        if not amount.is_finite():
            raise ValidationError(f"{field} must be a number")
        if amount < 0:
            raise ValidationError(f"{field} cannot be negative")
        if amount > MAX_AMOUNT:
            raise ValidationError(f"{field} cannot exceed {MAX_AMOUNT}")
        return amount.quantize(CENTS)
    except (InvalidOperation, ValueError):
        raise ValidationError(f"{field} must be a number")


def money_out(value: Optional[Decimal]) -> Optional[float]:
    # JSON has no decimal type; amounts leave the service as plain numbers
    if value is None:
        return None
    return float(value)


def iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def json_body() -> Dict[str, Any]:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def missing_fields(data: Dict[str, Any], fields: Iterable[str]) -> list:
    """Names of fields that are absent or empty. Zero is a value, not a gap."""
    missing = []
    for name in fields:
        value = data.get(name)
        if value is None or value == "":
            missing.append(name)
    return missing


def require_int(value: Any, field: str) -> int:
    # JSON true/false and 1.9 would otherwise pass as ids
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise ValidationError(f"{field} must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be an integer")


def require_str(value: Any, field: str) -> str:
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a string")
    return value


def optional_str(value: Any, field: str) -> Optional[str]:
    """Empty or absent becomes None; anything else must be a string."""
    if value is None or value == "":
        return None
    return require_str(value, field)
