"""
Read-only registration rollups over orders and events.

Used by the /registrations endpoint and the `registration-stats` command.
"""

from typing import Any, Dict

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from eventbook.common.helpers import iso, money_out
from eventbook.database.models import Event, Order

TOP_EVENTS_LIMIT = 10
RECENT_LIMIT = 20


def registration_stats(db: Session, top: int = TOP_EVENTS_LIMIT, recent: int = RECENT_LIMIT) -> Dict[str, Any]:
    """
    Build the dashboard statistics in one pass over the store.

    Returns:
        dict with totalRegistrations, registrationsByStatus, totalRevenue,
        registrationsByEventType, topEvents and recentRegistrations.
    """
    total = db.query(func.count(Order.id)).scalar() or 0

    # Flattened to {paymentStatus, count} rather than a nested _count object
    by_status = [
        {"paymentStatus": status, "count": count}
        for status, count in (
            db.query(Order.payment_status, func.count(Order.id))
            .group_by(Order.payment_status)
            .order_by(Order.payment_status)
            .all()
        )
    ]

    revenue = (
        db.query(func.coalesce(func.sum(Order.final_cost), 0))
        .filter(Order.payment_status == "COMPLETED")
        .scalar()
    )

    by_type = dict(
        db.query(Event.type, func.count(Order.id))
        .select_from(Order)
        .join(Order.event)
        .group_by(Event.type)
        .all()
    )

    order_count = func.count(Order.id).label("order_count")
    top_events = [
        {
            "id": event.id,
            "title": event.title,
            "type": event.type,
            "price": money_out(event.price),
            "orderCount": count,
        }
        for event, count in (
            db.query(Event, order_count)
            .outerjoin(Order, Order.event_id == Event.id)
            .group_by(Event.id)
            .order_by(order_count.desc(), Event.id.asc())
            .limit(top)
            .all()
        )
    ]

    recent_orders = (
        db.query(Order)
        .options(joinedload(Order.user), joinedload(Order.event))
        .order_by(Order.booking_date.desc(), Order.id.desc())
        .limit(recent)
        .all()
    )
    recent_rows = [
        {
            "id": o.id,
            "bookingDate": iso(o.booking_date),
            "paymentStatus": o.payment_status,
            "finalCost": money_out(o.final_cost),
            "user": {"id": o.user.id, "email": o.user.email, "name": o.user.name},
            "event": {"id": o.event.id, "title": o.event.title, "type": o.event.type},
        }
        for o in recent_orders
    ]

    return {
        "totalRegistrations": total,
        "registrationsByStatus": by_status,
        "totalRevenue": money_out(revenue) if revenue is not None else 0.0,
        "registrationsByEventType": by_type,
        "topEvents": top_events,
        "recentRegistrations": recent_rows,
    }
