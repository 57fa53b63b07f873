"""
Demo data for local development.

Creates one attendee, one organizer with a filled-in profile, five events of
different types and two orders covering both payment paths:

    User:      user@example.com / password123
    Organizer: organizer@example.com / password123
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy.orm import Session

from eventbook.auth_service.utils import hash_password
from eventbook.database.models import Event, Order, Organizer, User, utcnow

DEMO_PASSWORD = "password123"

DEMO_EVENTS = [
    ("Tech Conference 2024", "Annual technology conference featuring the latest innovations in AI, blockchain, and web development.", "CONFERENCE", "299.99"),
    ("Music Festival Summer", "Three-day music festival featuring top artists from around the world.", "FESTIVAL", "149.99"),
    ("Business Leadership Summit", "Executive summit for business leaders and entrepreneurs.", "SUMMIT", "499.99"),
    ("Web Development Workshop", "Hands-on workshop covering modern web development technologies and best practices.", "WORKSHOP", "89.99"),
    ("Digital Marketing Seminar", "Learn the latest digital marketing strategies and tools.", "SEMINAR", "79.99"),
]


def seed_demo_data(db: Session) -> dict:
    """
    Insert the demo rows. Skips everything if the demo attendee already exists.

    Returns:
        dict: counts of created users, events and orders.
    """
    if db.query(User).filter(User.email == "user@example.com").first():
        return {"users": 0, "events": 0, "orders": 0}

    password_hash = hash_password(DEMO_PASSWORD)

    user = User(email="user@example.com", name="John Doe", password_hash=password_hash, role="USER")
    organizer_user = User(email="organizer@example.com", name="Jane Smith", password_hash=password_hash, role="ORGANIZER")
    db.add_all([user, organizer_user])
    db.flush()

    organizer = Organizer(
        user_id=organizer_user.id,
        name="Jane Smith Events",
        bio="Professional event organizer with 10+ years of experience in conferences and workshops.",
        video_url="https://example.com/sample-video",
    )
    db.add(organizer)
    db.flush()

    events = [
        Event(organizer_id=organizer.id, title=title, description=description, type=type_, price=Decimal(price))
        for title, description, type_, price in DEMO_EVENTS
    ]
    db.add_all(events)
    db.flush()

    now = utcnow()
    db.add_all([
        Order(
            user_id=user.id,
            event_id=events[0].id,
            booking_date=now,
            selected_date_time=datetime(2024, 6, 15, 9, 0),
            final_cost=events[0].price,
            payment_method="Online Payment",
            payment_status="COMPLETED",
            organizer_confirmation="CONFIRMED",
        ),
        Order(
            user_id=user.id,
            event_id=events[1].id,
            booking_date=now,
            selected_date_time=datetime(2024, 7, 20, 18, 0),
            final_cost=events[1].price,
            payment_method="Cash on Delivery",
            payment_status="PENDING",
            organizer_confirmation="PENDING",
        ),
    ])

    return {"users": 2, "events": len(events), "orders": 2}
