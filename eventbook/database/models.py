"""
Relational schema for the booking service.

Each class becomes one table. `to_public()` / `to_dict()` produce the camelCase
shapes the HTTP handlers return; password hashes never leave this module.
"""

from datetime import datetime, timezone

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.orm import declarative_base, relationship

from eventbook.common.helpers import iso, money_out

Base = declarative_base()

# --- ENUMERATIONS ---
ROLES = ["USER", "ORGANIZER"]
EVENT_TYPES = ["CONFERENCE", "FESTIVAL", "SUMMIT", "WORKSHOP", "SEMINAR", "OTHER"]
PAYMENT_STATUSES = ["PENDING", "COMPLETED", "FAILED", "REFUNDED"]
CONFIRMATION_STATUSES = ["PENDING", "CONFIRMED", "CANCELLED"]

MONEY = Numeric(10, 2)


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    name = Column(String(120))
    role = Column(String(20), nullable=False, default="USER")
    created_at = Column(DateTime, nullable=False, default=utcnow)

    organizer = relationship("Organizer", back_populates="user", uselist=False)
    profile = relationship("UserProfile", back_populates="user", uselist=False)
    orders = relationship("Order", back_populates="user")

    def to_public(self) -> dict:
        return {
            "id": self.id,
            "email": self.email,
            "name": self.name,
            "role": self.role,
        }


class Organizer(Base):
    __tablename__ = "organizers"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    name = Column(String(200), nullable=False)
    bio = Column(Text)
    video_url = Column(String(500))
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    user = relationship("User", back_populates="organizer")
    events = relationship("Event", back_populates="organizer")

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "userId": self.user_id,
            "name": self.name,
            "bio": self.bio,
            "videoUrl": self.video_url,
            "createdAt": iso(self.created_at),
            "updatedAt": iso(self.updated_at),
        }


class Event(Base):
    __tablename__ = "events"

    id = Column(Integer, primary_key=True)
    organizer_id = Column(Integer, ForeignKey("organizers.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(200), nullable=False)
    description = Column(Text)
    type = Column(String(20), nullable=False)
    price = Column(MONEY, nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow, index=True)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    organizer = relationship("Organizer", back_populates="events")
    orders = relationship("Order", back_populates="event")

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "type": self.type,
            "price": money_out(self.price),
            "createdAt": iso(self.created_at),
        }


class Order(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    event_id = Column(Integer, ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    booking_date = Column(DateTime, nullable=False)
    selected_date_time = Column(DateTime, nullable=False)
    final_cost = Column(MONEY, nullable=False)
    payment_method = Column(String(50), nullable=False)
    payment_status = Column(String(20), nullable=False, default="PENDING")
    organizer_confirmation = Column(String(20), nullable=False, default="PENDING")
    created_at = Column(DateTime, nullable=False, default=utcnow, index=True)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    user = relationship("User", back_populates="orders")
    event = relationship("Event", back_populates="orders")

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "bookingDate": iso(self.booking_date),
            "selectedDateTime": iso(self.selected_date_time),
            "finalCost": money_out(self.final_cost),
            "paymentMethod": self.payment_method,
            "paymentStatus": self.payment_status,
            "organizerConfirmation": self.organizer_confirmation,
        }


class UserProfile(Base):
    __tablename__ = "user_profiles"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    country = Column(String(100))
    state = Column(String(100))
    city = Column(String(100))
    pin_code = Column(String(20))
    address = Column(Text)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    user = relationship("User", back_populates="profile")

    def to_dict(self) -> dict:
        return {
            "userId": self.user_id,
            "country": self.country,
            "state": self.state,
            "city": self.city,
            "pinCode": self.pin_code,
            "address": self.address,
        }
