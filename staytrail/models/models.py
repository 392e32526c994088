from __future__ import annotations

import datetime as dt
import enum
import uuid
from decimal import Decimal

from sqlalchemy import Date, DateTime, Float, ForeignKey, Integer, Numeric, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from staytrail.db.base_class import Base

NEUTRAL_STATUS_COLOR = "#9CA3AF"


def _uuid() -> str:
    return str(uuid.uuid4())


class PaymentStatus(str, enum.Enum):
    PAID = "paid"
    PENDING = "pending"
    REFUNDED = "refunded"
    UNKNOWN = "unknown"

    @classmethod
    def coerce(cls, value: object) -> PaymentStatus:
        """Map any stored value onto a member; unrecognized values become UNKNOWN."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.UNKNOWN

    @property
    def color(self) -> str:
        return _PAYMENT_COLORS.get(self, NEUTRAL_STATUS_COLOR)


class BookingStatus(str, enum.Enum):
    CONFIRMED = "confirmed"
    PENDING = "pending"
    CANCELLED = "cancelled"
    COMPLETED = "completed"
    UNKNOWN = "unknown"

    @classmethod
    def coerce(cls, value: object) -> BookingStatus:
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.UNKNOWN

    @property
    def color(self) -> str:
        return _BOOKING_COLORS.get(self, NEUTRAL_STATUS_COLOR)


class RouteDifficulty(str, enum.Enum):
    EASY = "easy"
    MODERATE = "moderate"
    HARD = "hard"
    EXPERT = "expert"
    UNKNOWN = "unknown"


_PAYMENT_COLORS = {
    PaymentStatus.PAID: "#10B981",
    PaymentStatus.PENDING: "#F59E0B",
    PaymentStatus.REFUNDED: "#EF4444",
}

_BOOKING_COLORS = {
    BookingStatus.CONFIRMED: "#3B82F6",
    BookingStatus.PENDING: "#F59E0B",
    BookingStatus.CANCELLED: "#EF4444",
    BookingStatus.COMPLETED: "#10B981",
}


class Profile(Base):
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    first_name: Mapped[str | None] = mapped_column(String(120), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(120), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True, index=True)
    created_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    bookings: Mapped[list[Booking]] = relationship("Booking", back_populates="profile")  # type: ignore


class Accommodation(Base):
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    host_id: Mapped[str | None] = mapped_column(ForeignKey("profile.id"), nullable=True, index=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)
    price_per_night: Mapped[Decimal] = mapped_column(Numeric(10, 2), default=Decimal("0"))
    max_guests: Mapped[int] = mapped_column(Integer, default=1)
    is_active: Mapped[bool] = mapped_column(default=True)
    created_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    images: Mapped[list[AccommodationImage]] = relationship(
        "AccommodationImage", back_populates="accommodation", cascade="all, delete-orphan"
    )  # type: ignore
    bookings: Mapped[list[Booking]] = relationship("Booking", back_populates="accommodation")  # type: ignore


class AccommodationImage(Base):
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    accommodation_id: Mapped[str] = mapped_column(ForeignKey("accommodation.id"), index=True)
    image_url: Mapped[str] = mapped_column(String(500), nullable=False)
    is_primary: Mapped[bool] = mapped_column(default=False)
    accommodation: Mapped[Accommodation] = relationship("Accommodation", back_populates="images")  # type: ignore


class Booking(Base):
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    user_id: Mapped[str | None] = mapped_column(ForeignKey("profile.id"), nullable=True, index=True)
    accommodation_id: Mapped[str | None] = mapped_column(
        ForeignKey("accommodation.id"), nullable=True, index=True
    )
    check_in_date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    check_out_date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    guests: Mapped[int] = mapped_column(Integer, default=1)
    total_price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    # Stored as free text; unknown values are tolerated and bucketed as "unknown"
    status: Mapped[str] = mapped_column(String(30), default=BookingStatus.PENDING.value)
    payment_status: Mapped[str] = mapped_column(String(30), default=PaymentStatus.PENDING.value)
    created_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), index=True
    )
    profile: Mapped[Profile | None] = relationship("Profile", back_populates="bookings")  # type: ignore
    accommodation: Mapped[Accommodation | None] = relationship(
        "Accommodation", back_populates="bookings"
    )  # type: ignore


class Route(Base):
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    distance: Mapped[float] = mapped_column(Float, default=0.0)  # km
    difficulty: Mapped[str] = mapped_column(String(20), default=RouteDifficulty.EASY.value)
    estimated_time: Mapped[int | None] = mapped_column(Integer, nullable=True)  # minutes
    start_location: Mapped[str | None] = mapped_column(String(255), nullable=True)
    end_location: Mapped[str | None] = mapped_column(String(255), nullable=True)
    is_active: Mapped[bool] = mapped_column(default=True)
    created_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), index=True
    )
