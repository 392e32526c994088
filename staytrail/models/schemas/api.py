"""Request/response schemas for the HTTP API."""
from __future__ import annotations

import datetime as dt
from decimal import Decimal

from pydantic import BaseModel, Field

from staytrail.models.models import BookingStatus, PaymentStatus
from staytrail.models.schemas.reporting import BookingDetail, FinancialStats


class BookingDetailOut(BaseModel):
    id: str
    user_name: str
    accommodation_name: str
    user_email: str
    check_in: dt.date
    check_out: dt.date
    guests: int
    total_price: Decimal
    booking_status: BookingStatus
    payment_status: PaymentStatus
    booking_status_color: str
    payment_status_color: str
    created_at: dt.datetime
    is_generating_invoice: bool = False

    @classmethod
    def from_detail(cls, detail: BookingDetail, *, is_generating: bool) -> BookingDetailOut:
        return cls(
            id=detail.id,
            user_name=detail.user_name,
            accommodation_name=detail.accommodation_name,
            user_email=detail.user_email,
            check_in=detail.check_in,
            check_out=detail.check_out,
            guests=detail.guests,
            total_price=detail.total_price,
            booking_status=detail.booking_status,
            payment_status=detail.payment_status,
            booking_status_color=detail.booking_status.color,
            payment_status_color=detail.payment_status.color,
            created_at=detail.created_at,
            is_generating_invoice=is_generating,
        )


class FinancialReportOut(BaseModel):
    stats: FinancialStats
    bookings: list[BookingDetailOut]


class AccommodationCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    description: str | None = None
    location: str | None = None
    price_per_night: Decimal = Field(ge=0)
    max_guests: int = Field(default=1, ge=1)
    host_id: str | None = None
    image_urls: list[str] = Field(default_factory=list)
