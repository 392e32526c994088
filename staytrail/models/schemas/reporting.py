"""Financial report schemas: raw booking input, aggregates and invoice fields."""
from __future__ import annotations

import datetime as dt
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from staytrail.models.models import BookingStatus, PaymentStatus


class RawBookingRecord(BaseModel):
    """A booking as read from the store, with joined relations flattened.

    Relation fields are ``None`` when the related profile/accommodation is
    missing; the aggregator resolves them to sentinels.
    """
    model_config = ConfigDict(frozen=True)

    id: str
    total_price: Decimal = Field(ge=0)
    payment_status: PaymentStatus = PaymentStatus.UNKNOWN
    booking_status: BookingStatus = BookingStatus.UNKNOWN
    check_in: dt.date
    check_out: dt.date
    guests: int = 1
    created_at: dt.datetime
    user_id: str | None = None
    user_first_name: str | None = None
    user_last_name: str | None = None
    user_email: str | None = None
    accommodation_name: str | None = None

    @field_validator("payment_status", mode="before")
    @classmethod
    def _coerce_payment_status(cls, v: object) -> PaymentStatus:
        return PaymentStatus.coerce(v)

    @field_validator("booking_status", mode="before")
    @classmethod
    def _coerce_booking_status(cls, v: object) -> BookingStatus:
        return BookingStatus.coerce(v)

    @field_validator("created_at", mode="after")
    @classmethod
    def _assume_utc(cls, v: dt.datetime) -> dt.datetime:
        # SQLite drops tzinfo; naive timestamps are stored as UTC
        if v.tzinfo is None:
            return v.replace(tzinfo=dt.timezone.utc)
        return v


class FinancialStats(BaseModel):
    """Revenue and booking counts per payment-status bucket.

    ``total_*`` include bookings whose payment status is unrecognized, so the
    named buckets may sum to less than the totals.
    """
    model_config = ConfigDict(frozen=True)

    total_revenue: Decimal = Decimal("0")
    paid_revenue: Decimal = Decimal("0")
    pending_revenue: Decimal = Decimal("0")
    refunded_revenue: Decimal = Decimal("0")
    total_bookings_count: int = 0
    paid_bookings_count: int = 0
    pending_bookings_count: int = 0
    refunded_bookings_count: int = 0


class BookingDetail(BaseModel):
    """UI-facing projection of one booking with every optional resolved."""
    model_config = ConfigDict(frozen=True)

    id: str
    user_name: str
    accommodation_name: str
    user_email: str
    user_address: str
    user_id: str | None = None
    check_in: dt.date
    check_out: dt.date
    guests: int
    total_price: Decimal
    booking_status: BookingStatus
    payment_status: PaymentStatus
    created_at: dt.datetime


class InvoiceData(BaseModel):
    """Pre-formatted invoice fields, substituted verbatim into the template."""
    model_config = ConfigDict(frozen=True)

    invoice_number: str
    invoice_date: str
    due_date: str
    user_name: str
    user_address: str
    user_email: str
    user_id: str
    accommodation_name: str
    check_in_date: str
    check_out_date: str
    guests: str
    payment_status: str
    total_price: str
    subtotal: str
    tax_rate: str
    tax_amount: str
    grand_total: str
