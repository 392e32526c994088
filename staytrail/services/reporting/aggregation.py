"""Financial aggregation over booking records.

Pure computation, no database access: records come from the repository
already flattened, and the output is handed to the report façade.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable
from decimal import Decimal

from staytrail.core.config import settings
from staytrail.models.models import PaymentStatus
from staytrail.models.schemas.reporting import BookingDetail, FinancialStats, RawBookingRecord

logger = logging.getLogger(__name__)

# Closed set of named revenue buckets; any other status only feeds the totals.
REVENUE_BUCKETS: tuple[PaymentStatus, ...] = (
    PaymentStatus.PAID,
    PaymentStatus.PENDING,
    PaymentStatus.REFUNDED,
)


def resolve_user_name(
    first_name: str | None,
    last_name: str | None,
    fallback: str | None = None,
) -> str:
    """Join the non-blank name parts with one space; empty result -> sentinel."""
    parts = [part.strip() for part in (first_name, last_name) if part and part.strip()]
    name = " ".join(parts).strip()
    return name or (fallback if fallback is not None else settings.UNKNOWN_USER_LABEL)


def to_booking_detail(record: RawBookingRecord) -> BookingDetail:
    accommodation = (record.accommodation_name or "").strip()
    email = (record.user_email or "").strip()
    return BookingDetail(
        id=record.id,
        user_name=resolve_user_name(record.user_first_name, record.user_last_name),
        accommodation_name=accommodation or settings.UNKNOWN_ACCOMMODATION_LABEL,
        user_email=email or settings.NOT_SPECIFIED_LABEL,
        user_address=settings.NOT_SPECIFIED_LABEL,
        user_id=record.user_id,
        check_in=record.check_in,
        check_out=record.check_out,
        guests=record.guests,
        total_price=record.total_price,
        booking_status=record.booking_status,
        payment_status=record.payment_status,
        created_at=record.created_at,
    )


def aggregate_bookings(
    records: Iterable[RawBookingRecord] | None,
) -> tuple[FinancialStats, list[BookingDetail]]:
    """Reduce booking records to revenue statistics and a sorted detail list.

    Args:
        records: Booking records; ``None`` is treated as empty

    Returns:
        (FinancialStats, details sorted by ``created_at`` newest first)
    """
    total_revenue = Decimal("0")
    total_count = 0
    bucket_revenue = {status: Decimal("0") for status in REVENUE_BUCKETS}
    bucket_count = {status: 0 for status in REVENUE_BUCKETS}
    details: list[BookingDetail] = []
    unbucketed = 0

    for record in records or ():
        price = record.total_price
        total_revenue += price
        total_count += 1

        if record.payment_status in bucket_revenue:
            bucket_revenue[record.payment_status] += price
            bucket_count[record.payment_status] += 1
        else:
            unbucketed += 1

        details.append(to_booking_detail(record))

    if unbucketed:
        logger.info("%d booking(s) with unrecognized payment status counted in totals only", unbucketed)

    stats = FinancialStats(
        total_revenue=total_revenue,
        paid_revenue=bucket_revenue[PaymentStatus.PAID],
        pending_revenue=bucket_revenue[PaymentStatus.PENDING],
        refunded_revenue=bucket_revenue[PaymentStatus.REFUNDED],
        total_bookings_count=total_count,
        paid_bookings_count=bucket_count[PaymentStatus.PAID],
        pending_bookings_count=bucket_count[PaymentStatus.PENDING],
        refunded_bookings_count=bucket_count[PaymentStatus.REFUNDED],
    )
    # sorted() is stable, so equal timestamps keep input order
    details = sorted(details, key=lambda detail: detail.created_at, reverse=True)
    return stats, details
