"""Booking reads for the financial report.

Relations are joined eagerly and flattened here, so nothing downstream ever
touches an ORM object or an optional nested relation.
"""
from __future__ import annotations

import asyncio
import logging
from decimal import Decimal

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload, sessionmaker

from staytrail.core.exceptions import DataFetchError
from staytrail.models import models
from staytrail.models.schemas.reporting import RawBookingRecord

logger = logging.getLogger(__name__)


def to_raw_record(booking: models.Booking) -> RawBookingRecord:
    profile = booking.profile
    accommodation = booking.accommodation
    return RawBookingRecord(
        id=booking.id,
        total_price=Decimal(booking.total_price or 0),
        payment_status=booking.payment_status,
        booking_status=booking.status,
        check_in=booking.check_in_date,
        check_out=booking.check_out_date,
        guests=booking.guests or 0,
        created_at=booking.created_at,
        user_id=booking.user_id,
        user_first_name=profile.first_name if profile else None,
        user_last_name=profile.last_name if profile else None,
        user_email=profile.email if profile else None,
        accommodation_name=accommodation.name if accommodation else None,
    )


class SqlBookingRepository:
    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self.session_factory = session_factory

    async def fetch_bookings(self) -> list[RawBookingRecord]:
        return await asyncio.to_thread(self._fetch_bookings)

    def _fetch_bookings(self) -> list[RawBookingRecord]:
        try:
            with self.session_factory() as db:
                bookings = (
                    db.query(models.Booking)
                    .options(
                        joinedload(models.Booking.profile),
                        joinedload(models.Booking.accommodation),
                    )
                    .all()
                )
                records = [to_raw_record(booking) for booking in bookings]
        except SQLAlchemyError as exc:
            logger.error("Booking query failed: %s", exc)
            raise DataFetchError("bookings", str(exc)) from exc
        logger.debug("Fetched %d bookings", len(records))
        return records
