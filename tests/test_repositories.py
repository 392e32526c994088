"""Repository tests against the in-memory SQLite database."""
from __future__ import annotations

import datetime as dt
from decimal import Decimal

import pytest
from sqlalchemy.exc import OperationalError

from staytrail.core.exceptions import DataFetchError
from staytrail.models import models
from staytrail.models.models import PaymentStatus
from staytrail.models.schemas.api import AccommodationCreate
from staytrail.repositories.booking_repository import SqlBookingRepository
from staytrail.repositories.listing_repository import SqlListingRepository
from staytrail.repositories.route_repository import SqlRouteRepository


@pytest.mark.asyncio
async def test_fetch_bookings_flattens_relations(db_session, session_factory, seed):
    profile = models.Profile(first_name="Ana", last_name="García", email="ana@example.com")
    accommodation = models.Accommodation(name="Casa del Río", price_per_night=Decimal("50"))
    db_session.add_all([profile, accommodation])
    db_session.commit()
    seed(db_session, booking_id="b-full", profile=profile, accommodation=accommodation)

    [record] = await SqlBookingRepository(session_factory).fetch_bookings()

    assert record.id == "b-full"
    assert record.total_price == Decimal("116.00")
    assert record.payment_status is PaymentStatus.PAID
    assert record.user_id == profile.id
    assert record.user_first_name == "Ana"
    assert record.user_email == "ana@example.com"
    assert record.accommodation_name == "Casa del Río"
    assert record.created_at.tzinfo is not None


@pytest.mark.asyncio
async def test_fetch_bookings_tolerates_missing_relations(db_session, session_factory, seed):
    seed(db_session, booking_id="b-orphan", payment_status="disputed")

    [record] = await SqlBookingRepository(session_factory).fetch_bookings()

    assert record.user_id is None
    assert record.user_first_name is None
    assert record.accommodation_name is None
    assert record.payment_status is PaymentStatus.UNKNOWN


@pytest.mark.asyncio
async def test_fetch_bookings_empty(session_factory):
    assert await SqlBookingRepository(session_factory).fetch_bookings() == []


@pytest.mark.asyncio
async def test_fetch_bookings_wraps_database_errors(monkeypatch, session_factory):
    repository = SqlBookingRepository(session_factory)

    def broken_query(*args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("no such table"))

    monkeypatch.setattr("sqlalchemy.orm.Session.query", broken_query)
    with pytest.raises(DataFetchError) as excinfo:
        await repository.fetch_bookings()
    assert excinfo.value.details["source"] == "bookings"


@pytest.mark.asyncio
async def test_fetch_routes_newest_first(db_session, session_factory):
    db_session.add_all(
        [
            models.Route(
                id="old", name="Vieja", distance=5.0, difficulty="easy",
                created_at=dt.datetime(2025, 1, 1),
            ),
            models.Route(
                id="new", name="Nueva", distance=12.5, difficulty="Imposible",
                estimated_time=200, created_at=dt.datetime(2025, 2, 1),
            ),
        ]
    )
    db_session.commit()

    routes = await SqlRouteRepository(session_factory).fetch_routes()

    assert [r.id for r in routes] == ["new", "old"]
    assert routes[0].difficulty == "Imposible"
    assert routes[0].estimated_time == 200
    assert routes[1].estimated_time is None


@pytest.mark.asyncio
async def test_insert_accommodation_and_images(db_session, session_factory):
    repository = SqlListingRepository(session_factory)
    data = AccommodationCreate(name="Refugio", price_per_night=Decimal("30.00"), max_guests=4)

    accommodation_id = await repository.insert_accommodation(data)
    saved = await repository.insert_images(accommodation_id, ["https://img/1.jpg", "https://img/2.jpg"])

    assert saved == 2
    stored = db_session.get(models.Accommodation, accommodation_id)
    assert stored.name == "Refugio"
    assert stored.max_guests == 4
    images = sorted(stored.images, key=lambda image: image.image_url)
    assert [image.is_primary for image in images] == [True, False]
