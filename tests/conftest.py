from __future__ import annotations

import asyncio
import datetime as dt
import os
from decimal import Decimal
from pathlib import Path
from types import SimpleNamespace

os.environ.setdefault("APP_ENV", "test")

import pytest  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from staytrail.db import session as db_session  # noqa: E402
from staytrail.db.base_class import Base  # noqa: E402
from staytrail.db.session import SessionLocal  # noqa: E402
from staytrail.models import models  # noqa: E402
from staytrail.models.schemas.notices import Notice  # noqa: E402
from staytrail.models.schemas.reporting import RawBookingRecord  # noqa: E402

TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite:///:memory:")

test_engine = create_engine(
    TEST_DATABASE_URL,
    future=True,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

# Ensure application code uses the test engine
db_session.engine = test_engine  # type: ignore[assignment]
SessionLocal.configure(bind=test_engine)


@pytest.fixture(autouse=True)
def _reset_database_state():
    """Ensure each test sees a fresh database schema."""
    Base.metadata.drop_all(bind=test_engine)
    Base.metadata.create_all(bind=test_engine)
    yield


@pytest.fixture
def session_factory() -> sessionmaker[Session]:
    return SessionLocal


@pytest.fixture
def db_session():
    session = SessionLocal()
    try:
        yield session
        session.commit()
    finally:
        session.close()


# --- record builders ---

def make_record(
    record_id: str = "booking-0001",
    *,
    total_price: str = "116.00",
    payment_status: str | None = "paid",
    booking_status: str | None = "confirmed",
    created_at: dt.datetime | None = None,
    first_name: str | None = "Ana",
    last_name: str | None = "García",
    email: str | None = "ana@example.com",
    accommodation: str | None = "Casa del Río",
    user_id: str | None = "user-1",
) -> RawBookingRecord:
    return RawBookingRecord(
        id=record_id,
        total_price=Decimal(total_price),
        payment_status=payment_status,
        booking_status=booking_status,
        check_in=dt.date(2025, 3, 7),
        check_out=dt.date(2025, 3, 10),
        guests=2,
        created_at=created_at or dt.datetime(2025, 3, 1, 12, 0, tzinfo=dt.timezone.utc),
        user_id=user_id,
        user_first_name=first_name,
        user_last_name=last_name,
        user_email=email,
        accommodation_name=accommodation,
    )


@pytest.fixture
def record_factory():
    return make_record


# --- collaborator fakes ---

class FakeBookingRepository:
    def __init__(self, records=None, error: Exception | None = None) -> None:
        self.records = records
        self.error = error
        self.calls = 0

    async def fetch_bookings(self):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.records


class FakeRouteRepository:
    def __init__(self, routes=None, error: Exception | None = None) -> None:
        self.routes = routes
        self.error = error

    async def fetch_routes(self):
        if self.error is not None:
            raise self.error
        return self.routes


class FakePermission:
    def __init__(self, granted: bool = True) -> None:
        self.granted = granted
        self.calls = 0

    async def request(self) -> bool:
        self.calls += 1
        return self.granted


class FakePrinter:
    """Records printed HTML; optionally blocks until released or fails."""

    def __init__(self, tmp_path: Path, *, result: str | None = "ok", error: Exception | None = None) -> None:
        self.tmp_path = tmp_path
        self.result = result
        self.error = error
        self.printed: list[tuple[str, str]] = []
        self.gate: asyncio.Event | None = None

    async def print_to_file(self, html: str, *, name_hint: str):
        self.printed.append((name_hint, html))
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        if self.result is None:
            return None
        path = self.tmp_path / f"{name_hint}.pdf"
        path.write_bytes(b"%PDF-1.4 test")
        return path


class FakeShareTarget:
    def __init__(self, available: bool = False, error: Exception | None = None) -> None:
        self.available = available
        self.error = error
        self.shared: list[dict] = []

    async def is_available(self) -> bool:
        return self.available

    async def share(self, path: Path, *, mime_type: str, dialog_title: str):
        if self.error is not None:
            raise self.error
        self.shared.append({"path": path, "mime_type": mime_type, "dialog_title": dialog_title})
        return f"https://files.example.com/{path.name}"


class RecordingNotifier:
    def __init__(self) -> None:
        self.notices: list[Notice] = []

    async def notify(self, notice: Notice) -> None:
        self.notices.append(notice)


@pytest.fixture
def permission():
    return FakePermission()


@pytest.fixture
def printer(tmp_path):
    return FakePrinter(tmp_path)


@pytest.fixture
def sharer():
    return FakeShareTarget()


@pytest.fixture
def notifier():
    return RecordingNotifier()


# --- ORM seed helpers ---

def seed_booking(
    db: Session,
    *,
    booking_id: str,
    total_price: str = "116.00",
    payment_status: str = "paid",
    created_at: dt.datetime | None = None,
    profile: models.Profile | None = None,
    accommodation: models.Accommodation | None = None,
) -> models.Booking:
    booking = models.Booking(
        id=booking_id,
        user_id=profile.id if profile else None,
        accommodation_id=accommodation.id if accommodation else None,
        check_in_date=dt.date(2025, 3, 7),
        check_out_date=dt.date(2025, 3, 10),
        guests=2,
        total_price=Decimal(total_price),
        status="confirmed",
        payment_status=payment_status,
        created_at=created_at or dt.datetime(2025, 3, 1, 12, 0),
    )
    db.add(booking)
    db.commit()
    return booking


@pytest.fixture
def fakes():
    """Fake collaborator classes, for tests that need custom instances."""
    return SimpleNamespace(
        BookingRepository=FakeBookingRepository,
        RouteRepository=FakeRouteRepository,
        Permission=FakePermission,
        Printer=FakePrinter,
        ShareTarget=FakeShareTarget,
        Notifier=RecordingNotifier,
    )


@pytest.fixture
def seed():
    return seed_booking
