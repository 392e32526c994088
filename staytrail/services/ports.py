"""Collaborator contracts used by the report façades.

Concrete adapters live next to their concern (``repositories``,
``services.documents``, ``storage``); tests substitute in-memory fakes.
"""
from __future__ import annotations

from pathlib import Path
from typing import Protocol

from staytrail.models.schemas.api import AccommodationCreate
from staytrail.models.schemas.notices import Notice
from staytrail.models.schemas.reporting import RawBookingRecord
from staytrail.models.schemas.routes import RouteRecord


class BookingRepository(Protocol):
    """Read access to bookings joined with profile and accommodation names."""

    async def fetch_bookings(self) -> list[RawBookingRecord] | None:
        """Load every booking; may return ``None`` when the store has nothing."""

        ...


class RouteRepository(Protocol):
    async def fetch_routes(self) -> list[RouteRecord] | None:
        """Load routes, newest first."""

        ...


class ListingRepository(Protocol):
    async def insert_accommodation(self, data: AccommodationCreate) -> str:
        """Persist the accommodation and return its id."""

        ...

    async def insert_images(self, accommodation_id: str, image_urls: list[str]) -> int:
        """Persist image rows for an accommodation and return how many were saved."""

        ...


class StoragePermission(Protocol):
    async def request(self) -> bool:
        """Return True when documents may be written."""

        ...


class DocumentPrinter(Protocol):
    async def print_to_file(self, html: str, *, name_hint: str) -> Path | None:
        """Render HTML to a PDF file and return its path."""

        ...


class ShareTarget(Protocol):
    async def is_available(self) -> bool:
        """Whether sharing can be attempted at all."""

        ...

    async def share(self, path: Path, *, mime_type: str, dialog_title: str) -> str | None:
        """Publish the file and return a location the user can open."""

        ...


class Notifier(Protocol):
    async def notify(self, notice: Notice) -> None:
        """Surface a notice to the user."""

        ...
