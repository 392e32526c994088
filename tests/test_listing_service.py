from __future__ import annotations

from decimal import Decimal

import pytest

from staytrail.core.exceptions import DataFetchError
from staytrail.models.schemas.api import AccommodationCreate
from staytrail.models.schemas.notices import NoticeLevel
from staytrail.services.listing_service import ListingService


class FakeListingRepository:
    def __init__(self, *, accommodation_error=None, image_error=None) -> None:
        self.accommodation_error = accommodation_error
        self.image_error = image_error
        self.accommodations: list[AccommodationCreate] = []
        self.images: dict[str, list[str]] = {}

    async def insert_accommodation(self, data: AccommodationCreate) -> str:
        if self.accommodation_error is not None:
            raise self.accommodation_error
        self.accommodations.append(data)
        return f"acc-{len(self.accommodations)}"

    async def insert_images(self, accommodation_id: str, image_urls: list[str]) -> int:
        if self.image_error is not None:
            raise self.image_error
        self.images[accommodation_id] = list(image_urls)
        return len(image_urls)


def _data(**overrides) -> AccommodationCreate:
    values = dict(name="Cabaña Azul", location="Bariloche", price_per_night=Decimal("80.00"))
    values.update(overrides)
    return AccommodationCreate(**values)


@pytest.mark.asyncio
async def test_create_with_images(notifier):
    repository = FakeListingRepository()
    service = ListingService(repository, notifier)

    result = await service.create_accommodation(_data(), ["https://img/1.jpg", "https://img/2.jpg"])

    assert result.accommodation_id == "acc-1"
    assert result.images_saved == 2
    assert result.notice.level is NoticeLevel.INFO
    assert result.notice.status_code == 201
    assert notifier.notices == [result.notice]


@pytest.mark.asyncio
async def test_image_urls_default_to_payload(notifier):
    repository = FakeListingRepository()
    service = ListingService(repository, notifier)
    result = await service.create_accommodation(_data(image_urls=["https://img/a.jpg"]))
    assert repository.images == {"acc-1": ["https://img/a.jpg"]}
    assert result.images_saved == 1


@pytest.mark.asyncio
async def test_image_failure_is_a_warning_and_keeps_accommodation(notifier):
    repository = FakeListingRepository(image_error=RuntimeError("storage offline"))
    service = ListingService(repository, notifier)

    result = await service.create_accommodation(_data(), ["https://img/1.jpg"])

    assert result.accommodation_id == "acc-1"
    assert len(repository.accommodations) == 1
    assert result.images_saved == 0
    assert result.notice.level is NoticeLevel.WARNING
    assert result.notice.code == "RPT005"
    assert result.notice.title == "Aviso"


@pytest.mark.asyncio
async def test_accommodation_failure_is_an_error(notifier):
    repository = FakeListingRepository(
        accommodation_error=DataFetchError("accommodation", "locked", message="No se pudo guardar el alojamiento.")
    )
    service = ListingService(repository, notifier)

    result = await service.create_accommodation(_data(), ["https://img/1.jpg"])

    assert result.accommodation_id is None
    assert result.notice.level is NoticeLevel.ERROR
    assert result.notice.message == "No se pudo guardar el alojamiento."
    assert repository.images == {}
