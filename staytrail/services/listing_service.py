from __future__ import annotations

import logging

from pydantic import BaseModel

from staytrail import metrics
from staytrail.core.exceptions import PartialFailureError, StayTrailException
from staytrail.models.schemas.api import AccommodationCreate
from staytrail.models.schemas.notices import Notice, NoticeLevel
from staytrail.services.ports import ListingRepository, Notifier

logger = logging.getLogger(__name__)


class ListingResult(BaseModel):
    accommodation_id: str | None
    images_saved: int = 0
    notice: Notice


class ListingService:
    """Host listing creation.

    The accommodation row is the primary record; image rows are dependent
    artifacts. If images fail after the accommodation was saved, the listing
    stays created and the host gets a warning.
    """

    def __init__(self, repository: ListingRepository, notifier: Notifier) -> None:
        self.repository = repository
        self.notifier = notifier

    async def create_accommodation(
        self,
        data: AccommodationCreate,
        image_urls: list[str] | None = None,
    ) -> ListingResult:
        urls = list(image_urls if image_urls is not None else data.image_urls)

        try:
            accommodation_id = await self.repository.insert_accommodation(data)
        except StayTrailException as exc:
            logger.warning("Accommodation insert failed: %s", exc.message)
            return await self._finish(None, 0, Notice.from_exception(exc))

        images_saved = 0
        if urls:
            try:
                images_saved = await self.repository.insert_images(accommodation_id, urls)
            except Exception as exc:  # noqa: BLE001 - dependent rows never undo the primary record
                logger.warning(
                    "Images for accommodation %s failed: %s", accommodation_id, exc, exc_info=True
                )
                metrics.listing_partial_failure()
                error = PartialFailureError(accommodation_id, "imágenes", str(exc) or None)
                return await self._finish(
                    accommodation_id, 0, Notice.from_exception(error, title="Aviso")
                )

        logger.info("Accommodation %s created with %d image(s)", accommodation_id, images_saved)
        notice = Notice(
            level=NoticeLevel.INFO,
            title="Alojamiento creado",
            message=f"{data.name} se ha creado correctamente.",
            status_code=201,
        )
        return await self._finish(accommodation_id, images_saved, notice)

    async def _finish(self, accommodation_id: str | None, images_saved: int, notice: Notice) -> ListingResult:
        await self.notifier.notify(notice)
        return ListingResult(accommodation_id=accommodation_id, images_saved=images_saved, notice=notice)


def build_listing_service() -> ListingService:
    from staytrail.db.session import SessionLocal
    from staytrail.repositories.listing_repository import SqlListingRepository
    from staytrail.services.notifier import LoggingNotifier

    return ListingService(SqlListingRepository(SessionLocal), LoggingNotifier())
