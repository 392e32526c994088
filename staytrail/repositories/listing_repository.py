from __future__ import annotations

import asyncio
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from staytrail.core.exceptions import DataFetchError
from staytrail.models import models
from staytrail.models.schemas.api import AccommodationCreate

logger = logging.getLogger(__name__)


class SqlListingRepository:
    """Accommodation writes. Each call commits on its own."""

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self.session_factory = session_factory

    async def insert_accommodation(self, data: AccommodationCreate) -> str:
        return await asyncio.to_thread(self._insert_accommodation, data)

    async def insert_images(self, accommodation_id: str, image_urls: list[str]) -> int:
        return await asyncio.to_thread(self._insert_images, accommodation_id, image_urls)

    def _insert_accommodation(self, data: AccommodationCreate) -> str:
        accommodation = models.Accommodation(
            host_id=data.host_id,
            name=data.name,
            description=data.description,
            location=data.location,
            price_per_night=data.price_per_night,
            max_guests=data.max_guests,
        )
        try:
            with self.session_factory() as db:
                db.add(accommodation)
                db.commit()
                return accommodation.id
        except SQLAlchemyError as exc:
            logger.error("Accommodation insert failed: %s", exc)
            raise DataFetchError(
                "accommodation", str(exc), message="No se pudo guardar el alojamiento."
            ) from exc

    def _insert_images(self, accommodation_id: str, image_urls: list[str]) -> int:
        # The first image becomes the cover
        images = [
            models.AccommodationImage(
                accommodation_id=accommodation_id, image_url=url, is_primary=index == 0
            )
            for index, url in enumerate(image_urls)
        ]
        with self.session_factory() as db:
            db.add_all(images)
            db.commit()
        logger.debug("Saved %d image(s) for accommodation %s", len(images), accommodation_id)
        return len(images)
