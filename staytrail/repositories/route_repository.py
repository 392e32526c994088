from __future__ import annotations

import asyncio
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from staytrail.core.exceptions import DataFetchError
from staytrail.models import models
from staytrail.models.schemas.routes import RouteRecord

logger = logging.getLogger(__name__)


class SqlRouteRepository:
    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self.session_factory = session_factory

    async def fetch_routes(self) -> list[RouteRecord]:
        return await asyncio.to_thread(self._fetch_routes)

    def _fetch_routes(self) -> list[RouteRecord]:
        try:
            with self.session_factory() as db:
                routes = db.query(models.Route).order_by(models.Route.created_at.desc()).all()
                return [
                    RouteRecord(
                        id=route.id,
                        name=route.name,
                        description=route.description,
                        distance=route.distance or 0.0,
                        difficulty=route.difficulty,
                        estimated_time=route.estimated_time,
                        start_location=route.start_location,
                        end_location=route.end_location,
                    )
                    for route in routes
                ]
        except SQLAlchemyError as exc:
            logger.error("Route query failed: %s", exc)
            raise DataFetchError("routes", str(exc), message="No se pudieron cargar las rutas.") from exc
