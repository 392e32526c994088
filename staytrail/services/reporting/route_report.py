from __future__ import annotations

import logging

from staytrail import metrics
from staytrail.core.exceptions import (
    DataFetchError,
    DocumentGenerationError,
    StayTrailException,
    StoragePermissionDeniedError,
)
from staytrail.models.schemas.notices import Notice
from staytrail.services.documents.delivery import DocumentDelivery
from staytrail.services.documents.renderer import render_routes_html
from staytrail.services.ports import (
    DocumentPrinter,
    Notifier,
    RouteRepository,
    ShareTarget,
    StoragePermission,
)
from staytrail.services.reporting.financial_report import GenerationState, notice_for

logger = logging.getLogger(__name__)

ROUTE_REPORT_TITLE = "Reporte de Rutas"
ROUTE_REPORT_DOCUMENT = "el reporte de rutas"


class RouteReportFacade:
    """Route table PDF. Only one report can be in flight at a time."""

    def __init__(
        self,
        repository: RouteRepository,
        permission: StoragePermission,
        printer: DocumentPrinter,
        sharer: ShareTarget,
        notifier: Notifier,
    ) -> None:
        self.repository = repository
        self.permission = permission
        self.notifier = notifier
        self.delivery = DocumentDelivery(printer, sharer)
        self.state = GenerationState.IDLE

    @property
    def is_generating(self) -> bool:
        return self.state is GenerationState.GENERATING

    async def generate_report(self) -> Notice | None:
        if self.is_generating:
            logger.debug("Route report already generating")
            return None

        self.state = GenerationState.GENERATING
        try:
            notice = await self._generate_report()
            metrics.route_report_generated()
        except StayTrailException as exc:
            logger.warning("Route report failed: %s", exc.message)
            notice = notice_for(exc)
        except Exception as exc:  # noqa: BLE001
            logger.exception("Unexpected error generating route report")
            error = DocumentGenerationError(str(exc) or None, document=ROUTE_REPORT_DOCUMENT)
            notice = notice_for(error)
        finally:
            self.state = GenerationState.IDLE

        await self.notifier.notify(notice)
        return notice

    async def _generate_report(self) -> Notice:
        if not await self.permission.request():
            raise StoragePermissionDeniedError()

        try:
            routes = await self.repository.fetch_routes()
        except StayTrailException:
            raise
        except Exception as exc:
            raise DataFetchError("routes", str(exc), message="No se pudieron cargar las rutas.") from exc

        html = render_routes_html(routes)
        return await self.delivery.deliver(
            html,
            name_hint="reporte-rutas",
            dialog_title=ROUTE_REPORT_TITLE,
            document=ROUTE_REPORT_DOCUMENT,
        )


def build_route_report_facade() -> RouteReportFacade:
    from staytrail.db.session import SessionLocal
    from staytrail.repositories.route_repository import SqlRouteRepository
    from staytrail.services.documents.permissions import DirectoryWritePermission
    from staytrail.services.documents.printer import WeasyPrintPrinter
    from staytrail.services.notifier import LoggingNotifier
    from staytrail.storage.s3_client import S3ShareTarget

    return RouteReportFacade(
        SqlRouteRepository(SessionLocal),
        DirectoryWritePermission(),
        WeasyPrintPrinter(),
        S3ShareTarget(),
        LoggingNotifier(),
    )
