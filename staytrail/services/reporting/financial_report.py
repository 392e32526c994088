from __future__ import annotations

import datetime as dt
import enum
import logging
from collections.abc import Callable
from decimal import Decimal

from staytrail import metrics
from staytrail.core.exceptions import (
    BookingNotFoundError,
    DataFetchError,
    DocumentGenerationError,
    StayTrailException,
    StoragePermissionDeniedError,
)
from staytrail.models.schemas.notices import Notice
from staytrail.models.schemas.reporting import BookingDetail, FinancialStats
from staytrail.services.documents.delivery import DocumentDelivery
from staytrail.services.documents.renderer import render_invoice_html
from staytrail.services.ports import (
    BookingRepository,
    DocumentPrinter,
    Notifier,
    ShareTarget,
    StoragePermission,
)
from staytrail.services.reporting.aggregation import aggregate_bookings
from staytrail.services.reporting.invoice_builder import build_invoice_data

logger = logging.getLogger(__name__)


class GenerationState(str, enum.Enum):
    IDLE = "idle"
    GENERATING = "generating"


def utcnow() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


def notice_for(exc: StayTrailException) -> Notice:
    title = "Permiso requerido" if isinstance(exc, StoragePermissionDeniedError) else "Error"
    return Notice.from_exception(exc, title=title)


class FinancialReportFacade:
    """Admin financial report: revenue stats, booking list and per-booking invoices.

    State is owned by the instance and mutated only from the event loop. Each
    booking has its own generation state, so a slow invoice never blocks the
    others and a second trigger for the same booking is a no-op.
    """

    def __init__(
        self,
        repository: BookingRepository,
        permission: StoragePermission,
        printer: DocumentPrinter,
        sharer: ShareTarget,
        notifier: Notifier,
        *,
        clock: Callable[[], dt.datetime] | None = None,
        tax_rate: Decimal | None = None,
        due_days: int | None = None,
    ) -> None:
        self.repository = repository
        self.permission = permission
        self.notifier = notifier
        self.delivery = DocumentDelivery(printer, sharer)
        self.clock = clock or utcnow
        self.tax_rate = tax_rate
        self.due_days = due_days

        self.stats = FinancialStats()
        self.details: list[BookingDetail] = []
        self.loading = False
        self._states: dict[str, GenerationState] = {}

    async def load(self) -> Notice | None:
        """Fetch and aggregate all bookings, replacing stats and details wholesale.

        Returns the error notice when the fetch fails, otherwise ``None``.
        """
        self.loading = True
        try:
            records = await self.repository.fetch_bookings()
            stats, details = aggregate_bookings(records)
        except Exception as exc:  # noqa: BLE001 - any fetch failure becomes a notice
            error = exc if isinstance(exc, StayTrailException) else DataFetchError("bookings", str(exc))
            logger.error("Financial report load failed: %s", exc, exc_info=True)
            metrics.report_fetch_failed()
            self.stats = FinancialStats()
            self.details = []
            notice = notice_for(error)
            await self.notifier.notify(notice)
            return notice
        finally:
            self.loading = False

        self.stats = stats
        self.details = details
        live_ids = {detail.id for detail in details}
        self._states = {key: state for key, state in self._states.items() if key in live_ids}
        metrics.report_loaded(len(details))
        logger.info("Financial report loaded: %d bookings", len(details))
        return None

    def generation_state(self, booking_id: str) -> GenerationState:
        return self._states.get(booking_id, GenerationState.IDLE)

    def is_generating(self, booking_id: str) -> bool:
        return self.generation_state(booking_id) is GenerationState.GENERATING

    def find_detail(self, booking_id: str) -> BookingDetail | None:
        return next((detail for detail in self.details if detail.id == booking_id), None)

    async def generate_invoice(self, booking_id: str) -> Notice | None:
        """Generate and deliver the invoice PDF for one booking.

        Returns ``None`` without doing anything while the same booking is
        already generating; otherwise returns the notice that was emitted.
        """
        if self.is_generating(booking_id):
            logger.debug("Invoice already generating", extra={"booking_id": booking_id})
            return None

        # Set before the first await so a concurrent trigger sees it
        self._states[booking_id] = GenerationState.GENERATING
        try:
            notice = await self._generate_invoice(booking_id)
            metrics.invoice_generated(shared=notice.share_url is not None)
        except StayTrailException as exc:
            logger.warning(
                "Invoice generation failed: %s", exc.message, extra={"booking_id": booking_id}
            )
            metrics.invoice_generation_failed(exc.code)
            notice = notice_for(exc)
        except Exception as exc:  # noqa: BLE001 - unexpected failures are reported, never raised
            logger.exception("Unexpected error generating invoice", extra={"booking_id": booking_id})
            metrics.invoice_generation_failed("unexpected")
            notice = notice_for(DocumentGenerationError(str(exc) or None))
        finally:
            self._states.pop(booking_id, None)

        await self.notifier.notify(notice)
        return notice

    async def _generate_invoice(self, booking_id: str) -> Notice:
        detail = self.find_detail(booking_id)
        if detail is None:
            raise BookingNotFoundError(booking_id)

        if not await self.permission.request():
            raise StoragePermissionDeniedError()

        invoice = build_invoice_data(
            detail, now=self.clock(), tax_rate=self.tax_rate, due_days=self.due_days
        )
        html = render_invoice_html(invoice)
        return await self.delivery.deliver(
            html,
            name_hint=invoice.invoice_number,
            dialog_title=f"Factura de Reserva {booking_id[:8]}",
        )


def build_financial_report_facade() -> FinancialReportFacade:
    """Wire the façade with the SQL repository and the default document adapters."""
    from staytrail.db.session import SessionLocal
    from staytrail.repositories.booking_repository import SqlBookingRepository
    from staytrail.services.documents.permissions import DirectoryWritePermission
    from staytrail.services.documents.printer import WeasyPrintPrinter
    from staytrail.services.notifier import LoggingNotifier
    from staytrail.storage.s3_client import S3ShareTarget

    return FinancialReportFacade(
        SqlBookingRepository(SessionLocal),
        DirectoryWritePermission(),
        WeasyPrintPrinter(),
        S3ShareTarget(),
        LoggingNotifier(),
    )
