"""Custom exception hierarchy for StayTrail reports.

Every error raised inside the reporting pipeline inherits from
``StayTrailException`` so the façades can convert any failure into a single
user-facing notice, and the API layer can map it to an HTTP response.

Error codes follow pattern: [CATEGORY][NUMBER]
- RPT: Report and document errors (001-099)

Messages are user-facing and written in the app's language (Spanish).
"""

from __future__ import annotations

from typing import Any


class StayTrailException(Exception):
    """Base exception for all StayTrail application errors."""

    def __init__(
        self,
        message: str,
        code: str,
        status_code: int = 400,
        details: dict[str, Any] | None = None,
    ):
        """Initialize exception with user-facing message and metadata.

        Args:
            message: User-facing error message
            code: Unique error code (e.g., "RPT001")
            status_code: HTTP status code (default: 400 Bad Request)
            details: Optional additional context
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response format."""
        return {
            "error": {
                "message": self.message,
                "code": self.code,
                "details": self.details,
            }
        }


# ============================================================================
# REPORT ERRORS (RPT001-099)
# ============================================================================

class ReportError(StayTrailException):
    """Base class for report and document errors."""
    pass


class DataFetchError(ReportError):
    """The data-access boundary failed to return records."""

    def __init__(self, source: str, reason: str | None = None, message: str | None = None):
        super().__init__(
            message=message or "No se pudieron cargar los datos financieros.",
            code="RPT001",
            status_code=503,
            details={"source": source, "reason": reason},
        )


class StoragePermissionDeniedError(ReportError):
    """Storage permission was denied before generating a document."""

    def __init__(self, location: str | None = None):
        super().__init__(
            message="Se necesita acceso al almacenamiento para guardar el PDF",
            code="RPT002",
            status_code=403,
            details={"location": location} if location else {},
        )


class DocumentGenerationError(ReportError):
    """Rendering or printing the document failed."""

    GENERIC_REASON = "Error desconocido"

    def __init__(self, reason: str | None = None, document: str = "la factura"):
        super().__init__(
            message=f"Fallo al generar {document}: {reason or self.GENERIC_REASON}",
            code="RPT003",
            status_code=502,
            details={"reason": reason, "document": document},
        )


class TemplateFieldError(ReportError):
    """A document template references fields outside its declared set."""

    def __init__(self, template: str, unknown_fields: list[str]):
        super().__init__(
            message=f"Template {template} references undeclared fields: {', '.join(unknown_fields)}",
            code="RPT004",
            status_code=500,
            details={"template": template, "unknown_fields": unknown_fields},
        )


class PartialFailureError(ReportError):
    """Primary record was saved but a dependent artifact was not."""

    def __init__(self, entity_id: str, artifact: str, reason: str | None = None):
        super().__init__(
            message=f"Registro guardado, pero fallaron los elementos asociados ({artifact}).",
            code="RPT005",
            status_code=207,
            details={"entity_id": entity_id, "artifact": artifact, "reason": reason},
        )


class ShareError(ReportError):
    """The sharing target rejected or failed to publish the document."""

    def __init__(self, reason: str | None = None):
        super().__init__(
            message=f"No se pudo compartir el PDF: {reason or 'Error desconocido'}",
            code="RPT006",
            status_code=502,
            details={"reason": reason},
        )


class BookingNotFoundError(ReportError):
    """Generation was requested for a booking that is not loaded."""

    def __init__(self, booking_id: str):
        super().__init__(
            message=f"Reserva {booking_id} no encontrada",
            code="RPT007",
            status_code=404,
            details={"booking_id": booking_id},
        )

