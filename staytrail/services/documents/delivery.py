from __future__ import annotations

import logging

from staytrail.core.exceptions import DocumentGenerationError
from staytrail.models.schemas.notices import Notice, NoticeLevel
from staytrail.services.ports import DocumentPrinter, ShareTarget

logger = logging.getLogger(__name__)

PDF_MIME_TYPE = "application/pdf"


class DocumentDelivery:
    """Print an HTML document to PDF, then share it or report where it was saved."""

    def __init__(self, printer: DocumentPrinter, sharer: ShareTarget) -> None:
        self.printer = printer
        self.sharer = sharer

    async def deliver(
        self,
        html: str,
        *,
        name_hint: str,
        dialog_title: str,
        document: str = "la factura",
    ) -> Notice:
        path = await self.printer.print_to_file(html, name_hint=name_hint)
        if not path:
            raise DocumentGenerationError("No se pudo generar el archivo PDF", document=document)

        if await self.sharer.is_available():
            url = await self.sharer.share(path, mime_type=PDF_MIME_TYPE, dialog_title=dialog_title)
            logger.info("Shared %s", path, extra={"file_path": str(path)})
            return Notice(
                level=NoticeLevel.INFO,
                title="PDF compartido",
                message=dialog_title,
                file_path=str(path),
                share_url=url,
            )

        logger.info("Sharing unavailable, PDF kept at %s", path, extra={"file_path": str(path)})
        return Notice(
            level=NoticeLevel.INFO,
            title="PDF generado",
            message=f"El PDF se ha guardado en: {path}",
            file_path=str(path),
        )
