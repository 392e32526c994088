from __future__ import annotations

import asyncio
import logging
import uuid
from pathlib import Path

from staytrail.core.config import settings
from staytrail.core.exceptions import DocumentGenerationError

try:
    from weasyprint import CSS, HTML  # type: ignore
    _WEASY_AVAILABLE = True
except Exception:  # noqa: BLE001 - missing native libraries (pango/cairo) raise OSError
    _WEASY_AVAILABLE = False

logger = logging.getLogger(__name__)


class WeasyPrintPrinter:
    """Print HTML documents to local PDF files with WeasyPrint."""

    def __init__(
        self,
        output_dir: str | Path | None = None,
        page_width_pt: int | None = None,
        page_height_pt: int | None = None,
    ) -> None:
        self.output_dir = Path(output_dir or settings.PDF_OUTPUT_DIR)
        self.page_width_pt = page_width_pt or settings.PDF_PAGE_WIDTH_PT
        self.page_height_pt = page_height_pt or settings.PDF_PAGE_HEIGHT_PT

    async def print_to_file(self, html: str, *, name_hint: str) -> Path:
        if not _WEASY_AVAILABLE:
            raise DocumentGenerationError("WeasyPrint no está disponible en este servidor")
        return await asyncio.to_thread(self._write_pdf, html, name_hint)

    def _write_pdf(self, html: str, name_hint: str) -> Path:
        self.output_dir.mkdir(parents=True, exist_ok=True)
        target = self.output_dir / f"{_safe_name(name_hint)}-{uuid.uuid4().hex[:12]}.pdf"
        page_css = CSS(string=f"@page {{ size: {self.page_width_pt}pt {self.page_height_pt}pt; }}")
        HTML(string=html).write_pdf(str(target), stylesheets=[page_css])
        logger.info("Wrote PDF %s (%d bytes)", target, target.stat().st_size)
        return target


def _safe_name(hint: str) -> str:
    cleaned = "".join(ch if ch.isalnum() or ch in "-_" else "-" for ch in hint)
    return cleaned.strip("-") or "document"
