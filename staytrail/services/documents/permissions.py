from __future__ import annotations

import asyncio
import logging
import os
from pathlib import Path

from staytrail.core.config import settings

logger = logging.getLogger(__name__)


class DirectoryWritePermission:
    """Grants document storage when the output directory exists and is writable."""

    def __init__(self, directory: str | Path | None = None) -> None:
        self.directory = Path(directory or settings.PDF_OUTPUT_DIR)

    async def request(self) -> bool:
        return await asyncio.to_thread(self._check)

    def _check(self) -> bool:
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            logger.warning("Cannot create document directory %s: %s", self.directory, exc)
            return False
        granted = os.access(self.directory, os.W_OK)
        if not granted:
            logger.warning("Document directory %s is not writable", self.directory)
        return granted
