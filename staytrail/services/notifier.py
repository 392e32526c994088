from __future__ import annotations

import logging

from staytrail.models.schemas.notices import Notice, NoticeLevel

logger = logging.getLogger(__name__)

_LEVELS = {
    NoticeLevel.INFO: logging.INFO,
    NoticeLevel.WARNING: logging.WARNING,
    NoticeLevel.ERROR: logging.ERROR,
}


class LoggingNotifier:
    """Default notifier: records notices in the application log.

    The HTTP layer returns the same notice to the client, so nothing else is
    needed server side.
    """

    async def notify(self, notice: Notice) -> None:
        logger.log(
            _LEVELS[notice.level],
            "%s: %s",
            notice.title,
            notice.message,
            extra={"notice_code": notice.code, "file_path": notice.file_path},
        )
