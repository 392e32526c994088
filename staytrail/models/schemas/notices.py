"""User-facing notices emitted by the report façades."""
from __future__ import annotations

import enum

from pydantic import BaseModel, ConfigDict

from staytrail.core.exceptions import StayTrailException


class NoticeLevel(str, enum.Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class Notice(BaseModel):
    model_config = ConfigDict(frozen=True)

    level: NoticeLevel
    title: str
    message: str
    code: str | None = None
    file_path: str | None = None
    share_url: str | None = None
    status_code: int = 200

    @classmethod
    def from_exception(cls, exc: StayTrailException, title: str = "Error") -> Notice:
        level = NoticeLevel.WARNING if exc.status_code < 300 else NoticeLevel.ERROR
        return cls(
            level=level,
            title=title,
            message=exc.message,
            code=exc.code,
            status_code=exc.status_code,
        )

    @property
    def is_error(self) -> bool:
        return self.level is NoticeLevel.ERROR
