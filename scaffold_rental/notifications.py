import logging
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger(__name__)


class NoticeLevel(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class Notice:
    level: NoticeLevel
    message: str


class Notifier:
    """Collects the toasts shown to the user after an operation."""

    def __init__(self):
        self.notices: list[Notice] = []

    def success(self, message: str):
        self.notices.append(Notice(NoticeLevel.SUCCESS, message))

    def error(self, message: str):
        logger.warning(message)
        self.notices.append(Notice(NoticeLevel.ERROR, message))

    @property
    def last(self) -> Notice | None:
        return self.notices[-1] if self.notices else None

    def clear(self):
        self.notices.clear()
