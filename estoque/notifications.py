"""
User-visible notifications.

Every mutating action ends in exactly one notification of kind
``success`` or ``error``. They are the only audit trail the system keeps,
so each one is also written to the package log.
"""

import logging
from contextlib import contextmanager
from enum import Enum
from typing import Iterator, List, Optional

from fastapi import HTTPException
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from estoque.errors import CollaboratorError, ValidationError

logger = logging.getLogger(__name__)


class NotificationKind(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


class Notification(BaseModel):
    kind: NotificationKind
    title: str
    description: str

    @property
    def is_error(self) -> bool:
        return self.kind == NotificationKind.ERROR


class Notifier:
    """Collects notifications in the order they were emitted."""

    def __init__(self) -> None:
        self._items: List[Notification] = []

    def notify(self, kind: NotificationKind, title: str, description: str) -> Notification:
        notification = Notification(kind=kind, title=title, description=description)
        self._items.append(notification)
        if notification.is_error:
            logger.warning(f"{title}: {description}")
        else:
            logger.info(f"{title}: {description}")
        return notification

    def success(self, title: str, description: str) -> Notification:
        return self.notify(NotificationKind.SUCCESS, title, description)

    def error(self, title: str, description: str) -> Notification:
        return self.notify(NotificationKind.ERROR, title, description)

    @property
    def items(self) -> List[Notification]:
        return list(self._items)

    @property
    def last(self) -> Optional[Notification]:
        return self._items[-1] if self._items else None

    def drain(self) -> List[Notification]:
        items, self._items = self._items, []
        return items

    def __len__(self) -> int:
        return len(self._items)


def rejection(notifier: Notifier, error: Exception, status_code: int = 400) -> HTTPException:
    """Error notification for ``error``, wrapped as the HTTP error to raise."""
    notification = notifier.error("Erro", str(error))
    return HTTPException(status_code=status_code, detail=notification.model_dump(mode="json"))


@contextmanager
def reported(notifier: Notifier, session: Session) -> Iterator[None]:
    """
    Raise failures inside the block as HTTP errors carrying a notification.

    Rejected input becomes a 400. A database failure rolls ``session`` back,
    is logged, and becomes a 503.
    """
    try:
        yield
    except ValidationError as e:
        raise rejection(notifier, e)
    except SQLAlchemyError as e:
        session.rollback()
        logger.error(f"Database error: {e}")
        raise rejection(
            notifier,
            CollaboratorError("Não foi possível salvar as alterações. Tente novamente."),
            status_code=503,
        )
