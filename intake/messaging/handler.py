from __future__ import annotations

import logging
from typing import Callable

from sqlalchemy.orm import Session

from intake.domain.message import Message
from intake.repositories.message_repository import SqlAlchemyMessageRepository

logger = logging.getLogger(__name__)


class SendMessageHandler:
    """Writes one queued text as a new message."""

    def __init__(self, *, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    def __call__(self, text: str) -> Message:
        message = Message.create(text)
        with self._session_factory() as db:
            SqlAlchemyMessageRepository(db).add(message)
            db.commit()
        logger.info("Message persisted uuid=%s status=%s", message.uuid, message.status)
        return message
