from __future__ import annotations

import logging

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from intake.core.settings import get_settings
from intake.db.session import get_db
from intake.messaging.queue import MessageQueue
from intake.repositories.message_repository import MessageRepository, SqlAlchemyMessageRepository
from intake.services.message_service import MessageService

logger = logging.getLogger(__name__)


def get_message_repository(db: Session = Depends(get_db)) -> MessageRepository:
    return SqlAlchemyMessageRepository(db)


def get_message_queue(request: Request) -> MessageQueue:
    queue = getattr(request.app.state, "message_queue", None)
    if queue is None:
        raise RuntimeError("Message queue is not configured")
    return queue


def get_message_service(
    repository: MessageRepository = Depends(get_message_repository),
    queue: MessageQueue = Depends(get_message_queue),
) -> MessageService:
    settings = get_settings()
    return MessageService(
        repository=repository,
        queue=queue,
        default_limit=settings.message_list_default_limit,
        max_limit=settings.message_list_max_limit,
    )


async def read_text_field(request: Request) -> object:
    """Pull ``text`` out of a JSON object or a form body, whichever was sent."""
    content_type = request.headers.get("content-type", "").lower()
    if content_type.startswith("application/json"):
        try:
            payload = await request.json()
        except ValueError:
            logger.debug("Send request body is not valid JSON")
            return None
        return payload.get("text") if isinstance(payload, dict) else None

    form = await request.form()
    return form.get("text")
