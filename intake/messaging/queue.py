from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Callable, Protocol

from sqlalchemy.orm import Session

from intake.models import QueuedMessage

logger = logging.getLogger(__name__)


class MessageQueue(Protocol):
    def enqueue(self, text: str) -> str: ...


class DatabaseMessageQueue:
    """Durable queue backed by the ``message_queue`` table.

    Each enqueue commits on its own, so a returned job id is always visible
    to the consumer.
    """

    def __init__(self, *, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    def enqueue(self, text: str) -> str:
        with self._session_factory() as db:
            job = QueuedMessage(payload=text, next_attempt_at=datetime.now(UTC))
            db.add(job)
            db.commit()
            job_id = job.job_id
        logger.info("Message queued job_id=%s length=%s", job_id, len(text))
        return job_id
