from __future__ import annotations

import asyncio
from datetime import UTC, datetime, timedelta
import logging
from typing import Callable

from sqlalchemy import select
from sqlalchemy.orm import Session

from intake.core.settings import Settings
from intake.db.session import open_session
from intake.messaging.handler import SendMessageHandler
from intake.models import QueuedMessage

logger = logging.getLogger(__name__)

MAX_RETRY_DELAY_SEC = 30.0


def retry_delay(attempts: int) -> float:
    return min(MAX_RETRY_DELAY_SEC, 0.5 * (2 ** (attempts - 1)))


class MessageConsumer:
    def __init__(
        self,
        *,
        handler: Callable[[str], object],
        session_factory: Callable[[], Session],
        poll_interval_sec: float,
        batch_size: int,
        max_attempts: int,
    ) -> None:
        self._handler = handler
        self._session_factory = session_factory
        self._poll_interval_sec = poll_interval_sec
        self._batch_size = batch_size
        self._max_attempts = max_attempts
        self._stop_event = asyncio.Event()
        self._task: asyncio.Task[None] | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> MessageConsumer:
        return cls(
            handler=SendMessageHandler(session_factory=open_session),
            session_factory=open_session,
            poll_interval_sec=settings.message_consumer_poll_ms / 1000.0,
            batch_size=settings.message_consumer_batch_size,
            max_attempts=settings.message_consumer_max_attempts,
        )

    async def start(self) -> None:
        if self._task is not None:
            return
        self._stop_event.clear()
        self._task = asyncio.create_task(self._run())
        logger.info("Message consumer started")

    async def stop(self) -> None:
        if self._task is None:
            return
        self._stop_event.set()
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("Message consumer stopped")

    async def run_forever(self) -> None:
        await self._run()

    async def _run(self) -> None:
        try:
            while not self._stop_event.is_set():
                processed = await self.process_once()
                if processed == 0:
                    await asyncio.sleep(self._poll_interval_sec)
        except asyncio.CancelledError:
            raise
        except Exception:
            logger.exception("Message consumer crashed")
            raise

    async def process_once(self) -> int:
        now = datetime.now(UTC)
        with self._session_factory() as db:
            jobs = list(
                db.scalars(
                    select(QueuedMessage)
                    .where(QueuedMessage.processed_at.is_(None))
                    .where(QueuedMessage.dead_lettered_at.is_(None))
                    .where(QueuedMessage.next_attempt_at <= now)
                    .order_by(QueuedMessage.id.asc())
                    .limit(self._batch_size)
                ).all()
            )
            if not jobs:
                return 0

            processed = 0
            for job in jobs:
                try:
                    await asyncio.to_thread(self._handler, job.payload)
                    job.processed_at = datetime.now(UTC)
                    job.last_error = None
                except Exception as exc:
                    self._record_failure(job, exc)
                processed += 1
                # at-least-once: a crash after the handler commits replays the job
                db.commit()

            return processed

    def _record_failure(self, job: QueuedMessage, exc: Exception) -> None:
        job.attempts += 1
        job.last_error = str(exc)[:1000]
        if job.attempts >= self._max_attempts:
            job.dead_lettered_at = datetime.now(UTC)
            logger.error(
                "Queued message dead-lettered job_id=%s attempts=%s error=%s",
                job.job_id,
                job.attempts,
                exc,
            )
            return
        job.next_attempt_at = datetime.now(UTC) + timedelta(seconds=retry_delay(job.attempts))
        logger.warning(
            "Queued message failed job_id=%s attempts=%s error=%s",
            job.job_id,
            job.attempts,
            exc,
        )
