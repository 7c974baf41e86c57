from __future__ import annotations

from collections.abc import Sequence
import logging

from intake.domain.list_request import MessageListRequest
from intake.domain.message import Message
from intake.messaging.queue import MessageQueue
from intake.repositories.message_repository import MessageRepository
from intake.schemas.messages import MessageRead
from intake.services.message_validator import validate_text

logger = logging.getLogger(__name__)


def format_messages(messages: Sequence[Message]) -> list[dict[str, object]]:
    return [MessageRead.model_validate(message).model_dump(mode="json") for message in messages]


class MessageService:
    def __init__(
        self,
        *,
        repository: MessageRepository,
        queue: MessageQueue,
        default_limit: int = 10,
        max_limit: int | None = None,
    ) -> None:
        self._repository = repository
        self._queue = queue
        self._default_limit = default_limit
        self._max_limit = max_limit

    def build_list_request(
        self,
        raw_status: str | None,
        raw_page: str | None,
        raw_limit: str | None,
    ) -> MessageListRequest:
        return MessageListRequest.from_query(
            raw_status,
            raw_page,
            raw_limit,
            default_limit=self._default_limit,
            max_limit=self._max_limit,
        )

    def get_formatted_messages(self, request: MessageListRequest) -> list[dict[str, object]]:
        messages = self._repository.list_by_filter(request)
        logger.debug("Fetched %s messages for %r", len(messages), request)
        return format_messages(messages)

    def list_formatted(
        self,
        raw_status: str | None,
        raw_page: str | None,
        raw_limit: str | None,
    ) -> list[dict[str, object]]:
        return self.get_formatted_messages(self.build_list_request(raw_status, raw_page, raw_limit))

    def dispatch(self, text: str) -> str:
        return self._queue.enqueue(text)

    def submit(self, raw_text: object) -> str:
        return self.dispatch(validate_text(raw_text))
