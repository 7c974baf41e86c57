from __future__ import annotations

import logging
from typing import Protocol

from sqlalchemy import select
from sqlalchemy.orm import Session

from intake.domain.list_request import MessageListRequest
from intake.domain.message import Message
from intake.models import MessageRecord

logger = logging.getLogger(__name__)

# largest value a signed 64-bit OFFSET/LIMIT bind can carry
MAX_SQL_INTEGER = 2**63 - 1


class MessageRepository(Protocol):
    def list_by_filter(self, request: MessageListRequest) -> list[Message]: ...

    def add(self, message: Message) -> None: ...


class SqlAlchemyMessageRepository:
    """Message storage on top of a caller-owned SQLAlchemy session.

    ``add`` only stages the record; committing is left to the owner of the
    session so a message is written in a single transaction.
    """

    def __init__(self, db: Session) -> None:
        self._db = db

    def list_by_filter(self, request: MessageListRequest) -> list[Message]:
        offset = request.offset
        logger.debug(
            "Listing messages status=%s page=%s limit=%s offset=%s",
            request.status or "*",
            request.page,
            request.limit,
            offset,
        )
        if offset > MAX_SQL_INTEGER:
            logger.debug("Offset beyond storage range, returning empty page offset=%s", offset)
            return []
        statement = select(MessageRecord)
        if request.status:
            statement = statement.where(MessageRecord.status == request.status)
        statement = (
            statement.order_by(MessageRecord.created_at.asc(), MessageRecord.id.asc())
            .offset(offset)
            .limit(min(request.limit, MAX_SQL_INTEGER))
        )
        return [record.to_domain() for record in self._db.scalars(statement).all()]

    def add(self, message: Message) -> None:
        self._db.add(MessageRecord.from_domain(message))
        logger.debug("Message staged uuid=%s", message.uuid)
