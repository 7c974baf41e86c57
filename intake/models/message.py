from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from intake.db.session import Base
from intake.domain.message import Message


class MessageRecord(Base):
    __tablename__ = "messages"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    uuid: Mapped[str] = mapped_column(String(36), nullable=False, unique=True)
    text: Mapped[str] = mapped_column(String(255), nullable=False)
    status: Mapped[str | None] = mapped_column(String(255), nullable=True, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC), index=True
    )

    @classmethod
    def from_domain(cls, message: Message) -> MessageRecord:
        return cls(
            uuid=message.uuid,
            text=message.text,
            status=message.status,
            created_at=message.created_at,
        )

    def to_domain(self) -> Message:
        return Message(
            id=self.id,
            uuid=self.uuid,
            text=self.text,
            status=self.status,
            created_at=self.created_at,
        )
