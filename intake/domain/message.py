from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import uuid4

DEFAULT_STATUS = "sent"
FILTERABLE_STATUSES = frozenset({"sent", "read"})


@dataclass(frozen=True, slots=True)
class Message:
    uuid: str
    text: str
    status: str | None
    created_at: datetime
    id: int | None = None

    @classmethod
    def create(cls, text: str, *, status: str = DEFAULT_STATUS) -> Message:
        return cls(
            uuid=str(uuid4()),
            text=text,
            status=status,
            created_at=datetime.now(UTC),
        )
