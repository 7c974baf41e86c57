from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class MessageRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    uuid: str
    text: str
    status: str | None
