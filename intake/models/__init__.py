from intake.models.message import MessageRecord
from intake.models.queued_message import QueuedMessage

__all__ = [
    "MessageRecord",
    "QueuedMessage",
]
