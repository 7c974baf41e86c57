from intake.messaging.consumer import MessageConsumer
from intake.messaging.handler import SendMessageHandler
from intake.messaging.queue import DatabaseMessageQueue, MessageQueue

__all__ = [
    "DatabaseMessageQueue",
    "MessageConsumer",
    "MessageQueue",
    "SendMessageHandler",
]
