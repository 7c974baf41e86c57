"""Run the message consumer as its own process.

Pair with ``MESSAGE_CONSUMER_ENABLED=false`` on the web process so that only
this worker drains the queue.
"""

from __future__ import annotations

import asyncio
import logging

from intake.core.logging import configure_logging
from intake.core.settings import get_settings
from intake.db.session import init_db
from intake.messaging import MessageConsumer

logger = logging.getLogger(__name__)


async def _serve() -> None:
    settings = get_settings()
    init_db()
    consumer = MessageConsumer.from_settings(settings)
    logger.info("Message worker started")
    await consumer.run_forever()


def main() -> None:
    settings = get_settings()
    configure_logging(debug=settings.debug, log_sql=settings.log_sql)
    try:
        asyncio.run(_serve())
    except KeyboardInterrupt:
        logger.info("Message worker interrupted")
