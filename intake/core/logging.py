from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

# the form parser logs every field it reads at DEBUG
QUIET_LOGGERS = ("multipart", "python_multipart")


def configure_logging(*, debug: bool, log_sql: bool = False) -> None:
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT, force=True)

    for name in ("uvicorn.error", "uvicorn.access"):
        logging.getLogger(name).setLevel(level)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO if log_sql else logging.WARNING)

    logging.getLogger(__name__).info(
        "Logging configured level=%s sql=%s",
        logging.getLevelName(level),
        "on" if log_sql else "off",
    )
