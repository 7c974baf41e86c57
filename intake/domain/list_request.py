from __future__ import annotations

import re

from intake.domain.errors import ListRequestError
from intake.domain.message import FILTERABLE_STATUSES

_QUERY_INT_PATTERN = re.compile(r"[+-]?[0-9]+")


def _require_int(name: str, value: object) -> int:
    # bool is an int subclass but never a page number
    if isinstance(value, bool) or not isinstance(value, int):
        raise ListRequestError(f'The "{name}" parameter must be an integer.')
    return value


def _parse_query_int(value: str | None, default: int) -> object:
    if value is None:
        return default
    candidate = value.strip()
    if _QUERY_INT_PATTERN.fullmatch(candidate):
        return int(candidate)
    return value


class MessageListRequest:
    """Status filter and page window for one listing call.

    Unknown status values mean "no filter" rather than an error. ``page`` and
    ``limit`` must be integers and are clamped to a minimum of 1; ``limit`` is
    also clamped to ``max_limit`` when one is given.
    """

    __slots__ = ("_status", "_page", "_limit")

    def __init__(
        self,
        status: object,
        page: object,
        limit: object,
        *,
        max_limit: int | None = None,
    ) -> None:
        self._status = status if isinstance(status, str) and status in FILTERABLE_STATUSES else ""
        self._page = max(1, _require_int("page", page))
        limit_value = max(1, _require_int("limit", limit))
        if max_limit is not None and max_limit > 0:
            limit_value = min(limit_value, max_limit)
        self._limit = limit_value

    @classmethod
    def from_query(
        cls,
        status: str | None,
        page: str | None,
        limit: str | None,
        *,
        default_limit: int,
        max_limit: int | None = None,
    ) -> MessageListRequest:
        """Build a request from raw query-string values.

        Missing values take their defaults; integer-looking strings are
        converted and everything else is handed to the constructor as-is so
        that it is rejected there.
        """
        return cls(
            status if status is not None else "",
            _parse_query_int(page, 1),
            _parse_query_int(limit, default_limit),
            max_limit=max_limit,
        )

    @property
    def status(self) -> str:
        return self._status

    @property
    def page(self) -> int:
        return self._page

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def offset(self) -> int:
        return (self._page - 1) * self._limit

    def __repr__(self) -> str:
        return f"MessageListRequest(status={self._status!r}, page={self._page}, limit={self._limit})"
