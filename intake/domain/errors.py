from __future__ import annotations


class ValidationError(ValueError):
    """Caller-supplied input does not satisfy a field rule."""


class ListRequestError(ValidationError):
    """Pagination parameters could not be read as integers."""
