from __future__ import annotations

from intake.domain.errors import ValidationError

TEXT_MAX_LENGTH = 255
TEXT_ERROR_MESSAGE = f'The "text" field is required and must not exceed {TEXT_MAX_LENGTH} characters.'


def validate_text(value: object) -> str:
    if not isinstance(value, str) or not value or len(value) > TEXT_MAX_LENGTH:
        raise ValidationError(TEXT_ERROR_MESSAGE)
    return value
