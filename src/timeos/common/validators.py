from __future__ import annotations

from typing import Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: Optional[str], message: str) -> str:
    if not value or not value.strip():
        raise ValidationError(message)
    return value.strip()


def require_digits(value: Optional[str], message: str, length: int) -> str:
    value = (value or "").strip()
    if len(value) != length or not value.isdigit():
        raise ValidationError(message)
    return value


def optional_text(value: Optional[str]) -> Optional[str]:
    """Blank form values are stored as NULL."""
    if value is None:
        return None
    value = value.strip()
    return value or None
