from __future__ import annotations

from typing import Optional

from ..core.constants import ALLOWED_UPLOAD_EXTENSIONS
from ..core.exceptions import ValidationError
from .datetime_utils import parse_iso_date


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_upload_extension(file_name: str) -> str:
    lowered = file_name.lower()
    if not lowered.endswith(ALLOWED_UPLOAD_EXTENSIONS):
        allowed = ", ".join(ALLOWED_UPLOAD_EXTENSIONS)
        raise ValidationError(f"Unsupported file type for '{file_name}'. Allowed: {allowed}")
    return file_name


def optional_iso_date(value: Optional[str], field_name: str) -> Optional[str]:
    """Validate an optional YYYY-MM-DD filter value, returning it unchanged."""
    if not value:
        return None
    try:
        parse_iso_date(value)
    except ValueError:
        raise ValidationError(f"{field_name} must be YYYY-MM-DD") from None
    return value
