from datetime import date, datetime
from typing import Any, Iterable, Mapping, Optional

from app.backend.errors import ValidationError


def require_text(field: str, value: Any, max_length: Optional[int] = None) -> str:
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a string")
    if not value.strip():
        raise ValidationError(f"{field} must not be empty")
    if max_length is not None and len(value) > max_length:
        raise ValidationError(f"{field} must be at most {max_length} characters")
    return value


def require_date(field: str, value: Any) -> date:
    # datetime is a date subclass, but the column has no time component
    if isinstance(value, datetime):
        raise ValidationError(f"{field} must be a calendar date without time")
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value)
        except ValueError:
            raise ValidationError(f"{field} must be an ISO date (YYYY-MM-DD)")
    raise ValidationError(f"{field} must be a date")


def reject_unknown_fields(fields: Mapping[str, Any], allowed: Iterable[str]) -> None:
    unknown = sorted(set(fields) - set(allowed))
    if unknown:
        raise ValidationError(f"Unsupported fields: {', '.join(unknown)}")
