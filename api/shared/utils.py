"""Common helpers for request payload coercion."""
from typing import Any, Dict, Iterable

from api.shared.exceptions import ValidationError


def require_fields(payload: Dict[str, Any], fields: Iterable[str]) -> None:
    """Raise ValidationError naming every field that is absent or empty."""
    missing = [name for name in fields if payload.get(name) in (None, "")]
    if missing:
        raise ValidationError(
            "All required fields must be provided",
            {"missing": missing},
        )


def coerce_identifier(value: Any, field: str) -> int:
    """Coerce an identifier sent as int or numeric string into an int."""
    if isinstance(value, bool):
        raise ValidationError(f"'{field}' must be an integer", {"field": field})
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().lstrip("-").isdigit():
        return int(value.strip())
    raise ValidationError(f"'{field}' must be an integer", {"field": field})
