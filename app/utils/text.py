from app.core.exceptions import ValidationError


def required_text(value: str | None, field: str) -> str:
    """Strip `value`; blank or whitespace-only input is a ValidationError."""
    cleaned = (value or "").strip()
    if not cleaned:
        raise ValidationError(f"{field} is required")
    return cleaned
