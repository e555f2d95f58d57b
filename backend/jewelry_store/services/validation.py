"""Field checks shared by the product and news writers.

Each helper either returns the normalized value or raises ValidationError
naming the offending field.
"""
from decimal import Decimal, InvalidOperation
from typing import Any, Optional, Sequence

from jewelry_store.core.errors import ValidationError

MAX_PRICE = Decimal("100000000")
# String(255) columns: product name, news title
MAX_TITLE_LENGTH = 255


def is_missing(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def required_text(
    value: Any, field: str, label: Optional[str] = None, max_length: Optional[int] = None
) -> str:
    text = value.strip() if isinstance(value, str) else ""
    if not text:
        raise ValidationError(field, f"{label or field} cannot be empty")
    if max_length is not None and len(text) > max_length:
        raise ValidationError(field, f"{label or field} must be at most {max_length} characters")
    return text


def optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def choice(value: Any, allowed: Sequence[str], field: str) -> str:
    text = value.strip() if isinstance(value, str) else ""
    if text not in allowed:
        raise ValidationError(field, f'Invalid {field}: "{value}". Must be one of: {", ".join(allowed)}')
    return text


def price(value: Any, field: str) -> Decimal:
    try:
        amount = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise ValidationError(field, f"{field} must be a valid non-negative number")
    if not amount.is_finite() or amount < 0:
        raise ValidationError(field, f"{field} must be a valid non-negative number")
    # Numeric(10, 2) column
    if amount >= MAX_PRICE:
        raise ValidationError(field, f"{field} must be below {MAX_PRICE}")
    return amount.quantize(Decimal("0.01"))


def integer(value: Any, field: str) -> int:
    if isinstance(value, bool):
        raise ValidationError(field, f"{field} must be an integer")
    try:
        return int(str(value).strip())
    except ValueError:
        raise ValidationError(field, f"{field} must be an integer")


def image_index(value: Any, image_count: int, field: str = "mainImageIndex") -> int:
    index = integer(value, field)
    if index < 0 or index >= image_count:
        raise ValidationError(field, f"Main image index must be between 0 and {image_count - 1}")
    return index


def expected_version(value: Any) -> Optional[int]:
    if is_missing(value):
        return None
    version = integer(value, "version")
    if version < 0:
        raise ValidationError("version", "version must be a non-negative integer")
    return version


def flag(value: Any) -> bool:
    """Form booleans arrive as "true"/"false" strings."""
    if isinstance(value, bool):
        return value
    return str(value or "").strip().lower() in ("true", "1", "yes", "on")
