from __future__ import annotations

from typing import Optional

from ..core.exceptions import InvalidArgumentError, ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def _parse_int(value, field_name: str) -> int:
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        raise InvalidArgumentError(f"Invalid {field_name}: {value!r}")


def require_month(month) -> int:
    m = _parse_int(month, "month")
    if not 1 <= m <= 12:
        raise InvalidArgumentError(f"Invalid month: {month}")
    return m


def parse_year_month(
    year_s: Optional[str],
    month_s: Optional[str],
    *,
    default_year: int,
    default_month: int,
) -> tuple[int, int]:
    """Parse ``year``/``month`` query parameters, falling back to defaults.

    Rejects non-numeric values, years outside 4 digits and months outside 1-12.
    """
    year = _parse_int(year_s, "year") if year_s else int(default_year)
    month = _parse_int(month_s, "month") if month_s else int(default_month)

    if not 1000 <= year <= 9999:
        raise InvalidArgumentError(f"Invalid year: {year}")
    return year, require_month(month)
