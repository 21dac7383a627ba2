import math
import re

EMAIL_PATTERN = re.compile(r"\S+@\S+\.\S+")


def parse_optional_float(value: str | float | int | None) -> float | None:
    """
    Parse a free-form numeric filter value.

    Blank, unparseable, NaN or infinite input yields None so that callers can treat it
    as "no constraint" rather than an error.

    Example:
        parse_optional_float(" 5000000 ") -> 5000000.0
        parse_optional_float("5m") -> None
    """
    if value is None:
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = value.strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def is_valid_email(email: str) -> bool:
    """Loose address check, same rule the agent form applies before submitting."""
    return bool(EMAIL_PATTERN.search(email or ""))


def mask_token(token: str | None) -> str:
    """
    Mask a bearer token for safe logging.
    Example: 'eyJhbGciOiJIUzI1NiJ9.abc' -> 'eyJh***'
    """
    if not token:
        return "<none>"
    if len(token) <= 8:
        return "***"
    return f"{token[:4]}***"
