import re
from typing import Any, Optional


_WHITESPACE_RE = re.compile(r"\s+")


def normalize_text(value: Optional[str]) -> str:
    if value is None:
        return ""
    cleaned = _WHITESPACE_RE.sub(" ", str(value)).strip()
    return cleaned.casefold()


def squash(value: Optional[str]) -> str:
    """Casefold and drop every whitespace character ("104 Street NW" -> "104streetnw")."""
    if value is None:
        return ""
    return _WHITESPACE_RE.sub("", str(value)).casefold()


def to_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def to_int(value: Any) -> int:
    """Parse an integer cell; malformed or empty input becomes 0."""
    if value is None:
        return 0
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        return 0


def to_float(value: Any) -> float:
    """Parse a decimal cell; malformed or empty input becomes 0.0."""
    if value is None:
        return 0.0
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    try:
        return float(str(value).strip())
    except ValueError:
        return 0.0


def to_flag(value: Any) -> bool:
    return to_text(value).strip().upper() == "Y"
