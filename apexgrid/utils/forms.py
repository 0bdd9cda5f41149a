"""
Petits helpers de lecture/validation des champs de formulaire.
Les valeurs arrivent en str (form-encoded) ou déjà typées (seed, tests).

Tous les entiers sont bornés à INT_MAX : au-delà, SQLite ne sait plus les stocker.
"""

import re
from datetime import date, datetime
from typing import Any, Optional

from pydantic import EmailStr, TypeAdapter, ValidationError as PydanticValidationError

_email_adapter = TypeAdapter(EmailStr)

# Plus grand INTEGER SQLite (64 bits signé)
INT_MAX = 2**63 - 1

_LEADING_INT = re.compile(r"[+-]?\d+")


def clean(value: Any) -> Optional[str]:
    """Trim ; chaîne vide ou absente -> None."""
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def as_int(value: Any, default: int = 0) -> int:
    """Conversion tolérante : tout ce qui n'est pas un entier stockable vaut `default`."""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        number = value
    else:
        text = clean(value)
        if text is None:
            return default
        try:
            number = int(text)
        except ValueError:
            return default
    if abs(number) > INT_MAX:
        return default
    return number


def leading_int(value: Any) -> int:
    """
    Entier en tête de chaîne, comme un cast (int) : "12abc" -> 12, "5.5" -> 5,
    "abc" -> 0. Saturé à +/- INT_MAX.
    """
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        number = value
    elif isinstance(value, float):
        number = int(value)
    else:
        match = _LEADING_INT.match(clean(value) or "")
        if match is None:
            return 0
        number = int(match.group())
    return max(-INT_MAX, min(INT_MAX, number))


def parse_non_negative(value: Any) -> Optional[int]:
    """
    Entier dans [0, INT_MAX] ou None si invalide.
    Pour une chaîne, seuls les chiffres sont acceptés ("12", pas "+12" ni "1.5").
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        number = value
    else:
        text = clean(value)
        if text is None or not (text.isascii() and text.isdigit()):
            return None
        number = int(text)
    if not 0 <= number <= INT_MAX:
        return None
    return number


def parse_iso_date(value: Any) -> Optional[date]:
    """YYYY-MM-DD strict : la date doit exister et se réécrire à l'identique."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = clean(value)
    if text is None:
        return None
    try:
        parsed = datetime.strptime(text, "%Y-%m-%d").date()
    except ValueError:
        return None
    if parsed.isoformat() != text:
        return None
    return parsed


def is_valid_email(value: Optional[str]) -> bool:
    if not value:
        return False
    try:
        _email_adapter.validate_python(value)
    except PydanticValidationError:
        return False
    return True


def clamp_non_negative(value: Any) -> int:
    return max(0, leading_int(value))
