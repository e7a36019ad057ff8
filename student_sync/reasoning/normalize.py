"""Identifier normalization for CPF, INEP and NIS"""

import re
from dataclasses import dataclass
from typing import Optional

FIELD_CPF = "CPF"
FIELD_INEP = "INEP"
FIELD_NIS = "NIS"

# Fill order on the edit form
FIELD_ORDER = (FIELD_CPF, FIELD_INEP, FIELD_NIS)

# The target app stores all three identifiers as 11 digits
IDENTIFIER_LENGTH = 11

_NON_DIGITS = re.compile(r"\D")


@dataclass(frozen=True)
class ValidatedField:
    kind: str
    raw: str
    value: Optional[str] = None
    reason: str = ""

    @property
    def accepted(self):
        return self.value is not None


def only_digits(text):
    """Strip every non-digit character"""
    if not text:
        return ""
    return _NON_DIGITS.sub("", text)


def normalize_field(kind, raw) -> Optional[ValidatedField]:
    """
    Normalize a raw CSV value for one field kind.

    Returns None when the value is absent (None, empty or whitespace) so the caller
    leaves the field untouched. Otherwise strips non-digits, keeps the first 11 and
    accepts only when 11 digits are left.
    """
    if raw is None or not str(raw).strip():
        return None

    raw = str(raw)
    digits = only_digits(raw)[:IDENTIFIER_LENGTH]

    if len(digits) != IDENTIFIER_LENGTH:
        return ValidatedField(
            kind=kind,
            raw=raw,
            reason=(
                f'Invalid {kind}: "{raw}" -> "{digits}" '
                f"({len(digits)} digits, expected {IDENTIFIER_LENGTH})"
            ),
        )

    return ValidatedField(kind=kind, raw=raw, value=digits)
