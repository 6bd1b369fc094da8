"""Pattern catalog – named masking strategies and the text substitution primitive.

Every strategy is a regular expression selecting the characters that become
:data:`MASK_CHAR`.  Each match is replaced by a single mask character, so the
catalog patterns match exactly one character at a time.  Line breaks count
towards positions but are never masked themselves.
"""
from __future__ import annotations

import re
from enum import Enum
from typing import Final

from logmask.kernel.errors import UnknownStrategyError

__all__ = ["MASK_CHAR", "MaskingStrategy", "mask_text"]

MASK_CHAR: Final = "*"


class MaskingStrategy(str, Enum):
    """Closed set of predefined masking strategies."""

    ALL = "all"
    EMAIL = "email"
    DOCUMENT = "document"
    NAME = "name"
    DATE = "date"
    ADDRESS = "address"
    ZIP_CODE = "zip_code"
    NUMBER = "number"
    TELEPHONE = "telephone"
    PASSWORD = "password"

    @property
    def regex(self) -> str:
        return _REGEX[self]

    @property
    def pattern(self) -> re.Pattern[str]:
        return _COMPILED[self]

    @classmethod
    def coerce(cls, value: MaskingStrategy | str) -> MaskingStrategy:
        """Accept a member, its value, or its name (any case)."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip()
            try:
                return cls(key.lower())
            except ValueError:
                pass
            try:
                return cls[key.upper()]
            except KeyError:
                pass
        raise UnknownStrategyError(value)


# A digit followed, anywhere later, by at least two more digits.
_TRAILING_TWO_DIGITS = r"\d(?=(?:\D*\d){2})"

_REGEX: Final[dict[MaskingStrategy, str]] = {
    MaskingStrategy.ALL: r"\S",
    # local part after its first char | domain chars after the first label
    # char that still have a dot ahead (the last dot-segment stays visible)
    MaskingStrategy.EMAIL: r"(?<=[^@])[^@](?:(?=[^@]*@)|(?![^@]*@)(?=[^@]*\.))",
    MaskingStrategy.DOCUMENT: r"[^\n](?=.{3})",
    MaskingStrategy.NAME: r"(?<=.)[^\n](?=.*.{2}\Z)",
    MaskingStrategy.DATE: _TRAILING_TWO_DIGITS,
    MaskingStrategy.ADDRESS: r"[a-zA-Z0-9](?=(?:.*[a-zA-Z0-9]){3})",
    MaskingStrategy.ZIP_CODE: _TRAILING_TWO_DIGITS,
    MaskingStrategy.NUMBER: r"\d",
    MaskingStrategy.TELEPHONE: _TRAILING_TWO_DIGITS,
    MaskingStrategy.PASSWORD: r"(?<=.)[^\n]",
}

_COMPILED: Final[dict[MaskingStrategy, re.Pattern[str]]] = {
    strategy: re.compile(regex, re.ASCII | re.DOTALL) for strategy, regex in _REGEX.items()
}


def mask_text(text: str, pattern: re.Pattern[str]) -> str:
    """Replace every match of *pattern* in *text* with :data:`MASK_CHAR`.

    Empty or whitespace-only input yields ``""``.
    """
    if not text or text.isspace():
        return ""
    return pattern.sub(MASK_CHAR, text)
