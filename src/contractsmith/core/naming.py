from __future__ import annotations

import re
import unicodedata
from typing import Union

from contractsmith.core.errors import NamingError, OptionsError

_COMBINING_MARKS = re.compile("[\u0300-\u036f]")
_LEADING_INVALID = re.compile(r"^[^a-zA-Z_]+")
_INNER_INVALID = re.compile(r"[^A-Za-z0-9_]+(.?)")
_DIGITS_ONLY = re.compile(r"^\d+$")

UINT_MAX_VALUES = {
    "u8": 2**8 - 1,
    "u16": 2**16 - 1,
    "u32": 2**32 - 1,
    "u64": 2**64 - 1,
    "u128": 2**128 - 1,
    "u256": 2**256 - 1,
}


def to_identifier(value: str, capitalize: bool = False) -> str:
    """
    Convert free text into a Rust identifier.

    Accents are stripped, leading characters that cannot start an identifier are
    dropped, and every run of invalid characters is removed while upper-casing the
    character that follows it ("my token" -> "myToken").

    Raises
    ------
    NamingError
        If nothing usable remains.
    """
    result = _COMBINING_MARKS.sub("", unicodedata.normalize("NFD", value))
    result = _LEADING_INVALID.sub("", result)
    if capitalize and result:
        result = result[0].upper() + result[1:]
    result = _INNER_INVALID.sub(lambda m: m.group(1).upper(), result)

    if not result:
        raise NamingError(
            {"name": "Identifier is empty or does not have valid characters"}
        )
    return result


def escape_string(value: str) -> str:
    """Escape backslashes and double quotes for use inside a string literal."""
    return re.sub(r'(\\|")', r"\\\1", value)


def to_uint(value: Union[int, str], field: str, uint_type: str) -> int:
    """Check that ``value`` is a valid unsigned literal for ``uint_type`` and return it."""
    if uint_type not in UINT_MAX_VALUES:
        raise ValueError(f"Unknown unsigned integer type: {uint_type}")
    as_str = str(value)
    if not _DIGITS_ONLY.match(as_str):
        raise OptionsError({field: "Not a valid number"})
    number = int(as_str)
    if number > UINT_MAX_VALUES[uint_type]:
        raise OptionsError({field: f"Value is greater than {uint_type} max value"})
    return number
