"""
Pure predicates behind the notification rules.

Every function here answers a yes/no question about a single value and
has no side effects. The rule evaluator decides which answer means
"notify".
"""

import re
from collections.abc import Sized
from typing import Any, Iterable, Optional

EMAIL_PATTERN = re.compile(r"^\w+([-+.']\w+)*@\w+([-.]\w+)*\.\w+([-.]\w+)*$")
URL_PATTERN = re.compile(
    r"^(http:\/\/www\.|https:\/\/www\.|http:\/\/|https:\/\/)"
    r"[a-z0-9]+([\-\.]{1}[a-z0-9]+)*\.[a-z]{2,5}(:[0-9]{1,5})?(\/.*)?$"
)

_HEX_GUID = re.compile(r"^[0-9a-fA-F]{32}$")
_HYPHENATED_GUID = re.compile(
    r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$"
)
_GUID_BRACKETS = {"{": "}", "(": ")"}
# Hex-fields form; each field may omit leading zeros
_HEX_FIELDS_GUID = re.compile(
    r"^\{0[xX][0-9a-fA-F]{1,8},0[xX][0-9a-fA-F]{1,4},0[xX][0-9a-fA-F]{1,4},"
    r"\{0[xX][0-9a-fA-F]{1,2}(?:,0[xX][0-9a-fA-F]{1,2}){7}\}\}$"
)

_MISSING = object()


# --- Strings ----------------------------------------------------------------

def is_null_or_empty(value: Optional[str]) -> bool:
    return value is None or value == ""


def is_null_or_white_space(value: Optional[str]) -> bool:
    return value is None or value.strip() == ""


def length_below(value: Optional[str], minimum: int) -> bool:
    """True when a non-empty value is shorter than minimum."""
    return not is_null_or_empty(value) and len(value) < minimum


def length_above(value: Optional[str], maximum: int) -> bool:
    """True when a non-empty value is longer than maximum."""
    return not is_null_or_empty(value) and len(value) > maximum


def length_differs(value: Optional[str], length: int) -> bool:
    """True when a non-empty value does not have exactly length characters."""
    return not is_null_or_empty(value) and len(value) != length


def length_outside(value: Optional[str], minimum: int, maximum: int) -> bool:
    """
    True when the value is missing, blank, or its length is outside
    [minimum, maximum].

    Unlike the other length predicates, missing values count as invalid.
    """
    if is_null_or_white_space(value):
        return True
    return len(value) < minimum or len(value) > maximum


def matches(value: str, pattern) -> bool:
    """Match value against a compiled pattern or a pattern string."""
    if isinstance(pattern, str):
        pattern = re.compile(pattern)
    return pattern.match(value) is not None


def is_email(value: str) -> bool:
    return matches(value, EMAIL_PATTERN)


def is_url(value: str) -> bool:
    return matches(value, URL_PATTERN)


def contains(value: str, text: str) -> bool:
    return text in value


def _simple_upper(char: str) -> str:
    # Characters whose uppercase is longer than one character ("ß" -> "SS")
    # compare as themselves.
    upper = char.upper()
    return upper if len(upper) == 1 else char


def equals_ignore_case(value: Any, other: Any) -> bool:
    """
    Equality that ignores case when both sides are strings.

    Strings compare character by character after one-to-one uppercasing,
    so "straße" and "STRASSE" differ. Everything else (numbers, decimals,
    dates) compares exactly.
    """
    if isinstance(value, str) and isinstance(other, str):
        return len(value) == len(other) and all(
            _simple_upper(a) == _simple_upper(b) for a, b in zip(value, other)
        )
    return value == other


def is_guid(value: Optional[str]) -> bool:
    """
    Check that value is a GUID string.

    Accepts 32 hex digits, the hyphenated 8-4-4-4-12 form, the hyphenated
    form wrapped in braces or parentheses, and the hex-fields form
    {0x3f2504e0,0x4f89,0x11d3,{0x9a,0x0c,0x03,0x05,0xe8,0x2c,0x33,0x01}},
    in which whitespace is ignored.
    """
    if not isinstance(value, str):
        return False

    if _HEX_FIELDS_GUID.match("".join(value.split())):
        return True

    candidate = value.strip()
    if candidate[:1] in _GUID_BRACKETS:
        if candidate[-1:] != _GUID_BRACKETS[candidate[0]]:
            return False
        candidate = candidate[1:-1]
        if not _HYPHENATED_GUID.match(candidate):
            return False
    elif not (_HYPHENATED_GUID.match(candidate) or _HEX_GUID.match(candidate)):
        return False

    return True


# --- Ordered values (int, float, Decimal, date, datetime) -------------------
#
# None never satisfies an ordering comparison.

def greater_or_equal(value: Any, threshold: Any) -> bool:
    return value is not None and value >= threshold


def lower_or_equal(value: Any, threshold: Any) -> bool:
    return value is not None and value <= threshold


def outside_closed_range(value: Any, low: Any, high: Any) -> bool:
    """True when value < low or value > high."""
    return value is not None and (value < low or value > high)


def inside_open_range(value: Any, low: Any, high: Any) -> bool:
    """True when low < value < high. Both bounds are excluded."""
    return value is not None and low < value < high


# --- Collections ------------------------------------------------------------

def is_null_or_empty_collection(value: Optional[Iterable]) -> bool:
    if value is None:
        return True
    if isinstance(value, Sized):
        return len(value) == 0
    # Generators and other one-shot iterables
    return next(iter(value), _MISSING) is _MISSING

