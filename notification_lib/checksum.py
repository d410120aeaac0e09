"""
Modulo-11 check digit validation for Brazilian taxpayer identifiers.

Both identifiers carry two trailing check digits. Each digit is computed
over the digits before it using a fixed weight vector:

    remainder = sum(digit * weight) % 11
    check = 0 if remainder < 2 else 11 - remainder

The second digit is computed over the base digits plus the first check
digit, so CPF uses weights 10..2 then 11..2 and CNPJ uses two
cyclic 2..9 vectors.

Example:
    >>> is_valid_cpf("111.444.777-35")
    True
    >>> is_valid_cnpj("11.444.777/0001-61")
    True
"""

from typing import Optional, Sequence

CPF_LENGTH = 11
CPF_WEIGHTS_FIRST = (10, 9, 8, 7, 6, 5, 4, 3, 2)
CPF_WEIGHTS_SECOND = (11, 10, 9, 8, 7, 6, 5, 4, 3, 2)
CPF_SEPARATORS = ".-"

CNPJ_LENGTH = 14
CNPJ_WEIGHTS_FIRST = (5, 4, 3, 2, 9, 8, 7, 6, 5, 4, 3, 2)
CNPJ_WEIGHTS_SECOND = (6, 5, 4, 3, 2, 9, 8, 7, 6, 5, 4, 3, 2)
CNPJ_SEPARATORS = ".-/"


def strip_separators(value: str, separators: str) -> str:
    """Trim the value and drop every separator character."""
    return value.strip().translate({ord(c): None for c in separators})


def check_digit(digits: Sequence[int], weights: Sequence[int]) -> int:
    """
    Compute one modulo-11 check digit.

    Args:
        digits: Digits the check covers (same length as weights)
        weights: Per-position multipliers

    Returns:
        Check digit in range 0-9
    """
    if len(digits) != len(weights):
        raise ValueError(
            f"Expected {len(weights)} digits, got {len(digits)}"
        )
    remainder = sum(d * w for d, w in zip(digits, weights)) % 11
    return 0 if remainder < 2 else 11 - remainder


def _has_valid_check_digits(
    normalized: str,
    length: int,
    first_weights: Sequence[int],
    second_weights: Sequence[int],
) -> bool:
    # str.isdigit() accepts superscripts and other unicode digits
    if len(normalized) != length or not all(c in "0123456789" for c in normalized):
        return False

    digits = [int(c) for c in normalized]
    base = digits[: len(first_weights)]

    first = check_digit(base, first_weights)
    second = check_digit(base + [first], second_weights)

    return digits[-2:] == [first, second]


def is_valid_cpf(value: Optional[str]) -> bool:
    """
    Validate an 11-digit CPF (individual taxpayer ID).

    Accepts formatted ("111.444.777-35") or bare ("11144477735") input.
    None, blank strings, wrong lengths and non-digit characters are invalid.
    """
    if value is None or not value.strip():
        return False

    normalized = strip_separators(value, CPF_SEPARATORS)
    return _has_valid_check_digits(
        normalized, CPF_LENGTH, CPF_WEIGHTS_FIRST, CPF_WEIGHTS_SECOND
    )


def is_valid_cnpj(value: Optional[str]) -> bool:
    """
    Validate a 14-digit CNPJ (company taxpayer ID).

    Accepts formatted ("11.444.777/0001-61") or bare input.
    """
    if not value:
        return False

    normalized = strip_separators(value, CNPJ_SEPARATORS)
    return _has_valid_check_digits(
        normalized, CNPJ_LENGTH, CNPJ_WEIGHTS_FIRST, CNPJ_WEIGHTS_SECOND
    )
