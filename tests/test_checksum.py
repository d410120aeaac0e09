"""
Tests for CPF / CNPJ check digit validation.
"""
import pytest

from notification_lib.checksum import (
    CPF_WEIGHTS_FIRST,
    check_digit,
    is_valid_cnpj,
    is_valid_cpf,
    strip_separators,
)

VALID_CPF = "11144477735"
VALID_CNPJ = "11444777000161"


def _change_digit(value: str, position: int) -> str:
    digit = (int(value[position]) + 1) % 10
    return value[:position] + str(digit) + value[position + 1:]


class TestCheckDigit:
    """Test the modulo-11 digit computation."""

    def test_remainder_above_one(self):
        """Test that the digit is 11 - remainder when remainder >= 2."""
        # 1*10+1*9+1*8+4*7+4*6+4*5+7*4+7*3+7*2 = 162, 162 % 11 = 8
        assert check_digit([1, 1, 1, 4, 4, 4, 7, 7, 7], CPF_WEIGHTS_FIRST) == 3

    def test_remainder_below_two_gives_zero(self):
        """Test that remainders 0 and 1 both give digit 0."""
        assert check_digit([0] * 9, CPF_WEIGHTS_FIRST) == 0
        # 6*2 = 12, 12 % 11 = 1
        assert check_digit([0, 0, 0, 0, 0, 0, 0, 0, 6], CPF_WEIGHTS_FIRST) == 0

    def test_length_mismatch_raises(self):
        """Test that digits and weights must have the same length."""
        with pytest.raises(ValueError):
            check_digit([1, 2, 3], CPF_WEIGHTS_FIRST)


class TestStripSeparators:

    def test_strips_and_trims(self):
        """Test that separators and surrounding whitespace are removed."""
        assert strip_separators("  11.444.777/0001-61 ", "./-") == VALID_CNPJ


class TestCpf:
    """Test is_valid_cpf()."""

    def test_formatted_valid(self):
        """Test that the formatted reference CPF is valid."""
        assert is_valid_cpf("111.444.777-35") is True

    def test_bare_valid(self):
        """Test that the CPF without separators is valid."""
        assert is_valid_cpf(VALID_CPF) is True

    def test_wrong_check_digits(self):
        """Test that a wrong check digit is rejected."""
        assert is_valid_cpf("111.444.777-30") is False

    @pytest.mark.parametrize("position", range(len(VALID_CPF)))
    def test_any_single_digit_change_invalidates(self, position):
        """Test that changing any one digit invalidates the CPF."""
        assert is_valid_cpf(_change_digit(VALID_CPF, position)) is False

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_missing_is_invalid(self, value):
        """Test that None and blank values are invalid."""
        assert is_valid_cpf(value) is False

    @pytest.mark.parametrize("value", ["111.444.777-3", "111.444.777-355", "123"])
    def test_wrong_length_is_invalid(self, value):
        """Test that values without 11 digits are invalid."""
        assert is_valid_cpf(value) is False

    def test_letters_are_invalid(self):
        """Test that non-digit characters make the CPF invalid instead of raising."""
        assert is_valid_cpf("111.444.77A-35") is False

    def test_slash_is_not_a_cpf_separator(self):
        """Test that only '.' and '-' are stripped from CPFs."""
        assert is_valid_cpf("111.444.777/35") is False


class TestCnpj:
    """Test is_valid_cnpj()."""

    def test_formatted_valid(self):
        """Test that the formatted reference CNPJ is valid."""
        assert is_valid_cnpj("11.444.777/0001-61") is True

    def test_bare_valid(self):
        """Test that the CNPJ without separators is valid."""
        assert is_valid_cnpj(VALID_CNPJ) is True

    @pytest.mark.parametrize("position", range(len(VALID_CNPJ)))
    def test_any_single_digit_change_invalidates(self, position):
        """Test that changing any one digit invalidates the CNPJ."""
        assert is_valid_cnpj(_change_digit(VALID_CNPJ, position)) is False

    @pytest.mark.parametrize("value", [None, ""])
    def test_missing_is_invalid(self, value):
        """Test that None and empty values are invalid."""
        assert is_valid_cnpj(value) is False

    def test_blank_is_invalid(self):
        """Test that whitespace-only values fail the length check."""
        assert is_valid_cnpj("   ") is False

    def test_wrong_length_is_invalid(self):
        """Test that a CPF-length value is not a CNPJ."""
        assert is_valid_cnpj(VALID_CPF) is False

    def test_letters_are_invalid(self):
        """Test that non-digit characters make the CNPJ invalid."""
        assert is_valid_cnpj("11.444.777/000A-61") is False
