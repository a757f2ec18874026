"""
Unit tests for amount parsing and formatting.
"""

from decimal import Decimal

import pytest

from caissier.domain.exceptions import ValidationError
from caissier.domain.value_objects.amount import (
    format_ether,
    parse_amount,
    wei_to_ether,
)


class TestParseAmount:
    """Unit tests for parse_amount."""

    def test_parses_large_integer_exactly(self):
        """Test that 1e18 and uint256 max parse without precision loss."""
        assert parse_amount("1000000000000000000") == 10**18
        assert parse_amount(str(2**256 - 1)) == 2**256 - 1

    def test_zero_allowed(self):
        assert parse_amount("0") == 0

    @pytest.mark.parametrize(
        "raw", ["", "-1", "1.5", "1e18", " 1", "0x10", "١٢٣", str(2**256)]
    )
    def test_invalid_rejected(self, raw):
        """Test that signs, decimals, exponents, non-ASCII digits and overflow fail."""
        with pytest.raises(ValidationError):
            parse_amount(raw)

    def test_non_string_rejected(self):
        """Test that numbers must arrive as strings."""
        with pytest.raises(ValidationError):
            parse_amount(10**18)

    def test_field_name_in_error(self):
        with pytest.raises(ValidationError) as exc_info:
            parse_amount("x", field="value")
        assert exc_info.value.field == "value"


class TestFormatEther:
    """Unit tests for ether display helpers."""

    def test_wei_to_ether_is_exact(self):
        assert wei_to_ether(1) == Decimal("0.000000000000000001")

    @pytest.mark.parametrize(
        "wei,expected",
        [
            (0, "0"),
            (10**18, "1"),
            (1_500_000_000_000_000_000, "1.5"),
            (1, "0.000000000000000001"),
            (123 * 10**18, "123"),
        ],
    )
    def test_format_ether(self, wei, expected):
        assert format_ether(wei) == expected
