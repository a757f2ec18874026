"""
Unit tests for WalletAddress value object.
"""

import pytest

from caissier.domain.exceptions import ValidationError
from caissier.domain.value_objects.wallet_address import WalletAddress

CHECKSUM = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"


class TestWalletAddress:
    """Unit tests for WalletAddress."""

    @pytest.mark.parametrize("raw", [CHECKSUM, CHECKSUM.lower(), "0x" + CHECKSUM[2:].upper()])
    def test_any_casing_normalizes_to_checksum(self, raw):
        """Test that lower/upper-case input becomes EIP-55 checksum form."""
        assert WalletAddress(raw).address == CHECKSUM

    def test_equal_addresses_compare_equal(self):
        """Test that different casings produce equal value objects."""
        assert WalletAddress(CHECKSUM.lower()) == WalletAddress(CHECKSUM)

    @pytest.mark.parametrize(
        "raw",
        [
            "",
            "f39Fd6e51aad88F6F4ce6aB8827279cffFb92266",
            "0x1234",
            "0x" + "g" * 40,
            # one letter's case flipped breaks the checksum
            "0xF39Fd6e51aad88F6F4ce6aB8827279cffFb92266",
        ],
    )
    def test_invalid_addresses_rejected(self, raw):
        """Test that malformed or bad-checksum input raises ValidationError."""
        with pytest.raises(ValidationError):
            WalletAddress(raw)
