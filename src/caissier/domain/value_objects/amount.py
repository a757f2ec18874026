"""
Integer token amounts and their human-readable form.

Amounts are whole numbers of the smallest unit (wei) and stay Python
ints end to end. Decimal is used only when formatting for display.
"""

from decimal import Decimal, localcontext

from caissier.domain.exceptions.base import ValidationError

WEI_PER_ETHER = 10**18

# uint256 max has 78 decimal digits
MAX_AMOUNT_DIGITS = 78


def parse_amount(raw: str, field: str = "amount") -> int:
    """
    Parse a non-negative decimal-digit string into an int.

    Args:
        raw: Amount in smallest units, e.g. "1000000000000000000"
        field: Field name used in the validation error

    Returns:
        Amount as int

    Raises:
        ValidationError: If the string is empty, signed, fractional or
            longer than a uint256
    """
    if not isinstance(raw, str) or not raw.isascii() or not raw.isdigit():
        raise ValidationError(field, "must be a non-negative integer string")

    if len(raw) > MAX_AMOUNT_DIGITS:
        raise ValidationError(field, "exceeds uint256 range")

    value = int(raw)
    if value >= 2**256:
        raise ValidationError(field, "exceeds uint256 range")
    return value


def wei_to_ether(wei: int) -> Decimal:
    """Convert wei to ether without going through float."""
    with localcontext() as ctx:
        ctx.prec = 100
        return Decimal(wei) / Decimal(WEI_PER_ETHER)


def format_ether(wei: int) -> str:
    """
    Format a wei amount as an ether string for display.

    Trailing zeros are stripped: 1500000000000000000 -> "1.5".
    """
    ether = wei_to_ether(wei)
    text = format(ether, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text or "0"
