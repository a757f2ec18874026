"""
Wallet API schemas.
"""

from typing import List

from pydantic import BaseModel, Field


class BindWalletRequest(BaseModel):
    """Proof of wallet ownership: a message and its personal-sign signature."""

    message: str = Field(..., description="Message that was signed")
    signature: str = Field(
        ...,
        description="65-byte signature, hex encoded (0x prefix optional)",
    )


class BindWalletResponse(BaseModel):
    address: str = Field(..., description="Recovered checksum address")


class WalletAddressesResponse(BaseModel):
    addresses: List[str] = Field(default_factory=list)


class WalletBalanceResponse(BaseModel):
    """Balance of a bound wallet."""

    address: str = Field(..., description="Checksum address")
    balance_wei: str = Field(..., description="Balance in wei (decimal digits)")
    balance_ether: str = Field(..., description="Balance in ether, display only")
