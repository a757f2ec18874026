"""
Ledger client interface and the ledger records it returns.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class LedgerTransaction:
    """
    Transaction as reported by the node.

    All quantities are ints; block_number is None while pending.
    """

    hash: str
    sender: str
    recipient: Optional[str]
    value: int
    gas: int
    gas_price: Optional[int]
    nonce: int
    block_number: Optional[int]


@dataclass(frozen=True)
class LedgerReceipt:
    """Execution outcome of a mined transaction."""

    transaction_hash: str
    succeeded: bool
    block_number: int
    gas_used: int
    effective_gas_price: Optional[int]


class ILedgerClient(ABC):
    """
    Read-only query facade over an Ethereum node.

    Must be closed explicitly with close().
    """

    @abstractmethod
    async def get_balance(self, address: str) -> int:
        """
        Get account balance in wei at the latest block.

        Raises:
            LedgerUnavailableError: If the node cannot be reached
        """

    @abstractmethod
    async def get_transaction(
        self, tx_hash: str
    ) -> tuple[LedgerTransaction, bool]:
        """
        Get a transaction by hash.

        Returns:
            (transaction, is_pending); pending means known to the node
            but not yet mined

        Raises:
            LedgerNotFoundError: If the node does not know the hash
            LedgerUnavailableError: If the node cannot be reached
        """

    @abstractmethod
    async def get_receipt(self, tx_hash: str) -> LedgerReceipt:
        """
        Get the receipt of a mined transaction.

        Raises:
            LedgerNotFoundError: If no receipt exists (yet)
            LedgerUnavailableError: If the node cannot be reached
        """

    @abstractmethod
    async def get_block_number(self) -> int:
        """Get current chain height."""

    @abstractmethod
    async def estimate_gas(
        self,
        from_address: str,
        to_address: str,
        value: int = 0,
        data: Optional[str] = None,
    ) -> int:
        """
        Estimate gas for a call.

        Raises:
            LedgerRpcError: If the node rejects the call (e.g. revert)
            LedgerUnavailableError: If the node cannot be reached
        """

    @abstractmethod
    async def gas_price(self) -> int:
        """Get the node's suggested gas price in wei."""

    @abstractmethod
    async def close(self) -> None:
        """Release pooled connections."""
