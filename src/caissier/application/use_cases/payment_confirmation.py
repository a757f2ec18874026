"""
Receipt lookup and confirmation-depth rules shared by payment use cases.
"""

from typing import Optional

from caissier.domain.entities.payment import Payment, PaymentStatus
from caissier.domain.exceptions import LedgerNotFoundError
from caissier.domain.services.i_ledger_client import ILedgerClient, LedgerReceipt


class PaymentConfirmation:
    """
    Decides what a receipt means for a payment.

    - No receipt: still pending
    - Reverted receipt: failed
    - Successful receipt with enough blocks on top: confirmed
    - Successful receipt without enough blocks yet: pending
    """

    def __init__(self, ledger_client: ILedgerClient, required_confirmations: int = 1):
        """
        Args:
            ledger_client: Ledger to query
            required_confirmations: Blocks, inclusive of the receipt's own
                block, before a success counts as confirmed
        """
        if required_confirmations < 1:
            raise ValueError("required_confirmations must be at least 1")
        self.ledger_client = ledger_client
        self.required_confirmations = required_confirmations

    async def fetch_receipt(self, tx_hash: str) -> Optional[LedgerReceipt]:
        """Get receipt, or None if the transaction is not mined yet."""
        try:
            return await self.ledger_client.get_receipt(tx_hash)
        except LedgerNotFoundError:
            return None

    async def resolve_status(self, receipt: LedgerReceipt) -> PaymentStatus:
        if not receipt.succeeded:
            return PaymentStatus.FAILED

        if self.required_confirmations == 1:
            return PaymentStatus.CONFIRMED

        height = await self.ledger_client.get_block_number()
        confirmations = height - receipt.block_number + 1
        if confirmations >= self.required_confirmations:
            return PaymentStatus.CONFIRMED
        return PaymentStatus.PENDING

    @staticmethod
    def apply(payment: Payment, status: PaymentStatus, receipt: LedgerReceipt) -> None:
        """Move a pending payment to a final status from its receipt."""
        if status == PaymentStatus.CONFIRMED:
            payment.confirm(
                block_number=receipt.block_number,
                gas_used=receipt.gas_used,
                gas_price=receipt.effective_gas_price,
            )
        elif status == PaymentStatus.FAILED:
            payment.fail(
                block_number=receipt.block_number,
                gas_used=receipt.gas_used,
                gas_price=receipt.effective_gas_price,
            )
