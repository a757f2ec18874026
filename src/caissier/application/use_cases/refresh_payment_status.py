"""
Refresh Payment Status use case.
"""

from uuid import UUID

from caissier.application.use_cases.payment_confirmation import PaymentConfirmation
from caissier.domain.entities.payment import Payment, PaymentStatus
from caissier.domain.exceptions import EntityNotFoundError
from caissier.domain.repositories.i_payment_repository import IPaymentRepository
from caissier.domain.services.i_ledger_client import ILedgerClient
from caissier.infrastructure.monitoring import metrics
from caissier.infrastructure.monitoring.logger import get_logger

logger = get_logger(__name__)


class RefreshPaymentStatus:
    """
    Re-check a pending payment against the ledger.

    Business rules:
    - Confirmed, failed and cancelled payments are returned as stored
      without touching the ledger
    - Pending payments move to CONFIRMED or FAILED once the receipt
      allows it, otherwise they are returned unchanged
    - The update only applies if the row is still PENDING; a concurrent
      refresh that got there first wins
    """

    def __init__(
        self,
        payment_repository: IPaymentRepository,
        ledger_client: ILedgerClient,
        required_confirmations: int = 1,
    ):
        self.payment_repository = payment_repository
        self.confirmation = PaymentConfirmation(ledger_client, required_confirmations)

    async def execute(self, user_id: UUID, payment_id: UUID) -> Payment:
        """
        Execute status refresh.

        Raises:
            EntityNotFoundError: If payment does not exist or is not the user's
            LedgerUnavailableError: If the ledger cannot be reached (retryable)
        """
        # 1. Load owned payment
        payment = await self.payment_repository.get_by_id(payment_id)
        if payment is None or payment.user_id != user_id:
            raise EntityNotFoundError(entity_type="Payment", entity_id=str(payment_id))

        # 2. Final states never hit the ledger
        if not payment.is_pending:
            return payment

        # 3. Receipt
        receipt = await self.confirmation.fetch_receipt(payment.transaction_hash)
        if receipt is None:
            return payment

        status = await self.confirmation.resolve_status(receipt)
        if status == PaymentStatus.PENDING:
            return payment

        # 4. Transition and compare-and-set
        self.confirmation.apply(payment, status, receipt)
        updated = await self.payment_repository.update_status(
            payment, expected_status=PaymentStatus.PENDING
        )
        if not updated:
            current = await self.payment_repository.get_by_id(payment_id)
            if current is None:
                raise EntityNotFoundError(
                    entity_type="Payment", entity_id=str(payment_id)
                )
            return current

        metrics.payments_reconciled_total.labels(
            operation="refresh", status=payment.status.value
        ).inc()
        logger.info(
            "Payment status updated",
            extra={
                "payment_id": str(payment.id),
                "status": payment.status.value,
                "block_number": payment.block_number,
            },
        )
        return payment
