"""
Get Payment use case.
"""

from uuid import UUID

from caissier.domain.entities.payment import Payment
from caissier.domain.exceptions import EntityNotFoundError
from caissier.domain.repositories.i_payment_repository import IPaymentRepository
from caissier.domain.value_objects.transaction_hash import TransactionHash


class GetPayment:
    """
    Read one of the caller's payments from storage.

    Another user's payment is reported as not found.
    """

    def __init__(self, payment_repository: IPaymentRepository):
        self.payment_repository = payment_repository

    async def execute(self, user_id: UUID, payment_id: UUID) -> Payment:
        payment = await self.payment_repository.get_by_id(payment_id)
        if payment is None or payment.user_id != user_id:
            raise EntityNotFoundError(entity_type="Payment", entity_id=str(payment_id))
        return payment

    async def execute_by_tx_hash(self, user_id: UUID, tx_hash: str) -> Payment:
        tx_hash = TransactionHash(tx_hash).value
        payment = await self.payment_repository.get_by_tx_hash(tx_hash)
        if payment is None or payment.user_id != user_id:
            raise EntityNotFoundError(entity_type="Payment", entity_id=tx_hash)
        return payment
