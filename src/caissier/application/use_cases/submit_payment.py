"""
Submit Payment use case.

Verifies a claimed payment against the ledger and records it.
CRITICAL: Idempotent per transaction hash.
"""

from uuid import UUID

from caissier.application.dto.payment_dtos import PaymentClaim, SubmitPaymentResult
from caissier.application.use_cases.payment_confirmation import PaymentConfirmation
from caissier.domain.entities.payment import Payment, PaymentStatus
from caissier.domain.exceptions import (
    ClaimMismatchError,
    DuplicateEntityError,
    NoWalletBoundError,
    TransactionNotFromOwnedWalletError,
    ValidationError,
)
from caissier.domain.repositories.i_payment_repository import IPaymentRepository
from caissier.domain.repositories.i_wallet_binding_repository import (
    IWalletBindingRepository,
)
from caissier.domain.services.i_ledger_client import ILedgerClient
from caissier.domain.value_objects.amount import parse_amount
from caissier.domain.value_objects.transaction_hash import TransactionHash
from caissier.domain.value_objects.wallet_address import WalletAddress
from caissier.infrastructure.monitoring import metrics
from caissier.infrastructure.monitoring.logger import get_logger

logger = get_logger(__name__)

MAX_DESCRIPTION_LENGTH = 500


class SubmitPayment:
    """
    Record a payment claim after verifying it on the ledger.

    Business rules:
    - The caller must have at least one bound wallet
    - One payment per transaction hash; resubmission returns the stored
      record unchanged, even if the new claim differs
    - Sender must be one of the caller's wallets
    - Recipient and value must equal the claim exactly
    - A wrong recipient is reported as a mismatch before the sender is checked
    - A reverted transaction is recorded as FAILED, not rejected
    - No receipt yet means PENDING; Refresh moves it on later

    Architecture:
    - Ledger is the single source of truth
    - The unique transaction_hash column settles concurrent submissions
    - Either a complete payment is persisted or nothing is
    """

    def __init__(
        self,
        wallet_binding_repository: IWalletBindingRepository,
        payment_repository: IPaymentRepository,
        ledger_client: ILedgerClient,
        required_confirmations: int = 1,
        default_currency: str = "ETH",
    ):
        """
        Initialize use case with dependencies.

        Args:
            wallet_binding_repository: Repository for the caller's wallets
            payment_repository: Repository for payments
            ledger_client: Ledger query client
            required_confirmations: Blocks needed before CONFIRMED
            default_currency: Currency tag when the claim has none
        """
        self.wallet_binding_repository = wallet_binding_repository
        self.payment_repository = payment_repository
        self.ledger_client = ledger_client
        self.confirmation = PaymentConfirmation(ledger_client, required_confirmations)
        self.default_currency = default_currency

    async def execute(self, user_id: UUID, claim: PaymentClaim) -> SubmitPaymentResult:
        """
        Execute payment submission.

        Args:
            user_id: Authenticated owner
            claim: Payment claim from the client

        Returns:
            SubmitPaymentResult; created is False for resubmissions

        Raises:
            ValidationError: If the claim is malformed
            NoWalletBoundError: If the owner has no wallet
            DuplicateEntityError: If another user already recorded the hash
            LedgerNotFoundError: If the ledger does not know the hash
            LedgerUnavailableError: If the ledger cannot be reached (retryable)
            TransactionNotFromOwnedWalletError: If sender is not the owner's
            ClaimMismatchError: If recipient or amount differ
        """
        # 1. Validate claim locally
        to_address = WalletAddress(claim.to_address).address
        amount = parse_amount(claim.amount)
        tx_hash = TransactionHash(claim.tx_hash).value
        currency = self._normalize_currency(claim.currency)
        description = self._normalize_description(claim.description)

        # 2. Owner's wallets
        wallets = await self.wallet_binding_repository.list_addresses_for_user(
            user_id
        )
        if not wallets:
            raise NoWalletBoundError(str(user_id))

        # 3. Idempotent resubmission
        existing = await self.payment_repository.get_by_tx_hash(tx_hash)
        if existing:
            return self._resubmission(existing, user_id)

        # 4. Ledger lookup
        transaction, is_pending = await self.ledger_client.get_transaction(tx_hash)
        receipt = None if is_pending else await self.confirmation.fetch_receipt(tx_hash)

        # 5. Claim must match ledger; recipient first
        if transaction.recipient != to_address:
            raise ClaimMismatchError(
                field="to",
                expected=to_address,
                actual=transaction.recipient or "contract creation",
            )

        if transaction.sender not in wallets:
            raise TransactionNotFromOwnedWalletError(transaction.sender)

        if transaction.value != amount:
            raise ClaimMismatchError(
                field="amount",
                expected=str(amount),
                actual=str(transaction.value),
            )

        # 6. Build record
        payment = Payment(
            user_id=user_id,
            from_address=transaction.sender,
            to_address=to_address,
            amount=amount,
            transaction_hash=tx_hash,
            currency=currency,
            description=description,
            gas_price=transaction.gas_price,
        )
        if receipt is not None:
            status = await self.confirmation.resolve_status(receipt)
            if status == PaymentStatus.PENDING:
                payment.block_number = receipt.block_number
                payment.gas_used = receipt.gas_used
            else:
                self.confirmation.apply(payment, status, receipt)

        # 7. Persist; a lost race resolves to the winner's record
        try:
            created = await self.payment_repository.create(payment)
        except DuplicateEntityError:
            existing = await self.payment_repository.get_by_tx_hash(tx_hash)
            if existing is None:
                raise
            logger.info(
                "Concurrent submission resolved to existing payment",
                extra={"tx_hash": tx_hash, "payment_id": str(existing.id)},
            )
            return self._resubmission(existing, user_id)

        metrics.payments_reconciled_total.labels(
            operation="submit", status=created.status.value
        ).inc()
        logger.info(
            "Payment recorded",
            extra={
                "payment_id": str(created.id),
                "user_id": str(user_id),
                "tx_hash": tx_hash,
                "status": created.status.value,
            },
        )
        return SubmitPaymentResult(payment=created, created=True)

    @staticmethod
    def _resubmission(existing: Payment, user_id: UUID) -> SubmitPaymentResult:
        if existing.user_id != user_id:
            raise DuplicateEntityError(
                "Payment", "transaction_hash", existing.transaction_hash
            )
        return SubmitPaymentResult(payment=existing, created=False)

    def _normalize_currency(self, currency: str | None) -> str:
        currency = (currency or self.default_currency).strip().upper()
        if not (currency.isascii() and currency.isalnum()) or len(currency) > 10:
            raise ValidationError("currency", "must be 1-10 letters or digits")
        return currency

    @staticmethod
    def _normalize_description(description: str | None) -> str | None:
        if description is None:
            return None
        description = description.strip()
        if len(description) > MAX_DESCRIPTION_LENGTH:
            raise ValidationError(
                "description",
                f"must be at most {MAX_DESCRIPTION_LENGTH} characters",
            )
        return description or None
