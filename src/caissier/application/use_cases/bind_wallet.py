"""
Bind Wallet use case.

Proves control of an Ethereum address by signature and binds it to
the caller's identity.
"""

from uuid import UUID

from caissier.application.dto.wallet_dtos import BindWalletResult
from caissier.domain.entities.wallet_binding import WalletBinding
from caissier.domain.exceptions import (
    DuplicateEntityError,
    EntityNotFoundError,
    ValidationError,
    WalletAlreadyBoundError,
)
from caissier.domain.repositories.i_user_repository import IUserRepository
from caissier.domain.repositories.i_wallet_binding_repository import (
    IWalletBindingRepository,
)
from caissier.domain.services.i_signature_verifier import ISignatureVerifier
from caissier.infrastructure.monitoring import metrics
from caissier.infrastructure.monitoring.logger import get_logger

logger = get_logger(__name__)

MAX_MESSAGE_LENGTH = 1024


class BindWallet:
    """
    Bind a signature-proven wallet address to a user.

    Business rules:
    - The address is whatever the signature recovers to; the client
      never names the address itself
    - The user's phone number is the binding key
    - An address bound to another user is a WalletAlreadyBoundError
    - Rebinding an address the user already holds returns the existing
      binding and writes nothing
    - The unique address column decides concurrent binds
    """

    def __init__(
        self,
        user_repository: IUserRepository,
        wallet_binding_repository: IWalletBindingRepository,
        signature_verifier: ISignatureVerifier,
    ):
        """
        Initialize use case with dependencies.

        Args:
            user_repository: Repository for user lookups
            wallet_binding_repository: Repository for bindings
            signature_verifier: Recovers signer address
        """
        self.user_repository = user_repository
        self.wallet_binding_repository = wallet_binding_repository
        self.signature_verifier = signature_verifier

    async def execute(
        self,
        user_id: UUID,
        message: str,
        signature: str,
    ) -> BindWalletResult:
        """
        Execute wallet binding.

        Args:
            user_id: Authenticated user
            message: Plain text the wallet signed
            signature: Hex encoded 65-byte signature

        Returns:
            BindWalletResult with the binding and created flag

        Raises:
            ValidationError: If message is empty or too long
            MalformedSignatureError: If signature cannot be decoded
            SignatureRecoveryError: If signature does not recover
            EntityNotFoundError: If user does not exist
            WalletAlreadyBoundError: If another user owns the address
        """
        if not message:
            raise ValidationError("message", "cannot be empty")
        if len(message) > MAX_MESSAGE_LENGTH:
            raise ValidationError(
                "message", f"must be at most {MAX_MESSAGE_LENGTH} characters"
            )

        # 1. Recover signer
        address = self.signature_verifier.recover_address(message, signature)

        # 2. Get binding key
        user = await self.user_repository.get_by_id(user_id)
        if not user:
            raise EntityNotFoundError(entity_type="User", entity_id=str(user_id))

        # 3. Existing binding
        existing = await self.wallet_binding_repository.get_by_address(address)
        if existing:
            return self._resolve_existing(existing, user.phone_number)

        # 4. Insert; the unique address settles races
        try:
            binding = await self.wallet_binding_repository.create(
                WalletBinding(address=address, phone_number=user.phone_number)
            )
        except DuplicateEntityError:
            existing = await self.wallet_binding_repository.get_by_address(address)
            if existing is None:
                raise
            return self._resolve_existing(existing, user.phone_number)

        metrics.wallet_bindings_total.labels(outcome="bound").inc()
        logger.info(
            "Wallet bound",
            extra={"user_id": str(user_id), "address": address},
        )
        return BindWalletResult(binding=binding, created=True)

    @staticmethod
    def _resolve_existing(
        existing: WalletBinding, phone_number: str
    ) -> BindWalletResult:
        if existing.phone_number != phone_number:
            metrics.wallet_bindings_total.labels(outcome="conflict").inc()
            raise WalletAlreadyBoundError(existing.address)

        metrics.wallet_bindings_total.labels(outcome="already_bound").inc()
        return BindWalletResult(binding=existing, created=False)
