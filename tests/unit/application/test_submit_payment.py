"""
Unit tests for SubmitPayment use case.

The ledger is the scripted FakeLedgerClient; repositories are AsyncMocks.
"""

from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from caissier.application.dto.payment_dtos import PaymentClaim
from caissier.application.use_cases.submit_payment import SubmitPayment
from caissier.domain.entities.payment import Payment, PaymentStatus
from caissier.domain.exceptions import (
    ClaimMismatchError,
    DuplicateEntityError,
    LedgerNotFoundError,
    LedgerUnavailableError,
    NoWalletBoundError,
    TransactionNotFromOwnedWalletError,
    ValidationError,
)
from tests.helpers.fake_ledger import FakeLedgerClient

OWNER_WALLET = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"
MERCHANT = "0x70997970C51812dc3A010C7d01b50e0d17dc79C8"
STRANGER = "0x3C44CdDdB6a900fa2b585dd299e03d12FA4293BC"
TX_HASH = "0x" + "ab" * 32
ONE_ETHER = "1000000000000000000"


def make_claim(**overrides) -> PaymentClaim:
    data = dict(to_address=MERCHANT, amount=ONE_ETHER, tx_hash=TX_HASH)
    data.update(overrides)
    return PaymentClaim(**data)


class TestSubmitPayment:
    """Unit tests for SubmitPayment use case."""

    def setup_method(self):
        self.user_id = uuid4()
        self.ledger = FakeLedgerClient()
        self.binding_repo = AsyncMock()
        self.binding_repo.list_addresses_for_user.return_value = [OWNER_WALLET]
        self.payment_repo = AsyncMock()
        self.payment_repo.get_by_tx_hash.return_value = None
        self.payment_repo.create.side_effect = lambda payment: payment

    def make_use_case(self, required_confirmations: int = 1) -> SubmitPayment:
        return SubmitPayment(
            wallet_binding_repository=self.binding_repo,
            payment_repository=self.payment_repo,
            ledger_client=self.ledger,
            required_confirmations=required_confirmations,
        )

    # ============================================================
    # Success tests
    # ============================================================

    async def test_confirmed_payment_recorded(self):
        """Test that a matching successful transaction is confirmed."""
        self.ledger.add_transaction(TX_HASH, OWNER_WALLET, MERCHANT, 10**18)

        result = await self.make_use_case().execute(self.user_id, make_claim())

        payment = result.payment
        assert result.created is True
        assert payment.status == PaymentStatus.CONFIRMED
        assert payment.amount == 10**18
        assert payment.from_address == OWNER_WALLET
        assert payment.block_number == 90
        assert payment.gas_used == 21000
        assert payment.confirmed_at is not None
        self.payment_repo.create.assert_awaited_once()

    async def test_reverted_transaction_recorded_as_failed(self):
        """Test that a reverted receipt is recorded, not rejected."""
        self.ledger.add_transaction(
            TX_HASH, OWNER_WALLET, MERCHANT, 10**18, succeeded=False
        )

        result = await self.make_use_case().execute(self.user_id, make_claim())

        assert result.payment.status == PaymentStatus.FAILED
        assert result.payment.confirmed_at is None

    async def test_mempool_transaction_recorded_as_pending(self):
        """Test that an unmined transaction is deferred, not failed."""
        self.ledger.add_transaction(
            TX_HASH, OWNER_WALLET, MERCHANT, 10**18, block_number=None
        )

        result = await self.make_use_case().execute(self.user_id, make_claim())

        assert result.payment.status == PaymentStatus.PENDING
        assert self.ledger.call_count("get_receipt") == 0

    async def test_mined_without_receipt_is_pending(self):
        self.ledger.add_transaction(
            TX_HASH, OWNER_WALLET, MERCHANT, 10**18, succeeded=None
        )

        result = await self.make_use_case().execute(self.user_id, make_claim())

        assert result.payment.status == PaymentStatus.PENDING

    async def test_insufficient_depth_is_pending(self):
        """Test that a shallow receipt stays pending with execution data."""
        self.ledger.add_transaction(
            TX_HASH, OWNER_WALLET, MERCHANT, 10**18, block_number=95
        )
        self.ledger.height = 100  # 6 blocks including its own

        result = await self.make_use_case(required_confirmations=12).execute(
            self.user_id, make_claim()
        )

        assert result.payment.status == PaymentStatus.PENDING
        assert result.payment.block_number == 95

    async def test_sufficient_depth_is_confirmed(self):
        self.ledger.add_transaction(
            TX_HASH, OWNER_WALLET, MERCHANT, 10**18, block_number=89
        )
        self.ledger.height = 100  # exactly 12 blocks

        result = await self.make_use_case(required_confirmations=12).execute(
            self.user_id, make_claim()
        )

        assert result.payment.status == PaymentStatus.CONFIRMED

    async def test_single_confirmation_skips_height_query(self):
        self.ledger.add_transaction(TX_HASH, OWNER_WALLET, MERCHANT, 10**18)

        await self.make_use_case().execute(self.user_id, make_claim())

        assert self.ledger.call_count("get_block_number") == 0

    async def test_claim_fields_normalized(self):
        """Test that lowercase address/hash input and currency are normalized."""
        self.ledger.add_transaction(TX_HASH, OWNER_WALLET, MERCHANT, 10**18)

        result = await self.make_use_case().execute(
            self.user_id,
            make_claim(
                to_address=MERCHANT.lower(),
                tx_hash=TX_HASH.upper().replace("0X", "0x"),
                currency="eth",
                description="  invoice 42  ",
            ),
        )

        assert result.payment.to_address == MERCHANT
        assert result.payment.transaction_hash == TX_HASH
        assert result.payment.currency == "ETH"
        assert result.payment.description == "invoice 42"

    # ============================================================
    # Idempotency
    # ============================================================

    async def test_resubmission_returns_stored_record_without_ledger(self):
        """Test that a known hash returns the stored payment unchanged."""
        stored = Payment(
            user_id=self.user_id,
            from_address=OWNER_WALLET,
            to_address=MERCHANT,
            amount=10**18,
            transaction_hash=TX_HASH,
            status=PaymentStatus.CONFIRMED,
        )
        self.payment_repo.get_by_tx_hash.return_value = stored

        result = await self.make_use_case().execute(
            self.user_id, make_claim(amount="999999999999999999")
        )

        assert result.created is False
        assert result.payment is stored
        assert self.ledger.call_count() == 0
        self.payment_repo.create.assert_not_awaited()

    async def test_hash_recorded_by_other_user(self):
        stored = Payment(
            user_id=uuid4(),
            from_address=STRANGER,
            to_address=MERCHANT,
            amount=10**18,
            transaction_hash=TX_HASH,
        )
        self.payment_repo.get_by_tx_hash.return_value = stored

        with pytest.raises(DuplicateEntityError):
            await self.make_use_case().execute(self.user_id, make_claim())

    async def test_concurrent_insert_resolves_to_winner(self):
        """Test that a unique violation on insert returns the winning row."""
        self.ledger.add_transaction(TX_HASH, OWNER_WALLET, MERCHANT, 10**18)
        winner = Payment(
            user_id=self.user_id,
            from_address=OWNER_WALLET,
            to_address=MERCHANT,
            amount=10**18,
            transaction_hash=TX_HASH,
            status=PaymentStatus.CONFIRMED,
        )
        self.payment_repo.get_by_tx_hash.side_effect = [None, winner]
        self.payment_repo.create.side_effect = DuplicateEntityError(
            "Payment", "transaction_hash", TX_HASH
        )

        result = await self.make_use_case().execute(self.user_id, make_claim())

        assert result.created is False
        assert result.payment.id == winner.id

    # ============================================================
    # Rejections
    # ============================================================

    async def test_no_wallet_bound(self):
        self.binding_repo.list_addresses_for_user.return_value = []

        with pytest.raises(NoWalletBoundError):
            await self.make_use_case().execute(self.user_id, make_claim())
        assert self.ledger.call_count() == 0

    async def test_sender_not_owned(self):
        self.ledger.add_transaction(TX_HASH, STRANGER, MERCHANT, 10**18)

        with pytest.raises(TransactionNotFromOwnedWalletError) as exc_info:
            await self.make_use_case().execute(self.user_id, make_claim())

        assert isinstance(exc_info.value, ClaimMismatchError)
        self.payment_repo.create.assert_not_awaited()

    @pytest.mark.parametrize(
        "sender,amount",
        [(OWNER_WALLET, 10**18), (STRANGER, 10**18), (OWNER_WALLET, 5)],
    )
    async def test_wrong_recipient_always_mismatch(self, sender, amount):
        """Test that a recipient mismatch fails whatever sender and amount."""
        self.ledger.add_transaction(TX_HASH, sender, STRANGER, amount)

        with pytest.raises(ClaimMismatchError) as exc_info:
            await self.make_use_case().execute(self.user_id, make_claim())

        assert type(exc_info.value) is ClaimMismatchError
        assert exc_info.value.code == "CLAIM_MISMATCH"
        assert exc_info.value.field == "to"
        self.payment_repo.create.assert_not_awaited()

    async def test_contract_creation_is_mismatch(self):
        self.ledger.add_transaction(TX_HASH, OWNER_WALLET, None, 10**18)

        with pytest.raises(ClaimMismatchError):
            await self.make_use_case().execute(self.user_id, make_claim())

    @pytest.mark.parametrize("amount", ["999999999999999999", "1000000000000000001"])
    async def test_amount_must_match_exactly(self, amount):
        """Test that off-by-one-wei amounts are rejected."""
        self.ledger.add_transaction(TX_HASH, OWNER_WALLET, MERCHANT, 10**18)

        with pytest.raises(ClaimMismatchError) as exc_info:
            await self.make_use_case().execute(self.user_id, make_claim(amount=amount))
        assert exc_info.value.field == "amount"
        self.payment_repo.create.assert_not_awaited()

    async def test_unknown_transaction(self):
        with pytest.raises(LedgerNotFoundError):
            await self.make_use_case().execute(self.user_id, make_claim())
        self.payment_repo.create.assert_not_awaited()

    async def test_ledger_unavailable_is_retryable(self):
        self.ledger.unavailable = True

        with pytest.raises(LedgerUnavailableError) as exc_info:
            await self.make_use_case().execute(self.user_id, make_claim())
        assert exc_info.value.retryable
        self.payment_repo.create.assert_not_awaited()

    @pytest.mark.parametrize(
        "overrides",
        [
            {"amount": "1.5"},
            {"amount": "-1"},
            {"to_address": "0x123"},
            {"tx_hash": "0x1234"},
            {"tx_hash": TX_HASH + "\n"},
            {"tx_hash": " " + TX_HASH},
            {"currency": "E-TH"},
            {"currency": "\u00c9TH"},
            {"description": "x" * 501},
        ],
    )
    async def test_malformed_claim_never_reaches_ledger(self, overrides):
        with pytest.raises(ValidationError):
            await self.make_use_case().execute(self.user_id, make_claim(**overrides))
        assert self.ledger.call_count() == 0
        self.binding_repo.list_addresses_for_user.assert_not_awaited()
