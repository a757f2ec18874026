"""
Integration tests for PaymentRepository against SQLite.
"""

from datetime import datetime, timedelta

import pytest

from caissier.domain.entities.payment import Payment, PaymentStatus
from caissier.domain.entities.user import User
from caissier.domain.exceptions import DuplicateEntityError
from caissier.infrastructure.persistence.repositories import (
    PaymentRepository,
    UserRepository,
)
from tests.helpers.sign_message import TEST_ADDRESS

RECIPIENT = "0x70997970C51812dc3A010C7d01b50e0d17dc79C8"
ONE_ETHER = 10**18


def tx_hash(n: int) -> str:
    return "0x" + f"{n:064x}"


def make_payment(user: User, n: int, amount: int = ONE_ETHER, **kwargs) -> Payment:
    return Payment(
        user_id=user.id,
        from_address=TEST_ADDRESS,
        to_address=RECIPIENT,
        amount=amount,
        transaction_hash=tx_hash(n),
        created_at=datetime(2026, 1, 1) + timedelta(minutes=n),
        **kwargs,
    )


@pytest.fixture
def user() -> User:
    return User(
        username="alice",
        email="alice@example.com",
        phone_number="5551234567",
        password_hash="$argon2id$stub",
    )


@pytest.fixture
async def stored_user(test_db, user) -> User:
    async with test_db.session() as session:
        await UserRepository(session).create(user)
    return user


class TestPaymentRepository:
    """Integration tests for PaymentRepository."""

    async def test_create_and_get(self, test_db, stored_user):
        payment = make_payment(stored_user, 1, amount=12345678901234567890123)
        async with test_db.session() as session:
            await PaymentRepository(session).create(payment)

        async with test_db.session() as session:
            repo = PaymentRepository(session)
            by_id = await repo.get_by_id(payment.id)
            by_hash = await repo.get_by_tx_hash(tx_hash(1))

        assert by_id.amount == 12345678901234567890123
        assert by_hash.id == payment.id
        assert by_id.status == PaymentStatus.PENDING

    async def test_transaction_hash_unique(self, test_db, stored_user):
        async with test_db.session() as session:
            await PaymentRepository(session).create(make_payment(stored_user, 1))

        with pytest.raises(DuplicateEntityError) as exc_info:
            async with test_db.session() as session:
                await PaymentRepository(session).create(make_payment(stored_user, 1))

        assert exc_info.value.field == "transaction_hash"

    async def test_update_status_compare_and_set(self, test_db, stored_user):
        """Test that only the first writer moves the status out of pending."""
        payment = make_payment(stored_user, 1)
        async with test_db.session() as session:
            await PaymentRepository(session).create(payment)

        payment.confirm(block_number=90, gas_used=21000, gas_price=7)
        async with test_db.session() as session:
            first = await PaymentRepository(session).update_status(
                payment, expected_status=PaymentStatus.PENDING
            )
        async with test_db.session() as session:
            second = await PaymentRepository(session).update_status(
                payment, expected_status=PaymentStatus.PENDING
            )
            stored = await PaymentRepository(session).get_by_id(payment.id)

        assert first is True
        assert second is False
        assert stored.status == PaymentStatus.CONFIRMED
        assert stored.block_number == 90
        assert stored.gas_price == 7
        assert stored.confirmed_at is not None

    async def test_list_and_count_with_filters(self, test_db, stored_user):
        async with test_db.session() as session:
            repo = PaymentRepository(session)
            for n in range(1, 6):
                await repo.create(make_payment(stored_user, n))
            await repo.create(make_payment(stored_user, 6, currency="DAI"))

        async with test_db.session() as session:
            repo = PaymentRepository(session)
            first_page = await repo.list_by_user(stored_user.id, limit=2, offset=0)
            last_page = await repo.list_by_user(stored_user.id, limit=4, offset=4)
            total = await repo.count_by_user(stored_user.id)
            eth = await repo.count_by_user(stored_user.id, currency="ETH")
            confirmed = await repo.count_by_user(
                stored_user.id, status=PaymentStatus.CONFIRMED
            )

        # Newest first
        assert [p.transaction_hash for p in first_page] == [tx_hash(6), tx_hash(5)]
        assert len(last_page) == 2
        assert total == 6
        assert eth == 5
        assert confirmed == 0

    async def test_stats_queries(self, test_db, stored_user):
        payments = [make_payment(stored_user, n, amount=n * ONE_ETHER) for n in (1, 2, 3)]
        async with test_db.session() as session:
            repo = PaymentRepository(session)
            for payment in payments:
                await repo.create(payment)

        payments[0].confirm(block_number=90)
        payments[1].confirm(block_number=91)
        payments[2].fail(block_number=92)
        async with test_db.session() as session:
            repo = PaymentRepository(session)
            for payment in payments:
                await repo.update_status(payment, expected_status=PaymentStatus.PENDING)

        async with test_db.session() as session:
            repo = PaymentRepository(session)
            counts = await repo.status_counts(stored_user.id)
            amounts = await repo.confirmed_amounts(stored_user.id)

        assert counts[PaymentStatus.CONFIRMED] == 2
        assert counts[PaymentStatus.FAILED] == 1
        assert counts[PaymentStatus.PENDING] == 0
        assert counts[PaymentStatus.CANCELLED] == 0
        assert sum(amounts) == 3 * ONE_ETHER
