"""
Integration tests for UserRepository against SQLite.
"""

from datetime import datetime, timedelta

import pytest

from caissier.domain.entities.payment import Payment
from caissier.domain.entities.refresh_session import RefreshSession
from caissier.domain.entities.user import User
from caissier.domain.entities.wallet_binding import WalletBinding
from caissier.domain.exceptions import DuplicateEntityError
from caissier.infrastructure.persistence.repositories import (
    PaymentRepository,
    RefreshTokenRepository,
    UserRepository,
    WalletBindingRepository,
)
from tests.helpers.sign_message import TEST_ADDRESS


def make_user(
    username: str = "alice",
    email: str = "alice@example.com",
    phone_number: str = "5551234567",
) -> User:
    return User(
        username=username,
        email=email,
        phone_number=phone_number,
        password_hash="$argon2id$stub",
    )


class TestUserRepository:
    """Integration tests for UserRepository."""

    async def test_create_and_get(self, test_db):
        user = make_user()
        async with test_db.session() as session:
            await UserRepository(session).create(user)

        async with test_db.session() as session:
            repo = UserRepository(session)
            by_id = await repo.get_by_id(user.id)
            by_email = await repo.get_by_email("alice@example.com")

        assert by_id.username == "alice"
        assert by_email.id == user.id
        assert by_id.password_hash == "$argon2id$stub"

    @pytest.mark.parametrize(
        "field,kwargs",
        [
            ("username", {"email": "b@example.com", "phone_number": "5550000000"}),
            ("email", {"username": "bob", "phone_number": "5550000000"}),
            ("phone_number", {"username": "bob", "email": "b@example.com"}),
        ],
    )
    async def test_unique_fields(self, test_db, field, kwargs):
        """Test that the colliding field is named."""
        async with test_db.session() as session:
            await UserRepository(session).create(make_user())

        with pytest.raises(DuplicateEntityError) as exc_info:
            async with test_db.session() as session:
                await UserRepository(session).create(make_user(**kwargs))

        assert exc_info.value.field == field

    async def test_exists(self, test_db):
        async with test_db.session() as session:
            repo = UserRepository(session)
            await repo.create(make_user())

            assert await repo.exists("email", "alice@example.com")
            assert not await repo.exists("username", "bob")

            with pytest.raises(ValueError):
                await repo.exists("password_hash", "x")

    async def test_update_email(self, test_db):
        user = make_user()
        async with test_db.session() as session:
            await UserRepository(session).create(user)

        user.change_email("new@example.com")
        async with test_db.session() as session:
            await UserRepository(session).update(user)

        async with test_db.session() as session:
            stored = await UserRepository(session).get_by_id(user.id)

        assert stored.email == "new@example.com"

    async def test_delete_removes_owned_rows(self, test_db):
        """Test that deleting a user removes bindings, payments and sessions."""
        user = make_user()
        async with test_db.session() as session:
            await UserRepository(session).create(user)
            await WalletBindingRepository(session).create(
                WalletBinding(address=TEST_ADDRESS, phone_number=user.phone_number)
            )
            await PaymentRepository(session).create(
                Payment(
                    user_id=user.id,
                    from_address=TEST_ADDRESS,
                    to_address=TEST_ADDRESS,
                    amount=1,
                    transaction_hash="0x" + "ab" * 32,
                )
            )
            await RefreshTokenRepository(session).create(
                RefreshSession(
                    user_id=user.id,
                    token_hash="f" * 64,
                    expires_at=datetime.now() + timedelta(days=1),
                )
            )

        async with test_db.session() as session:
            assert await UserRepository(session).delete(user.id) is True

        async with test_db.session() as session:
            assert await UserRepository(session).get_by_id(user.id) is None
            assert await WalletBindingRepository(session).get_by_address(TEST_ADDRESS) is None
            assert await PaymentRepository(session).get_by_tx_hash("0x" + "ab" * 32) is None
            assert await RefreshTokenRepository(session).get_by_hash("f" * 64) is None

    async def test_delete_unknown(self, test_db):
        async with test_db.session() as session:
            assert await UserRepository(session).delete(make_user().id) is False
