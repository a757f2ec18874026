"""
Unit tests for identity use cases: signup, login and account settings.
"""

from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest

from caissier.application.use_cases.change_password import ChangePassword
from caissier.application.use_cases.delete_account import DeleteAccount
from caissier.application.use_cases.login_user import LoginUser
from caissier.application.use_cases.sign_up import SignUp
from caissier.application.use_cases.update_email import UpdateEmail
from caissier.domain.entities.user import User
from caissier.domain.exceptions import (
    DuplicateEntityError,
    InvalidCredentialsError,
    ValidationError,
)
from caissier.infrastructure.auth.session_token_manager import TokenPair

PASSWORD = "Sup3r$ecret"


def make_user() -> User:
    return User(
        username="alice",
        email="alice@example.com",
        phone_number="5551234567",
        password_hash="hashed:" + PASSWORD,
    )


def make_hasher() -> MagicMock:
    """Hasher double: hash(p) = 'hashed:' + p."""
    hasher = MagicMock()
    hasher.hash.side_effect = lambda password: "hashed:" + password
    hasher.verify.side_effect = lambda password_hash, password: (
        password_hash == "hashed:" + password
    )
    return hasher


class TestSignUp:
    """Unit tests for SignUp use case."""

    def setup_method(self):
        self.user_repo = AsyncMock()
        self.user_repo.exists.return_value = False
        self.user_repo.create.side_effect = lambda user: user
        self.hasher = make_hasher()
        self.use_case = SignUp(self.user_repo, self.hasher)

    async def test_creates_user_with_hash_only(self):
        user = await self.use_case.execute(
            username="alice",
            email="Alice@Example.com",
            phone_number="5551234567",
            password=PASSWORD,
        )

        assert user.email == "alice@example.com"
        assert user.password_hash == "hashed:" + PASSWORD
        self.user_repo.create.assert_awaited_once()

    @pytest.mark.parametrize("field", ["username", "email", "phone_number"])
    async def test_duplicate_field_named(self, field):
        """Test that the conflicting field is reported."""
        self.user_repo.exists.side_effect = lambda f, value: f == field

        with pytest.raises(DuplicateEntityError) as exc_info:
            await self.use_case.execute("alice", "alice@example.com", "5551234567", PASSWORD)

        assert exc_info.value.field == field
        self.user_repo.create.assert_not_awaited()

    async def test_weak_password_rejected_before_lookup(self):
        with pytest.raises(ValidationError):
            await self.use_case.execute("alice", "alice@example.com", "5551234567", "weak")
        self.user_repo.exists.assert_not_awaited()


class TestLoginUser:
    """Unit tests for LoginUser use case."""

    def setup_method(self):
        self.user = make_user()
        self.user_repo = AsyncMock()
        self.user_repo.get_by_email.return_value = self.user
        self.hasher = make_hasher()
        self.token_manager = AsyncMock()
        self.token_manager.issue.return_value = TokenPair(
            access_token="access", refresh_token="refresh", expires_in=900
        )
        self.use_case = LoginUser(self.user_repo, self.hasher, self.token_manager)

    async def test_login_issues_tokens(self):
        pair = await self.use_case.execute(" ALICE@example.com ", PASSWORD)

        assert pair.access_token == "access"
        self.user_repo.get_by_email.assert_awaited_once_with("alice@example.com")
        self.token_manager.issue.assert_awaited_once_with(self.user.id)

    async def test_wrong_password(self):
        with pytest.raises(InvalidCredentialsError):
            await self.use_case.execute("alice@example.com", "Wr0ng$pass")
        self.token_manager.issue.assert_not_awaited()

    async def test_unknown_email_runs_dummy_verify(self):
        """Test that unknown email fails the same way after a dummy verify."""
        self.user_repo.get_by_email.return_value = None

        with pytest.raises(InvalidCredentialsError) as exc_info:
            await self.use_case.execute("nobody@example.com", PASSWORD)

        assert exc_info.value.message == "Invalid credentials"
        self.hasher.verify_dummy.assert_called_once_with(PASSWORD)


class TestAccountSettings:
    """Unit tests for ChangePassword, UpdateEmail and DeleteAccount."""

    def setup_method(self):
        self.user = make_user()
        self.user_repo = AsyncMock()
        self.user_repo.get_by_id.return_value = self.user
        self.user_repo.exists.return_value = False
        self.user_repo.update.side_effect = lambda user: user
        self.hasher = make_hasher()
        self.token_manager = AsyncMock()

    # ============================================================
    # ChangePassword
    # ============================================================

    async def test_change_password_revokes_sessions(self):
        use_case = ChangePassword(self.user_repo, self.hasher, self.token_manager)

        await use_case.execute(self.user.id, PASSWORD, "N3w$ecret!")

        assert self.user.password_hash == "hashed:N3w$ecret!"
        self.user_repo.update.assert_awaited_once()
        self.token_manager.revoke_all.assert_awaited_once_with(self.user.id)

    async def test_change_password_requires_current(self):
        use_case = ChangePassword(self.user_repo, self.hasher, self.token_manager)

        with pytest.raises(InvalidCredentialsError):
            await use_case.execute(self.user.id, "Wr0ng$pass", "N3w$ecret!")
        self.token_manager.revoke_all.assert_not_awaited()

    @pytest.mark.parametrize("new_password", [PASSWORD, "weak"])
    async def test_change_password_rejects_same_or_weak(self, new_password):
        use_case = ChangePassword(self.user_repo, self.hasher, self.token_manager)

        with pytest.raises(ValidationError):
            await use_case.execute(self.user.id, PASSWORD, new_password)
        self.user_repo.update.assert_not_awaited()

    # ============================================================
    # UpdateEmail
    # ============================================================

    async def test_update_email(self):
        user = await UpdateEmail(self.user_repo, self.hasher).execute(
            self.user.id, PASSWORD, "New@Example.com"
        )

        assert user.email == "new@example.com"

    async def test_update_email_taken(self):
        self.user_repo.exists.return_value = True

        with pytest.raises(DuplicateEntityError):
            await UpdateEmail(self.user_repo, self.hasher).execute(
                self.user.id, PASSWORD, "taken@example.com"
            )

    async def test_update_email_wrong_password(self):
        with pytest.raises(InvalidCredentialsError):
            await UpdateEmail(self.user_repo, self.hasher).execute(
                self.user.id, "Wr0ng$pass", "new@example.com"
            )
        self.user_repo.update.assert_not_awaited()

    # ============================================================
    # DeleteAccount
    # ============================================================

    async def test_delete_account(self):
        await DeleteAccount(self.user_repo, self.hasher).execute(self.user.id, PASSWORD)

        self.user_repo.delete.assert_awaited_once_with(self.user.id)

    async def test_delete_account_wrong_password(self):
        with pytest.raises(InvalidCredentialsError):
            await DeleteAccount(self.user_repo, self.hasher).execute(
                self.user.id, "Wr0ng$pass"
            )
        self.user_repo.delete.assert_not_awaited()
