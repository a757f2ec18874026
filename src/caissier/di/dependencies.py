"""
FastAPI dependency injection.

Provides dependencies for FastAPI routes using the DI container.
Tests swap any of these through app.dependency_overrides.
"""

from typing import AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from caissier.application.use_cases.bind_wallet import BindWallet
from caissier.application.use_cases.change_password import ChangePassword
from caissier.application.use_cases.delete_account import DeleteAccount
from caissier.application.use_cases.get_payment import GetPayment
from caissier.application.use_cases.get_payment_stats import GetPaymentStats
from caissier.application.use_cases.get_wallet_balance import GetWalletBalance
from caissier.application.use_cases.list_payments import ListPayments
from caissier.application.use_cases.list_wallets import ListWallets
from caissier.application.use_cases.login_user import LoginUser
from caissier.application.use_cases.refresh_payment_status import (
    RefreshPaymentStatus,
)
from caissier.application.use_cases.sign_up import SignUp
from caissier.application.use_cases.submit_payment import SubmitPayment
from caissier.application.use_cases.update_email import UpdateEmail
from caissier.di.container import get_container
from caissier.domain.services.i_ledger_client import ILedgerClient
from caissier.domain.services.i_password_hasher import IPasswordHasher
from caissier.domain.services.i_signature_verifier import ISignatureVerifier
from caissier.infrastructure.auth.session_token_manager import SessionTokenManager

# ================================================================
# Database Dependencies
# ================================================================


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Get database session dependency.

    Session commits after the request handler returns and rolls back
    if it raised.
    """
    container = get_container()
    async with container.database.session() as session:
        yield session


# ================================================================
# Service Dependencies
# ================================================================


def get_ledger_client() -> ILedgerClient:
    return get_container().ledger_client


def get_signature_verifier() -> ISignatureVerifier:
    return get_container().signature_verifier


def get_password_hasher() -> IPasswordHasher:
    return get_container().password_hasher


def get_session_token_manager(
    session: AsyncSession = Depends(get_db_session),
) -> SessionTokenManager:
    """Get SessionTokenManager bound to the request session."""
    return get_container().get_session_token_manager(session)


def get_required_confirmations() -> int:
    return get_container().settings.PAYMENT_CONFIRMATION_BLOCKS


# ================================================================
# Identity Use Case Dependencies
# ================================================================


def get_sign_up(
    session: AsyncSession = Depends(get_db_session),
    password_hasher: IPasswordHasher = Depends(get_password_hasher),
) -> SignUp:
    return SignUp(
        user_repository=get_container().get_user_repository(session),
        password_hasher=password_hasher,
    )


def get_login_user(
    session: AsyncSession = Depends(get_db_session),
    password_hasher: IPasswordHasher = Depends(get_password_hasher),
    token_manager: SessionTokenManager = Depends(get_session_token_manager),
) -> LoginUser:
    return LoginUser(
        user_repository=get_container().get_user_repository(session),
        password_hasher=password_hasher,
        session_token_manager=token_manager,
    )


def get_change_password(
    session: AsyncSession = Depends(get_db_session),
    password_hasher: IPasswordHasher = Depends(get_password_hasher),
    token_manager: SessionTokenManager = Depends(get_session_token_manager),
) -> ChangePassword:
    return ChangePassword(
        user_repository=get_container().get_user_repository(session),
        password_hasher=password_hasher,
        session_token_manager=token_manager,
    )


def get_update_email(
    session: AsyncSession = Depends(get_db_session),
    password_hasher: IPasswordHasher = Depends(get_password_hasher),
) -> UpdateEmail:
    return UpdateEmail(
        user_repository=get_container().get_user_repository(session),
        password_hasher=password_hasher,
    )


def get_delete_account(
    session: AsyncSession = Depends(get_db_session),
    password_hasher: IPasswordHasher = Depends(get_password_hasher),
) -> DeleteAccount:
    return DeleteAccount(
        user_repository=get_container().get_user_repository(session),
        password_hasher=password_hasher,
    )


# ================================================================
# Wallet Use Case Dependencies
# ================================================================


def get_bind_wallet(
    session: AsyncSession = Depends(get_db_session),
    signature_verifier: ISignatureVerifier = Depends(get_signature_verifier),
) -> BindWallet:
    container = get_container()
    return BindWallet(
        user_repository=container.get_user_repository(session),
        wallet_binding_repository=container.get_wallet_binding_repository(session),
        signature_verifier=signature_verifier,
    )


def get_list_wallets(
    session: AsyncSession = Depends(get_db_session),
) -> ListWallets:
    return ListWallets(
        wallet_binding_repository=get_container().get_wallet_binding_repository(
            session
        ),
    )


def get_get_wallet_balance(
    session: AsyncSession = Depends(get_db_session),
    ledger_client: ILedgerClient = Depends(get_ledger_client),
) -> GetWalletBalance:
    return GetWalletBalance(
        wallet_binding_repository=get_container().get_wallet_binding_repository(
            session
        ),
        ledger_client=ledger_client,
    )


# ================================================================
# Payment Use Case Dependencies
# ================================================================


def get_submit_payment(
    session: AsyncSession = Depends(get_db_session),
    ledger_client: ILedgerClient = Depends(get_ledger_client),
    required_confirmations: int = Depends(get_required_confirmations),
) -> SubmitPayment:
    container = get_container()
    return SubmitPayment(
        wallet_binding_repository=container.get_wallet_binding_repository(session),
        payment_repository=container.get_payment_repository(session),
        ledger_client=ledger_client,
        required_confirmations=required_confirmations,
        default_currency=container.settings.DEFAULT_CURRENCY,
    )


def get_refresh_payment_status(
    session: AsyncSession = Depends(get_db_session),
    ledger_client: ILedgerClient = Depends(get_ledger_client),
    required_confirmations: int = Depends(get_required_confirmations),
) -> RefreshPaymentStatus:
    return RefreshPaymentStatus(
        payment_repository=get_container().get_payment_repository(session),
        ledger_client=ledger_client,
        required_confirmations=required_confirmations,
    )


def get_get_payment(
    session: AsyncSession = Depends(get_db_session),
) -> GetPayment:
    return GetPayment(
        payment_repository=get_container().get_payment_repository(session)
    )


def get_list_payments(
    session: AsyncSession = Depends(get_db_session),
) -> ListPayments:
    return ListPayments(
        payment_repository=get_container().get_payment_repository(session)
    )


def get_get_payment_stats(
    session: AsyncSession = Depends(get_db_session),
) -> GetPaymentStats:
    return GetPaymentStats(
        payment_repository=get_container().get_payment_repository(session)
    )
