"""
Dependency Injection Container for Caissier.

Manages all service instances and their dependencies.
"""

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from caissier.config.settings import Settings, get_settings
from caissier.domain.repositories.i_payment_repository import IPaymentRepository
from caissier.domain.repositories.i_refresh_token_repository import (
    IRefreshTokenRepository,
)
from caissier.domain.repositories.i_user_repository import IUserRepository
from caissier.domain.repositories.i_wallet_binding_repository import (
    IWalletBindingRepository,
)
from caissier.domain.services.i_ledger_client import ILedgerClient
from caissier.domain.services.i_password_hasher import IPasswordHasher
from caissier.domain.services.i_signature_verifier import ISignatureVerifier
from caissier.infrastructure.auth.argon2_password_hasher import (
    Argon2PasswordHasher,
)
from caissier.infrastructure.auth.ethereum_signature_verifier import (
    EthereumSignatureVerifier,
)
from caissier.infrastructure.auth.session_token_manager import SessionTokenManager
from caissier.infrastructure.blockchain.evm_ledger_client import EvmLedgerClient
from caissier.infrastructure.monitoring.logger import get_logger
from caissier.infrastructure.persistence.database import Database
from caissier.infrastructure.persistence.repositories.payment_repository import (
    PaymentRepository,
)
from caissier.infrastructure.persistence.repositories.refresh_token_repository import (  # noqa: E501
    RefreshTokenRepository,
)
from caissier.infrastructure.persistence.repositories.user_repository import (
    UserRepository,
)
from caissier.infrastructure.persistence.repositories.wallet_binding_repository import (  # noqa: E501
    WalletBindingRepository,
)

logger = get_logger(__name__)


class DIContainer:
    """
    Dependency Injection Container.

    Manages singleton instances of process-wide services (database,
    ledger client, verifier, hasher). Repositories and the session token
    manager are session-scoped and built per request.
    """

    def __init__(self, settings: Optional[Settings] = None):
        """Initialize container with None instances."""
        self._settings = settings

        # Infrastructure
        self._database: Optional[Database] = None
        self._ledger_client: Optional[ILedgerClient] = None

        # Domain Services
        self._signature_verifier: Optional[ISignatureVerifier] = None
        self._password_hasher: Optional[IPasswordHasher] = None

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    async def initialize(self) -> None:
        """Initialize all services and establish connections."""
        await self.database.connect()
        logger.info(
            "Container initialized",
            extra={"env": self.settings.ENV, "rpc_url": self.settings.ETH_RPC_URL},
        )

    async def shutdown(self) -> None:
        """Cleanup resources and close connections."""
        if self._ledger_client:
            await self._ledger_client.close()
            self._ledger_client = None

        if self._database:
            await self._database.disconnect()

    # Infrastructure Getters

    @property
    def database(self) -> Database:
        """Get database instance."""
        if self._database is None:
            self._database = Database(
                database_url=self.settings.DATABASE_URL,
                echo=self.settings.DATABASE_ECHO,
            )
        return self._database

    @property
    def ledger_client(self) -> ILedgerClient:
        """Get Ethereum ledger client instance."""
        if self._ledger_client is None:
            self._ledger_client = EvmLedgerClient(
                rpc_url=self.settings.ETH_RPC_URL,
                total_timeout=self.settings.BLOCKCHAIN_QUERY_TIMEOUT,
                connect_timeout=self.settings.BLOCKCHAIN_CONNECT_TIMEOUT,
                max_retries=self.settings.RETRY_MAX_ATTEMPTS,
            )
        return self._ledger_client

    # Domain Service Getters

    @property
    def signature_verifier(self) -> ISignatureVerifier:
        """Get signature verifier instance."""
        if self._signature_verifier is None:
            self._signature_verifier = EthereumSignatureVerifier()
        return self._signature_verifier

    @property
    def password_hasher(self) -> IPasswordHasher:
        """Get password hasher instance."""
        if self._password_hasher is None:
            self._password_hasher = Argon2PasswordHasher(
                time_cost=self.settings.ARGON2_TIME_COST,
                memory_cost=self.settings.ARGON2_MEMORY_COST,
                parallelism=self.settings.ARGON2_PARALLELISM,
            )
        return self._password_hasher

    # Repository Factories (session-scoped)

    def get_user_repository(self, session: AsyncSession) -> IUserRepository:
        return UserRepository(session)

    def get_wallet_binding_repository(
        self, session: AsyncSession
    ) -> IWalletBindingRepository:
        return WalletBindingRepository(session)

    def get_payment_repository(self, session: AsyncSession) -> IPaymentRepository:
        return PaymentRepository(session)

    def get_refresh_token_repository(
        self, session: AsyncSession
    ) -> IRefreshTokenRepository:
        return RefreshTokenRepository(session)

    def get_session_token_manager(self, session: AsyncSession) -> SessionTokenManager:
        """Build session token manager bound to a request session."""
        return SessionTokenManager(
            refresh_token_repository=self.get_refresh_token_repository(session),
            secret_key=self.settings.JWT_SECRET_KEY,
            algorithm=self.settings.JWT_ALGORITHM,
            access_token_expire_minutes=self.settings.ACCESS_TOKEN_EXPIRE_MINUTES,
            refresh_token_expire_days=self.settings.REFRESH_TOKEN_EXPIRE_DAYS,
            rotate_refresh_tokens=self.settings.REFRESH_TOKEN_ROTATION,
        )


# Global container instance
_container: Optional[DIContainer] = None


def get_container() -> DIContainer:
    """Get global DI container instance."""
    global _container
    if _container is None:
        _container = DIContainer()
    return _container


async def initialize_container(settings: Optional[Settings] = None) -> DIContainer:
    """Initialize and return DI container."""
    global _container
    if settings is not None:
        _container = DIContainer(settings)
    container = get_container()
    await container.initialize()
    return container


async def shutdown_container() -> None:
    """Shutdown DI container and drop the global instance."""
    global _container
    if _container is None:
        return
    await _container.shutdown()
    _container = None
