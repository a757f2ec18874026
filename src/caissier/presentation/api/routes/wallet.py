"""
Wallet API routes.

Provides endpoints for wallet operations:
- POST /wallet/bind - Bind a wallet by signature proof
- GET /wallet/addresses - List bound addresses
- GET /wallet/{address}/balance - Ledger balance of a bound wallet
"""

from fastapi import APIRouter, Depends, Response, status

from caissier.application.use_cases.bind_wallet import BindWallet
from caissier.application.use_cases.get_wallet_balance import GetWalletBalance
from caissier.application.use_cases.list_wallets import ListWallets
from caissier.di.dependencies import (
    get_bind_wallet,
    get_get_wallet_balance,
    get_list_wallets,
)
from caissier.domain.entities.user import User
from caissier.presentation.api.middleware.auth import get_current_user
from caissier.presentation.schemas.wallet_schemas import (
    BindWalletRequest,
    BindWalletResponse,
    WalletAddressesResponse,
    WalletBalanceResponse,
)

router = APIRouter(prefix="/wallet", tags=["Wallet"])


@router.post(
    "/bind",
    response_model=BindWalletResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Bind wallet",
    description=(
        "Recover the signer of a personal_sign message and bind that "
        "address to the current account"
    ),
    responses={200: {"description": "Address already bound to this account"}},
)
async def bind_wallet(
    request: BindWalletRequest,
    response: Response,
    current_user: User = Depends(get_current_user),
    use_case: BindWallet = Depends(get_bind_wallet),
) -> BindWalletResponse:
    """
    Raises:
        400: Malformed or unrecoverable signature
        409: Address bound to another account
    """
    result = await use_case.execute(
        user_id=current_user.id,
        message=request.message,
        signature=request.signature,
    )
    if not result.created:
        response.status_code = status.HTTP_200_OK
    return BindWalletResponse(address=result.binding.address)


@router.get(
    "/addresses",
    response_model=WalletAddressesResponse,
    summary="List bound wallets",
)
async def list_addresses(
    current_user: User = Depends(get_current_user),
    use_case: ListWallets = Depends(get_list_wallets),
) -> WalletAddressesResponse:
    return WalletAddressesResponse(addresses=await use_case.execute(current_user.id))


@router.get(
    "/{address}/balance",
    response_model=WalletBalanceResponse,
    summary="Get wallet balance",
)
async def get_balance(
    address: str,
    current_user: User = Depends(get_current_user),
    use_case: GetWalletBalance = Depends(get_get_wallet_balance),
) -> WalletBalanceResponse:
    """Balance in wei for an address bound to the caller (404 otherwise)."""
    balance = await use_case.execute(user_id=current_user.id, address=address)
    return WalletBalanceResponse(
        address=balance.address,
        balance_wei=str(balance.balance_wei),
        balance_ether=balance.balance_ether,
    )
