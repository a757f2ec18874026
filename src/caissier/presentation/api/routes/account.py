"""
Account settings API routes.
"""

from fastapi import APIRouter, Depends, Response, status

from caissier.application.use_cases.change_password import ChangePassword
from caissier.application.use_cases.delete_account import DeleteAccount
from caissier.application.use_cases.update_email import UpdateEmail
from caissier.di.dependencies import (
    get_change_password,
    get_delete_account,
    get_update_email,
)
from caissier.domain.entities.user import User
from caissier.presentation.api.middleware.auth import get_current_user
from caissier.presentation.schemas.account_schemas import (
    ChangePasswordRequest,
    DeleteAccountRequest,
    UpdateEmailRequest,
    UserResponse,
)

router = APIRouter(prefix="/account", tags=["Account"])


@router.get("/me", response_model=UserResponse, summary="Current user")
async def get_me(
    current_user: User = Depends(get_current_user),
) -> UserResponse:
    return UserResponse.from_entity(current_user)


@router.put(
    "/password",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Change password",
    description="Re-verifies the current password and revokes all sessions",
)
async def change_password(
    request: ChangePasswordRequest,
    current_user: User = Depends(get_current_user),
    use_case: ChangePassword = Depends(get_change_password),
) -> Response:
    await use_case.execute(
        user_id=current_user.id,
        current_password=request.current_password,
        new_password=request.new_password,
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put("/email", response_model=UserResponse, summary="Update email")
async def update_email(
    request: UpdateEmailRequest,
    current_user: User = Depends(get_current_user),
    use_case: UpdateEmail = Depends(get_update_email),
) -> UserResponse:
    user = await use_case.execute(
        user_id=current_user.id,
        password=request.password,
        new_email=request.new_email,
    )
    return UserResponse.from_entity(user)


@router.delete(
    "",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete account",
    description="Deletes the account with its wallets, sessions and payments",
)
async def delete_account(
    request: DeleteAccountRequest,
    current_user: User = Depends(get_current_user),
    use_case: DeleteAccount = Depends(get_delete_account),
) -> Response:
    await use_case.execute(user_id=current_user.id, password=request.password)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
