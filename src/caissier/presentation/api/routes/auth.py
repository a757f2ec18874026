"""
Authentication API routes.

Provides endpoints for:
- POST /auth/signup - Create account
- POST /auth/login - Email + password login
- POST /auth/refresh - Exchange refresh token
- POST /auth/logout - Revoke refresh token
"""

from fastapi import APIRouter, Depends, Response, status

from caissier.application.use_cases.login_user import LoginUser
from caissier.application.use_cases.sign_up import SignUp
from caissier.di.dependencies import (
    get_login_user,
    get_session_token_manager,
    get_sign_up,
)
from caissier.infrastructure.auth.session_token_manager import SessionTokenManager
from caissier.presentation.schemas.account_schemas import UserResponse
from caissier.presentation.schemas.auth_schemas import (
    LoginRequest,
    RefreshRequest,
    SignUpRequest,
    TokenResponse,
)

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post(
    "/signup",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create account",
)
async def sign_up(
    request: SignUpRequest,
    use_case: SignUp = Depends(get_sign_up),
) -> UserResponse:
    """
    Create a new account.

    Raises:
        409: Username, email or phone already registered
        422: Malformed field or weak password
    """
    user = await use_case.execute(
        username=request.username,
        email=request.email,
        phone_number=request.phone_number,
        password=request.password,
    )
    return UserResponse.from_entity(user)


@router.post(
    "/login",
    response_model=TokenResponse,
    summary="Log in",
    description="Authenticate with email and password; returns session tokens",
)
async def login(
    request: LoginRequest,
    use_case: LoginUser = Depends(get_login_user),
) -> TokenResponse:
    pair = await use_case.execute(email=request.email, password=request.password)
    return TokenResponse.from_token_pair(pair)


@router.post(
    "/refresh",
    response_model=TokenResponse,
    summary="Refresh session",
    description="Exchange a refresh token for a new access token",
)
async def refresh(
    request: RefreshRequest,
    token_manager: SessionTokenManager = Depends(get_session_token_manager),
) -> TokenResponse:
    pair = await token_manager.refresh(request.refresh_token)
    return TokenResponse.from_token_pair(pair)


@router.post(
    "/logout",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Log out",
)
async def logout(
    request: RefreshRequest,
    token_manager: SessionTokenManager = Depends(get_session_token_manager),
) -> Response:
    """Revoke the refresh token. Unknown tokens are accepted silently."""
    await token_manager.revoke(request.refresh_token)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
