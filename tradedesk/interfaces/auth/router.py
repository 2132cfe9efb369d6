"""
FastAPI router for registration and login.

Both routes are rate limited with the stricter auth limit.
Tokens are bearer JWTs whose subject is the account id.
"""

from fastapi import APIRouter, Depends, Request

from tradedesk.application.trading.accounts import LoginUseCase, RegisterAccountUseCase
from tradedesk.application.trading.dtos import (
    AuthResult,
    LoginCommand,
    RegisterAccountCommand,
)
from tradedesk.core.config import settings
from tradedesk.interfaces.trading.dependencies import (
    get_login_use_case,
    get_register_use_case,
)
from tradedesk.interfaces.trading.router import to_account_item
from tradedesk.interfaces.trading.schemas import (
    AuthResponse,
    ErrorResponse,
    LoginRequest,
    RegisterRequest,
)
from tradedesk.shared.security.rate_limiting import limiter

router = APIRouter(prefix="/auth", tags=["auth"])


def _auth_response(result: AuthResult) -> AuthResponse:
    return AuthResponse(token=result.access_token, user=to_account_item(result.account))


@router.post(
    "/register",
    response_model=AuthResponse,
    responses={400: {"model": ErrorResponse}, 429: {"model": ErrorResponse}},
    summary="Register",
    description="Create an account funded with the starting wallet balance.",
)
@limiter.limit(settings.rate_limit_auth)
def register(
    request: Request,
    body: RegisterRequest,
    use_case: RegisterAccountUseCase = Depends(get_register_use_case),
) -> AuthResponse:
    """Register a new account and return an access token."""
    command = RegisterAccountCommand(
        name=body.name,
        email=body.email,
        password=body.password,
        pan=body.pan,
    )
    return _auth_response(use_case.execute(command))


@router.post(
    "/login",
    response_model=AuthResponse,
    responses={401: {"model": ErrorResponse}, 429: {"model": ErrorResponse}},
    summary="Login",
    description="Exchange email and password for an access token.",
)
@limiter.limit(settings.rate_limit_auth)
def login(
    request: Request,
    body: LoginRequest,
    use_case: LoginUseCase = Depends(get_login_use_case),
) -> AuthResponse:
    """Authenticate with email and password."""
    return _auth_response(
        use_case.execute(LoginCommand(email=body.email, password=body.password))
    )
