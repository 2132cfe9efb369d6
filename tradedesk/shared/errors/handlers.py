"""
Centralized error handlers for FastAPI.

Maps domain-specific errors to HTTP responses.
No stack traces or internal details are exposed to clients.
All error responses use the ErrorResponse schema: a stable message
and a machine-readable code per error kind.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from tradedesk.domain.trading.errors import (
    AccountNotFoundError,
    AuthenticationError,
    ConcurrencyConflictError,
    EmailAlreadyRegisteredError,
    InsufficientFundsError,
    InvalidCredentialsError,
    InvalidUnitsError,
    PermissionDeniedError,
    ProductNotFoundError,
    StorageError,
    TradingDomainError,
)

logger = logging.getLogger(__name__)

HTTP_400 = 400
HTTP_401 = 401
HTTP_403 = 403
HTTP_404 = 404
HTTP_409 = 409
HTTP_500 = 500
HTTP_503 = 503


def _error_response(
    status_code: int, error: str, code: str, headers: dict[str, str] | None = None
) -> JSONResponse:
    """Build a consistent JSON error response."""
    return JSONResponse(
        status_code=status_code,
        content={"error": error, "code": code},
        headers=headers,
    )


def register_error_handlers(app: FastAPI) -> None:
    """Register all domain error handlers on the FastAPI application.

    Args:
        app: The FastAPI application instance.
    """

    @app.exception_handler(AccountNotFoundError)
    async def handle_account_not_found(
        _request: Request, exc: AccountNotFoundError
    ) -> JSONResponse:
        """Handle missing account errors."""
        logger.warning("Account not found: %s", exc.account_id)
        return _error_response(HTTP_404, "Account not found", exc.code)

    @app.exception_handler(ProductNotFoundError)
    async def handle_product_not_found(
        _request: Request, exc: ProductNotFoundError
    ) -> JSONResponse:
        """Handle missing product errors."""
        logger.warning("Product not found: %s", exc.product_id)
        return _error_response(HTTP_404, "Product not found", exc.code)

    @app.exception_handler(InvalidUnitsError)
    async def handle_invalid_units(
        _request: Request, exc: InvalidUnitsError
    ) -> JSONResponse:
        """Handle non-numeric or non-positive purchase quantities."""
        logger.warning("Invalid units: %r", exc.units)
        return _error_response(HTTP_400, "Invalid units", exc.code)

    @app.exception_handler(InsufficientFundsError)
    async def handle_insufficient_funds(
        _request: Request, exc: InsufficientFundsError
    ) -> JSONResponse:
        """Handle insufficient funds errors."""
        logger.warning("Insufficient funds")
        return _error_response(HTTP_400, "Insufficient balance", exc.code)

    @app.exception_handler(ConcurrencyConflictError)
    async def handle_concurrency_conflict(
        _request: Request, exc: ConcurrencyConflictError
    ) -> JSONResponse:
        """Handle purchases that kept losing a concurrent balance update."""
        logger.warning("Concurrency conflict on account: %s", exc.account_id)
        return _error_response(
            HTTP_409, "Balance changed concurrently, please retry", exc.code
        )

    @app.exception_handler(EmailAlreadyRegisteredError)
    async def handle_email_registered(
        _request: Request, exc: EmailAlreadyRegisteredError
    ) -> JSONResponse:
        """Handle duplicate registrations."""
        logger.info("Registration with an existing email")
        return _error_response(HTTP_400, "User exists", exc.code)

    @app.exception_handler(InvalidCredentialsError)
    async def handle_invalid_credentials(
        _request: Request, exc: InvalidCredentialsError
    ) -> JSONResponse:
        """Handle failed logins."""
        return _error_response(
            HTTP_401,
            "Invalid credentials",
            exc.code,
            headers={"WWW-Authenticate": "Bearer"},
        )

    @app.exception_handler(AuthenticationError)
    async def handle_authentication(
        _request: Request, exc: AuthenticationError
    ) -> JSONResponse:
        """Handle missing, forged or expired access tokens."""
        logger.info("Authentication failed: %s", exc.reason)
        return _error_response(
            HTTP_401,
            "Unauthorized",
            exc.code,
            headers={"WWW-Authenticate": "Bearer"},
        )

    @app.exception_handler(PermissionDeniedError)
    async def handle_permission_denied(
        _request: Request, exc: PermissionDeniedError
    ) -> JSONResponse:
        """Handle role checks that fail."""
        return _error_response(HTTP_403, "Admin access required", exc.code)

    @app.exception_handler(StorageError)
    async def handle_storage(_request: Request, exc: StorageError) -> JSONResponse:
        """Handle an unavailable store. The driver message stays in the logs."""
        logger.error("Storage error: %s", exc.reason)
        return _error_response(HTTP_503, "Service temporarily unavailable", exc.code)

    @app.exception_handler(TradingDomainError)
    async def handle_trading_domain(
        _request: Request, exc: TradingDomainError
    ) -> JSONResponse:
        """Catch-all for unhandled trading domain errors."""
        logger.error("Unhandled trading domain error: %s", exc.message)
        return _error_response(HTTP_500, "Internal server error", "internal_error")

    @app.exception_handler(Exception)
    async def handle_unexpected(
        _request: Request, exc: Exception
    ) -> JSONResponse:
        """Catch-all for unexpected errors. Never exposes internals."""
        logger.exception("Unexpected error: %s", type(exc).__name__)
        return _error_response(HTTP_500, "Internal server error", "internal_error")
