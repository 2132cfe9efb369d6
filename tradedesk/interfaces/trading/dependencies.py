"""
Dependency injection for the trading bounded context.

Provides FastAPI dependency functions that wire infrastructure
adapters into use cases via constructor injection.
These are the composition root for the trading context.

The engine comes from get_engine so tests can override it with
app.dependency_overrides.
"""

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.engine import Engine

from tradedesk.application.trading.accounts import (
    AuthenticateUseCase,
    GetProfileUseCase,
    LoginUseCase,
    RegisterAccountUseCase,
)
from tradedesk.application.trading.buy_product import BuyProductUseCase
from tradedesk.application.trading.catalog import GetProductUseCase, ListProductsUseCase
from tradedesk.application.trading.get_portfolio import GetPortfolioUseCase
from tradedesk.application.trading.ledger import (
    ListAccountsUseCase,
    ListAllTransactionsUseCase,
    ListTransactionsUseCase,
)
from tradedesk.application.trading.watchlist import (
    GetWatchlistUseCase,
    ToggleWatchlistUseCase,
)
from tradedesk.core.config import settings
from tradedesk.domain.trading.errors import AuthenticationError
from tradedesk.infrastructure.trading.account_repository import AccountRepositoryAdapter
from tradedesk.infrastructure.trading.credentials import (
    BcryptPasswordHasher,
    JwtTokenService,
)
from tradedesk.infrastructure.trading.database import get_engine
from tradedesk.infrastructure.trading.ledger_repository import LedgerRepositoryAdapter
from tradedesk.infrastructure.trading.product_repository import ProductRepositoryAdapter

_bearer = HTTPBearer(auto_error=False)


def get_token_service() -> JwtTokenService:
    """Build the token service from application settings."""
    return JwtTokenService(
        secret=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        expires_minutes=settings.access_token_expire_minutes,
    )


def get_current_account_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
    engine: Engine = Depends(get_engine),
    tokens: JwtTokenService = Depends(get_token_service),
) -> str:
    """Resolve the caller's account id from the bearer token.

    Raises:
        AuthenticationError: If the header is missing or the token is invalid.
    """
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise AuthenticationError("missing bearer token")
    use_case = AuthenticateUseCase(
        account_repo=AccountRepositoryAdapter(engine), tokens=tokens
    )
    return use_case.execute(credentials.credentials)


def get_register_use_case(
    engine: Engine = Depends(get_engine),
    tokens: JwtTokenService = Depends(get_token_service),
) -> RegisterAccountUseCase:
    """Build RegisterAccountUseCase with its infrastructure dependencies."""
    return RegisterAccountUseCase(
        account_repo=AccountRepositoryAdapter(engine),
        hasher=BcryptPasswordHasher(),
        tokens=tokens,
        starting_balance=settings.starting_balance,
    )


def get_login_use_case(
    engine: Engine = Depends(get_engine),
    tokens: JwtTokenService = Depends(get_token_service),
) -> LoginUseCase:
    """Build LoginUseCase with its infrastructure dependencies."""
    return LoginUseCase(
        account_repo=AccountRepositoryAdapter(engine),
        hasher=BcryptPasswordHasher(),
        tokens=tokens,
    )


def get_profile_use_case(engine: Engine = Depends(get_engine)) -> GetProfileUseCase:
    """Build GetProfileUseCase with its infrastructure dependencies."""
    return GetProfileUseCase(account_repo=AccountRepositoryAdapter(engine))


def get_list_products_use_case(
    engine: Engine = Depends(get_engine),
) -> ListProductsUseCase:
    """Build ListProductsUseCase with its infrastructure dependencies."""
    return ListProductsUseCase(product_repo=ProductRepositoryAdapter(engine))


def get_product_use_case(engine: Engine = Depends(get_engine)) -> GetProductUseCase:
    """Build GetProductUseCase with its infrastructure dependencies."""
    return GetProductUseCase(product_repo=ProductRepositoryAdapter(engine))


def get_buy_product_use_case(
    engine: Engine = Depends(get_engine),
) -> BuyProductUseCase:
    """Build BuyProductUseCase with its infrastructure dependencies."""
    return BuyProductUseCase(
        account_repo=AccountRepositoryAdapter(engine),
        product_repo=ProductRepositoryAdapter(engine),
        ledger_repo=LedgerRepositoryAdapter(engine),
        max_attempts=settings.buy_max_attempts,
    )


def get_list_transactions_use_case(
    engine: Engine = Depends(get_engine),
) -> ListTransactionsUseCase:
    """Build ListTransactionsUseCase with its infrastructure dependencies."""
    return ListTransactionsUseCase(
        account_repo=AccountRepositoryAdapter(engine),
        product_repo=ProductRepositoryAdapter(engine),
        ledger_repo=LedgerRepositoryAdapter(engine),
    )


def get_portfolio_use_case(
    engine: Engine = Depends(get_engine),
) -> GetPortfolioUseCase:
    """Build GetPortfolioUseCase with its infrastructure dependencies."""
    return GetPortfolioUseCase(
        account_repo=AccountRepositoryAdapter(engine),
        product_repo=ProductRepositoryAdapter(engine),
        ledger_repo=LedgerRepositoryAdapter(engine),
    )


def get_toggle_watchlist_use_case(
    engine: Engine = Depends(get_engine),
) -> ToggleWatchlistUseCase:
    """Build ToggleWatchlistUseCase with its infrastructure dependencies."""
    return ToggleWatchlistUseCase(account_repo=AccountRepositoryAdapter(engine))


def get_watchlist_use_case(
    engine: Engine = Depends(get_engine),
) -> GetWatchlistUseCase:
    """Build GetWatchlistUseCase with its infrastructure dependencies."""
    return GetWatchlistUseCase(
        account_repo=AccountRepositoryAdapter(engine),
        product_repo=ProductRepositoryAdapter(engine),
    )


def get_list_accounts_use_case(
    engine: Engine = Depends(get_engine),
) -> ListAccountsUseCase:
    """Build ListAccountsUseCase with its infrastructure dependencies."""
    return ListAccountsUseCase(account_repo=AccountRepositoryAdapter(engine))


def get_list_all_transactions_use_case(
    engine: Engine = Depends(get_engine),
) -> ListAllTransactionsUseCase:
    """Build ListAllTransactionsUseCase with its infrastructure dependencies."""
    return ListAllTransactionsUseCase(
        account_repo=AccountRepositoryAdapter(engine),
        product_repo=ProductRepositoryAdapter(engine),
        ledger_repo=LedgerRepositoryAdapter(engine),
    )
