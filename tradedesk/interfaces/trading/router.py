"""
FastAPI routers for the trading bounded context.

All routes delegate to use cases. No business logic here.
Input validation is handled by Pydantic schemas.
Error mapping is handled by centralized error handlers.
The caller's identity always comes from get_current_account_id.
"""

from fastapi import APIRouter, Depends, Path

from tradedesk.application.trading.accounts import GetProfileUseCase
from tradedesk.application.trading.buy_product import BuyProductUseCase
from tradedesk.application.trading.catalog import GetProductUseCase, ListProductsUseCase
from tradedesk.application.trading.dtos import (
    AccountProfile,
    AccountQuery,
    BuyProductCommand,
    GetProductQuery,
    PortfolioResult,
    ProductResult,
    ToggleWatchlistCommand,
    TransactionResult,
)
from tradedesk.application.trading.get_portfolio import GetPortfolioUseCase
from tradedesk.application.trading.ledger import ListTransactionsUseCase
from tradedesk.application.trading.watchlist import (
    GetWatchlistUseCase,
    ToggleWatchlistUseCase,
)
from tradedesk.interfaces.trading.dependencies import (
    get_buy_product_use_case,
    get_current_account_id,
    get_list_products_use_case,
    get_list_transactions_use_case,
    get_portfolio_use_case,
    get_product_use_case,
    get_profile_use_case,
    get_toggle_watchlist_use_case,
    get_watchlist_use_case,
)
from tradedesk.interfaces.trading.schemas import (
    AccountItem,
    BuyRequest,
    BuyResponse,
    ErrorResponse,
    HoldingItem,
    PortfolioResponse,
    PriceStatsItem,
    ProductItem,
    TransactionItem,
    TransactionListResponse,
    WatchlistResponse,
    WatchlistToggleResponse,
)

products_router = APIRouter(prefix="/products", tags=["products"])
transactions_router = APIRouter(prefix="/transactions", tags=["transactions"])
users_router = APIRouter(prefix="/users", tags=["users"])

AUTH_RESPONSES = {401: {"model": ErrorResponse}}

WATCH_MESSAGES = {
    "added": "Added to watchlist",
    "removed": "Removed from watchlist",
}


def to_account_item(p: AccountProfile) -> AccountItem:
    return AccountItem(
        id=p.id,
        name=p.name,
        email=p.email,
        pan=p.pan,
        wallet_balance=p.wallet_balance,
        role=p.role,
        created_at=p.created_at,
    )


def _product_item(r: ProductResult) -> ProductItem:
    return ProductItem(
        id=r.id,
        name=r.name,
        category=r.category,
        price_per_unit=r.price_per_unit,
        metric=r.metric,
        description=r.description,
        price_history=r.price_history,
        stats=(
            PriceStatsItem(
                low=r.stats.low,
                high=r.stats.high,
                change=r.stats.change,
                change_pct=r.stats.change_pct,
            )
            if r.stats is not None
            else None
        ),
    )


def to_transaction_item(r: TransactionResult) -> TransactionItem:
    return TransactionItem(
        id=r.id,
        account_id=r.account_id,
        product_id=r.product_id,
        product_name=r.product_name,
        units=r.units,
        price_at_purchase=r.price_at_purchase,
        total_amount=r.total_amount,
        created_at=r.created_at,
    )


def _portfolio_response(r: PortfolioResult) -> PortfolioResponse:
    return PortfolioResponse(
        wallet_balance=r.wallet_balance,
        total_invested=r.total_invested,
        current_value=r.current_value,
        returns=r.returns,
        holdings=[
            HoldingItem(
                product_id=h.product_id,
                product_name=h.product_name,
                category=h.category,
                price_per_unit=h.price_per_unit,
                units_held=h.units_held,
                invested=h.invested,
                current_value=h.current_value,
            )
            for h in r.holdings
        ],
    )


# ------------------------------------------------------------------
# Products
# ------------------------------------------------------------------


@products_router.get(
    "",
    response_model=list[ProductItem],
    summary="List products",
    description="Return the whole catalog of stocks and funds.",
)
def list_products(
    use_case: ListProductsUseCase = Depends(get_list_products_use_case),
) -> list[ProductItem]:
    """List all catalog products."""
    return [_product_item(r) for r in use_case.execute()]


@products_router.get(
    "/{product_id}",
    response_model=ProductItem,
    responses={404: {"model": ErrorResponse}},
    summary="Product detail",
    description="Return one product with its price history and statistics.",
)
def get_product(
    product_id: str = Path(..., min_length=1, max_length=64),
    use_case: GetProductUseCase = Depends(get_product_use_case),
) -> ProductItem:
    """Get a single product."""
    return _product_item(use_case.execute(GetProductQuery(product_id=product_id)))


# ------------------------------------------------------------------
# Transactions
# ------------------------------------------------------------------


@transactions_router.post(
    "/buy",
    response_model=BuyResponse,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
    summary="Buy a product",
    description="Debit the wallet and record the purchase in one atomic step.",
)
def buy_product(
    request: BuyRequest,
    account_id: str = Depends(get_current_account_id),
    use_case: BuyProductUseCase = Depends(get_buy_product_use_case),
) -> BuyResponse:
    """Buy units of a product for the calling account."""
    command = BuyProductCommand(
        account_id=account_id,
        product_id=request.product_id,
        units=request.units,
    )
    result = use_case.execute(command)
    return BuyResponse(
        transaction=to_transaction_item(result.transaction),
        wallet_balance=result.wallet_balance,
    )


@transactions_router.get(
    "",
    response_model=TransactionListResponse,
    responses=AUTH_RESPONSES,
    summary="Purchase history",
    description="Return the caller's transactions, newest first.",
)
def list_transactions(
    account_id: str = Depends(get_current_account_id),
    use_case: ListTransactionsUseCase = Depends(get_list_transactions_use_case),
) -> TransactionListResponse:
    """List the caller's purchases."""
    results = use_case.execute(AccountQuery(account_id=account_id))
    return TransactionListResponse(
        transactions=[to_transaction_item(r) for r in results]
    )


# ------------------------------------------------------------------
# Users: profile, portfolio, watchlist
# ------------------------------------------------------------------


@users_router.get(
    "/me",
    response_model=AccountItem,
    responses=AUTH_RESPONSES,
    summary="Current user",
)
def get_me(
    account_id: str = Depends(get_current_account_id),
    use_case: GetProfileUseCase = Depends(get_profile_use_case),
) -> AccountItem:
    """Return the caller's profile."""
    return to_account_item(use_case.execute(AccountQuery(account_id=account_id)))


@users_router.get(
    "/portfolio",
    response_model=PortfolioResponse,
    responses=AUTH_RESPONSES,
    summary="Portfolio summary",
    description="Holdings, invested amount, current value and returns.",
)
def get_portfolio(
    account_id: str = Depends(get_current_account_id),
    use_case: GetPortfolioUseCase = Depends(get_portfolio_use_case),
) -> PortfolioResponse:
    """Summarize the caller's portfolio at current prices."""
    return _portfolio_response(use_case.execute(AccountQuery(account_id=account_id)))


@users_router.post(
    "/watchlist/{product_id}",
    response_model=WatchlistToggleResponse,
    responses=AUTH_RESPONSES,
    summary="Toggle watchlist entry",
    description="Add the product to the watchlist, or remove it if present.",
)
def toggle_watchlist(
    product_id: str = Path(..., min_length=1, max_length=64),
    account_id: str = Depends(get_current_account_id),
    use_case: ToggleWatchlistUseCase = Depends(get_toggle_watchlist_use_case),
) -> WatchlistToggleResponse:
    """Toggle a product on the caller's watchlist."""
    result = use_case.execute(
        ToggleWatchlistCommand(account_id=account_id, product_id=product_id)
    )
    return WatchlistToggleResponse(
        product_id=result.product_id,
        state=result.state,
        message=WATCH_MESSAGES[result.state],
    )


@users_router.get(
    "/watchlist",
    response_model=WatchlistResponse,
    responses=AUTH_RESPONSES,
    summary="Watchlist",
    description="Watched products; entries whose product no longer exists are skipped.",
)
def get_watchlist(
    account_id: str = Depends(get_current_account_id),
    use_case: GetWatchlistUseCase = Depends(get_watchlist_use_case),
) -> WatchlistResponse:
    """List the caller's watched products."""
    results = use_case.execute(AccountQuery(account_id=account_id))
    return WatchlistResponse(watchlist=[_product_item(r) for r in results])
