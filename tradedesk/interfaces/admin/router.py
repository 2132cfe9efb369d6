"""
FastAPI router for admin-only views.

The role check lives in the use cases; a standard account gets 403.
Password hashes are never part of any response.
"""

from fastapi import APIRouter, Depends, Query

from tradedesk.application.trading.dtos import AccountQuery, LedgerQuery
from tradedesk.application.trading.ledger import (
    ListAccountsUseCase,
    ListAllTransactionsUseCase,
)
from tradedesk.interfaces.trading.dependencies import (
    get_current_account_id,
    get_list_accounts_use_case,
    get_list_all_transactions_use_case,
)
from tradedesk.interfaces.trading.router import to_account_item, to_transaction_item
from tradedesk.interfaces.trading.schemas import (
    AccountListResponse,
    ErrorResponse,
    TransactionListResponse,
)

router = APIRouter(prefix="/admin", tags=["admin"])

ADMIN_RESPONSES = {401: {"model": ErrorResponse}, 403: {"model": ErrorResponse}}


@router.get(
    "/users",
    response_model=AccountListResponse,
    responses=ADMIN_RESPONSES,
    summary="All users",
)
def list_users(
    account_id: str = Depends(get_current_account_id),
    use_case: ListAccountsUseCase = Depends(get_list_accounts_use_case),
) -> AccountListResponse:
    """List every registered account."""
    results = use_case.execute(AccountQuery(account_id=account_id))
    return AccountListResponse(users=[to_account_item(p) for p in results])


@router.get(
    "/transactions",
    response_model=TransactionListResponse,
    responses=ADMIN_RESPONSES,
    summary="Recent transactions",
)
def list_all_transactions(
    limit: int = Query(default=100, ge=1, le=500),
    account_id: str = Depends(get_current_account_id),
    use_case: ListAllTransactionsUseCase = Depends(get_list_all_transactions_use_case),
) -> TransactionListResponse:
    """List the most recent purchases across all accounts."""
    results = use_case.execute(LedgerQuery(requester_id=account_id, limit=limit))
    return TransactionListResponse(transactions=[to_transaction_item(r) for r in results])
