"""
Use cases: Ledger and account listings.

ListTransactionsUseCase
    Input: AccountQuery
    Output: the caller's transactions, newest first.
    Failure cases: AccountNotFoundError.

ListAccountsUseCase / ListAllTransactionsUseCase
    Input: AccountQuery / LedgerQuery for the requesting account
    Output: every account / the most recent transactions
    Failure cases: PermissionDeniedError unless the requester is an admin.
"""

import logging

from tradedesk.application.trading.dtos import (
    AccountProfile,
    AccountQuery,
    LedgerQuery,
    TransactionResult,
)
from tradedesk.application.trading.mappers import to_profile, to_transaction_result
from tradedesk.domain.trading.entities import Role
from tradedesk.domain.trading.errors import (
    AccountNotFoundError,
    PermissionDeniedError,
)
from tradedesk.domain.trading.ports import (
    AccountRepository,
    LedgerRepository,
    ProductRepository,
)

logger = logging.getLogger(__name__)


def require_admin(account_repo: AccountRepository, account_id: str) -> None:
    """Raise unless the account exists and has the admin role."""
    account = account_repo.get_by_id(account_id)
    if account is None:
        raise AccountNotFoundError(account_id)

    if account.role is Role.ADMIN:
        return
    if account.role is Role.STANDARD:
        logger.warning("Admin access denied for account=%s", account_id)
        raise PermissionDeniedError(account_id, Role.ADMIN.value)
    raise AssertionError(f"Unhandled role: {account.role}")


class ListTransactionsUseCase:
    """Returns the caller's purchase history, newest first."""

    def __init__(
        self,
        account_repo: AccountRepository,
        product_repo: ProductRepository,
        ledger_repo: LedgerRepository,
    ) -> None:
        self._account_repo = account_repo
        self._product_repo = product_repo
        self._ledger_repo = ledger_repo

    def execute(self, query: AccountQuery) -> list[TransactionResult]:
        if self._account_repo.get_by_id(query.account_id) is None:
            raise AccountNotFoundError(query.account_id)

        transactions = self._ledger_repo.list_by_account(query.account_id)
        products = self._product_repo.get_many({t.product_id for t in transactions})
        return [
            to_transaction_result(t, products.get(t.product_id))
            for t in reversed(transactions)
        ]


class ListAccountsUseCase:
    """Admin view of every registered account."""

    def __init__(self, account_repo: AccountRepository) -> None:
        self._account_repo = account_repo

    def execute(self, query: AccountQuery) -> list[AccountProfile]:
        require_admin(self._account_repo, query.account_id)
        return [to_profile(a) for a in self._account_repo.list_all()]


class ListAllTransactionsUseCase:
    """Admin view of the most recent purchases across all accounts."""

    def __init__(
        self,
        account_repo: AccountRepository,
        product_repo: ProductRepository,
        ledger_repo: LedgerRepository,
    ) -> None:
        self._account_repo = account_repo
        self._product_repo = product_repo
        self._ledger_repo = ledger_repo

    def execute(self, query: LedgerQuery) -> list[TransactionResult]:
        require_admin(self._account_repo, query.requester_id)

        transactions = self._ledger_repo.list_all(limit=query.limit)
        products = self._product_repo.get_many({t.product_id for t in transactions})
        return [to_transaction_result(t, products.get(t.product_id)) for t in transactions]
