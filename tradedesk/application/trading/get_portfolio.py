"""
Use case: Summarize the caller's portfolio.

Input: AccountQuery (account_id)
Output: PortfolioResult
Side effects: None (read-only query).
Failure cases: AccountNotFoundError.
"""

import logging

from tradedesk.application.trading.dtos import (
    AccountQuery,
    HoldingResult,
    PortfolioResult,
)
from tradedesk.domain.trading.errors import AccountNotFoundError
from tradedesk.domain.trading.portfolio import summarize
from tradedesk.domain.trading.ports import (
    AccountRepository,
    LedgerRepository,
    ProductRepository,
)

logger = logging.getLogger(__name__)


class GetPortfolioUseCase:
    """Folds the caller's ledger over current catalog prices."""

    def __init__(
        self,
        account_repo: AccountRepository,
        product_repo: ProductRepository,
        ledger_repo: LedgerRepository,
    ) -> None:
        self._account_repo = account_repo
        self._product_repo = product_repo
        self._ledger_repo = ledger_repo

    def execute(self, query: AccountQuery) -> PortfolioResult:
        """Run the portfolio summary use case.

        Args:
            query: The calling account.

        Returns:
            Wallet balance, totals and per-product holdings.

        Raises:
            AccountNotFoundError: If the account does not exist.
        """
        account = self._account_repo.get_by_id(query.account_id)
        if account is None:
            raise AccountNotFoundError(query.account_id)

        transactions = self._ledger_repo.list_by_account(account.id)
        products = self._product_repo.get_many({t.product_id for t in transactions})
        summary = summarize(account, transactions, products)

        logger.debug(
            "Portfolio for account=%s: %d holdings from %d transactions",
            account.id,
            len(summary.holdings),
            len(transactions),
        )

        return PortfolioResult(
            wallet_balance=summary.wallet_balance,
            total_invested=summary.total_invested,
            current_value=summary.current_value,
            returns=summary.returns,
            holdings=[
                HoldingResult(
                    product_id=h.product_id,
                    product_name=h.product.name if h.product else None,
                    category=h.product.category.value if h.product else None,
                    price_per_unit=h.product.price_per_unit if h.product else None,
                    units_held=h.units_held,
                    invested=h.invested,
                    current_value=h.current_value,
                )
                for h in summary.holdings
            ],
        )
