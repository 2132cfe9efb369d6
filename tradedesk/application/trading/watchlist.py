"""
Use cases: Watchlist toggle and listing.

ToggleWatchlistUseCase
    Input: ToggleWatchlistCommand (account_id, product_id)
    Output: ToggleWatchlistResult
    Side effects: Adds or removes one watchlist entry.
    Failure cases: AccountNotFoundError.

GetWatchlistUseCase
    Input: AccountQuery (account_id)
    Output: list[ProductResult]
    Side effects: None.
    Failure cases: AccountNotFoundError.
"""

import logging

from tradedesk.application.trading.dtos import (
    AccountQuery,
    ProductResult,
    ToggleWatchlistCommand,
    ToggleWatchlistResult,
)
from tradedesk.application.trading.mappers import to_product_result
from tradedesk.domain.trading.errors import AccountNotFoundError
from tradedesk.domain.trading.ports import AccountRepository, ProductRepository

logger = logging.getLogger(__name__)


class ToggleWatchlistUseCase:
    """Adds a product to the watchlist, or removes it if already present.

    The product id is not checked against the catalog.
    """

    def __init__(self, account_repo: AccountRepository) -> None:
        self._account_repo = account_repo

    def execute(self, command: ToggleWatchlistCommand) -> ToggleWatchlistResult:
        if self._account_repo.get_by_id(command.account_id) is None:
            raise AccountNotFoundError(command.account_id)

        state = self._account_repo.toggle_watchlist(
            command.account_id, command.product_id
        )
        logger.info(
            "Watchlist %s: account=%s product=%s",
            state.value,
            command.account_id,
            command.product_id,
        )
        return ToggleWatchlistResult(product_id=command.product_id, state=state.value)


class GetWatchlistUseCase:
    """Lists the watched products that still exist in the catalog."""

    def __init__(
        self, account_repo: AccountRepository, product_repo: ProductRepository
    ) -> None:
        self._account_repo = account_repo
        self._product_repo = product_repo

    def execute(self, query: AccountQuery) -> list[ProductResult]:
        """Return watched products, skipping dangling references.

        Args:
            query: The calling account.

        Returns:
            Watched products in catalog order (by name).

        Raises:
            AccountNotFoundError: If the account does not exist.
        """
        if self._account_repo.get_by_id(query.account_id) is None:
            raise AccountNotFoundError(query.account_id)

        product_ids = self._account_repo.get_watchlist(query.account_id)
        products = self._product_repo.get_many(product_ids)

        missing = len(set(product_ids)) - len(products)
        if missing:
            logger.warning(
                "Skipping %d dangling watchlist entries for account=%s",
                missing,
                query.account_id,
            )

        return [
            to_product_result(p)
            for p in sorted(products.values(), key=lambda p: (p.name, p.id))
        ]
