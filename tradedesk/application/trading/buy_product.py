"""
Use case: Buy units of a catalog product.

Input: BuyProductCommand (account_id, product_id, units)
Output: PurchaseResult
Side effects: Debits the wallet and appends a ledger entry, atomically.
Failure cases: InvalidUnitsError, ProductNotFoundError, AccountNotFoundError,
    InsufficientFundsError, ConcurrencyConflictError, StorageError.
"""

import logging

from tradedesk.application.trading.dtos import BuyProductCommand, PurchaseResult
from tradedesk.application.trading.mappers import to_transaction_result
from tradedesk.domain.trading.entities import Transaction
from tradedesk.domain.trading.errors import (
    AccountNotFoundError,
    ConcurrencyConflictError,
    InsufficientFundsError,
    ProductNotFoundError,
)
from tradedesk.domain.trading.ports import (
    AccountRepository,
    LedgerRepository,
    ProductRepository,
)
from tradedesk.domain.trading.pricing import parse_units, purchase_total

logger = logging.getLogger(__name__)


class BuyProductUseCase:
    """Orchestrates a purchase.

    The funds check reads the balance, and the commit only succeeds if
    that balance is still current. A lost race re-runs the whole
    check-and-commit against the fresh balance, up to max_attempts.
    """

    def __init__(
        self,
        account_repo: AccountRepository,
        product_repo: ProductRepository,
        ledger_repo: LedgerRepository,
        max_attempts: int = 3,
    ) -> None:
        self._account_repo = account_repo
        self._product_repo = product_repo
        self._ledger_repo = ledger_repo
        self._max_attempts = max(1, max_attempts)

    def execute(self, command: BuyProductCommand) -> PurchaseResult:
        """Run the purchase use case.

        Args:
            command: Buyer, product and raw unit quantity.

        Returns:
            The recorded transaction and the buyer's new balance.

        Raises:
            InvalidUnitsError: If units is not a finite positive number.
            ProductNotFoundError: If the product does not exist.
            AccountNotFoundError: If the buyer does not exist.
            InsufficientFundsError: If the balance cannot cover the total.
            ConcurrencyConflictError: If every attempt lost a concurrent update.
        """
        units = parse_units(command.units)

        product = self._product_repo.get_by_id(command.product_id)
        if product is None:
            raise ProductNotFoundError(command.product_id)

        total = purchase_total(units, product.price_per_unit)

        for attempt in range(1, self._max_attempts + 1):
            account = self._account_repo.get_by_id(command.account_id)
            if account is None:
                raise AccountNotFoundError(command.account_id)

            if account.wallet_balance < total:
                raise InsufficientFundsError(
                    required=str(total), available=str(account.wallet_balance)
                )

            transaction = Transaction(
                account_id=account.id,
                product_id=product.id,
                units=units,
                price_at_purchase=product.price_per_unit,
                total_amount=total,
            )
            new_balance = account.wallet_balance - total

            try:
                self._ledger_repo.record_purchase(
                    transaction,
                    expected_balance=account.wallet_balance,
                    new_balance=new_balance,
                )
            except ConcurrencyConflictError:
                if attempt == self._max_attempts:
                    raise
                logger.info(
                    "Balance changed during purchase, retrying (attempt %d/%d) account=%s",
                    attempt,
                    self._max_attempts,
                    account.id,
                )
                continue

            return PurchaseResult(
                transaction=to_transaction_result(transaction, product),
                wallet_balance=new_balance,
            )

        raise ConcurrencyConflictError(command.account_id)
