"""
Concurrent purchases against one wallet.

Ten buyers race for a balance that only covers three of them. Exactly
three purchases may succeed, the rest must see insufficient funds, and
the ledger must match the debits.
"""

from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal

from tradedesk.application.trading.buy_product import BuyProductUseCase
from tradedesk.application.trading.dtos import BuyProductCommand
from tradedesk.domain.trading.errors import InsufficientFundsError

BUYERS = 10


class TestConcurrentPurchases:
    """Tests for the no-overspend guarantee under contention."""

    def test_balance_never_goes_negative(
        self, make_account, make_product, account_repo, product_repo, ledger_repo
    ) -> None:
        account = make_account("1000.00")
        product = make_product("300.00", name="Contended Stock")
        # Each buyer can lose at most one race per successful commit.
        use_case = BuyProductUseCase(
            account_repo, product_repo, ledger_repo, max_attempts=BUYERS
        )
        command = BuyProductCommand(
            account_id=account.id, product_id=product.id, units=1
        )

        def attempt(_: int) -> str:
            try:
                use_case.execute(command)
            except InsufficientFundsError:
                return "insufficient"
            return "ok"

        with ThreadPoolExecutor(max_workers=BUYERS) as pool:
            outcomes = list(pool.map(attempt, range(BUYERS)))

        assert outcomes.count("ok") == 3
        assert outcomes.count("insufficient") == BUYERS - 3
        assert account_repo.get_by_id(account.id).wallet_balance == Decimal("100.00")

        ledger = ledger_repo.list_by_account(account.id)
        assert len(ledger) == 3
        assert sum(t.total_amount for t in ledger) == Decimal("900.00")
