"""
Tests for the trading application layer (use cases).

Tests use cases with mocked ports. No real infrastructure needed.
Each test verifies orchestration logic, not business rules.
"""

from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from tradedesk.application.trading.accounts import (
    AuthenticateUseCase,
    LoginUseCase,
    RegisterAccountUseCase,
)
from tradedesk.application.trading.buy_product import BuyProductUseCase
from tradedesk.application.trading.dtos import (
    AccountQuery,
    BuyProductCommand,
    LedgerQuery,
    LoginCommand,
    RegisterAccountCommand,
    ToggleWatchlistCommand,
)
from tradedesk.application.trading.get_portfolio import GetPortfolioUseCase
from tradedesk.application.trading.ledger import (
    ListAllTransactionsUseCase,
    ListTransactionsUseCase,
    require_admin,
)
from tradedesk.application.trading.seed_demo_data import (
    DEMO_ADMIN,
    DEMO_CATALOG,
    DEMO_USER,
    SeedDemoDataUseCase,
)
from tradedesk.application.trading.watchlist import (
    GetWatchlistUseCase,
    ToggleWatchlistUseCase,
)
from tradedesk.domain.trading.entities import (
    Account,
    Product,
    ProductCategory,
    Role,
    Transaction,
    WatchToggle,
)
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
)
from tradedesk.domain.trading.ports import (
    AccountRepository,
    LedgerRepository,
    PasswordHasher,
    ProductRepository,
    TokenService,
)


def _account(balance: str = "100000.00", role: Role = Role.STANDARD) -> Account:
    return Account(
        name="Investor",
        email="investor@example.com",
        password_hash="stored-hash",
        wallet_balance=Decimal(balance),
        role=role,
    )


def _product(price: str = "2847.50", name: str = "Reliance Industries Ltd") -> Product:
    return Product(
        name=name,
        category=ProductCategory.STOCK,
        price_per_unit=Decimal(price),
    )


@pytest.fixture
def ports():
    """Mocked repositories, as (accounts, products, ledger)."""
    return (
        MagicMock(spec=AccountRepository),
        MagicMock(spec=ProductRepository),
        MagicMock(spec=LedgerRepository),
    )


class TestBuyProductUseCase:
    """Tests for the BuyProductUseCase."""

    def test_successful_purchase(self, ports) -> None:
        """Ten units at 2847.50 debit 28475.00 from a 100000.00 wallet."""
        accounts, products, ledger = ports
        account, product = _account(), _product()
        accounts.get_by_id.return_value = account
        products.get_by_id.return_value = product

        result = BuyProductUseCase(accounts, products, ledger).execute(
            BuyProductCommand(account_id=account.id, product_id=product.id, units=10)
        )

        assert result.wallet_balance == Decimal("71525.00")
        assert result.transaction.total_amount == Decimal("28475.00")
        assert result.transaction.price_at_purchase == Decimal("2847.50")
        assert result.transaction.product_name == product.name

        ledger.record_purchase.assert_called_once()
        args, kwargs = ledger.record_purchase.call_args
        assert args[0].units == Decimal("10")
        assert kwargs["expected_balance"] == Decimal("100000.00")
        assert kwargs["new_balance"] == Decimal("71525.00")

    def test_insufficient_funds_writes_nothing(self, ports) -> None:
        """A wallet that cannot cover the total is left untouched."""
        accounts, products, ledger = ports
        accounts.get_by_id.return_value = _account("100.00")
        products.get_by_id.return_value = _product()

        with pytest.raises(InsufficientFundsError):
            BuyProductUseCase(accounts, products, ledger).execute(
                BuyProductCommand(account_id="a", product_id="p", units=1)
            )
        ledger.record_purchase.assert_not_called()

    def test_exact_balance_is_allowed(self, ports) -> None:
        """Spending the whole balance leaves exactly zero."""
        accounts, products, ledger = ports
        accounts.get_by_id.return_value = _account("2847.50")
        products.get_by_id.return_value = _product()

        result = BuyProductUseCase(accounts, products, ledger).execute(
            BuyProductCommand(account_id="a", product_id="p", units="1")
        )
        assert result.wallet_balance == Decimal("0.00")

    @pytest.mark.parametrize("units", ["abc", -5, 0, None])
    def test_invalid_units_rejected_before_any_lookup(self, ports, units) -> None:
        """Invalid quantities fail before the repositories are touched."""
        accounts, products, ledger = ports

        with pytest.raises(InvalidUnitsError):
            BuyProductUseCase(accounts, products, ledger).execute(
                BuyProductCommand(account_id="a", product_id="p", units=units)
            )
        products.get_by_id.assert_not_called()
        ledger.record_purchase.assert_not_called()

    def test_unknown_product(self, ports) -> None:
        accounts, products, ledger = ports
        products.get_by_id.return_value = None

        with pytest.raises(ProductNotFoundError):
            BuyProductUseCase(accounts, products, ledger).execute(
                BuyProductCommand(account_id="a", product_id="missing", units=1)
            )
        ledger.record_purchase.assert_not_called()

    def test_unknown_account(self, ports) -> None:
        accounts, products, ledger = ports
        products.get_by_id.return_value = _product()
        accounts.get_by_id.return_value = None

        with pytest.raises(AccountNotFoundError):
            BuyProductUseCase(accounts, products, ledger).execute(
                BuyProductCommand(account_id="ghost", product_id="p", units=1)
            )

    def test_conflict_is_retried_against_fresh_balance(self, ports) -> None:
        """A lost balance race re-reads the account and commits once."""
        accounts, products, ledger = ports
        products.get_by_id.return_value = _product("100.00")
        accounts.get_by_id.side_effect = [_account("1000.00"), _account("900.00")]
        ledger.record_purchase.side_effect = [ConcurrencyConflictError("a"), None]

        result = BuyProductUseCase(accounts, products, ledger, max_attempts=3).execute(
            BuyProductCommand(account_id="a", product_id="p", units=1)
        )

        assert result.wallet_balance == Decimal("800.00")
        assert ledger.record_purchase.call_count == 2
        _, kwargs = ledger.record_purchase.call_args
        assert kwargs["expected_balance"] == Decimal("900.00")

    def test_conflict_after_last_attempt_propagates(self, ports) -> None:
        accounts, products, ledger = ports
        products.get_by_id.return_value = _product("100.00")
        accounts.get_by_id.return_value = _account("1000.00")
        ledger.record_purchase.side_effect = ConcurrencyConflictError("a")

        with pytest.raises(ConcurrencyConflictError):
            BuyProductUseCase(accounts, products, ledger, max_attempts=2).execute(
                BuyProductCommand(account_id="a", product_id="p", units=1)
            )
        assert ledger.record_purchase.call_count == 2

    def test_retry_sees_insufficient_funds(self, ports) -> None:
        """After losing a race the fresh balance may no longer cover the total."""
        accounts, products, ledger = ports
        products.get_by_id.return_value = _product("300.00")
        accounts.get_by_id.side_effect = [_account("400.00"), _account("100.00")]
        ledger.record_purchase.side_effect = [ConcurrencyConflictError("a")]

        with pytest.raises(InsufficientFundsError):
            BuyProductUseCase(accounts, products, ledger).execute(
                BuyProductCommand(account_id="a", product_id="p", units=1)
            )
        assert ledger.record_purchase.call_count == 1


class TestGetPortfolioUseCase:
    """Tests for the GetPortfolioUseCase."""

    def test_summary_uses_current_prices(self, ports) -> None:
        accounts, products, ledger = ports
        account, product = _account("98400.00"), _product("130.00", "Acme")
        accounts.get_by_id.return_value = account
        ledger.list_by_account.return_value = [
            Transaction(
                account_id=account.id,
                product_id=product.id,
                units=Decimal("10"),
                price_at_purchase=Decimal("100.00"),
                total_amount=Decimal("1000.00"),
            ),
            Transaction(
                account_id=account.id,
                product_id=product.id,
                units=Decimal("5"),
                price_at_purchase=Decimal("120.00"),
                total_amount=Decimal("600.00"),
            ),
        ]
        products.get_many.return_value = {product.id: product}

        result = GetPortfolioUseCase(accounts, products, ledger).execute(
            AccountQuery(account_id=account.id)
        )

        assert result.wallet_balance == Decimal("98400.00")
        assert result.total_invested == Decimal("1600.00")
        assert result.current_value == Decimal("1950.00")
        assert result.returns == Decimal("350.00")
        assert result.holdings[0].product_name == "Acme"
        assert result.holdings[0].units_held == Decimal("15")

    def test_missing_account(self, ports) -> None:
        accounts, products, ledger = ports
        accounts.get_by_id.return_value = None

        with pytest.raises(AccountNotFoundError):
            GetPortfolioUseCase(accounts, products, ledger).execute(
                AccountQuery(account_id="ghost")
            )


class TestWatchlistUseCases:
    """Tests for the watchlist toggle and listing."""

    def test_toggle_reports_state(self, ports) -> None:
        accounts, _, _ = ports
        accounts.get_by_id.return_value = _account()
        accounts.toggle_watchlist.side_effect = [WatchToggle.ADDED, WatchToggle.REMOVED]
        use_case = ToggleWatchlistUseCase(accounts)
        command = ToggleWatchlistCommand(account_id="a", product_id="p")

        assert use_case.execute(command).state == "added"
        assert use_case.execute(command).state == "removed"

    def test_toggle_unknown_account(self, ports) -> None:
        accounts, _, _ = ports
        accounts.get_by_id.return_value = None

        with pytest.raises(AccountNotFoundError):
            ToggleWatchlistUseCase(accounts).execute(
                ToggleWatchlistCommand(account_id="ghost", product_id="p")
            )
        accounts.toggle_watchlist.assert_not_called()

    def test_dangling_entries_are_skipped(self, ports) -> None:
        """Watched ids with no catalog product are left out of the listing."""
        accounts, products, _ = ports
        kept = _product("68.42", "SBI BlueChip Fund")
        accounts.get_by_id.return_value = _account()
        accounts.get_watchlist.return_value = [kept.id, "deleted-product"]
        products.get_many.return_value = {kept.id: kept}

        results = GetWatchlistUseCase(accounts, products).execute(
            AccountQuery(account_id="a")
        )

        assert [r.id for r in results] == [kept.id]


class TestAdminUseCases:
    """Tests for the role check and admin listings."""

    def test_require_admin_accepts_admin(self, ports) -> None:
        accounts, _, _ = ports
        accounts.get_by_id.return_value = _account(role=Role.ADMIN)
        require_admin(accounts, "admin")

    def test_require_admin_rejects_standard(self, ports) -> None:
        accounts, _, _ = ports
        accounts.get_by_id.return_value = _account()

        with pytest.raises(PermissionDeniedError):
            require_admin(accounts, "a")

    def test_standard_account_cannot_list_ledger(self, ports) -> None:
        accounts, products, ledger = ports
        accounts.get_by_id.return_value = _account()

        with pytest.raises(PermissionDeniedError):
            ListAllTransactionsUseCase(accounts, products, ledger).execute(
                LedgerQuery(requester_id="a")
            )
        ledger.list_all.assert_not_called()

    def test_own_history_is_newest_first(self, ports) -> None:
        accounts, products, ledger = ports
        account = _account()
        accounts.get_by_id.return_value = account
        older = Transaction(
            account_id=account.id,
            product_id="p",
            units=Decimal("1"),
            price_at_purchase=Decimal("10.00"),
            total_amount=Decimal("10.00"),
        )
        newer = Transaction(
            account_id=account.id,
            product_id="p",
            units=Decimal("2"),
            price_at_purchase=Decimal("10.00"),
            total_amount=Decimal("20.00"),
        )
        ledger.list_by_account.return_value = [older, newer]
        products.get_many.return_value = {}

        results = ListTransactionsUseCase(accounts, products, ledger).execute(
            AccountQuery(account_id=account.id)
        )

        assert [r.id for r in results] == [newer.id, older.id]
        assert results[0].product_name is None


class TestAccountUseCases:
    """Tests for registration, login and token resolution."""

    @pytest.fixture
    def hasher(self):
        hasher = MagicMock(spec=PasswordHasher)
        hasher.hash.return_value = "hashed"
        return hasher

    @pytest.fixture
    def tokens(self):
        tokens = MagicMock(spec=TokenService)
        tokens.issue.return_value = "signed-token"
        return tokens

    def test_register_funds_new_account(self, ports, hasher, tokens) -> None:
        accounts, _, _ = ports
        accounts.get_by_email.return_value = None

        result = RegisterAccountUseCase(
            accounts, hasher, tokens, starting_balance=Decimal("100000")
        ).execute(
            RegisterAccountCommand(name="Ann", email="Ann@Example.com", password="secret1")
        )

        assert result.access_token == "signed-token"
        assert result.account.wallet_balance == Decimal("100000.00")
        assert result.account.email == "ann@example.com"
        assert result.account.role == "standard"
        stored = accounts.add.call_args.args[0]
        assert stored.password_hash == "hashed"

    def test_register_duplicate_email(self, ports, hasher, tokens) -> None:
        accounts, _, _ = ports
        accounts.get_by_email.return_value = _account()

        with pytest.raises(EmailAlreadyRegisteredError):
            RegisterAccountUseCase(
                accounts, hasher, tokens, starting_balance=Decimal("100000")
            ).execute(
                RegisterAccountCommand(
                    name="Ann", email="investor@example.com", password="secret1"
                )
            )
        accounts.add.assert_not_called()

    def test_login_unknown_email_and_bad_password_fail_alike(
        self, ports, hasher, tokens
    ) -> None:
        accounts, _, _ = ports
        use_case = LoginUseCase(accounts, hasher, tokens)

        accounts.get_by_email.return_value = None
        with pytest.raises(InvalidCredentialsError):
            use_case.execute(LoginCommand(email="nobody@example.com", password="x"))

        accounts.get_by_email.return_value = _account()
        hasher.verify.return_value = False
        with pytest.raises(InvalidCredentialsError):
            use_case.execute(LoginCommand(email="investor@example.com", password="x"))

    def test_token_for_deleted_account_is_rejected(self, ports, tokens) -> None:
        accounts, _, _ = ports
        tokens.verify.return_value = "gone"
        accounts.get_by_id.return_value = None

        with pytest.raises(AuthenticationError):
            AuthenticateUseCase(accounts, tokens).execute("token")


class TestSeedDemoDataUseCase:
    """Tests for the demo data loader."""

    def test_seeds_catalog_and_accounts_once(self, ports) -> None:
        accounts, products, _ = ports
        register = MagicMock(spec=RegisterAccountUseCase)

        products.list_all.return_value = []
        accounts.get_by_email.return_value = None
        report = SeedDemoDataUseCase(products, accounts, register).execute()

        assert report.products_created == len(DEMO_CATALOG)
        assert report.accounts_created == 2
        register.execute.assert_any_call(DEMO_USER, role=Role.STANDARD)
        register.execute.assert_any_call(DEMO_ADMIN, role=Role.ADMIN)

        products.add.reset_mock()
        register.execute.reset_mock()
        products.list_all.return_value = list(DEMO_CATALOG)
        accounts.get_by_email.return_value = _account()
        report = SeedDemoDataUseCase(products, accounts, register).execute()

        assert report.products_created == 0
        assert report.accounts_created == 0
        products.add.assert_not_called()
        register.execute.assert_not_called()
