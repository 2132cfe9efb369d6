"""
Port interfaces (ABCs) for the trading bounded context.

Ports define the contracts that the domain requires from the outside world.
Infrastructure adapters implement these interfaces.
The domain layer never depends on concrete implementations.
"""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Iterable, Optional

from tradedesk.domain.trading.entities import (
    Account,
    Product,
    Transaction,
    WatchToggle,
)


class AccountRepository(ABC):
    """Port for persisting and retrieving accounts and their watchlists."""

    @abstractmethod
    def get_by_id(self, account_id: str) -> Optional[Account]:
        """Return an account by its ID, or None if not found."""
        raise NotImplementedError

    @abstractmethod
    def get_by_email(self, email: str) -> Optional[Account]:
        """Return an account by its email (case-insensitive), or None."""
        raise NotImplementedError

    @abstractmethod
    def add(self, account: Account) -> None:
        """Persist a new account.

        Raises:
            EmailAlreadyRegisteredError: If the email is already taken.
        """
        raise NotImplementedError

    @abstractmethod
    def list_all(self) -> list[Account]:
        """Return every account ordered by creation time."""
        raise NotImplementedError

    @abstractmethod
    def get_watchlist(self, account_id: str) -> list[str]:
        """Return the product IDs on an account's watchlist."""
        raise NotImplementedError

    @abstractmethod
    def toggle_watchlist(self, account_id: str, product_id: str) -> WatchToggle:
        """Add the product when absent, remove it when present."""
        raise NotImplementedError


class ProductRepository(ABC):
    """Port for reading the product catalog."""

    @abstractmethod
    def get_by_id(self, product_id: str) -> Optional[Product]:
        """Return a product by its ID, or None if not found."""
        raise NotImplementedError

    @abstractmethod
    def get_many(self, product_ids: Iterable[str]) -> dict[str, Product]:
        """Return the existing products among the given IDs, keyed by ID.

        Unknown IDs are silently absent from the result.
        """
        raise NotImplementedError

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return the whole catalog ordered by name."""
        raise NotImplementedError

    @abstractmethod
    def add(self, product: Product) -> None:
        """Persist a new catalog product (seeding only)."""
        raise NotImplementedError


class LedgerRepository(ABC):
    """Port for the append-only purchase ledger."""

    @abstractmethod
    def record_purchase(
        self,
        transaction: Transaction,
        expected_balance: Decimal,
        new_balance: Decimal,
    ) -> None:
        """Debit the account and append the transaction as one atomic unit.

        The balance is only updated if it still equals expected_balance
        (compare-and-swap). Either both effects are committed or neither.

        Raises:
            ConcurrencyConflictError: If the balance changed since it was read.
            StorageError: If the store fails; nothing is committed.
        """
        raise NotImplementedError

    @abstractmethod
    def list_by_account(self, account_id: str) -> list[Transaction]:
        """Return an account's transactions, oldest first."""
        raise NotImplementedError

    @abstractmethod
    def list_all(self, limit: int = 100) -> list[Transaction]:
        """Return the most recent transactions across all accounts."""
        raise NotImplementedError


class PasswordHasher(ABC):
    """Port for one-way password hashing."""

    @abstractmethod
    def hash(self, password: str) -> str:
        """Return a salted hash of the password."""
        raise NotImplementedError

    @abstractmethod
    def verify(self, password: str, password_hash: str) -> bool:
        """Return True when the password matches the stored hash."""
        raise NotImplementedError


class TokenService(ABC):
    """Port for issuing and verifying access tokens."""

    @abstractmethod
    def issue(self, account_id: str) -> str:
        """Return a signed access token whose subject is the account ID."""
        raise NotImplementedError

    @abstractmethod
    def verify(self, token: str) -> str:
        """Return the account ID carried by a valid token.

        Raises:
            AuthenticationError: If the token is malformed, forged or expired.
        """
        raise NotImplementedError
