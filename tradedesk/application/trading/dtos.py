"""
Data Transfer Objects for the trading application layer.

DTOs carry data between the interface and application layers.
They are plain dataclasses with no behavior.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional


# ------------------------------------------------------------------
# Accounts
# ------------------------------------------------------------------


@dataclass(frozen=True)
class RegisterAccountCommand:
    """Input DTO for creating an account.

    Attributes:
        name: Display name.
        email: Login email, unique case-insensitively.
        password: Plain-text password; hashed before storage.
        pan: Optional tax identifier.
    """

    name: str
    email: str
    password: str
    pan: Optional[str] = None


@dataclass(frozen=True)
class LoginCommand:
    """Input DTO for exchanging credentials for an access token."""

    email: str
    password: str


@dataclass(frozen=True)
class AccountProfile:
    """Output DTO describing an account. Never carries the password hash."""

    id: str
    name: str
    email: str
    pan: Optional[str]
    wallet_balance: Decimal
    role: str
    created_at: datetime


@dataclass(frozen=True)
class AuthResult:
    """Output DTO for register/login: a bearer token plus the profile."""

    access_token: str
    account: AccountProfile


@dataclass(frozen=True)
class AccountQuery:
    """Input DTO for queries scoped to the calling account.

    Attributes:
        account_id: Identity resolved by the authentication layer.
    """

    account_id: str


# ------------------------------------------------------------------
# Catalog
# ------------------------------------------------------------------


@dataclass(frozen=True)
class PriceStatsResult:
    """Display statistics over a product's price history."""

    low: Decimal
    high: Decimal
    change: Decimal
    change_pct: Optional[Decimal]


@dataclass(frozen=True)
class ProductResult:
    """Output DTO for a catalog product."""

    id: str
    name: str
    category: str
    price_per_unit: Decimal
    metric: str
    description: str
    price_history: list[Decimal]
    stats: Optional[PriceStatsResult]


@dataclass(frozen=True)
class GetProductQuery:
    """Input DTO for a single product lookup."""

    product_id: str


# ------------------------------------------------------------------
# Purchases
# ------------------------------------------------------------------


@dataclass(frozen=True)
class BuyProductCommand:
    """Input DTO for a purchase.

    Attributes:
        account_id: Buyer, resolved by the authentication layer.
        product_id: Catalog product to buy.
        units: Raw client quantity; validated by the use case.
    """

    account_id: str
    product_id: str
    units: object


@dataclass(frozen=True)
class TransactionResult:
    """Output DTO for one ledger entry."""

    id: str
    account_id: str
    product_id: str
    product_name: Optional[str]
    units: Decimal
    price_at_purchase: Decimal
    total_amount: Decimal
    created_at: datetime


@dataclass(frozen=True)
class PurchaseResult:
    """Output DTO for a successful purchase."""

    transaction: TransactionResult
    wallet_balance: Decimal


@dataclass(frozen=True)
class LedgerQuery:
    """Input DTO for admin ledger listing."""

    requester_id: str
    limit: int = 100


# ------------------------------------------------------------------
# Portfolio & watchlist
# ------------------------------------------------------------------


@dataclass(frozen=True)
class HoldingResult:
    """Output DTO for one aggregated position.

    product_name, category and price_per_unit are None when the product
    has been removed from the catalog.
    """

    product_id: str
    product_name: Optional[str]
    category: Optional[str]
    price_per_unit: Optional[Decimal]
    units_held: Decimal
    invested: Decimal
    current_value: Decimal


@dataclass(frozen=True)
class PortfolioResult:
    """Output DTO for the portfolio summary."""

    wallet_balance: Decimal
    total_invested: Decimal
    current_value: Decimal
    returns: Decimal
    holdings: list[HoldingResult]


@dataclass(frozen=True)
class ToggleWatchlistCommand:
    """Input DTO for flipping a product on the caller's watchlist."""

    account_id: str
    product_id: str


@dataclass(frozen=True)
class ToggleWatchlistResult:
    """Output DTO: the product and whether it was added or removed."""

    product_id: str
    state: str
