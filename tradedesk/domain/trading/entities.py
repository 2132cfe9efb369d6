"""
Domain entities for the trading bounded context.

Entities represent core business objects with identity and lifecycle.
They contain no framework imports and no IO operations.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Optional
from uuid import uuid4


def _new_id() -> str:
    return uuid4().hex


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Role(Enum):
    """Account role. Closed set; authorization checks must cover both."""

    STANDARD = "standard"
    ADMIN = "admin"


class ProductCategory(Enum):
    """Catalog category of a tradable product."""

    STOCK = "Stock"
    FUND = "Fund"


class WatchToggle(Enum):
    """Outcome of toggling a product on a watchlist."""

    ADDED = "added"
    REMOVED = "removed"


@dataclass
class Account:
    """A registered user with a spendable wallet balance."""

    name: str
    email: str
    password_hash: str
    wallet_balance: Decimal
    role: Role = Role.STANDARD
    pan: Optional[str] = None
    id: str = field(default_factory=_new_id)
    created_at: datetime = field(default_factory=_utcnow)

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN


@dataclass(frozen=True)
class Product:
    """A tradable catalog entry (stock or fund).

    price_history is ordered oldest first and is used for display only;
    purchases and valuations always use price_per_unit.
    """

    name: str
    category: ProductCategory
    price_per_unit: Decimal
    metric: str = ""
    description: str = ""
    price_history: tuple[Decimal, ...] = ()
    id: str = field(default_factory=_new_id)
    created_at: datetime = field(default_factory=_utcnow)

    def __post_init__(self) -> None:
        if self.price_per_unit <= 0:
            raise ValueError("price_per_unit must be positive")


@dataclass(frozen=True)
class Transaction:
    """An immutable ledger fact: an account bought units of a product.

    price_at_purchase is a snapshot of the product price at the moment
    of the purchase and never follows later catalog changes.
    """

    account_id: str
    product_id: str
    units: Decimal
    price_at_purchase: Decimal
    total_amount: Decimal
    id: str = field(default_factory=_new_id)
    created_at: datetime = field(default_factory=_utcnow)


@dataclass(frozen=True)
class Holding:
    """Aggregated position in one product, derived from the ledger."""

    product_id: str
    product: Optional[Product]
    units_held: Decimal
    invested: Decimal
    current_value: Decimal


@dataclass(frozen=True)
class PortfolioSummary:
    """Read-only valuation of an account's ledger at current prices."""

    account_id: str
    wallet_balance: Decimal
    total_invested: Decimal
    current_value: Decimal
    returns: Decimal
    holdings: tuple[Holding, ...]
