"""
Pydantic schemas for trading API request/response validation.

These schemas enforce input validation and define the API contract.
No business logic belongs here. Purchase quantities are accepted as
raw numbers or strings and validated by the domain so every invalid
quantity maps to the same invalid_units error.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, EmailStr, Field

PRODUCT_ID_MAX_LEN = 64


class HealthResponse(BaseModel):
    """Response schema for the health check endpoint."""

    status: str
    version: str


class ErrorResponse(BaseModel):
    """Standard error response returned by all error handlers."""

    error: str
    code: str


# ------------------------------------------------------------------
# Auth
# ------------------------------------------------------------------


class RegisterRequest(BaseModel):
    """Request schema for account registration.

    Attributes:
        name: Display name (1-200 chars).
        email: Login email.
        password: Plain-text password (6-128 chars).
        pan: Optional tax identifier.
    """

    name: str = Field(..., min_length=1, max_length=200)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)
    pan: str | None = Field(default=None, max_length=20)


class LoginRequest(BaseModel):
    """Request schema for login."""

    email: EmailStr
    password: str = Field(..., min_length=1, max_length=128)


class AccountItem(BaseModel):
    """Public view of an account."""

    id: str
    name: str
    email: str
    pan: str | None
    wallet_balance: Decimal
    role: str
    created_at: datetime


class AuthResponse(BaseModel):
    """Response schema for register/login."""

    token: str
    token_type: str = "bearer"
    user: AccountItem


# ------------------------------------------------------------------
# Catalog
# ------------------------------------------------------------------


class PriceStatsItem(BaseModel):
    """Change and range over a product's price history."""

    low: Decimal
    high: Decimal
    change: Decimal
    change_pct: Decimal | None


class ProductItem(BaseModel):
    """A catalog product in the response."""

    id: str
    name: str
    category: str
    price_per_unit: Decimal
    metric: str
    description: str
    price_history: list[Decimal]
    stats: PriceStatsItem | None


# ------------------------------------------------------------------
# Purchases
# ------------------------------------------------------------------


class BuyRequest(BaseModel):
    """Request schema for a purchase.

    Attributes:
        product_id: Catalog product to buy.
        units: Quantity; a positive number with at most 4 decimal places.
            Reaches the domain unconverted; booleans and other
            non-numbers are invalid units.
    """

    product_id: str = Field(..., min_length=1, max_length=PRODUCT_ID_MAX_LEN)
    units: Any = Field(..., description="Units to buy, as a number or numeric string")


class TransactionItem(BaseModel):
    """A single ledger entry in the response."""

    id: str
    account_id: str
    product_id: str
    product_name: str | None
    units: Decimal
    price_at_purchase: Decimal
    total_amount: Decimal
    created_at: datetime


class BuyResponse(BaseModel):
    """Response schema for a successful purchase."""

    message: str = "Purchase successful"
    transaction: TransactionItem
    wallet_balance: Decimal


class TransactionListResponse(BaseModel):
    """Response schema for ledger listings."""

    transactions: list[TransactionItem]


# ------------------------------------------------------------------
# Portfolio & watchlist
# ------------------------------------------------------------------


class HoldingItem(BaseModel):
    """One aggregated position in the response."""

    product_id: str
    product_name: str | None
    category: str | None
    price_per_unit: Decimal | None
    units_held: Decimal
    invested: Decimal
    current_value: Decimal


class PortfolioResponse(BaseModel):
    """Response schema for the portfolio summary."""

    wallet_balance: Decimal
    total_invested: Decimal
    current_value: Decimal
    returns: Decimal
    holdings: list[HoldingItem]


class WatchlistToggleResponse(BaseModel):
    """Response schema for a watchlist toggle."""

    product_id: str
    state: str
    message: str


class WatchlistResponse(BaseModel):
    """Response schema for the watchlist listing."""

    watchlist: list[ProductItem]


class AccountListResponse(BaseModel):
    """Response schema for the admin account listing."""

    users: list[AccountItem]
