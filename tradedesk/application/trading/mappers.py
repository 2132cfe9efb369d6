"""
Entity-to-DTO mapping shared by the trading use cases.
"""

from typing import Optional

from tradedesk.application.trading.dtos import (
    AccountProfile,
    PriceStatsResult,
    ProductResult,
    TransactionResult,
)
from tradedesk.domain.trading.entities import Account, Product, Transaction
from tradedesk.domain.trading.pricing import price_history_stats


def to_profile(account: Account) -> AccountProfile:
    return AccountProfile(
        id=account.id,
        name=account.name,
        email=account.email,
        pan=account.pan,
        wallet_balance=account.wallet_balance,
        role=account.role.value,
        created_at=account.created_at,
    )


def to_product_result(product: Product) -> ProductResult:
    stats = price_history_stats(product.price_history)
    return ProductResult(
        id=product.id,
        name=product.name,
        category=product.category.value,
        price_per_unit=product.price_per_unit,
        metric=product.metric,
        description=product.description,
        price_history=list(product.price_history),
        stats=(
            PriceStatsResult(
                low=stats.low,
                high=stats.high,
                change=stats.change,
                change_pct=stats.change_pct,
            )
            if stats is not None
            else None
        ),
    )


def to_transaction_result(
    tx: Transaction, product: Optional[Product] = None
) -> TransactionResult:
    return TransactionResult(
        id=tx.id,
        account_id=tx.account_id,
        product_id=tx.product_id,
        product_name=product.name if product is not None else None,
        units=tx.units,
        price_at_purchase=tx.price_at_purchase,
        total_amount=tx.total_amount,
        created_at=tx.created_at,
    )
