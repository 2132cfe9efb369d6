"""
Portfolio aggregation.

Folds an account's ledger over current catalog prices into a
PortfolioSummary. Pure function: no IO, no persisted state.
"""

from decimal import Decimal
from typing import Iterable, Mapping

from tradedesk.domain.trading.entities import (
    Account,
    Holding,
    PortfolioSummary,
    Product,
    Transaction,
)
from tradedesk.domain.trading.pricing import quantize_money

ZERO = Decimal("0")


def summarize(
    account: Account,
    transactions: Iterable[Transaction],
    products: Mapping[str, Product],
) -> PortfolioSummary:
    """Aggregate holdings and returns for an account.

    Units and invested amounts are summed from the purchase snapshots;
    current value uses the product's current price. A product missing
    from the catalog contributes zero current value but keeps its
    invested amount.

    Holdings are ordered by the earliest purchase of each product
    (ties broken by transaction id) so the output is deterministic.

    Args:
        account: The account being summarized.
        transactions: All ledger entries owned by the account.
        products: Current catalog products keyed by id.

    Returns:
        The portfolio summary.
    """
    ordered = sorted(transactions, key=lambda t: (t.created_at, t.id))

    units: dict[str, Decimal] = {}
    invested: dict[str, Decimal] = {}
    for tx in ordered:
        units[tx.product_id] = units.get(tx.product_id, ZERO) + tx.units
        invested[tx.product_id] = invested.get(tx.product_id, ZERO) + tx.total_amount

    holdings = []
    for product_id, units_held in units.items():
        product = products.get(product_id)
        if product is None:
            current = ZERO
        else:
            current = units_held * product.price_per_unit
        holdings.append(
            Holding(
                product_id=product_id,
                product=product,
                units_held=units_held,
                invested=quantize_money(invested[product_id]),
                current_value=quantize_money(current),
            )
        )

    total_invested = quantize_money(sum((h.invested for h in holdings), ZERO))
    current_value = quantize_money(sum((h.current_value for h in holdings), ZERO))

    return PortfolioSummary(
        account_id=account.id,
        wallet_balance=account.wallet_balance,
        total_invested=total_invested,
        current_value=current_value,
        returns=current_value - total_invested,
        holdings=tuple(holdings),
    )
