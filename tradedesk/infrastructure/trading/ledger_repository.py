"""
Adapter: Purchase ledger repository.

Implements LedgerRepository port.
The purchase commit debits the wallet with a compare-and-swap update
and appends the transaction row inside a single database transaction.
"""

import logging
from decimal import Decimal

from sqlalchemy import insert, select, update
from sqlalchemy.engine import Engine, Row

from tradedesk.domain.trading.entities import Transaction
from tradedesk.domain.trading.errors import ConcurrencyConflictError
from tradedesk.domain.trading.ports import LedgerRepository
from tradedesk.domain.trading.pricing import (
    format_units,
    from_minor_units,
    to_minor_units,
)
from tradedesk.infrastructure.trading.database import (
    accounts,
    as_utc,
    storage_errors,
    transactions,
)

logger = logging.getLogger(__name__)


def _to_entity(row: Row) -> Transaction:
    return Transaction(
        id=row.id,
        account_id=row.account_id,
        product_id=row.product_id,
        units=Decimal(row.units),
        price_at_purchase=from_minor_units(row.price_at_purchase_minor),
        total_amount=from_minor_units(row.total_amount_minor),
        created_at=as_utc(row.created_at),
    )


class LedgerRepositoryAdapter(LedgerRepository):
    """SQLAlchemy implementation of the append-only purchase ledger."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def record_purchase(
        self,
        transaction: Transaction,
        expected_balance: Decimal,
        new_balance: Decimal,
    ) -> None:
        """Debit the wallet and append the transaction atomically.

        The UPDATE only matches when the stored balance still equals
        expected_balance. When it matches nothing, the surrounding
        transaction is rolled back and a conflict is raised, so no
        ledger row is ever written without its debit.

        Args:
            transaction: The ledger entry to append.
            expected_balance: Balance observed during the funds check.
            new_balance: Balance after the debit. Never negative.

        Raises:
            ConcurrencyConflictError: If another writer changed the balance.
            StorageError: If the store fails; nothing is committed.
        """
        with storage_errors("purchase commit"), self._engine.begin() as conn:
            debited = conn.execute(
                update(accounts)
                .where(
                    accounts.c.id == transaction.account_id,
                    accounts.c.wallet_balance_minor == to_minor_units(expected_balance),
                )
                .values(wallet_balance_minor=to_minor_units(new_balance))
            ).rowcount
            if debited != 1:
                raise ConcurrencyConflictError(transaction.account_id)

            conn.execute(
                insert(transactions).values(
                    id=transaction.id,
                    account_id=transaction.account_id,
                    product_id=transaction.product_id,
                    units=format_units(transaction.units),
                    price_at_purchase_minor=to_minor_units(transaction.price_at_purchase),
                    total_amount_minor=to_minor_units(transaction.total_amount),
                    created_at=transaction.created_at,
                )
            )

        logger.info(
            "Recorded purchase tx=%s account=%s product=%s total=%s",
            transaction.id,
            transaction.account_id,
            transaction.product_id,
            transaction.total_amount,
        )

    def list_by_account(self, account_id: str) -> list[Transaction]:
        with storage_errors("ledger query"), self._engine.connect() as conn:
            rows = conn.execute(
                select(transactions)
                .where(transactions.c.account_id == account_id)
                .order_by(transactions.c.created_at, transactions.c.id)
            ).all()
        return [_to_entity(row) for row in rows]

    def list_all(self, limit: int = 100) -> list[Transaction]:
        with storage_errors("ledger query"), self._engine.connect() as conn:
            rows = conn.execute(
                select(transactions)
                .order_by(transactions.c.created_at.desc(), transactions.c.id)
                .limit(limit)
            ).all()
        return [_to_entity(row) for row in rows]
