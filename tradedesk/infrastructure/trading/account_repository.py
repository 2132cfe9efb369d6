"""
Adapter: Account repository.

Implements AccountRepository port.
Persists accounts and watchlist membership through SQLAlchemy Core.
"""

import logging
from typing import Optional

from sqlalchemy import delete, insert, select
from sqlalchemy.engine import Engine, Row
from sqlalchemy.exc import IntegrityError

from tradedesk.domain.trading.entities import Account, Role, WatchToggle
from tradedesk.domain.trading.errors import EmailAlreadyRegisteredError
from tradedesk.domain.trading.ports import AccountRepository
from tradedesk.domain.trading.pricing import from_minor_units, to_minor_units
from tradedesk.infrastructure.trading.database import (
    accounts,
    as_utc,
    storage_errors,
    watchlist_items,
)

logger = logging.getLogger(__name__)


def _to_entity(row: Row) -> Account:
    return Account(
        id=row.id,
        name=row.name,
        email=row.email,
        password_hash=row.password_hash,
        pan=row.pan,
        wallet_balance=from_minor_units(row.wallet_balance_minor),
        role=Role(row.role),
        created_at=as_utc(row.created_at),
    )


class AccountRepositoryAdapter(AccountRepository):
    """SQLAlchemy implementation of the account repository.

    Emails are stored lower-cased so uniqueness is case-insensitive.
    """

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def get_by_id(self, account_id: str) -> Optional[Account]:
        with storage_errors("account lookup"), self._engine.connect() as conn:
            row = conn.execute(
                select(accounts).where(accounts.c.id == account_id)
            ).first()
        return _to_entity(row) if row is not None else None

    def get_by_email(self, email: str) -> Optional[Account]:
        with storage_errors("account lookup"), self._engine.connect() as conn:
            row = conn.execute(
                select(accounts).where(accounts.c.email == email.strip().lower())
            ).first()
        return _to_entity(row) if row is not None else None

    def add(self, account: Account) -> None:
        """Persist a new account.

        Args:
            account: Account entity to insert.

        Raises:
            EmailAlreadyRegisteredError: If the email is already taken.
        """
        email = account.email.strip().lower()
        with storage_errors("account insert"):
            try:
                with self._engine.begin() as conn:
                    conn.execute(
                        insert(accounts).values(
                            id=account.id,
                            name=account.name,
                            email=email,
                            password_hash=account.password_hash,
                            pan=account.pan,
                            wallet_balance_minor=to_minor_units(account.wallet_balance),
                            role=account.role.value,
                            created_at=account.created_at,
                        )
                    )
            except IntegrityError:
                raise EmailAlreadyRegisteredError(email) from None

        logger.info("Created account id=%s role=%s", account.id, account.role.value)

    def list_all(self) -> list[Account]:
        with storage_errors("account listing"), self._engine.connect() as conn:
            rows = conn.execute(
                select(accounts).order_by(accounts.c.created_at, accounts.c.id)
            ).all()
        return [_to_entity(row) for row in rows]

    def get_watchlist(self, account_id: str) -> list[str]:
        with storage_errors("watchlist lookup"), self._engine.connect() as conn:
            rows = conn.execute(
                select(watchlist_items.c.product_id)
                .where(watchlist_items.c.account_id == account_id)
                .order_by(watchlist_items.c.product_id)
            ).all()
        return [row.product_id for row in rows]

    def toggle_watchlist(self, account_id: str, product_id: str) -> WatchToggle:
        """Flip membership of a product on an account's watchlist.

        The delete-or-insert runs in one database transaction. If a
        concurrent toggle inserted the same entry first, the insert
        conflicts and the entry is reported as added.

        Args:
            account_id: Owner of the watchlist.
            product_id: Product to add or remove. Not checked against the catalog.

        Returns:
            WatchToggle.REMOVED if the product was present, else WatchToggle.ADDED.
        """
        with storage_errors("watchlist update"):
            try:
                with self._engine.begin() as conn:
                    removed = conn.execute(
                        delete(watchlist_items).where(
                            watchlist_items.c.account_id == account_id,
                            watchlist_items.c.product_id == product_id,
                        )
                    ).rowcount
                    if removed:
                        return WatchToggle.REMOVED

                    conn.execute(
                        insert(watchlist_items).values(
                            account_id=account_id, product_id=product_id
                        )
                    )
            except IntegrityError:
                logger.info(
                    "Watchlist entry already added concurrently: account=%s product=%s",
                    account_id,
                    product_id,
                )
        return WatchToggle.ADDED
