"""
Database schema and engine factory.

Tables are declared with SQLAlchemy Core. Money columns hold integer
minor units; units are stored as plain decimal text so fractional
fund units survive the round trip exactly.
"""

import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from functools import lru_cache
from typing import Iterator

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    create_engine,
)
from sqlalchemy.engine import Engine
from sqlalchemy.exc import DBAPIError

from tradedesk.core.config import settings
from tradedesk.domain.trading.errors import StorageError

logger = logging.getLogger(__name__)

metadata = MetaData()

accounts = Table(
    "accounts",
    metadata,
    Column("id", String(32), primary_key=True),
    Column("name", String(200), nullable=False),
    Column("email", String(320), nullable=False, unique=True),
    Column("password_hash", String(100), nullable=False),
    Column("pan", String(20)),
    Column("wallet_balance_minor", Integer, nullable=False),
    Column("role", String(16), nullable=False),
    Column("created_at", DateTime(timezone=True), nullable=False),
)

products = Table(
    "products",
    metadata,
    Column("id", String(32), primary_key=True),
    Column("name", String(200), nullable=False),
    Column("category", String(16), nullable=False),
    Column("price_per_unit_minor", Integer, nullable=False),
    Column("metric", String(100), nullable=False, default=""),
    Column("description", Text, nullable=False, default=""),
    Column("price_history", Text, nullable=False, default="[]"),
    Column("created_at", DateTime(timezone=True), nullable=False),
)

transactions = Table(
    "transactions",
    metadata,
    Column("id", String(32), primary_key=True),
    Column("account_id", String(32), ForeignKey("accounts.id"), nullable=False),
    Column("product_id", String(32), nullable=False),
    Column("units", String(40), nullable=False),
    Column("price_at_purchase_minor", Integer, nullable=False),
    Column("total_amount_minor", Integer, nullable=False),
    Column("created_at", DateTime(timezone=True), nullable=False),
    Index("ix_transactions_account_id", "account_id"),
)

# No foreign key on product_id: watched products may be dangling.
watchlist_items = Table(
    "watchlist_items",
    metadata,
    Column("account_id", String(32), ForeignKey("accounts.id"), primary_key=True),
    Column("product_id", String(32), primary_key=True),
)


def build_engine(database_url: str) -> Engine:
    """Create an engine for the given URL.

    SQLite connections are shared across the request thread pool, so
    the same-thread check is disabled for them.
    """
    connect_args = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    return create_engine(database_url, pool_pre_ping=True, connect_args=connect_args)


@lru_cache(maxsize=1)
def get_engine() -> Engine:
    """Return the process-wide engine built from application settings."""
    return build_engine(settings.database_url)


def init_schema(engine: Engine) -> None:
    """Create all tables that do not exist yet."""
    metadata.create_all(engine)
    logger.info("Database schema ready at %s", engine.url.render_as_string(hide_password=True))


@contextmanager
def storage_errors(operation: str) -> Iterator[None]:
    """Translate driver failures into StorageError.

    The driver message is logged, never propagated to clients.
    """
    try:
        yield
    except DBAPIError as exc:
        logger.error("Storage failure during %s: %s", operation, exc.orig)
        raise StorageError(operation) from exc


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes read back from SQLite."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
