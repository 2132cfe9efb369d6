"""
Adapter: Product catalog repository.

Implements ProductRepository port.
Reads catalog products from the products table.
"""

import json
import logging
from decimal import Decimal
from typing import Iterable, Optional

from sqlalchemy import insert, select
from sqlalchemy.engine import Engine, Row

from tradedesk.domain.trading.entities import Product, ProductCategory
from tradedesk.domain.trading.ports import ProductRepository
from tradedesk.domain.trading.pricing import from_minor_units, to_minor_units
from tradedesk.infrastructure.trading.database import as_utc, products, storage_errors

logger = logging.getLogger(__name__)


def _to_entity(row: Row) -> Product:
    return Product(
        id=row.id,
        name=row.name,
        category=ProductCategory(row.category),
        price_per_unit=from_minor_units(row.price_per_unit_minor),
        metric=row.metric,
        description=row.description,
        price_history=tuple(Decimal(p) for p in json.loads(row.price_history)),
        created_at=as_utc(row.created_at),
    )


class ProductRepositoryAdapter(ProductRepository):
    """SQLAlchemy implementation of the product catalog."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def get_by_id(self, product_id: str) -> Optional[Product]:
        with storage_errors("product lookup"), self._engine.connect() as conn:
            row = conn.execute(
                select(products).where(products.c.id == product_id)
            ).first()
        return _to_entity(row) if row is not None else None

    def get_many(self, product_ids: Iterable[str]) -> dict[str, Product]:
        ids = set(product_ids)
        if not ids:
            return {}
        with storage_errors("product lookup"), self._engine.connect() as conn:
            rows = conn.execute(select(products).where(products.c.id.in_(ids))).all()
        return {row.id: _to_entity(row) for row in rows}

    def list_all(self) -> list[Product]:
        with storage_errors("product listing"), self._engine.connect() as conn:
            rows = conn.execute(
                select(products).order_by(products.c.name, products.c.id)
            ).all()
        return [_to_entity(row) for row in rows]

    def add(self, product: Product) -> None:
        """Persist a catalog product.

        Price history entries are stored as decimal strings in a JSON array.

        Args:
            product: Product entity to insert.
        """
        with storage_errors("product insert"), self._engine.begin() as conn:
            conn.execute(
                insert(products).values(
                    id=product.id,
                    name=product.name,
                    category=product.category.value,
                    price_per_unit_minor=to_minor_units(product.price_per_unit),
                    metric=product.metric,
                    description=product.description,
                    price_history=json.dumps([str(p) for p in product.price_history]),
                    created_at=product.created_at,
                )
            )
        logger.debug("Added product id=%s name=%s", product.id, product.name)
