"""
Use cases: Product catalog queries.

Side effects: None (read-only).
Failure cases: ProductNotFoundError for single lookups.
"""

from tradedesk.application.trading.dtos import GetProductQuery, ProductResult
from tradedesk.application.trading.mappers import to_product_result
from tradedesk.domain.trading.errors import ProductNotFoundError
from tradedesk.domain.trading.ports import ProductRepository


class ListProductsUseCase:
    """Returns the whole catalog."""

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def execute(self) -> list[ProductResult]:
        return [to_product_result(p) for p in self._product_repo.list_all()]


class GetProductUseCase:
    """Returns one product with its price history statistics."""

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def execute(self, query: GetProductQuery) -> ProductResult:
        product = self._product_repo.get_by_id(query.product_id)
        if product is None:
            raise ProductNotFoundError(query.product_id)
        return to_product_result(product)
