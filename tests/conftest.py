"""
Shared pytest fixtures.

Every test gets its own SQLite database file under tmp_path.
API tests swap the application's engine through dependency_overrides.
"""

import os

os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("JWT_SECRET", "test-secret")

from decimal import Decimal  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from tradedesk.domain.trading.entities import (  # noqa: E402
    Account,
    Product,
    ProductCategory,
    Role,
)
from tradedesk.infrastructure.trading.account_repository import (  # noqa: E402
    AccountRepositoryAdapter,
)
from tradedesk.infrastructure.trading.database import (  # noqa: E402
    build_engine,
    get_engine,
    init_schema,
)
from tradedesk.infrastructure.trading.ledger_repository import (  # noqa: E402
    LedgerRepositoryAdapter,
)
from tradedesk.infrastructure.trading.product_repository import (  # noqa: E402
    ProductRepositoryAdapter,
)
from tradedesk.main import app  # noqa: E402


@pytest.fixture
def engine(tmp_path):
    """A fresh SQLite database with the full schema."""
    eng = build_engine(f"sqlite:///{tmp_path / 'tradedesk-test.db'}")
    init_schema(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def account_repo(engine) -> AccountRepositoryAdapter:
    return AccountRepositoryAdapter(engine)


@pytest.fixture
def product_repo(engine) -> ProductRepositoryAdapter:
    return ProductRepositoryAdapter(engine)


@pytest.fixture
def ledger_repo(engine) -> LedgerRepositoryAdapter:
    return LedgerRepositoryAdapter(engine)


@pytest.fixture
def make_account(account_repo):
    """Insert an account with the given balance and return it."""

    def _make(
        balance: str = "100000.00",
        email: str = "investor@example.com",
        role: Role = Role.STANDARD,
    ) -> Account:
        account = Account(
            name="Investor",
            email=email,
            password_hash="not-a-real-hash",
            wallet_balance=Decimal(balance),
            role=role,
        )
        account_repo.add(account)
        return account

    return _make


@pytest.fixture
def make_product(product_repo):
    """Insert a catalog product with the given price and return it."""

    def _make(
        price: str = "2847.50",
        name: str = "Reliance Industries Ltd",
        category: ProductCategory = ProductCategory.STOCK,
        history: tuple[str, ...] = (),
    ) -> Product:
        product = Product(
            name=name,
            category=category,
            price_per_unit=Decimal(price),
            metric="P/E Ratio: 25.8",
            description="Test product",
            price_history=tuple(Decimal(h) for h in history),
        )
        product_repo.add(product)
        return product

    return _make


@pytest.fixture
def client(engine):
    """TestClient bound to the per-test database."""
    app.dependency_overrides[get_engine] = lambda: engine
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def register(client):
    """Register an account through the API and return (token, user)."""

    def _register(email: str = "investor@example.com", password: str = "secret123"):
        response = client.post(
            "/api/v1/auth/register",
            json={"name": "Investor", "email": email, "password": password},
        )
        assert response.status_code == 200, response.text
        body = response.json()
        return body["token"], body["user"]

    return _register
