"""
Tests for the operator CLI and the WSGI entry point.
"""

from tradedesk.application.trading.seed_demo_data import (
    DEMO_ADMIN,
    DEMO_CATALOG,
    DEMO_USER,
)
from tradedesk.cli import build_parser, main
from tradedesk.infrastructure.trading.account_repository import AccountRepositoryAdapter
from tradedesk.infrastructure.trading.database import build_engine
from tradedesk.infrastructure.trading.product_repository import ProductRepositoryAdapter


class TestCli:
    """Tests for init-db and seed."""

    def test_seed_is_idempotent(self, tmp_path) -> None:
        url = f"sqlite:///{tmp_path / 'seeded.db'}"

        main(["seed", "--database-url", url])
        main(["seed", "--database-url", url])

        engine = build_engine(url)
        try:
            products = ProductRepositoryAdapter(engine).list_all()
            accounts = AccountRepositoryAdapter(engine)
            assert len(products) == len(DEMO_CATALOG)
            assert accounts.get_by_email(DEMO_USER.email) is not None
            assert accounts.get_by_email(DEMO_ADMIN.email).is_admin
            assert len(accounts.list_all()) == 2
        finally:
            engine.dispose()

    def test_init_db_creates_empty_schema(self, tmp_path) -> None:
        url = f"sqlite:///{tmp_path / 'empty.db'}"
        main(["init-db", "--database-url", url])

        engine = build_engine(url)
        try:
            assert ProductRepositoryAdapter(engine).list_all() == []
        finally:
            engine.dispose()

    def test_serve_defaults(self) -> None:
        args = build_parser().parse_args(["serve"])
        assert args.host == "127.0.0.1"
        assert args.port == 8000
        assert not args.reload


class TestWsgi:
    """Tests for the WSGI wrapper."""

    def test_application_is_callable(self) -> None:
        from tradedesk.wsgi import application

        assert callable(application)
