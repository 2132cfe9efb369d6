"""
CLI entry point for operating TradeDesk.

Usage:
    # Create the database tables
    python -m tradedesk.cli init-db

    # Create tables and load the demo catalog and accounts
    python -m tradedesk.cli seed

    # Run the API server
    python -m tradedesk.cli serve --port 8000
"""

import argparse
import logging
from typing import Optional, Sequence

from tradedesk.core.config import settings
from tradedesk.shared.logging import configure_logging

logger = logging.getLogger(__name__)


def cmd_init_db(args: argparse.Namespace) -> None:
    """Create all tables that do not exist yet."""
    from tradedesk.infrastructure.trading.database import build_engine, init_schema

    init_schema(build_engine(args.database_url))


def cmd_seed(args: argparse.Namespace) -> None:
    """Create tables, then load the demo catalog and demo/admin accounts."""
    from tradedesk.application.trading.accounts import RegisterAccountUseCase
    from tradedesk.application.trading.seed_demo_data import (
        DEMO_ADMIN,
        DEMO_USER,
        SeedDemoDataUseCase,
    )
    from tradedesk.infrastructure.trading.account_repository import (
        AccountRepositoryAdapter,
    )
    from tradedesk.infrastructure.trading.credentials import (
        BcryptPasswordHasher,
        JwtTokenService,
    )
    from tradedesk.infrastructure.trading.database import build_engine, init_schema
    from tradedesk.infrastructure.trading.product_repository import (
        ProductRepositoryAdapter,
    )

    engine = build_engine(args.database_url)
    init_schema(engine)

    account_repo = AccountRepositoryAdapter(engine)
    register = RegisterAccountUseCase(
        account_repo=account_repo,
        hasher=BcryptPasswordHasher(),
        tokens=JwtTokenService(
            secret=settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
            expires_minutes=settings.access_token_expire_minutes,
        ),
        starting_balance=settings.starting_balance,
    )
    report = SeedDemoDataUseCase(
        product_repo=ProductRepositoryAdapter(engine),
        account_repo=account_repo,
        register=register,
    ).execute()

    logger.info(
        "Seed complete: %d products, %d accounts created.",
        report.products_created,
        report.accounts_created,
    )
    if report.accounts_created:
        logger.info("Demo account: %s", DEMO_USER.email)
        logger.info("Admin account: %s", DEMO_ADMIN.email)


def cmd_serve(args: argparse.Namespace) -> None:
    """Run the API with uvicorn."""
    import uvicorn

    logger.info("Starting %s at http://%s:%d", settings.project_name, args.host, args.port)
    uvicorn.run("tradedesk.main:app", host=args.host, port=args.port, reload=args.reload)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="TradeDesk CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    init_parser = subparsers.add_parser("init-db", help="Create database tables")
    init_parser.add_argument("--database-url", default=settings.database_url)
    init_parser.set_defaults(func=cmd_init_db)

    seed_parser = subparsers.add_parser("seed", help="Load demo catalog and accounts")
    seed_parser.add_argument("--database-url", default=settings.database_url)
    seed_parser.set_defaults(func=cmd_seed)

    serve_parser = subparsers.add_parser("serve", help="Run the API server")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)
    serve_parser.add_argument("--reload", action="store_true")
    serve_parser.set_defaults(func=cmd_serve)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    configure_logging(level=settings.log_level)
    args = build_parser().parse_args(argv)
    args.func(args)


if __name__ == "__main__":
    main()
