"""
Use case: Seed the demo catalog and accounts.

Input: none
Output: SeedReport
Side effects: Inserts missing catalog products (matched by name) and the
    demo/admin accounts when their emails are not yet registered.
Failure cases: StorageError.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal

from tradedesk.application.trading.accounts import RegisterAccountUseCase
from tradedesk.application.trading.dtos import RegisterAccountCommand
from tradedesk.domain.trading.entities import Product, ProductCategory, Role
from tradedesk.domain.trading.ports import AccountRepository, ProductRepository

logger = logging.getLogger(__name__)


def _d(*values: str) -> tuple[Decimal, ...]:
    return tuple(Decimal(v) for v in values)


DEMO_CATALOG: tuple[Product, ...] = (
    Product(
        name="Reliance Industries Ltd",
        category=ProductCategory.STOCK,
        price_per_unit=Decimal("2847.50"),
        metric="P/E Ratio: 25.8",
        description="Conglomerate spanning petrochemicals, oil & gas and retail.",
        price_history=_d("2650", "2720", "2780", "2810", "2847.50"),
    ),
    Product(
        name="Tata Consultancy Services",
        category=ProductCategory.STOCK,
        price_per_unit=Decimal("3945.75"),
        metric="P/E Ratio: 28.4",
        description="Global IT services and consulting company.",
        price_history=_d("3800", "3850", "3900", "3920", "3945.75"),
    ),
    Product(
        name="HDFC Bank Ltd",
        category=ProductCategory.STOCK,
        price_per_unit=Decimal("1687.20"),
        metric="P/E Ratio: 19.6",
        description="Private sector bank with a large digital banking platform.",
        price_history=_d("1620", "1640", "1665", "1680", "1687.20"),
    ),
    Product(
        name="Infosys Ltd",
        category=ProductCategory.STOCK,
        price_per_unit=Decimal("1789.40"),
        metric="P/E Ratio: 22.1",
        description="Technology consulting and outsourcing services.",
        price_history=_d("1720", "1745", "1760", "1775", "1789.40"),
    ),
    Product(
        name="SBI BlueChip Fund",
        category=ProductCategory.FUND,
        price_per_unit=Decimal("68.42"),
        metric="1Y Return: 18.5%",
        description="Large-cap equity fund investing in blue-chip companies.",
        price_history=_d("58", "62", "65", "67", "68.42"),
    ),
    Product(
        name="HDFC Balanced Advantage Fund",
        category=ProductCategory.FUND,
        price_per_unit=Decimal("45.89"),
        metric="1Y Return: 14.2%",
        description="Dynamic asset allocation between equity and debt.",
        price_history=_d("40", "42", "44", "45", "45.89"),
    ),
    Product(
        name="Axis Small Cap Fund",
        category=ProductCategory.FUND,
        price_per_unit=Decimal("82.15"),
        metric="1Y Return: 25.7%",
        description="Small-cap equity fund focused on high-growth companies.",
        price_history=_d("65", "70", "75", "79", "82.15"),
    ),
)

DEMO_USER = RegisterAccountCommand(
    name="Demo Investor",
    email="test@demo.com",
    password="password123",
    pan="ABCDE1234F",
)

DEMO_ADMIN = RegisterAccountCommand(
    name="Admin User",
    email="admin@tradedesk.local",
    password="admin123",
    pan="ADMIN1234X",
)


@dataclass(frozen=True)
class SeedReport:
    """Counts of records created by a seeding run."""

    products_created: int
    accounts_created: int


class SeedDemoDataUseCase:
    """Loads the demo catalog and accounts. Safe to run repeatedly."""

    def __init__(
        self,
        product_repo: ProductRepository,
        account_repo: AccountRepository,
        register: RegisterAccountUseCase,
    ) -> None:
        self._product_repo = product_repo
        self._account_repo = account_repo
        self._register = register

    def execute(self) -> SeedReport:
        existing = {p.name for p in self._product_repo.list_all()}
        products_created = 0
        for product in DEMO_CATALOG:
            if product.name in existing:
                continue
            self._product_repo.add(product)
            products_created += 1

        accounts_created = 0
        for command, role in ((DEMO_USER, Role.STANDARD), (DEMO_ADMIN, Role.ADMIN)):
            if self._account_repo.get_by_email(command.email) is not None:
                continue
            self._register.execute(command, role=role)
            accounts_created += 1

        logger.info(
            "Seeded %d products and %d accounts", products_created, accounts_created
        )
        return SeedReport(
            products_created=products_created, accounts_created=accounts_created
        )
