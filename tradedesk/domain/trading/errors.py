"""
Domain-specific errors for the trading bounded context.

All errors raised from the domain layer must be defined here.
These are mapped to HTTP responses at the interface layer.
No framework imports allowed.
"""


class TradingDomainError(Exception):
    """Base error for all trading domain errors.

    Attributes:
        code: Stable machine-readable identifier rendered to clients.
    """

    code = "trading_error"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class AccountNotFoundError(TradingDomainError):
    """Raised when an account id does not resolve to an account."""

    code = "account_not_found"

    def __init__(self, account_id: str) -> None:
        super().__init__(f"Account not found: {account_id}")
        self.account_id = account_id


class ProductNotFoundError(TradingDomainError):
    """Raised when a product id does not resolve to a catalog product."""

    code = "product_not_found"

    def __init__(self, product_id: str) -> None:
        super().__init__(f"Product not found: {product_id}")
        self.product_id = product_id


class InvalidUnitsError(TradingDomainError):
    """Raised when a purchase quantity is not a finite positive number."""

    code = "invalid_units"

    def __init__(self, units: object) -> None:
        super().__init__(f"Invalid units: {units!r}")
        self.units = units


class InsufficientFundsError(TradingDomainError):
    """Raised when the wallet balance cannot cover a purchase."""

    code = "insufficient_funds"

    def __init__(self, required: str, available: str) -> None:
        super().__init__(
            f"Insufficient funds: required {required}, available {available}"
        )
        self.required = required
        self.available = available


class ConcurrencyConflictError(TradingDomainError):
    """Raised when the balance changed between the funds check and the commit.

    Callers may retry the whole operation.
    """

    code = "concurrency_conflict"

    def __init__(self, account_id: str) -> None:
        super().__init__(f"Concurrent update on account: {account_id}")
        self.account_id = account_id


class StorageError(TradingDomainError):
    """Raised when the underlying store is unavailable or fails."""

    code = "storage_unavailable"

    def __init__(self, reason: str) -> None:
        super().__init__(f"Storage failure: {reason}")
        self.reason = reason


class EmailAlreadyRegisteredError(TradingDomainError):
    """Raised when registering an email that already has an account."""

    code = "email_registered"

    def __init__(self, email: str) -> None:
        super().__init__(f"Email already registered: {email}")
        self.email = email


class InvalidCredentialsError(TradingDomainError):
    """Raised when an email/password pair does not match an account."""

    code = "invalid_credentials"

    def __init__(self) -> None:
        super().__init__("Invalid credentials")


class AuthenticationError(TradingDomainError):
    """Raised when a request carries no valid access token."""

    code = "unauthorized"

    def __init__(self, reason: str) -> None:
        super().__init__(f"Authentication failed: {reason}")
        self.reason = reason


class PermissionDeniedError(TradingDomainError):
    """Raised when an authenticated account lacks the required role."""

    code = "forbidden"

    def __init__(self, account_id: str, required_role: str) -> None:
        super().__init__(
            f"Account {account_id} lacks required role: {required_role}"
        )
        self.account_id = account_id
        self.required_role = required_role
