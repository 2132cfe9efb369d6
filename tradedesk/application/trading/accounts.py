"""
Use cases: Registration, login and identity resolution.

RegisterAccountUseCase
    Input: RegisterAccountCommand
    Output: AuthResult
    Side effects: Creates an account funded with the starting balance.
    Failure cases: EmailAlreadyRegisteredError.

LoginUseCase
    Input: LoginCommand
    Output: AuthResult
    Failure cases: InvalidCredentialsError.

AuthenticateUseCase
    Input: bearer token
    Output: account id of the caller
    Failure cases: AuthenticationError.

GetProfileUseCase
    Input: AccountQuery
    Output: AccountProfile
    Failure cases: AccountNotFoundError.
"""

import logging
from decimal import Decimal

from tradedesk.application.trading.dtos import (
    AccountProfile,
    AccountQuery,
    AuthResult,
    LoginCommand,
    RegisterAccountCommand,
)
from tradedesk.application.trading.mappers import to_profile
from tradedesk.domain.trading.entities import Account, Role
from tradedesk.domain.trading.errors import (
    AccountNotFoundError,
    AuthenticationError,
    EmailAlreadyRegisteredError,
    InvalidCredentialsError,
)
from tradedesk.domain.trading.ports import AccountRepository, PasswordHasher, TokenService
from tradedesk.domain.trading.pricing import quantize_money

logger = logging.getLogger(__name__)


class RegisterAccountUseCase:
    """Creates an account and signs the caller in."""

    def __init__(
        self,
        account_repo: AccountRepository,
        hasher: PasswordHasher,
        tokens: TokenService,
        starting_balance: Decimal,
    ) -> None:
        self._account_repo = account_repo
        self._hasher = hasher
        self._tokens = tokens
        self._starting_balance = quantize_money(starting_balance)

    def execute(self, command: RegisterAccountCommand, role: Role = Role.STANDARD) -> AuthResult:
        """Run the registration use case.

        Args:
            command: Name, email, password and optional PAN.
            role: Role of the new account. Only seeding creates admins.

        Returns:
            An access token and the new account's profile.

        Raises:
            EmailAlreadyRegisteredError: If the email is taken.
        """
        email = command.email.strip().lower()
        if self._account_repo.get_by_email(email) is not None:
            raise EmailAlreadyRegisteredError(email)

        account = Account(
            name=command.name.strip(),
            email=email,
            password_hash=self._hasher.hash(command.password),
            wallet_balance=self._starting_balance,
            role=role,
            pan=command.pan,
        )
        self._account_repo.add(account)

        return AuthResult(
            access_token=self._tokens.issue(account.id),
            account=to_profile(account),
        )


class LoginUseCase:
    """Exchanges email and password for an access token.

    Unknown emails and wrong passwords fail identically.
    """

    def __init__(
        self,
        account_repo: AccountRepository,
        hasher: PasswordHasher,
        tokens: TokenService,
    ) -> None:
        self._account_repo = account_repo
        self._hasher = hasher
        self._tokens = tokens

    def execute(self, command: LoginCommand) -> AuthResult:
        account = self._account_repo.get_by_email(command.email)
        if account is None or not self._hasher.verify(
            command.password, account.password_hash
        ):
            logger.info("Rejected login attempt")
            raise InvalidCredentialsError()

        return AuthResult(
            access_token=self._tokens.issue(account.id),
            account=to_profile(account),
        )


class AuthenticateUseCase:
    """Resolves a bearer token to the id of an existing account."""

    def __init__(self, account_repo: AccountRepository, tokens: TokenService) -> None:
        self._account_repo = account_repo
        self._tokens = tokens

    def execute(self, token: str) -> str:
        account_id = self._tokens.verify(token)
        if self._account_repo.get_by_id(account_id) is None:
            raise AuthenticationError("unknown account")
        return account_id


class GetProfileUseCase:
    """Returns the caller's profile."""

    def __init__(self, account_repo: AccountRepository) -> None:
        self._account_repo = account_repo

    def execute(self, query: AccountQuery) -> AccountProfile:
        account = self._account_repo.get_by_id(query.account_id)
        if account is None:
            raise AccountNotFoundError(query.account_id)
        return to_profile(account)
