"""
Adapters: password hashing and access tokens.

BcryptPasswordHasher implements PasswordHasher with bcrypt.
JwtTokenService implements TokenService with signed JWTs (python-jose).
"""

import logging
from datetime import datetime, timedelta, timezone

import bcrypt
from jose import JWTError, jwt

from tradedesk.domain.trading.errors import AuthenticationError
from tradedesk.domain.trading.ports import PasswordHasher, TokenService

logger = logging.getLogger(__name__)

BCRYPT_ROUNDS = 10


class BcryptPasswordHasher(PasswordHasher):
    """Salted bcrypt hashes. bcrypt only looks at the first 72 bytes."""

    def __init__(self, rounds: int = BCRYPT_ROUNDS) -> None:
        self._rounds = rounds

    def hash(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self._rounds)
        return bcrypt.hashpw(password.encode("utf-8")[:72], salt).decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        try:
            return bcrypt.checkpw(
                password.encode("utf-8")[:72], password_hash.encode("utf-8")
            )
        except ValueError:
            logger.warning("Stored password hash is malformed")
            return False


class JwtTokenService(TokenService):
    """HMAC-signed JWT access tokens with an expiry claim.

    Attributes:
        secret: Signing key.
        algorithm: JWS algorithm, e.g. HS256.
        expires_minutes: Token lifetime.
    """

    def __init__(self, secret: str, algorithm: str, expires_minutes: int) -> None:
        self.secret = secret
        self.algorithm = algorithm
        self.expires_minutes = expires_minutes

    def issue(self, account_id: str) -> str:
        now = datetime.now(timezone.utc)
        claims = {
            "sub": account_id,
            "iat": now,
            "exp": now + timedelta(minutes=self.expires_minutes),
        }
        return jwt.encode(claims, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> str:
        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except JWTError as exc:
            raise AuthenticationError("invalid token") from exc

        subject = payload.get("sub")
        if not isinstance(subject, str) or not subject:
            raise AuthenticationError("token has no subject")
        return subject
