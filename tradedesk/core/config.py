"""
Application configuration.

Loads settings from environment variables and .env file.
All configuration is centralized here, with no scattered magic strings.
"""

from decimal import Decimal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment.

    Attributes:
        project_name: Display name for the API.
        version: Current API version string.
        debug: Enable debug mode. Must be False in production.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
        rate_limit_enabled: Master switch for slowapi rate limiting.
        rate_limit_default: Default rate limit for all endpoints.
        rate_limit_auth: Rate limit for register/login endpoints.
        database_url: SQLAlchemy URL of the relational store.
        jwt_secret: HMAC secret used to sign access tokens.
        jwt_algorithm: JWS algorithm for access tokens.
        access_token_expire_minutes: Access token lifetime.
        starting_balance: Wallet balance granted at registration.
        buy_max_attempts: Attempts for a purchase that loses a concurrent
            balance update before the conflict is surfaced.
        cors_origins: Origins allowed to call the API from a browser.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    project_name: str = "TradeDesk"
    version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"
    rate_limit_enabled: bool = True
    rate_limit_default: str = "60/minute"
    rate_limit_auth: str = "10/minute"

    database_url: str = "sqlite:///./tradedesk.db"

    jwt_secret: str = "change-me"
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24 * 7

    starting_balance: Decimal = Decimal("100000.00")
    buy_max_attempts: int = 3

    cors_origins: list[str] = ["http://localhost:5173"]


settings = Settings()
