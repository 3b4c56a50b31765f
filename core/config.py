"""
core/config.py -- Centralized application configuration via pydantic-settings.

All environment variable reads for ScentShop happen here. No module should
call os.getenv() or os.environ.get() directly -- import get_settings() instead.

Design patterns used:
  Singleton via lru_cache: get_settings() instantiates Settings once at first
      call and returns the cached instance on every subsequent call.

  BaseSettings (pydantic-settings): Reads values from environment variables
      and an optional .env file automatically. Field names map to env var names
      (e.g. token_secret -> TOKEN_SECRET, database -> DATABASE).

  @model_validator(mode="after"): Runs cross-field validation after all fields
      are resolved. Dev mode generates a signing secret with a warning,
      production mode refuses to start without one.

Layer rule: core/ is the kernel. This module may not import from api/,
auth/, or catalog/.
"""

import logging
import secrets
from functools import lru_cache

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger("scentshop.config")


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env file.

    All fields have defaults so Settings() can be instantiated in test
    environments without a real .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ------------------------------------------------------------------
    # Core
    # ------------------------------------------------------------------

    debug: bool = False
    # Empty string is the sentinel for "not configured". The model_validator
    # below either generates a dev secret or raises, so callers never see "".
    token_secret: str = ""

    # ------------------------------------------------------------------
    # Database
    # ------------------------------------------------------------------

    database: str = "mongodb://localhost:27017/scentshop"
    # Used only when the connection string does not name a database.
    database_name: str = "scentshop"
    # Server selection timeout; bounds how long a ping or query waits for a
    # down server before raising.
    database_timeout_ms: int = 5000

    # ------------------------------------------------------------------
    # Server
    # ------------------------------------------------------------------

    host: str = "127.0.0.1"
    port: int = 3000
    cors_origins: list[str] = ["*"]

    # ------------------------------------------------------------------
    # Behaviour switches (all off by default)
    # ------------------------------------------------------------------

    require_auth: bool = False
    strict_not_found: bool = False
    unique_keys: bool = False

    # ------------------------------------------------------------------
    # Validators
    # ------------------------------------------------------------------

    @model_validator(mode="after")
    def validate_token_secret(self) -> "Settings":
        """Make sure login tokens are signed with a stable, strong secret.

        Tokens carry no expiry, so the secret is the only thing that ever
        invalidates them. A generated secret is fine for DEBUG runs: every
        restart picks a new one and every token handed out by /login before
        the restart stops verifying, forcing members to log in again.

        Outside DEBUG the secret must come from TOKEN_SECRET so tokens stay
        valid across restarts and replicas, and it must be at least 32
        characters because it is the whole of the HS256 signing key.
        """
        if not self.token_secret:
            if self.debug:
                self.token_secret = secrets.token_hex(32)
                logger.warning(
                    "TOKEN_SECRET not set; generated one for this DEBUG run. "
                    "Tokens issued now stop verifying after a restart."
                )
            else:
                raise ValueError(
                    "TOKEN_SECRET is required in production mode. "
                    "Set TOKEN_SECRET in your environment or .env file. "
                    "To run in development mode, set DEBUG=true."
                )
        if len(self.token_secret) < 32:
            raise ValueError("TOKEN_SECRET must be at least 32 characters.")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return the application Settings singleton.

    In tests: call get_settings.cache_clear() between test cases if you need
    to inject different environment variables.
    """
    return Settings()
