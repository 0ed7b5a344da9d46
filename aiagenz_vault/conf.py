"""
Process Settings: Validated backend configuration loaded at startup.

Environment variables:
    PORT            listening port (default 4001)
    JWT_SECRET      required
    DATABASE_URL    required
    ENCRYPTION_KEY  required, exactly 32 raw bytes
    CORS_ORIGINS    comma-separated origin list
    ADMIN_EMAIL     bootstrap admin account
    ADMIN_PASSWORD  bootstrap admin password

Empty values are treated as unset. Values from an optional ``.env`` file take
precedence over the process environment.

Security Note:
    Never log secret values. ``repr(Settings)`` hides them.
"""
import os
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Optional, Union

from dotenv import dotenv_values
from pydantic import BaseModel, Field, field_validator

from .exceptions import ConfigurationError
from .vault.config import KEY_ENV_VAR, validate_key
from .vault.crypto import SecretCipher

logger = logging.getLogger("aiagenz.conf")

DEFAULT_PORT = 4001
MAX_PORT = 65535
DEFAULT_CORS_ORIGINS = (
    "http://localhost:3000,http://localhost:3010,https://aiagenz.cloud"
)
DEFAULT_ADMIN_EMAIL = "admin@aiagenz.id"
DEFAULT_ADMIN_PASSWORD = "admin123"


def _getenv(env: Mapping[str, str], key: str, fallback: str = "") -> str:
    value = env.get(key)
    return value if value else fallback


def parse_origins(raw: str) -> list[str]:
    """Split a comma-separated origin list, trimming whitespace."""
    return [origin.strip() for origin in raw.split(",")]


def read_environment(
    environ: Optional[Mapping[str, str]] = None,
    dotenv_path: Optional[Union[str, Path]] = None,
) -> dict[str, str]:
    """Merge the process environment with an optional ``.env`` file.

    A missing ``.env`` file is ignored (the process environment is used).
    """
    env = dict(os.environ if environ is None else environ)
    if dotenv_path is None:
        return env
    path = Path(dotenv_path)
    if not path.is_file():
        logger.debug("No .env file at %s, using process environment", path)
        return env
    logger.info("Loading environment from %s", path)
    for key, value in dotenv_values(path).items():
        if value is not None:
            env[key] = value
    return env


class Settings(BaseModel):
    """Validated backend settings."""

    port: int = Field(default=DEFAULT_PORT, ge=0, le=MAX_PORT)
    jwt_secret: str = Field(min_length=1, repr=False)
    database_url: str = Field(min_length=1, repr=False)
    encryption_key: bytes = Field(repr=False)
    cors_origins: list[str] = Field(
        default_factory=lambda: parse_origins(DEFAULT_CORS_ORIGINS)
    )
    admin_email: str = Field(default=DEFAULT_ADMIN_EMAIL)
    admin_password: str = Field(default=DEFAULT_ADMIN_PASSWORD, repr=False)

    model_config = {"frozen": True}

    @field_validator("encryption_key", mode="before")
    @classmethod
    def validate_encryption_key(cls, v: Union[bytes, str]) -> bytes:
        """Enforce the 32-byte key length (raises InvalidKeyLength/MissingKey)."""
        return validate_key(v)

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        dotenv_path: Optional[Union[str, Path]] = None,
    ) -> "Settings":
        """Create Settings by loading values from environment.

        Returns:
            Populated Settings instance.

        Raises:
            ConfigurationError: If a required value is missing or PORT is
                not an integer in 0..65535.
            MissingKey: If ENCRYPTION_KEY is absent or empty.
            InvalidKeyLength: If ENCRYPTION_KEY is not exactly 32 bytes.
        """
        env = read_environment(environ, dotenv_path)

        raw_port = _getenv(env, "PORT", str(DEFAULT_PORT))
        try:
            port = int(raw_port)
        except ValueError as err:
            raise ConfigurationError(
                f"PORT must be an integer, got {raw_port!r}"
            ) from err
        if not 0 <= port <= MAX_PORT:
            raise ConfigurationError(
                f"PORT must be between 0 and {MAX_PORT}, got {port}"
            )

        jwt_secret = _getenv(env, "JWT_SECRET")
        if not jwt_secret:
            raise ConfigurationError("JWT_SECRET is required")

        database_url = _getenv(env, "DATABASE_URL")
        if not database_url:
            raise ConfigurationError("DATABASE_URL is required")

        settings = cls(
            port=port,
            jwt_secret=jwt_secret,
            database_url=database_url,
            encryption_key=_getenv(env, KEY_ENV_VAR),
            cors_origins=parse_origins(
                _getenv(env, "CORS_ORIGINS", DEFAULT_CORS_ORIGINS)
            ),
            admin_email=_getenv(env, "ADMIN_EMAIL", DEFAULT_ADMIN_EMAIL),
            admin_password=_getenv(env, "ADMIN_PASSWORD", DEFAULT_ADMIN_PASSWORD),
        )
        logger.info(
            "Settings loaded: port=%d cors_origins=%d",
            settings.port, len(settings.cors_origins),
        )
        return settings

    def create_cipher(self) -> SecretCipher:
        """Build the process-wide SecretCipher from the validated key."""
        return SecretCipher(self.encryption_key)
