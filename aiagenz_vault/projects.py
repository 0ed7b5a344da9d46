"""
Project Secrets: Sealed per-project credential documents.

Each project row stores its credential document (bot token, provider API key,
model selection, channel and auth profiles) as a single sealed value. API
responses only ever carry the masked form.

Security Note:
    Never log decrypted documents. Only log project names and error kinds.
"""
import logging
from typing import Any, Optional, Union

import orjson
from pydantic import BaseModel, Field, ValidationError

from .exceptions import DecryptionError
from .vault.crypto import SecretCipher

logger = logging.getLogger("aiagenz.vault")

MASK = "********"


def mask_secret(value: str) -> str:
    """Mask a credential for display.

    Values shorter than 8 bytes (UTF-8) are fully hidden; longer values keep
    their first and last four characters. A value of 8+ bytes but fewer than
    8 characters is also fully hidden, so short non-ASCII tokens never show
    whole.
    """
    if len(value.encode("utf-8")) < 8 or len(value) < 8:
        return MASK
    return f"{value[:4]}...{value[-4:]}"


class ProjectConfig(BaseModel):
    """Sensitive configuration for a project."""

    telegram_token: str = Field(default="", alias="telegramToken")
    api_key: str = Field(default="", alias="apiKey")
    provider: str = ""
    model: str = ""
    channels: Optional[dict[str, Any]] = None
    auth_profiles: Optional[dict[str, Any]] = Field(default=None, alias="authProfiles")
    system_prompt: str = Field(default="", alias="systemPrompt")

    model_config = {"populate_by_name": True}

    def to_json(self) -> bytes:
        """Encode with wire names, omitting empty fields."""
        return orjson.dumps(
            self.model_dump(by_alias=True, exclude_defaults=True)
        )

    @classmethod
    def from_json(cls, data: Union[bytes, str]) -> "ProjectConfig":
        return cls.model_validate(orjson.loads(data))


class SafeProjectConfig(BaseModel):
    """Project configuration with credentials masked for API responses.

    Channels and auth profiles embed bot and OAuth tokens, so they are never
    part of this view.
    """

    telegram_token: str = Field(default="", alias="telegramToken")
    api_key: str = Field(default="", alias="apiKey")
    provider: str = ""
    model: str = ""

    model_config = {"populate_by_name": True}

    @classmethod
    def from_config(cls, config: ProjectConfig) -> "SafeProjectConfig":
        return cls(
            telegram_token=mask_secret(config.telegram_token),
            api_key=mask_secret(config.api_key),
            provider=config.provider,
            model=config.model,
        )


class UpdateProjectRequest(BaseModel):
    """Partial update of a project; empty fields keep the stored value."""

    name: str = ""
    telegram_token: str = Field(default="", alias="telegramToken")
    api_key: str = Field(default="", alias="apiKey")
    provider: str = ""
    model: str = ""
    system_prompt: str = Field(default="", alias="systemPrompt")

    model_config = {"populate_by_name": True}


class ProjectSecrets:
    """Seals, opens and masks project credential documents.

    Wraps the process-wide :class:`SecretCipher`; holds no other state.
    """

    def __init__(self, cipher: SecretCipher):
        self._cipher = cipher

    def seal_config(self, config: ProjectConfig) -> str:
        """Seal a credential document for storage."""
        return self._cipher.seal(config.to_json())

    def open_config(self, sealed: Optional[Union[str, bytes]]) -> ProjectConfig:
        """Open a stored credential document.

        A project without stored config yields an empty document.

        Raises:
            DecryptionError: If the stored value cannot be decrypted.
        """
        if not sealed:
            return ProjectConfig()
        return ProjectConfig.from_json(self._cipher.open(sealed))

    def update_config(
        self,
        sealed: Optional[Union[str, bytes]],
        request: UpdateProjectRequest,
    ) -> tuple[ProjectConfig, str]:
        """Apply a partial update and reseal.

        Returns:
            Tuple of (updated document, newly sealed value).

        Raises:
            DecryptionError: If the stored value cannot be decrypted; the
                stored credentials are never overwritten with a blank document.
        """
        current = self.open_config(sealed)
        changes = {
            field: value
            for field, value in request.model_dump(exclude={"name"}).items()
            if value
        }
        updated = current.model_copy(update=changes)
        return updated, self.seal_config(updated)

    def safe_config(
        self,
        sealed: Optional[Union[str, bytes]],
        project: str = "",
    ) -> Optional[SafeProjectConfig]:
        """Return the masked document, or None if it cannot be shown.

        Values that cannot be decrypted, or that decrypt to something other
        than a credential document, are logged and omitted from the response.
        """
        if not sealed:
            return None
        try:
            config = self.open_config(sealed)
        except (DecryptionError, orjson.JSONDecodeError, ValidationError) as err:
            logger.warning(
                "Cannot read config for project=%s: %s",
                project, type(err).__name__,
            )
            return None
        return SafeProjectConfig.from_config(config)
