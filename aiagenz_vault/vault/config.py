"""
Vault Configuration: Symmetric key loading and validation.

Reads the key from a single environment variable:
    ENCRYPTION_KEY = <exactly 32 raw bytes>

The value is used directly as key material (its UTF-8 bytes), it is NOT
base64 or hex decoded. Ciphertexts already stored by the backend were
produced under this convention.

Security Note:
    Never log key material. Only log the variable name and lengths.
"""
import os
import secrets
import logging
from collections.abc import Mapping
from typing import Optional, Union

from ..exceptions import MissingKey, InvalidKeyLength

logger = logging.getLogger("aiagenz.vault")

KEY_ENV_VAR = "ENCRYPTION_KEY"
KEY_LENGTH = 32  # AES-256


def validate_key(material: Union[bytes, str], name: str = KEY_ENV_VAR) -> bytes:
    """Check that key material is exactly 32 bytes and return it as bytes.

    Args:
        material: Raw key bytes, or a string whose UTF-8 bytes are the key.
        name: Variable name reported in error messages.

    Returns:
        The 32-byte key.

    Raises:
        MissingKey: If material is empty.
        InvalidKeyLength: If material is not exactly 32 bytes.
    """
    if isinstance(material, str):
        material = material.encode("utf-8")
    if not material:
        raise MissingKey(name)
    if len(material) != KEY_LENGTH:
        raise InvalidKeyLength(len(material), name)
    return bytes(material)


def load_key(
    environ: Optional[Mapping[str, str]] = None,
    name: str = KEY_ENV_VAR,
) -> bytes:
    """Load the symmetric key from the environment.

    Must be called once at startup; its failure aborts initialization.

    Args:
        environ: Mapping to read from (defaults to ``os.environ``).
        name: Environment variable holding the key.

    Returns:
        32-byte key.

    Raises:
        MissingKey: If the variable is absent or empty.
        InvalidKeyLength: If the value is not exactly 32 bytes.
    """
    env = os.environ if environ is None else environ
    key = validate_key(env.get(name) or b"", name)
    logger.debug("Loaded symmetric key from %s", name)
    return key


def generate_key() -> str:
    """Generate a random key suitable for ENCRYPTION_KEY.

    This is a utility for operators to generate new keys. The result is 32
    URL-safe characters, so the raw convention yields 32 key bytes.

    Returns:
        32-character key string.
    """
    return secrets.token_urlsafe(24)


class KeyProvisioner:
    """Supplies the validated key for one environment variable."""

    def __init__(
        self,
        name: str = KEY_ENV_VAR,
        environ: Optional[Mapping[str, str]] = None,
    ):
        self.name = name
        self._environ = environ

    def __repr__(self) -> str:
        return f"<KeyProvisioner name={self.name!r}>"

    def load(self) -> bytes:
        """Return the validated key, see :func:`load_key`."""
        return load_key(self._environ, self.name)
