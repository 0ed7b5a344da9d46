"""
Vault Exceptions: Error taxonomy for key provisioning and secret sealing.

Startup errors (``KeyProvisioningError``, ``ConfigurationError``) must abort
process initialization. ``DecryptionError`` subclasses all carry the same
public message so that a caller echoing ``str(err)`` cannot tell a wrong key
from a tampered value.
"""

DECRYPTION_FAILED_MESSAGE = "cannot decrypt secret"


class VaultError(Exception):
    """Base class for every error raised by aiagenz_vault."""


class ConfigurationError(VaultError):
    """A required process setting is missing or invalid."""


class KeyProvisioningError(VaultError):
    """The symmetric key could not be provisioned."""


class MissingKey(KeyProvisioningError):
    """Key material is absent or empty."""

    def __init__(self, name: str = "ENCRYPTION_KEY"):
        self.name = name
        super().__init__(f"{name} is required (must be exactly 32 bytes)")


class InvalidKeyLength(KeyProvisioningError):
    """Key material is present but not exactly 32 bytes long."""

    def __init__(self, length: int, name: str = "ENCRYPTION_KEY"):
        self.length = length
        self.name = name
        super().__init__(f"{name} must be exactly 32 bytes, got {length}")


class RandomnessUnavailable(VaultError):
    """The secure random source could not supply a nonce."""


class DecryptionError(VaultError):
    """A sealed secret cannot be opened."""

    def __init__(self, message: str = DECRYPTION_FAILED_MESSAGE):
        super().__init__(message)


class MalformedEncoding(DecryptionError):
    """Sealed value is not valid base64 text."""


class TruncatedCiphertext(DecryptionError):
    """Decoded value is shorter than the nonce."""


class AuthenticationFailed(DecryptionError):
    """Authentication tag did not verify (wrong key or altered bytes)."""
