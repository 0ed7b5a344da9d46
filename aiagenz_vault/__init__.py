"""AiAgenz Vault.

Seals and opens per-project third-party credentials at rest.
"""
from .version import __version__
from .exceptions import (
    VaultError,
    ConfigurationError,
    KeyProvisioningError,
    MissingKey,
    InvalidKeyLength,
    RandomnessUnavailable,
    DecryptionError,
    MalformedEncoding,
    TruncatedCiphertext,
    AuthenticationFailed,
)
from .vault import SecretCipher, KeyProvisioner, load_key
from .conf import Settings
from .projects import (
    ProjectConfig,
    SafeProjectConfig,
    UpdateProjectRequest,
    ProjectSecrets,
    mask_secret,
)

__all__ = [
    "__version__",
    "VaultError",
    "ConfigurationError",
    "KeyProvisioningError",
    "MissingKey",
    "InvalidKeyLength",
    "RandomnessUnavailable",
    "DecryptionError",
    "MalformedEncoding",
    "TruncatedCiphertext",
    "AuthenticationFailed",
    "SecretCipher",
    "KeyProvisioner",
    "load_key",
    "Settings",
    "ProjectConfig",
    "SafeProjectConfig",
    "UpdateProjectRequest",
    "ProjectSecrets",
    "mask_secret",
]
