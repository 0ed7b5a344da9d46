"""Vault: Authenticated encryption of credentials at rest.

Security Note (Threat Model):
    One SecretCipher is built at startup and shared read-only for the process
    lifetime. Decrypted values exist in process memory while a request uses
    them; callers must not log, echo or cache them beyond that scope.
"""

from .crypto import SecretCipher
from .config import KeyProvisioner, load_key, validate_key, generate_key

__all__ = [
    "SecretCipher",
    "KeyProvisioner",
    "load_key",
    "validate_key",
    "generate_key",
]
