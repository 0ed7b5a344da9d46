"""
Vault Crypto Core: Authenticated sealing of credentials at rest.

Sealed format (byte-compatible with the Go backend's stored values):
    base64.StdEncoding( [nonce 12B][encrypted_payload + GCM_tag 16B] )

Security Note:
    Never log plaintext or ciphertext values.
    Nonces are random 96-bit, drawn fresh for every seal; collision
    probability negligible under normal usage.
"""
import os
import base64
import logging
from collections.abc import Mapping
from typing import Any, Optional, Union

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from ..exceptions import (
    RandomnessUnavailable,
    MalformedEncoding,
    TruncatedCiphertext,
    AuthenticationFailed,
)
from .config import KEY_ENV_VAR, load_key, validate_key

logger = logging.getLogger("aiagenz.vault")

NONCE_SIZE = 12  # 96-bit nonce
TAG_SIZE = 16  # 128-bit GCM tag


# ---------------------------------------------------------------------------
# Nonce source
# ---------------------------------------------------------------------------

def _fresh_nonce() -> bytes:
    """Draw a new 96-bit nonce from the OS CSPRNG.

    Raises:
        RandomnessUnavailable: If the OS cannot supply NONCE_SIZE random bytes.
    """
    try:
        nonce = os.urandom(NONCE_SIZE)
    except (OSError, NotImplementedError) as err:
        raise RandomnessUnavailable(
            f"failed to generate nonce: {err}"
        ) from err
    if len(nonce) != NONCE_SIZE:
        raise RandomnessUnavailable(
            f"failed to generate nonce: got {len(nonce)} of {NONCE_SIZE} bytes"
        )
    return nonce


def _strip_line_breaks(sealed: Union[str, bytes]) -> Union[str, bytes]:
    if isinstance(sealed, str):
        return sealed.replace("\r", "").replace("\n", "")
    if isinstance(sealed, (bytes, bytearray)):
        return bytes(sealed).replace(b"\r", b"").replace(b"\n", b"")
    return sealed


# ---------------------------------------------------------------------------
# Cipher
# ---------------------------------------------------------------------------

class SecretCipher:
    """AES-256-GCM sealing of secrets at rest under one fixed key.

    The AEAD context is built once and reused; instances are immutable and
    may be shared by any number of threads without locking.

    Example:
        >>> cipher = SecretCipher("01234567890123456789012345678901")
        >>> cipher.open(cipher.seal(b"sk-live-abc123"))
        b'sk-live-abc123'
    """

    __slots__ = ("_aead",)

    def __init__(self, key: Union[bytes, str]):
        """Bind the cipher to a key.

        Args:
            key: Exactly 32 bytes of key material (a str is UTF-8 encoded).

        Raises:
            MissingKey: If key is empty.
            InvalidKeyLength: If key is not exactly 32 bytes.
        """
        object.__setattr__(self, "_aead", AESGCM(validate_key(key)))

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("SecretCipher is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError("SecretCipher is immutable")

    def __repr__(self) -> str:
        return "<SecretCipher AES-256-GCM>"

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        name: str = KEY_ENV_VAR,
    ) -> "SecretCipher":
        """Create the process cipher from the key in the environment.

        Raises:
            MissingKey: If the variable is absent or empty.
            InvalidKeyLength: If the value is not exactly 32 bytes.
        """
        return cls(load_key(environ, name))

    def seal(self, plaintext: Union[bytes, str]) -> str:
        """Encrypt and authenticate plaintext.

        Args:
            plaintext: Secret bytes (a str is UTF-8 encoded).

        Returns:
            base64 text of nonce || ciphertext || tag.

        Raises:
            RandomnessUnavailable: If no fresh nonce could be drawn.
        """
        if isinstance(plaintext, str):
            plaintext = plaintext.encode("utf-8")
        nonce = _fresh_nonce()
        ct = self._aead.encrypt(nonce, plaintext, None)
        return base64.b64encode(nonce + ct).decode("ascii")

    def open(self, sealed: Union[str, bytes]) -> bytes:
        """Verify and decrypt a value produced by :meth:`seal`.

        Line breaks inside the text are skipped, as Go's ``base64.StdEncoding``
        does; any other character outside the alphabet is rejected.

        Args:
            sealed: base64 text of nonce || ciphertext || tag.

        Returns:
            The exact original plaintext bytes.

        Raises:
            MalformedEncoding: If sealed is not valid base64.
            TruncatedCiphertext: If the decoded value is shorter than a nonce.
            AuthenticationFailed: If the key is wrong or any byte was altered.
        """
        try:
            blob = base64.b64decode(_strip_line_breaks(sealed), validate=True)
        except (ValueError, TypeError) as err:
            logger.debug("Open rejected: malformed encoding")
            raise MalformedEncoding() from err
        if len(blob) < NONCE_SIZE:
            logger.debug("Open rejected: %d bytes is shorter than a nonce", len(blob))
            raise TruncatedCiphertext()
        nonce = blob[:NONCE_SIZE]
        ct = blob[NONCE_SIZE:]
        if len(ct) < TAG_SIZE:
            raise AuthenticationFailed()
        try:
            return self._aead.decrypt(nonce, ct, None)
        except InvalidTag as err:
            logger.debug("Open rejected: authentication failed")
            raise AuthenticationFailed() from err
