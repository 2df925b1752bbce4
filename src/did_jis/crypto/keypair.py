"""KeyPair — the Ed25519 key material owned by a DID engine.

A :class:`KeyPair` is built either from fresh randomness or from an imported
32-byte secret seed. The public half is always derived from the secret, so
a keypair with mismatched halves cannot exist. Importing the same secret
twice yields the same public key, which is what lets an identity survive a
restart.

The secret is never part of ``repr()`` and is only exposed through
:meth:`KeyPair.secret_hex` for deliberate export.
"""
from __future__ import annotations

import re

from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey
from cryptography.hazmat.primitives.serialization import (
    Encoding,
    NoEncryption,
    PrivateFormat,
    PublicFormat,
)

from did_jis.crypto.multibase import encode_public_key
from did_jis.errors import InvalidKeyEncodingError

SECRET_KEY_HEX_LENGTH: int = 64

_SECRET_HEX_PATTERN = re.compile(r"[0-9a-fA-F]{64}")


class KeyPair:
    """An Ed25519 secret/public key pair.

    Use :meth:`generate` or :meth:`from_secret_hex`; the constructor takes
    an already-built ``Ed25519PrivateKey``.

    Example
    -------
    ::

        keypair = KeyPair.from_secret_hex("00" * 32)
        keypair.public_hex()
        # '3b6a27bcceb6a42d62a3a8d02a6f0d73653215771de243a63ac048a18b59da29'
    """

    __slots__ = ("_private_key", "_public_bytes")

    def __init__(self, private_key: Ed25519PrivateKey) -> None:
        self._private_key = private_key
        self._public_bytes = private_key.public_key().public_bytes(
            Encoding.Raw, PublicFormat.Raw
        )

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def generate(cls) -> "KeyPair":
        """Generate a keypair from a cryptographically random 32-byte seed."""
        return cls(Ed25519PrivateKey.generate())

    @classmethod
    def from_secret_hex(cls, secret_hex: str) -> "KeyPair":
        """Import a keypair from a 64-character hex secret seed.

        Parameters
        ----------
        secret_hex:
            Exactly 64 hexadecimal characters, upper or lower case.

        Raises
        ------
        InvalidKeyEncodingError
            If the input is not a string of exactly 64 hex characters.
        """
        if not isinstance(secret_hex, str):
            raise InvalidKeyEncodingError(
                f"Secret key must be a hex string, got {type(secret_hex).__name__}."
            )
        if len(secret_hex) != SECRET_KEY_HEX_LENGTH:
            raise InvalidKeyEncodingError(
                f"Secret key must be {SECRET_KEY_HEX_LENGTH} hex characters, "
                f"got {len(secret_hex)}."
            )
        if not _SECRET_HEX_PATTERN.fullmatch(secret_hex):
            raise InvalidKeyEncodingError("Secret key contains non-hexadecimal characters.")
        return cls(Ed25519PrivateKey.from_private_bytes(bytes.fromhex(secret_hex)))

    # ------------------------------------------------------------------
    # Encodings
    # ------------------------------------------------------------------

    @property
    def public_bytes(self) -> bytes:
        """The 32-byte raw public key."""
        return self._public_bytes

    def public_hex(self) -> str:
        """Return the public key as 64 lowercase hex characters."""
        return self._public_bytes.hex()

    def public_multibase(self) -> str:
        """Return the public key in ``z``-prefixed base58btc multibase form."""
        return encode_public_key(self._public_bytes)

    def secret_hex(self) -> str:
        """Export the 32-byte secret seed as 64 lowercase hex characters."""
        return self._private_key.private_bytes(
            Encoding.Raw, PrivateFormat.Raw, NoEncryption()
        ).hex()

    # ------------------------------------------------------------------
    # Signing
    # ------------------------------------------------------------------

    def sign(self, data: bytes) -> bytes:
        """Return the 64-byte Ed25519 signature of *data*."""
        return self._private_key.sign(data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, KeyPair):
            return NotImplemented
        return self._public_bytes == other._public_bytes

    def __hash__(self) -> int:
        return hash(self._public_bytes)

    def __repr__(self) -> str:
        return f"KeyPair(public={self.public_hex()!r})"


__all__ = ["SECRET_KEY_HEX_LENGTH", "KeyPair"]
