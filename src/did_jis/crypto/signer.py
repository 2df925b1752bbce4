"""Message signing and signature verification.

Signing is deterministic Ed25519 over the raw message bytes; ``str``
messages are encoded as UTF-8. A ``str`` that cannot be encoded, such as one
holding a lone surrogate, raises :class:`~did_jis.errors.InvalidInputError`.
Signatures travel as 128 lowercase hex characters.

Verification is a predicate: malformed hex, wrong lengths, keys that are not
valid curve points and plain mismatches all yield ``False``.
"""
from __future__ import annotations

import logging
import re

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PublicKey

from did_jis.crypto.keypair import KeyPair
from did_jis.errors import InvalidInputError

logger = logging.getLogger(__name__)

SIGNATURE_HEX_LENGTH: int = 128
PUBLIC_KEY_HEX_LENGTH: int = 64

_SIGNATURE_HEX_PATTERN = re.compile(r"[0-9a-fA-F]{128}")
_PUBLIC_KEY_HEX_PATTERN = re.compile(r"[0-9a-fA-F]{64}")


def _message_bytes(message: str | bytes) -> bytes:
    if isinstance(message, bytes):
        return message
    try:
        return message.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise InvalidInputError(f"Message is not encodable as UTF-8: {exc.reason}.") from exc


def sign_message(keypair: KeyPair, message: str | bytes) -> str:
    """Sign *message* with *keypair* and return the hex-encoded signature.

    Parameters
    ----------
    keypair:
        The signing key material.
    message:
        The message to sign. An empty message is allowed.

    Returns
    -------
    str
        128 lowercase hex characters (64 signature bytes).
    """
    return keypair.sign(_message_bytes(message)).hex()


def verify_signature(
    public_key_bytes: bytes, message: str | bytes, signature_hex: str
) -> bool:
    """Verify a hex-encoded signature against a raw 32-byte public key.

    Returns
    -------
    bool
        ``True`` only if the signature is well-formed and valid.
    """
    if not isinstance(message, (str, bytes)):
        return False
    if not isinstance(signature_hex, str) or not _SIGNATURE_HEX_PATTERN.fullmatch(
        signature_hex
    ):
        logger.debug("Rejected signature with malformed hex encoding")
        return False
    try:
        public_key = Ed25519PublicKey.from_public_bytes(public_key_bytes)
        public_key.verify(bytes.fromhex(signature_hex), _message_bytes(message))
    except (InvalidSignature, ValueError, TypeError):
        logger.debug("Signature verification failed")
        return False
    return True


def verify_with_key(message: str | bytes, signature_hex: str, public_key_hex: str) -> bool:
    """Verify a signature against a caller-supplied hex public key.

    Needs no engine, so documents and messages from other identities can be
    checked.
    """
    if not isinstance(public_key_hex, str) or not _PUBLIC_KEY_HEX_PATTERN.fullmatch(
        public_key_hex
    ):
        logger.debug("Rejected public key with malformed hex encoding")
        return False
    return verify_signature(bytes.fromhex(public_key_hex), message, signature_hex)


__all__ = [
    "PUBLIC_KEY_HEX_LENGTH",
    "SIGNATURE_HEX_LENGTH",
    "sign_message",
    "verify_signature",
    "verify_with_key",
]
