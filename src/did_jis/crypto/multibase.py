"""Multibase encoding of Ed25519 public keys.

Encoding
--------
1. Take the 32 raw public key bytes.
2. Prepend the Ed25519 multicodec prefix ``0xed 0x01``.
3. Encode the 34-byte result with base58btc.
4. Prefix the encoded string with ``z`` (the multibase code for base58btc).

This is the ``publicKeyMultibase`` form used by
``Ed25519VerificationKey2020`` verification methods, so every Ed25519 key
encodes to a string beginning with ``z6Mk``.
"""
from __future__ import annotations

ED25519_MULTICODEC_PREFIX: bytes = b"\xed\x01"
BASE58BTC_PREFIX: str = "z"
ED25519_PUBLIC_KEY_LENGTH: int = 32

_BASE58_ALPHABET: str = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
_BASE58_INDEX: dict[str, int] = {char: index for index, char in enumerate(_BASE58_ALPHABET)}


def base58btc_encode(data: bytes) -> str:
    """Encode *data* to a base58btc string.

    Leading zero bytes are preserved as ``'1'`` characters.
    """
    n = int.from_bytes(data, "big")
    result: list[str] = []
    while n > 0:
        n, remainder = divmod(n, 58)
        result.append(_BASE58_ALPHABET[remainder])
    for byte in data:
        if byte != 0:
            break
        result.append("1")
    return "".join(reversed(result))


def base58btc_decode(encoded: str) -> bytes:
    """Decode a base58btc string back to bytes.

    Raises
    ------
    ValueError
        If the string contains a character not in the base58btc alphabet.
    """
    n = 0
    for char in encoded:
        digit = _BASE58_INDEX.get(char)
        if digit is None:
            raise ValueError(
                f"Invalid base58btc character {char!r} in encoded string {encoded!r}"
            )
        n = n * 58 + digit
    body = n.to_bytes((n.bit_length() + 7) // 8, "big") if n > 0 else b""
    pad_size = len(encoded) - len(encoded.lstrip("1"))
    return b"\x00" * pad_size + body


def encode_public_key(public_key_bytes: bytes) -> str:
    """Return the ``z``-prefixed multibase form of a raw Ed25519 public key."""
    if len(public_key_bytes) != ED25519_PUBLIC_KEY_LENGTH:
        raise ValueError(
            f"Ed25519 public keys are {ED25519_PUBLIC_KEY_LENGTH} bytes, "
            f"got {len(public_key_bytes)}."
        )
    return BASE58BTC_PREFIX + base58btc_encode(ED25519_MULTICODEC_PREFIX + public_key_bytes)


def decode_public_key(multibase: str) -> bytes:
    """Decode a ``publicKeyMultibase`` string to the 32 raw key bytes.

    Raises
    ------
    ValueError
        If the multibase prefix is not ``z``, the payload is not base58btc,
        the multicodec prefix is not Ed25519, or the key length is wrong.
    """
    if not multibase.startswith(BASE58BTC_PREFIX):
        raise ValueError(
            f"Unsupported multibase prefix in {multibase!r}. "
            "Only base58btc ('z') is supported."
        )
    decoded = base58btc_decode(multibase[len(BASE58BTC_PREFIX):])
    if not decoded.startswith(ED25519_MULTICODEC_PREFIX):
        prefix_hex = decoded[:2].hex()
        raise ValueError(
            f"Unsupported multicodec prefix 0x{prefix_hex} in {multibase!r}. "
            "Only Ed25519 (0xed01) keys are supported."
        )
    public_key = decoded[len(ED25519_MULTICODEC_PREFIX):]
    if len(public_key) != ED25519_PUBLIC_KEY_LENGTH:
        raise ValueError(
            f"Decoded Ed25519 key is {len(public_key)} bytes, "
            f"expected {ED25519_PUBLIC_KEY_LENGTH}."
        )
    return public_key


__all__ = [
    "BASE58BTC_PREFIX",
    "ED25519_MULTICODEC_PREFIX",
    "ED25519_PUBLIC_KEY_LENGTH",
    "base58btc_decode",
    "base58btc_encode",
    "decode_public_key",
    "encode_public_key",
]
