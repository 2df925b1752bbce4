"""Tests for did_jis.crypto.multibase — base58btc and publicKeyMultibase."""
from __future__ import annotations

import pytest

from did_jis.crypto.multibase import (
    base58btc_decode,
    base58btc_encode,
    decode_public_key,
    encode_public_key,
)
from tests.vectors import ZERO_PUBLIC_HEX, ZERO_PUBLIC_MULTIBASE


class TestBase58BtcCodec:
    """Tests for the base58btc encode/decode pair."""

    def test_roundtrip_preserves_leading_zeros(self) -> None:
        """Leading zero bytes survive the round-trip as '1' characters."""
        original = b"\x00\x00\x00\x01"
        encoded = base58btc_encode(original)
        assert encoded.startswith("111")
        assert base58btc_decode(encoded) == original

    def test_known_vector_zero_byte(self) -> None:
        """A single 0x00 byte encodes to '1'."""
        assert base58btc_encode(b"\x00") == "1"

    def test_known_vector_hello_world(self) -> None:
        """'Hello World!' has a published base58btc encoding."""
        assert base58btc_encode(b"Hello World!") == "2NEpo7TZRRrLZSi2U"
        assert base58btc_decode("2NEpo7TZRRrLZSi2U") == b"Hello World!"

    def test_decode_invalid_character_raises_value_error(self) -> None:
        """Characters outside the alphabet ('0', 'O', 'I', 'l') are rejected."""
        with pytest.raises(ValueError, match="Invalid base58btc character"):
            base58btc_decode("0OIl")


class TestPublicKeyMultibase:
    """Tests for encode_public_key() and decode_public_key()."""

    def test_encode_known_vector(self) -> None:
        assert encode_public_key(bytes.fromhex(ZERO_PUBLIC_HEX)) == ZERO_PUBLIC_MULTIBASE

    def test_decode_known_vector(self) -> None:
        assert decode_public_key(ZERO_PUBLIC_MULTIBASE).hex() == ZERO_PUBLIC_HEX

    def test_encode_rejects_wrong_length(self) -> None:
        with pytest.raises(ValueError, match="32 bytes"):
            encode_public_key(b"\x01" * 31)

    def test_decode_rejects_other_multibase_prefix(self) -> None:
        """Only the base58btc 'z' prefix is supported."""
        with pytest.raises(ValueError, match="Unsupported multibase prefix"):
            decode_public_key("f" + ZERO_PUBLIC_HEX)

    def test_decode_rejects_other_multicodec(self) -> None:
        """A payload without the 0xed01 prefix is not an Ed25519 key."""
        encoded = "z" + base58btc_encode(b"\x12\x20" + b"\x01" * 32)
        with pytest.raises(ValueError, match="Unsupported multicodec prefix"):
            decode_public_key(encoded)

    def test_decode_rejects_truncated_key(self) -> None:
        encoded = "z" + base58btc_encode(b"\xed\x01" + b"\x01" * 31)
        with pytest.raises(ValueError, match="expected 32"):
            decode_public_key(encoded)
