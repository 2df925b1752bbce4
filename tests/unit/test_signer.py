"""Tests for did_jis.crypto.signer — signing and fail-closed verification."""
from __future__ import annotations

import pytest

from did_jis.crypto.keypair import KeyPair
from did_jis.crypto.signer import sign_message, verify_signature, verify_with_key
from did_jis.errors import InvalidInputError
from tests.vectors import (
    RFC8032_MESSAGE,
    RFC8032_PUBLIC_HEX,
    RFC8032_SECRET_HEX,
    RFC8032_SIGNATURE,
    ZERO_PING_SIGNATURE,
    ZERO_PUBLIC_HEX,
)


class TestSignMessage:
    """Tests for sign_message()."""

    def test_signature_is_128_lowercase_hex(self, zero_keypair: KeyPair) -> None:
        signature = sign_message(zero_keypair, "ping")
        assert len(signature) == 128
        assert signature == signature.lower()

    def test_signing_is_deterministic(self, zero_keypair: KeyPair) -> None:
        """Ed25519 needs no per-call randomness: same input, same signature."""
        assert sign_message(zero_keypair, "ping") == sign_message(zero_keypair, "ping")

    def test_known_signature_zero_seed(self, zero_keypair: KeyPair) -> None:
        assert sign_message(zero_keypair, "ping") == ZERO_PING_SIGNATURE

    def test_rfc8032_test_vector(self) -> None:
        """RFC 8032 section 7.1 test 2."""
        keypair = KeyPair.from_secret_hex(RFC8032_SECRET_HEX)
        assert sign_message(keypair, RFC8032_MESSAGE) == RFC8032_SIGNATURE

    def test_str_and_utf8_bytes_sign_identically(self, zero_keypair: KeyPair) -> None:
        message = "héllo wörld"
        assert sign_message(zero_keypair, message) == sign_message(
            zero_keypair, message.encode("utf-8")
        )

    def test_empty_message_is_signable(self, zero_keypair: KeyPair) -> None:
        signature = sign_message(zero_keypair, "")
        assert verify_signature(zero_keypair.public_bytes, "", signature) is True

    def test_unencodable_message_rejected(self, zero_keypair: KeyPair) -> None:
        with pytest.raises(InvalidInputError, match="UTF-8"):
            sign_message(zero_keypair, "\ud800")


class TestVerifySignature:
    """Tests for verify_signature()."""

    def test_valid_signature(self, zero_keypair: KeyPair) -> None:
        signature = sign_message(zero_keypair, "ping")
        assert verify_signature(zero_keypair.public_bytes, "ping", signature) is True

    def test_uppercase_signature_accepted(self, zero_keypair: KeyPair) -> None:
        signature = sign_message(zero_keypair, "ping").upper()
        assert verify_signature(zero_keypair.public_bytes, "ping", signature) is True

    def test_mutated_message_fails(self, zero_keypair: KeyPair) -> None:
        signature = sign_message(zero_keypair, "ping")
        assert verify_signature(zero_keypair.public_bytes, "pinh", signature) is False

    @pytest.mark.parametrize("position", [0, 31, 63])
    def test_mutated_signature_byte_fails(self, zero_keypair: KeyPair, position: int) -> None:
        """Flipping any single signature byte breaks verification."""
        raw = bytearray(bytes.fromhex(sign_message(zero_keypair, "ping")))
        raw[position] ^= 0x01
        assert verify_signature(zero_keypair.public_bytes, "ping", raw.hex()) is False

    @pytest.mark.parametrize(
        "signature",
        [
            "",
            "00",
            ZERO_PING_SIGNATURE[:-2],
            ZERO_PING_SIGNATURE + "00",
            "zz" + ZERO_PING_SIGNATURE[2:],
            ZERO_PING_SIGNATURE[:-1] + "\n",
            " " + ZERO_PING_SIGNATURE[1:],
        ],
    )
    def test_malformed_signature_returns_false(
        self, zero_keypair: KeyPair, signature: str
    ) -> None:
        """Bad hex never raises; it just fails."""
        assert verify_signature(zero_keypair.public_bytes, "ping", signature) is False

    def test_non_string_inputs_return_false(self, zero_keypair: KeyPair) -> None:
        assert verify_signature(zero_keypair.public_bytes, "ping", None) is False  # type: ignore[arg-type]
        assert verify_signature(zero_keypair.public_bytes, None, ZERO_PING_SIGNATURE) is False  # type: ignore[arg-type]

    def test_unencodable_message_returns_false(self, zero_keypair: KeyPair) -> None:
        assert verify_signature(zero_keypair.public_bytes, "\ud800", ZERO_PING_SIGNATURE) is False

    def test_wrong_length_public_key_returns_false(self) -> None:
        assert verify_signature(b"\x01" * 31, "ping", ZERO_PING_SIGNATURE) is False


class TestVerifyWithKey:
    """Tests for verify_with_key()."""

    def test_known_vector_verifies(self) -> None:
        assert verify_with_key("ping", ZERO_PING_SIGNATURE, ZERO_PUBLIC_HEX) is True

    def test_rfc8032_vector_verifies(self) -> None:
        assert verify_with_key(RFC8032_MESSAGE, RFC8032_SIGNATURE, RFC8032_PUBLIC_HEX) is True

    def test_signature_from_a_verifies_with_a_not_b(self) -> None:
        key_a = KeyPair.generate()
        key_b = KeyPair.generate()
        signature = sign_message(key_a, "cross-key")
        assert verify_with_key("cross-key", signature, key_a.public_hex()) is True
        assert verify_with_key("cross-key", signature, key_b.public_hex()) is False

    @pytest.mark.parametrize(
        "public_key_hex",
        ["", "00", ZERO_PUBLIC_HEX[:-2], ZERO_PUBLIC_HEX + "00", "g" * 64, None],
    )
    def test_malformed_public_key_returns_false(self, public_key_hex: object) -> None:
        assert verify_with_key("ping", ZERO_PING_SIGNATURE, public_key_hex) is False  # type: ignore[arg-type]
