"""did_jis.crypto — Ed25519 key material, multibase encoding, signatures.

Submodules
----------
keypair
    KeyPair: generation, secret import, public key encodings.
multibase
    base58btc codec and the ``publicKeyMultibase`` key form.
signer
    sign_message, verify_signature, verify_with_key.
"""
from __future__ import annotations

from did_jis.crypto.keypair import SECRET_KEY_HEX_LENGTH, KeyPair
from did_jis.crypto.multibase import decode_public_key, encode_public_key
from did_jis.crypto.signer import sign_message, verify_signature, verify_with_key

__all__ = [
    "SECRET_KEY_HEX_LENGTH",
    "KeyPair",
    "decode_public_key",
    "encode_public_key",
    "sign_message",
    "verify_signature",
    "verify_with_key",
]
