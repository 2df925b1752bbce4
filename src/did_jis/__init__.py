"""did-jis — decentralized identifiers for the ``did:jis`` method.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
>>> import did_jis
>>> did_jis.__version__
'0.1.0'

Quick start
-----------
::

    from did_jis import DidEngine

    with DidEngine() as engine:
        did = engine.create("device:001")           # 'did:jis:device:001'
        document_json = engine.create_document(did)
        signature = engine.sign("ping")
        assert engine.verify("ping", signature)
        assert DidEngine.verify_document(document_json)
"""
from __future__ import annotations

__version__: str = "0.1.0"

VERSION: str = __version__

from did_jis.config import EngineSettings, get_settings
from did_jis.crypto.keypair import KeyPair
from did_jis.crypto.multibase import decode_public_key, encode_public_key
from did_jis.crypto.signer import sign_message, verify_signature, verify_with_key
from did_jis.did.document import DidDocument, DocumentBuilder, Proof, VerificationMethod
from did_jis.did.grammar import (
    DID_METHOD,
    BoundedParse,
    ParsedDid,
    create_did,
    did_from_public_key,
    is_valid_did,
    parse_did,
    parse_did_bounded,
)
from did_jis.did.verification import DocumentVerifier, VerificationResult, verify_document
from did_jis.engine import DidEngine, EngineState
from did_jis.errors import (
    DidJisError,
    EmptyIdentifierError,
    EngineStateError,
    InvalidInputError,
    InvalidKeyEncodingError,
    MalformedDidError,
)

__all__ = [
    # version
    "__version__",
    "VERSION",
    # engine
    "DidEngine",
    "EngineState",
    # config
    "EngineSettings",
    "get_settings",
    # keys and signatures
    "KeyPair",
    "decode_public_key",
    "encode_public_key",
    "sign_message",
    "verify_signature",
    "verify_with_key",
    # grammar
    "DID_METHOD",
    "BoundedParse",
    "ParsedDid",
    "create_did",
    "did_from_public_key",
    "is_valid_did",
    "parse_did",
    "parse_did_bounded",
    # documents
    "DidDocument",
    "DocumentBuilder",
    "DocumentVerifier",
    "Proof",
    "VerificationMethod",
    "VerificationResult",
    "verify_document",
    # errors
    "DidJisError",
    "EmptyIdentifierError",
    "EngineStateError",
    "InvalidInputError",
    "InvalidKeyEncodingError",
    "MalformedDidError",
]
