"""did_jis.did — the ``did:jis`` grammar and DID documents.

Submodules
----------
grammar
    create_did, did_from_public_key, parse_did, parse_did_bounded, is_valid_did.
document
    DidDocument, VerificationMethod, Proof, DocumentBuilder.
verification
    DocumentVerifier, VerificationResult, verify_document.
"""
from __future__ import annotations

from did_jis.did.document import (
    DidDocument,
    DocumentBuilder,
    Proof,
    VerificationMethod,
)
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

__all__ = [
    # grammar
    "DID_METHOD",
    "BoundedParse",
    "ParsedDid",
    "create_did",
    "did_from_public_key",
    "is_valid_did",
    "parse_did",
    "parse_did_bounded",
    # document
    "DidDocument",
    "DocumentBuilder",
    "Proof",
    "VerificationMethod",
    # verification
    "DocumentVerifier",
    "VerificationResult",
    "verify_document",
]
