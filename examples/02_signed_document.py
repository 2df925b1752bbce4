#!/usr/bin/env python3
"""Example: Signed DID document

Builds a DID document for a persistent identity, then verifies it the way a
third party would: from the JSON alone, with no access to the engine.

Usage:
    DID_JIS_SECRET_KEY=<64 hex chars> python examples/02_signed_document.py
"""
from __future__ import annotations

import json

from did_jis import DidEngine, DocumentVerifier


def main() -> None:
    engine = DidEngine.from_settings()
    did = engine.create_from_key()
    document_json = engine.create_document(did)
    engine.destroy()

    print(document_json)

    result = DocumentVerifier().verify(document_json)
    print(f"\nValid: {result.valid}")
    for check in result.checks_passed:
        print(f"  PASS  {check}")

    tampered = json.loads(document_json)
    tampered["id"] = "did:jis:someone-else"
    print(f"Tampered document valid: {DocumentVerifier().verify(tampered).valid}")


if __name__ == "__main__":
    main()
