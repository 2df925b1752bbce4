#!/usr/bin/env python3
"""Example: Handle-style bindings

The same walkthrough as the native test program, using the flat
``did_*`` functions that return ``None``/``False`` instead of raising.

Usage:
    python examples/03_handle_bindings.py
"""
from __future__ import annotations

from did_jis import bindings


def main() -> None:
    print(f"Version: {bindings.did_version()}")

    engine = bindings.did_engine_new()
    did = bindings.did_create(engine, "device:6G:001")
    print(f"DID: {did}")
    print(f"DID from key: {bindings.did_create_from_key(engine)}")
    print(f"did:web:example valid: {bindings.did_is_valid('did:web:example')}")

    parsed = bindings.did_parse(did)
    if parsed is not None:
        print(f"Method: {parsed.method}  ID: {parsed.id}  truncated: {parsed.truncated}")

    document = bindings.did_create_document(engine, did)
    if document is not None:
        print(f"Document (first 300 chars):\n{document[:300]}...")

    signature = bindings.did_sign(engine, "Hello from 6G device!")
    print(f"Verification: {bindings.did_verify(engine, 'Hello from 6G device!', signature)}")

    print(f"Bad secret import: {bindings.did_engine_from_secret('not-a-key')}")
    bindings.did_engine_free(engine)


if __name__ == "__main__":
    main()
