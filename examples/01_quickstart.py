#!/usr/bin/env python3
"""Example: Quickstart

Creates an identity, mints a DID, signs and verifies a message.

Usage:
    python examples/01_quickstart.py

Requirements:
    pip install did-jis
"""
from __future__ import annotations

import did_jis
from did_jis import DidEngine


def main() -> None:
    print(f"did-jis version: {did_jis.__version__}")

    with DidEngine() as engine:
        print(f"Public key:             {engine.public_key_hex()}")
        print(f"Public key (multibase): {engine.public_key_multibase()}")

        did = engine.create("device:6G:001")
        print(f"DID:          {did}")
        print(f"DID from key: {engine.create_from_key()}")
        print(f"Valid:        {DidEngine.is_valid(did)}")

        signature = engine.sign("Hello from 6G device!")
        print(f"Signature:    {signature[:32]}...")
        print(f"Verified:     {engine.verify('Hello from 6G device!', signature)}")

    print("\nQuickstart complete.")


if __name__ == "__main__":
    main()
