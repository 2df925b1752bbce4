"""Shared fixtures for the did-jis test suite."""
from __future__ import annotations

import pytest

from did_jis.crypto.keypair import KeyPair
from did_jis.did.document import DocumentBuilder
from did_jis.engine import DidEngine
from tests.vectors import FIXED_CREATED, ZERO_SECRET_HEX


@pytest.fixture()
def zero_keypair() -> KeyPair:
    return KeyPair.from_secret_hex(ZERO_SECRET_HEX)


@pytest.fixture()
def fixed_builder() -> DocumentBuilder:
    return DocumentBuilder(clock=lambda: FIXED_CREATED)


@pytest.fixture()
def engine() -> DidEngine:
    return DidEngine()


@pytest.fixture()
def zero_engine(fixed_builder: DocumentBuilder) -> DidEngine:
    return DidEngine.from_secret(ZERO_SECRET_HEX, builder=fixed_builder)
