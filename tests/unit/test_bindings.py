"""Tests for did_jis.bindings — the handle-style contract."""
from __future__ import annotations

import json

import pytest

from did_jis import bindings
from did_jis.did.grammar import BoundedParse
from did_jis.engine import DidEngine, EngineState
from tests.vectors import (
    ZERO_KEY_DID,
    ZERO_PING_SIGNATURE,
    ZERO_PUBLIC_HEX,
    ZERO_PUBLIC_MULTIBASE,
    ZERO_SECRET_HEX,
)


@pytest.fixture()
def handle() -> DidEngine:
    engine = bindings.did_engine_from_secret(ZERO_SECRET_HEX)
    assert engine is not None
    return engine


class TestLifecycle:
    def test_engine_new_returns_ready_handle(self) -> None:
        engine = bindings.did_engine_new()
        assert engine.state is EngineState.READY

    @pytest.mark.parametrize("secret", ["", "00" * 31, "zz" * 32, None])
    def test_from_secret_invalid_returns_none(self, secret: object) -> None:
        assert bindings.did_engine_from_secret(secret) is None  # type: ignore[arg-type]

    def test_free_destroys_handle(self, handle: DidEngine) -> None:
        bindings.did_engine_free(handle)
        assert handle.state is EngineState.DESTROYED

    def test_free_none_is_ignored(self) -> None:
        bindings.did_engine_free(None)

    def test_version_is_static_constant(self) -> None:
        assert bindings.did_version() == "0.1.0"
        assert bindings.did_version() is bindings.VERSION


class TestAccessors:
    def test_public_key(self, handle: DidEngine) -> None:
        assert bindings.did_get_public_key(handle) == ZERO_PUBLIC_HEX
        assert bindings.did_get_public_key_multibase(handle) == ZERO_PUBLIC_MULTIBASE

    def test_null_handle_returns_none(self) -> None:
        assert bindings.did_get_public_key(None) is None
        assert bindings.did_get_public_key_multibase(None) is None

    def test_freed_handle_returns_none(self, handle: DidEngine) -> None:
        bindings.did_engine_free(handle)
        assert bindings.did_get_public_key(handle) is None
        assert bindings.did_sign(handle, "ping") is None
        assert bindings.did_verify(handle, "ping", ZERO_PING_SIGNATURE) is False


class TestDidOperations:
    def test_create(self, handle: DidEngine) -> None:
        assert bindings.did_create(handle, "device:6G:001") == "did:jis:device:6G:001"

    @pytest.mark.parametrize("identifier", ["", None])
    def test_create_empty_returns_none(self, handle: DidEngine, identifier: object) -> None:
        assert bindings.did_create(handle, identifier) is None  # type: ignore[arg-type]

    def test_create_from_key(self, handle: DidEngine) -> None:
        assert bindings.did_create_from_key(handle) == ZERO_KEY_DID

    def test_parse(self) -> None:
        assert bindings.did_parse("did:jis:device:001") == BoundedParse(
            method="jis", id="device:001", truncated=False
        )

    def test_parse_truncates_safely(self) -> None:
        result = bindings.did_parse("did:jis:" + "x" * 400)
        assert result is not None
        assert result.truncated is True
        assert len(result.id) == 255

    @pytest.mark.parametrize("did", ["did:jis", "", None, "web:example"])
    def test_parse_failure_returns_none(self, did: object) -> None:
        assert bindings.did_parse(did) is None  # type: ignore[arg-type]

    def test_is_valid(self) -> None:
        assert bindings.did_is_valid("did:jis:device:6G:001") is True
        assert bindings.did_is_valid("did:web:example") is False
        assert bindings.did_is_valid(None) is False


class TestDocuments:
    def test_create_document(self, handle: DidEngine) -> None:
        did = bindings.did_create(handle, "device:6G:001")
        document = bindings.did_create_document(handle, did)
        assert document is not None
        assert json.loads(document)["id"] == did
        assert DidEngine.verify_document(document) is True

    @pytest.mark.parametrize("did", ["", None])
    def test_create_document_invalid_returns_none(self, handle: DidEngine, did: object) -> None:
        assert bindings.did_create_document(handle, did) is None  # type: ignore[arg-type]

    def test_create_document_null_handle(self) -> None:
        assert bindings.did_create_document(None, "did:jis:alice") is None

    def test_create_document_unencodable_did_returns_none(self, handle: DidEngine) -> None:
        assert bindings.did_create_document(handle, "did:jis:\ud800") is None


class TestSigning:
    def test_sign_and_verify(self, handle: DidEngine) -> None:
        signature = bindings.did_sign(handle, "Hello from 6G device!")
        assert signature is not None
        assert bindings.did_verify(handle, "Hello from 6G device!", signature) is True
        assert bindings.did_verify(handle, "Hello from 5G device!", signature) is False

    def test_sign_known_vector(self, handle: DidEngine) -> None:
        assert bindings.did_sign(handle, "ping") == ZERO_PING_SIGNATURE

    def test_sign_null_inputs(self, handle: DidEngine) -> None:
        assert bindings.did_sign(None, "ping") is None
        assert bindings.did_sign(handle, None) is None

    def test_sign_unencodable_message_returns_none(self, handle: DidEngine) -> None:
        assert bindings.did_sign(handle, "\ud800") is None
        assert bindings.did_verify(handle, "\ud800", ZERO_PING_SIGNATURE) is False

    def test_verify_null_inputs(self, handle: DidEngine) -> None:
        assert bindings.did_verify(None, "ping", ZERO_PING_SIGNATURE) is False
        assert bindings.did_verify(handle, None, ZERO_PING_SIGNATURE) is False
        assert bindings.did_verify(handle, "ping", None) is False

    def test_verify_with_key(self) -> None:
        assert bindings.did_verify_with_key("ping", ZERO_PING_SIGNATURE, ZERO_PUBLIC_HEX) is True
        other = bindings.did_engine_new()
        other_key = bindings.did_get_public_key(other)
        assert bindings.did_verify_with_key("ping", ZERO_PING_SIGNATURE, other_key) is False
        assert bindings.did_verify_with_key("ping", ZERO_PING_SIGNATURE, None) is False
