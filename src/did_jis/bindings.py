"""Handle-style bindings mirroring the native ``did_jis.h`` contract.

Each function takes an engine handle (a :class:`~did_jis.engine.DidEngine`)
or plain strings and reports failure the way the native contract does:
``None`` where a handle or string would be NULL, ``False`` for predicates.
None of these functions raises for bad input.

Returned strings are ordinary owned Python values, so there is no
``did_free_string``. :func:`did_engine_free` maps to
:meth:`DidEngine.destroy`.

Example
-------
::

    engine = did_engine_new()
    did = did_create(engine, "device:001")
    document = did_create_document(engine, did)
    did_engine_free(engine)
"""
from __future__ import annotations

import logging

from did_jis import __version__
from did_jis.crypto.signer import verify_with_key
from did_jis.did.grammar import (
    ID_CAPACITY,
    METHOD_CAPACITY,
    BoundedParse,
    is_valid_did,
    parse_did_bounded,
)
from did_jis.engine import DidEngine
from did_jis.errors import DidJisError

logger = logging.getLogger(__name__)

VERSION: str = __version__


# ------------------------------------------------------------------
# Engine lifecycle
# ------------------------------------------------------------------


def did_engine_new() -> DidEngine:
    """Create an engine with a fresh Ed25519 keypair."""
    return DidEngine()


def did_engine_from_secret(secret_hex: str) -> DidEngine | None:
    """Create an engine from a 64-character hex secret, or ``None`` if invalid."""
    try:
        return DidEngine.from_secret(secret_hex)
    except DidJisError as exc:
        logger.debug("Rejected secret key import: %s", exc)
        return None


def did_engine_free(engine: DidEngine | None) -> None:
    """Destroy *engine*. ``None`` is ignored."""
    if engine is not None:
        engine.destroy()


# ------------------------------------------------------------------
# Key management
# ------------------------------------------------------------------


def did_get_public_key(engine: DidEngine | None) -> str | None:
    """Return the engine's public key as hex."""
    if engine is None:
        return None
    try:
        return engine.public_key_hex()
    except DidJisError:
        return None


def did_get_public_key_multibase(engine: DidEngine | None) -> str | None:
    """Return the engine's public key in multibase form."""
    if engine is None:
        return None
    try:
        return engine.public_key_multibase()
    except DidJisError:
        return None


# ------------------------------------------------------------------
# DID operations
# ------------------------------------------------------------------


def did_create(engine: DidEngine | None, identifier: str | None) -> str | None:
    """Return ``did:jis:<identifier>``, or ``None`` for an empty identifier."""
    if engine is None:
        return None
    try:
        return engine.create(identifier)  # type: ignore[arg-type]
    except DidJisError:
        return None


def did_create_from_key(engine: DidEngine | None) -> str | None:
    """Return the DID derived from the engine's public key."""
    if engine is None:
        return None
    try:
        return engine.create_from_key()
    except DidJisError:
        return None


def did_parse(
    did: str | None,
    method_capacity: int = METHOD_CAPACITY,
    id_capacity: int = ID_CAPACITY,
) -> BoundedParse | None:
    """Parse *did* into capacity-bounded ``method`` and ``id`` fields.

    Returns ``None`` if *did* is not ``did:<method>:<id>``. Over-long values
    are cut to capacity and flagged with ``truncated=True``.
    """
    try:
        return parse_did_bounded(did, method_capacity, id_capacity)  # type: ignore[arg-type]
    except (DidJisError, ValueError):
        return None


def did_is_valid(did: str | None) -> bool:
    """Return ``True`` iff *did* is a well-formed ``did:jis`` identifier."""
    return is_valid_did(did)


# ------------------------------------------------------------------
# DID documents
# ------------------------------------------------------------------


def did_create_document(engine: DidEngine | None, did: str | None) -> str | None:
    """Return the signed JSON document for *did*, or ``None`` on invalid input."""
    if engine is None:
        return None
    try:
        return engine.create_document(did)  # type: ignore[arg-type]
    except DidJisError as exc:
        logger.debug("Document creation failed: %s", exc)
        return None


# ------------------------------------------------------------------
# Signing
# ------------------------------------------------------------------


def did_sign(engine: DidEngine | None, message: str | None) -> str | None:
    """Return the hex signature of *message*."""
    if engine is None or not isinstance(message, (str, bytes)):
        return None
    try:
        return engine.sign(message)
    except DidJisError:
        return None


def did_verify(engine: DidEngine | None, message: str | None, signature: str | None) -> bool:
    """Verify *signature* over *message* against the engine's key."""
    if engine is None or message is None or signature is None:
        return False
    try:
        return engine.verify(message, signature)
    except DidJisError:
        return False


def did_verify_with_key(
    message: str | None, signature: str | None, public_key_hex: str | None
) -> bool:
    """Verify *signature* over *message* against a 64-character hex public key."""
    if message is None or signature is None or public_key_hex is None:
        return False
    return verify_with_key(message, signature, public_key_hex)


# ------------------------------------------------------------------
# Version
# ------------------------------------------------------------------


def did_version() -> str:
    """Return the library version string."""
    return VERSION


__all__ = [
    "VERSION",
    "did_create",
    "did_create_document",
    "did_create_from_key",
    "did_engine_free",
    "did_engine_from_secret",
    "did_engine_new",
    "did_get_public_key",
    "did_get_public_key_multibase",
    "did_is_valid",
    "did_parse",
    "did_sign",
    "did_verify",
    "did_verify_with_key",
    "did_version",
]
