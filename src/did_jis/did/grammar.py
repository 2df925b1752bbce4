"""DID grammar for the ``did:jis`` method.

DID format
----------
::

    did:<method>:<id>

``method`` is ``[a-z0-9]+``. ``id`` is one or more characters from
``[A-Za-z0-9._:-]``. Colons are allowed inside ``id`` for hierarchical
identifiers, so a DID is split on its first two colons only::

    did:jis:alice
    did:jis:device:001
    did:jis:device:6G:001

Parsing and validity are separate: :func:`parse_did` accepts any method,
:func:`is_valid_did` only accepts well-formed ``did:jis`` identifiers.

Key-derived identifiers
-----------------------
:func:`did_from_public_key` hashes the raw 32-byte public key with SHA-256
and keeps the first 16 digest bytes as 32 lowercase hex characters.
"""
from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass

from cryptography.hazmat.primitives import hashes

from did_jis.errors import EmptyIdentifierError, MalformedDidError

DID_SCHEME: str = "did"
DID_METHOD: str = "jis"
DID_PREFIX: str = f"{DID_SCHEME}:{DID_METHOD}:"

KEY_ID_DIGEST_BYTES: int = 16

# Capacities of the native parse buffers (32 and 256 bytes) minus the terminator.
METHOD_CAPACITY: int = 31
ID_CAPACITY: int = 255

_METHOD_PATTERN = re.compile(r"[a-z0-9]+")
_ID_PATTERN = re.compile(r"[A-Za-z0-9._:\-]+")


@dataclass(frozen=True)
class ParsedDid:
    """The ``(method, id)`` pair extracted from a DID string."""

    method: str
    id: str

    def __iter__(self) -> Iterator[str]:
        return iter((self.method, self.id))

    def __str__(self) -> str:
        return f"{DID_SCHEME}:{self.method}:{self.id}"


@dataclass(frozen=True)
class BoundedParse:
    """Result of a fixed-capacity parse.

    Parameters
    ----------
    method:
        The method, cut to the method capacity.
    id:
        The identifier, cut to the id capacity.
    truncated:
        ``True`` if either value was cut.
    """

    method: str
    id: str
    truncated: bool


def create_did(identifier: str) -> str:
    """Build ``did:jis:<identifier>``.

    The identifier is used verbatim; only a missing or empty value is
    rejected.

    Raises
    ------
    EmptyIdentifierError
        If *identifier* is ``None``, not a string, or empty.
    """
    if not isinstance(identifier, str) or not identifier:
        raise EmptyIdentifierError(
            f"DID identifier must be a non-empty string, got {identifier!r}."
        )
    return f"{DID_PREFIX}{identifier}"


def key_identifier(public_key_bytes: bytes) -> str:
    """Return the 32-hex-character identifier derived from a raw public key."""
    digest = hashes.Hash(hashes.SHA256())
    digest.update(public_key_bytes)
    return digest.finalize()[:KEY_ID_DIGEST_BYTES].hex()


def did_from_public_key(public_key_bytes: bytes) -> str:
    """Derive ``did:jis:<sha256(public_key)[:16] hex>`` from a raw public key."""
    return f"{DID_PREFIX}{key_identifier(public_key_bytes)}"


def parse_did(did: str) -> ParsedDid:
    """Split a DID into its method and identifier.

    Parameters
    ----------
    did:
        A string of the form ``did:<method>:<id>``. Any method is accepted.

    Raises
    ------
    MalformedDidError
        If the scheme is not ``did``, there are fewer than two colons, or the
        method or identifier is empty.
    """
    if not isinstance(did, str):
        raise MalformedDidError(f"DID must be a string, got {type(did).__name__}.")
    parts = did.split(":", 2)
    if len(parts) != 3:
        raise MalformedDidError(
            f"Malformed DID {did!r}. Expected format: did:<method>:<id>"
        )
    scheme, method, identifier = parts
    if scheme != DID_SCHEME:
        raise MalformedDidError(f"Malformed DID {did!r}. Scheme must be 'did'.")
    if not method:
        raise MalformedDidError(f"Malformed DID {did!r}. The method is empty.")
    if not identifier:
        raise MalformedDidError(f"Malformed DID {did!r}. The identifier is empty.")
    return ParsedDid(method=method, id=identifier)


def parse_did_bounded(
    did: str,
    method_capacity: int = METHOD_CAPACITY,
    id_capacity: int = ID_CAPACITY,
) -> BoundedParse:
    """Parse *did* into fixed-capacity fields.

    Values longer than their capacity are cut and the result is flagged as
    truncated; nothing is silently lost.

    Raises
    ------
    MalformedDidError
        If *did* does not parse.
    ValueError
        If a capacity is negative.
    """
    if method_capacity < 0 or id_capacity < 0:
        raise ValueError("Capacities must be non-negative.")
    parsed = parse_did(did)
    truncated = len(parsed.method) > method_capacity or len(parsed.id) > id_capacity
    return BoundedParse(
        method=parsed.method[:method_capacity],
        id=parsed.id[:id_capacity],
        truncated=truncated,
    )


def is_valid_did(did: object) -> bool:
    """Return ``True`` iff *did* is a well-formed ``did:jis`` identifier.

    A DID of another method (``did:web:example``) parses but is not valid
    here.
    """
    if not isinstance(did, str):
        return False
    try:
        parsed = parse_did(did)
    except MalformedDidError:
        return False
    return (
        parsed.method == DID_METHOD
        and _METHOD_PATTERN.fullmatch(parsed.method) is not None
        and _ID_PATTERN.fullmatch(parsed.id) is not None
    )


__all__ = [
    "DID_METHOD",
    "DID_PREFIX",
    "DID_SCHEME",
    "ID_CAPACITY",
    "KEY_ID_DIGEST_BYTES",
    "METHOD_CAPACITY",
    "BoundedParse",
    "ParsedDid",
    "create_did",
    "did_from_public_key",
    "is_valid_did",
    "key_identifier",
    "parse_did",
    "parse_did_bounded",
]
