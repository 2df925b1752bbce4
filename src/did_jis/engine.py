"""DidEngine — the single-owner facade for every ``did:jis`` operation.

An engine owns exactly one :class:`~did_jis.crypto.keypair.KeyPair` for its
whole lifetime and composes the stateless grammar, signer and document
components around it.

Lifecycle
---------
::

    UNINITIALIZED --(construction)--> READY --(destroy)--> DESTROYED

There is no error state: a failing operation raises (or returns ``False``
for predicates) and leaves the engine untouched. Every key-bound operation
on a destroyed engine raises :class:`~did_jis.errors.EngineStateError`.

Concurrency
-----------
Nothing mutates after construction, so reads, signing and verification may
run from many threads at once. Construction and :meth:`DidEngine.destroy`
must be synchronized by the owner.
"""
from __future__ import annotations

import enum
import logging
from types import TracebackType

from did_jis.config import EngineSettings
from did_jis.crypto.keypair import KeyPair
from did_jis.crypto.signer import sign_message, verify_signature
from did_jis.crypto.signer import verify_with_key as _verify_with_key
from did_jis.did.document import DidDocument, DocumentBuilder
from did_jis.did.grammar import (
    ParsedDid,
    create_did,
    did_from_public_key,
    is_valid_did,
    parse_did,
)
from did_jis.did.verification import verify_document as _verify_document
from did_jis.errors import EngineStateError

logger = logging.getLogger(__name__)


class EngineState(str, enum.Enum):
    """Lifecycle states of a :class:`DidEngine`."""

    UNINITIALIZED = "uninitialized"
    READY = "ready"
    DESTROYED = "destroyed"


class DidEngine:
    """A ``did:jis`` identity bound to one Ed25519 keypair.

    Parameters
    ----------
    keypair:
        The key material to own. A fresh keypair is generated when omitted.
    builder:
        Optional :class:`~did_jis.did.document.DocumentBuilder`, mainly to
        inject a clock.

    Example
    -------
    ::

        with DidEngine.from_secret("00" * 32) as engine:
            did = engine.create("device:001")
            signature = engine.sign("ping")
            assert engine.verify("ping", signature)
    """

    def __init__(
        self,
        keypair: KeyPair | None = None,
        builder: DocumentBuilder | None = None,
    ) -> None:
        self._state = EngineState.UNINITIALIZED
        self._keypair: KeyPair | None = keypair if keypair is not None else KeyPair.generate()
        self._builder: DocumentBuilder = builder or DocumentBuilder()
        self._state = EngineState.READY
        logger.info("DID engine ready with public key %s", self._keypair.public_hex())

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_secret(
        cls, secret_hex: str, builder: DocumentBuilder | None = None
    ) -> "DidEngine":
        """Create an engine from a 64-character hex secret seed.

        Raises
        ------
        InvalidKeyEncodingError
            If *secret_hex* is not exactly 64 hex characters.
        """
        return cls(keypair=KeyPair.from_secret_hex(secret_hex), builder=builder)

    @classmethod
    def from_settings(cls, settings: EngineSettings | None = None) -> "DidEngine":
        """Create an engine from :class:`~did_jis.config.EngineSettings`.

        Imports ``secret_key`` when configured, otherwise generates a key.
        """
        settings = settings or EngineSettings()
        if settings.secret_key is None:
            return cls()
        return cls.from_secret(settings.secret_key.get_secret_value())

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def state(self) -> EngineState:
        return self._state

    def destroy(self) -> None:
        """Release the key material. Safe to call more than once."""
        if self._state is EngineState.DESTROYED:
            return
        self._keypair = None
        self._state = EngineState.DESTROYED
        logger.info("DID engine destroyed")

    def __enter__(self) -> "DidEngine":
        self._require_keypair()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.destroy()

    def _require_keypair(self) -> KeyPair:
        if self._state is not EngineState.READY or self._keypair is None:
            raise EngineStateError(f"DID engine is {self._state.value}, not ready.")
        return self._keypair

    # ------------------------------------------------------------------
    # Keys
    # ------------------------------------------------------------------

    def public_key_hex(self) -> str:
        """Return the public key as 64 lowercase hex characters."""
        return self._require_keypair().public_hex()

    def public_key_multibase(self) -> str:
        """Return the public key in ``z``-prefixed multibase form."""
        return self._require_keypair().public_multibase()

    def export_secret(self) -> str:
        """Return the secret seed as hex, for persisting the identity."""
        return self._require_keypair().secret_hex()

    # ------------------------------------------------------------------
    # DIDs
    # ------------------------------------------------------------------

    def create(self, identifier: str) -> str:
        """Return ``did:jis:<identifier>``.

        Raises
        ------
        EmptyIdentifierError
            If *identifier* is empty or ``None``.
        """
        self._require_keypair()
        return create_did(identifier)

    def create_from_key(self) -> str:
        """Return the DID derived from this engine's public key."""
        return did_from_public_key(self._require_keypair().public_bytes)

    @staticmethod
    def parse(did: str) -> ParsedDid:
        """Split *did* into ``(method, id)``. See :func:`~did_jis.did.grammar.parse_did`."""
        return parse_did(did)

    @staticmethod
    def is_valid(did: object) -> bool:
        """Return ``True`` iff *did* is a well-formed ``did:jis`` identifier."""
        return is_valid_did(did)

    # ------------------------------------------------------------------
    # Documents
    # ------------------------------------------------------------------

    def build_document(self, did: str) -> DidDocument:
        """Build a signed :class:`~did_jis.did.document.DidDocument` for *did*.

        Raises
        ------
        InvalidInputError
            If *did* is missing, empty, or malformed.
        """
        return self._builder.build(self._require_keypair(), did)

    def create_document(self, did: str) -> str:
        """Build a signed DID document for *did* and return it as JSON."""
        return self.build_document(did).to_json()

    @staticmethod
    def verify_document(document: DidDocument | str | dict[str, object]) -> bool:
        """Return ``True`` iff *document* carries a valid self-signed proof."""
        return _verify_document(document)

    # ------------------------------------------------------------------
    # Signing
    # ------------------------------------------------------------------

    def sign(self, message: str | bytes) -> str:
        """Sign *message* and return 128 lowercase hex characters."""
        signature = sign_message(self._require_keypair(), message)
        logger.debug("Signed message of length %d", len(message))
        return signature

    def verify(self, message: str | bytes, signature_hex: str) -> bool:
        """Verify *signature_hex* over *message* against this engine's key."""
        return verify_signature(self._require_keypair().public_bytes, message, signature_hex)

    @staticmethod
    def verify_with_key(
        message: str | bytes, signature_hex: str, public_key_hex: str
    ) -> bool:
        """Verify against an arbitrary hex public key; no engine key involved."""
        return _verify_with_key(message, signature_hex, public_key_hex)

    def __repr__(self) -> str:
        if self._keypair is None:
            return f"DidEngine(state={self._state.value!r})"
        return (
            f"DidEngine(state={self._state.value!r}, "
            f"public_key={self._keypair.public_hex()!r})"
        )


__all__ = ["DidEngine", "EngineState"]
