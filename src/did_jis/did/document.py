"""DidDocument and DocumentBuilder — self-certifying ``did:jis`` documents.

Document shape
--------------
::

    {
      "@context": ["https://www.w3.org/ns/did/v1",
                   "https://w3id.org/security/suites/ed25519-2020/v1"],
      "id": "did:jis:device:001",
      "verificationMethod": [{
        "id": "did:jis:device:001#key-1",
        "type": "Ed25519VerificationKey2020",
        "controller": "did:jis:device:001",
        "publicKeyMultibase": "z6Mk..."
      }],
      "authentication": ["did:jis:device:001#key-1"],
      "proof": {
        "type": "Ed25519Signature2020",
        "created": "2026-01-01T00:00:00Z",
        "verificationMethod": "did:jis:device:001#key-1",
        "proofPurpose": "assertionMethod",
        "signatureValue": "<128 hex characters>"
      }
    }

Canonical form
--------------
The signature covers the compact JSON encoding (``","`` and ``":"``
separators, UTF-8, no whitespace) of the document with ``signatureValue``
removed from the proof. Keys appear in the order shown above, which is fixed
by :meth:`DidDocument.unsigned_dict` rather than by whatever text the
document was parsed from. ``created`` is part of the signed bytes.
"""
from __future__ import annotations

import json
import logging
from collections.abc import Callable
from dataclasses import dataclass, replace
from datetime import datetime, timezone

from pydantic import BaseModel, Field, field_validator, model_validator

from did_jis.crypto.keypair import KeyPair
from did_jis.crypto.signer import sign_message
from did_jis.did.grammar import parse_did
from did_jis.errors import InvalidInputError, MalformedDidError

logger = logging.getLogger(__name__)

DID_CONTEXT: tuple[str, ...] = (
    "https://www.w3.org/ns/did/v1",
    "https://w3id.org/security/suites/ed25519-2020/v1",
)
VERIFICATION_KEY_TYPE: str = "Ed25519VerificationKey2020"
PROOF_TYPE: str = "Ed25519Signature2020"
PROOF_PURPOSE: str = "assertionMethod"
DEFAULT_KEY_FRAGMENT: str = "key-1"

_DOCUMENT_FIELDS = frozenset(
    {"@context", "id", "verificationMethod", "authentication", "proof"}
)
_METHOD_FIELDS = frozenset({"id", "type", "controller", "publicKeyMultibase"})
_PROOF_FIELDS = frozenset(
    {"type", "created", "verificationMethod", "proofPurpose", "signatureValue"}
)


def format_timestamp(moment: datetime) -> str:
    """Format *moment* as ISO-8601 UTC with second precision and a ``Z`` suffix."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _reject_unknown_fields(
    data: dict[str, object], allowed: frozenset[str], where: str
) -> None:
    # Every accepted field must be covered by canonical_bytes().
    unknown = sorted(str(key) for key in data if key not in allowed)
    if unknown:
        raise ValueError(f"Unknown {where} fields: {', '.join(unknown)}.")


# ------------------------------------------------------------------
# Verification method
# ------------------------------------------------------------------


@dataclass(frozen=True)
class VerificationMethod:
    """The single Ed25519 key entry of a ``did:jis`` document.

    Parameters
    ----------
    id:
        The method identifier, ``<did>#key-1``.
    type:
        Always ``"Ed25519VerificationKey2020"``.
    controller:
        The DID that controls this key.
    public_key_multibase:
        The public key in ``z``-prefixed base58btc multibase form.
    """

    id: str
    type: str
    controller: str
    public_key_multibase: str

    def __post_init__(self) -> None:
        if self.type != VERIFICATION_KEY_TYPE:
            raise ValueError(
                f"Unsupported verification method type {self.type!r}. "
                f"Expected {VERIFICATION_KEY_TYPE!r}."
            )
        if not self.id:
            raise ValueError("VerificationMethod.id must not be empty.")
        if not self.controller:
            raise ValueError("VerificationMethod.controller must not be empty.")
        if not self.public_key_multibase:
            raise ValueError("VerificationMethod.public_key_multibase must not be empty.")

    def to_dict(self) -> dict[str, str]:
        """Serialize with W3C camelCase property names."""
        return {
            "id": self.id,
            "type": self.type,
            "controller": self.controller,
            "publicKeyMultibase": self.public_key_multibase,
        }

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> "VerificationMethod":
        _reject_unknown_fields(data, _METHOD_FIELDS, "verificationMethod")
        return cls(
            id=str(data["id"]),
            type=str(data["type"]),
            controller=str(data["controller"]),
            public_key_multibase=str(data["publicKeyMultibase"]),
        )


# ------------------------------------------------------------------
# Proof
# ------------------------------------------------------------------


@dataclass(frozen=True)
class Proof:
    """The signature block binding a document to its key.

    ``signature_value`` is empty only while the document is being built.
    """

    type: str
    created: str
    verification_method: str
    proof_purpose: str = PROOF_PURPOSE
    signature_value: str = ""

    def to_dict(self, include_signature: bool = True) -> dict[str, str]:
        data = {
            "type": self.type,
            "created": self.created,
            "verificationMethod": self.verification_method,
            "proofPurpose": self.proof_purpose,
        }
        if include_signature:
            data["signatureValue"] = self.signature_value
        return data

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> "Proof":
        _reject_unknown_fields(data, _PROOF_FIELDS, "proof")
        return cls(
            type=str(data["type"]),
            created=str(data["created"]),
            verification_method=str(data["verificationMethod"]),
            proof_purpose=str(data.get("proofPurpose", PROOF_PURPOSE)),
            signature_value=str(data.get("signatureValue", "")),
        )


# ------------------------------------------------------------------
# DID Document (Pydantic v2)
# ------------------------------------------------------------------


class DidDocument(BaseModel):
    """A signed ``did:jis`` DID document.

    Parameters
    ----------
    context:
        JSON-LD context URIs, serialized as ``@context``.
    id:
        The DID subject. Must parse as ``did:<method>:<id>``.
    verification_method:
        The document's key entries (one for ``did:jis``).
    authentication:
        References to verification methods usable for authentication.
    proof:
        The signature block, or ``None`` for an unsigned skeleton.
    """

    model_config = {"frozen": True, "extra": "forbid"}

    context: list[str] = Field(default_factory=lambda: list(DID_CONTEXT))
    id: str
    verification_method: list[VerificationMethod] = Field(default_factory=list)
    authentication: list[str] = Field(default_factory=list)
    proof: Proof | None = None

    @field_validator("id")
    @classmethod
    def validate_did_format(cls, value: str) -> str:
        """Reject ids that are not ``did:<method>:<id>`` strings."""
        parse_did(value)
        return value

    @model_validator(mode="after")
    def validate_authentication_references(self) -> "DidDocument":
        """Authentication references must point to declared methods."""
        method_ids = {vm.id for vm in self.verification_method}
        for auth_ref in self.authentication:
            if auth_ref not in method_ids:
                raise ValueError(
                    f"authentication reference {auth_ref!r} does not match "
                    "any declared verificationMethod id."
                )
        return self

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def resolve_verification_method(self, method_id: str) -> VerificationMethod | None:
        """Return the verification method with the given id, or ``None``."""
        for method in self.verification_method:
            if method.id == method_id:
                return method
        return None

    def public_key_multibase(self) -> str | None:
        """Return the multibase key the proof refers to, if declared."""
        if self.proof is None:
            return None
        method = self.resolve_verification_method(self.proof.verification_method)
        return method.public_key_multibase if method is not None else None

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def unsigned_dict(self) -> dict[str, object]:
        """Return the document without ``proof.signatureValue``, in canonical key order."""
        data: dict[str, object] = {
            "@context": list(self.context),
            "id": self.id,
            "verificationMethod": [vm.to_dict() for vm in self.verification_method],
            "authentication": list(self.authentication),
        }
        if self.proof is not None:
            data["proof"] = self.proof.to_dict(include_signature=False)
        return data

    def canonical_bytes(self) -> bytes:
        """Return the exact bytes covered by the proof signature.

        Raises
        ------
        InvalidInputError
            If a field holds text that is not encodable as UTF-8.
        """
        text = json.dumps(self.unsigned_dict(), separators=(",", ":"), ensure_ascii=False)
        try:
            return text.encode("utf-8")
        except UnicodeEncodeError as exc:
            raise InvalidInputError(
                f"DID document is not encodable as UTF-8: {exc.reason}."
            ) from exc

    def to_dict(self) -> dict[str, object]:
        """Serialize to a plain dictionary, including the full proof."""
        data = self.unsigned_dict()
        if self.proof is not None:
            data["proof"] = self.proof.to_dict()
        return data

    def to_json(self, indent: int | None = 2) -> str:
        """Serialize this document to a JSON string."""
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> "DidDocument":
        """Rebuild a document from its dictionary form.

        Raises
        ------
        ValueError
            If required fields are missing, have the wrong shape, or unknown
            fields are present. Unknown fields are not covered by the proof.
        """
        if not isinstance(data, dict):
            raise ValueError("A DID document must be a JSON object.")
        _reject_unknown_fields(data, _DOCUMENT_FIELDS, "DID document")
        methods_raw: list[dict[str, object]] = data.get("verificationMethod", [])  # type: ignore[assignment]
        proof_raw: dict[str, object] | None = data.get("proof")  # type: ignore[assignment]
        try:
            methods = [VerificationMethod.from_dict(vm) for vm in methods_raw]
            proof = Proof.from_dict(proof_raw) if proof_raw is not None else None
            return cls(
                context=data.get("@context", list(DID_CONTEXT)),
                id=data["id"],
                verification_method=methods,
                authentication=data.get("authentication", []),
                proof=proof,
            )
        except (KeyError, TypeError, AttributeError) as exc:
            raise ValueError(f"Invalid DID document: {exc}") from exc

    @classmethod
    def from_json(cls, json_str: str) -> "DidDocument":
        """Deserialize a document from a JSON string.

        Raises
        ------
        ValueError
            If the JSON is malformed or the document fails validation.
        """
        try:
            data = json.loads(json_str)
        except (json.JSONDecodeError, TypeError) as exc:
            raise ValueError(f"Invalid JSON: {exc}") from exc
        except RecursionError as exc:
            raise ValueError("Invalid JSON: nesting too deep.") from exc
        return cls.from_dict(data)


# ------------------------------------------------------------------
# DocumentBuilder
# ------------------------------------------------------------------


class DocumentBuilder:
    """Build signed DID documents for a keypair.

    Parameters
    ----------
    clock:
        Returns the ``created`` timestamp. Defaults to the current UTC time.
    key_fragment:
        Fragment naming the verification method, ``key-1`` by default.

    Example
    -------
    ::

        builder = DocumentBuilder()
        document = builder.build(keypair, "did:jis:device:001")
        print(document.to_json())
    """

    def __init__(
        self,
        clock: Callable[[], datetime] | None = None,
        key_fragment: str = DEFAULT_KEY_FRAGMENT,
    ) -> None:
        if not key_fragment:
            raise ValueError("key_fragment must not be empty.")
        self._clock: Callable[[], datetime] = clock or _utc_now
        self._key_fragment = key_fragment

    def build(self, keypair: KeyPair, did: str) -> DidDocument:
        """Build and sign a document for *did*.

        *did* need not be derived from *keypair*; a caller may build a
        document for any identifier it controls.

        Raises
        ------
        InvalidInputError
            If *did* is missing, empty, or not a ``did:<method>:<id>`` string.
        """
        if not isinstance(did, str) or not did:
            raise InvalidInputError(f"DID must be a non-empty string, got {did!r}.")
        try:
            parse_did(did)
            did.encode("utf-8")
        except MalformedDidError as exc:
            raise InvalidInputError(str(exc)) from exc
        except UnicodeEncodeError as exc:
            raise InvalidInputError(f"DID is not encodable as UTF-8: {exc.reason}.") from exc

        method_id = f"{did}#{self._key_fragment}"
        proof = Proof(
            type=PROOF_TYPE,
            created=format_timestamp(self._clock()),
            verification_method=method_id,
        )
        skeleton = DidDocument(
            id=did,
            verification_method=[
                VerificationMethod(
                    id=method_id,
                    type=VERIFICATION_KEY_TYPE,
                    controller=did,
                    public_key_multibase=keypair.public_multibase(),
                )
            ],
            authentication=[method_id],
            proof=proof,
        )
        signature = sign_message(keypair, skeleton.canonical_bytes())
        document = skeleton.model_copy(
            update={"proof": replace(proof, signature_value=signature)}
        )
        logger.info("Created DID document for %s", did)
        return document


__all__ = [
    "DEFAULT_KEY_FRAGMENT",
    "DID_CONTEXT",
    "PROOF_PURPOSE",
    "PROOF_TYPE",
    "VERIFICATION_KEY_TYPE",
    "DidDocument",
    "DocumentBuilder",
    "Proof",
    "VerificationMethod",
    "format_timestamp",
]
