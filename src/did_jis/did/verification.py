"""DocumentVerifier — check the self-certification of a DID document.

A ``did:jis`` document carries its own public key. Verification decodes
that key, recomputes the canonical unsigned bytes and checks the proof
signature against them. No registry or network lookup is involved.

Checks
------
- ``document_parses``            — input decodes to a DidDocument
- ``did_format_valid``           — ``id`` is a ``did:<method>:<id>`` string
- ``controller_matches``         — every method is controlled by the document DID
- ``authentication_refs_valid``  — authentication refs point to declared methods
- ``proof_present``              — the document carries a proof block
- ``proof_method_declared``      — the proof references a declared method
- ``public_key_decodes``         — the referenced multibase key decodes
- ``signature_valid``            — the proof signature verifies

Documents decoded from JSON or a dictionary are validated by the
:class:`DidDocument` model first, so ``did_format_valid`` and
``authentication_refs_valid`` only fail for models created without
validation (``model_construct`` or ``model_copy``).
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field

from did_jis.crypto.multibase import decode_public_key
from did_jis.crypto.signer import verify_signature
from did_jis.did.document import DidDocument
from did_jis.did.grammar import parse_did
from did_jis.errors import InvalidInputError, MalformedDidError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VerificationResult:
    """The outcome of a document verification.

    Parameters
    ----------
    valid:
        ``True`` only if ``checks_failed`` is empty.
    checks_passed:
        Names of the checks that passed.
    checks_failed:
        Names of the checks that failed.
    details:
        Additional context about the verification run.
    """

    valid: bool
    checks_passed: list[str] = field(default_factory=list)
    checks_failed: list[str] = field(default_factory=list)
    details: dict[str, object] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # valid iff no failed checks
        object.__setattr__(self, "valid", len(self.checks_failed) == 0)


def _build_result(
    passed: list[str],
    failed: list[str],
    details: dict[str, object] | None = None,
) -> VerificationResult:
    return VerificationResult(
        valid=len(failed) == 0,
        checks_passed=passed,
        checks_failed=failed,
        details=details or {},
    )


class DocumentVerifier:
    """Verify DID documents produced by :class:`~did_jis.did.document.DocumentBuilder`.

    Example
    -------
    ::

        verifier = DocumentVerifier()
        result = verifier.verify(document_json)
        if not result.valid:
            print("Failed checks:", result.checks_failed)
    """

    def verify(self, document: DidDocument | str | dict[str, object]) -> VerificationResult:
        """Run every check against *document*.

        Parameters
        ----------
        document:
            A :class:`DidDocument`, its JSON text, or its dictionary form.

        Returns
        -------
        VerificationResult
            Never raises; malformed input is reported as failed checks.
        """
        passed: list[str] = []
        failed: list[str] = []

        try:
            if isinstance(document, DidDocument):
                parsed = document
            elif isinstance(document, str):
                parsed = DidDocument.from_json(document)
            else:
                parsed = DidDocument.from_dict(document)
        except ValueError as exc:
            failed.append("document_parses")
            return _build_result(passed, failed, details={"error": str(exc)})
        passed.append("document_parses")

        try:
            parse_did(parsed.id)
            passed.append("did_format_valid")
        except MalformedDidError:
            failed.append("did_format_valid")

        if all(vm.controller == parsed.id for vm in parsed.verification_method):
            passed.append("controller_matches")
        else:
            failed.append("controller_matches")

        method_ids = {vm.id for vm in parsed.verification_method}
        if all(ref in method_ids for ref in parsed.authentication):
            passed.append("authentication_refs_valid")
        else:
            failed.append("authentication_refs_valid")

        proof = parsed.proof
        if proof is None:
            failed.append("proof_present")
            return _build_result(passed, failed, details={"did": parsed.id})
        passed.append("proof_present")

        multibase = parsed.public_key_multibase()
        if multibase is None:
            failed.append("proof_method_declared")
            return _build_result(passed, failed, details={"did": parsed.id})
        passed.append("proof_method_declared")

        try:
            public_key = decode_public_key(multibase)
            passed.append("public_key_decodes")
        except ValueError:
            failed.append("public_key_decodes")
            return _build_result(passed, failed, details={"did": parsed.id})

        try:
            signed_bytes = parsed.canonical_bytes()
        except InvalidInputError:
            signed_bytes = None
        if signed_bytes is not None and verify_signature(
            public_key, signed_bytes, proof.signature_value
        ):
            passed.append("signature_valid")
        else:
            failed.append("signature_valid")

        result = _build_result(
            passed,
            failed,
            details={"did": parsed.id, "public_key_hex": public_key.hex()},
        )
        logger.debug("Verified DID document %s: valid=%s", parsed.id, result.valid)
        return result


def verify_document(document: DidDocument | str | dict[str, object]) -> bool:
    """Return ``True`` iff *document* is a correctly self-signed DID document."""
    return DocumentVerifier().verify(document).valid


__all__ = ["DocumentVerifier", "VerificationResult", "verify_document"]
