"""Exception hierarchy for did-jis.

Every error raised by the engine derives from :class:`DidJisError`. Input
errors additionally derive from :class:`ValueError` so callers that only
care about "bad input" can catch the builtin.

Verification predicates never raise any of these; they return ``False``.
"""
from __future__ import annotations


class DidJisError(Exception):
    """Base class for all did-jis errors."""


class InvalidKeyEncodingError(DidJisError, ValueError):
    """Raised when a secret key is not exactly 64 hexadecimal characters."""


class InvalidInputError(DidJisError, ValueError):
    """Raised when a required identifier or DID argument is missing or malformed."""


class EmptyIdentifierError(InvalidInputError):
    """Raised when a DID is constructed from an empty or missing identifier."""


class MalformedDidError(DidJisError, ValueError):
    """Raised when a string does not follow the ``did:<method>:<id>`` grammar."""


class EngineStateError(DidJisError, RuntimeError):
    """Raised when an operation is invoked on an engine that is not ready."""


__all__ = [
    "DidJisError",
    "EmptyIdentifierError",
    "EngineStateError",
    "InvalidInputError",
    "InvalidKeyEncodingError",
    "MalformedDidError",
]
