"""
Request Signature Verification.

Callers authenticate by sending an HMAC-SHA256 of the request body in the
``X-Signature`` header, computed with the shared ``HMAC_SECRET``.

Canonical form:
    The MAC covers the RFC 8785 (JCS) serialization of the parsed JSON body:
    object keys sorted, no insignificant whitespace, numbers rendered the way
    ECMAScript does (``1000.0`` -> ``1000``). Two clients that send the same
    logical JSON therefore produce the same signature regardless of key order
    or spacing on the wire. A missing body is signed as ``{}``.

    Integers beyond 2**53 - 1 in magnitude are signed as the nearest double,
    which is the value a JavaScript client holds after parsing the same body.
    An integer too large for a double is signed as ``null``, matching what
    ``JSON.stringify`` emits for ``Infinity``.

Verification never raises: a missing signature, a signature of the wrong
length, or a payload that cannot be canonicalized all yield ``False``.
"""

import hashlib
import hmac
from typing import Any, Optional

import rfc8785

MAX_SAFE_INTEGER = 2**53 - 1


def to_json_number_domain(value: Any) -> Any:
    """Replace integers outside the safe range with their double value."""
    if isinstance(value, dict):
        return {key: to_json_number_domain(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_json_number_domain(item) for item in value]
    if isinstance(value, int) and not isinstance(value, bool) and abs(value) > MAX_SAFE_INTEGER:
        try:
            return float(value)
        except OverflowError:
            return None
    return value


def canonical_json(payload: Any) -> bytes:
    """Deterministic canonical JSON bytes per RFC 8785."""
    return rfc8785.dumps(to_json_number_domain({} if payload is None else payload))


class SignatureVerifier:
    """Signs and verifies payloads with a shared HMAC secret."""

    def __init__(self, secret: str):
        self._secret = secret.encode("utf-8")

    def sign(self, payload: Any) -> str:
        """
        Compute the lowercase hex HMAC-SHA256 of a payload.

        Raises:
            rfc8785.CanonicalizationError: If the payload has no canonical form
        """
        return hmac.new(self._secret, canonical_json(payload), hashlib.sha256).hexdigest()

    def verify(self, payload: Any, signature: Optional[str]) -> bool:
        """Check a provided signature in constant time."""
        if not signature or not isinstance(signature, str):
            return False
        try:
            expected = self.sign(payload)
        except (rfc8785.CanonicalizationError, TypeError, ValueError):
            return False
        provided = signature.encode("utf-8")
        if len(provided) != len(expected):
            return False
        return hmac.compare_digest(expected.encode("ascii"), provided)
