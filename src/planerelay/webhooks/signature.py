"""
HMAC-SHA256 verification for inbound Plane webhooks.
"""

import hashlib
import hmac
from enum import Enum
from typing import Optional, Union


class SignatureStatus(str, Enum):
    """Outcome of a signature check."""
    AUTHENTIC = "authentic"
    MISSING_CREDENTIALS = "missing_credentials"
    MISMATCH = "mismatch"

    @property
    def is_authentic(self) -> bool:
        return self is SignatureStatus.AUTHENTIC


def compute_signature(secret: Union[str, bytes], body: bytes) -> str:
    """Return the hex HMAC-SHA256 of ``body`` under ``secret``."""
    key = secret.encode("utf-8") if isinstance(secret, str) else secret
    return hmac.new(key, body, hashlib.sha256).hexdigest()


def verify_signature(
    secret: Optional[str],
    body: bytes,
    signature: Optional[str],
) -> SignatureStatus:
    """Check ``signature`` against the HMAC of the raw request body.

    Never raises. Lengths are compared before ``hmac.compare_digest`` so the
    constant-time comparison only ever sees equal-length inputs.
    """
    if not secret or not signature:
        return SignatureStatus.MISSING_CREDENTIALS

    expected = compute_signature(secret, body).encode("utf-8")
    provided = signature.encode("utf-8")

    if len(expected) != len(provided):
        return SignatureStatus.MISMATCH
    if not hmac.compare_digest(expected, provided):
        return SignatureStatus.MISMATCH
    return SignatureStatus.AUTHENTIC
