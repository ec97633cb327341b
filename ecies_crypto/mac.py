"""
Message authenticator
=====================
HMAC-SHA256 over the plaintext, keyed by the full shared secret.
Deterministic, so the receiver can recompute and compare.
"""

import hashlib
import hmac

from .errors import MACComputationError

MAC_SIZE = 32   # HMAC-SHA256 tag


def compute_mac(secret, data: bytes) -> bytes:
    """
    32-byte HMAC-SHA256 tag of `data`.
    `secret` is a SharedSecret or raw 32-byte key material.
    """
    key = getattr(secret, "key", secret)
    try:
        tag = hmac.new(key, data, hashlib.sha256).digest()
    except (TypeError, ValueError) as exc:
        raise MACComputationError(f"hmac failed: {exc}") from exc
    if len(tag) != MAC_SIZE:
        raise MACComputationError(f"hmac produced {len(tag)}B, expected {MAC_SIZE}B")
    return tag


def verify_mac(secret, data: bytes, tag: bytes) -> bool:
    """Constant-time check of `tag` against a fresh MAC over `data`."""
    return hmac.compare_digest(compute_mac(secret, data), bytes(tag))
