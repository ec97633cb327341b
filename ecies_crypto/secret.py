"""
Shared secret derivation
========================
ECDH between one side's private scalar and the other side's public point,
then SHA-256 over the raw x-coordinate. The hash is the KDF: raw ECDH
output is not uniformly random and is never used as a key.

Either side can derive the secret:

    derive_secret(alice, bob.public_only()) == derive_secret(bob, alice.public_only())

The result lives in a mutable buffer that is zeroed by wipe() or by
leaving a `with` block.
"""

import hashlib
import hmac
import logging

from .errors import DerivationError, MissingKeyError

logger = logging.getLogger(__name__)

SECRET_SIZE = 32   # SHA-256 digest


class SharedSecret:
    """32-byte symmetric secret, wiped after use."""

    def __init__(self, key: bytes):
        if len(key) != SECRET_SIZE:
            raise DerivationError(
                f"shared secret must be {SECRET_SIZE} bytes, got {len(key)}")
        self._key = bytearray(key)
        self._wiped = False

    @property
    def key(self) -> bytearray:
        if self._wiped:
            raise ValueError("Shared secret has been wiped.")
        return self._key

    @property
    def wiped(self) -> bool:
        return self._wiped

    def wipe(self):
        for i in range(len(self._key)):
            self._key[i] = 0
        self._wiped = True

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.wipe()
        return False

    def __len__(self):
        return SECRET_SIZE

    def __bytes__(self):
        return bytes(self.key)

    def __eq__(self, other):
        if not isinstance(other, SharedSecret):
            return NotImplemented
        return hmac.compare_digest(self.key, other.key)

    __hash__ = None

    def __repr__(self):
        return f"SharedSecret({'wiped' if self._wiped else f'{SECRET_SIZE}B'})"


def kdf(raw: bytes) -> bytes:
    """SHA-256 over raw ECDH output."""
    return hashlib.sha256(raw).digest()


def derive_secret(own, peer) -> SharedSecret:
    """
    Derive the shared secret for a key pair. At least one of `own` and
    `peer` must hold a private scalar; `own` wins when both do.
    """
    if own is None or peer is None:
        raise MissingKeyError("missing key")

    if own.has_private_scalar():
        priv, pub = own, peer
    elif peer.has_private_scalar():
        priv, pub = peer, own
    else:
        raise MissingKeyError()

    raw = priv.diffie_hellman(pub.public_point())
    expected = (priv.curve.key_size + 7) // 8
    if len(raw) != expected:
        raise DerivationError(
            f"ecdh key failed: expected {expected}B shared point, got {len(raw)}B")

    secret = SharedSecret(kdf(raw))
    logger.debug(f"Derived secret: curve={priv.curve.name} raw={len(raw)}B")
    return secret
