"""
ECIES  |  ECDH + SHA-256 KDF + HMAC-then-AES-256-CBC
====================================================
Public encrypt/decrypt for EC key pairs.

The sender combines their private key with the recipient's public key;
the recipient combines their private key with the sender's public key.
Both arrive at the same 32-byte secret, so either side can encrypt and
either side can decrypt:

    sender    = ECIESCipher(sender_key)
    bundle    = sender.encrypt_for(recipient_public, b"hello")

    recipient = ECIESCipher(recipient_key)
    recipient.decrypt_from(sender_public, bundle)   # b"hello"

Bundle format: IV(16) || AES-256-CBC(HMAC-SHA256(pt)(32) || pt || PKCS#7)

The secret is wiped as soon as each call returns or raises. Calls share no
state, so independent calls may run on separate threads.

Dependencies: cryptography >= 41.0
"""

import logging
import os
from typing import Iterable, Optional

from cryptography.hazmat.primitives.asymmetric import ec

from .envelope import EnvelopeCipher
from .keys import ECKey
from .secret import derive_secret

logger = logging.getLogger(__name__)

SELF_TEST_ROUNDS   = 30000
SELF_TEST_MAX_SIZE = 3000


class ECIESCipher:
    """ECIES bound to one side's key pair."""

    def __init__(self, key: ECKey = None):
        """Pass an ECKey, or omit to generate a fresh secp256k1 pair."""
        if key is None:
            key = ECKey.generate()
        self._key      = key
        self._envelope = EnvelopeCipher()

    @classmethod
    def generate(cls, curve: ec.EllipticCurve = None) -> "ECIESCipher":
        return cls(ECKey.generate(curve))

    @property
    def key(self) -> ECKey:
        return self._key

    def public_point(self) -> bytes:
        return self._key.public_point()

    def export_public_pem(self) -> bytes:
        return self._key.export_public_pem()

    def encrypt_for(self, peer: ECKey, plaintext: bytes) -> bytes:
        """
        Encrypt `plaintext` so that `peer` (or we) can decrypt it.
        Returns a self-contained envelope.
        """
        with derive_secret(self._key, peer) as secret:
            return self._envelope.encrypt(secret, plaintext)

    def decrypt_from(self, peer: ECKey, ciphertext: bytes) -> bytes:
        """
        Decrypt an envelope exchanged with `peer`.
        Raises an ECIESError subclass on any failure.
        """
        with derive_secret(self._key, peer) as secret:
            return self._envelope.decrypt(secret, ciphertext)

    def __repr__(self):
        return f"ECIESCipher({self._key!r})"


def encrypt_for(own: ECKey, peer: ECKey, plaintext: bytes) -> bytes:
    return ECIESCipher(own).encrypt_for(peer, plaintext)


def decrypt_from(own: ECKey, peer: ECKey, ciphertext: bytes) -> bytes:
    return ECIESCipher(own).decrypt_from(peer, ciphertext)


def self_test_round_trip(sizes: Optional[Iterable[int]] = None,
                         curve: ec.EllipticCurve = None) -> bool:
    """
    Round-trip random messages of each length in `sizes` between two
    fresh key pairs, each side holding only the other's public key.
    Default: 30000 rounds, lengths cycling 0..2999.
    """
    if sizes is None:
        sizes = (i % SELF_TEST_MAX_SIZE for i in range(SELF_TEST_ROUNDS))

    sender_priv    = ECKey.generate(curve)
    recipient_priv = ECKey.generate(curve)
    sender_pub     = sender_priv.public_only()
    recipient_pub  = recipient_priv.public_only()

    rounds = 0
    for size in sizes:
        message    = os.urandom(size)
        ciphertext = encrypt_for(sender_priv, recipient_pub, message)
        decrypted  = decrypt_from(recipient_priv, sender_pub, ciphertext)
        if decrypted != message:
            logger.warning(f"Self-test mismatch at {size}B (round {rounds})")
            return False
        rounds += 1

    logger.info(f"Self-test passed: {rounds} rounds on {sender_priv.curve.name}")
    return True


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format=' %(message)s')

    print(f"\n{'═'*60}")
    print("ECIES self-test  (secp256k1, HMAC-SHA256 + AES-256-CBC)")
    print(f"{'═'*60}")

    sizes = [i % SELF_TEST_MAX_SIZE for i in range(0, SELF_TEST_ROUNDS, 97)]
    ok = self_test_round_trip(sizes)
    print(f"{len(sizes)} rounds: {'PASSED' if ok else 'FAILED'}")
    print(f"Empty envelope:  {EnvelopeCipher.envelope_size(0)}B")
    print(f"3000B envelope:  {EnvelopeCipher.envelope_size(3000)}B")
    print(f"{'═'*60}\n")
    raise SystemExit(0 if ok else 1)
