"""
Envelope cipher: HMAC-then-AES-256-CBC
======================================
The authenticated-encryption transform keyed by the 32-byte shared secret.
The same secret keys both the HMAC and the cipher.

Envelope format:

    IV(16) || AES-256-CBC( HMAC-SHA256(plaintext)(32) || plaintext || PKCS#7 )

Everything but the IV is encrypted. An empty plaintext costs 64 bytes:
IV, two blocks of MAC, one full block of padding. That is also the
shortest envelope accepted: anything under 64 bytes (IV, MAC, one block)
is rejected before the cipher runs.

Decryption order is fixed: length check, MAC block, body, padding, then a
constant-time MAC comparison. Padding is checked before the MAC, which
leaves a padding-oracle surface if BadPaddingError and
AuthenticationError are reported differently to a remote party. Catch
IntegrityError at trust boundaries.

A body truncated to a partial block fails in the cipher itself and is
reported as DecryptionError, not as an IntegrityError.

Dependencies: cryptography >= 41.0
"""

import logging
import os

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from .errors import (
    AuthenticationError,
    BadPaddingError,
    DecryptionError,
    EntropyError,
    MalformedCiphertextError,
)
from .mac import MAC_SIZE, compute_mac, verify_mac

logger = logging.getLogger(__name__)


class EnvelopeCipher:
    """AES-256-CBC envelope around HMAC-SHA256 || plaintext."""

    KEY_SIZE   = 32   # AES-256
    BLOCK_SIZE = 16   # AES block
    IV_SIZE    = 16
    MAC_SIZE   = MAC_SIZE
    MIN_ENVELOPE_SIZE = 2 * BLOCK_SIZE + MAC_SIZE   # IV + MAC + one block

    @classmethod
    def envelope_size(cls, plaintext_len: int) -> int:
        """Exact envelope length for a plaintext of `plaintext_len` bytes."""
        body = cls.MAC_SIZE + plaintext_len
        return cls.IV_SIZE + (body // cls.BLOCK_SIZE + 1) * cls.BLOCK_SIZE

    def _key(self, secret):
        key = getattr(secret, "key", secret)
        if len(key) != self.KEY_SIZE:
            raise ValueError(f"AES-256 key must be {self.KEY_SIZE} bytes.")
        return key

    def _cipher(self, secret, iv: bytes) -> Cipher:
        return Cipher(algorithms.AES(self._key(secret)), modes.CBC(iv))

    def _fresh_iv(self) -> bytes:
        try:
            iv = os.urandom(self.IV_SIZE)
        except (NotImplementedError, OSError) as exc:
            raise EntropyError() from exc
        if len(iv) != self.IV_SIZE:
            raise EntropyError()
        return iv

    def encrypt(self, secret, plaintext: bytes) -> bytes:
        """
        Encrypt and authenticate.
        Returns: IV || Enc(MAC || plaintext || padding)
        """
        plaintext = bytes(plaintext)
        mac = compute_mac(secret, plaintext)
        iv  = self._fresh_iv()

        encryptor = self._cipher(secret, iv).encryptor()
        padder    = padding.PKCS7(algorithms.AES.block_size).padder()

        out = bytearray(iv)
        out += encryptor.update(padder.update(mac))
        out += encryptor.update(padder.update(plaintext))
        out += encryptor.update(padder.finalize())
        out += encryptor.finalize()

        logger.debug(f"Encrypt: pt={len(plaintext)}B ct={len(out)}B")
        return bytes(out)

    def decrypt(self, secret, ciphertext: bytes) -> bytes:
        """
        Decrypt, strip padding and verify the MAC.
        Plaintext is returned only once the MAC matches.
        """
        ciphertext = bytes(ciphertext)
        if len(ciphertext) < self.MIN_ENVELOPE_SIZE:
            logger.debug(f"Reject: envelope {len(ciphertext)}B < {self.MIN_ENVELOPE_SIZE}B")
            raise MalformedCiphertextError()

        iv         = ciphertext[:self.IV_SIZE]
        body_start = self.IV_SIZE + self.MAC_SIZE
        decryptor  = self._cipher(secret, iv).decryptor()

        claimed_mac = decryptor.update(ciphertext[self.IV_SIZE:body_start])
        if len(claimed_mac) != self.MAC_SIZE:
            raise MalformedCiphertextError("unable to extract hmac")

        try:
            padded = decryptor.update(ciphertext[body_start:]) + decryptor.finalize()
        except ValueError as exc:
            logger.debug("Reject: body is not a whole number of blocks")
            raise DecryptionError("unable to extract plaintext") from exc

        unpadder = padding.PKCS7(algorithms.AES.block_size).unpadder()
        try:
            plaintext = unpadder.update(padded) + unpadder.finalize()
        except ValueError as exc:
            logger.debug("Reject: bad padding")
            raise BadPaddingError() from exc

        if not verify_mac(secret, plaintext, claimed_mac):
            logger.debug("Reject: bad hmac")
            raise AuthenticationError()

        logger.debug(f"Decrypt: ct={len(ciphertext)}B pt={len(plaintext)}B")
        return plaintext
