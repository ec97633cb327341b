"""
ecies_crypto
============
Elliptic Curve Integrated Encryption Scheme for EC key pairs.

Layers:
    1  SECRET    — ECDH + SHA-256 KDF → 32-byte shared secret
    2  MAC       — HMAC-SHA256 over the plaintext
    3  ENVELOPE  — AES-256-CBC over MAC || plaintext, random IV in front
    4  SCHEME    — encrypt_for / decrypt_from for a pair of EC keys

One construction only; no cipher-suite negotiation.

License: Apache 2.0
"""

__version__  = "1.0.0"

from .errors   import (
    ECIESError,
    MissingKeyError,
    DerivationError,
    EntropyError,
    MACComputationError,
    MalformedCiphertextError,
    DecryptionError,
    IntegrityError,
    BadPaddingError,
    AuthenticationError,
)
from .keys     import ECKey
from .secret   import SharedSecret, derive_secret
from .mac      import compute_mac
from .envelope import EnvelopeCipher
from .scheme   import ECIESCipher, encrypt_for, decrypt_from, self_test_round_trip

__all__ = [
    "ECIESError",
    "MissingKeyError",
    "DerivationError",
    "EntropyError",
    "MACComputationError",
    "MalformedCiphertextError",
    "DecryptionError",
    "IntegrityError",
    "BadPaddingError",
    "AuthenticationError",
    "ECKey",
    "SharedSecret",
    "derive_secret",
    "compute_mac",
    "EnvelopeCipher",
    "ECIESCipher",
    "encrypt_for",
    "decrypt_from",
    "self_test_round_trip",
]
