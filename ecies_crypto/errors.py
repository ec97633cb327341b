"""
Error taxonomy
==============
Every failure the scheme can report is a distinct exception class so a
caller can tell them apart. None of them are retried internally.

    ECIESError
      ├── MissingKeyError           neither side holds a private scalar
      ├── DerivationError           ECDH / KDF produced an unexpected result
      ├── EntropyError              no randomness available for the IV
      ├── MACComputationError       HMAC primitive failed
      ├── MalformedCiphertextError  envelope too short / wrong shape
      ├── DecryptionError           block cipher primitive failed
      └── IntegrityError
            ├── BadPaddingError     padding invalid after decryption
            └── AuthenticationError HMAC mismatch ("bad hmac")

Callers exposed to untrusted input should catch IntegrityError rather than
its two children, so padding failures and MAC failures look the same.
"""


class ECIESError(Exception):
    """Base class for every ECIES failure."""


class MissingKeyError(ECIESError, ValueError):
    """Neither key of the pair holds a private scalar."""

    def __init__(self, message: str = "no private key"):
        super().__init__(message)


class DerivationError(ECIESError):
    """The ECDH computation or the KDF yielded an unexpected result."""

    def __init__(self, message: str = "ecdh key failed"):
        super().__init__(message)


class EntropyError(ECIESError):
    """The system random source could not supply an IV."""

    def __init__(self, message: str = "insufficient entropy"):
        super().__init__(message)


class MACComputationError(ECIESError):
    pass


class MalformedCiphertextError(ECIESError, ValueError):
    """Envelope rejected before (or while) it is decrypted."""

    def __init__(self, message: str = "ciphertext too short"):
        super().__init__(message)


class DecryptionError(ECIESError):
    pass


class IntegrityError(ECIESError):
    """Envelope decrypted but did not verify."""


class BadPaddingError(IntegrityError):

    def __init__(self, message: str = "plaintext had bad padding"):
        super().__init__(message)


class AuthenticationError(IntegrityError):

    def __init__(self, message: str = "bad hmac"):
        super().__init__(message)
