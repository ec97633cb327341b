"""
EC key pairs
============
A thin wrapper around `cryptography` elliptic-curve keys exposing exactly
what the scheme needs from a key pair:

  * has_private_scalar() — does this side hold the private half?
  * public_point()       — X9.62 uncompressed public point bytes
  * diffie_hellman(pt)   — raw ECDH x-coordinate with a peer's point

A key may be public-only (what you hold for a peer) or full (your own).
Default curve is secp256k1.

Dependencies: cryptography >= 41.0
"""

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec

from .errors import DerivationError, MissingKeyError


DEFAULT_CURVE = ec.SECP256K1


def _point(public_key: ec.EllipticCurvePublicKey) -> bytes:
    return public_key.public_bytes(
        serialization.Encoding.X962,
        serialization.PublicFormat.UncompressedPoint
    )


class ECKey:
    """Elliptic-curve key pair, private half optional."""

    def __init__(self, private_key: ec.EllipticCurvePrivateKey = None,
                 public_key: ec.EllipticCurvePublicKey = None):
        """
        Pass a private key, a public key, or both.
        The public key is derived from the private key when omitted.
        """
        if private_key is None and public_key is None:
            raise ValueError("ECKey needs a private or a public key.")
        if public_key is None:
            public_key = private_key.public_key()
        elif private_key is not None and (
                _point(private_key.public_key()) != _point(public_key)):
            raise ValueError("ECKey private and public keys do not match.")
        self._private_key = private_key
        self._public_key  = public_key

    @classmethod
    def generate(cls, curve: ec.EllipticCurve = None) -> "ECKey":
        """Generate a fresh key pair on `curve` (secp256k1 by default)."""
        if curve is None:
            curve = DEFAULT_CURVE()
        return cls(private_key=ec.generate_private_key(curve))

    @classmethod
    def from_public_point(cls, point: bytes,
                          curve: ec.EllipticCurve = None) -> "ECKey":
        """Public-only key from an X9.62 encoded point."""
        if curve is None:
            curve = DEFAULT_CURVE()
        pub = ec.EllipticCurvePublicKey.from_encoded_point(curve, bytes(point))
        return cls(public_key=pub)

    @classmethod
    def from_pem(cls, private_pem: bytes = None,
                 public_pem: bytes = None) -> "ECKey":
        """Load keys from PEM bytes."""
        priv = (serialization.load_pem_private_key(private_pem, password=None)
                if private_pem else None)
        pub  = (serialization.load_pem_public_key(public_pem)
                if public_pem else None)
        if priv is not None and not isinstance(priv, ec.EllipticCurvePrivateKey):
            raise ValueError("PEM private key is not an EC key.")
        if pub is not None and not isinstance(pub, ec.EllipticCurvePublicKey):
            raise ValueError("PEM public key is not an EC key.")
        return cls(private_key=priv, public_key=pub)

    def public_only(self) -> "ECKey":
        """The half of this key that may be handed to a peer."""
        return ECKey(public_key=self._public_key)

    @property
    def curve(self) -> ec.EllipticCurve:
        return self._public_key.curve

    def has_private_scalar(self) -> bool:
        return self._private_key is not None

    def public_point(self) -> bytes:
        return _point(self._public_key)

    def export_public_pem(self) -> bytes:
        return self._public_key.public_bytes(
            serialization.Encoding.PEM,
            serialization.PublicFormat.SubjectPublicKeyInfo
        )

    def export_private_pem(self) -> bytes:
        if self._private_key is None:
            raise MissingKeyError("public-only key has no private PEM")
        return self._private_key.private_bytes(
            serialization.Encoding.PEM,
            serialization.PrivateFormat.PKCS8,
            serialization.NoEncryption()
        )

    def diffie_hellman(self, peer_public_point: bytes) -> bytes:
        """
        Raw ECDH with our private scalar and the peer's public point.
        Returns the shared point's x-coordinate, unhashed. Never use it
        as a key directly.
        """
        if self._private_key is None:
            raise MissingKeyError()
        try:
            peer = ec.EllipticCurvePublicKey.from_encoded_point(
                self.curve, bytes(peer_public_point))
            return self._private_key.exchange(ec.ECDH(), peer)
        except ValueError as exc:
            raise DerivationError(f"ecdh key failed: {exc}") from exc

    def __repr__(self):
        kind = "private" if self.has_private_scalar() else "public"
        return f"ECKey({self.curve.name}, {kind})"
