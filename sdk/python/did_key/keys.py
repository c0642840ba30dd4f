"""Key pairs for each supported algorithm.

Security:
- Ed25519 and X25519 use PyNaCl (libsodium bindings)
- P-256 uses the cryptography package
- Representations only show public info, never secrets
- Seeds come from an injectable random source, see `did_key.seed`
"""

from __future__ import annotations

from typing import Any, ClassVar, Self

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.asymmetric.utils import (
    decode_dss_signature,
    encode_dss_signature,
)
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat
from nacl.bindings import crypto_scalarmult
from nacl.exceptions import BadSignatureError, CryptoError
from nacl.public import PrivateKey, PublicKey
from nacl.signing import SigningKey, VerifyKey

from did_key.codec import KeyType, encode_fingerprint
from did_key.errors import (
    CapabilityError,
    IncompatibleKeysError,
    KeyFormatError,
    MalformedSignatureError,
    MissingSecretKeyError,
    NotImplementedCapabilityError,
    SeedError,
)
from did_key.payload import Payload
from did_key.seed import RandomSource, generate_seed

# Order of the P-256 group
_P256_ORDER = 0xFFFFFFFF00000000FFFFFFFFFFFFFFFFBCE6FAADA7179E84F3B9CAC2FC632551
_P256_SCALAR_SIZE = 32
_P256_UNCOMPRESSED_TAG = 0x04


class KeyPair:
    """A public key and an optional secret key for one algorithm.

    Subclasses bind the algorithm. Instances never change after
    construction, so they can be shared between threads.
    """

    key_type: ClassVar[KeyType]

    __slots__ = ("_public_key", "_secret_key")

    def __init__(self, public_key: Any, secret_key: Any | None = None) -> None:
        self._public_key = public_key
        self._secret_key = secret_key

    @classmethod
    def from_seed(cls, seed: bytes = b"", *, random: RandomSource | None = None) -> Self:
        """Derive a key pair from a 32-byte seed, or a random one if empty.

        Raises:
            SeedError: If the seed is neither empty nor 32 bytes.
        """
        return cls._from_secret_seed(generate_seed(seed, random))

    @classmethod
    def _from_secret_seed(cls, seed: bytes) -> Self:
        raise NotImplementedCapabilityError(f"{cls.key_type.value} key generation")

    @classmethod
    def from_public_bytes(cls, public_key: bytes) -> Self:
        """Create a public-only key pair.

        Raises:
            KeyFormatError: If the bytes are invalid for the algorithm.
        """
        raise NotImplementedCapabilityError(f"{cls.key_type.value} public key decoding")

    @property
    def has_secret_key(self) -> bool:
        return self._secret_key is not None

    def public_key_bytes(self) -> bytes:
        raise NotImplementedError

    def secret_key_bytes(self) -> bytes | None:
        raise NotImplementedError

    def fingerprint(self) -> str:
        return encode_fingerprint(self.key_type, self.public_key_bytes())

    def sign(self, payload: Payload) -> bytes:
        """Sign a payload.

        Raises:
            MissingSecretKeyError: If this is a public-only key pair.
        """
        raise CapabilityError(f"{self.key_type.value} keys cannot sign")

    def verify(self, payload: Payload, signature: bytes) -> bool:
        """Verify a signature against the public key.

        Returns:
            True if valid, False if the signature does not match.

        Raises:
            MalformedSignatureError: If the signature cannot be parsed.
        """
        raise CapabilityError(f"{self.key_type.value} keys cannot verify signatures")

    def key_exchange(self, other: KeyPair) -> bytes:
        """Compute a shared secret with another key of the same algorithm."""
        raise CapabilityError(f"{self.key_type.value} keys do not support key exchange")

    def _require_secret(self) -> Any:
        if self._secret_key is None:
            raise MissingSecretKeyError()
        return self._secret_key

    def _require_same_type(self, other: KeyPair) -> None:
        if type(other) is not type(self):
            raise IncompatibleKeysError(
                f"cannot combine {self.key_type.value} with {other.key_type.value}"
            )

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.fingerprint()})"


class Ed25519KeyPair(KeyPair):
    """Ed25519 signing key pair."""

    key_type = KeyType.ED25519

    __slots__ = ()

    _public_key: VerifyKey
    _secret_key: SigningKey | None

    @classmethod
    def _from_secret_seed(cls, seed: bytes) -> Self:
        signing_key = SigningKey(seed)
        return cls(signing_key.verify_key, signing_key)

    @classmethod
    def from_public_bytes(cls, public_key: bytes) -> Self:
        if len(public_key) != 32:
            raise KeyFormatError(f"Ed25519 public key must be 32 bytes, got {len(public_key)}")
        return cls(VerifyKey(bytes(public_key)))

    def public_key_bytes(self) -> bytes:
        return bytes(self._public_key)

    def secret_key_bytes(self) -> bytes | None:
        if self._secret_key is None:
            return None
        return bytes(self._secret_key)

    def sign(self, payload: Payload) -> bytes:
        """Sign a message. Returns 64-byte signature."""
        message = payload.single()
        signed = self._require_secret().sign(message)
        return bytes(signed.signature)

    def verify(self, payload: Payload, signature: bytes) -> bool:
        message = payload.single()
        if len(signature) != 64:
            raise MalformedSignatureError(
                f"Ed25519 signature must be 64 bytes, got {len(signature)}"
            )
        try:
            self._public_key.verify(message, bytes(signature))
        except BadSignatureError:
            return False
        return True

    def to_x25519(self) -> X25519KeyPair:
        """Convert to the equivalent X25519 key pair for key agreement."""
        try:
            public_key = self._public_key.to_curve25519_public_key()
        except CryptoError as exc:
            raise KeyFormatError(f"Ed25519 key has no X25519 equivalent: {exc}") from exc
        secret_key = None
        if self._secret_key is not None:
            secret_key = self._secret_key.to_curve25519_private_key()
        return X25519KeyPair(public_key, secret_key)


class X25519KeyPair(KeyPair):
    """X25519 key agreement key pair."""

    key_type = KeyType.X25519

    __slots__ = ()

    _public_key: PublicKey
    _secret_key: PrivateKey | None

    @classmethod
    def _from_secret_seed(cls, seed: bytes) -> Self:
        private_key = PrivateKey(seed)
        return cls(private_key.public_key, private_key)

    @classmethod
    def from_public_bytes(cls, public_key: bytes) -> Self:
        if len(public_key) != PublicKey.SIZE:
            raise KeyFormatError(f"X25519 public key must be 32 bytes, got {len(public_key)}")
        return cls(PublicKey(bytes(public_key)))

    def public_key_bytes(self) -> bytes:
        return bytes(self._public_key)

    def secret_key_bytes(self) -> bytes | None:
        if self._secret_key is None:
            return None
        return bytes(self._secret_key)

    def key_exchange(self, other: KeyPair) -> bytes:
        """Diffie-Hellman with another X25519 key. Returns 32 bytes."""
        self._require_same_type(other)
        secret_key = self._require_secret()
        try:
            return crypto_scalarmult(bytes(secret_key), other.public_key_bytes())
        except CryptoError as exc:
            raise KeyFormatError(f"key exchange rejected the public key: {exc}") from exc


class P256KeyPair(KeyPair):
    """NIST P-256 ECDSA key pair.

    Public keys are handled as 65-byte uncompressed SEC1 points and
    signatures as fixed-size 64-byte r || s.
    """

    key_type = KeyType.P256

    __slots__ = ()

    _public_key: ec.EllipticCurvePublicKey
    _secret_key: ec.EllipticCurvePrivateKey | None

    @classmethod
    def _from_secret_seed(cls, seed: bytes) -> Self:
        private_value = int.from_bytes(seed, "big")
        if not 0 < private_value < _P256_ORDER:
            raise SeedError("seed is not a valid P-256 scalar")
        private_key = ec.derive_private_key(private_value, ec.SECP256R1())
        return cls(private_key.public_key(), private_key)

    @classmethod
    def from_public_bytes(cls, public_key: bytes) -> Self:
        """Accept a 65-byte uncompressed point or the raw 64-byte x || y."""
        data = bytes(public_key)
        if len(data) == 64:
            data = bytes([_P256_UNCOMPRESSED_TAG]) + data
        if len(data) != 65:
            raise KeyFormatError(f"P-256 public key must be 64 or 65 bytes, got {len(public_key)}")
        try:
            point = ec.EllipticCurvePublicKey.from_encoded_point(ec.SECP256R1(), data)
        except ValueError as exc:
            raise KeyFormatError(f"invalid P-256 point: {exc}") from exc
        return cls(point)

    def public_key_bytes(self) -> bytes:
        return self._public_key.public_bytes(Encoding.X962, PublicFormat.UncompressedPoint)

    def secret_key_bytes(self) -> bytes | None:
        if self._secret_key is None:
            return None
        private_value = self._secret_key.private_numbers().private_value
        return private_value.to_bytes(_P256_SCALAR_SIZE, "big")

    def sign(self, payload: Payload) -> bytes:
        """Sign a message with ECDSA/SHA-256. Returns 64-byte r || s."""
        message = payload.single()
        der = self._require_secret().sign(message, ec.ECDSA(hashes.SHA256()))
        r, s = decode_dss_signature(der)
        return r.to_bytes(_P256_SCALAR_SIZE, "big") + s.to_bytes(_P256_SCALAR_SIZE, "big")

    def verify(self, payload: Payload, signature: bytes) -> bool:
        message = payload.single()
        if len(signature) != 2 * _P256_SCALAR_SIZE:
            raise MalformedSignatureError(
                f"P-256 signature must be 64 bytes, got {len(signature)}"
            )
        r = int.from_bytes(signature[:_P256_SCALAR_SIZE], "big")
        s = int.from_bytes(signature[_P256_SCALAR_SIZE:], "big")
        if not (0 < r < _P256_ORDER and 0 < s < _P256_ORDER):
            raise MalformedSignatureError("P-256 signature scalar out of range")
        try:
            self._public_key.verify(encode_dss_signature(r, s), message, ec.ECDSA(hashes.SHA256()))
        except InvalidSignature:
            return False
        return True

    def key_exchange(self, other: KeyPair) -> bytes:
        self._require_same_type(other)
        raise NotImplementedCapabilityError("P-256 key exchange")


class Bls12381G1KeyPair(KeyPair):
    """BLS12-381 key with the public key in G1.

    Key material for this curve cannot be generated or decoded yet.
    """

    key_type = KeyType.BLS12381_G1

    __slots__ = ()


class Bls12381G2KeyPair(KeyPair):
    """BLS12-381 key with the public key in G2.

    Key material for this curve cannot be generated or decoded yet.
    """

    key_type = KeyType.BLS12381_G2

    __slots__ = ()
