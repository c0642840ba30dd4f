"""The did:key registry: one handle type over every supported algorithm.

Every operation resolves the key type first and then delegates to the
matching key pair class. Algorithm mismatches are detected here.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from did_key.codec import KeyType
from did_key.document import DidDocument, DocumentConfig, build_document
from did_key.errors import CapabilityError, IncompatibleKeysError, InvalidSignatureError
from did_key.keys import (
    Bls12381G1KeyPair,
    Bls12381G2KeyPair,
    Ed25519KeyPair,
    KeyPair,
    P256KeyPair,
    X25519KeyPair,
)
from did_key.payload import BytesLike, Payload
from did_key.seed import RandomSource

logger = logging.getLogger(__name__)

KEY_PAIR_TYPES: dict[KeyType, type[KeyPair]] = {
    KeyType.ED25519: Ed25519KeyPair,
    KeyType.X25519: X25519KeyPair,
    KeyType.P256: P256KeyPair,
    KeyType.BLS12381_G1: Bls12381G1KeyPair,
    KeyType.BLS12381_G2: Bls12381G2KeyPair,
}

PayloadLike = Payload | BytesLike | Sequence[BytesLike]


class DIDKey:
    """A did:key handle wrapping exactly one key pair.

    Example:
        >>> key = DIDKey.generate(KeyType.ED25519)
        >>> signature = key.sign(b"hello")
        >>> key.verify(b"hello", signature)
        True
    """

    __slots__ = ("_key_pair",)

    def __init__(self, key_pair: KeyPair) -> None:
        self._key_pair = key_pair

    @classmethod
    def generate(cls, key_type: KeyType, *, random: RandomSource | None = None) -> DIDKey:
        """Generate a new key from a fresh random seed.

        Raises:
            NotImplementedCapabilityError: For BLS12-381 key types.
        """
        key = cls.from_seed(key_type, b"", random=random)
        logger.debug("generated %s key %s", key_type.value, key.fingerprint())
        return key

    @classmethod
    def from_seed(
        cls, key_type: KeyType, seed: bytes, *, random: RandomSource | None = None
    ) -> DIDKey:
        """Derive a key from a 32-byte seed (empty for a random one).

        Raises:
            SeedError: If the seed length is invalid.
            NotImplementedCapabilityError: For BLS12-381 key types.
        """
        return cls(KEY_PAIR_TYPES[key_type].from_seed(seed, random=random))

    @classmethod
    def from_public_key(cls, key_type: KeyType, public_key: bytes) -> DIDKey:
        """Create a public-only key.

        Raises:
            KeyFormatError: If the bytes are invalid for the key type.
            NotImplementedCapabilityError: For BLS12-381 key types.
        """
        return cls(KEY_PAIR_TYPES[key_type].from_public_bytes(public_key))

    @classmethod
    def resolve(cls, did_uri: str) -> DIDKey:
        """Resolve a did:key URI into a public-only key."""
        from did_key.did import resolve

        return resolve(did_uri)

    @property
    def key_type(self) -> KeyType:
        return self._key_pair.key_type

    @property
    def key_pair(self) -> KeyPair:
        return self._key_pair

    @property
    def public_key(self) -> bytes:
        """Public key bytes (uncompressed point for P-256)."""
        return self._key_pair.public_key_bytes()

    @property
    def secret_key(self) -> bytes | None:
        """Export the secret key bytes, or None for public-only keys.

        Warning: Handle with care.
        """
        return self._key_pair.secret_key_bytes()

    @property
    def has_secret_key(self) -> bool:
        return self._key_pair.has_secret_key

    def fingerprint(self) -> str:
        """Multibase fingerprint of the public key."""
        return self._key_pair.fingerprint()

    @property
    def did(self) -> str:
        return f"did:key:{self.fingerprint()}"

    def sign(self, payload: PayloadLike) -> bytes:
        """Sign a payload.

        Raises:
            MissingSecretKeyError: If this is a public-only key.
            CapabilityError: If the key type cannot sign.
        """
        return self._key_pair.sign(Payload.coerce(payload))

    def verify(self, payload: PayloadLike, signature: bytes) -> bool:
        """Verify a signature. Returns False if it does not match.

        Raises:
            MalformedSignatureError: If the signature cannot be parsed.
            CapabilityError: If the key type cannot verify.
        """
        return self._key_pair.verify(Payload.coerce(payload), signature)

    def verify_strict(self, payload: PayloadLike, signature: bytes) -> None:
        """Verify a signature, raising on failure.

        Raises:
            InvalidSignatureError: If verification fails.
        """
        if not self.verify(payload, signature):
            raise InvalidSignatureError(f"Signature verification failed for {self.did}")

    def key_exchange(self, other: DIDKey) -> bytes:
        """Compute a shared secret with another key of the same type.

        Raises:
            IncompatibleKeysError: If the key types differ.
            MissingSecretKeyError: If this key is public-only.
            NotImplementedCapabilityError: For P-256.
        """
        if other.key_type is not self.key_type:
            raise IncompatibleKeysError(
                f"cannot exchange {self.key_type.value} with {other.key_type.value}"
            )
        return self._key_pair.key_exchange(other.key_pair)

    def to_x25519(self) -> DIDKey:
        """Get the X25519 key agreement key for an Ed25519 key."""
        if not isinstance(self._key_pair, Ed25519KeyPair):
            raise CapabilityError(f"cannot convert {self.key_type.value} key to X25519")
        return DIDKey(self._key_pair.to_x25519())

    def to_did_document(self, config: DocumentConfig | None = None) -> DidDocument:
        """Build the DID document for this key."""
        return build_document(self, config)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DIDKey):
            return NotImplemented
        return self.key_type is other.key_type and self.public_key == other.public_key

    def __hash__(self) -> int:
        return hash((self.key_type, self.public_key))

    def __repr__(self) -> str:
        return f"DIDKey({self.key_type.value}, did={self.did})"
