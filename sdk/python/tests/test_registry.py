"""Tests for the DIDKey registry."""

import hashlib
import logging

import pytest

from did_key import (
    CapabilityError,
    DIDKey,
    IncompatibleKeysError,
    InvalidSignatureError,
    KeyType,
    MalformedSignatureError,
    MissingSecretKeyError,
    NotImplementedCapabilityError,
    Payload,
    UnsupportedPayloadError,
)

SIGNING_TYPES = [KeyType.ED25519, KeyType.P256]
SUPPORTED_TYPES = [KeyType.ED25519, KeyType.X25519, KeyType.P256]
BLS_TYPES = [KeyType.BLS12381_G1, KeyType.BLS12381_G2]


def _seed(index: int) -> bytes:
    return hashlib.sha256(f"seed-{index}".encode()).digest()


ROUNDTRIP_CASES = [(key_type, _seed(index)) for key_type in SUPPORTED_TYPES for index in range(40)]


@pytest.mark.parametrize(
    argnames=["key_type", "seed"],
    argvalues=ROUNDTRIP_CASES,
    ids=[f"{key_type.value}-{i % 40}" for i, (key_type, _) in enumerate(ROUNDTRIP_CASES)],
)
def test_resolve_roundtrip(key_type: KeyType, seed: bytes) -> None:
    key = DIDKey.from_seed(key_type, seed)

    resolved = DIDKey.resolve(key.did)

    assert resolved.key_type is key_type
    assert resolved.public_key == key.public_key
    assert resolved.fingerprint() == key.fingerprint()


class TestGenerate:
    @pytest.mark.parametrize("key_type", SUPPORTED_TYPES)
    def test_generate(self, key_type: KeyType) -> None:
        """Generate creates a key with a secret and a DID."""
        key = DIDKey.generate(key_type)

        assert key.key_type is key_type
        assert key.has_secret_key
        assert key.secret_key is not None
        assert key.did == f"did:key:{key.fingerprint()}"

    @pytest.mark.parametrize("key_type", SUPPORTED_TYPES)
    def test_generate_unique(self, key_type: KeyType) -> None:
        """Each generated key is unique."""
        assert DIDKey.generate(key_type) != DIDKey.generate(key_type)

    @pytest.mark.parametrize("key_type", SUPPORTED_TYPES)
    def test_injected_random(self, key_type: KeyType) -> None:
        """An injected random source makes generation deterministic."""
        key = DIDKey.generate(key_type, random=lambda size: b"\x07" * size)

        assert key == DIDKey.from_seed(key_type, b"\x07" * 32)
        assert key.secret_key == DIDKey.from_seed(key_type, b"\x07" * 32).secret_key

    @pytest.mark.parametrize("key_type", SUPPORTED_TYPES)
    def test_from_seed_deterministic(self, key_type: KeyType) -> None:
        """Same seed produces same public and secret key."""
        key_one = DIDKey.from_seed(key_type, _seed(1))
        key_two = DIDKey.from_seed(key_type, _seed(1))

        assert key_one.public_key == key_two.public_key
        assert key_one.secret_key == key_two.secret_key

    @pytest.mark.parametrize("key_type", BLS_TYPES)
    def test_bls_not_implemented(self, key_type: KeyType) -> None:
        """BLS12-381 generation fails loudly."""
        with pytest.raises(NotImplementedCapabilityError):
            DIDKey.generate(key_type)

    def test_generate_logs_fingerprint(self, caplog: pytest.LogCaptureFixture) -> None:
        """Generation logs the fingerprint but never the secret."""
        with caplog.at_level(logging.DEBUG, logger="did_key.registry"):
            key = DIDKey.generate(KeyType.ED25519)

        assert key.fingerprint() in caplog.text
        assert key.secret_key.hex() not in caplog.text


class TestSignVerify:
    @pytest.mark.parametrize("key_type", SIGNING_TYPES)
    def test_sign_verify(self, key_type: KeyType) -> None:
        """Signature verifies for the signed payload only."""
        key = DIDKey.generate(key_type)

        signature = key.sign(b"payload")

        assert key.verify(b"payload", signature)
        assert not key.verify(b"other payload", signature)

    @pytest.mark.parametrize("key_type", SIGNING_TYPES)
    def test_verify_with_resolved_key(self, key_type: KeyType) -> None:
        """A resolved public-only key verifies signatures."""
        key = DIDKey.generate(key_type)
        signature = key.sign(Payload.buffer(b"payload"))

        assert DIDKey.resolve(key.did).verify(b"payload", signature)

    @pytest.mark.parametrize("key_type", SIGNING_TYPES)
    def test_unrelated_key(self, key_type: KeyType) -> None:
        """Signature from another key does not verify."""
        signer = DIDKey.generate(key_type)
        other = DIDKey.generate(key_type)

        assert not other.verify(b"payload", signer.sign(b"payload"))

    @pytest.mark.parametrize("key_type", SIGNING_TYPES)
    def test_public_only_cannot_sign(self, key_type: KeyType) -> None:
        """Resolved keys have no secret and cannot sign."""
        key = DIDKey.resolve(DIDKey.generate(key_type).did)

        assert key.secret_key is None
        with pytest.raises(MissingSecretKeyError):
            key.sign(b"payload")

    @pytest.mark.parametrize("key_type", SIGNING_TYPES)
    def test_buffer_array_rejected(self, key_type: KeyType) -> None:
        """Single-buffer algorithms reject buffer arrays."""
        key = DIDKey.generate(key_type)

        with pytest.raises(UnsupportedPayloadError):
            key.sign([b"one", b"two"])

    def test_x25519_cannot_sign(self) -> None:
        """X25519 signing is a capability error."""
        with pytest.raises(CapabilityError):
            DIDKey.generate(KeyType.X25519).sign(b"payload")

    def test_verify_strict(self) -> None:
        """Strict verification raises on mismatch."""
        key = DIDKey.generate(KeyType.ED25519)
        signature = key.sign(b"payload")

        key.verify_strict(b"payload", signature)
        with pytest.raises(InvalidSignatureError, match="verification failed"):
            key.verify_strict(b"tampered", signature)

    def test_malformed_distinct_from_false(self) -> None:
        """Malformed signatures raise, mismatches return False."""
        key = DIDKey.generate(KeyType.ED25519)

        assert key.verify(b"payload", b"\x00" * 64) is False
        with pytest.raises(MalformedSignatureError):
            key.verify(b"payload", b"\x00" * 10)


class TestKeyExchange:
    def test_symmetric(self) -> None:
        """Both sides derive the same secret."""
        alice = DIDKey.generate(KeyType.X25519)
        bob = DIDKey.generate(KeyType.X25519)

        assert alice.key_exchange(bob) == bob.key_exchange(alice)

    def test_with_resolved_peer(self) -> None:
        """Exchange works with a resolved peer key."""
        alice = DIDKey.generate(KeyType.X25519)
        bob = DIDKey.generate(KeyType.X25519)

        assert alice.key_exchange(DIDKey.resolve(bob.did)) == bob.key_exchange(alice)

    def test_cross_algorithm(self) -> None:
        """X25519 with P-256 is a capability error."""
        with pytest.raises(IncompatibleKeysError, match="X25519 with P256"):
            DIDKey.generate(KeyType.X25519).key_exchange(DIDKey.generate(KeyType.P256))

    def test_incompatible_is_capability_error(self) -> None:
        """Incompatible keys are capability errors."""
        assert issubclass(IncompatibleKeysError, CapabilityError)

    def test_p256_not_implemented(self) -> None:
        """P-256 exchange fails as not implemented."""
        with pytest.raises(NotImplementedCapabilityError):
            DIDKey.generate(KeyType.P256).key_exchange(DIDKey.generate(KeyType.P256))

    def test_ed25519_unsupported(self) -> None:
        """Ed25519 exchange is a capability error."""
        with pytest.raises(CapabilityError):
            DIDKey.generate(KeyType.ED25519).key_exchange(DIDKey.generate(KeyType.ED25519))

    def test_public_only(self) -> None:
        """Exchange from a public-only key fails."""
        alice = DIDKey.resolve(DIDKey.generate(KeyType.X25519).did)

        with pytest.raises(MissingSecretKeyError):
            alice.key_exchange(DIDKey.generate(KeyType.X25519))

    def test_ed25519_to_x25519(self) -> None:
        """Ed25519 keys convert to X25519 for key agreement."""
        alice = DIDKey.generate(KeyType.ED25519).to_x25519()
        bob = DIDKey.generate(KeyType.X25519)

        assert alice.key_type is KeyType.X25519
        assert alice.key_exchange(bob) == bob.key_exchange(alice)

    def test_to_x25519_other_types(self) -> None:
        """Only Ed25519 keys convert."""
        with pytest.raises(CapabilityError):
            DIDKey.generate(KeyType.P256).to_x25519()


class TestHandle:
    def test_equality(self) -> None:
        """Keys compare by type and public key."""
        key = DIDKey.generate(KeyType.ED25519)

        assert key == DIDKey.resolve(key.did)
        assert hash(key) == hash(DIDKey.resolve(key.did))

    def test_immutable(self) -> None:
        """Handles cannot be modified."""
        key = DIDKey.generate(KeyType.ED25519)

        with pytest.raises(AttributeError):
            key.extra = 1  # type: ignore[attr-defined]

    def test_repr_no_secrets(self) -> None:
        """Repr shows DID but not secrets."""
        key = DIDKey.generate(KeyType.P256)
        repr_str = repr(key)

        assert key.did in repr_str
        assert key.secret_key.hex() not in repr_str
        assert "secret" not in repr_str.lower()
