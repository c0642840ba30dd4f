"""
DID Document building for did:key identifiers.

A DID Document describes a key's identity, including:
- Verification methods (public keys, legacy base58 or JWK form)
- Verification relationships (authentication, key agreement, ...)
"""

from __future__ import annotations

import base64
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict

from did_key.codec import KeyType, encode_base58btc
from did_key.errors import NotImplementedCapabilityError
from did_key.signing import canonicalize

if TYPE_CHECKING:
    from did_key.registry import DIDKey

logger = logging.getLogger(__name__)

DID_CONTEXT = "https://www.w3.org/ns/did/v1"

JSON_WEB_KEY_2020 = "JsonWebKey2020"

# Legacy verification method type, JWK key type and curve per key type
_METHOD_TYPES: Dict[KeyType, tuple[str, str, str]] = {
    KeyType.ED25519: ("Ed25519VerificationKey2018", "OKP", "Ed25519"),
    KeyType.X25519: ("X25519KeyAgreementKey2019", "OKP", "X25519"),
    KeyType.P256: ("UnsupportedVerificationMethod2020", "EC", "P-256"),
}


def _b64url(data: bytes) -> str:
    """Base64url encode without padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


class DocumentConfig(BaseModel):
    """Options for building a DID Document.

    Attributes:
        use_jose_format: Emit JsonWebKey2020 methods instead of base58 keys.
        serialize_secrets: Include secret keys. Off unless asked for.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    use_jose_format: bool = False
    serialize_secrets: bool = False


class JWK(BaseModel):
    """A JSON Web Key for an OKP or EC public key."""

    model_config = ConfigDict(frozen=True)

    kty: str
    crv: str
    x: str
    y: Optional[str] = None
    d: Optional[str] = None

    def to_dict(self) -> Dict[str, str]:
        return self.model_dump(exclude_none=True)


@dataclass
class VerificationMethod:
    """A verification method (public key) in a DID Document."""

    id: str
    type: str
    controller: str
    public_key_base58: Optional[str] = None
    public_key_jwk: Optional[JWK] = None
    private_key_base58: Optional[str] = None
    private_key_jwk: Optional[JWK] = None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "id": self.id,
            "type": self.type,
            "controller": self.controller,
        }
        if self.public_key_base58 is not None:
            result["publicKeyBase58"] = self.public_key_base58
        if self.public_key_jwk is not None:
            result["publicKeyJwk"] = self.public_key_jwk.to_dict()
        if self.private_key_base58 is not None:
            result["privateKeyBase58"] = self.private_key_base58
        if self.private_key_jwk is not None:
            result["privateKeyJwk"] = self.private_key_jwk.to_dict()
        return result


@dataclass
class DidDocument:
    """
    A DID Document for a did:key identifier.

    Example:
        >>> key = DIDKey.generate(KeyType.ED25519)
        >>> doc = key.to_did_document(DocumentConfig(use_jose_format=True))
        >>> doc.to_dict()["id"] == key.did
        True
    """

    id: str
    verification_methods: List[VerificationMethod] = field(default_factory=list)
    authentication: Optional[List[str]] = None
    assertion_method: Optional[List[str]] = None
    capability_delegation: Optional[List[str]] = None
    capability_invocation: Optional[List[str]] = None
    key_agreement: Optional[List[str]] = None

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to a JSON-serializable dictionary.

        Relationships that are not set are left out.
        """
        doc: Dict[str, Any] = {
            "@context": DID_CONTEXT,
            "id": self.id,
            "verificationMethod": [vm.to_dict() for vm in self.verification_methods],
        }

        relationships = {
            "authentication": self.authentication,
            "assertionMethod": self.assertion_method,
            "capabilityDelegation": self.capability_delegation,
            "capabilityInvocation": self.capability_invocation,
            "keyAgreement": self.key_agreement,
        }
        for name, ids in relationships.items():
            if ids is not None:
                doc[name] = list(ids)

        return doc

    def to_json(self) -> bytes:
        """Serialize as canonical JSON."""
        return canonicalize(self.to_dict())

    def __repr__(self) -> str:
        return f"DidDocument({self.id}, methods={len(self.verification_methods)})"


def _jwk_for(key: DIDKey, secret: Optional[bytes]) -> JWK:
    _, kty, crv = _METHOD_TYPES[key.key_type]
    public_key = key.public_key
    d = _b64url(secret) if secret is not None else None

    if key.key_type is KeyType.P256:
        # Uncompressed point: 0x04 || x || y
        return JWK(
            kty=kty,
            crv=crv,
            x=_b64url(public_key[1:33]),
            y=_b64url(public_key[33:65]),
            d=d,
        )
    return JWK(kty=kty, crv=crv, x=_b64url(public_key), d=d)


def verification_method(key: DIDKey, config: DocumentConfig, controller: str) -> VerificationMethod:
    """Build the verification method for a single key."""
    if key.key_type not in _METHOD_TYPES:
        raise NotImplementedCapabilityError(f"{key.key_type.value} verification methods")

    legacy_type, _, _ = _METHOD_TYPES[key.key_type]
    method_id = f"{controller}#{key.fingerprint()}"
    secret = key.secret_key if config.serialize_secrets else None

    if config.use_jose_format:
        return VerificationMethod(
            id=method_id,
            type=JSON_WEB_KEY_2020,
            controller=controller,
            public_key_jwk=_jwk_for(key, None),
            private_key_jwk=_jwk_for(key, secret) if secret is not None else None,
        )

    return VerificationMethod(
        id=method_id,
        type=legacy_type,
        controller=controller,
        public_key_base58=encode_base58btc(key.public_key),
        private_key_base58=encode_base58btc(secret) if secret is not None else None,
    )


def verification_methods(
    key: DIDKey, config: DocumentConfig, controller: str
) -> List[VerificationMethod]:
    """
    Build every verification method for a key.

    Ed25519 keys also get the X25519 key agreement method derived from
    the same key.
    """
    methods = [verification_method(key, config, controller)]
    if key.key_type is KeyType.ED25519:
        methods.append(verification_method(key.to_x25519(), config, controller))
    return methods


def build_document(key: DIDKey, config: Optional[DocumentConfig] = None) -> DidDocument:
    """
    Build the DID Document for a key.

    Args:
        key: A generated or resolved key
        config: Output options, defaults to legacy base58 without secrets

    Returns:
        The DID Document

    Raises:
        NotImplementedCapabilityError: For key types without a document form
    """
    config = config or DocumentConfig()
    controller = key.did
    methods = verification_methods(key, config, controller)
    if config.serialize_secrets and key.has_secret_key:
        logger.debug("serializing secret key material for %s", controller)

    if key.key_type is KeyType.X25519:
        return DidDocument(
            id=controller,
            verification_methods=methods,
            key_agreement=[methods[0].id],
        )

    primary = [methods[0].id]
    return DidDocument(
        id=controller,
        verification_methods=methods,
        authentication=primary,
        assertion_method=list(primary),
        capability_delegation=list(primary),
        capability_invocation=list(primary),
        key_agreement=[methods[-1].id],
    )
