"""did:key - Python SDK.

Generate, resolve, sign, verify and exchange with did:key identifiers
over Ed25519, X25519 and P-256 keys.

Example:
    >>> from did_key import DIDKey, KeyType
    >>> key = DIDKey.generate(KeyType.ED25519)
    >>> print(key.did)
    did:key:z6MktNWXFy7fn9kNfwfvD9e2rDK3RPetS4MRKtZH8AxQzg9y
    >>> DIDKey.resolve(key.did) == key
    True
"""

import logging

from did_key.codec import (
    MULTICODEC_PREFIXES,
    KeyType,
    decode_fingerprint,
    encode_fingerprint,
    split_multicodec,
)
from did_key.did import extract_key_text, resolve
from did_key.document import (
    JWK,
    DidDocument,
    DocumentConfig,
    VerificationMethod,
    build_document,
)
from did_key.errors import (
    CapabilityError,
    DIDKeyError,
    EncodingError,
    IncompatibleKeysError,
    InvalidDIDError,
    InvalidInputError,
    InvalidSignatureError,
    KeyFormatError,
    MalformedSignatureError,
    MissingSecretKeyError,
    NotImplementedCapabilityError,
    SeedError,
    SerializationError,
    UnsupportedKeyTypeError,
    UnsupportedPayloadError,
)
from did_key.keys import (
    Bls12381G1KeyPair,
    Bls12381G2KeyPair,
    Ed25519KeyPair,
    KeyPair,
    P256KeyPair,
    X25519KeyPair,
)
from did_key.payload import Payload
from did_key.registry import DIDKey
from did_key.seed import RandomSource, generate_seed
from did_key.signing import (
    canonicalize,
    hash_canonical,
    sign_dict,
    verify_dict,
    verify_dict_strict,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    # Core
    "DIDKey",
    "KeyType",
    "Payload",
    "resolve",
    "extract_key_text",
    "generate_seed",
    "RandomSource",
    # Key pairs
    "KeyPair",
    "Ed25519KeyPair",
    "X25519KeyPair",
    "P256KeyPair",
    "Bls12381G1KeyPair",
    "Bls12381G2KeyPair",
    # Codec
    "MULTICODEC_PREFIXES",
    "encode_fingerprint",
    "decode_fingerprint",
    "split_multicodec",
    # Document
    "DidDocument",
    "DocumentConfig",
    "JWK",
    "VerificationMethod",
    "build_document",
    # Signing
    "canonicalize",
    "hash_canonical",
    "sign_dict",
    "verify_dict",
    "verify_dict_strict",
    # Errors
    "DIDKeyError",
    "InvalidInputError",
    "InvalidDIDError",
    "EncodingError",
    "UnsupportedKeyTypeError",
    "SeedError",
    "KeyFormatError",
    "MalformedSignatureError",
    "InvalidSignatureError",
    "CapabilityError",
    "MissingSecretKeyError",
    "IncompatibleKeysError",
    "UnsupportedPayloadError",
    "NotImplementedCapabilityError",
    "SerializationError",
]
