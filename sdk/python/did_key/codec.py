"""Fingerprint codec for did:key identifiers.

Format: z<base58btc(multicodec_prefix + public_key)>

- Multibase prefix: z (base58btc)
- Multicodec prefixes are not of uniform length: P-256 uses three bytes,
  every other supported key type uses two.
"""

from enum import Enum

import base58

from did_key.errors import EncodingError, UnsupportedKeyTypeError

# Multibase prefix for base58btc
BASE58BTC_PREFIX = "z"


class KeyType(Enum):
    """Algorithm tag for a did:key public key."""

    ED25519 = "Ed25519"
    X25519 = "X25519"
    P256 = "P256"
    BLS12381_G1 = "Bls12381G1"
    BLS12381_G2 = "Bls12381G2"


MULTICODEC_PREFIXES: dict[KeyType, bytes] = {
    KeyType.ED25519: bytes([0xED, 0x01]),
    KeyType.X25519: bytes([0xEC, 0x01]),
    KeyType.BLS12381_G1: bytes([0xEA, 0x01]),
    KeyType.BLS12381_G2: bytes([0xEB, 0x01]),
    KeyType.P256: bytes([0x12, 0x00, 0x01]),
}

# Order the decoder tries prefixes in. No prefix is a prefix of another.
_DECODE_ORDER = (
    KeyType.ED25519,
    KeyType.X25519,
    KeyType.BLS12381_G1,
    KeyType.BLS12381_G2,
    KeyType.P256,
)


def encode_base58btc(data: bytes) -> str:
    """Encode bytes as base58btc text without the multibase prefix."""
    return base58.b58encode(data).decode("ascii")


def decode_base58btc(text: str) -> bytes:
    """Decode base58btc text without the multibase prefix.

    Raises:
        EncodingError: If the text is not valid base58btc.
    """
    try:
        return base58.b58decode(text)
    except ValueError as exc:
        raise EncodingError(f"invalid base58 encoding: {exc}") from exc


def encode_fingerprint(key_type: KeyType, public_key: bytes) -> str:
    """Encode a public key as a multibase fingerprint."""
    data = MULTICODEC_PREFIXES[key_type] + bytes(public_key)
    return f"{BASE58BTC_PREFIX}{encode_base58btc(data)}"


def split_multicodec(data: bytes) -> tuple[KeyType, bytes]:
    """Split multicodec-prefixed bytes into key type and raw public key.

    Raises:
        UnsupportedKeyTypeError: If no known prefix matches.
    """
    for key_type in _DECODE_ORDER:
        prefix = MULTICODEC_PREFIXES[key_type]
        if data.startswith(prefix):
            return key_type, data[len(prefix) :]
    raise UnsupportedKeyTypeError()


def decode_fingerprint(fingerprint: str) -> tuple[KeyType, bytes]:
    """Decode a multibase fingerprint into key type and raw public key.

    Args:
        fingerprint: Text starting with the base58btc multibase prefix.

    Raises:
        EncodingError: If the prefix or base58 data is invalid.
        UnsupportedKeyTypeError: If the multicodec prefix is unknown.
    """
    if not fingerprint.startswith(BASE58BTC_PREFIX):
        raise EncodingError("must use base58btc encoding (z prefix)")
    return split_multicodec(decode_base58btc(fingerprint[1:]))
