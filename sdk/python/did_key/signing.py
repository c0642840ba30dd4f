"""JCS canonicalization and JSON message signing.

Uses RFC 8785 JSON Canonicalization Scheme for deterministic
JSON serialization, so signatures over JSON values are verifiable
across implementations and for any signing key type.
"""

import base64
import hashlib
from typing import TYPE_CHECKING

import canonicaljson

from did_key.errors import InvalidSignatureError, MalformedSignatureError, SerializationError

if TYPE_CHECKING:
    from did_key.registry import DIDKey


def canonicalize(value: dict) -> bytes:
    """Canonicalize a dict using JCS (RFC 8785).

    Returns deterministic bytes suitable for signing.
    """
    try:
        return canonicaljson.encode_canonical_json(value)
    except Exception as exc:
        raise SerializationError(f"JCS canonicalization failed: {exc}") from exc


def hash_canonical(value: dict) -> bytes:
    """SHA-256 hash of canonical JSON."""
    canonical = canonicalize(value)
    return hashlib.sha256(canonical).digest()


def sign_dict(value: dict, key: "DIDKey") -> str:
    """Sign a dict using JCS canonicalization.

    Returns base64-encoded signature.
    """
    canonical = canonicalize(value)
    signature = key.sign(canonical)
    return base64.b64encode(signature).decode("ascii")


def verify_dict(value: dict, signature_b64: str, key: "DIDKey") -> bool:
    """Verify a signature on a dict.

    Args:
        value: The original dict.
        signature_b64: Base64-encoded signature.
        key: Key whose public half is checked.

    Returns:
        True if valid, False otherwise, including when the signature
        cannot be decoded.
    """
    try:
        signature = base64.b64decode(signature_b64, validate=True)
    except ValueError:
        return False
    try:
        return key.verify(canonicalize(value), signature)
    except (MalformedSignatureError, SerializationError):
        return False


def verify_dict_strict(value: dict, signature_b64: str, key: "DIDKey") -> None:
    """Verify a signature on a dict, raising on failure.

    Raises:
        InvalidSignatureError: If verification fails.
    """
    if not verify_dict(value, signature_b64, key):
        payload_hash = hash_canonical(value).hex()[:16]
        raise InvalidSignatureError(
            f"Signature verification failed. Payload hash: {payload_hash}..."
        )
