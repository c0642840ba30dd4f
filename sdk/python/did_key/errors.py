"""Error types for did-key.

Four families, kept apart so callers can tell them apart:

- input format errors (bad URI, multibase, seed or key bytes)
- capability errors (missing secret key, mismatched algorithms)
- signature failures
- capabilities that are not implemented for an algorithm yet
"""


class DIDKeyError(Exception):
    """Base exception for did-key operations."""


class InvalidInputError(DIDKeyError):
    """Caller-supplied data could not be parsed."""


class InvalidDIDError(InvalidInputError):
    """DID URI is invalid."""

    def __init__(self, message: str) -> None:
        super().__init__(f"Invalid DID URI: {message}")


class EncodingError(InvalidInputError):
    """Multibase or multicodec data is invalid."""

    def __init__(self, message: str) -> None:
        super().__init__(f"Encoding error: {message}")


class UnsupportedKeyTypeError(EncodingError):
    """No multicodec prefix matches the encoded key."""

    def __init__(self, message: str = "unsupported key type") -> None:
        super().__init__(message)


class SeedError(InvalidInputError):
    """Seed material is unusable."""

    def __init__(self, message: str) -> None:
        super().__init__(f"Seed error: {message}")


class KeyFormatError(InvalidInputError):
    """Key bytes have the wrong length or structure for the algorithm."""

    def __init__(self, message: str) -> None:
        super().__init__(f"Key format error: {message}")


class InvalidSignatureError(DIDKeyError):
    """Signature verification failed."""

    def __init__(self, message: str = "Signature verification failed") -> None:
        super().__init__(message)


class MalformedSignatureError(InvalidSignatureError, InvalidInputError):
    """Signature bytes could not be parsed at all."""

    def __init__(self, message: str) -> None:
        super().__init__(f"Malformed signature: {message}")


class CapabilityError(DIDKeyError):
    """Operation is not available for this key."""

    def __init__(self, message: str) -> None:
        super().__init__(f"Capability error: {message}")


class MissingSecretKeyError(CapabilityError):
    """Operation requires a secret key the key pair does not hold."""

    def __init__(self, message: str = "secret key absent") -> None:
        super().__init__(message)


class IncompatibleKeysError(CapabilityError):
    """Two keys of different algorithms were combined."""


class UnsupportedPayloadError(CapabilityError):
    """Payload form is not accepted by the algorithm."""


class NotImplementedCapabilityError(DIDKeyError, NotImplementedError):
    """Capability is not implemented for the algorithm yet."""

    def __init__(self, message: str) -> None:
        super().__init__(f"Not implemented: {message}")


class SerializationError(DIDKeyError):
    """Serialization or canonicalization failed."""

    def __init__(self, message: str) -> None:
        super().__init__(f"Serialization error: {message}")
