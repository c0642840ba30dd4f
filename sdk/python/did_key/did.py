"""did:key URI resolution.

Format: did:key:z<base58btc(multicodec_prefix + public_key)>[#z<same>]

The key is decoded in memory; nothing is fetched over the network.
"""

import logging
from urllib.parse import urlsplit

from did_key.codec import BASE58BTC_PREFIX, decode_base58btc, split_multicodec
from did_key.errors import InvalidDIDError
from did_key.registry import DIDKey

DID_KEY_PREFIX = "did:key:"

logger = logging.getLogger(__name__)


def extract_key_text(did_uri: str) -> str:
    """Get the multibase-encoded key text of a did:key URI.

    The fragment wins when present, so `did:key:zX#zX` and `did:key:zX`
    yield the same text.

    Raises:
        InvalidDIDError: If the URI cannot be parsed.
    """
    try:
        parts = urlsplit(did_uri)
    except ValueError as exc:
        raise InvalidDIDError(f"couldn't parse DID URI: {exc}") from exc
    if not parts.scheme:
        raise InvalidDIDError("couldn't parse DID URI")

    if "#" in did_uri:
        return parts.fragment
    return did_uri.removeprefix(DID_KEY_PREFIX)


def resolve(did_uri: str) -> DIDKey:
    """Resolve a did:key URI into a public-only key.

    Args:
        did_uri: A did:key URI, optionally with a key fragment.

    Raises:
        InvalidDIDError: If the URI or its key data is invalid.
        EncodingError: If the key is not valid base58btc.
        UnsupportedKeyTypeError: If the multicodec prefix is unknown.
        NotImplementedCapabilityError: For BLS12-381 keys.
    """
    key_text = extract_key_text(did_uri)
    if not key_text.startswith(BASE58BTC_PREFIX):
        raise InvalidDIDError("invalid URI data")

    key_type, public_key = split_multicodec(decode_base58btc(key_text[1:]))
    logger.debug("resolved %s as %s key", did_uri, key_type.value)
    return DIDKey.from_public_key(key_type, public_key)
