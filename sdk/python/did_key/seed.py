"""Seed material for key generation.

Randomness comes from an injectable source so that tests can generate
keys deterministically without touching the system entropy pool.
"""

import secrets
from collections.abc import Callable

from did_key.errors import SeedError

SEED_SIZE = 32

RandomSource = Callable[[int], bytes]


def default_random(size: int) -> bytes:
    """Draw bytes from the OS secure entropy source."""
    return secrets.token_bytes(size)


def generate_seed(seed: bytes = b"", random: RandomSource | None = None) -> bytes:
    """Validate a seed, or draw a fresh one when none is given.

    Args:
        seed: Exactly 32 bytes, or empty to generate random bytes.
        random: Byte source used when `seed` is empty.

    Raises:
        SeedError: If seed is neither empty nor 32 bytes.
    """
    if len(seed) == SEED_SIZE:
        return bytes(seed)
    if len(seed) != 0:
        raise SeedError(f"seed must be {SEED_SIZE} bytes, got {len(seed)}")

    source = random or default_random
    fresh = source(SEED_SIZE)
    if len(fresh) != SEED_SIZE:
        raise SeedError(f"random source returned {len(fresh)} bytes")
    return bytes(fresh)
