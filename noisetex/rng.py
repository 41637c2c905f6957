"""Deterministic splittable RNG streams and seed resolution."""

from __future__ import annotations

from dataclasses import dataclass
import hashlib
import logging

import numpy as np


logger = logging.getLogger(__name__)

MAX_SEED = 2**31 - 1


def _normalize_seed(seed: int) -> int:
    return int(seed) & ((1 << 64) - 1)


def derive_seed(parent_seed: int, key: str, *, namespace: str = "noisetex") -> int:
    """Derive a deterministic child seed from a parent seed and label."""

    payload = f"{namespace}:{_normalize_seed(parent_seed)}:{key}".encode("utf-8")
    digest = hashlib.blake2b(payload, digest_size=8, person=b"noisetex").digest()
    return int.from_bytes(digest, byteorder="big", signed=False)


def resolve_seed(seed: int, *, random_seed: bool = False) -> int:
    """Return `seed`, or a freshly drawn one when random seeding is requested."""

    if not random_seed:
        return int(seed)
    drawn = int(np.random.default_rng().integers(0, MAX_SEED))
    logger.info("Using seed: %d", drawn)
    return drawn


@dataclass(frozen=True)
class RngStream:
    """Immutable RNG stream that can be forked by deterministic stage names."""

    seed: int
    namespace: str = "noisetex"

    def fork(self, key: str) -> "RngStream":
        if not key:
            raise ValueError("fork key must be non-empty")
        return RngStream(derive_seed(self.seed, key, namespace=self.namespace), self.namespace)

    def generator(self) -> np.random.Generator:
        return np.random.Generator(np.random.PCG64(np.uint64(_normalize_seed(self.seed))))

    def int_seed(self) -> int:
        """Collapse the stream seed into a non-negative 31-bit integer."""

        return int(self.seed % MAX_SEED)
