"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

hasher.py
Implements content hashing with pluggable hash algorithms.

HasherImpl streams the whole file through the chosen algorithm in fixed-size
chunks, so memory use does not depend on file size. Nothing is cached and
nothing is retried: every call reads the file again.
"""

import hashlib
import logging
from typing import Dict

import xxhash

from dupes.core.interfaces import Hasher, HashAlgorithm, HashState
from dupes.core.models import HashError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024


# Use the same way to implement and use any other hashing algorithm
class Sha256AlgorithmImpl(HashAlgorithm):
    name = "sha256"

    @staticmethod
    def new() -> HashState:
        return hashlib.sha256()


class XXHashAlgorithmImpl(HashAlgorithm):
    """
    xxHash XXH3-128. Much faster than SHA-256 but not cryptographic:
    only use it on trees nobody could have crafted collisions into.
    """
    name = "xxhash"

    @staticmethod
    def new() -> HashState:
        return xxhash.xxh3_128()


ALGORITHMS: Dict[str, HashAlgorithm] = {
    Sha256AlgorithmImpl.name: Sha256AlgorithmImpl(),
    XXHashAlgorithmImpl.name: XXHashAlgorithmImpl(),
}


def get_algorithm(name: str) -> HashAlgorithm:
    try:
        return ALGORITHMS[name.strip().lower()]
    except KeyError:
        raise ValueError(
            f"Unknown hash algorithm: '{name}'. Valid options: {', '.join(ALGORITHMS)}"
        ) from None


class HasherImpl(Hasher):
    """
    A hasher implementation that supports any algorithm via the HashAlgorithm interface.
    """

    def __init__(self, algorithm: HashAlgorithm = None, chunk_size: int = CHUNK_SIZE):
        self.algorithm = algorithm or Sha256AlgorithmImpl()
        self.chunk_size = chunk_size

    def compute_digest(self, path: str) -> str:
        """
        Computes the hex digest of the entire file.

        Raises:
            HashError: If the file cannot be opened or read.
        """
        state = self.algorithm.new()
        try:
            with open(path, 'rb') as f:
                for chunk in iter(lambda: f.read(self.chunk_size), b''):
                    state.update(chunk)
        except OSError as e:
            logger.debug(f"Error reading {path}: {e}")
            raise HashError(path, e.strerror or str(e)) from e
        return state.hexdigest()
