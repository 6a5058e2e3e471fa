"""
EvpKDF - OpenSSL's legacy EVP_BytesToKey derivation.

    D_1 = H^c(P || S)
    D_i = H^c(D_{i-1} || P || S)

where H^c applies the hash c times. Blocks are concatenated until enough
key material is available. Not a modern KDF; kept for compatibility with
``openssl enc`` style salted ciphertexts.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Type

from ..core.encoding import to_word_array
from ..core.words import WordArray
from ..hashing.base import Hasher
from ..hashing.md5 import MD5


logger = logging.getLogger(__name__)

DEFAULT_EVPKDF_KEY_SIZE = 128 // 32
DEFAULT_EVPKDF_ITERATIONS = 1


@dataclass(frozen=True)
class EvpKDF:
    """
    EvpKDF configuration and derivation.

    Attributes:
        key_size: Derived key length in 32-bit words
        hasher: Hasher class (MD5 matches OpenSSL's historical default)
        iterations: Number of hash applications per block
    """
    key_size: int = DEFAULT_EVPKDF_KEY_SIZE
    hasher: Type[Hasher] = MD5
    iterations: int = DEFAULT_EVPKDF_ITERATIONS

    def __post_init__(self):
        if self.key_size < 1:
            raise ValueError("Key size must be at least one word")
        if self.iterations < 1:
            raise ValueError("Iteration count must be at least 1")

    def compute(self, password, salt) -> WordArray:
        """
        Derive key material.

        Args:
            password: str (UTF-8 encoded), bytes or WordArray
            salt: str (UTF-8 encoded), bytes or WordArray

        Returns:
            Derived key of ``key_size * 4`` bytes
        """
        logger.debug(
            "EvpKDF-%s: deriving %d words with %d iterations",
            self.hasher.__name__, self.key_size, self.iterations,
        )
        hasher = self.hasher()
        password = to_word_array(password)
        salt = to_word_array(salt)

        derived_key = WordArray()
        block: Optional[WordArray] = None

        while len(derived_key.words) < self.key_size:
            if block is not None:
                hasher.update(block)
            block = hasher.update(password).finalize(salt)
            hasher.reset()

            for _ in range(1, self.iterations):
                block = hasher.finalize(block)
                hasher.reset()

            derived_key.concat(block)

        derived_key.sig_bytes = self.key_size * 4
        return derived_key.clamp()


def evpkdf(password, salt, key_size: int = DEFAULT_EVPKDF_KEY_SIZE,
           hasher: Type[Hasher] = MD5,
           iterations: int = DEFAULT_EVPKDF_ITERATIONS) -> WordArray:
    """Functional shortcut for ``EvpKDF(...).compute(password, salt)``."""
    return EvpKDF(key_size=key_size, hasher=hasher, iterations=iterations).compute(password, salt)
