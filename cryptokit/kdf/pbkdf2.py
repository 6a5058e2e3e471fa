"""
PBKDF2 key derivation (RFC 2898 / RFC 8018) over HMAC.

For each 1-based block index i:

    U1 = HMAC(P, S || INT_32_BE(i))
    Uj = HMAC(P, Uj-1)
    T_i = U1 ^ U2 ^ ... ^ Uc

Blocks are concatenated until ``key_size`` words are available, then the
result is truncated to exactly ``key_size * 4`` bytes.
"""

import logging
from dataclasses import dataclass
from typing import Type

from ..core.encoding import to_word_array
from ..core.words import WordArray
from ..hashing.base import Hasher
from ..hashing.hmac import HMAC
from ..hashing.sha1 import SHA1


logger = logging.getLogger(__name__)

# Defaults: 128-bit key, HMAC-SHA1, single iteration
DEFAULT_PBKDF2_KEY_SIZE = 128 // 32
DEFAULT_PBKDF2_ITERATIONS = 1


@dataclass(frozen=True)
class PBKDF2:
    """
    PBKDF2 configuration and derivation.

    Attributes:
        key_size: Derived key length in 32-bit words
        hasher: Hasher class used by the HMAC PRF
        iterations: Iteration count (c)

    Example:
        >>> kdf = PBKDF2(key_size=5, iterations=1)
        >>> str(kdf.compute("password", "salt"))
        '0c60c80f961f0e71f3a9b524af6012062fe037a6'
    """
    key_size: int = DEFAULT_PBKDF2_KEY_SIZE
    hasher: Type[Hasher] = SHA1
    iterations: int = DEFAULT_PBKDF2_ITERATIONS

    def __post_init__(self):
        if self.key_size < 1:
            raise ValueError("Key size must be at least one word")
        if self.iterations < 1:
            raise ValueError("Iteration count must be at least 1")

    def compute(self, password, salt) -> WordArray:
        """
        Derive a key.

        Args:
            password: str (UTF-8 encoded), bytes or WordArray
            salt: str (UTF-8 encoded), bytes or WordArray

        Returns:
            Derived key of ``key_size * 4`` bytes
        """
        logger.debug(
            "PBKDF2-HMAC-%s: deriving %d words with %d iterations",
            self.hasher.__name__, self.key_size, self.iterations,
        )
        prf = HMAC(self.hasher, password)
        salt = to_word_array(salt)

        derived_key = WordArray()
        block_index = WordArray([0x00000001])

        while len(derived_key.words) < self.key_size:
            block = prf.update(salt).finalize(block_index)
            prf.reset()

            block_words = block.words
            intermediate = block.clone()
            for _ in range(1, self.iterations):
                intermediate = prf.finalize(intermediate)
                prf.reset()
                for i, word in enumerate(intermediate.words):
                    block_words[i] ^= word

            derived_key.concat(block)
            block_index.words[0] += 1

        derived_key.sig_bytes = self.key_size * 4
        return derived_key.clamp()


def pbkdf2(password, salt, key_size: int = DEFAULT_PBKDF2_KEY_SIZE,
           hasher: Type[Hasher] = SHA1,
           iterations: int = DEFAULT_PBKDF2_ITERATIONS) -> WordArray:
    """Functional shortcut for ``PBKDF2(...).compute(password, salt)``."""
    return PBKDF2(key_size=key_size, hasher=hasher, iterations=iterations).compute(password, salt)
