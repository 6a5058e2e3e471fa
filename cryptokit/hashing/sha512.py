"""
SHA-512 and SHA-384 (FIPS 180-4)

The SHA-512 family works on 64-bit words. A WordArray holds each 64-bit word
as two consecutive 32-bit words (high word first), so blocks are 32 words
(1024 bits) long and the length field is 128 bits wide.
"""

from typing import List

from ..core.words import MASK_32, WordArray
from .base import Hasher
from .sha256 import first_primes, fractional_bits


MASK_64 = 0xFFFFFFFFFFFFFFFF

_PRIMES = first_primes(80)

# First 64 bits of the fractional parts of the square roots of the first 8 primes
H_INITIAL = tuple(fractional_bits(p, 2, 64) for p in _PRIMES[:8])

# SHA-384 IV: same rule applied to the 9th-16th primes
H_INITIAL_384 = tuple(fractional_bits(p, 2, 64) for p in _PRIMES[8:16])

# First 64 bits of the fractional parts of the cube roots of the first 80 primes
K = tuple(fractional_bits(p, 3, 64) for p in _PRIMES)


def _rotr64(value: int, amount: int) -> int:
    return ((value >> amount) | (value << (64 - amount))) & MASK_64


class SHA512(Hasher):
    """SHA-512 message digest, 512-bit output."""

    block_size = 1024 // 32
    output_size = 64
    _initial = H_INITIAL

    def _do_reset(self) -> None:
        self._hash: List[int] = list(self._initial)

    def _do_process_block(self, words: List[int], offset: int) -> None:
        w = [(words[offset + 2 * i] << 32) | words[offset + 2 * i + 1] for i in range(16)]
        for i in range(16, 80):
            x = w[i - 15]
            gamma0 = _rotr64(x, 1) ^ _rotr64(x, 8) ^ (x >> 7)
            x = w[i - 2]
            gamma1 = _rotr64(x, 19) ^ _rotr64(x, 61) ^ (x >> 6)
            w.append((w[i - 16] + gamma0 + w[i - 7] + gamma1) & MASK_64)

        a, b, c, d, e, f, g, h = self._hash
        for i in range(80):
            ch = (e & f) ^ (~e & g)
            maj = (a & b) ^ (a & c) ^ (b & c)
            sigma0 = _rotr64(a, 28) ^ _rotr64(a, 34) ^ _rotr64(a, 39)
            sigma1 = _rotr64(e, 14) ^ _rotr64(e, 18) ^ _rotr64(e, 41)
            t1 = (h + sigma1 + ch + K[i] + w[i]) & MASK_64
            t2 = (sigma0 + maj) & MASK_64
            h, g, f = g, f, e
            e = (d + t1) & MASK_64
            d, c, b = c, b, a
            a = (t1 + t2) & MASK_64

        state = self._hash
        for i, value in enumerate((a, b, c, d, e, f, g, h)):
            state[i] = (state[i] + value) & MASK_64

    def _do_finalize(self) -> WordArray:
        self._pad_message(length_bits=128)
        self._process()
        words: List[int] = []
        for value in self._hash:
            words.append(value >> 32)
            words.append(value & MASK_32)
        return WordArray(words, self.output_size)


class SHA384(SHA512):
    """SHA-384: SHA-512 with a different IV, truncated to 384 bits."""

    output_size = 48
    _initial = H_INITIAL_384


def sha512(message) -> WordArray:
    """Compute the SHA-512 hash of a message."""
    return SHA512.hash(message)


def sha384(message) -> WordArray:
    """Compute the SHA-384 hash of a message."""
    return SHA384.hash(message)
