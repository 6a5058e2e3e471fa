"""
SHA-256 and SHA-224 (FIPS 180-4)

Components:
- Round constants: first 32 bits of the fractional parts of the cube roots
  of the first 64 primes, derived at import with exact integer arithmetic
- Message Schedule: Expands 16 words to 64 words
- Compression: 64 rounds of compression function
- SHA-224: same compression with its own IV, output truncated to 28 bytes
"""

from typing import List

from ..core.words import MASK_32, WordArray
from .base import Hasher


def first_primes(count: int) -> List[int]:
    """Return the first ``count`` prime numbers."""
    primes: List[int] = []
    candidate = 2
    while len(primes) < count:
        if all(candidate % p for p in primes if p * p <= candidate):
            primes.append(candidate)
        candidate += 1
    return primes


def _integer_root(value: int, degree: int) -> int:
    """floor(value ** (1 / degree)) using Newton's method on integers."""
    if value < 2:
        return value
    x = 1 << -(-value.bit_length() // degree)
    while True:
        y = ((degree - 1) * x + value // x ** (degree - 1)) // degree
        if y >= x:
            return x
        x = y


def fractional_bits(prime: int, degree: int, bits: int) -> int:
    """
    First ``bits`` bits of the fractional part of ``prime ** (1 / degree)``.

    Example:
        >>> hex(fractional_bits(2, 2, 32))
        '0x6a09e667'
    """
    return _integer_root(prime << (bits * degree), degree) & ((1 << bits) - 1)


_PRIMES = first_primes(64)

# Initial hash values: first 32 bits of fractional parts of square roots of first 8 primes
H_INITIAL = tuple(fractional_bits(p, 2, 32) for p in _PRIMES[:8])

# SHA-224 IV: second 32 bits of fractional parts of square roots of the 9th-16th primes
H_INITIAL_224 = tuple(fractional_bits(p, 2, 64) & MASK_32 for p in _PRIMES[8:16])

# Round constants: first 32 bits of fractional parts of cube roots of first 64 primes
K = tuple(fractional_bits(p, 3, 32) for p in _PRIMES)


def _right_rotate(value: int, amount: int) -> int:
    """Right rotate a 32-bit integer by the specified amount."""
    return ((value >> amount) | (value << (32 - amount))) & MASK_32


def _ch(x: int, y: int, z: int) -> int:
    """Choice function: if x then y else z (bitwise)."""
    return (x & y) ^ (~x & z)


def _maj(x: int, y: int, z: int) -> int:
    """Majority function: majority vote of bits."""
    return (x & y) ^ (x & z) ^ (y & z)


def _sigma0(x: int) -> int:
    """Lowercase sigma 0: used in message schedule."""
    return _right_rotate(x, 7) ^ _right_rotate(x, 18) ^ (x >> 3)


def _sigma1(x: int) -> int:
    """Lowercase sigma 1: used in message schedule."""
    return _right_rotate(x, 17) ^ _right_rotate(x, 19) ^ (x >> 10)


def _big_sigma0(x: int) -> int:
    """Uppercase Sigma 0: used in compression."""
    return _right_rotate(x, 2) ^ _right_rotate(x, 13) ^ _right_rotate(x, 22)


def _big_sigma1(x: int) -> int:
    """Uppercase Sigma 1: used in compression."""
    return _right_rotate(x, 6) ^ _right_rotate(x, 11) ^ _right_rotate(x, 25)


def _create_message_schedule(words: List[int]) -> List[int]:
    """
    Expand 16 words into 64 words for the message schedule.

    For i from 16 to 63:
        W[i] = σ1(W[i-2]) + W[i-7] + σ0(W[i-15]) + W[i-16]
    """
    w = list(words)
    for i in range(16, 64):
        s0 = _sigma0(w[i - 15])
        s1 = _sigma1(w[i - 2])
        w.append((w[i - 16] + s0 + w[i - 7] + s1) & MASK_32)
    return w


def _compress(state: List[int], w: List[int]) -> None:
    """
    Perform 64 rounds of compression on the state, in place.

    Args:
        state: Current hash state (8 32-bit words)
        w: Message schedule (64 32-bit words)
    """
    a, b, c, d, e, f, g, h = state

    for i in range(64):
        t1 = (h + _big_sigma1(e) + _ch(e, f, g) + K[i] + w[i]) & MASK_32
        t2 = (_big_sigma0(a) + _maj(a, b, c)) & MASK_32

        h = g
        g = f
        f = e
        e = (d + t1) & MASK_32
        d = c
        c = b
        b = a
        a = (t1 + t2) & MASK_32

    # Add compressed chunk to current hash value
    for i, value in enumerate((a, b, c, d, e, f, g, h)):
        state[i] = (state[i] + value) & MASK_32


class SHA256(Hasher):
    """SHA-256 message digest, 256-bit output."""

    output_size = 32
    _initial = H_INITIAL

    def _do_reset(self) -> None:
        self._hash: List[int] = list(self._initial)

    def _do_process_block(self, words: List[int], offset: int) -> None:
        w = _create_message_schedule(words[offset:offset + 16])
        _compress(self._hash, w)

    def _do_finalize(self) -> WordArray:
        self._pad_message()
        self._process()
        return WordArray(self._hash, self.output_size)


class SHA224(SHA256):
    """SHA-224: SHA-256 with a different IV, truncated to 224 bits."""

    output_size = 28
    _initial = H_INITIAL_224


def sha256(message) -> WordArray:
    """
    Compute the SHA-256 hash of a message.

    Args:
        message: str (UTF-8 encoded), bytes or WordArray

    Returns:
        32-byte digest

    Example:
        >>> str(sha256(b"hello"))
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return SHA256.hash(message)


def sha224(message) -> WordArray:
    """Compute the SHA-224 hash of a message."""
    return SHA224.hash(message)
