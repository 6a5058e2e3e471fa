"""
SHA-3 (FIPS 202) and legacy Keccak.

Both are sponges over the Keccak-f[1600] permutation with a rate of
``1600 - 2 * output_length`` bits. They differ only in the domain
separation byte appended to the message: SHA-3 uses 0x06, the original
Keccak submission (and older "SHA3" libraries) uses 0x01.

Lanes are 64-bit little-endian integers; the permutation tables (rotation
offsets, lane permutation and round constants) are derived at import from
their generating rules.
"""

from typing import List

from ..core.words import WordArray, swap_endian
from .base import Hasher


MASK_64 = 0xFFFFFFFFFFFFFFFF

VALID_OUTPUT_LENGTHS = (224, 256, 384, 512)


def _build_tables():
    rho_offsets = [0] * 25
    x, y = 1, 0
    for t in range(24):
        rho_offsets[x + 5 * y] = ((t + 1) * (t + 2) // 2) % 64
        x, y = y % 5, (2 * x + 3 * y) % 5

    pi_indexes = [0] * 25
    for x in range(5):
        for y in range(5):
            pi_indexes[x + 5 * y] = y + ((2 * x + 3 * y) % 5) * 5

    round_constants = []
    lfsr = 0x01
    for _ in range(24):
        constant = 0
        for j in range(7):
            if lfsr & 0x01:
                constant ^= 1 << ((1 << j) - 1)
            if lfsr & 0x80:
                lfsr = ((lfsr << 1) ^ 0x71) & 0xFF
            else:
                lfsr = (lfsr << 1) & 0xFF
        round_constants.append(constant)

    return tuple(rho_offsets), tuple(pi_indexes), tuple(round_constants)


RHO_OFFSETS, PI_INDEXES, ROUND_CONSTANTS = _build_tables()


def _rotl64(value: int, amount: int) -> int:
    if not amount:
        return value
    return ((value << amount) | (value >> (64 - amount))) & MASK_64


def keccak_f1600(state: List[int]) -> None:
    """Apply the 24-round Keccak-f[1600] permutation to 25 lanes in place."""
    for round_constant in ROUND_CONSTANTS:
        # Theta
        c = [state[x] ^ state[x + 5] ^ state[x + 10] ^ state[x + 15] ^ state[x + 20]
             for x in range(5)]
        for x in range(5):
            d = c[(x + 4) % 5] ^ _rotl64(c[(x + 1) % 5], 1)
            for y in range(0, 25, 5):
                state[x + y] ^= d

        # Rho and Pi
        t = [0] * 25
        t[0] = state[0]
        for lane_index in range(1, 25):
            t[PI_INDEXES[lane_index]] = _rotl64(state[lane_index], RHO_OFFSETS[lane_index])

        # Chi
        for y in range(0, 25, 5):
            for x in range(5):
                state[x + y] = t[x + y] ^ (~t[(x + 1) % 5 + y] & t[(x + 2) % 5 + y])

        # Iota
        state[0] ^= round_constant


class SHA3(Hasher):
    """
    SHA-3 with a configurable output length.

    Example:
        >>> str(SHA3.hash("", output_length=256))
        'a7ffc6f8bf1ed76651c14756a061d662f580ff4de43b49fa82d80a4b80f8434a'
    """

    domain_byte = 0x06

    def __init__(self, output_length: int = 512):
        """
        Args:
            output_length: Digest length in bits (224, 256, 384 or 512)

        Raises:
            ValueError: For any other output length
        """
        if output_length not in VALID_OUTPUT_LENGTHS:
            raise ValueError(
                f"Output length must be one of {VALID_OUTPUT_LENGTHS}, got {output_length}"
            )
        self.output_length = output_length
        self.output_size = output_length // 8
        self.block_size = (1600 - 2 * output_length) // 32
        super().__init__()

    def _do_reset(self) -> None:
        self._state: List[int] = [0] * 25

    def _do_process_block(self, words: List[int], offset: int) -> None:
        state = self._state
        for i in range(self.block_size // 2):
            low = swap_endian(words[offset + 2 * i])
            high = swap_endian(words[offset + 2 * i + 1])
            state[i] ^= (high << 32) | low
        keccak_f1600(state)

    def _do_finalize(self) -> WordArray:
        data = self._data
        data.clamp()
        words = data.words
        n_bits_left = data.sig_bytes * 8
        block_size_bits = self.block_size * 32

        data.zero_extend((n_bits_left >> 5) + 1)
        words[n_bits_left >> 5] |= self.domain_byte << (24 - n_bits_left % 32)

        n_words = -(-(n_bits_left + 1) // block_size_bits) * self.block_size
        data.zero_extend(n_words)
        words[n_words - 1] |= 0x80
        data.sig_bytes = n_words * 4
        self._process()

        output = b''.join(lane.to_bytes(8, 'little') for lane in self._state[:(self.output_size + 7) // 8])
        return WordArray.from_bytes(output[:self.output_size])


class Keccak(SHA3):
    """Keccak with the original 0x01 padding (pre-FIPS 202 "SHA3")."""

    domain_byte = 0x01


def sha3(message, output_length: int = 512) -> WordArray:
    """Compute the SHA-3 hash of a message."""
    return SHA3.hash(message, output_length=output_length)


def keccak(message, output_length: int = 512) -> WordArray:
    """Compute the legacy Keccak hash of a message."""
    return Keccak.hash(message, output_length=output_length)
