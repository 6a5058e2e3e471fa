"""
Rabbit stream cipher (RFC 4503).

128-bit key, optional 64-bit IV, 128 bits of keystream per iteration of
the next-state function. The state is eight 32-bit state variables X and
eight 32-bit counters C plus one counter carry bit.

Two flavours exist:
- Rabbit: key bytes taken in RFC 4503 order (each key word byte-swapped)
- RabbitLegacy: key words used as they are; kept for ciphertexts produced
  by older releases of the JavaScript library this toolkit interoperates
  with
"""

from typing import List

from ..core.encoding import to_word_array
from ..core.words import MASK_32, rotl32, swap_endian
from .base import StreamCipher


# Counter increments A0..A7
COUNTER_CONSTANTS = (
    0x4D34D34D, 0xD34D34D3, 0x34D34D34, 0x4D34D34D,
    0xD34D34D3, 0x34D34D34, 0x4D34D34D, 0xD34D34D3,
)


def _g(u: int, v: int) -> int:
    """g-function: square (u + v), XOR the high and low 32 bits."""
    x = (u + v) & MASK_32
    square = x * x
    return (square ^ (square >> 32)) & MASK_32


def _rotl16(word: int) -> int:
    return ((word << 16) | (word >> 16)) & MASK_32


class Rabbit(StreamCipher):
    """
    Rabbit stream cipher.

    Example:
        >>> key = Hex.parse("00000000000000000000000000000000")
        >>> str(Rabbit.create_encryptor(key).finalize(Hex.parse("00" * 16)))
        '02f74a1c26456bf5ecd6a536f05457b1'
    """

    block_size = 128 // 32
    key_size = 128 // 32
    iv_size = 64 // 32

    def _key_words(self) -> List[int]:
        words = self._key.clone().clamp().words[:4]
        words.extend([0] * (4 - len(words)))
        return [swap_endian(word) for word in words]

    def _do_reset(self) -> None:
        k = self._key_words()

        self._x = [
            k[0], (k[3] << 16 | k[2] >> 16) & MASK_32,
            k[1], (k[0] << 16 | k[3] >> 16) & MASK_32,
            k[2], (k[1] << 16 | k[0] >> 16) & MASK_32,
            k[3], (k[2] << 16 | k[1] >> 16) & MASK_32,
        ]
        self._c = [
            _rotl16(k[2]), (k[0] & 0xFFFF0000) | (k[1] & 0x0000FFFF),
            _rotl16(k[3]), (k[1] & 0xFFFF0000) | (k[2] & 0x0000FFFF),
            _rotl16(k[0]), (k[2] & 0xFFFF0000) | (k[3] & 0x0000FFFF),
            _rotl16(k[1]), (k[3] & 0xFFFF0000) | (k[0] & 0x0000FFFF),
        ]
        self._carry = 0

        for _ in range(4):
            self._next_state()

        x = self._x
        for i in range(8):
            self._c[i] ^= x[(i + 4) & 7]

        iv = self.options.iv
        if iv is not None:
            self._setup_iv(to_word_array(iv))

    def _setup_iv(self, iv) -> None:
        iv_words = iv.clone().clamp().words[:2]
        iv_words.extend([0] * (2 - len(iv_words)))

        i0 = swap_endian(iv_words[0])
        i2 = swap_endian(iv_words[1])
        i1 = (i0 >> 16) | (i2 & 0xFFFF0000)
        i3 = ((i2 << 16) | (i0 & 0x0000FFFF)) & MASK_32

        c = self._c
        for i, word in enumerate((i0, i1, i2, i3, i0, i1, i2, i3)):
            c[i] ^= word

        for _ in range(4):
            self._next_state()

    def _next_state(self) -> None:
        c = self._c
        x = self._x

        # Counter system
        carry = self._carry
        for i in range(8):
            total = c[i] + COUNTER_CONSTANTS[i] + carry
            carry = total >> 32
            c[i] = total & MASK_32
        self._carry = carry

        g = [_g(x[i], c[i]) for i in range(8)]

        x[0] = (g[0] + _rotl16(g[7]) + _rotl16(g[6])) & MASK_32
        x[1] = (g[1] + rotl32(g[0], 8) + g[7]) & MASK_32
        x[2] = (g[2] + _rotl16(g[1]) + _rotl16(g[0])) & MASK_32
        x[3] = (g[3] + rotl32(g[2], 8) + g[1]) & MASK_32
        x[4] = (g[4] + _rotl16(g[3]) + _rotl16(g[2])) & MASK_32
        x[5] = (g[5] + rotl32(g[4], 8) + g[3]) & MASK_32
        x[6] = (g[6] + _rotl16(g[5]) + _rotl16(g[4])) & MASK_32
        x[7] = (g[7] + rotl32(g[6], 8) + g[5]) & MASK_32

    def _do_process_block(self, words, offset):
        self._next_state()
        x = self._x

        keystream = (
            x[0] ^ (x[5] >> 16) ^ (x[3] << 16),
            x[2] ^ (x[7] >> 16) ^ (x[5] << 16),
            x[4] ^ (x[1] >> 16) ^ (x[7] << 16),
            x[6] ^ (x[3] >> 16) ^ (x[1] << 16),
        )
        for i, word in enumerate(keystream):
            words[offset + i] ^= swap_endian(word & MASK_32)


class RabbitLegacy(Rabbit):
    """Rabbit with the key words taken without byte swapping."""

    def _key_words(self) -> List[int]:
        words = self._key.clone().clamp().words[:4]
        words.extend([0] * (4 - len(words)))
        return words
