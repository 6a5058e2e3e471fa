"""
MD5 (RFC 1321).

MD5 reads its message words little-endian, so every big-endian input word is
byte-swapped before compression and the four state words are swapped again
on output.
"""

import math
from typing import List

from ..core.words import MASK_32, WordArray, rotl32, swap_endian
from .base import Hasher


# T[i] = floor(abs(sin(i + 1)) * 2^32)
T = tuple(int(abs(math.sin(i + 1)) * 0x100000000) & MASK_32 for i in range(64))

# Per-round left rotation amounts
SHIFTS = (
    (7, 12, 17, 22) * 4 +
    (5, 9, 14, 20) * 4 +
    (4, 11, 16, 23) * 4 +
    (6, 10, 15, 21) * 4
)

H_INITIAL = (0x67452301, 0xEFCDAB89, 0x98BADCFE, 0x10325476)


class MD5(Hasher):
    """MD5 message digest, 128-bit output."""

    output_size = 16

    def _do_reset(self) -> None:
        self._hash: List[int] = list(H_INITIAL)

    def _do_process_block(self, words: List[int], offset: int) -> None:
        m = [swap_endian(words[offset + i]) for i in range(16)]
        a, b, c, d = self._hash

        for i in range(64):
            if i < 16:
                f = (b & c) | (~b & d)
                g = i
            elif i < 32:
                f = (b & d) | (c & ~d)
                g = (5 * i + 1) % 16
            elif i < 48:
                f = b ^ c ^ d
                g = (3 * i + 5) % 16
            else:
                f = c ^ (b | (~d & MASK_32))
                g = (7 * i) % 16
            f = (f + a + T[i] + m[g]) & MASK_32
            a, d, c = d, c, b
            b = (b + rotl32(f, SHIFTS[i])) & MASK_32

        h = self._hash
        h[0] = (h[0] + a) & MASK_32
        h[1] = (h[1] + b) & MASK_32
        h[2] = (h[2] + c) & MASK_32
        h[3] = (h[3] + d) & MASK_32

    def _do_finalize(self) -> WordArray:
        self._pad_message(little_endian=True)
        self._process()
        return WordArray([swap_endian(word) for word in self._hash])


def md5(message) -> WordArray:
    """
    Compute the MD5 digest of a message.

    Example:
        >>> str(md5(""))
        'd41d8cd98f00b204e9800998ecf8427e'
    """
    return MD5.hash(message)
