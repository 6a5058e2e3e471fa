"""
SHA-1 (FIPS 180-4).
"""

from typing import List

from ..core.words import MASK_32, WordArray, rotl32
from .base import Hasher


H_INITIAL = (0x67452301, 0xEFCDAB89, 0x98BADCFE, 0x10325476, 0xC3D2E1F0)


class SHA1(Hasher):
    """SHA-1 message digest, 160-bit output."""

    output_size = 20

    def _do_reset(self) -> None:
        self._hash: List[int] = list(H_INITIAL)

    def _do_process_block(self, words: List[int], offset: int) -> None:
        w = words[offset:offset + 16]
        for i in range(16, 80):
            w.append(rotl32(w[i - 3] ^ w[i - 8] ^ w[i - 14] ^ w[i - 16], 1))

        a, b, c, d, e = self._hash
        for i in range(80):
            if i < 20:
                f = ((b & c) | (~b & d)) + 0x5A827999
            elif i < 40:
                f = (b ^ c ^ d) + 0x6ED9EBA1
            elif i < 60:
                f = ((b & c) | (b & d) | (c & d)) + 0x8F1BBCDC
            else:
                f = (b ^ c ^ d) + 0xCA62C1D6
            t = (rotl32(a, 5) + f + e + w[i]) & MASK_32
            e = d
            d = c
            c = rotl32(b, 30)
            b = a
            a = t

        h = self._hash
        for i, value in enumerate((a, b, c, d, e)):
            h[i] = (h[i] + value) & MASK_32

    def _do_finalize(self) -> WordArray:
        self._pad_message()
        self._process()
        return WordArray(self._hash)


def sha1(message) -> WordArray:
    """Compute the SHA-1 digest of a message."""
    return SHA1.hash(message)
