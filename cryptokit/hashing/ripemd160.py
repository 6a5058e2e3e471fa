"""
RIPEMD-160.

Two parallel lines of five rounds each; message words and the length field
are little-endian like MD5.
"""

from typing import List

from ..core.words import MASK_32, WordArray, rotl32, swap_endian
from .base import Hasher


# Message word selection, left and right lines
ZL = (
    0, 1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 12, 13, 14, 15,
    7, 4, 13, 1, 10, 6, 15, 3, 12, 0, 9, 5, 2, 14, 11, 8,
    3, 10, 14, 4, 9, 15, 8, 1, 2, 7, 0, 6, 13, 11, 5, 12,
    1, 9, 11, 10, 0, 8, 12, 4, 13, 3, 7, 15, 14, 5, 6, 2,
    4, 0, 5, 9, 7, 12, 2, 10, 14, 1, 3, 8, 11, 6, 15, 13,
)
ZR = (
    5, 14, 7, 0, 9, 2, 11, 4, 13, 6, 15, 8, 1, 10, 3, 12,
    6, 11, 3, 7, 0, 13, 5, 10, 14, 15, 8, 12, 4, 9, 1, 2,
    15, 5, 1, 3, 7, 14, 6, 9, 11, 8, 12, 2, 10, 0, 4, 13,
    8, 6, 4, 1, 3, 11, 15, 0, 5, 12, 2, 13, 9, 7, 10, 14,
    12, 15, 10, 4, 1, 5, 8, 7, 6, 2, 13, 14, 0, 3, 9, 11,
)

# Left rotation amounts, left and right lines
SL = (
    11, 14, 15, 12, 5, 8, 7, 9, 11, 13, 14, 15, 6, 7, 9, 8,
    7, 6, 8, 13, 11, 9, 7, 15, 7, 12, 15, 9, 11, 7, 13, 12,
    11, 13, 6, 7, 14, 9, 13, 15, 14, 8, 13, 6, 5, 12, 7, 5,
    11, 12, 14, 15, 14, 15, 9, 8, 9, 14, 5, 6, 8, 6, 5, 12,
    9, 15, 5, 11, 6, 8, 13, 12, 5, 12, 13, 14, 11, 8, 5, 6,
)
SR = (
    8, 9, 9, 11, 13, 15, 15, 5, 7, 7, 8, 11, 14, 14, 12, 6,
    9, 13, 15, 7, 12, 8, 9, 11, 7, 7, 12, 7, 6, 15, 13, 11,
    9, 7, 15, 11, 8, 6, 6, 14, 12, 13, 5, 14, 13, 13, 7, 5,
    15, 5, 8, 11, 14, 14, 6, 14, 6, 9, 12, 9, 12, 5, 15, 8,
    8, 5, 12, 9, 12, 5, 14, 6, 8, 13, 6, 5, 15, 13, 11, 11,
)

KL = (0x00000000, 0x5A827999, 0x6ED9EBA1, 0x8F1BBCDC, 0xA953FD4E)
KR = (0x50A28BE6, 0x5C4DD124, 0x6D703EF3, 0x7A6D76E9, 0x00000000)

H_INITIAL = (0x67452301, 0xEFCDAB89, 0x98BADCFE, 0x10325476, 0xC3D2E1F0)


def _f1(x, y, z):
    return x ^ y ^ z


def _f2(x, y, z):
    return (x & y) | (~x & z)


def _f3(x, y, z):
    return (x | (~y & MASK_32)) ^ z


def _f4(x, y, z):
    return (x & z) | (y & ~z)


def _f5(x, y, z):
    return x ^ (y | (~z & MASK_32))


# Boolean function per round; the right line runs them in reverse order
FL = (_f1, _f2, _f3, _f4, _f5)
FR = (_f5, _f4, _f3, _f2, _f1)


class RIPEMD160(Hasher):
    """RIPEMD-160 message digest, 160-bit output."""

    output_size = 20

    def _do_reset(self) -> None:
        self._hash: List[int] = list(H_INITIAL)

    def _do_process_block(self, words: List[int], offset: int) -> None:
        x = [swap_endian(words[offset + i]) for i in range(16)]
        h = self._hash

        al, bl, cl, dl, el = h
        ar, br, cr, dr, er = h
        for i in range(80):
            j = i // 16

            t = rotl32((al + FL[j](bl, cl, dl) + x[ZL[i]] + KL[j]) & MASK_32, SL[i])
            t = (t + el) & MASK_32
            al, el, dl, cl, bl = el, dl, rotl32(cl, 10), bl, t

            t = rotl32((ar + FR[j](br, cr, dr) + x[ZR[i]] + KR[j]) & MASK_32, SR[i])
            t = (t + er) & MASK_32
            ar, er, dr, cr, br = er, dr, rotl32(cr, 10), br, t

        t = (h[1] + cl + dr) & MASK_32
        h[1] = (h[2] + dl + er) & MASK_32
        h[2] = (h[3] + el + ar) & MASK_32
        h[3] = (h[4] + al + br) & MASK_32
        h[4] = (h[0] + bl + cr) & MASK_32
        h[0] = t

    def _do_finalize(self) -> WordArray:
        self._pad_message(little_endian=True)
        self._process()
        return WordArray([swap_endian(word) for word in self._hash])


def ripemd160(message) -> WordArray:
    """Compute the RIPEMD-160 digest of a message."""
    return RIPEMD160.hash(message)
