"""
DES and Triple DES (FIPS 46-3).

A 16-round Feistel network over 64-bit blocks. Blocks and keys are handled
as Python integers; the permutation tables use the standard 1-based bit
numbering, most significant bit first.

Components:
- IP / FP: initial and final permutations
- E / P: expansion and permutation inside the round function
- PC-1 / PC-2 / SHIFTS: key schedule
- S-boxes: eight 6-to-4 bit substitutions

Both are legacy ciphers, kept for interoperability.
"""

from typing import List

from ..core.words import MASK_32
from ..exceptions import KeySizeError
from .base import BlockCipher


IP = (
    58, 50, 42, 34, 26, 18, 10, 2,
    60, 52, 44, 36, 28, 20, 12, 4,
    62, 54, 46, 38, 30, 22, 14, 6,
    64, 56, 48, 40, 32, 24, 16, 8,
    57, 49, 41, 33, 25, 17, 9, 1,
    59, 51, 43, 35, 27, 19, 11, 3,
    61, 53, 45, 37, 29, 21, 13, 5,
    63, 55, 47, 39, 31, 23, 15, 7,
)

# FP is the inverse of IP
FP = tuple(IP.index(position) + 1 for position in range(1, 65))

E = (
    32, 1, 2, 3, 4, 5,
    4, 5, 6, 7, 8, 9,
    8, 9, 10, 11, 12, 13,
    12, 13, 14, 15, 16, 17,
    16, 17, 18, 19, 20, 21,
    20, 21, 22, 23, 24, 25,
    24, 25, 26, 27, 28, 29,
    28, 29, 30, 31, 32, 1,
)

P = (
    16, 7, 20, 21, 29, 12, 28, 17,
    1, 15, 23, 26, 5, 18, 31, 10,
    2, 8, 24, 14, 32, 27, 3, 9,
    19, 13, 30, 6, 22, 11, 4, 25,
)

PC1 = (
    57, 49, 41, 33, 25, 17, 9,
    1, 58, 50, 42, 34, 26, 18,
    10, 2, 59, 51, 43, 35, 27,
    19, 11, 3, 60, 52, 44, 36,
    63, 55, 47, 39, 31, 23, 15,
    7, 62, 54, 46, 38, 30, 22,
    14, 6, 61, 53, 45, 37, 29,
    21, 13, 5, 28, 20, 12, 4,
)

PC2 = (
    14, 17, 11, 24, 1, 5,
    3, 28, 15, 6, 21, 10,
    23, 19, 12, 4, 26, 8,
    16, 7, 27, 20, 13, 2,
    41, 52, 31, 37, 47, 55,
    30, 40, 51, 45, 33, 48,
    44, 49, 39, 56, 34, 53,
    46, 42, 50, 36, 29, 32,
)

# Left rotations of the 28-bit key halves per round
SHIFTS = (1, 1, 2, 2, 2, 2, 2, 2, 1, 2, 2, 2, 2, 2, 2, 1)

S_BOXES = (
    # S1
    ((14, 4, 13, 1, 2, 15, 11, 8, 3, 10, 6, 12, 5, 9, 0, 7),
     (0, 15, 7, 4, 14, 2, 13, 1, 10, 6, 12, 11, 9, 5, 3, 8),
     (4, 1, 14, 8, 13, 6, 2, 11, 15, 12, 9, 7, 3, 10, 5, 0),
     (15, 12, 8, 2, 4, 9, 1, 7, 5, 11, 3, 14, 10, 0, 6, 13)),
    # S2
    ((15, 1, 8, 14, 6, 11, 3, 4, 9, 7, 2, 13, 12, 0, 5, 10),
     (3, 13, 4, 7, 15, 2, 8, 14, 12, 0, 1, 10, 6, 9, 11, 5),
     (0, 14, 7, 11, 10, 4, 13, 1, 5, 8, 12, 6, 9, 3, 2, 15),
     (13, 8, 10, 1, 3, 15, 4, 2, 11, 6, 7, 12, 0, 5, 14, 9)),
    # S3
    ((10, 0, 9, 14, 6, 3, 15, 5, 1, 13, 12, 7, 11, 4, 2, 8),
     (13, 7, 0, 9, 3, 4, 6, 10, 2, 8, 5, 14, 12, 11, 15, 1),
     (13, 6, 4, 9, 8, 15, 3, 0, 11, 1, 2, 12, 5, 10, 14, 7),
     (1, 10, 13, 0, 6, 9, 8, 7, 4, 15, 14, 3, 11, 5, 2, 12)),
    # S4
    ((7, 13, 14, 3, 0, 6, 9, 10, 1, 2, 8, 5, 11, 12, 4, 15),
     (13, 8, 11, 5, 6, 15, 0, 3, 4, 7, 2, 12, 1, 10, 14, 9),
     (10, 6, 9, 0, 12, 11, 7, 13, 15, 1, 3, 14, 5, 2, 8, 4),
     (3, 15, 0, 6, 10, 1, 13, 8, 9, 4, 5, 11, 12, 7, 2, 14)),
    # S5
    ((2, 12, 4, 1, 7, 10, 11, 6, 8, 5, 3, 15, 13, 0, 14, 9),
     (14, 11, 2, 12, 4, 7, 13, 1, 5, 0, 15, 10, 3, 9, 8, 6),
     (4, 2, 1, 11, 10, 13, 7, 8, 15, 9, 12, 5, 6, 3, 0, 14),
     (11, 8, 12, 7, 1, 14, 2, 13, 6, 15, 0, 9, 10, 4, 5, 3)),
    # S6
    ((12, 1, 10, 15, 9, 2, 6, 8, 0, 13, 3, 4, 14, 7, 5, 11),
     (10, 15, 4, 2, 7, 12, 9, 5, 6, 1, 13, 14, 0, 11, 3, 8),
     (9, 14, 15, 5, 2, 8, 12, 3, 7, 0, 4, 10, 1, 13, 11, 6),
     (4, 3, 2, 12, 9, 5, 15, 10, 11, 14, 1, 7, 6, 0, 8, 13)),
    # S7
    ((4, 11, 2, 14, 15, 0, 8, 13, 3, 12, 9, 7, 5, 10, 6, 1),
     (13, 0, 11, 7, 4, 9, 1, 10, 14, 3, 5, 12, 2, 15, 8, 6),
     (1, 4, 11, 13, 12, 3, 7, 14, 10, 15, 6, 8, 0, 5, 9, 2),
     (6, 11, 13, 8, 1, 4, 10, 7, 9, 5, 0, 15, 14, 2, 3, 12)),
    # S8
    ((13, 2, 8, 4, 6, 15, 11, 1, 10, 9, 3, 14, 5, 0, 12, 7),
     (1, 15, 13, 8, 10, 3, 7, 4, 12, 5, 6, 11, 0, 14, 9, 2),
     (7, 11, 4, 1, 9, 12, 14, 2, 0, 6, 10, 13, 15, 3, 5, 8),
     (2, 1, 14, 7, 4, 10, 8, 13, 15, 12, 9, 0, 3, 5, 6, 11)),
)

MASK_28 = 0x0FFFFFFF


def _permute(value: int, table, width: int) -> int:
    """Select bits of a ``width``-bit value in table order (1-based, MSB first)."""
    result = 0
    for position in table:
        result = (result << 1) | ((value >> (width - position)) & 1)
    return result


def _rotl28(value: int, amount: int) -> int:
    return ((value << amount) | (value >> (28 - amount))) & MASK_28


def des_subkeys(key: int) -> List[int]:
    """
    Expand a 64-bit key into sixteen 48-bit round keys.

    Parity bits (every eighth bit) are dropped by PC-1.
    """
    permuted = _permute(key, PC1, 64)
    c = permuted >> 28
    d = permuted & MASK_28

    subkeys = []
    for shift in SHIFTS:
        c = _rotl28(c, shift)
        d = _rotl28(d, shift)
        subkeys.append(_permute((c << 28) | d, PC2, 56))
    return subkeys


def _feistel(right: int, subkey: int) -> int:
    x = _permute(right, E, 32) ^ subkey

    output = 0
    for i, sbox in enumerate(S_BOXES):
        chunk = (x >> (42 - 6 * i)) & 0x3F
        row = ((chunk >> 4) & 0x2) | (chunk & 0x1)
        column = (chunk >> 1) & 0xF
        output = (output << 4) | sbox[row][column]
    return _permute(output, P, 32)


def des_crypt_block(block: int, subkeys: List[int]) -> int:
    """
    Run the DES rounds over one 64-bit block.

    Encryption and decryption differ only in the order of the subkeys.
    """
    block = _permute(block, IP, 64)
    left = block >> 32
    right = block & MASK_32
    for subkey in subkeys:
        left, right = right, left ^ _feistel(right, subkey)
    # The halves are swapped once more before FP
    return _permute((right << 32) | left, FP, 64)


class _DESKey:
    """Round keys for one 64-bit DES key, both directions."""

    def __init__(self, key_words: List[int]):
        key = (key_words[0] << 32) | key_words[1]
        self.encryption_subkeys = des_subkeys(key)
        self.decryption_subkeys = self.encryption_subkeys[::-1]

    def encrypt_block(self, words: List[int], offset: int) -> None:
        self._crypt(words, offset, self.encryption_subkeys)

    def decrypt_block(self, words: List[int], offset: int) -> None:
        self._crypt(words, offset, self.decryption_subkeys)

    @staticmethod
    def _crypt(words, offset, subkeys):
        block = des_crypt_block((words[offset] << 32) | words[offset + 1], subkeys)
        words[offset] = block >> 32
        words[offset + 1] = block & MASK_32


class DES(BlockCipher):
    """
    Single DES. Uses the first 64 bits of the key.

    Example:
        >>> key = Hex.parse("133457799bbcdff1")
        >>> options = CipherOptions(mode=ECB, padding=NoPadding)
        >>> str(DES.create_encryptor(key, options).finalize(Hex.parse("0123456789abcdef")))
        '85e813540f0ab405'
    """

    key_size = 64 // 32
    iv_size = 64 // 32
    block_size = 64 // 32

    def _do_reset(self) -> None:
        if self._key.sig_bytes < 8:
            raise KeySizeError(f"DES key must be at least 8 bytes, got {self._key.sig_bytes}")
        self._des = _DESKey(self._key.clone().clamp().words[:2])

    def encrypt_block(self, words, offset) -> None:
        self._des.encrypt_block(words, offset)

    def decrypt_block(self, words, offset) -> None:
        self._des.decrypt_block(words, offset)


class TripleDES(BlockCipher):
    """
    Triple DES in EDE form: E(K3, D(K2, E(K1, block))).

    Key lengths: 64 bits (K1 = K2 = K3), 128 bits (K3 = K1), 192 bits, or
    longer (only the first 192 bits are used).
    """

    key_size = 192 // 32
    iv_size = 64 // 32
    block_size = 64 // 32

    def _do_reset(self) -> None:
        sig_bytes = self._key.sig_bytes
        if sig_bytes not in (8, 16) and sig_bytes < 24:
            raise KeySizeError(
                "Triple DES key must be 64, 128, 192 or more than 192 bits, "
                f"got {sig_bytes * 8}"
            )

        key_words = self._key.clone().clamp().words
        n_words = len(key_words)

        key1 = key_words[0:2]
        key2 = key_words[0:2] if n_words < 4 else key_words[2:4]
        key3 = key_words[0:2] if n_words < 6 else key_words[4:6]

        self._des1 = _DESKey(key1)
        self._des2 = _DESKey(key2)
        self._des3 = _DESKey(key3)

    def encrypt_block(self, words, offset) -> None:
        self._des1.encrypt_block(words, offset)
        self._des2.decrypt_block(words, offset)
        self._des3.encrypt_block(words, offset)

    def decrypt_block(self, words, offset) -> None:
        self._des3.decrypt_block(words, offset)
        self._des2.encrypt_block(words, offset)
        self._des1.decrypt_block(words, offset)
