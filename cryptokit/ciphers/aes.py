"""
AES (Rijndael with 128-bit blocks) for 128, 192 and 256-bit keys.

Components:
- S-box and inverse S-box: multiplicative inverse in GF(2^8) followed by
  the Rijndael affine transform, generated at import
- Round tables: SubBytes + MixColumns fused into four 256-entry word
  tables per direction
- RotWord / SubWord / Rcon: key expansion
- Equivalent inverse cipher for decryption (InvMixColumns folded into the
  decryption key schedule)

Rounds: 10 / 12 / 14 for 4 / 6 / 8 key words.
"""

from typing import List, Tuple

from ..core.words import MASK_32
from ..exceptions import KeySizeError
from .base import BlockCipher


# AES field polynomial x^8 + x^4 + x^3 + x + 1
AES_POLYNOMIAL = 0x11B

VALID_KEY_WORDS = (4, 6, 8)


def _xtime(a: int) -> int:
    """Multiply by x in GF(2^8)."""
    a <<= 1
    return a ^ AES_POLYNOMIAL if a & 0x100 else a


def gf_mul(a: int, b: int) -> int:
    """Multiply two elements of GF(2^8)."""
    result = 0
    while b:
        if b & 1:
            result ^= a
        a = _xtime(a)
        b >>= 1
    return result


def _rotl8(byte: int, amount: int) -> int:
    return ((byte << amount) | (byte >> (8 - amount))) & 0xFF


def _rotr32(word: int, amount: int) -> int:
    return ((word >> amount) | (word << (32 - amount))) & MASK_32


def _build_sboxes() -> Tuple[Tuple[int, ...], Tuple[int, ...]]:
    # 3 generates the multiplicative group, so log/antilog tables give inverses
    exp = [0] * 255
    log = [0] * 256
    p = 1
    for i in range(255):
        exp[i] = p
        log[p] = i
        p = gf_mul(p, 3)

    sbox = [0] * 256
    inv_sbox = [0] * 256
    for x in range(256):
        inverse = exp[(255 - log[x]) % 255] if x else 0
        s = (inverse ^ _rotl8(inverse, 1) ^ _rotl8(inverse, 2) ^
             _rotl8(inverse, 3) ^ _rotl8(inverse, 4) ^ 0x63)
        sbox[x] = s
        inv_sbox[s] = x
    return tuple(sbox), tuple(inv_sbox)


S_BOX, INV_S_BOX = _build_sboxes()


def _build_round_tables(sbox, inv_sbox):
    # Column contribution of one state byte: (2s, s, s, 3s) for encryption,
    # (14y, 9y, 13y, 11y) with y = InvSubBytes(x) for decryption
    t0 = tuple(
        (gf_mul(s, 2) << 24) | (s << 16) | (s << 8) | gf_mul(s, 3)
        for s in sbox
    )
    inv_t0 = tuple(
        (gf_mul(y, 14) << 24) | (gf_mul(y, 9) << 16) | (gf_mul(y, 13) << 8) | gf_mul(y, 11)
        for y in inv_sbox
    )
    tables = []
    for base in (t0, inv_t0):
        tables.append(tuple(
            tuple(_rotr32(word, 8 * n) for word in base) for n in range(4)
        ))
    return tables[0], tables[1]


SUB_MIX, INV_SUB_MIX = _build_round_tables(S_BOX, INV_S_BOX)


def _build_rcon() -> Tuple[int, ...]:
    rcon = [0x00]
    value = 0x01
    for _ in range(10):
        rcon.append(value)
        value = _xtime(value)
    return tuple(rcon)


# Rcon[i] = x^(i-1) in GF(2^8); index 0 is unused
RCON = _build_rcon()


def sub_word(word: int) -> int:
    """Apply the S-box to each byte of a word."""
    return (
        (S_BOX[word >> 24] << 24) |
        (S_BOX[(word >> 16) & 0xFF] << 16) |
        (S_BOX[(word >> 8) & 0xFF] << 8) |
        S_BOX[word & 0xFF]
    )


def rot_word(word: int) -> int:
    """Rotate a word left by one byte: [a, b, c, d] -> [b, c, d, a]."""
    return ((word << 8) | (word >> 24)) & MASK_32


def key_expansion(key_words: List[int]) -> List[int]:
    """
    Expand a 4, 6 or 8 word key into 4 * (rounds + 1) round key words.

    Args:
        key_words: The cipher key as big-endian words

    Returns:
        Encryption key schedule
    """
    key_size = len(key_words)
    n_rounds = key_size + 6
    ks_rows = (n_rounds + 1) * 4

    key_schedule = list(key_words)
    for ks_row in range(key_size, ks_rows):
        t = key_schedule[ks_row - 1]
        if ks_row % key_size == 0:
            t = sub_word(rot_word(t)) ^ (RCON[ks_row // key_size] << 24)
        elif key_size > 6 and ks_row % key_size == 4:
            t = sub_word(t)
        key_schedule.append(key_schedule[ks_row - key_size] ^ t)
    return key_schedule


def inverse_key_expansion(key_schedule: List[int]) -> List[int]:
    """
    Derive the equivalent inverse cipher schedule: round keys in reverse
    order, InvMixColumns applied to all but the first and last round.
    """
    ks_rows = len(key_schedule)
    inv_key_schedule = []
    for inv_ks_row in range(ks_rows):
        ks_row = ks_rows - inv_ks_row
        if inv_ks_row % 4:
            t = key_schedule[ks_row]
        else:
            t = key_schedule[ks_row - 4]

        if inv_ks_row < 4 or ks_row <= 4:
            inv_key_schedule.append(t)
        else:
            inv_key_schedule.append(
                INV_SUB_MIX[0][S_BOX[t >> 24]] ^
                INV_SUB_MIX[1][S_BOX[(t >> 16) & 0xFF]] ^
                INV_SUB_MIX[2][S_BOX[(t >> 8) & 0xFF]] ^
                INV_SUB_MIX[3][S_BOX[t & 0xFF]]
            )
    return inv_key_schedule


def _crypt_block(words: List[int], offset: int, key_schedule: List[int],
                 n_rounds: int, sub_mix, sbox) -> None:
    t0, t1, t2, t3 = sub_mix

    s0 = words[offset] ^ key_schedule[0]
    s1 = words[offset + 1] ^ key_schedule[1]
    s2 = words[offset + 2] ^ key_schedule[2]
    s3 = words[offset + 3] ^ key_schedule[3]

    ks_row = 4
    for _ in range(1, n_rounds):
        r0 = t0[s0 >> 24] ^ t1[(s1 >> 16) & 0xFF] ^ t2[(s2 >> 8) & 0xFF] ^ t3[s3 & 0xFF] ^ key_schedule[ks_row]
        r1 = t0[s1 >> 24] ^ t1[(s2 >> 16) & 0xFF] ^ t2[(s3 >> 8) & 0xFF] ^ t3[s0 & 0xFF] ^ key_schedule[ks_row + 1]
        r2 = t0[s2 >> 24] ^ t1[(s3 >> 16) & 0xFF] ^ t2[(s0 >> 8) & 0xFF] ^ t3[s1 & 0xFF] ^ key_schedule[ks_row + 2]
        r3 = t0[s3 >> 24] ^ t1[(s0 >> 16) & 0xFF] ^ t2[(s1 >> 8) & 0xFF] ^ t3[s2 & 0xFF] ^ key_schedule[ks_row + 3]
        s0, s1, s2, s3 = r0, r1, r2, r3
        ks_row += 4

    # Final round: no MixColumns
    def last(a, b, c, d, k):
        return ((sbox[a >> 24] << 24) | (sbox[(b >> 16) & 0xFF] << 16) |
                (sbox[(c >> 8) & 0xFF] << 8) | sbox[d & 0xFF]) ^ k

    words[offset] = last(s0, s1, s2, s3, key_schedule[ks_row])
    words[offset + 1] = last(s1, s2, s3, s0, key_schedule[ks_row + 1])
    words[offset + 2] = last(s2, s3, s0, s1, key_schedule[ks_row + 2])
    words[offset + 3] = last(s3, s0, s1, s2, key_schedule[ks_row + 3])


class AES(BlockCipher):
    """
    AES block cipher. The key length (16, 24 or 32 bytes) selects the variant.

    Example:
        >>> key = Hex.parse("000102030405060708090a0b0c0d0e0f")
        >>> block = Hex.parse("00112233445566778899aabbccddeeff")
        >>> options = CipherOptions(mode=ECB, padding=NoPadding)
        >>> str(AES.create_encryptor(key, options).finalize(block))
        '69c4e0d86a7b0430d8cdb78070b4c55a'
    """

    key_size = 256 // 32

    def _do_reset(self) -> None:
        key = self._key
        if key.sig_bytes not in (n * 4 for n in VALID_KEY_WORDS):
            raise KeySizeError(
                f"AES key must be 16, 24 or 32 bytes, got {key.sig_bytes}"
            )
        key_words = key.clone().clamp().words

        self._n_rounds = len(key_words) + 6
        self._key_schedule = key_expansion(key_words)
        self._inv_key_schedule = inverse_key_expansion(self._key_schedule)

    def encrypt_block(self, words, offset) -> None:
        _crypt_block(words, offset, self._key_schedule, self._n_rounds, SUB_MIX, S_BOX)

    def decrypt_block(self, words, offset) -> None:
        # Swapping columns 1 and 3 turns the forward row shift into the inverse one
        words[offset + 1], words[offset + 3] = words[offset + 3], words[offset + 1]
        _crypt_block(words, offset, self._inv_key_schedule, self._n_rounds, INV_SUB_MIX, INV_S_BOX)
        words[offset + 1], words[offset + 3] = words[offset + 3], words[offset + 1]
