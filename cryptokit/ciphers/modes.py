"""
Block cipher modes of operation.

A mode wraps a block cipher's single-block primitive (encrypt_block /
decrypt_block, both in place on a word list) and supplies the chaining
between consecutive blocks:

- ECB: every block independently (no IV)
- CBC: XOR with the previous ciphertext block before encryption
- CFB: full-block cipher feedback
- OFB: encrypted IV register, self-inverse
- CTR: encrypted counter, last word incremented after each block
- CTRGladman: Gladman's byte-serial counter, incremented before each block

The IV is consumed by the first block and then dropped.
"""

from typing import List, Optional

from ..core.encoding import to_word_array
from ..core.words import MASK_32


class BlockCipherMode:
    """
    Abstract mode. One instance serves one encryption or decryption run.

    Attributes:
        requires_iv: Whether construction fails without an IV
    """

    requires_iv = True

    def __init__(self, cipher, iv=None, encrypting: bool = True):
        """
        Args:
            cipher: Block cipher providing block_size, encrypt_block and
                decrypt_block
            iv: Initialization vector (WordArray or bytes), one block long
            encrypting: Direction of this instance

        Raises:
            ValueError: If the mode needs an IV and none was given
        """
        if iv is None and self.requires_iv:
            raise ValueError(f"{type(self).__name__} mode requires an IV")

        self._cipher = cipher
        self._encrypting = encrypting
        self._iv: Optional[List[int]] = None
        if iv is not None:
            iv = to_word_array(iv)
            block = iv.words[:cipher.block_size]
            block.extend([0] * (cipher.block_size - len(block)))
            self._iv = block

    @classmethod
    def create_encryptor(cls, cipher, iv=None) -> 'BlockCipherMode':
        return cls(cipher, iv, encrypting=True)

    @classmethod
    def create_decryptor(cls, cipher, iv=None) -> 'BlockCipherMode':
        return cls(cipher, iv, encrypting=False)

    def process_block(self, words: List[int], offset: int) -> None:
        """Transform one block of ``words`` starting at ``offset`` in place."""
        if self._encrypting:
            self._encrypt_block(words, offset)
        else:
            self._decrypt_block(words, offset)

    def _encrypt_block(self, words: List[int], offset: int) -> None:
        raise NotImplementedError

    def _decrypt_block(self, words: List[int], offset: int) -> None:
        raise NotImplementedError

    def _take_iv(self) -> Optional[List[int]]:
        """Return the IV on first use, None afterwards."""
        iv = self._iv
        self._iv = None
        return iv


def _xor_block(words: List[int], offset: int, block: List[int]) -> None:
    for i, word in enumerate(block):
        words[offset + i] ^= word


class ECB(BlockCipherMode):
    """Electronic codebook. Identical plaintext blocks leak as identical ciphertext."""

    requires_iv = False

    def _encrypt_block(self, words, offset):
        self._cipher.encrypt_block(words, offset)

    def _decrypt_block(self, words, offset):
        self._cipher.decrypt_block(words, offset)


class CBC(BlockCipherMode):
    """Cipher block chaining."""

    def __init__(self, cipher, iv=None, encrypting=True):
        super().__init__(cipher, iv, encrypting)
        self._prev_block: Optional[List[int]] = None

    def _chain(self) -> List[int]:
        iv = self._take_iv()
        return iv if iv is not None else self._prev_block

    def _encrypt_block(self, words, offset):
        block_size = self._cipher.block_size
        _xor_block(words, offset, self._chain())
        self._cipher.encrypt_block(words, offset)
        self._prev_block = words[offset:offset + block_size]

    def _decrypt_block(self, words, offset):
        block_size = self._cipher.block_size
        this_block = words[offset:offset + block_size]
        self._cipher.decrypt_block(words, offset)
        _xor_block(words, offset, self._chain())
        self._prev_block = this_block


class CFB(BlockCipherMode):
    """Cipher feedback with a full-block segment size."""

    def __init__(self, cipher, iv=None, encrypting=True):
        super().__init__(cipher, iv, encrypting)
        self._prev_block: Optional[List[int]] = None

    def _xor_keystream(self, words, offset):
        iv = self._take_iv()
        keystream = list(iv if iv is not None else self._prev_block)
        self._cipher.encrypt_block(keystream, 0)
        _xor_block(words, offset, keystream)

    def _encrypt_block(self, words, offset):
        block_size = self._cipher.block_size
        self._xor_keystream(words, offset)
        self._prev_block = words[offset:offset + block_size]

    def _decrypt_block(self, words, offset):
        block_size = self._cipher.block_size
        this_block = words[offset:offset + block_size]
        self._xor_keystream(words, offset)
        self._prev_block = this_block


class OFB(BlockCipherMode):
    """Output feedback. Encryption and decryption are the same operation."""

    def __init__(self, cipher, iv=None, encrypting=True):
        super().__init__(cipher, iv, encrypting)
        self._keystream: Optional[List[int]] = None

    def _encrypt_block(self, words, offset):
        iv = self._take_iv()
        if iv is not None:
            self._keystream = list(iv)
        keystream = self._keystream
        self._cipher.encrypt_block(keystream, 0)
        _xor_block(words, offset, keystream)

    _decrypt_block = _encrypt_block


class CTR(BlockCipherMode):
    """
    Counter mode. The counter block starts as the IV and its last word is
    incremented modulo 2**32 after every block.
    """

    def __init__(self, cipher, iv=None, encrypting=True):
        super().__init__(cipher, iv, encrypting)
        self._counter: Optional[List[int]] = None

    def _encrypt_block(self, words, offset):
        iv = self._take_iv()
        if iv is not None:
            self._counter = list(iv)
        counter = self._counter

        keystream = list(counter)
        self._cipher.encrypt_block(keystream, 0)
        counter[-1] = (counter[-1] + 1) & MASK_32

        _xor_block(words, offset, keystream)

    _decrypt_block = _encrypt_block


def _inc_word(word: int) -> int:
    """Increment the top byte of a word, carrying into the lower bytes."""
    if ((word >> 24) & 0xFF) == 0xFF:
        b1 = (word >> 16) & 0xFF
        b2 = (word >> 8) & 0xFF
        b3 = word & 0xFF

        if b1 == 0xFF:
            b1 = 0
            if b2 == 0xFF:
                b2 = 0
                b3 = 0 if b3 == 0xFF else b3 + 1
            else:
                b2 += 1
        else:
            b1 += 1

        return (b1 << 16) | (b2 << 8) | b3
    return word + (0x01 << 24)


def _inc_counter(counter: List[int]) -> None:
    counter[0] = _inc_word(counter[0])
    if counter[0] == 0:
        counter[1] = _inc_word(counter[1])


class CTRGladman(BlockCipherMode):
    """
    Counter mode as in Brian Gladman's fileenc.c (used by WinZip AES).

    The counter is incremented before it is encrypted, byte by byte from the
    first byte upwards, with a carry into the second word.
    """

    def __init__(self, cipher, iv=None, encrypting=True):
        super().__init__(cipher, iv, encrypting)
        self._counter: Optional[List[int]] = None

    def _encrypt_block(self, words, offset):
        iv = self._take_iv()
        if iv is not None:
            self._counter = list(iv)
        counter = self._counter

        _inc_counter(counter)
        keystream = list(counter)
        self._cipher.encrypt_block(keystream, 0)

        _xor_block(words, offset, keystream)

    _decrypt_block = _encrypt_block
