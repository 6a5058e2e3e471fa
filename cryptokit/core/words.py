"""
WordArray - the byte buffer every algorithm in cryptokit works on.

A WordArray is a list of unsigned 32-bit big-endian words together with a
count of significant bytes. The byte count is independent of the number of
words: bytes past ``sig_bytes`` inside the last word are garbage until
``clamp()`` zeroes them.

Components:
- WordArray: the buffer itself (concat, clamp, clone, random)
- swap_endian / rotl32: 32-bit helpers shared by the algorithm modules
"""

import secrets
import struct
from typing import Iterable, List, Optional

from ..exceptions import RandomSourceError


# Mask for 32-bit arithmetic
MASK_32 = 0xFFFFFFFF


def rotl32(value: int, amount: int) -> int:
    """Left rotate a 32-bit integer by the specified amount."""
    return ((value << amount) | (value >> (32 - amount))) & MASK_32


def swap_endian(word: int) -> int:
    """Reverse the byte order of a 32-bit word."""
    return (
        (((word << 8) | (word >> 24)) & 0x00FF00FF) |
        (((word << 24) | (word >> 8)) & 0xFF00FF00)
    )


class WordArray:
    """
    An array of 32-bit words with an exact significant-byte count.

    Example:
        >>> data = WordArray([0x61626300], 3)
        >>> data.to_bytes()
        b'abc'
        >>> str(data.concat(WordArray.from_bytes(b"d")))
        '61626364'
    """

    def __init__(self, words: Optional[Iterable[int]] = None,
                 sig_bytes: Optional[int] = None):
        """
        Args:
            words: 32-bit words, most significant byte first
            sig_bytes: Number of significant bytes (default: 4 per word)
        """
        self.words: List[int] = [w & MASK_32 for w in words] if words is not None else []
        self.sig_bytes = len(self.words) * 4 if sig_bytes is None else sig_bytes

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_bytes(cls, data: bytes) -> 'WordArray':
        """Build a WordArray holding exactly the given bytes."""
        data = bytes(data)
        padded = data + b'\x00' * (-len(data) % 4)
        words = struct.unpack('>%dI' % (len(padded) // 4), padded)
        return cls(words, len(data))

    @classmethod
    def random(cls, n_bytes: int) -> 'WordArray':
        """
        Create a WordArray filled with cryptographically secure random bytes.

        Args:
            n_bytes: Number of random bytes

        Returns:
            WordArray of ``n_bytes`` significant bytes

        Raises:
            RandomSourceError: If the operating system provides no secure
                random source
        """
        try:
            data = secrets.token_bytes(n_bytes)
        except NotImplementedError as exc:
            raise RandomSourceError(
                "No cryptographically secure random source is available"
            ) from exc
        return cls.from_bytes(data)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def concat(self, other: 'WordArray') -> 'WordArray':
        """
        Append the significant bytes of another WordArray.

        The append is byte-granular: the first byte of ``other`` lands right
        after the last significant byte of this array, not at the next word
        boundary.

        Args:
            other: The data to append (left untouched)

        Returns:
            self, for chaining
        """
        self.clamp()
        other_sig_bytes = other.sig_bytes
        n_other_words = (other_sig_bytes + 3) // 4
        source = other.words[:n_other_words]
        source.extend([0] * (n_other_words - len(source)))
        if other_sig_bytes % 4:
            source[-1] &= (MASK_32 << (32 - (other_sig_bytes % 4) * 8)) & MASK_32

        shift = (self.sig_bytes % 4) * 8
        if shift:
            words = self.words
            for word in source:
                words[-1] |= word >> shift
                words.append((word << (32 - shift)) & MASK_32)
        else:
            self.words.extend(source)

        self.sig_bytes += other_sig_bytes
        del self.words[(self.sig_bytes + 3) // 4:]
        return self

    def clamp(self) -> 'WordArray':
        """Zero the bytes past ``sig_bytes`` and drop unneeded words."""
        sig_bytes = self.sig_bytes
        n_words = (sig_bytes + 3) // 4
        self.zero_extend(n_words)
        if sig_bytes % 4:
            self.words[sig_bytes >> 2] &= (MASK_32 << (32 - (sig_bytes % 4) * 8)) & MASK_32
        del self.words[n_words:]
        return self

    def zero_extend(self, n_words: int) -> None:
        """Append zero words until the array holds at least ``n_words`` words."""
        missing = n_words - len(self.words)
        if missing > 0:
            self.words.extend([0] * missing)

    def clone(self) -> 'WordArray':
        """Return an independent copy."""
        return WordArray(self.words, self.sig_bytes)

    # ------------------------------------------------------------------
    # Conversion
    # ------------------------------------------------------------------

    def get_byte(self, index: int) -> int:
        """Return the byte at ``index`` (0-based, big-endian within words)."""
        return (self.words[index >> 2] >> (24 - (index % 4) * 8)) & 0xFF

    def to_bytes(self) -> bytes:
        """Return the significant bytes as a Python ``bytes`` object."""
        n_words = (self.sig_bytes + 3) // 4
        words = self.words[:n_words]
        words.extend([0] * (n_words - len(words)))
        return struct.pack('>%dI' % n_words, *words)[:self.sig_bytes]

    def to_string(self, encoder=None) -> str:
        """
        Encode the significant bytes as a string.

        Args:
            encoder: An encoder from ``cryptokit.core.encoding`` (default Hex)
        """
        if encoder is None:
            from .encoding import Hex
            encoder = Hex
        return encoder.stringify(self)

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"WordArray({self.to_string()!r}, sig_bytes={self.sig_bytes})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, WordArray):
            return NotImplemented
        return self.sig_bytes == other.sig_bytes and self.to_bytes() == other.to_bytes()

    __hash__ = None
