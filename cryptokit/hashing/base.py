"""
Hasher - streaming digest contract shared by all hash algorithms.

A hasher is updated with any number of message chunks and finalized once:

    >>> hasher = SHA256().update("a").update("bc")
    >>> str(hasher.finalize())
    'ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad'

Concrete algorithms only supply ``_do_reset`` (initial state),
``_do_process_block`` (compression of one block) and ``_do_finalize``
(padding and output).
"""

from ..core.buffered import BufferedBlockAlgorithm
from ..core.words import MASK_32, WordArray, swap_endian


class Hasher(BufferedBlockAlgorithm):
    """Abstract hasher."""

    # 512-bit blocks unless the algorithm says otherwise
    block_size = 512 // 32

    # Digest length in bytes
    output_size = 0

    def __init__(self):
        self.reset()

    def reset(self) -> None:
        """Return the hasher to its initial state."""
        super().reset()
        self._do_reset()

    def update(self, message) -> 'Hasher':
        """
        Feed a chunk of the message.

        Args:
            message: str (UTF-8 encoded), bytes or WordArray

        Returns:
            self, for chaining
        """
        self._append(message)
        self._process()
        return self

    def finalize(self, message=None) -> WordArray:
        """
        Feed an optional final chunk and compute the digest.

        The hasher must be reset before it is used again.
        """
        if message is not None:
            self._append(message)
        return self._do_finalize()

    @classmethod
    def hash(cls, message, **options) -> WordArray:
        """One-shot digest of ``message``."""
        return cls(**options).finalize(message)

    def _do_reset(self) -> None:
        raise NotImplementedError

    def _do_finalize(self) -> WordArray:
        raise NotImplementedError

    def _pad_message(self, length_bits: int = 64, little_endian: bool = False) -> None:
        """
        Merkle-Damgard strengthening of the buffered tail.

        Padding rules:
        1. Append bit '1' to the message (0x80 byte)
        2. Append zeros until the length leaves room for the length field
        3. Append the total message length in bits

        Args:
            length_bits: Width of the length field (64, or 128 for SHA-512)
            little_endian: Store the length least significant word first,
                with each word byte-swapped (MD5, RIPEMD-160)
        """
        data = self._data
        data.clamp()
        words = data.words
        n_bits_total = self._n_data_bytes * 8
        n_bits_left = data.sig_bytes * 8
        block_bits = self.block_size * 32

        data.zero_extend((n_bits_left >> 5) + 1)
        words[n_bits_left >> 5] |= 0x80 << (24 - n_bits_left % 32)

        n_words = ((n_bits_left + length_bits) // block_bits + 1) * self.block_size
        data.zero_extend(n_words)
        high = (n_bits_total >> 32) & MASK_32
        low = n_bits_total & MASK_32
        if little_endian:
            words[n_words - 2] = swap_endian(low)
            words[n_words - 1] = swap_endian(high)
        else:
            words[n_words - 2] = high
            words[n_words - 1] = low
        data.sig_bytes = n_words * 4

