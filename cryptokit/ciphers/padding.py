"""
Padding schemes for block cipher modes.

Each scheme exposes two operations that mutate a WordArray in place:
- pad(data, block_size): extend data to a multiple of block_size words
- unpad(data): remove the padding again

Unpadding never raises. A corrupt length byte larger than the data simply
empties it; detecting tampering is the job of a MAC, not of the padding.
"""

from ..core.words import WordArray


class Padding:
    """Interface shared by all padding schemes."""

    @staticmethod
    def pad(data: WordArray, block_size: int) -> None:
        raise NotImplementedError

    @staticmethod
    def unpad(data: WordArray) -> None:
        raise NotImplementedError


def _n_padding_bytes(data: WordArray, block_size: int) -> int:
    """Bytes needed to reach the next block boundary (a full block if aligned)."""
    block_size_bytes = block_size * 4
    return block_size_bytes - data.sig_bytes % block_size_bytes


def _strip_length_byte(data: WordArray) -> None:
    """Remove as many bytes as the value of the last byte says."""
    if data.sig_bytes <= 0:
        return
    n_padding_bytes = data.get_byte(data.sig_bytes - 1)
    data.sig_bytes = max(data.sig_bytes - n_padding_bytes, 0)


class Pkcs7(Padding):
    """
    PKCS #5/#7: n bytes of value n.

    Example:
        >>> data = WordArray.from_bytes(b"abc")
        >>> Pkcs7.pad(data, 4)
        >>> data.to_bytes()[-1]
        13
    """

    @staticmethod
    def pad(data: WordArray, block_size: int) -> None:
        n_padding_bytes = _n_padding_bytes(data, block_size)
        padding_word = (
            (n_padding_bytes << 24) | (n_padding_bytes << 16) |
            (n_padding_bytes << 8) | n_padding_bytes
        )
        padding_words = [padding_word] * ((n_padding_bytes + 3) // 4)
        data.concat(WordArray(padding_words, n_padding_bytes))

    @staticmethod
    def unpad(data: WordArray) -> None:
        _strip_length_byte(data)


class AnsiX923(Padding):
    """ANSI X9.23: zero bytes followed by a length byte."""

    @staticmethod
    def pad(data: WordArray, block_size: int) -> None:
        data.clamp()
        n_padding_bytes = _n_padding_bytes(data, block_size)
        last_byte_pos = data.sig_bytes + n_padding_bytes - 1

        data.zero_extend((last_byte_pos >> 2) + 1)
        data.words[last_byte_pos >> 2] |= n_padding_bytes << (24 - (last_byte_pos % 4) * 8)
        data.sig_bytes += n_padding_bytes

    @staticmethod
    def unpad(data: WordArray) -> None:
        _strip_length_byte(data)


class Iso10126(Padding):
    """ISO 10126: random bytes followed by a length byte."""

    @staticmethod
    def pad(data: WordArray, block_size: int) -> None:
        n_padding_bytes = _n_padding_bytes(data, block_size)
        data.concat(WordArray.random(n_padding_bytes - 1))
        data.concat(WordArray([n_padding_bytes << 24], 1))

    @staticmethod
    def unpad(data: WordArray) -> None:
        _strip_length_byte(data)


class ZeroPadding(Padding):
    """
    Zero bytes up to the block boundary.

    Nothing is added to data that is already block aligned, and unpadding
    strips every trailing zero byte. Plaintexts ending in 0x00 therefore do
    not survive a round trip; all-zero data is left untouched by unpad.
    """

    @staticmethod
    def pad(data: WordArray, block_size: int) -> None:
        block_size_bytes = block_size * 4
        data.clamp()
        data.sig_bytes += -data.sig_bytes % block_size_bytes
        data.zero_extend((data.sig_bytes + 3) // 4)

    @staticmethod
    def unpad(data: WordArray) -> None:
        for index in range(data.sig_bytes - 1, -1, -1):
            if data.get_byte(index):
                data.sig_bytes = index + 1
                return


class Iso97971(Padding):
    """ISO/IEC 9797-1 method 2: a single 0x80 byte, then zero padding."""

    @staticmethod
    def pad(data: WordArray, block_size: int) -> None:
        data.concat(WordArray([0x80000000], 1))
        ZeroPadding.pad(data, block_size)

    @staticmethod
    def unpad(data: WordArray) -> None:
        ZeroPadding.unpad(data)
        data.sig_bytes = max(data.sig_bytes - 1, 0)


class NoPadding(Padding):
    """Leave the data alone; the caller guarantees block alignment."""

    @staticmethod
    def pad(data: WordArray, block_size: int) -> None:
        pass

    @staticmethod
    def unpad(data: WordArray) -> None:
        pass
