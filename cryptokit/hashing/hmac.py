"""
HMAC keyed-hash construction (RFC 2104), generic over any Hasher.

    HMAC(K, m) = H((K' ^ opad) || H((K' ^ ipad) || m))

where K' is the key pre-hashed when longer than one block and zero-extended
to the block size.
"""

from typing import Type

from ..core.encoding import to_word_array
from ..core.words import WordArray
from .base import Hasher
from .md5 import MD5
from .ripemd160 import RIPEMD160
from .sha1 import SHA1
from .sha256 import SHA224, SHA256
from .sha3 import SHA3
from .sha512 import SHA384, SHA512


INNER_PAD = 0x36363636
OUTER_PAD = 0x5C5C5C5C


class HMAC:
    """
    Streaming HMAC.

    Example:
        >>> mac = HMAC(SHA256, "key")
        >>> str(mac.finalize("The quick brown fox jumps over the lazy dog"))
        'f7bc83f430538424b13298e6aa6fb143ef4d59a14946175997479dbc2d1a3cd8'
    """

    def __init__(self, hasher: Type[Hasher], key, **hasher_options):
        """
        Args:
            hasher: Hasher class to use (e.g. SHA256)
            key: str (UTF-8 encoded), bytes or WordArray
            hasher_options: Passed to the hasher (e.g. output_length for SHA3)
        """
        self._hasher = hasher(**hasher_options)
        key = to_word_array(key)

        block_size = self._hasher.block_size
        block_size_bytes = block_size * 4
        if key.sig_bytes > block_size_bytes:
            key = self._hasher.finalize(key)
        key = key.clone().clamp()
        key.zero_extend(block_size)

        self._outer_key = WordArray([word ^ OUTER_PAD for word in key.words[:block_size]])
        self._inner_key = WordArray([word ^ INNER_PAD for word in key.words[:block_size]])

        self.reset()

    def reset(self) -> None:
        """Prepare for a new message with the same key."""
        self._hasher.reset()
        self._hasher.update(self._inner_key)

    def update(self, message) -> 'HMAC':
        """Feed a chunk of the message. Returns self."""
        self._hasher.update(message)
        return self

    def finalize(self, message=None) -> WordArray:
        """
        Feed an optional final chunk and compute the MAC.

        Call reset() before reusing the object for another message.
        """
        hasher = self._hasher
        inner_hash = hasher.finalize(message)
        hasher.reset()
        return hasher.finalize(self._outer_key.clone().concat(inner_hash))


def hmac(hasher: Type[Hasher], message, key, **hasher_options) -> WordArray:
    """One-shot HMAC of ``message`` under ``key`` with the given hasher."""
    return HMAC(hasher, key, **hasher_options).finalize(message)


def hmac_md5(message, key) -> WordArray:
    return hmac(MD5, message, key)


def hmac_sha1(message, key) -> WordArray:
    return hmac(SHA1, message, key)


def hmac_sha224(message, key) -> WordArray:
    return hmac(SHA224, message, key)


def hmac_sha256(message, key) -> WordArray:
    return hmac(SHA256, message, key)


def hmac_sha384(message, key) -> WordArray:
    return hmac(SHA384, message, key)


def hmac_sha512(message, key) -> WordArray:
    return hmac(SHA512, message, key)


def hmac_sha3(message, key, output_length: int = 512) -> WordArray:
    return hmac(SHA3, message, key, output_length=output_length)


def hmac_ripemd160(message, key) -> WordArray:
    return hmac(RIPEMD160, message, key)
