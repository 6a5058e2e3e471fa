"""
CipherParams and ciphertext formats.

CipherParams bundles a ciphertext with everything needed to decrypt it
(key, IV, salt) plus a record of how it was produced. A formatter turns
it into a string and back:

OpenSSL format (compatible with ``openssl enc -a``):
    Base64( "Salted__" | salt (8 bytes) | ciphertext )   when salted
    Base64( ciphertext )                                 otherwise

Hex format:
    hex( ciphertext )
"""

from dataclasses import dataclass
from typing import Any, Optional

from ..core.encoding import Base64, Hex
from ..core.words import WordArray


# "Salted__" as two big-endian words
SALTED_PREFIX_WORDS = (0x53616C74, 0x65645F5F)

# OpenSSL salts are 64 bits
OPENSSL_SALT_WORDS = 2


@dataclass(frozen=True)
class CipherParams:
    """
    Ciphertext plus its decryption parameters. Immutable once built; use
    ``dataclasses.replace`` to derive a modified copy.

    Attributes:
        ciphertext: Raw ciphertext
        key: Key used (derived key for password-based encryption)
        iv: IV used; None for IV-less modes (ECB) and IV-less ciphers
        salt: KDF salt, only for password-based encryption
        algorithm: Cipher class
        mode: Block cipher mode class
        padding: Padding scheme class
        block_size: Cipher block size in words
        formatter: Formatter used by ``str()``
    """
    ciphertext: Optional[WordArray] = None
    key: Optional[WordArray] = None
    iv: Optional[WordArray] = None
    salt: Optional[WordArray] = None
    algorithm: Any = None
    mode: Any = None
    padding: Any = None
    block_size: Optional[int] = None
    formatter: Any = None

    def to_string(self, formatter=None) -> str:
        """Serialize with the given formatter, else this object's own (OpenSSL by default)."""
        formatter = formatter or self.formatter or OpenSSLFormatter
        return formatter.stringify(self)

    def __str__(self) -> str:
        return self.to_string()


class Formatter:
    """Interface shared by ciphertext formats."""

    @staticmethod
    def stringify(cipher_params: CipherParams) -> str:
        raise NotImplementedError

    @staticmethod
    def parse(text: str) -> CipherParams:
        raise NotImplementedError


class OpenSSLFormatter(Formatter):
    """OpenSSL-compatible Base64 format with optional "Salted__" header."""

    @staticmethod
    def stringify(cipher_params: CipherParams) -> str:
        ciphertext = cipher_params.ciphertext
        salt = cipher_params.salt

        if salt is not None:
            data = WordArray(SALTED_PREFIX_WORDS).concat(salt).concat(ciphertext)
        else:
            data = ciphertext
        return Base64.stringify(data)

    @staticmethod
    def parse(text: str) -> CipherParams:
        """
        Parse an OpenSSL-format string.

        Raises:
            DecodingError: If the text is not valid Base64
        """
        ciphertext = Base64.parse(text)
        words = ciphertext.words

        salt = None
        header_bytes = (len(SALTED_PREFIX_WORDS) + OPENSSL_SALT_WORDS) * 4
        if (ciphertext.sig_bytes >= header_bytes
                and tuple(words[:2]) == SALTED_PREFIX_WORDS):
            salt = WordArray(words[2:2 + OPENSSL_SALT_WORDS])
            del words[:len(SALTED_PREFIX_WORDS) + OPENSSL_SALT_WORDS]
            ciphertext.sig_bytes -= header_bytes

        return CipherParams(ciphertext=ciphertext, salt=salt)


class HexFormatter(Formatter):
    """Bare hex ciphertext. Salt and IV are not carried."""

    @staticmethod
    def stringify(cipher_params: CipherParams) -> str:
        return Hex.stringify(cipher_params.ciphertext)

    @staticmethod
    def parse(text: str) -> CipherParams:
        """
        Raises:
            DecodingError: If the text is not valid hex
        """
        return CipherParams(ciphertext=Hex.parse(text))
