# cryptokit
"""
Pure-Python cryptographic primitives:
- WordArray byte buffer and string encoders - core/
- Hash functions and HMAC - hashing/
- PBKDF2 and EvpKDF key derivation - kdf/
- Block and stream ciphers, modes, paddings and ciphertext formats - ciphers/
- Name-based algorithm lookup - registry.py
- Command line - main.py
"""

from .core import WordArray, Hex, Latin1, Utf8, Utf16, Utf16BE, Utf16LE, Base64, Base64Url
from .exceptions import (
    CryptoKitError,
    DecodingError,
    KeySizeError,
    RandomSourceError,
    UnknownAlgorithmError,
)
from .hashing import (
    MD5,
    SHA1,
    SHA224,
    SHA256,
    SHA384,
    SHA512,
    SHA3,
    Keccak,
    RIPEMD160,
    HMAC,
    md5,
    sha1,
    sha224,
    sha256,
    sha384,
    sha512,
    sha3,
    keccak,
    ripemd160,
    hmac,
)
from .kdf import PBKDF2, EvpKDF, pbkdf2, evpkdf
from .ciphers import (
    AES,
    DES,
    TripleDES,
    RC4,
    RC4Drop,
    Rabbit,
    RabbitLegacy,
    CipherOptions,
    CipherParams,
    RawKey,
    Password,
    encrypt,
    decrypt,
)
from .registry import AlgorithmRegistry, default_registry

__version__ = "1.0.0"

__all__ = [
    'WordArray',
    'Hex',
    'Latin1',
    'Utf8',
    'Utf16',
    'Utf16BE',
    'Utf16LE',
    'Base64',
    'Base64Url',
    'CryptoKitError',
    'DecodingError',
    'KeySizeError',
    'RandomSourceError',
    'UnknownAlgorithmError',
    'MD5',
    'SHA1',
    'SHA224',
    'SHA256',
    'SHA384',
    'SHA512',
    'SHA3',
    'Keccak',
    'RIPEMD160',
    'HMAC',
    'md5',
    'sha1',
    'sha224',
    'sha256',
    'sha384',
    'sha512',
    'sha3',
    'keccak',
    'ripemd160',
    'hmac',
    'PBKDF2',
    'EvpKDF',
    'pbkdf2',
    'evpkdf',
    'AES',
    'DES',
    'TripleDES',
    'RC4',
    'RC4Drop',
    'Rabbit',
    'RabbitLegacy',
    'CipherOptions',
    'CipherParams',
    'RawKey',
    'Password',
    'encrypt',
    'decrypt',
    'AlgorithmRegistry',
    'default_registry',
]
