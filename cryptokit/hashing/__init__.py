# Hashing Module
"""
Hash function implementations including:
- MD5 - md5.py
- SHA-1 - sha1.py
- SHA-224 / SHA-256 - sha256.py
- SHA-384 / SHA-512 - sha512.py
- SHA-3 and legacy Keccak - sha3.py
- RIPEMD-160 - ripemd160.py
- HMAC over any of the above - hmac.py

Every hasher follows the same streaming contract (update/finalize)
defined in base.py.
"""

from .base import Hasher
from .md5 import MD5, md5
from .sha1 import SHA1, sha1
from .sha256 import SHA224, SHA256, sha224, sha256
from .sha512 import SHA384, SHA512, sha384, sha512
from .sha3 import SHA3, Keccak, sha3, keccak
from .ripemd160 import RIPEMD160, ripemd160
from .hmac import (
    HMAC,
    hmac,
    hmac_md5,
    hmac_sha1,
    hmac_sha224,
    hmac_sha256,
    hmac_sha384,
    hmac_sha512,
    hmac_sha3,
    hmac_ripemd160,
)

__all__ = [
    'Hasher',
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
    'hmac_md5',
    'hmac_sha1',
    'hmac_sha224',
    'hmac_sha256',
    'hmac_sha384',
    'hmac_sha512',
    'hmac_sha3',
    'hmac_ripemd160',
]
