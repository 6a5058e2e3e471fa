# Ciphers Module
"""
Symmetric cipher implementations including:
- Cipher framework (process/finalize, options) - base.py
- Modes of operation (ECB, CBC, CFB, OFB, CTR, CTRGladman) - modes.py
- Padding schemes - padding.py
- AES - aes.py
- DES / Triple DES - des.py
- RC4 / RC4Drop - rc4.py
- Rabbit / RabbitLegacy - rabbit.py
- CipherParams and ciphertext formats - params.py
- Raw-key and password-based encryption - serializable.py
"""

from .params import (
    CipherParams,
    Formatter,
    OpenSSLFormatter,
    HexFormatter,
    OPENSSL_SALT_WORDS,
)
from .modes import BlockCipherMode, ECB, CBC, CFB, OFB, CTR, CTRGladman
from .padding import Padding, Pkcs7, AnsiX923, Iso10126, Iso97971, ZeroPadding, NoPadding
from .base import Cipher, BlockCipher, StreamCipher, CipherOptions
from .aes import AES
from .des import DES, TripleDES
from .rc4 import RC4, RC4Drop, RC4_DROP_DEFAULT
from .rabbit import Rabbit, RabbitLegacy
from .serializable import (
    RawKey,
    Password,
    Credential,
    OpenSSLKdf,
    SerializableCipher,
    PasswordBasedCipher,
    encrypt,
    decrypt,
)

__all__ = [
    'CipherParams',
    'Formatter',
    'OpenSSLFormatter',
    'HexFormatter',
    'OPENSSL_SALT_WORDS',
    'BlockCipherMode',
    'ECB',
    'CBC',
    'CFB',
    'OFB',
    'CTR',
    'CTRGladman',
    'Padding',
    'Pkcs7',
    'AnsiX923',
    'Iso10126',
    'Iso97971',
    'ZeroPadding',
    'NoPadding',
    'Cipher',
    'BlockCipher',
    'StreamCipher',
    'CipherOptions',
    'AES',
    'DES',
    'TripleDES',
    'RC4',
    'RC4Drop',
    'RC4_DROP_DEFAULT',
    'Rabbit',
    'RabbitLegacy',
    'RawKey',
    'Password',
    'Credential',
    'OpenSSLKdf',
    'SerializableCipher',
    'PasswordBasedCipher',
    'encrypt',
    'decrypt',
]
