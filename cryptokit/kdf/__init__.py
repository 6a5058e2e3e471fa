# Key Derivation Module
"""
Password-based key derivation:
- PBKDF2 over HMAC (default HMAC-SHA1) - pbkdf2.py
- EvpKDF, OpenSSL's legacy EVP_BytesToKey (default MD5) - evpkdf.py

Both are frozen configuration objects with a pure compute(password, salt).
"""

from .pbkdf2 import PBKDF2, pbkdf2, DEFAULT_PBKDF2_ITERATIONS, DEFAULT_PBKDF2_KEY_SIZE
from .evpkdf import EvpKDF, evpkdf, DEFAULT_EVPKDF_ITERATIONS, DEFAULT_EVPKDF_KEY_SIZE

__all__ = [
    'PBKDF2',
    'pbkdf2',
    'EvpKDF',
    'evpkdf',
    'DEFAULT_PBKDF2_ITERATIONS',
    'DEFAULT_PBKDF2_KEY_SIZE',
    'DEFAULT_EVPKDF_ITERATIONS',
    'DEFAULT_EVPKDF_KEY_SIZE',
]
