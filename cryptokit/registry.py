"""
Algorithm registry - look up hashers, ciphers, modes, paddings and formats
by name.

There is no global registry. ``default_registry()`` builds a fresh one with
every built-in algorithm; callers that need extra algorithms construct
their own and register them.

    >>> registry = default_registry()
    >>> registry.hasher("SHA256").hash("abc").to_string()[:8]
    'ba7816bf'
"""

import logging
from typing import Dict, List

from .ciphers import (
    AES,
    CBC,
    CFB,
    CTR,
    DES,
    ECB,
    OFB,
    RC4,
    AnsiX923,
    CTRGladman,
    HexFormatter,
    Iso10126,
    Iso97971,
    NoPadding,
    OpenSSLFormatter,
    Pkcs7,
    Rabbit,
    RabbitLegacy,
    RC4Drop,
    TripleDES,
    ZeroPadding,
)
from .exceptions import UnknownAlgorithmError
from .hashing import MD5, RIPEMD160, SHA1, SHA3, SHA224, SHA256, SHA384, SHA512, Keccak


logger = logging.getLogger(__name__)

KINDS = ('hasher', 'cipher', 'mode', 'padding', 'formatter')


class AlgorithmRegistry:
    """Case-insensitive name -> class tables, one per kind of algorithm."""

    def __init__(self):
        self._tables: Dict[str, Dict[str, type]] = {kind: {} for kind in KINDS}

    def _register(self, kind: str, name: str, algorithm: type) -> None:
        key = name.lower()
        if key in self._tables[kind]:
            logger.debug("Replacing %s %r", kind, name)
        self._tables[kind][key] = algorithm

    def _get(self, kind: str, name: str) -> type:
        try:
            return self._tables[kind][name.lower()]
        except KeyError:
            raise UnknownAlgorithmError(f"Unknown {kind}: {name}") from None

    def register_hasher(self, name: str, hasher: type) -> None:
        self._register('hasher', name, hasher)

    def register_cipher(self, name: str, cipher: type) -> None:
        self._register('cipher', name, cipher)

    def register_mode(self, name: str, mode: type) -> None:
        self._register('mode', name, mode)

    def register_padding(self, name: str, padding: type) -> None:
        self._register('padding', name, padding)

    def register_formatter(self, name: str, formatter: type) -> None:
        self._register('formatter', name, formatter)

    def hasher(self, name: str) -> type:
        """
        Raises:
            UnknownAlgorithmError: If no hasher is registered under ``name``
        """
        return self._get('hasher', name)

    def cipher(self, name: str) -> type:
        return self._get('cipher', name)

    def mode(self, name: str) -> type:
        return self._get('mode', name)

    def padding(self, name: str) -> type:
        return self._get('padding', name)

    def formatter(self, name: str) -> type:
        return self._get('formatter', name)

    def names(self, kind: str) -> List[str]:
        """Sorted registered names of one kind ('hasher', 'cipher', ...)."""
        if kind not in self._tables:
            raise ValueError(f"Unknown algorithm kind: {kind}")
        return sorted(self._tables[kind])


def default_registry() -> AlgorithmRegistry:
    """Build a registry holding every built-in algorithm."""
    registry = AlgorithmRegistry()

    for name, hasher in (
        ('md5', MD5), ('sha1', SHA1), ('sha224', SHA224), ('sha256', SHA256),
        ('sha384', SHA384), ('sha512', SHA512), ('sha3', SHA3),
        ('keccak', Keccak), ('ripemd160', RIPEMD160),
    ):
        registry.register_hasher(name, hasher)

    for name, cipher in (
        ('aes', AES), ('des', DES), ('tripledes', TripleDES), ('rc4', RC4),
        ('rc4drop', RC4Drop), ('rabbit', Rabbit), ('rabbitlegacy', RabbitLegacy),
    ):
        registry.register_cipher(name, cipher)

    for name, mode in (
        ('ecb', ECB), ('cbc', CBC), ('cfb', CFB), ('ofb', OFB),
        ('ctr', CTR), ('ctrgladman', CTRGladman),
    ):
        registry.register_mode(name, mode)

    for name, padding in (
        ('pkcs7', Pkcs7), ('ansix923', AnsiX923), ('iso10126', Iso10126),
        ('iso97971', Iso97971), ('zeropadding', ZeroPadding), ('nopadding', NoPadding),
    ):
        registry.register_padding(name, padding)

    registry.register_formatter('openssl', OpenSSLFormatter)
    registry.register_formatter('hex', HexFormatter)

    return registry
