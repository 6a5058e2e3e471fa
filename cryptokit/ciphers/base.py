"""
Cipher framework - keyed, direction-aware transforms over the block buffer.

    Cipher            process/finalize contract, key and options
    ├── BlockCipher   mode + padding around a single-block primitive
    └── StreamCipher  keystream XOR, one word per block, no padding

Usage:
    >>> encryptor = AES.create_encryptor(key, CipherOptions(iv=iv))
    >>> part = encryptor.process("Hello, ")
    >>> rest = encryptor.finalize("World")
    >>> ciphertext = part.concat(rest)
"""

from dataclasses import dataclass
from typing import Any, Optional, Type

from ..core.buffered import BufferedBlockAlgorithm
from ..core.encoding import to_word_array
from ..core.words import WordArray
from .modes import BlockCipherMode, CBC
from .padding import Padding, Pkcs7
from .params import Formatter, OpenSSLFormatter


@dataclass(frozen=True)
class CipherOptions:
    """
    Per-call cipher configuration.

    Attributes:
        mode: Block cipher mode class (ignored by stream ciphers)
        padding: Padding scheme class (ignored by stream ciphers)
        iv: Initialization vector, WordArray or bytes
        format: Formatter used to serialize and parse ciphertext
        kdf: Password key derivation with an ``execute`` method
            (OpenSSLKdf when None)
        salt: Salt for password-based encryption (random when None)
        drop: Keystream words discarded by RC4Drop (192 when None)
    """
    mode: Type[BlockCipherMode] = CBC
    padding: Type[Padding] = Pkcs7
    iv: Any = None
    format: Type[Formatter] = OpenSSLFormatter
    kdf: Any = None
    salt: Any = None
    drop: Optional[int] = None


class Cipher(BufferedBlockAlgorithm):
    """
    Abstract cipher.

    Attributes:
        key_size: Key length in 32-bit words
        iv_size: IV length in 32-bit words
    """

    ENC_XFORM_MODE = 1
    DEC_XFORM_MODE = 2

    key_size = 128 // 32
    iv_size = 128 // 32

    def __init__(self, xform_mode: int, key, options: Optional[CipherOptions] = None):
        """
        Args:
            xform_mode: ENC_XFORM_MODE or DEC_XFORM_MODE
            key: WordArray or bytes
            options: Mode, padding, IV and the rest (defaults when None)
        """
        self._xform_mode = xform_mode
        self._key = to_word_array(key)
        self.options = options if options is not None else CipherOptions()
        self.reset()

    @classmethod
    def create_encryptor(cls, key, options: Optional[CipherOptions] = None) -> 'Cipher':
        return cls(cls.ENC_XFORM_MODE, key, options)

    @classmethod
    def create_decryptor(cls, key, options: Optional[CipherOptions] = None) -> 'Cipher':
        return cls(cls.DEC_XFORM_MODE, key, options)

    @property
    def is_encryptor(self) -> bool:
        return self._xform_mode == self.ENC_XFORM_MODE

    def reset(self) -> None:
        """Return the cipher to its freshly keyed state."""
        super().reset()
        self._do_reset()

    def process(self, data) -> WordArray:
        """
        Add data and transform every block that is ready.

        Returns:
            The data processed so far (possibly empty)
        """
        self._append(data)
        return self._process()

    def finalize(self, data=None) -> WordArray:
        """Add optional final data and transform everything that is left."""
        if data is not None:
            self._append(data)
        return self._do_finalize()

    def _do_reset(self) -> None:
        raise NotImplementedError

    def _do_finalize(self) -> WordArray:
        raise NotImplementedError

    @classmethod
    def encrypt(cls, message, credential, options: Optional[CipherOptions] = None):
        """
        Encrypt with a RawKey or a Password.

        Returns:
            CipherParams; ``str()`` of it is the serialized ciphertext
        """
        from .serializable import encrypt
        return encrypt(cls, message, credential, options)

    @classmethod
    def decrypt(cls, ciphertext, credential, options: Optional[CipherOptions] = None) -> WordArray:
        """Decrypt CipherParams or a serialized string with a RawKey or a Password."""
        from .serializable import decrypt
        return decrypt(cls, ciphertext, credential, options)


class StreamCipher(Cipher):
    """Abstract stream cipher. Every word is its own block."""

    block_size = 1

    def _do_finalize(self) -> WordArray:
        return self._process(do_flush=True)


class BlockCipher(Cipher):
    """
    Abstract block cipher.

    Subclasses implement ``_do_reset`` (key schedule), ``encrypt_block`` and
    ``decrypt_block``; chaining and padding come from the options.
    """

    block_size = 128 // 32

    def reset(self) -> None:
        super().reset()
        options = self.options
        if self.is_encryptor:
            self._mode = options.mode.create_encryptor(self, options.iv)
            self._min_buffer_size = 0
        else:
            self._mode = options.mode.create_decryptor(self, options.iv)
            # Hold back the final block so unpad always sees it
            self._min_buffer_size = 1

    def _do_process_block(self, words, offset):
        self._mode.process_block(words, offset)

    def _do_finalize(self) -> WordArray:
        padding = self.options.padding
        if self.is_encryptor:
            padding.pad(self._data, self.block_size)
            final_processed = self._process(do_flush=True)
        else:
            final_processed = self._process(do_flush=True)
            padding.unpad(final_processed)
        return final_processed

    def encrypt_block(self, words, offset) -> None:
        raise NotImplementedError

    def decrypt_block(self, words, offset) -> None:
        raise NotImplementedError
