"""
High-level encryption: message + credential -> CipherParams.

A credential is either a raw key or a password:

    RawKey(key)        the key is used as is, the IV comes from the options
    Password(secret)   key and IV are derived with an OpenSSL-style KDF and
                       a random (or supplied) salt

Usage:
    >>> params = encrypt(AES, "Message", Password("Secret Passphrase"))
    >>> serialized = str(params)          # OpenSSL format, "U2FsdGVkX1..."
    >>> decrypt(AES, serialized, Password("Secret Passphrase")).to_string(Utf8)
    'Message'
"""

import dataclasses
import logging
from dataclasses import dataclass
from typing import Optional, Type, Union

from ..core.encoding import to_word_array
from ..core.words import WordArray
from ..hashing.base import Hasher
from ..hashing.md5 import MD5
from ..kdf.evpkdf import EvpKDF
from .base import BlockCipher, Cipher, CipherOptions
from .params import OPENSSL_SALT_WORDS, CipherParams


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RawKey:
    """A key used directly by the cipher (WordArray or bytes)."""
    key: object


@dataclass(frozen=True)
class Password:
    """A passphrase from which key and IV are derived."""
    secret: Union[str, bytes]


Credential = Union[RawKey, Password]


class OpenSSLKdf:
    """Key and IV derivation compatible with ``openssl enc`` (EVP_BytesToKey)."""

    @staticmethod
    def execute(password, key_size: int, iv_size: int, salt=None,
                hasher: Type[Hasher] = MD5) -> CipherParams:
        """
        Derive a key and IV from a password.

        Args:
            password: str (UTF-8 encoded), bytes or WordArray
            key_size: Key length in words
            iv_size: IV length in words
            salt: 8-byte salt; a random one is generated when None
            hasher: Hasher used by EvpKDF

        Returns:
            CipherParams holding key, iv and salt
        """
        if salt is None:
            salt = WordArray.random(OPENSSL_SALT_WORDS * 4)
        else:
            salt = to_word_array(salt)

        derived = EvpKDF(key_size=key_size + iv_size, hasher=hasher).compute(password, salt)

        iv = WordArray(derived.words[key_size:], iv_size * 4)
        derived.sig_bytes = key_size * 4
        derived.clamp()

        return CipherParams(key=derived, iv=iv, salt=salt)


def _uses_iv(cipher_cls: Type[Cipher], options: CipherOptions) -> bool:
    if issubclass(cipher_cls, BlockCipher):
        return options.mode.requires_iv
    return cipher_cls.iv_size > 0


def _parse(ciphertext, options: CipherOptions) -> CipherParams:
    if isinstance(ciphertext, str):
        return options.format.parse(ciphertext)
    if isinstance(ciphertext, CipherParams):
        return ciphertext
    return CipherParams(ciphertext=to_word_array(ciphertext))


class SerializableCipher:
    """Encrypt with a raw key, producing CipherParams."""

    @classmethod
    def encrypt(cls, cipher_cls: Type[Cipher], message, key,
                options: Optional[CipherOptions] = None) -> CipherParams:
        """
        Encrypt a message.

        Args:
            cipher_cls: Cipher class (e.g. AES)
            message: str (UTF-8 encoded), bytes or WordArray
            key: WordArray or bytes
            options: Mode, padding, IV and output format

        Returns:
            CipherParams with ciphertext, key, iv and algorithm details
        """
        options = options if options is not None else CipherOptions()
        key = to_word_array(key)

        encryptor = cipher_cls.create_encryptor(key, options)
        ciphertext = encryptor.finalize(message)

        iv = None
        if options.iv is not None and _uses_iv(cipher_cls, options):
            iv = to_word_array(options.iv)
        return CipherParams(
            ciphertext=ciphertext,
            key=key,
            iv=iv,
            algorithm=cipher_cls,
            mode=options.mode,
            padding=options.padding,
            block_size=cipher_cls.block_size,
            formatter=options.format,
        )

    @classmethod
    def decrypt(cls, cipher_cls: Type[Cipher], ciphertext, key,
                options: Optional[CipherOptions] = None) -> WordArray:
        """
        Decrypt CipherParams or a string in ``options.format``.

        Raises:
            DecodingError: If a serialized ciphertext cannot be parsed
        """
        options = options if options is not None else CipherOptions()
        cipher_params = _parse(ciphertext, options)
        return cipher_cls.create_decryptor(key, options).finalize(cipher_params.ciphertext)


class PasswordBasedCipher(SerializableCipher):
    """Encrypt with a password; key, IV and salt are derived per message."""

    @classmethod
    def encrypt(cls, cipher_cls: Type[Cipher], message, password,
                options: Optional[CipherOptions] = None) -> CipherParams:
        options = options if options is not None else CipherOptions()
        kdf = options.kdf or OpenSSLKdf

        derived = kdf.execute(password, cipher_cls.key_size, cipher_cls.iv_size, options.salt)
        logger.debug(
            "Derived %d-byte key for %s from password",
            derived.key.sig_bytes, cipher_cls.__name__,
        )

        options = dataclasses.replace(options, iv=derived.iv)
        cipher_params = super().encrypt(cipher_cls, message, derived.key, options)
        return dataclasses.replace(
            cipher_params,
            key=derived.key,
            iv=derived.iv if _uses_iv(cipher_cls, options) else None,
            salt=derived.salt,
        )

    @classmethod
    def decrypt(cls, cipher_cls: Type[Cipher], ciphertext, password,
                options: Optional[CipherOptions] = None) -> WordArray:
        options = options if options is not None else CipherOptions()
        kdf = options.kdf or OpenSSLKdf

        cipher_params = _parse(ciphertext, options)
        salt = cipher_params.salt if cipher_params.salt is not None else options.salt
        if salt is None:
            logger.debug("Ciphertext carries no salt; deriving with a random one")

        derived = kdf.execute(password, cipher_cls.key_size, cipher_cls.iv_size, salt)
        options = dataclasses.replace(options, iv=derived.iv)
        return super().decrypt(cipher_cls, cipher_params, derived.key, options)


def encrypt(cipher_cls: Type[Cipher], message, credential: Credential,
            options: Optional[CipherOptions] = None) -> CipherParams:
    """
    Encrypt with either kind of credential.

    Raises:
        TypeError: If the credential is neither RawKey nor Password
    """
    if isinstance(credential, Password):
        logger.debug("Encrypting with %s using a password", cipher_cls.__name__)
        return PasswordBasedCipher.encrypt(cipher_cls, message, credential.secret, options)
    if isinstance(credential, RawKey):
        logger.debug("Encrypting with %s using a raw key", cipher_cls.__name__)
        return SerializableCipher.encrypt(cipher_cls, message, credential.key, options)
    raise TypeError(
        f"Credential must be RawKey or Password, got {type(credential).__name__}"
    )


def decrypt(cipher_cls: Type[Cipher], ciphertext, credential: Credential,
            options: Optional[CipherOptions] = None) -> WordArray:
    """
    Decrypt with either kind of credential.

    Raises:
        TypeError: If the credential is neither RawKey nor Password
    """
    if isinstance(credential, Password):
        logger.debug("Decrypting with %s using a password", cipher_cls.__name__)
        return PasswordBasedCipher.decrypt(cipher_cls, ciphertext, credential.secret, options)
    if isinstance(credential, RawKey):
        logger.debug("Decrypting with %s using a raw key", cipher_cls.__name__)
        return SerializableCipher.decrypt(cipher_cls, ciphertext, credential.key, options)
    raise TypeError(
        f"Credential must be RawKey or Password, got {type(credential).__name__}"
    )
