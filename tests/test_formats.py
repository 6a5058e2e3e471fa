"""
Tests for CipherParams, ciphertext formats and high-level encryption.

Tests:
- OpenSSL and Hex formatters
- Raw-key and password-based encryption
- OpenSSL compatibility of password-derived keys
- Credential dispatch and error handling
"""

import dataclasses
import hashlib
import os

import pytest
from cryptography.hazmat.primitives import padding as crypto_padding
from cryptography.hazmat.primitives.ciphers import Cipher as CryptoCipher, algorithms, modes

from cryptokit.core import WordArray, Hex, Base64, Utf8
from cryptokit.ciphers import (
    AES,
    DES,
    TripleDES,
    RC4,
    Rabbit,
    CipherOptions,
    CipherParams,
    OpenSSLFormatter,
    HexFormatter,
    OpenSSLKdf,
    SerializableCipher,
    PasswordBasedCipher,
    RawKey,
    Password,
    ECB,
    CTR,
    encrypt,
    decrypt,
)
from cryptokit.exceptions import DecodingError


def evp_bytes_to_key(password: bytes, salt: bytes, n_bytes: int) -> bytes:
    derived = b""
    block = b""
    while len(derived) < n_bytes:
        block = hashlib.md5(block + password + salt).digest()
        derived += block
    return derived[:n_bytes]


class TestOpenSSLFormatter:
    """OpenSSL "Salted__" format."""

    def test_salted_prefix(self):
        """Salted output starts with Base64 of "Salted__"."""
        params = CipherParams(
            ciphertext=WordArray.from_bytes(b"ciphertext-bytes"),
            salt=Hex.parse("0102030405060708"),
        )
        text = OpenSSLFormatter.stringify(params)
        assert text.startswith("U2FsdGVkX1")
        assert Base64.parse(text).to_bytes() == b"Salted__\x01\x02\x03\x04\x05\x06\x07\x08ciphertext-bytes"

    def test_round_trip_preserves_salt_and_ciphertext(self):
        ciphertext = WordArray.random(35)
        salt = WordArray.random(8)
        text = OpenSSLFormatter.stringify(CipherParams(ciphertext=ciphertext, salt=salt))

        parsed = OpenSSLFormatter.parse(text)
        assert parsed.ciphertext == ciphertext
        assert parsed.salt == salt

    def test_unsalted(self):
        ciphertext = WordArray.random(16)
        text = OpenSSLFormatter.stringify(CipherParams(ciphertext=ciphertext))
        assert text == Base64.stringify(ciphertext)

        parsed = OpenSSLFormatter.parse(text)
        assert parsed.salt is None
        assert parsed.ciphertext == ciphertext

    def test_short_input_is_not_salted(self):
        """Data shorter than the header is treated as bare ciphertext."""
        parsed = OpenSSLFormatter.parse(Base64.stringify(WordArray.from_bytes(b"Salted__")))
        assert parsed.salt is None
        assert parsed.ciphertext.to_bytes() == b"Salted__"

    def test_invalid_base64(self):
        with pytest.raises(DecodingError):
            OpenSSLFormatter.parse("not*base64")


class TestHexFormatter:
    """Hex format carries the ciphertext only."""

    def test_round_trip(self):
        ciphertext = WordArray.random(20)
        params = CipherParams(ciphertext=ciphertext, salt=WordArray.random(8))
        text = HexFormatter.stringify(params)
        assert text == str(ciphertext)
        parsed = HexFormatter.parse(text)
        assert parsed.ciphertext == ciphertext
        assert parsed.salt is None

    def test_invalid_hex(self):
        with pytest.raises(DecodingError):
            HexFormatter.parse("xyz")


class TestCipherParams:
    """CipherParams string conversion."""

    def test_str_defaults_to_openssl(self):
        ciphertext = WordArray.from_bytes(b"abc")
        assert str(CipherParams(ciphertext=ciphertext)) == "YWJj"

    def test_str_uses_own_formatter(self):
        ciphertext = WordArray.from_bytes(b"abc")
        assert str(CipherParams(ciphertext=ciphertext, formatter=HexFormatter)) == "616263"

    def test_to_string_override(self):
        params = CipherParams(ciphertext=WordArray.from_bytes(b"abc"), formatter=HexFormatter)
        assert params.to_string(OpenSSLFormatter) == "YWJj"

    def test_is_frozen(self):
        """Fields cannot be reassigned; replace() derives a copy."""
        params = CipherParams(ciphertext=WordArray.from_bytes(b"abc"))
        with pytest.raises(dataclasses.FrozenInstanceError):
            params.salt = WordArray.random(8)
        salted = dataclasses.replace(params, salt=Hex.parse("0102030405060708"))
        assert params.salt is None
        assert str(salted.salt) == "0102030405060708"


class TestSerializableCipher:
    """Encryption with a raw key."""

    def test_encrypt_records_parameters(self):
        key = WordArray.random(16)
        iv = WordArray.random(16)
        options = CipherOptions(iv=iv)
        params = SerializableCipher.encrypt(AES, "Message", key, options)

        assert params.key == key
        assert params.iv == iv
        assert params.salt is None
        assert params.algorithm is AES
        assert params.block_size == 4
        assert params.formatter is OpenSSLFormatter

    def test_matches_cryptography(self):
        key = os.urandom(16)
        iv = os.urandom(16)
        params = SerializableCipher.encrypt(AES, "Message", key, CipherOptions(iv=iv))

        padder = crypto_padding.PKCS7(128).padder()
        padded = padder.update(b"Message") + padder.finalize()
        encryptor = CryptoCipher(algorithms.AES(key), modes.CBC(iv)).encryptor()
        assert params.ciphertext.to_bytes() == encryptor.update(padded) + encryptor.finalize()

    @pytest.mark.parametrize("formatter", [OpenSSLFormatter, HexFormatter])
    def test_decrypt_serialized(self, formatter):
        key = WordArray.random(32)
        options = CipherOptions(iv=WordArray.random(16), format=formatter)
        serialized = str(SerializableCipher.encrypt(AES, "Message", key, options))
        plaintext = SerializableCipher.decrypt(AES, serialized, key, options)
        assert plaintext.to_string(Utf8) == "Message"

    def test_decrypt_cipher_params(self):
        key = WordArray.random(16)
        options = CipherOptions(mode=ECB)
        params = SerializableCipher.encrypt(AES, "Message", key, options)
        assert SerializableCipher.decrypt(AES, params, key, options).to_string(Utf8) == "Message"

    def test_ecb_records_no_iv(self):
        """An IV passed to an IV-less mode is not recorded."""
        options = CipherOptions(mode=ECB, iv=WordArray.random(16))
        params = SerializableCipher.encrypt(AES, "Message", WordArray.random(16), options)
        assert params.iv is None

    def test_rc4_records_no_iv(self):
        params = SerializableCipher.encrypt(RC4, "Message", WordArray.random(16))
        assert params.iv is None


class TestPasswordBasedCipher:
    """Encryption with a password."""

    def test_round_trip(self):
        params = PasswordBasedCipher.encrypt(AES, "Message", "Secret Passphrase")
        serialized = str(params)
        assert serialized.startswith("U2FsdGVkX1")
        plaintext = PasswordBasedCipher.decrypt(AES, serialized, "Secret Passphrase")
        assert plaintext.to_string(Utf8) == "Message"

    def test_derived_parameters_recorded(self):
        params = PasswordBasedCipher.encrypt(AES, "Message", "pw")
        assert params.key.sig_bytes == 32
        assert params.iv.sig_bytes == 16
        assert params.salt.sig_bytes == 8

    def test_random_salt_per_message(self):
        first = PasswordBasedCipher.encrypt(AES, "Message", "pw")
        second = PasswordBasedCipher.encrypt(AES, "Message", "pw")
        assert first.salt != second.salt
        assert first.ciphertext != second.ciphertext

    def test_openssl_compatible(self):
        """Matches `openssl enc -aes-256-cbc -md md5` with the same salt."""
        salt = os.urandom(8)
        params = PasswordBasedCipher.encrypt(
            AES, "Message", "Secret Passphrase", CipherOptions(salt=salt)
        )

        derived = evp_bytes_to_key(b"Secret Passphrase", salt, 48)
        key, iv = derived[:32], derived[32:]
        padder = crypto_padding.PKCS7(128).padder()
        padded = padder.update(b"Message") + padder.finalize()
        encryptor = CryptoCipher(algorithms.AES(key), modes.CBC(iv)).encryptor()
        expected = encryptor.update(padded) + encryptor.finalize()

        assert params.salt.to_bytes() == salt
        assert params.key.to_bytes() == key
        assert params.iv.to_bytes() == iv
        assert Base64.parse(str(params)).to_bytes() == b"Salted__" + salt + expected

    def test_ecb_records_no_iv(self):
        options = CipherOptions(mode=ECB)
        params = PasswordBasedCipher.encrypt(AES, "Message", "pw", options)
        assert params.iv is None
        assert params.salt.sig_bytes == 8
        assert PasswordBasedCipher.decrypt(AES, str(params), "pw", options).to_string(Utf8) == "Message"

    def test_stream_cipher_iv_recorded(self):
        """Rabbit takes an IV, so the derived one is kept."""
        params = PasswordBasedCipher.encrypt(Rabbit, "Message", "pw")
        assert params.iv.sig_bytes == 8

    def test_wrong_password_does_not_decrypt(self):
        serialized = str(PasswordBasedCipher.encrypt(AES, "Message", "right"))
        plaintext = PasswordBasedCipher.decrypt(AES, serialized, "wrong")
        assert plaintext.to_bytes() != b"Message"

    def test_hex_format_needs_salt_option(self):
        """Hex output drops the salt, so decryption takes it from the options."""
        salt = WordArray.random(8)
        options = CipherOptions(format=HexFormatter, salt=salt)
        serialized = str(PasswordBasedCipher.encrypt(AES, "Message", "pw", options))
        assert PasswordBasedCipher.decrypt(AES, serialized, "pw", options).to_string(Utf8) == "Message"

    def test_kdf_split(self):
        """OpenSSLKdf splits key_size + iv_size words into key and IV."""
        salt = Hex.parse("0001020304050607")
        derived = OpenSSLKdf.execute("pw", 8, 4, salt)
        expected = evp_bytes_to_key(b"pw", salt.to_bytes(), 48)
        assert derived.key.to_bytes() == expected[:32]
        assert derived.iv.to_bytes() == expected[32:]
        assert derived.salt == salt

    def test_kdf_random_salt(self):
        derived = OpenSSLKdf.execute("pw", 4, 4)
        assert derived.salt.sig_bytes == 8

    def test_options_not_mutated(self):
        options = CipherOptions()
        PasswordBasedCipher.encrypt(AES, "Message", "pw", options)
        assert options.iv is None
        with pytest.raises(dataclasses.FrozenInstanceError):
            options.iv = WordArray()


class TestCredentialDispatch:
    """encrypt/decrypt with RawKey and Password."""

    @pytest.mark.parametrize("cipher", [AES, DES, TripleDES, RC4, Rabbit])
    def test_password_round_trip(self, cipher):
        params = encrypt(cipher, "Attack at dawn", Password("hunter2"))
        plaintext = decrypt(cipher, str(params), Password("hunter2"))
        assert plaintext.to_string(Utf8) == "Attack at dawn"

    def test_raw_key_round_trip(self):
        key = WordArray.random(16)
        options = CipherOptions(mode=CTR, iv=WordArray.random(16))
        params = encrypt(AES, "Attack at dawn", RawKey(key), options)
        assert params.salt is None
        assert decrypt(AES, str(params), RawKey(key), options).to_string(Utf8) == "Attack at dawn"

    def test_cipher_classmethods(self):
        params = AES.encrypt("Message", Password("pw"))
        assert AES.decrypt(str(params), Password("pw")).to_string(Utf8) == "Message"

    def test_bytes_password(self):
        params = encrypt(AES, "Message", Password(b"pw"))
        assert decrypt(AES, str(params), Password("pw")).to_string(Utf8) == "Message"

    def test_unknown_credential(self):
        with pytest.raises(TypeError):
            encrypt(AES, "Message", "plain string key")
        with pytest.raises(TypeError):
            decrypt(AES, "U2FsdGVkX1", WordArray.random(16))
