"""
String encoders for WordArray.

Every encoder exposes the same two operations:
- stringify(word_array) -> str
- parse(text) -> WordArray

Supported forms: Hex, Latin1, Utf8, Utf16 (big-endian, also Utf16BE),
Utf16LE, Base64 and Base64Url.
"""

import base64
import binascii
import re
from typing import Union

from ..exceptions import DecodingError
from .words import WordArray


BASE64_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"
BASE64URL_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_"

_WHITESPACE = re.compile(r"\s+")


class Encoder:
    """Interface shared by all encoders."""

    @staticmethod
    def stringify(word_array: WordArray) -> str:
        raise NotImplementedError

    @staticmethod
    def parse(text: str) -> WordArray:
        raise NotImplementedError


class Hex(Encoder):
    """Lowercase hexadecimal, two characters per byte."""

    @staticmethod
    def stringify(word_array: WordArray) -> str:
        return word_array.to_bytes().hex()

    @staticmethod
    def parse(text: str) -> WordArray:
        try:
            return WordArray.from_bytes(bytes.fromhex(text))
        except ValueError as exc:
            raise DecodingError(f"Invalid hex string: {text[:32]!r}") from exc


class Latin1(Encoder):
    """One character per byte (code points 0-255)."""

    @staticmethod
    def stringify(word_array: WordArray) -> str:
        return word_array.to_bytes().decode('latin-1')

    @staticmethod
    def parse(text: str) -> WordArray:
        """
        Encode one byte per character.

        Characters above U+00FF keep only their low 8 bits (U+0100 becomes
        0x00); no error is raised.
        """
        return WordArray.from_bytes(bytes(ord(char) & 0xFF for char in text))


class Utf8(Encoder):
    """UTF-8. Malformed byte sequences are rejected, never replaced."""

    @staticmethod
    def stringify(word_array: WordArray) -> str:
        try:
            return word_array.to_bytes().decode('utf-8')
        except UnicodeDecodeError as exc:
            raise DecodingError("Malformed UTF-8 data") from exc

    @staticmethod
    def parse(text: str) -> WordArray:
        try:
            return WordArray.from_bytes(text.encode('utf-8'))
        except UnicodeEncodeError as exc:
            raise DecodingError("Text contains unpaired surrogates") from exc


class Utf16BE(Encoder):
    """
    UTF-16 code units, big-endian. Unpaired surrogates pass through; a
    trailing odd byte is not a whole code unit and is dropped.
    """

    _codec = 'utf-16-be'

    @classmethod
    def stringify(cls, word_array: WordArray) -> str:
        data = word_array.to_bytes()
        data = data[:len(data) - len(data) % 2]
        return data.decode(cls._codec, 'surrogatepass')

    @classmethod
    def parse(cls, text: str) -> WordArray:
        return WordArray.from_bytes(text.encode(cls._codec, 'surrogatepass'))


class Utf16LE(Utf16BE):
    """UTF-16 code units, little-endian."""

    _codec = 'utf-16-le'


Utf16 = Utf16BE


def _parse_base64(text: str, alphabet: str) -> WordArray:
    """
    Decode Base64 text.

    Everything from the first padding character on is ignored, as is
    whitespace. A dangling sixth of a byte (one leftover character) carries
    no data and is dropped.
    """
    text = _WHITESPACE.sub("", text)
    pad_index = text.find("=")
    if pad_index != -1:
        text = text[:pad_index]

    for char in text:
        if char not in alphabet:
            raise DecodingError(f"Invalid Base64 character: {char!r}")
    if len(text) % 4 == 1:
        text = text[:-1]

    standard = text.translate(str.maketrans(alphabet[62:], "+/"))
    standard += "=" * (-len(standard) % 4)
    try:
        return WordArray.from_bytes(base64.b64decode(standard, validate=True))
    except binascii.Error as exc:
        raise DecodingError("Invalid Base64 data") from exc


class Base64(Encoder):
    """Standard Base64 alphabet with '=' padding."""

    @staticmethod
    def stringify(word_array: WordArray) -> str:
        return base64.b64encode(word_array.to_bytes()).decode('ascii')

    @staticmethod
    def parse(text: str) -> WordArray:
        return _parse_base64(text, BASE64_ALPHABET)


class Base64Url(Encoder):
    """URL-safe Base64 alphabet; no padding on output, padding tolerated on input."""

    @staticmethod
    def stringify(word_array: WordArray) -> str:
        return base64.urlsafe_b64encode(word_array.to_bytes()).decode('ascii').rstrip("=")

    @staticmethod
    def parse(text: str) -> WordArray:
        return _parse_base64(text, BASE64URL_ALPHABET)


def to_word_array(data: Union[str, bytes, bytearray, memoryview, WordArray]) -> WordArray:
    """
    Coerce algorithm input to a WordArray.

    Strings are UTF-8 encoded, byte strings are copied and WordArrays are
    returned unchanged.

    Raises:
        TypeError: For any other input type
    """
    if isinstance(data, WordArray):
        return data
    if isinstance(data, str):
        return Utf8.parse(data)
    if isinstance(data, (bytes, bytearray, memoryview)):
        return WordArray.from_bytes(data)
    raise TypeError(f"Expected str, bytes or WordArray, got {type(data).__name__}")
