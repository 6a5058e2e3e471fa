# Core Module
"""
Data model shared by every algorithm:
- WordArray (32-bit word buffer with exact byte length) - words.py
- String encoders (Hex, Base64, UTF-8, ...) - encoding.py
- Streaming block accumulator - buffered.py
"""

from .words import WordArray, MASK_32, rotl32, swap_endian
from .encoding import (
    Encoder,
    Hex,
    Latin1,
    Utf8,
    Utf16,
    Utf16BE,
    Utf16LE,
    Base64,
    Base64Url,
    to_word_array,
)
from .buffered import BufferedBlockAlgorithm

__all__ = [
    'WordArray',
    'MASK_32',
    'rotl32',
    'swap_endian',
    'Encoder',
    'Hex',
    'Latin1',
    'Utf8',
    'Utf16',
    'Utf16BE',
    'Utf16LE',
    'Base64',
    'Base64Url',
    'to_word_array',
    'BufferedBlockAlgorithm',
]
