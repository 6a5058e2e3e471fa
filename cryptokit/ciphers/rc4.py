"""
RC4 stream cipher and the RC4-drop[n] variant.

The key-scheduling algorithm (KSA) permutes a 256-byte state with the key;
the pseudo-random generation algorithm (PRGA) then yields one keystream
byte per step. Four bytes form each keystream word, most significant first.

Security Note:
    RC4 has well-known keystream biases, strongest in the first bytes.
    RC4Drop discards the start of the keystream; neither is suitable for
    new designs.
"""

from typing import List

from ..exceptions import KeySizeError
from .base import StreamCipher


# Keystream words discarded by RC4Drop unless configured otherwise
RC4_DROP_DEFAULT = 768 // 4


class RC4(StreamCipher):
    """
    RC4 keyed with 1 to 256 bytes.

    Example:
        >>> key = Utf8.parse("Key")
        >>> str(RC4.create_encryptor(key).finalize("Plaintext"))
        'bbf316e8d940af0ad3'
    """

    key_size = 256 // 32
    iv_size = 0

    def _do_reset(self) -> None:
        key = self._key
        key_sig_bytes = key.sig_bytes
        if not 0 < key_sig_bytes <= 256:
            raise KeySizeError(f"RC4 key must be 1 to 256 bytes, got {key_sig_bytes}")

        # Key-scheduling algorithm
        s = list(range(256))
        j = 0
        for i in range(256):
            key_byte = key.get_byte(i % key_sig_bytes)
            j = (j + s[i] + key_byte) % 256
            s[i], s[j] = s[j], s[i]

        self._s: List[int] = s
        self._i = 0
        self._j = 0

    def _do_process_block(self, words, offset):
        words[offset] ^= self._keystream_word()

    def _keystream_word(self) -> int:
        s = self._s
        i = self._i
        j = self._j

        word = 0
        for n in range(4):
            i = (i + 1) % 256
            j = (j + s[i]) % 256
            s[i], s[j] = s[j], s[i]
            word |= s[(s[i] + s[j]) % 256] << (24 - n * 8)

        self._i = i
        self._j = j
        return word


class RC4Drop(RC4):
    """
    RC4 that discards the first keystream words after keying.

    The number of dropped words comes from ``CipherOptions.drop``
    (RC4_DROP_DEFAULT words, i.e. 768 bytes, when unset).
    """

    def _do_reset(self) -> None:
        super()._do_reset()
        drop = self.options.drop
        if drop is None:
            drop = RC4_DROP_DEFAULT
        for _ in range(drop):
            self._keystream_word()
