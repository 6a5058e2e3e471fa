"""
Exception types raised by cryptokit.

Cryptographic primitives are total functions over their documented input
domain, so the hierarchy is small: malformed encoded input, unusable key
lengths, a missing randomness source and unknown algorithm names.
"""


class CryptoKitError(Exception):
    """Base class for every error raised by cryptokit."""
    pass


class DecodingError(CryptoKitError, ValueError):
    """Raised when an encoded string (Hex, Base64, UTF-8, ...) is malformed."""
    pass


class KeySizeError(CryptoKitError, ValueError):
    """Raised when a cipher is keyed with a key of unsupported length."""
    pass


class RandomSourceError(CryptoKitError, RuntimeError):
    """
    Raised when no cryptographically secure random source is available.

    This is never recovered from by falling back to a weaker generator.
    """
    pass


class UnknownAlgorithmError(CryptoKitError, KeyError):
    """Raised when a registry lookup names an algorithm that is not registered."""

    def __str__(self):
        # KeyError would repr() the message
        return str(self.args[0]) if self.args else ""
