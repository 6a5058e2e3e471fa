"""
Unit tests for hash functions and HMAC.

Tests:
- Known-answer vectors (RFC 1321, FIPS 180-4, FIPS 202, RIPEMD-160)
- Cross-checks against hashlib / hmac over many message lengths
- Streaming updates and intermediate digests
- HMAC vectors (RFC 2202, RFC 4231)
"""

import hashlib
import hmac as std_hmac
import os

import pytest

from cryptokit.core import WordArray, Hex
from cryptokit.hashing import (
    MD5,
    SHA1,
    SHA224,
    SHA256,
    SHA384,
    SHA512,
    SHA3,
    Keccak,
    RIPEMD160,
    HMAC,
    md5,
    sha1,
    sha224,
    sha256,
    sha384,
    sha512,
    sha3,
    keccak,
    ripemd160,
    hmac,
    hmac_md5,
    hmac_sha1,
    hmac_sha256,
    hmac_sha512,
    hmac_sha3,
)
from cryptokit.hashing.sha256 import H_INITIAL, K, first_primes, fractional_bits


# Lengths around every padding boundary of 64 and 128-byte blocks
BOUNDARY_LENGTHS = [0, 1, 3, 4, 55, 56, 57, 63, 64, 65, 111, 112, 113, 127, 128, 129, 200]

HASHLIB_PAIRS = [
    (MD5, hashlib.md5),
    (SHA1, hashlib.sha1),
    (SHA224, hashlib.sha224),
    (SHA256, hashlib.sha256),
    (SHA384, hashlib.sha384),
    (SHA512, hashlib.sha512),
]


class TestKnownVectors:
    """Known-answer tests from the algorithm standards."""

    def test_md5(self):
        assert str(md5("")) == "d41d8cd98f00b204e9800998ecf8427e"
        assert str(md5("abc")) == "900150983cd24fb0d6963f7d28e17f72"
        assert str(md5("message digest")) == "f96b697d7cb7938d525a2f31aaf161d0"

    def test_sha1(self):
        assert str(sha1("")) == "da39a3ee5e6b4b0d3255bfef95601890afd80709"
        assert str(sha1("abc")) == "a9993e364706816aba3e25717850c26c9cd0d89d"

    def test_sha224(self):
        assert str(sha224("abc")) == "23097d223405d8228642a477bda255b32aadbce4bda0b3f7e36c9da7"

    def test_sha256(self):
        assert str(sha256("")) == "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"
        assert str(sha256("abc")) == "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"
        assert str(sha256("abcdbcdecdefdefgefghfghighijhijkijkljklmklmnlmnomnopnopq")) == (
            "248d6a61d20638b8e5c026930c3e6039a33ce45964ff2167f6ecedd419db06c1"
        )

    def test_sha384(self):
        assert str(sha384("abc")) == (
            "cb00753f45a35e8bb5a03d699ac65007272c32ab0eded163"
            "1a8b605a43ff5bed8086072ba1e7cc2358baeca134c825a7"
        )

    def test_sha512(self):
        assert str(sha512("abc")) == (
            "ddaf35a193617abacc417349ae20413112e6fa4e89a97ea20a9eeee64b55d39a"
            "2192992a274fc1a836ba3c23a3feebbd454d4423643ce80e2a9ac94fa54ca49f"
        )

    def test_sha3_256(self):
        assert str(sha3("", output_length=256)) == (
            "a7ffc6f8bf1ed76651c14756a061d662f580ff4de43b49fa82d80a4b80f8434a"
        )
        assert str(sha3("abc", output_length=256)) == (
            "3a985da74fe225b2045c172d6bd390bd855f086e3e9d525b46bfe24511431532"
        )

    def test_keccak_256(self):
        """Legacy Keccak differs from SHA-3 only in the padding byte."""
        assert str(keccak("", output_length=256)) == (
            "c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470"
        )
        assert keccak("abc", output_length=256) != sha3("abc", output_length=256)

    def test_ripemd160(self):
        assert str(ripemd160("")) == "9c1185a5c5e9fc54612808977ee8f548b2258d31"
        assert str(ripemd160("abc")) == "8eb208f7e05d987a9b044a8e98c6b087f15a0bfc"
        assert str(ripemd160("message digest")) == "5d0689ef49d2fae572b881b123a85ffa21595f36"

    def test_output_sizes(self):
        """Digests have the documented number of bytes."""
        assert md5("x").sig_bytes == 16
        assert sha1("x").sig_bytes == 20
        assert sha224("x").sig_bytes == 28
        assert sha256("x").sig_bytes == 32
        assert sha384("x").sig_bytes == 48
        assert sha512("x").sig_bytes == 64
        assert ripemd160("x").sig_bytes == 20
        for bits in (224, 256, 384, 512):
            assert sha3("x", output_length=bits).sig_bytes == bits // 8


class TestHashlibCrossCheck:
    """Digests agree with hashlib for every padding boundary."""

    @pytest.mark.parametrize("hasher,reference", HASHLIB_PAIRS)
    @pytest.mark.parametrize("length", BOUNDARY_LENGTHS)
    def test_merkle_damgard(self, hasher, reference, length):
        data = os.urandom(length)
        assert hasher.hash(data).to_bytes() == reference(data).digest()

    @pytest.mark.parametrize("bits", [224, 256, 384, 512])
    @pytest.mark.parametrize("length", [0, 1, 71, 72, 73, 103, 104, 135, 136, 137, 143, 144, 300])
    def test_sha3(self, bits, length):
        data = os.urandom(length)
        reference = getattr(hashlib, f"sha3_{bits}")(data).digest()
        assert SHA3.hash(data, output_length=bits).to_bytes() == reference

    def test_default_sha3_is_512(self):
        assert SHA3.hash(b"abc").to_bytes() == hashlib.sha3_512(b"abc").digest()

    def test_invalid_sha3_length(self):
        with pytest.raises(ValueError):
            SHA3(output_length=128)


class TestStreaming:
    """Streaming updates, reset and clone."""

    @pytest.mark.parametrize("hasher", [MD5, SHA1, SHA256, SHA512, SHA3, RIPEMD160])
    def test_chunked_update_matches_one_shot(self, hasher):
        data = os.urandom(300)
        instance = hasher()
        for start in range(0, len(data), 7):
            instance.update(data[start:start + 7])
        assert instance.finalize() == hasher.hash(data)

    def test_update_chains(self):
        assert str(SHA256().update("a").update("bc").finalize()) == str(sha256("abc"))

    def test_finalize_with_message(self):
        assert SHA1().update("ab").finalize("c") == sha1("abc")

    def test_reset(self):
        hasher = MD5()
        hasher.update("garbage")
        hasher.reset()
        assert hasher.finalize("abc") == md5("abc")

    def test_clone_gives_intermediate_digest(self):
        """A clone can be finalized without disturbing the original."""
        hasher = SHA256().update("ab")
        intermediate = hasher.clone().finalize()
        assert intermediate == sha256("ab")
        assert hasher.finalize("c") == sha256("abc")

    def test_word_array_input(self):
        """Input may be a WordArray with garbage past sig_bytes."""
        assert sha256(WordArray([0x616263FF], 3)) == sha256("abc")


class TestConstants:
    """Round constants derived from prime roots."""

    def test_first_primes(self):
        assert first_primes(8) == [2, 3, 5, 7, 11, 13, 17, 19]

    def test_sha256_initial_hash(self):
        assert H_INITIAL[0] == 0x6A09E667
        assert H_INITIAL[7] == 0x5BE0CD19

    def test_sha256_round_constants(self):
        assert K[0] == 0x428A2F98
        assert K[63] == 0xC67178F2
        assert len(K) == 64

    def test_fractional_bits(self):
        assert fractional_bits(2, 2, 32) == 0x6A09E667


class TestHMAC:
    """HMAC vectors and cross-checks."""

    def test_rfc2202_md5(self):
        key = WordArray.from_bytes(b"\x0b" * 16)
        assert str(hmac_md5("Hi There", key)) == "9294727a3638bb1c13f48ef8158bfc9d"

    def test_rfc2202_sha1(self):
        key = WordArray.from_bytes(b"\x0b" * 20)
        assert str(hmac_sha1("Hi There", key)) == "b617318655057264e28bc0b6fb378c8ef146be00"

    def test_rfc4231_case1(self):
        key = WordArray.from_bytes(b"\x0b" * 20)
        assert str(hmac_sha256("Hi There", key)) == (
            "b0344c61d8db38535ca8afceaf0bf12b881dc200c9833da726e9376c2e32cff7"
        )

    def test_rfc4231_case2(self):
        assert str(hmac_sha256("what do ya want for nothing?", "Jefe")) == (
            "5bdcc146bf60754e6a042426089575c75a003f089d2739839dec58b964ec3843"
        )

    @pytest.mark.parametrize("hasher,digestmod", HASHLIB_PAIRS)
    @pytest.mark.parametrize("key_length", [0, 1, 20, 64, 65, 128, 129, 200])
    def test_matches_stdlib(self, hasher, digestmod, key_length):
        """Short, block-sized and over-long (pre-hashed) keys all agree."""
        key = os.urandom(key_length)
        message = os.urandom(100)
        expected = std_hmac.new(key, message, digestmod).digest()
        assert hmac(hasher, message, key).to_bytes() == expected

    @pytest.mark.parametrize("bits", [224, 256, 384, 512])
    def test_sha3_matches_stdlib(self, bits):
        key = os.urandom(40)
        message = os.urandom(50)
        expected = std_hmac.new(key, message, f"sha3_{bits}").digest()
        assert hmac_sha3(message, key, output_length=bits).to_bytes() == expected

    def test_matches_cryptography(self):
        """HMAC-SHA512 agrees with the cryptography package."""
        from cryptography.hazmat.primitives import hashes
        from cryptography.hazmat.primitives import hmac as crypto_hmac

        key = os.urandom(32)
        message = os.urandom(77)
        reference = crypto_hmac.HMAC(key, hashes.SHA512())
        reference.update(message)
        assert hmac_sha512(message, key).to_bytes() == reference.finalize()

    def test_streaming_and_reset(self):
        mac = HMAC(SHA256, "key")
        mac.update("The quick brown fox ").update("jumps over the lazy dog")
        first = mac.finalize()
        assert str(first) == "f7bc83f430538424b13298e6aa6fb143ef4d59a14946175997479dbc2d1a3cd8"

        mac.reset()
        assert mac.finalize("The quick brown fox jumps over the lazy dog") == first

    def test_string_key_is_utf8(self):
        assert hmac_sha256("msg", "kéy") == hmac_sha256("msg", Hex.parse("6bc3a979"))
