"""
cryptokit - command line entry point.

Usage:
    cryptokit hash sha256 "abc"
    cryptokit hash sha3 "abc" --output-length 256
    cryptokit hmac sha256 key "The quick brown fox jumps over the lazy dog"
    cryptokit pbkdf2 password 73616c74 --key-size 8 --iterations 4096 --hasher sha256
    cryptokit encrypt aes "Message" --password "Secret Passphrase"
    cryptokit decrypt aes U2FsdGVkX1... --password "Secret Passphrase"
    cryptokit encrypt aes "Message" --key 000102030405060708090a0b0c0d0e0f --iv 0f0e0d0c0b0a09080706050403020100 --format hex
"""

import argparse
import logging
import sys
from typing import List, Optional

from .ciphers import CipherOptions, Password, RawKey
from .core.encoding import Hex, Utf8
from .exceptions import CryptoKitError
from .hashing import HMAC, SHA3
from .kdf import PBKDF2, DEFAULT_PBKDF2_ITERATIONS, DEFAULT_PBKDF2_KEY_SIZE
from .registry import AlgorithmRegistry, default_registry


logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cryptokit",
        description="Hashes, HMAC, key derivation and symmetric ciphers",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    hash_parser = subparsers.add_parser("hash", help="Hex digest of a message")
    hash_parser.add_argument("algorithm", help="md5, sha1, sha256, sha3, ripemd160, ...")
    hash_parser.add_argument("message")
    hash_parser.add_argument(
        "--output-length", type=int, default=None,
        help="Digest length in bits (sha3 and keccak only)",
    )

    hmac_parser = subparsers.add_parser("hmac", help="Hex HMAC of a message")
    hmac_parser.add_argument("algorithm")
    hmac_parser.add_argument("key")
    hmac_parser.add_argument("message")

    pbkdf2_parser = subparsers.add_parser("pbkdf2", help="Derive a key with PBKDF2")
    pbkdf2_parser.add_argument("password")
    pbkdf2_parser.add_argument("salt", help="Salt as hex")
    pbkdf2_parser.add_argument(
        "--key-size", type=int, default=DEFAULT_PBKDF2_KEY_SIZE,
        help="Key size in 32-bit words (default: %(default)s)",
    )
    pbkdf2_parser.add_argument(
        "--iterations", type=int, default=DEFAULT_PBKDF2_ITERATIONS,
        help="Iteration count (default: %(default)s)",
    )
    pbkdf2_parser.add_argument("--hasher", default="sha1", help="PRF hasher (default: %(default)s)")

    for command, data_help in (("encrypt", "Plaintext (UTF-8)"),
                               ("decrypt", "Serialized ciphertext")):
        cipher_parser = subparsers.add_parser(command, help=f"{command.capitalize()} a message")
        cipher_parser.add_argument("cipher", help="aes, des, tripledes, rc4, rabbit, ...")
        cipher_parser.add_argument("data", help=data_help)
        credential = cipher_parser.add_mutually_exclusive_group(required=True)
        credential.add_argument("--password", help="Derive key and IV from a password")
        credential.add_argument("--key", help="Raw key as hex")
        cipher_parser.add_argument("--iv", default=None, help="IV as hex (raw keys only)")
        cipher_parser.add_argument("--mode", default="cbc", help="Block mode (default: %(default)s)")
        cipher_parser.add_argument("--padding", default="pkcs7", help="Padding (default: %(default)s)")
        cipher_parser.add_argument(
            "--format", default="openssl", choices=["openssl", "hex"],
            help="Ciphertext format (default: %(default)s)",
        )

    return parser


def _cipher_options(registry: AlgorithmRegistry, args) -> CipherOptions:
    return CipherOptions(
        mode=registry.mode(args.mode),
        padding=registry.padding(args.padding),
        iv=Hex.parse(args.iv) if args.iv is not None else None,
        format=registry.formatter(args.format),
    )


def _credential(args):
    if args.password is not None:
        return Password(args.password)
    return RawKey(Hex.parse(args.key))


def run(args, registry: AlgorithmRegistry) -> str:
    """Execute one parsed command and return the text to print."""
    if args.command == "hash":
        hasher = registry.hasher(args.algorithm)
        options = {}
        if args.output_length is not None:
            if not issubclass(hasher, SHA3):
                raise ValueError(f"--output-length does not apply to {args.algorithm}")
            options["output_length"] = args.output_length
        return str(hasher.hash(args.message, **options))

    if args.command == "hmac":
        hasher = registry.hasher(args.algorithm)
        return str(HMAC(hasher, args.key).finalize(args.message))

    if args.command == "pbkdf2":
        kdf = PBKDF2(
            key_size=args.key_size,
            hasher=registry.hasher(args.hasher),
            iterations=args.iterations,
        )
        return str(kdf.compute(args.password, Hex.parse(args.salt)))

    cipher = registry.cipher(args.cipher)
    options = _cipher_options(registry, args)
    credential = _credential(args)

    if args.command == "encrypt":
        return str(cipher.encrypt(args.data, credential, options))
    return cipher.decrypt(args.data, credential, options).to_string(Utf8)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for cryptokit."""
    args = _build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.debug("Running %s", args.command)

    try:
        output = run(args, default_registry())
    except (CryptoKitError, ValueError) as exc:
        print(f"cryptokit: error: {exc}", file=sys.stderr)
        return 1

    print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
