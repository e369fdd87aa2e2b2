"""
cryptoutil - Cryptographic Utility Facade.

Byte-string codecs, one-way digests, HMAC and a symmetric cipher engine
built on the ``cryptography`` package.

Modules:
    codec: Hex (with optional delimiter) and base64 encoding
    digest: Fifteen named digest algorithms including SM3 and SHAKE
    mac: HMAC composed over the digest module
    registry: Cipher spec strings resolved to key/IV/block requirements
    padding: Pluggable padding schemes (none, PKCS7, ANSI X9.23)
    engine: Stateful encryptor/decryptor with explicit release

Usage:
    >>> from cryptoutil import hex_encode, make_digest, DigestMode
    >>> hex_encode(bytes(range(1, 5)), ":")
    '01:02:03:04'
    >>> make_digest(DigestMode.MD5, "Hello world!")
    '86fb269d190d2c85f6e0468ceca42a20'

    >>> from cryptoutil import SymmetricEncryptor, CipherPaddingMode
    >>> with SymmetricEncryptor("aes-128-cbc", CipherPaddingMode.PKCS7,
    ...                         "0123456789ABCDEF", "ABCDEFGHIJKLMNOP") as enc:
    ...     enc.to_base64("Hello world!")
    'Ym3Ssw7VEm0kzw9ObL+Mmw=='
"""

from .codec import (
    base64_decode,
    base64_decode_text,
    base64_encode,
    hex_decode,
    hex_decode_text,
    hex_encode,
)
from .digest import DigestMode, block_size, digest_bytes, digest_size, make_digest
from .engine import SymmetricCipher, SymmetricDecryptor, SymmetricEncryptor
from .errors import (
    CryptoError,
    FormatError,
    InvalidKeyMaterialError,
    PaddingError,
    UnsupportedCipherError,
    UseAfterReleaseError,
)
from .mac import hmac_bytes, hmac_hash, hmac_verify
from .padding import CipherPaddingMode, PaddingScheme, register_scheme
from .registry import CipherSpec, cipher_names, resolve

__all__ = [
    # Codec
    "hex_encode",
    "hex_decode",
    "hex_decode_text",
    "base64_encode",
    "base64_decode",
    "base64_decode_text",
    # Digest
    "DigestMode",
    "make_digest",
    "digest_bytes",
    "digest_size",
    "block_size",
    # HMAC
    "hmac_hash",
    "hmac_bytes",
    "hmac_verify",
    # Cipher registry and padding
    "CipherSpec",
    "resolve",
    "cipher_names",
    "CipherPaddingMode",
    "PaddingScheme",
    "register_scheme",
    # Cipher engine
    "SymmetricCipher",
    "SymmetricEncryptor",
    "SymmetricDecryptor",
    # Errors
    "CryptoError",
    "FormatError",
    "UnsupportedCipherError",
    "InvalidKeyMaterialError",
    "PaddingError",
    "UseAfterReleaseError",
]

__version__ = "1.0.0"
