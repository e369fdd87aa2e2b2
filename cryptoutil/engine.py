"""
Symmetric cipher engine.

A SymmetricEncryptor or SymmetricDecryptor is constructed once against a
cipher spec string, a padding mode, a key and an IV, used for any number of
transform calls, and released exactly once. Construction resolves the spec
and validates key material before the cipher context is created, so a failed
construction holds no context.

Lifecycle:
    1. Construction: spec lookup, padding mode, key/IV length, backend support
    2. Usage: every transform starts from the constructed key and IV, so
       calls are independent of each other
    3. Release: key and IV buffers are zeroed and the context is dropped.
       Releasing again is a no-op; any other call raises UseAfterReleaseError

Thread Safety:
    An instance serves one logical stream of calls at a time. Concurrent
    transforms on the same instance must be synchronized by the caller.
    Release itself is guarded so the context is freed only once.

Example:
    >>> with SymmetricEncryptor("sm4-cbc", CipherPaddingMode.PKCS7,
    ...                         "0123456789ABCDEF", "0000000000000000") as enc:
    ...     token = enc.to_base64("Hello")
    >>> with SymmetricDecryptor("sm4-cbc", CipherPaddingMode.PKCS7,
    ...                         "0123456789ABCDEF", "0000000000000000") as dec:
    ...     dec.text_from_base64(token)
    'Hello'
"""

import logging
import threading
from typing import Optional, Union

from cryptography.hazmat.backends import default_backend
from cryptography.hazmat.primitives.ciphers import Cipher

from . import config, registry
from .codec import BytesLike, base64_decode, base64_encode, to_bytes, to_text
from .errors import (
    InvalidKeyMaterialError,
    PaddingError,
    UnsupportedCipherError,
    UseAfterReleaseError,
)
from .memory import secure_wipe
from .padding import CipherPaddingMode, apply_padding, strip_padding
from .registry import CipherSpec

logger = logging.getLogger(__name__)


class SymmetricCipher:
    """
    Shared state and lifecycle of the encryptor and decryptor.

    Attributes:
        spec: The resolved cipher spec
        padding_mode: Padding applied on encrypt / validated on decrypt
    """

    _encryption = True

    def __init__(
        self,
        cipher_name: str,
        padding_mode: Union[CipherPaddingMode, str],
        key: Union[str, BytesLike],
        iv: Optional[Union[str, BytesLike]],
    ):
        """
        Resolve the spec, validate key material and create the cipher context.

        Args:
            cipher_name: Spec string such as ``"sm4-cbc"`` (case-insensitive)
            padding_mode: Padding mode member or name
            key: Key bytes, or text used verbatim as key bytes
            iv: IV bytes or text; ``None`` means empty (ECB)

        Raises:
            UnsupportedCipherError: If the spec or padding mode is unknown, or
                the crypto backend lacks the cipher
            InvalidKeyMaterialError: If key or IV length does not match the spec
        """
        # Stays released until construction completes
        self._released = True
        self._release_lock = threading.Lock()
        self._cipher: Optional[Cipher] = None

        spec = registry.resolve(cipher_name)
        mode = CipherPaddingMode.parse(padding_mode)
        key_bytes = to_bytes(key)
        iv_bytes = b"" if iv is None else to_bytes(iv)

        if len(key_bytes) != spec.key_size:
            raise InvalidKeyMaterialError(
                f"Expected key length {spec.key_size} for {spec.name}, got {len(key_bytes)}", 3001,
                details={"expected": spec.key_size, "actual": len(key_bytes)},
            )
        if len(iv_bytes) != spec.iv_size:
            raise InvalidKeyMaterialError(
                f"Expected IV length {spec.iv_size} for {spec.name}, got {len(iv_bytes)}", 3002,
                details={"expected": spec.iv_size, "actual": len(iv_bytes)},
            )
        if not registry.is_available(spec):
            logger.warning(f"Cipher {spec.name} is not available in the crypto backend")
            raise UnsupportedCipherError(
                f"Cipher {spec.name} is not supported by the crypto backend", 2003)

        self._spec = spec
        self._padding_mode = mode
        self._key = bytearray(key_bytes)
        self._iv = bytearray(iv_bytes)
        self._cipher = Cipher(
            spec.build_algorithm(key_bytes),
            spec.build_mode(iv_bytes),
            backend=default_backend(),
        )
        self._released = False

        logger.debug(f"{type(self).__name__} created for {spec.name} with {mode.name} padding")

    def __enter__(self) -> "SymmetricCipher":
        self._ensure_live()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.release()
        return False

    def __del__(self):
        # Safety net only; callers should release explicitly or use 'with'
        if getattr(self, "_released", True) is False:
            self.release()

    def __repr__(self) -> str:
        state = "released" if self._released else "live"
        name = self._spec.name if hasattr(self, "_spec") else "?"
        return f"<{type(self).__name__} {name} ({state})>"

    @property
    def spec(self) -> CipherSpec:
        return self._spec

    @property
    def cipher_name(self) -> str:
        return self._spec.name

    @property
    def padding_mode(self) -> CipherPaddingMode:
        return self._padding_mode

    @property
    def is_encryptor(self) -> bool:
        return self._encryption

    @property
    def released(self) -> bool:
        return self._released

    def release(self) -> None:
        """
        Wipe key material and drop the cipher context.

        Calling release on an already released instance does nothing.
        """
        with self._release_lock:
            if self._released:
                return
            self._released = True
            self._cipher = None
            secure_wipe(self._key)
            secure_wipe(self._iv)

        logger.debug(f"{type(self).__name__} for {self._spec.name} released")

    def _ensure_live(self) -> Cipher:
        cipher = self._cipher
        if self._released or cipher is None:
            raise UseAfterReleaseError(
                f"{type(self).__name__} has been released", 5001)
        return cipher

    def _process(self, data: bytes) -> bytes:
        """Run ``data`` through a fresh context of the configured direction."""
        cipher = self._ensure_live()
        context = cipher.encryptor() if self._encryption else cipher.decryptor()

        chunk_size = config.TRANSFORM_CHUNK_SIZE
        output = bytearray()
        for offset in range(0, len(data), chunk_size):
            output += context.update(data[offset:offset + chunk_size])

        try:
            output += context.finalize()
        except ValueError as e:
            raise PaddingError(f"Cipher finalization failed: {e}", 4005) from e

        return bytes(output)


class SymmetricEncryptor(SymmetricCipher):
    """Pads then encrypts."""

    _encryption = True

    def transform(self, data: Union[str, BytesLike]) -> bytes:
        """
        Encrypt ``data``.

        Args:
            data: Plaintext bytes, or text encoded with the configured encoding

        Returns:
            The ciphertext

        Raises:
            PaddingError: If padding mode NONE meets unaligned input
            UseAfterReleaseError: If the encryptor was released
        """
        self._ensure_live()
        padded = apply_padding(self._padding_mode, to_bytes(data), self._spec.block_size)
        return self._process(padded)

    def to_base64(self, data: Union[str, BytesLike]) -> str:
        """Encrypt ``data`` and return the ciphertext as base64 text."""
        return base64_encode(self.transform(data))


class SymmetricDecryptor(SymmetricCipher):
    """Decrypts then validates and strips padding."""

    _encryption = False

    def transform(self, data: BytesLike) -> bytes:
        """
        Decrypt ``data``.

        Raises:
            PaddingError: On ciphertext of impossible length or corrupt padding
            UseAfterReleaseError: If the decryptor was released
        """
        self._ensure_live()
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise TypeError(f"Expected bytes-like ciphertext, got {type(data).__name__}")

        ciphertext = bytes(data)
        block_size = self._spec.block_size
        if block_size > 1 and len(ciphertext) % block_size != 0:
            raise PaddingError(
                f"Ciphertext length {len(ciphertext)} is not a multiple of the block size {block_size}",
                4006)

        return strip_padding(self._padding_mode, self._process(ciphertext), block_size)

    def as_text(self, data: BytesLike, encoding: Optional[str] = None) -> str:
        """Decrypt ``data`` and interpret the plaintext as text."""
        return to_text(self.transform(data), encoding)

    def from_base64(self, text: str) -> bytes:
        """Decrypt base64-encoded ciphertext."""
        self._ensure_live()
        return self.transform(base64_decode(text))

    def text_from_base64(self, text: str, encoding: Optional[str] = None) -> str:
        """Decrypt base64-encoded ciphertext and interpret the plaintext as text."""
        return to_text(self.from_base64(text), encoding)
