"""
Pluggable block-cipher padding schemes.

Each CipherPaddingMode maps to a PaddingScheme with ``pad`` and ``unpad``.
Schemes only act on block modes; cipher specs with a block size of 1
(CTR, CFB, OFB) pass data through untouched.
"""

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Dict, Union

from cryptography.hazmat.primitives import padding

from .errors import PaddingError, UnsupportedCipherError

logger = logging.getLogger(__name__)


class CipherPaddingMode(Enum):
    """
    The available padding modes of a symmetric cipher.

    Declaration order is the ordinal contract used by language bindings;
    new members may only be appended.
    """

    NONE = "none"
    PKCS7 = "pkcs7"
    ANSIX923 = "ansix923"

    @property
    def ordinal(self) -> int:
        return list(CipherPaddingMode).index(self)

    @classmethod
    def from_ordinal(cls, ordinal: int) -> "CipherPaddingMode":
        members = list(cls)
        if isinstance(ordinal, bool) or not isinstance(ordinal, int) or not 0 <= ordinal < len(members):
            raise UnsupportedCipherError(f"Unknown padding mode ordinal: {ordinal!r}", 2201)
        return members[ordinal]

    @classmethod
    def parse(cls, value: Union["CipherPaddingMode", str]) -> "CipherPaddingMode":
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower().replace("_", "").replace(" ", "")
            for member in cls:
                if key == member.value:
                    return member
        raise UnsupportedCipherError(f"Unknown padding mode: {value!r}", 2202)


class PaddingScheme(ABC):
    """Interface every padding scheme implements."""

    @abstractmethod
    def pad(self, data: bytes, block_size: int) -> bytes:
        """Extend ``data`` to a multiple of ``block_size``."""

    @abstractmethod
    def unpad(self, data: bytes, block_size: int) -> bytes:
        """Validate and strip padding, raising PaddingError if it is corrupt."""


class NoPadding(PaddingScheme):
    """Leaves data unchanged but requires block-aligned input."""

    @staticmethod
    def _check_aligned(data: bytes, block_size: int) -> None:
        if len(data) % block_size != 0:
            raise PaddingError(
                f"Data length {len(data)} is not a multiple of the block size {block_size}", 4002)

    def pad(self, data: bytes, block_size: int) -> bytes:
        self._check_aligned(data, block_size)
        return data

    def unpad(self, data: bytes, block_size: int) -> bytes:
        self._check_aligned(data, block_size)
        return data


class _LibraryPadding(PaddingScheme):
    """Adapter over a ``cryptography.hazmat.primitives.padding`` algorithm."""

    def __init__(self, factory):
        self._factory = factory

    def pad(self, data: bytes, block_size: int) -> bytes:
        padder = self._factory(block_size * 8).padder()
        return padder.update(data) + padder.finalize()

    def unpad(self, data: bytes, block_size: int) -> bytes:
        if not data or len(data) % block_size != 0:
            raise PaddingError(
                f"Padded data length {len(data)} is not a positive multiple of {block_size}", 4003)

        unpadder = self._factory(block_size * 8).unpadder()
        try:
            return unpadder.update(data) + unpadder.finalize()
        except ValueError as e:
            raise PaddingError("Invalid padding bytes", 4004) from e


class PKCS7Padding(_LibraryPadding):
    """N bytes of value N."""

    def __init__(self):
        super().__init__(padding.PKCS7)


class ANSIX923Padding(_LibraryPadding):
    """N-1 zero bytes followed by one byte of value N."""

    def __init__(self):
        super().__init__(padding.ANSIX923)


_SCHEMES: Dict[CipherPaddingMode, PaddingScheme] = {
    CipherPaddingMode.NONE: NoPadding(),
    CipherPaddingMode.PKCS7: PKCS7Padding(),
    CipherPaddingMode.ANSIX923: ANSIX923Padding(),
}


def get_scheme(mode: Union[CipherPaddingMode, str]) -> PaddingScheme:
    """Return the scheme registered for ``mode``."""
    return _SCHEMES[CipherPaddingMode.parse(mode)]


def register_scheme(mode: Union[CipherPaddingMode, str], scheme: PaddingScheme) -> PaddingScheme:
    """
    Install ``scheme`` as the implementation of ``mode``.

    The set of modes is fixed; registering replaces the scheme every
    subsequent transform with ``mode`` uses.

    Args:
        mode: Padding mode member or name
        scheme: PaddingScheme instance

    Returns:
        The previously registered scheme, so callers can restore it

    Raises:
        UnsupportedCipherError: If ``mode`` is unknown
        TypeError: If ``scheme`` is not a PaddingScheme
    """
    resolved = CipherPaddingMode.parse(mode)
    if not isinstance(scheme, PaddingScheme):
        raise TypeError(f"Expected a PaddingScheme, got {type(scheme).__name__}")

    previous = _SCHEMES[resolved]
    _SCHEMES[resolved] = scheme
    logger.debug(f"Padding scheme for {resolved.name} set to {type(scheme).__name__}")
    return previous


def apply_padding(mode: Union[CipherPaddingMode, str], data: bytes, block_size: int) -> bytes:
    if block_size <= 1:
        return data
    return get_scheme(mode).pad(data, block_size)


def strip_padding(mode: Union[CipherPaddingMode, str], data: bytes, block_size: int) -> bytes:
    if block_size <= 1:
        return data
    return get_scheme(mode).unpad(data, block_size)
