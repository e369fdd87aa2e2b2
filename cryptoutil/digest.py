"""
One-shot message digests over a fixed family of fifteen algorithms.

The digest functions are pure: each call builds its own hash context from
the ``cryptography`` primitives and keeps no state between calls, so they are
safe to call from any number of threads.

SHAKE128 and SHAKE256 are extendable-output functions. Their output length is
fixed by ``config.SHAKE128_OUTPUT_BYTES`` (16) and
``config.SHAKE256_OUTPUT_BYTES`` (32).

Example:
    >>> make_digest(DigestMode.SHA256, "Hello world!")[:16]
    'c0535e4be2b79ffd'
"""

import logging
from enum import Enum
from typing import Callable, Dict, NamedTuple, Union

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.backends import default_backend
from cryptography.hazmat.primitives import hashes

from . import config
from .codec import BytesLike, hex_encode, to_bytes
from .errors import UnsupportedCipherError

logger = logging.getLogger(__name__)


class DigestMode(Enum):
    """
    The available digest algorithms.

    Declaration order is the ordinal contract used by language bindings;
    new members may only be appended.
    """

    SHA1 = "sha1"
    SHA224 = "sha224"
    SHA256 = "sha256"
    SHA384 = "sha384"
    SHA512 = "sha512"
    SHA512_224 = "sha512_224"
    SHA512_256 = "sha512_256"
    SHA3_224 = "sha3_224"
    SHA3_256 = "sha3_256"
    SHA3_384 = "sha3_384"
    SHA3_512 = "sha3_512"
    SHAKE128 = "shake128"
    SHAKE256 = "shake256"
    MD5 = "md5"
    SM3 = "sm3"

    @property
    def ordinal(self) -> int:
        """Position of this member in declaration order."""
        return list(DigestMode).index(self)

    @property
    def is_xof(self) -> bool:
        return self in (DigestMode.SHAKE128, DigestMode.SHAKE256)

    @classmethod
    def from_ordinal(cls, ordinal: int) -> "DigestMode":
        members = list(cls)
        if isinstance(ordinal, bool) or not isinstance(ordinal, int) or not 0 <= ordinal < len(members):
            raise UnsupportedCipherError(f"Unknown digest mode ordinal: {ordinal!r}", 2101)
        return members[ordinal]

    @classmethod
    def parse(cls, value: Union["DigestMode", str]) -> "DigestMode":
        """
        Resolve a member or a case-insensitive name such as ``"sha3_256"``.

        Raises:
            UnsupportedCipherError: If the value names no digest mode
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower().replace("-", "_")
            for member in cls:
                if key in (member.value, member.name.lower()):
                    return member
        raise UnsupportedCipherError(f"Unknown digest mode: {value!r}", 2102)


class _DigestRoutine(NamedTuple):
    factory: Callable[[], hashes.HashAlgorithm]
    # Input block length in bytes, used for HMAC key normalization
    block_size: int


# SHA-3 block sizes are the Keccak rates of each variant
_ROUTINES: Dict[DigestMode, _DigestRoutine] = {
    DigestMode.SHA1: _DigestRoutine(hashes.SHA1, 64),
    DigestMode.SHA224: _DigestRoutine(hashes.SHA224, 64),
    DigestMode.SHA256: _DigestRoutine(hashes.SHA256, 64),
    DigestMode.SHA384: _DigestRoutine(hashes.SHA384, 128),
    DigestMode.SHA512: _DigestRoutine(hashes.SHA512, 128),
    DigestMode.SHA512_224: _DigestRoutine(hashes.SHA512_224, 128),
    DigestMode.SHA512_256: _DigestRoutine(hashes.SHA512_256, 128),
    DigestMode.SHA3_224: _DigestRoutine(hashes.SHA3_224, 144),
    DigestMode.SHA3_256: _DigestRoutine(hashes.SHA3_256, 136),
    DigestMode.SHA3_384: _DigestRoutine(hashes.SHA3_384, 104),
    DigestMode.SHA3_512: _DigestRoutine(hashes.SHA3_512, 72),
    DigestMode.SHAKE128: _DigestRoutine(
        lambda: hashes.SHAKE128(digest_size=config.SHAKE128_OUTPUT_BYTES), 168),
    DigestMode.SHAKE256: _DigestRoutine(
        lambda: hashes.SHAKE256(digest_size=config.SHAKE256_OUTPUT_BYTES), 136),
    DigestMode.MD5: _DigestRoutine(hashes.MD5, 64),
    DigestMode.SM3: _DigestRoutine(hashes.SM3, 64),
}


def _routine(mode: Union[DigestMode, str]) -> _DigestRoutine:
    return _ROUTINES[DigestMode.parse(mode)]


def digest_size(mode: Union[DigestMode, str]) -> int:
    """Length in bytes of the raw digest produced for ``mode``."""
    return _routine(mode).factory().digest_size


def block_size(mode: Union[DigestMode, str]) -> int:
    """Input block length in bytes of the algorithm behind ``mode``."""
    return _routine(mode).block_size


def digest_bytes(mode: Union[DigestMode, str], data: Union[str, BytesLike]) -> bytes:
    """
    Compute the raw digest of ``data``.

    Args:
        mode: Digest algorithm
        data: Bytes, or text encoded with the configured text encoding

    Returns:
        The digest bytes

    Raises:
        UnsupportedCipherError: If the mode is unknown or the crypto backend
            cannot compute it
    """
    resolved = DigestMode.parse(mode)
    algorithm = _ROUTINES[resolved].factory()

    try:
        context = hashes.Hash(algorithm, backend=default_backend())
    except UnsupportedAlgorithm as e:
        logger.warning(f"Digest {resolved.name} is not available in the crypto backend")
        raise UnsupportedCipherError(
            f"Digest mode {resolved.name} is not supported by the crypto backend", 2103) from e

    context.update(to_bytes(data))
    return context.finalize()


def make_digest(mode: Union[DigestMode, str], data: Union[str, BytesLike]) -> str:
    """Compute the digest of ``data`` as a lowercase hex string."""
    return hex_encode(digest_bytes(mode, data))
