"""
Keyed-hash message authentication (HMAC, RFC 2104).

The construction is composed here from the digest module, so every mode that
``make_digest`` supports, including SM3 and the fixed-length SHAKE modes, is
also available for HMAC:

    HMAC(K, M) = H((K' ^ opad) || H((K' ^ ipad) || M))

where K' is the key hashed if it is longer than the block size and then
right-padded with zeros to the block size.
"""

from typing import Optional, Union

from . import digest
from .codec import BytesLike, hex_encode, to_bytes
from .digest import DigestMode
from .memory import secure_compare

_IPAD = 0x36
_OPAD = 0x5C


def _normalize_key(mode: DigestMode, key: bytes) -> bytes:
    size = digest.block_size(mode)
    if len(key) > size:
        key = digest.digest_bytes(mode, key)
    return key.ljust(size, b"\x00")


def hmac_bytes(mode: Union[DigestMode, str], key: Union[str, BytesLike],
               data: Union[str, BytesLike]) -> bytes:
    """
    Compute the raw HMAC of ``data`` under ``key``.

    Args:
        mode: Digest algorithm to build the HMAC on
        key: Secret key, bytes or text (encoded verbatim)
        data: Message, bytes or text

    Returns:
        The MAC bytes, as long as the digest of ``mode``
    """
    resolved = DigestMode.parse(mode)
    normalized = _normalize_key(resolved, to_bytes(key))

    inner_key = bytes(b ^ _IPAD for b in normalized)
    outer_key = bytes(b ^ _OPAD for b in normalized)

    inner = digest.digest_bytes(resolved, inner_key + to_bytes(data))
    return digest.digest_bytes(resolved, outer_key + inner)


def hmac_hash(mode: Union[DigestMode, str], key: Union[str, BytesLike],
              data: Union[str, BytesLike]) -> str:
    """Compute the HMAC of ``data`` as a lowercase hex string."""
    return hex_encode(hmac_bytes(mode, key, data))


def hmac_verify(mode: Union[DigestMode, str], key: Union[str, BytesLike],
                data: Union[str, BytesLike],
                expected: Optional[Union[str, BytesLike]]) -> bool:
    """
    Check a hex-encoded MAC in constant time.

    ``expected`` is the hex text of the MAC, as ``str`` or ASCII bytes, in
    either case. Returns False for a missing or differently sized MAC
    instead of raising.

    Raises:
        TypeError: If ``expected`` is neither text nor bytes-like
    """
    if expected is None:
        return False
    expected_hex = to_bytes(expected).strip().lower()
    if not expected_hex:
        return False
    actual = hmac_hash(mode, key, data)
    return secure_compare(actual.encode("ascii"), expected_hex)
