"""
Handling of sensitive byte buffers.

Cipher engines keep their key and IV in mutable buffers so that release can
overwrite them in place instead of leaving copies for the garbage collector.
Comparisons of secret-derived values go through a constant-time primitive.
"""

import ctypes
from typing import Union

from cryptography.hazmat.primitives import constant_time


def secure_wipe(data: Union[bytearray, memoryview]) -> None:
    """
    Overwrite a mutable buffer with zeros.

    Immutable ``bytes`` cannot be wiped and are rejected; callers that need
    zeroization must hold their secret in a ``bytearray``.

    Args:
        data: Buffer to clear

    Raises:
        TypeError: If the buffer is not writable
    """
    view = memoryview(data)
    if view.readonly:
        raise TypeError("Only writable buffers can be wiped")

    size = view.nbytes
    if size == 0:
        return

    # Write through the buffer protocol so the underlying storage is cleared
    ctypes.memset((ctypes.c_char * size).from_buffer(view.cast("B")), 0, size)


def secure_compare(a: bytes, b: bytes) -> bool:
    """
    Compare two byte sequences in constant time.

    Length is not treated as secret: unequal lengths return False at once.

    Args:
        a: First byte sequence
        b: Second byte sequence

    Returns:
        bool: True if sequences are equal, False otherwise
    """
    if len(a) != len(b):
        return False

    return constant_time.bytes_eq(bytes(a), bytes(b))
