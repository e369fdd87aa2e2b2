"""
Hex and base64 codecs.

Encoders take bytes (or text, which is encoded first) and return ``str``;
decoders take ``str`` and return ``bytes``. Every malformed input raises
FormatError, never a partially decoded result.

Example:
    >>> hex_encode(bytes(range(1, 5)), ":")
    '01:02:03:04'
    >>> hex_decode("01:02:03:04", ":")
    b'\\x01\\x02\\x03\\x04'
    >>> base64_encode(b"\\x00\\x01\\x02\\x03")
    'AAECAw=='
"""

import base64
import binascii
import re
import string
from typing import Optional, Union

from . import config
from .errors import FormatError

BytesLike = Union[bytes, bytearray, memoryview]
Delimiter = Union[str, bytes, int]

_HEX_DIGITS = frozenset(string.hexdigits)
_BASE64_PATTERN = re.compile(r"[A-Za-z0-9+/]*={0,2}")


def to_bytes(data: Union[str, BytesLike], encoding: Optional[str] = None) -> bytes:
    """
    Normalize text or a bytes-like object to ``bytes``.

    Text is encoded verbatim with the configured encoding; it is never
    interpreted as hex or base64.

    Raises:
        FormatError: If the text cannot be encoded (e.g. a lone surrogate)
        TypeError: If ``data`` is neither text nor bytes-like
    """
    if isinstance(data, str):
        try:
            return data.encode(encoding or config.DEFAULT_TEXT_ENCODING)
        except UnicodeEncodeError as e:
            raise FormatError(f"Text is not encodable as {e.encoding}", 1102) from e
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    raise TypeError(f"Expected str or bytes-like data, got {type(data).__name__}")


def to_text(data: BytesLike, encoding: Optional[str] = None) -> str:
    """Decode bytes to text, raising FormatError on invalid byte sequences."""
    try:
        return bytes(data).decode(encoding or config.DEFAULT_TEXT_ENCODING)
    except UnicodeDecodeError as e:
        raise FormatError(f"Data is not valid {e.encoding} text", 1101) from e


def _delimiter_char(delimiter: Delimiter) -> str:
    if isinstance(delimiter, int):
        if not 0 <= delimiter <= 0xFF:
            raise FormatError(f"Delimiter byte out of range: {delimiter}", 1002)
        char = chr(delimiter)
    elif isinstance(delimiter, (bytes, bytearray)):
        if len(delimiter) != 1:
            raise FormatError("Delimiter must be exactly one byte", 1002)
        char = chr(delimiter[0])
    else:
        if len(delimiter) != 1:
            raise FormatError("Delimiter must be exactly one character", 1002)
        char = delimiter

    if char in _HEX_DIGITS:
        raise FormatError(f"Delimiter {char!r} is a hexadecimal digit", 1003)
    return char


def hex_encode(data: Union[str, BytesLike], delimiter: Optional[Delimiter] = None) -> str:
    """
    Encode bytes as lowercase hexadecimal.

    Args:
        data: Bytes to encode (text is encoded first)
        delimiter: Optional separator placed between consecutive byte pairs,
            never leading or trailing

    Returns:
        The hexadecimal string
    """
    raw = to_bytes(data)
    if delimiter is None:
        return raw.hex()
    return _delimiter_char(delimiter).join(f"{b:02x}" for b in raw)


def hex_decode(text: str, delimiter: Optional[Delimiter] = None) -> bytes:
    """
    Decode a hexadecimal string.

    With a delimiter, the text must either separate every pair by exactly one
    delimiter or contain no delimiter at all.

    Args:
        text: Hex string, upper or lower case
        delimiter: Separator expected between pairs

    Returns:
        The decoded bytes

    Raises:
        FormatError: On odd digit count, non-hex characters or inconsistent
            delimiter placement
    """
    if not isinstance(text, str):
        raise TypeError(f"Expected str, got {type(text).__name__}")

    if delimiter is not None:
        separator = _delimiter_char(delimiter)
        if separator in text:
            groups = text.split(separator)
            for index, group in enumerate(groups):
                if len(group) != 2:
                    raise FormatError(
                        f"Inconsistent delimiter placement at group {index}", 1004,
                        details={"group": index},
                    )
            text = "".join(groups)

    if len(text) % 2 != 0:
        raise FormatError(f"Hex digit count must be even, got {len(text)}", 1005)

    for position, char in enumerate(text):
        if char not in _HEX_DIGITS:
            raise FormatError(f"Invalid hex character {char!r} at position {position}", 1006)

    return bytes.fromhex(text)


def hex_decode_text(text: str, delimiter: Optional[Delimiter] = None,
                    encoding: Optional[str] = None) -> str:
    """Decode a hex string and interpret the result as text."""
    return to_text(hex_decode(text, delimiter), encoding)


def base64_encode(data: Union[str, BytesLike]) -> str:
    """Encode bytes with the standard base64 alphabet and '=' padding."""
    return base64.b64encode(to_bytes(data)).decode("ascii")


def base64_decode(text: str) -> bytes:
    """
    Decode standard base64.

    Raises:
        FormatError: On a length not divisible by four, characters outside
            the alphabet, or misplaced padding
    """
    if not isinstance(text, str):
        raise TypeError(f"Expected str, got {type(text).__name__}")
    if not text:
        return b""

    if len(text) % 4 != 0:
        raise FormatError(
            f"Illegal base64 length {len(text)}, which should be divisible by 4", 1201)
    if not _BASE64_PATTERN.fullmatch(text):
        raise FormatError("Base64 text contains invalid characters or padding", 1202)

    try:
        return base64.b64decode(text, validate=True)
    except binascii.Error as e:
        raise FormatError(f"Malformed base64 text: {e}", 1203) from e


def base64_decode_text(text: str, encoding: Optional[str] = None) -> str:
    """Decode base64 and interpret the result as text."""
    return to_text(base64_decode(text), encoding)
