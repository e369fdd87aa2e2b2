"""
Error hierarchy for the cryptoutil package.

Every public operation either returns its declared result or raises exactly
one of the subclasses below. All of them derive from CryptoError, so callers
that do not care about the specific kind can catch the base class.

Error Code Categories:
    - 1xxx: Malformed hex/base64 input or undecodable text (FormatError)
    - 2xxx: Unknown cipher spec or digest mode (UnsupportedCipherError)
    - 3xxx: Key/IV length mismatch (InvalidKeyMaterialError)
    - 4xxx: Corrupt or impossible padding (PaddingError)
    - 5xxx: Operation on a released engine (UseAfterReleaseError)
"""

from typing import Any, Dict, Optional


class CryptoError(Exception):
    """
    Base exception for cryptographic operation failures.

    Attributes:
        error_code: Numeric code identifying the error type
        message: Human-readable description of the error
        details: Optional structured context (never key material)

    Example:
        try:
            data = hex_decode("zz")
        except CryptoError as e:
            log_error(f"Crypto error {e.error_code}: {e.message}")
    """

    default_code = 1000

    def __init__(self, message: str, error_code: Optional[int] = None,
                 details: Optional[Dict[str, Any]] = None):
        self.error_code = error_code if error_code is not None else self.default_code
        self.message = message
        self.details = details or {}
        super().__init__(f"Crypto error {self.error_code}: {message}")


class FormatError(CryptoError):
    """Malformed hex or base64 input, or bytes that are not valid text."""

    default_code = 1001


class UnsupportedCipherError(CryptoError):
    """Unresolvable cipher spec string or unknown digest mode."""

    default_code = 2001


class InvalidKeyMaterialError(CryptoError):
    """Key or IV length does not match the resolved cipher spec."""

    default_code = 3001


class PaddingError(CryptoError):
    """Padding could not be applied or failed validation on decrypt."""

    default_code = 4001


class UseAfterReleaseError(CryptoError):
    """An operation was attempted on a released cipher engine."""

    default_code = 5001
