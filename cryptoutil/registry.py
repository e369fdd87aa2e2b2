"""
Static registry of symmetric cipher specifications.

A cipher spec string has the form ``algorithm[-keybits]-mode``, for example
``sm4-cbc`` or ``aes-256-ctr``, and is matched case-insensitively. A few
OpenSSL-style short aliases (``aes128``, ``sm4``) resolve to the CBC variant.

The table is built once at import time and exposed through a read-only
mapping, so lookups are O(1) and need no locking.
"""

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Dict, List, Mapping

from cryptography.hazmat.backends import default_backend
from cryptography.hazmat.decrepit.ciphers import algorithms as decrepit_algorithms
from cryptography.hazmat.decrepit.ciphers import modes as decrepit_modes
from cryptography.hazmat.primitives.ciphers import algorithms, modes

from .errors import UnsupportedCipherError

logger = logging.getLogger(__name__)

_ALGORITHMS: Dict[str, Callable] = {
    "AES": algorithms.AES,
    "SM4": algorithms.SM4,
    "CAMELLIA": decrepit_algorithms.Camellia,
}

# Each factory takes the IV; ECB ignores it.
# Camellia and the feedback modes live in the decrepit namespace
_MODES: Dict[str, Callable] = {
    "ECB": lambda iv: modes.ECB(),
    "CBC": modes.CBC,
    "CTR": modes.CTR,
    "CFB": decrepit_modes.CFB,
    "CFB8": decrepit_modes.CFB8,
    "OFB": decrepit_modes.OFB,
}

_BLOCK_MODES = frozenset({"ECB", "CBC"})


@dataclass(frozen=True)
class CipherSpec:
    """
    Resolved requirements of a cipher spec string.

    Attributes:
        name: Canonical lowercase spec name, e.g. ``"sm4-cbc"``
        algorithm: Algorithm name, e.g. ``"SM4"``
        mode: Block mode name, e.g. ``"CBC"``
        block_size: Padding block length in bytes (1 for stream-like modes)
        key_size: Required key length in bytes
        iv_size: Required IV length in bytes (0 for ECB)
    """

    name: str
    algorithm: str
    mode: str
    block_size: int
    key_size: int
    iv_size: int

    @property
    def needs_padding(self) -> bool:
        return self.block_size > 1

    def build_algorithm(self, key: bytes):
        """Create the ``cryptography`` algorithm object for ``key``."""
        return _ALGORITHMS[self.algorithm](key)

    def build_mode(self, iv: bytes):
        """Create the ``cryptography`` mode object for ``iv``."""
        return _MODES[self.mode](iv)


def _spec(algorithm: str, mode: str, key_bits: int, cipher_block: int = 16,
          with_key_bits: bool = True) -> CipherSpec:
    prefix = f"{algorithm.lower()}-{key_bits}" if with_key_bits else algorithm.lower()
    return CipherSpec(
        name=f"{prefix}-{mode.lower()}",
        algorithm=algorithm,
        mode=mode,
        block_size=cipher_block if mode in _BLOCK_MODES else 1,
        key_size=key_bits // 8,
        iv_size=0 if mode == "ECB" else cipher_block,
    )


def _build_registry() -> Mapping[str, CipherSpec]:
    table: Dict[str, CipherSpec] = {}

    for bits in (128, 192, 256):
        for mode in ("CBC", "ECB", "CTR", "CFB", "CFB8", "OFB"):
            spec = _spec("AES", mode, bits)
            table[spec.name] = spec
        for mode in ("CBC", "ECB", "CFB", "OFB"):
            spec = _spec("CAMELLIA", mode, bits)
            table[spec.name] = spec

    for mode in ("CBC", "ECB", "CTR", "CFB", "OFB"):
        spec = _spec("SM4", mode, 128, with_key_bits=False)
        table[spec.name] = spec

    aliases = {
        "aes128": "aes-128-cbc",
        "aes192": "aes-192-cbc",
        "aes256": "aes-256-cbc",
        "sm4": "sm4-cbc",
        "camellia128": "camellia-128-cbc",
        "camellia192": "camellia-192-cbc",
        "camellia256": "camellia-256-cbc",
    }
    for alias, target in aliases.items():
        table[alias] = table[target]

    logger.debug(f"Cipher registry built with {len(table)} entries")
    return MappingProxyType(table)


_REGISTRY = _build_registry()


def resolve(cipher_name: str) -> CipherSpec:
    """
    Resolve a cipher spec string.

    Args:
        cipher_name: Spec string such as ``"SM4-CBC"``

    Returns:
        CipherSpec: The resolved requirements

    Raises:
        UnsupportedCipherError: If the name is empty or not registered
    """
    if not isinstance(cipher_name, str) or not cipher_name.strip():
        raise UnsupportedCipherError("The cipher name must be a non-empty string", 2001)

    spec = _REGISTRY.get(cipher_name.strip().lower())
    if spec is None:
        raise UnsupportedCipherError(
            f"Could not find the cipher name: {cipher_name}", 2002,
            details={"cipher_name": cipher_name},
        )
    return spec


def cipher_names() -> List[str]:
    """Sorted canonical names of every registered cipher spec."""
    return sorted({spec.name for spec in _REGISTRY.values()})


def is_available(spec: CipherSpec) -> bool:
    """Whether the crypto backend can run ``spec``."""
    algorithm = spec.build_algorithm(bytes(spec.key_size))
    mode = spec.build_mode(bytes(spec.iv_size))
    return default_backend().cipher_supported(algorithm, mode)
