# cryptoutil test configuration
# Shared fixtures for unit, integration and fuzz tests

import pytest
import sys
import os

# Add project root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from cryptoutil import CipherPaddingMode, SymmetricDecryptor, SymmetricEncryptor


SM4_KEY = "0123456789ABCDEF"
SM4_IV = "0000000000000000"


@pytest.fixture(scope="session")
def project_root():
    """Return the project root directory."""
    return os.path.dirname(os.path.dirname(__file__))


@pytest.fixture
def sample_text():
    """Text reused by the digest and HMAC known-answer tests."""
    return "Hello world!"


@pytest.fixture
def sample_bytes():
    """The bytes 1..16 used by the codec known-answer tests."""
    return bytes(range(1, 17))


@pytest.fixture
def sm4_pair():
    """An SM4-CBC/PKCS7 encryptor and decryptor, released after the test."""
    encryptor = SymmetricEncryptor("sm4-cbc", CipherPaddingMode.PKCS7, SM4_KEY, SM4_IV)
    decryptor = SymmetricDecryptor("sm4-cbc", CipherPaddingMode.PKCS7, SM4_KEY, SM4_IV)
    yield encryptor, decryptor
    encryptor.release()
    decryptor.release()
