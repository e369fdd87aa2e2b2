"""
Unit Tests for HMAC.

Known-answer vectors (key "123456", message "Hello world!") are kept base64
encoded; the HMAC of the cryptography package is used as an independent
oracle for every fixed-length mode.
"""

import base64
import hashlib
import hmac as std_hmac

import pytest
from cryptography.hazmat.primitives import hashes, hmac

from cryptoutil import (
    DigestMode,
    FormatError,
    UnsupportedCipherError,
    hmac_bytes,
    hmac_hash,
    hmac_verify,
)


HMAC_KEY = "123456"

HELLO_HMACS_BASE64 = {
    DigestMode.SM3: "oSa6DkCGgM1RVYdAdBtPzTXJnDy9go/H0JynXx1N7i8=",
    DigestMode.MD5: "qSYgzjx1zYRx6md4P7oiFA==",
    DigestMode.SHA1: "sbtF0ndTgjZikFHXMSX0U95RoeM=",
    DigestMode.SHA224: "iGTtVE4ZZkY5jRu1wdQeVPWBtnlgmBCADR46dg==",
    DigestMode.SHA256: "f0jADrIur8rVdJ/yFztA8d3uil9gOJKK69hbCCE3H8Y=",
    DigestMode.SHA384: "ziks7H1KBv1gJigsWggHXM4PBh4LjLabKrJDxSEeQmvu9JpunVXMhfNgvsPFlsOL",
    DigestMode.SHA512: "k5ucMeh8B5vj/INDpYVBEaZMsBlhhZLJmzFnzhdIviNTXaqtBwjsPTg/cc4ZPXlyxHL75eU6NoeXxlBLjx1uPA==",
    DigestMode.SHA3_224: "GvN8xwWUI53BgN8Zz6fDp1ccOnR4CCPby6l1Ww==",
    DigestMode.SHA3_256: "1O8w4E84LFHgsut5YdmPeCZOHirQVemnFLpNcnPBr9k=",
    DigestMode.SHA3_384: "tytwzoHr+eLNO/niMsYZR845epPj58DizKbyUUFUq7ALMG3fCJBomcJx0JKNFJ8z",
    DigestMode.SHA3_512: "cyTBn/T3NYPc2hfo16fCwdGW7FRw2zcXlynANn66lPBWAxtE1FrLhBg/ibtBq4jIw1iQdjJGGNnX23RDMhJ+Zw==",
}

ORACLE_ALGORITHMS = {
    DigestMode.SHA1: hashes.SHA1,
    DigestMode.SHA224: hashes.SHA224,
    DigestMode.SHA256: hashes.SHA256,
    DigestMode.SHA384: hashes.SHA384,
    DigestMode.SHA512: hashes.SHA512,
    DigestMode.SHA512_224: hashes.SHA512_224,
    DigestMode.SHA512_256: hashes.SHA512_256,
    DigestMode.SHA3_224: hashes.SHA3_224,
    DigestMode.SHA3_256: hashes.SHA3_256,
    DigestMode.SHA3_384: hashes.SHA3_384,
    DigestMode.SHA3_512: hashes.SHA3_512,
    DigestMode.MD5: hashes.MD5,
    DigestMode.SM3: hashes.SM3,
}


def _oracle(mode, key: bytes, data: bytes) -> str:
    mac = hmac.HMAC(key, ORACLE_ALGORITHMS[mode]())
    mac.update(data)
    return mac.finalize().hex()


class TestHmacHash:
    """Test cases for hmac_hash."""

    @pytest.mark.parametrize("mode,expected", list(HELLO_HMACS_BASE64.items()),
                             ids=[m.name for m in HELLO_HMACS_BASE64])
    def test_known_answers(self, sample_text, mode, expected):
        raw = bytes.fromhex(hmac_hash(mode, HMAC_KEY, sample_text))
        assert base64.b64encode(raw).decode() == expected

    @pytest.mark.parametrize("mode", list(ORACLE_ALGORITHMS), ids=lambda m: m.name)
    @pytest.mark.parametrize("key", [
        b"short",
        b"k" * 64,
        b"\x01" * 200,  # longer than every block size, gets hashed first
    ], ids=["short", "block", "long"])
    def test_matches_library_hmac(self, mode, key):
        data = b"The quick brown fox jumps over the lazy dog"
        assert hmac_hash(mode, key, data) == _oracle(mode, key, data)

    def test_empty_key(self):
        data = b"payload"
        expected = std_hmac.new(b"", data, hashlib.sha256).hexdigest()
        assert hmac_hash(DigestMode.SHA256, b"", data) == expected

    def test_text_and_bytes_agree(self):
        for mode in DigestMode:
            assert hmac_hash(mode, "0123456789ABCDEF", "Hello") == \
                hmac_hash(mode, b"0123456789ABCDEF", b"Hello")

    def test_xof_modes_have_fixed_length(self):
        assert len(hmac_bytes(DigestMode.SHAKE128, b"key", b"data")) == 16
        assert len(hmac_bytes(DigestMode.SHAKE256, b"key", b"data")) == 32

    def test_different_keys_differ(self):
        assert hmac_hash(DigestMode.SHA256, "a", "msg") != hmac_hash(DigestMode.SHA256, "b", "msg")

    def test_unencodable_message(self):
        with pytest.raises(FormatError):
            hmac_hash(DigestMode.SHA256, "k", "a\ud800")

    def test_unknown_mode(self):
        with pytest.raises(UnsupportedCipherError):
            hmac_hash("sha0", "key", "data")


class TestHmacVerify:
    """Test cases for constant-time verification."""

    def test_verify_roundtrip(self):
        mac = hmac_hash(DigestMode.SHA256, b"key", b"message")

        assert hmac_verify(DigestMode.SHA256, b"key", b"message", mac)
        assert hmac_verify(DigestMode.SHA256, b"key", b"message", mac.upper())

    def test_verify_rejects_tampering(self):
        mac = hmac_hash(DigestMode.SHA256, b"key", b"message")

        assert not hmac_verify(DigestMode.SHA256, b"key", b"messagE", mac)
        assert not hmac_verify(DigestMode.SHA256, b"key", b"message", mac[:-2])
        assert not hmac_verify(DigestMode.SHA256, b"key", b"message", "")
        assert not hmac_verify(DigestMode.SHA256, b"key", b"message", None)

    def test_verify_accepts_bytes(self):
        mac = hmac_hash(DigestMode.SM3, b"key", b"message")

        assert hmac_verify(DigestMode.SM3, b"key", b"message", mac.encode("ascii"))
        assert hmac_verify(DigestMode.SM3, b"key", b"message", bytearray(mac.upper().encode("ascii")))
        assert not hmac_verify(DigestMode.SM3, b"key", b"message", b"")

    def test_verify_rejects_other_types(self):
        with pytest.raises(TypeError):
            hmac_verify(DigestMode.SHA256, b"key", b"message", 1234)
