"""Tests for HMAC primitives."""

from talkbank_baas.common.hmac import sha256_hex, sign, verify


class TestSha256:
    def test_empty_string_digest(self):
        assert sha256_hex("") == "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"

    def test_str_and_bytes_agree(self):
        assert sha256_hex("привет") == sha256_hex("привет".encode("utf-8"))


class TestSign:
    def test_rfc4231_vector(self):
        """HMAC-SHA256 test case 2 from RFC 4231."""
        signature = sign("Jefe", "what do ya want for nothing?")

        assert signature == "5bdcc146bf60754e6a042426089575c75a003f089d2739839dec58b964ec3843"

    def test_signature_is_lowercase_hex(self):
        signature = sign("secret", "message")

        assert len(signature) == 64
        assert signature == signature.lower()
        int(signature, 16)

    def test_verify_valid(self):
        assert verify("secret", "message", sign("secret", "message")) is True

    def test_verify_wrong_secret(self):
        assert verify("other", "message", sign("secret", "message")) is False

    def test_verify_tampered_message(self):
        assert verify("secret", "message!", sign("secret", "message")) is False
