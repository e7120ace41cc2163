"""Integration tests for the HMAC refresh secret digester.

Tests cover:
- Deterministic keyed digests (same secret and key, same digest)
- Key and algorithm separation
- Verification (match, mismatch, foreign algorithm tag)
- Constructor validation
"""

import hashlib
import hmac

import pytest

from sessionguard.domain.value_objects import Digest
from sessionguard.infrastructure.security import HmacTokenDigester

SECRET = bytes(range(16))


@pytest.mark.integration
class TestHmacTokenDigester:
    """Integration tests for HmacTokenDigester with real hmac/hashlib."""

    def test_digest_matches_standard_hmac(self):
        """Test the digest is plain HMAC over the secret."""
        digester = HmacTokenDigester(secret_key="server-key")

        digest = digester.digest(SECRET)

        expected = hmac.new(b"server-key", SECRET, hashlib.sha256).digest()
        assert digest == Digest(value=expected, algorithm="sha256")

    def test_digest_is_deterministic(self):
        """Test repeated digests of one secret are equal (direct lookup)."""
        digester = HmacTokenDigester(secret_key="server-key")

        assert digester.digest(SECRET) == digester.digest(SECRET)

    def test_different_keys_produce_different_digests(self):
        first = HmacTokenDigester(secret_key="key-one").digest(SECRET)
        second = HmacTokenDigester(secret_key="key-two").digest(SECRET)

        assert first != second

    def test_sha512_digest_length_and_tag(self):
        """Test algorithm selection is reflected in the digest."""
        digester = HmacTokenDigester(secret_key="server-key", algorithm="SHA512")

        digest = digester.digest(SECRET)

        assert digester.algorithm == "sha512"
        assert digest.algorithm == "sha512"
        assert len(digest.value) == 64

    def test_verify_matching_secret(self):
        digester = HmacTokenDigester(secret_key="server-key")

        assert digester.verify(SECRET, digester.digest(SECRET)) is True

    def test_verify_rejects_other_secret(self):
        digester = HmacTokenDigester(secret_key="server-key")

        assert digester.verify(bytes(16), digester.digest(SECRET)) is False

    def test_verify_uses_algorithm_recorded_on_digest(self):
        """Test digests made with an older algorithm still verify."""
        old = HmacTokenDigester(secret_key="server-key", algorithm="sha256")
        new = HmacTokenDigester(secret_key="server-key", algorithm="sha512")

        assert new.verify(SECRET, old.digest(SECRET)) is True

    def test_verify_unknown_algorithm_tag_is_false(self):
        """Test an unrecognized algorithm tag never verifies."""
        digester = HmacTokenDigester(secret_key="server-key")
        foreign = Digest(value=b"\x00" * 32, algorithm="md5")

        assert digester.verify(SECRET, foreign) is False

    def test_unsupported_algorithm_rejected(self):
        with pytest.raises(ValueError, match="Unsupported HMAC algorithm"):
            HmacTokenDigester(secret_key="server-key", algorithm="md5")

    def test_empty_key_rejected(self):
        with pytest.raises(ValueError, match="must not be empty"):
            HmacTokenDigester(secret_key="")
