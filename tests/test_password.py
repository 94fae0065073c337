"""
Tests for bcrypt password hashing.
"""

from auth.password import PasswordHasher


class TestPasswordHasher:
    def test_hash_is_salted(self, hasher):
        first = hasher.hash("secret1")
        second = hasher.hash("secret1")
        assert first != second
        assert hasher.verify("secret1", first)
        assert hasher.verify("secret1", second)

    def test_wrong_password_rejected(self, hasher):
        digest = hasher.hash("secret1")
        assert not hasher.verify("secret2", digest)

    def test_work_factor_embedded_in_digest(self):
        digest = PasswordHasher(rounds=5).hash("pw")
        assert digest.startswith("$2b$05$")

    def test_malformed_digest_fails_closed(self, hasher):
        assert hasher.verify("secret1", "not-a-bcrypt-hash") is False
        assert hasher.verify("secret1", "") is False

    def test_long_password_consistent(self, hasher):
        password = "x" * 100
        assert hasher.verify(password, hasher.hash(password))

    def test_missing_digest_fails_closed(self, hasher):
        assert hasher.verify("secret1", None) is False
