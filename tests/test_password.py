"""
Tests for bcrypt password hashing.
"""

from auth.password import PasswordHasher


class TestPasswordHasher:
    def setup_method(self):
        self.hasher = PasswordHasher(rounds=4)

    def test_hash_is_not_plaintext(self):
        hashed = self.hasher.hash("pw1")
        assert hashed
        assert hashed != "pw1"
        assert hashed.startswith("$2")

    def test_same_secret_different_hashes(self):
        a = self.hasher.hash("pw1")
        b = self.hasher.hash("pw1")
        assert a != b
        assert self.hasher.verify("pw1", a)
        assert self.hasher.verify("pw1", b)

    def test_wrong_password(self):
        hashed = self.hasher.hash("pw1")
        assert self.hasher.verify("wrong", hashed) is False

    def test_malformed_hash_returns_false(self):
        assert self.hasher.verify("pw1", "not-a-bcrypt-hash") is False
        assert self.hasher.verify("pw1", "") is False

    def test_missing_secret_returns_false(self):
        hashed = self.hasher.hash("pw1")
        assert self.hasher.verify(None, hashed) is False
        assert self.hasher.verify("", hashed) is False

    def test_work_factor_is_applied(self):
        hashed = PasswordHasher(rounds=5).hash("pw1")
        assert hashed.split("$")[2] == "05"
