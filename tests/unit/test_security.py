"""Tests for bcrypt password hashing."""

import pytest

from usermanagement.core.exceptions import ConfigurationError
from usermanagement.core.security import PasswordHasher


@pytest.fixture
def hasher():
    # Minimum cost keeps the suite fast
    return PasswordHasher(rounds=4)


class TestPasswordHasher:
    def test_correct_password_verifies(self, hasher):
        hashed = hasher.hash("correct horse battery")
        assert hasher.verify("correct horse battery", hashed) is True

    def test_wrong_password_fails(self, hasher):
        hashed = hasher.hash("correct horse battery")
        assert hasher.verify("Correct horse battery", hashed) is False

    def test_hash_is_salted(self, hasher):
        assert hasher.hash("same-password") != hasher.hash("same-password")

    def test_hash_does_not_contain_plaintext(self, hasher):
        assert "s3cret-value" not in hasher.hash("s3cret-value")

    def test_malformed_hash_verifies_false(self, hasher):
        assert hasher.verify("anything", "not-a-bcrypt-hash") is False

    def test_rounds_are_encoded_in_hash(self, hasher):
        assert hasher.hash("password1").startswith("$2b$04$")

    @pytest.mark.parametrize("rounds", [3, 32])
    def test_rejects_out_of_range_rounds(self, rounds):
        with pytest.raises(ConfigurationError):
            PasswordHasher(rounds=rounds)
